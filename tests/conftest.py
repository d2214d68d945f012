"""Shared fixtures: temporary template trees and views rendering from them."""

import pytest

from larabake.cache import CacheManager
from larabake.view import HelperRegistry, View


@pytest.fixture
def template_root(tmp_path):
    root = tmp_path / "templates"
    root.mkdir()
    return root


@pytest.fixture
def write_template(template_root):
    """Write a template relative to a root (the app root by default)."""

    def write(name, source, root=None):
        path = (root or template_root) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return write


@pytest.fixture
def cache():
    return CacheManager({"default": {"driver": "array"}})


@pytest.fixture
def make_view(template_root, cache):
    """Build a View over the temporary tree without touching Config."""

    def make(**options):
        options.setdefault("template_paths", [template_root])
        options.setdefault("core_paths", [])
        options.setdefault("plugins", {})
        options.setdefault("extension", ".tpl")
        options.setdefault("cache", cache)
        return View(**options)

    return make


@pytest.fixture(autouse=True)
def clean_helper_catalog():
    catalog = dict(HelperRegistry._catalog)
    yield
    HelperRegistry._catalog.clear()
    HelperRegistry._catalog.update(catalog)
