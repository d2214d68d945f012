"""
Framework Package
Export commonly used helpers for easy import
"""

# The view subpackage loads first so the view() helper below is not
# replaced by the submodule attribute when it is imported later
from larabake import view as _view_package  # noqa: F401

# Export all helper functions for easy access
from larabake.helpers import (
    # Response
    view,
    # Mail
    email,
)

__all__ = [
    'view',
    'email',
]
