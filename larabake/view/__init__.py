"""
View Package
Template rendering with layouts, blocks, elements, helpers and themes
"""
from larabake.view.view import View
from larabake.view.view_block import ViewBlock, OutputBuffer
from larabake.view.view_builder import ViewBuilder
from larabake.view.path_resolver import PathResolver
from larabake.view.evaluator import TemplateEvaluator
from larabake.view.element_cache import ElementCache
from larabake.view.helper import Helper
from larabake.view.helper_registry import HelperRegistry

__all__ = [

    # Core
    'View',
    'ViewBuilder',

    # Building blocks
    'ViewBlock',
    'OutputBuffer',
    'PathResolver',
    'TemplateEvaluator',
    'ElementCache',

    # Helpers
    'Helper',
    'HelperRegistry',
]
