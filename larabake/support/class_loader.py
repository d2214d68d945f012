"""
Class Loader
Dynamic class loading utility for importing classes from dotted paths
"""
import importlib
from typing import Type


class ClassLoader:
    """
    Utility for loading classes from string paths

    Example:
        cls = ClassLoader.load('app.view.helpers.MarkdownHelper')
        helper = cls(view, {})
    """

    @staticmethod
    def load(class_path: str) -> Type:
        """
        Load a class from a dotted path string

        Raises:
            ImportError: If module cannot be imported
            AttributeError: If class doesn't exist in module
        """
        module_path, class_name = class_path.rsplit('.', 1)
        module = importlib.import_module(module_path)
        return getattr(module, class_name)

    @staticmethod
    def is_dotted_path(value: str) -> bool:
        return isinstance(value, str) and '.' in value.strip('.')
