"""
Custom Exception Classes
Framework-specific exceptions with HTTP status codes
"""
from typing import Optional


class FrameworkException(Exception):
    """Base exception for all framework exceptions"""
    status_code = 500
    message = "An error occurred"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.__class__.message
        self.status_code = status_code or self.__class__.status_code
        super().__init__(self.message)


class MissingTemplateException(FrameworkException):
    """
    Base class for template resolution failures

    Carries the first candidate path that was tried so the developer
    knows where the framework expected the file.

    Example:
        raise MissingViewException(file='/app/templates/Posts/index.tpl')
    """
    message_template = "Template file \"{file}\" is missing."

    def __init__(self, file: str, message: Optional[str] = None):
        self.file = str(file)
        super().__init__(message or self.message_template.format(file=self.file))


class MissingViewException(MissingTemplateException):
    """Raised when a view template cannot be found"""
    message_template = "View file \"{file}\" is missing."


class MissingLayoutException(MissingTemplateException):
    """Raised when a layout template cannot be found"""
    message_template = "Layout file \"{file}\" is missing."


class MissingElementException(MissingTemplateException):
    """
    Raised when an element template cannot be found

    Suppressed by the `ignore_missing` element option.
    """
    message_template = "Element file \"{file}\" is missing."


class MissingTemplateRootException(FrameworkException):
    """Raised when the view engine has no template directory to search"""
    message = "No template paths are configured. Set view.TEMPLATE_PATHS or pass template_paths."


class UnclosedBlockException(FrameworkException):
    """
    Raised when a template finishes with a block it opened still capturing

    Example:
        raise UnclosedBlockException('sidebar')
    """

    def __init__(self, block: str, message: Optional[str] = None):
        self.block = block
        super().__init__(
            message or f'The "{block}" block was left open. Blocks are not allowed to cross files.'
        )


class ExtensionException(FrameworkException):
    """Base class for invalid `extend` declarations"""

    def __init__(self, file: str, parent: str, message: Optional[str] = None):
        self.file = str(file)
        self.parent = str(parent)
        super().__init__(message or self.__class__.message)


class SelfExtensionException(ExtensionException):
    """Raised when a template extends itself"""
    message = "You cannot have views extend themselves."


class ExtensionCycleException(ExtensionException):
    """Raised when a template extends a chain that leads back to it"""
    message = "You cannot have views extend in a loop."


class MissingActionException(FrameworkException):
    """
    Raised when a mailer has no method for the requested action

    Example:
        raise MissingActionException(mailer='UserMailer', action='welcome')
    """
    status_code = 404

    def __init__(self, mailer: str, action: str, message: Optional[str] = None):
        self.mailer = mailer
        self.action = action
        super().__init__(message or f'Mail action {mailer}.{action}() could not be found, or is not accessible.')


class MissingTransportException(FrameworkException):
    """Raised when an email is sent through an unknown transport"""

    def __init__(self, transport: str, message: Optional[str] = None):
        self.transport = transport
        super().__init__(message or f'Mail transport "{transport}" is not configured.')


class MissingCacheConfigException(FrameworkException):
    """Raised when a cache configuration name is unknown"""

    def __init__(self, config: str, message: Optional[str] = None):
        self.config = config
        super().__init__(message or f'Cache configuration "{config}" is not defined.')


class MissingHelperException(FrameworkException):
    """Raised when a helper name cannot be mapped to a helper class"""

    def __init__(self, helper: str, message: Optional[str] = None):
        self.helper = helper
        super().__init__(message or f'Helper class "{helper}" could not be found.')
