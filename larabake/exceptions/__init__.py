"""
Exceptions Package
Centralized framework errors
"""
from larabake.exceptions.custom import (
    FrameworkException,
    MissingTemplateException,
    MissingViewException,
    MissingLayoutException,
    MissingElementException,
    MissingTemplateRootException,
    UnclosedBlockException,
    ExtensionException,
    SelfExtensionException,
    ExtensionCycleException,
    MissingActionException,
    MissingTransportException,
    MissingCacheConfigException,
    MissingHelperException,
)

__all__ = [
    'FrameworkException',

    # View
    'MissingTemplateException',
    'MissingViewException',
    'MissingLayoutException',
    'MissingElementException',
    'MissingTemplateRootException',
    'UnclosedBlockException',
    'ExtensionException',
    'SelfExtensionException',
    'ExtensionCycleException',
    'MissingHelperException',

    # Mailer
    'MissingActionException',
    'MissingTransportException',

    # Cache
    'MissingCacheConfigException',
]
