"""
Framework Support Classes
"""

from larabake.support.storage import Storage
from larabake.support.config import Config
from larabake.support.str import Str

__all__ = [
    'Storage',
    'Config',
    'Str',
]
