"""
HTTP Package
"""
from larabake.http.view_response import ViewResponseBuilder

__all__ = [
    'ViewResponseBuilder',
]
