"""
Abstract Transport
Base class for mail delivery backends
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional


class AbstractTransport(ABC):
    """
    Delivers a composed Email

    Subclasses implement send() and return a mapping that contains at
    least `headers` and `message` (both strings).
    """

    default_config: Dict[str, Any] = {}

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = {**self.default_config, **(config or {})}

    @abstractmethod
    async def send(self, email) -> Dict[str, Any]:
        """Deliver the email"""

    @staticmethod
    def _headers_to_string(headers: Dict[str, str], eol: str = '\r\n') -> str:
        return eol.join(f'{name}: {value}' for name, value in headers.items() if value)

    @staticmethod
    def _join_parts(parts: Iterable[str], eol: str = '\r\n') -> str:
        return (eol * 2).join(part for part in parts if part)
