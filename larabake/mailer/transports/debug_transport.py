"""
Debug Transport
Returns the composed message instead of delivering it
"""
from typing import Any, Dict

from larabake.logging import getLogger
from larabake.mailer.transports.abstract_transport import AbstractTransport

logger = getLogger(__name__)


class DebugTransport(AbstractTransport):
    """
    Useful in development and tests

    Example:
        result = await Email({'transport': 'debug'}).to('a@example.com').send('Hi')
        result['headers']  # 'From: ...\\r\\nTo: a@example.com\\r\\nSubject: ...'
        result['message']  # 'Hi'
    """

    HEADERS = ['from', 'sender', 'reply_to', 'to', 'cc', 'subject']

    async def send(self, email) -> Dict[str, Any]:
        headers = self._headers_to_string(email.get_headers(self.HEADERS))
        message = self._join_parts(email.message().values())

        logger.debug("Debug transport composed message for %s", ', '.join(email.recipients()))
        return {'headers': headers, 'message': message}
