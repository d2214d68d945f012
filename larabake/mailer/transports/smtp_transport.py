"""
SMTP Transport
Asynchronous SMTP delivery with aiosmtplib
"""
from typing import Any, Dict

import aiosmtplib

from larabake.defaults import DEFAULT_SMTP_HOST, DEFAULT_SMTP_PORT, DEFAULT_SMTP_TIMEOUT
from larabake.logging import getLogger
from larabake.mailer.transports.abstract_transport import AbstractTransport

logger = getLogger(__name__)


class SmtpTransport(AbstractTransport):
    """
    Sends mail through an SMTP server

    Config:
        host, port, timeout: Server address and socket timeout
        username, password: Credentials (login skipped when absent)
        tls: Upgrade the connection with STARTTLS
        use_tls: Connect with implicit TLS (port 465)
        validate_certs: Verify the server certificate
    """

    default_config = {
        'host': DEFAULT_SMTP_HOST,
        'port': DEFAULT_SMTP_PORT,
        'timeout': DEFAULT_SMTP_TIMEOUT,
        'username': None,
        'password': None,
        'tls': False,
        'use_tls': False,
        'validate_certs': True,
    }

    def _client(self) -> aiosmtplib.SMTP:
        return aiosmtplib.SMTP(
            hostname=self.config['host'],
            port=self.config['port'],
            timeout=self.config['timeout'],
            use_tls=self.config['use_tls'],
            start_tls=self.config['tls'],
            validate_certs=self.config['validate_certs'],
        )

    async def send(self, email) -> Dict[str, Any]:
        """
        Raises:
            aiosmtplib.SMTPException: Connection, authentication or delivery failed
        """
        message = email.build_message()
        recipients = email.recipients()

        smtp = self._client()
        try:
            await smtp.connect()
            if self.config['username'] and self.config['password']:
                await smtp.login(self.config['username'], self.config['password'])
            response = await smtp.send_message(message, recipients=recipients)
        except aiosmtplib.SMTPException as e:
            logger.error("SMTP delivery to %s:%s failed: %s", self.config['host'], self.config['port'], e)
            raise
        finally:
            if smtp.is_connected:
                await smtp.quit()

        logger.info("Sent message %s to %d recipient(s)", message['Message-ID'], len(recipients))
        return {
            'headers': self._headers_to_string({name: value for name, value in message.items()}),
            'message': self._join_parts(email.message().values()),
            'response': response,
        }
