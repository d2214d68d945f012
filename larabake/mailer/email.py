"""
Email
Message composer: addresses, headers, rendered body and delivery
"""
import re
import uuid
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, formatdate
from typing import Any, Dict, List, Optional, Union

from larabake.defaults import (
    DEFAULT_MAIL_CHARSET,
    DEFAULT_MAIL_DOMAIN,
    DEFAULT_MAIL_FORMAT,
    DEFAULT_MAIL_LAYOUT,
    DEFAULT_MAIL_TRANSPORT,
    VIEW_EMAIL_DIR,
)
from larabake.exceptions import FrameworkException
from larabake.logging import getLogger
from larabake.mailer.transports import AbstractTransport, create_transport
from larabake.view.view_builder import ViewBuilder

logger = getLogger(__name__)

Addresses = Union[str, List[str], Dict[str, str]]


class Email:
    """
    Composes one message at a time

    Setters return the email so calls chain; called without arguments
    they return the current value.

    Bodies are rendered through the view engine: the template
    `Email/<type>/<template>` inside the layout `Layout/Email/<type>/<layout>`,
    once per type (`text`, `html`, or both).

    Example:
        email = Email({'transport': 'smtp', 'from': 'app@example.com'})
        email.to('jane@example.com', 'Jane').subject('Welcome')
        email.view_builder().template('welcome').options({'template_paths': [templates]})
        email.view_vars({'user': user})
        result = await email.send()
    """

    FORMATS = ('text', 'html', 'both')
    EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$|^[^@\s]+@localhost$')

    ADDRESS_HEADERS = {
        'from': 'From',
        'sender': 'Sender',
        'reply_to': 'Reply-To',
        'to': 'To',
        'cc': 'Cc',
        'bcc': 'Bcc',
    }

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.reset()

        config = dict(config or {})
        if 'from' not in config:
            from larabake.support import Config
            default_from = Config.get('mail.DEFAULT_FROM')
            if default_from:
                config['from'] = default_from
        self.profile(config)

    def profile(self, config: Dict[str, Any]) -> 'Email':
        """
        Apply a configuration mapping

        Keys: from, sender, reply_to, to, cc, bcc, subject, headers,
        email_format, charset, domain, transport, view_vars, template,
        layout, theme, helpers, view_options.
        """
        for key in ('from', 'sender', 'reply_to', 'to', 'cc', 'bcc'):
            if config.get(key):
                self._set_addresses(key, config[key])

        simple = {
            'subject': self.subject,
            'email_format': self.email_format,
            'charset': self.charset,
            'domain': self.domain,
            'transport': self.transport,
            'view_vars': self.view_vars,
            'headers': self.set_headers,
        }
        for key, setter in simple.items():
            if key in config:
                setter(config[key])

        builder = {
            'template': self._view_builder.template,
            'layout': self._view_builder.layout,
            'theme': self._view_builder.theme,
            'helpers': self._view_builder.helpers,
            'view_options': self._view_builder.options,
        }
        for key, setter in builder.items():
            if key in config:
                setter(config[key])
        return self

    # ==========================================================================
    # Addresses
    # ==========================================================================

    def _normalize(self, email: Addresses, name: Optional[str] = None) -> Dict[str, str]:
        if isinstance(email, dict):
            pairs = email.items()
        elif isinstance(email, (list, tuple)):
            pairs = [(address, address) for address in email]
        else:
            pairs = [(email, name or email)]

        addresses = {}
        for address, label in pairs:
            if not self.EMAIL_PATTERN.match(address):
                raise ValueError(f'Invalid email: "{address}"')
            addresses[address] = label or address
        return addresses

    def _set_addresses(self, kind: str, email: Addresses, name: Optional[str] = None) -> 'Email':
        self._addresses[kind] = self._normalize(email, name)
        return self

    def _add_addresses(self, kind: str, email: Addresses, name: Optional[str] = None) -> 'Email':
        self._addresses[kind].update(self._normalize(email, name))
        return self

    def _addresses_of(self, kind: str, *args):
        if not args:
            return dict(self._addresses[kind])
        return self._set_addresses(kind, *args)

    def from_(self, *args):
        """from_('app@example.com', 'App') or from_({'app@example.com': 'App'})"""
        return self._addresses_of('from', *args)

    def sender(self, *args):
        return self._addresses_of('sender', *args)

    def reply_to(self, *args):
        return self._addresses_of('reply_to', *args)

    def to(self, *args):
        return self._addresses_of('to', *args)

    def cc(self, *args):
        return self._addresses_of('cc', *args)

    def bcc(self, *args):
        return self._addresses_of('bcc', *args)

    def add_to(self, email: Addresses, name: Optional[str] = None) -> 'Email':
        return self._add_addresses('to', email, name)

    def add_cc(self, email: Addresses, name: Optional[str] = None) -> 'Email':
        return self._add_addresses('cc', email, name)

    def add_bcc(self, email: Addresses, name: Optional[str] = None) -> 'Email':
        return self._add_addresses('bcc', email, name)

    def recipients(self) -> List[str]:
        """Every destination address (to, cc and bcc)"""
        found = []
        for kind in ('to', 'cc', 'bcc'):
            for address in self._addresses[kind]:
                if address not in found:
                    found.append(address)
        return found

    @staticmethod
    def _format_addresses(addresses: Dict[str, str]) -> str:
        return ', '.join(
            address if label == address else formataddr((label, address))
            for address, label in addresses.items()
        )

    # ==========================================================================
    # Message settings
    # ==========================================================================

    def subject(self, *value: str):
        if not value:
            return self._subject
        self._subject = str(value[0])
        return self

    def email_format(self, *value: str):
        if not value:
            return self._email_format
        if value[0] not in self.FORMATS:
            raise ValueError(f'Format not available: "{value[0]}"')
        self._email_format = value[0]
        return self

    def charset(self, *value: str):
        if not value:
            return self._charset
        self._charset = value[0]
        return self

    def domain(self, *value: str):
        if not value:
            return self._domain
        self._domain = value[0]
        return self

    def transport(self, *transport: Union[str, AbstractTransport]):
        """Transport name (see `mail.TRANSPORTS`) or instance; getter builds it"""
        if not transport:
            if self._transport_instance is None:
                if isinstance(self._transport, AbstractTransport):
                    self._transport_instance = self._transport
                else:
                    self._transport_instance = create_transport(self._transport)
            return self._transport_instance

        self._transport = transport[0]
        self._transport_instance = None
        return self

    def view_vars(self, *view_vars: Dict[str, Any]):
        """Merge variables into the template variables"""
        if not view_vars:
            return dict(self._view_vars)
        self._view_vars.update(view_vars[0])
        return self

    def view_builder(self) -> ViewBuilder:
        return self._view_builder

    def template(self, *name: Optional[str]):
        if not name:
            return self._view_builder.template()
        self._view_builder.template(name[0])
        return self

    def theme(self, *name: Optional[str]):
        if not name:
            return self._view_builder.theme()
        self._view_builder.theme(name[0])
        return self

    def helpers(self, *helpers):
        if not helpers:
            return self._view_builder.helpers()
        self._view_builder.helpers(helpers[0])
        return self

    # ==========================================================================
    # Headers
    # ==========================================================================

    def set_headers(self, headers: Dict[str, str]) -> 'Email':
        self._headers = dict(headers)
        return self

    def add_headers(self, headers: Dict[str, str]) -> 'Email':
        self._headers.update(headers)
        return self

    def get_headers(self, include: Optional[List[str]] = None) -> Dict[str, str]:
        """
        Headers of the message

        Args:
            include: Address headers and `subject` to add to the custom
                headers (from, sender, reply_to, to, cc, bcc, subject)
        """
        include = include or []
        headers: Dict[str, str] = {}

        for kind, header in self.ADDRESS_HEADERS.items():
            if kind in include and self._addresses[kind]:
                headers[header] = self._format_addresses(self._addresses[kind])

        if 'subject' in include:
            headers['Subject'] = self._subject

        headers.update(self._headers)
        headers.setdefault('Date', formatdate(localtime=True))
        headers.setdefault('Message-ID', self._get_message_id())
        return headers

    def _get_message_id(self) -> str:
        if self._message_id is None:
            self._message_id = f'<{uuid.uuid4().hex}@{self._domain}>'
        return self._message_id

    # ==========================================================================
    # Rendering and delivery
    # ==========================================================================

    def _render_types(self) -> List[str]:
        if self._email_format == 'both':
            return ['text', 'html']
        return [self._email_format]

    async def render(self, content: Optional[str] = None) -> Dict[str, str]:
        """
        Render every body type of the message

        Without a template the bodies are `content` itself.
        """
        self._message = {}
        for message_type in self._render_types():
            if self._view_builder.template() is None:
                self._message[message_type] = content or ''
            else:
                self._message[message_type] = await self._render_template(message_type, content)
        return dict(self._message)

    async def _render_template(self, message_type: str, content: Optional[str]) -> str:
        view_vars = dict(self._view_vars)
        if content is not None:
            view_vars.setdefault('content', content)

        overrides = {
            'view_path': f'{VIEW_EMAIL_DIR}/{message_type}',
            'layout_path': f'{VIEW_EMAIL_DIR}/{message_type}',
            'autoescape': message_type == 'html',
        }
        if self._view_builder.layout() is None:
            overrides['layout'] = DEFAULT_MAIL_LAYOUT

        view = self._view_builder.build(view_vars, **overrides)
        return str(await view.render())

    def message(self, *message_type: str):
        """Rendered bodies keyed by type, or one body"""
        if message_type:
            return self._message.get(message_type[0], '')
        return dict(self._message)

    def build_message(self) -> MIMEBase:
        """MIME message of the rendered bodies with every header except Bcc"""
        if self._email_format == 'both':
            mime = MIMEMultipart('alternative')
            mime.attach(MIMEText(self.message('text'), 'plain', self._charset))
            mime.attach(MIMEText(self.message('html'), 'html', self._charset))
        else:
            subtype = 'plain' if self._email_format == 'text' else 'html'
            mime = MIMEText(self.message(self._email_format), subtype, self._charset)

        headers = self.get_headers(['from', 'sender', 'reply_to', 'to', 'cc', 'subject'])
        for name, value in headers.items():
            mime[name] = value
        return mime

    async def send(self, content: Optional[str] = None) -> Dict[str, Any]:
        """
        Render and deliver the message

        Returns:
            The transport result (`headers`, `message`, ...)

        Raises:
            FrameworkException: No sender or no destination
            MissingTransportException: The transport is not configured
        """
        if not self._addresses['from'] and not self._addresses['sender']:
            raise FrameworkException('From is not specified.')
        if not self.recipients():
            raise FrameworkException('You need specify one destination on to, cc or bcc.')

        transport = self.transport()
        await self.render(content)

        logger.debug("Sending %r to %s via %s", self._subject, ', '.join(self.recipients()), type(transport).__name__)
        return await transport.send(self)

    # ==========================================================================
    # State
    # ==========================================================================

    def reset(self) -> 'Email':
        """Back to an empty message"""
        self._addresses: Dict[str, Dict[str, str]] = {kind: {} for kind in self.ADDRESS_HEADERS}
        self._subject = ''
        self._headers: Dict[str, str] = {}
        self._email_format = DEFAULT_MAIL_FORMAT
        self._charset = DEFAULT_MAIL_CHARSET
        self._domain = DEFAULT_MAIL_DOMAIN
        self._transport: Union[str, AbstractTransport] = DEFAULT_MAIL_TRANSPORT
        self._transport_instance: Optional[AbstractTransport] = None
        self._view_vars: Dict[str, Any] = {}
        self._view_builder = ViewBuilder()
        self._message: Dict[str, str] = {}
        self._message_id: Optional[str] = None
        return self

    def serialize(self) -> Dict[str, Any]:
        """Configuration snapshot, restorable with unserialize()"""
        return {
            'addresses': {kind: dict(addresses) for kind, addresses in self._addresses.items()},
            'subject': self._subject,
            'headers': dict(self._headers),
            'email_format': self._email_format,
            'charset': self._charset,
            'domain': self._domain,
            'transport': self._transport,
            'view_vars': dict(self._view_vars),
            'view_builder': self._view_builder.to_dict(),
        }

    def unserialize(self, data: Dict[str, Any]) -> 'Email':
        self._addresses = {kind: dict(data.get('addresses', {}).get(kind, {})) for kind in self.ADDRESS_HEADERS}
        self._subject = data.get('subject', '')
        self._headers = dict(data.get('headers', {}))
        self._email_format = data.get('email_format', DEFAULT_MAIL_FORMAT)
        self._charset = data.get('charset', DEFAULT_MAIL_CHARSET)
        self._domain = data.get('domain', DEFAULT_MAIL_DOMAIN)
        self._transport = data.get('transport', DEFAULT_MAIL_TRANSPORT)
        self._transport_instance = None
        self._view_vars = dict(data.get('view_vars', {}))
        self._view_builder = ViewBuilder().from_dict(data.get('view_builder', {}))
        return self
