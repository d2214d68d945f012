"""
Mail Transports
"""
from typing import Any, Dict, Optional, Type, Union

from larabake.exceptions import MissingTransportException
from larabake.mailer.transports.abstract_transport import AbstractTransport
from larabake.mailer.transports.debug_transport import DebugTransport
from larabake.mailer.transports.smtp_transport import SmtpTransport
from larabake.support.class_loader import ClassLoader

TRANSPORTS: Dict[str, Type[AbstractTransport]] = {
    'debug': DebugTransport,
    'smtp': SmtpTransport,
}


def create_transport(name: str, configs: Optional[Dict[str, Dict[str, Any]]] = None) -> AbstractTransport:
    """
    Build a transport from a named configuration

    Configurations come from `mail.TRANSPORTS`:
        TRANSPORTS = {
            'default': {'class_name': 'smtp', 'host': 'mail.example.com', 'port': 587, 'tls': True},
        }

    `class_name` is `debug`, `smtp` or a dotted path. A name with no
    configuration that matches a built-in transport builds it with defaults.

    Raises:
        MissingTransportException: Unknown name
    """
    if configs is None:
        from larabake.support import Config
        configs = Config.get('mail.TRANSPORTS') or {}

    if name in configs:
        config = dict(configs[name])
        class_name: Union[str, Type] = config.pop('class_name', name)
    elif name in TRANSPORTS:
        config, class_name = {}, name
    else:
        raise MissingTransportException(name)

    if isinstance(class_name, type):
        transport_class = class_name
    elif class_name in TRANSPORTS:
        transport_class = TRANSPORTS[class_name]
    elif ClassLoader.is_dotted_path(class_name):
        transport_class = ClassLoader.load(class_name)
    else:
        raise MissingTransportException(name)

    return transport_class(config)


__all__ = [
    'AbstractTransport',
    'DebugTransport',
    'SmtpTransport',
    'TRANSPORTS',
    'create_transport',
]
