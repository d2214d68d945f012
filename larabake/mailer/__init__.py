"""
Mailer Package
Email composition, rendering through the view engine, and delivery
"""
from larabake.mailer.email import Email
from larabake.mailer.mailer import Mailer
from larabake.mailer.transports import (
    AbstractTransport,
    DebugTransport,
    SmtpTransport,
    create_transport,
)

__all__ = [
    'Email',
    'Mailer',
    'AbstractTransport',
    'DebugTransport',
    'SmtpTransport',
    'create_transport',
]
