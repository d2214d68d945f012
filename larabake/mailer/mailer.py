"""
Mailer
Reusable mail actions bound to an Email composer
"""
import inspect
from typing import Any, Dict, List, Optional, Union

from larabake.exceptions import MissingActionException
from larabake.logging import getLogger
from larabake.mailer.email import Email
from larabake.view.view_builder import ViewBuilder

logger = getLogger(__name__)


class Mailer:
    """
    Groups the emails of one area of an application

    Each public method of a subclass is an action that populates the
    email; send() runs it and delivers the result. Email setters that the
    mailer does not define itself are forwarded to the email and return
    the mailer, so they chain.

    Example:
        class UserMailer(Mailer):
            def welcome(self, user):
                self.to(user.email).subject(f'Welcome {user.name}').set({'user': user})

        await UserMailer().send('welcome', [user])
        # renders Email/text/welcome.tpl inside Layout/Email/text/default.tpl
    """

    def __init__(self, email: Optional[Email] = None):
        self._email = email if email is not None else Email()
        self._email_config = self._email.serialize()
        self.name = type(self).__name__.replace('Mailer', '')

    def get_name(self) -> str:
        return self.name

    def get_email(self) -> Email:
        return self._email

    def layout(self, layout: Union[str, bool]) -> 'Mailer':
        self._email.view_builder().layout(layout)
        return self

    def view_builder(self) -> ViewBuilder:
        return self._email.view_builder()

    def set(self, key: Union[str, Dict[str, Any]], value: Any = None) -> 'Mailer':
        """Set one template variable, or several from a mapping"""
        self._email.view_vars({key: value} if isinstance(key, str) else key)
        return self

    def __getattr__(self, method: str):
        if method.startswith('_'):
            raise AttributeError(method)

        target = getattr(self._email, method)
        if not callable(target):
            return target

        def forward(*args, **kwargs):
            target(*args, **kwargs)
            return self

        return forward

    def _is_action(self, action: str) -> bool:
        if action.startswith('_') or hasattr(Mailer, action):
            return False
        return callable(getattr(type(self), action, None))

    async def send(
        self,
        action: str,
        args: Optional[List[Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """
        Run an action and deliver the email it composed

        The template defaults to the action name. Afterwards the email is
        reset to the configuration it had when the mailer was created.

        Raises:
            MissingActionException: The mailer has no such public action
        """
        if not self._is_action(action):
            logger.warning("Mailer %sMailer has no action %s", self.name, action)
            raise MissingActionException(mailer=f'{self.name}Mailer', action=action)

        self._email.set_headers(headers or {})
        if not self._email.view_builder().template():
            self._email.view_builder().template(action)

        try:
            populated = getattr(self, action)(*(args or []))
            if inspect.isawaitable(populated):
                await populated

            result = await self._email.send()
            logger.debug("Mailer %s sent %s", self.name, action)
        finally:
            self._email.reset()
            self._email.unserialize(self._email_config)

        return result
