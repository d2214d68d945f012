"""
Repository
The table-like owner of queries and their event manager
"""
from typing import Any, Optional

from larabake.events import EventManager


class Repository:
    """
    Owner of a family of queries

    Queries dispatch `Model.beforeFind` through the repository's event
    manager before they execute. A listener may call query.set_result()
    to short-circuit execution.

    Example:
        articles = Repository('Articles', Article)
        articles.get_event_manager().on('Model.beforeFind', only_published)
    """

    def __init__(self, name: str, model: Any = None, event_manager: Optional[EventManager] = None):
        self.name = name
        self.model = model
        self._event_manager = event_manager

    def get_event_manager(self) -> EventManager:
        if self._event_manager is None:
            self._event_manager = EventManager()
        return self._event_manager

    def set_event_manager(self, event_manager: EventManager) -> 'Repository':
        self._event_manager = event_manager
        return self

    def __repr__(self):
        return f'Repository({self.name!r})'
