"""
Event Manager
Named lifecycle events with sync or async listeners
"""
import inspect
from typing import Any, Callable, Dict, List, Optional

from larabake.logging import getLogger

logger = getLogger(__name__)


class Event:
    """
    A named event carrying a subject and a payload

    Listeners may replace the outcome of the event by assigning `result`
    and may stop later listeners from running with stop_propagation().

    Example:
        event = Event('View.afterRenderFile', view, [path, content])
        await view.get_event_manager().dispatch(event)
        if event.result is not None:
            content = event.result
    """

    def __init__(self, name: str, subject: Any = None, data: Optional[List[Any]] = None):
        self.name = name
        self.subject = subject
        self.data = list(data or [])
        self.result: Any = None
        self._stopped = False

    def stop_propagation(self):
        self._stopped = True

    def is_stopped(self) -> bool:
        return self._stopped

    def __repr__(self):
        return f'Event({self.name!r}, data={self.data!r})'


class EventManager:
    """
    Registry of listeners keyed by event name

    Usage:
        events = EventManager()
        events.on('View.beforeRenderFile', lambda event: print(event.data[0]))
        await events.dispatch(Event('View.beforeRenderFile', view, [path]))
    """

    def __init__(self):
        self._listeners: Dict[str, List[Dict[str, Any]]] = {}

    def on(self, name: str, listener: Callable, priority: int = 10) -> 'EventManager':
        """
        Attach a listener

        Lower priorities run first; equal priorities run in attach order.
        A listener receives the event and may be a coroutine function.
        """
        self._listeners.setdefault(name, []).append({'callable': listener, 'priority': priority})
        self._listeners[name].sort(key=lambda entry: entry['priority'])
        return self

    def off(self, name: str, listener: Optional[Callable] = None) -> 'EventManager':
        """Detach one listener, or every listener of an event"""
        if listener is None:
            self._listeners.pop(name, None)
            return self

        self._listeners[name] = [
            entry for entry in self._listeners.get(name, [])
            if entry['callable'] != listener
        ]
        return self

    def listeners(self, name: str) -> List[Callable]:
        return [entry['callable'] for entry in self._listeners.get(name, [])]

    async def dispatch(self, event: Event) -> Event:
        """
        Run the listeners of an event in priority order

        A listener returning a value other than None sets event.result;
        returning False also stops propagation.
        """
        for listener in self.listeners(event.name):
            if event.is_stopped():
                break

            result = listener(event)
            if inspect.isawaitable(result):
                result = await result

            if result is False:
                event.stop_propagation()
            elif result is not None:
                event.result = result

        logger.debug("Dispatched %s", event.name)
        return event
