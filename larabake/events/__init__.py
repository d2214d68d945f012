"""
Events Package
"""
from larabake.events.event_manager import Event, EventManager

__all__ = [
    'Event',
    'EventManager',
]
