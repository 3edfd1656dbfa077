"""Event emitter implementation using Observer Pattern."""
from typing import Dict, List, Callable, Optional

from ...logging import get_logger


class EventEmitter:
    """
    Event emitter using Observer Pattern.
    
    Handlers run synchronously, in registration order, inside emit().
    An exception raised by a handler propagates to the emitter's caller.
    """
    
    def __init__(self, logger_name: str = 'chunkpy.events'):
        """Initializes event emitter."""
        self._events: Dict[str, List[Callable]] = {}
        self._logger = get_logger(logger_name)
    
    def on(self, event: str, callback: Callable) -> 'EventEmitter':
        """Registers an event handler."""
        self._events.setdefault(event, []).append(callback)
        return self
    
    def once(self, event: str, callback: Callable) -> 'EventEmitter':
        """Registers a handler that is removed after its first call."""
        def wrapper(*args, **kwargs):
            self.off(event, wrapper)
            callback(*args, **kwargs)
        return self.on(event, wrapper)
    
    def emit(self, event: str, *args, **kwargs) -> bool:
        """
        Emits an event.
        
        Returns:
            True if at least one handler was called
        """
        handlers = list(self._events.get(event, ()))
        if not handlers:
            return False
        self._logger.debug(f"Emitting '{event}' to {len(handlers)} handler(s)")
        for callback in handlers:
            callback(*args, **kwargs)
        return True
    
    def off(self, event: str, callback: Optional[Callable] = None) -> 'EventEmitter':
        """Removes an event handler, or all handlers of an event."""
        if event not in self._events:
            return self
        
        if callback is None:
            del self._events[event]
        else:
            self._events[event] = [cb for cb in self._events[event] if cb != callback]
            if not self._events[event]:
                del self._events[event]
        
        return self
    
    def listener_count(self, event: str) -> int:
        """Returns the number of handlers registered for an event."""
        return len(self._events.get(event, ()))
