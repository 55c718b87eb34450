from typing import TYPE_CHECKING, Optional, Union

from loguru import logger

from ..exceptions import DispatcherNotSetError

if TYPE_CHECKING:
    from .dispatcher import EventDispatcher
    from .event import Event


class DispatcherAware:
    """
    Mixin for objects that receive an EventDispatcher by injection.

    Methods decorated with @listens_to are subscribed when the dispatcher
    is injected, and unsubscribed from the previous one on re-injection:

        class Indexer(DispatcherAware):
            @listens_to("file.created")
            def on_file_created(self, event):
                self.dispatch("index.updated")

        indexer = Indexer()
        indexer.set_dispatcher(dispatcher)
    """
    _dispatcher: Optional['EventDispatcher'] = None

    def set_dispatcher(self, dispatcher: Optional['EventDispatcher']) -> None:
        previous = self._dispatcher
        if previous is dispatcher:
            return
        if previous is not None:
            previous.remove_subscriber(self)

        self._dispatcher = dispatcher
        if dispatcher is not None:
            dispatcher.add_subscriber(self)
            logger.debug(f"{self.__class__.__name__}: dispatcher injected")

    @property
    def dispatcher(self) -> Optional['EventDispatcher']:
        return self._dispatcher

    def dispatch(self, event_or_name: Union['Event', str], event: Optional['Event'] = None) -> 'Event':
        """Dispatch through the injected dispatcher."""
        if self._dispatcher is None:
            raise DispatcherNotSetError(f"{self.__class__.__name__} has no dispatcher; call set_dispatcher() first")
        return self._dispatcher.dispatch(event_or_name, event)
