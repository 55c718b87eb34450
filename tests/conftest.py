import logging

import pytest
from loguru import logger

from src.eventcore import DispatcherSettings, EventDispatcher


@pytest.fixture
def caplog(caplog):
    """Route loguru records into pytest's caplog."""
    class PropagateHandler(logging.Handler):
        def emit(self, record):
            logging.getLogger(record.name).handle(record)

    handler_id = logger.add(PropagateHandler(), format="{message}", level="DEBUG")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def dispatcher():
    """Fresh dispatcher with default settings."""
    return EventDispatcher()


@pytest.fixture
def lenient_dispatcher():
    """Dispatcher that logs listener errors instead of raising them."""
    return EventDispatcher(DispatcherSettings(suppress_listener_errors=True))
