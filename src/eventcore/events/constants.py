"""
Event Name Constants.

Names of the events eventcore dispatches itself.

Usage:
    from src.eventcore.events import Events

    dispatcher.add_listener(Events.CONFIG_CHANGED, on_config_changed)
"""


class Events:
    """
    Event names dispatched by ConfigManager.

    CONFIG_CHANGED carries the arguments "section", "key" and "value".
    CONFIG_LOADED and CONFIG_SAVED carry "path".
    """

    CONFIG_LOADED = "config.loaded"
    CONFIG_CHANGED = "config.changed"
    CONFIG_SAVED = "config.saved"
