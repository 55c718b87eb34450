"""
eventcore - Event/Listener Interoperability

Priority-ordered event dispatch with propagation control, dispatcher
injection and pydantic-validated configuration.
"""

__version__ = "0.1.0"
