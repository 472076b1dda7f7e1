# Integration Module
"""
Audit logging for cipher operations.

Events carry key fingerprints, never keys or text.
"""

from .event_logger import (
    EventType,
    CipherEvent,
    EventLogger,
    get_key_fingerprint,
    create_event_logger,
)

__all__ = [
    'EventType',
    'CipherEvent',
    'EventLogger',
    'get_key_fingerprint',
    'create_event_logger',
]
