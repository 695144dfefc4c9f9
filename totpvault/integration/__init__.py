# Integration Module
"""
Audit logging for authentication events.

All events are logged with privacy-preserving account hashes.
"""

from .event_logger import (
    EventType,
    SecurityEvent,
    EventLogger,
    get_account_hash,
    create_event_logger,
)

__all__ = [
    'EventType',
    'SecurityEvent',
    'EventLogger',
    'get_account_hash',
    'create_event_logger',
]
