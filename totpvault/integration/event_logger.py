"""
Event Logger Module

Audit trail for two-factor authentication events.

Features:
- Secret creation, setup link and verification events
- Privacy-preserving account hashes (SHA-256)
- Subscriber callbacks
- Every event mirrored to the standard logging system

Secrets and codes are never recorded.
"""

import hashlib
import json
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Callable

log = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

DEFAULT_MAX_EVENTS = 1000
EVENT_VERSION = "1.0"


# ============================================================================
# Privacy Functions
# ============================================================================

def get_account_hash(account: str) -> str:
    """
    Compute privacy-preserving hash of an account label.

    Allows correlating events for the same account without storing
    the label itself.

    Args:
        account: The plaintext account label

    Returns:
        Hex-encoded SHA-256 hash of the label
    """
    return hashlib.sha256(account.encode()).hexdigest()


# ============================================================================
# Event Types
# ============================================================================

class EventType(Enum):
    """Types of security events that can be logged."""

    SECRET_CREATED = "secret_created"
    SETUP_LINK_CREATED = "setup_link_created"
    CODE_VERIFIED = "code_verified"
    CODE_REJECTED = "code_rejected"


# ============================================================================
# Event Structure
# ============================================================================

@dataclass
class SecurityEvent:
    """A recorded security event. Account labels are stored hashed."""
    event_type: EventType
    account_hash: str
    timestamp: int
    details: Dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> str:
        return json.dumps({
            'version': EVENT_VERSION,
            'type': self.event_type.value,
            'account': self.account_hash,
            'time': self.timestamp,
            'details': self.details,
        }, separators=(',', ':'))

    @classmethod
    def from_json(cls, data_str: str) -> 'SecurityEvent':
        data = json.loads(data_str)
        return cls(
            event_type=EventType(data['type']),
            account_hash=data['account'],
            timestamp=data['time'],
            details=data.get('details', {}),
        )

    def __str__(self) -> str:
        dt = datetime.fromtimestamp(self.timestamp)
        return (
            f"[{dt.strftime('%Y-%m-%d %H:%M:%S')}] "
            f"{self.event_type.value} | "
            f"account:{self.account_hash[:8]}..."
        )


# ============================================================================
# Event Logger
# ============================================================================

class EventLogger:
    """
    In-memory audit log of authentication events.

    Keeps the most recent max_events events and notifies subscribers
    of each new one.
    """

    def __init__(self, max_events: int = DEFAULT_MAX_EVENTS, clock=None):
        """
        Initialize the event logger.

        Args:
            max_events: Number of events kept before the oldest are dropped
            clock: Object with a now() method (time.time if None)
        """
        if max_events < 1:
            raise ValueError("max_events must be at least 1")
        self._events: deque = deque(maxlen=max_events)
        self._clock = clock
        self._callbacks: List[Callable[[SecurityEvent], None]] = []

    def _now(self) -> int:
        return int(self._clock.now() if self._clock else time.time())

    def _add_event(self, event: SecurityEvent) -> None:
        self._events.append(event)
        log.info("%s", event.to_json())

        for callback in self._callbacks:
            try:
                callback(event)
            except Exception:
                # A failing subscriber must not stop the others
                log.exception("event callback %r failed", callback)

    def add_callback(self, callback: Callable[[SecurityEvent], None]) -> None:
        """Add a callback to be notified of new events."""
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[SecurityEvent], None]) -> None:
        """Remove a callback."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def _record(self, event_type: EventType, account: str,
                details: Optional[Dict[str, Any]] = None) -> SecurityEvent:
        event = SecurityEvent(
            event_type=event_type,
            account_hash=get_account_hash(account),
            timestamp=self._now(),
            details=details or {},
        )
        self._add_event(event)
        return event

    def log_secret_created(self, account: str, length: int) -> SecurityEvent:
        """Log creation of a new secret (its length only)."""
        return self._record(EventType.SECRET_CREATED, account, {'length': length})

    def log_setup_link(self, account: str, issuer: Optional[str] = None) -> SecurityEvent:
        """Log that a provisioning URI or QR URL was handed out."""
        details = {'issuer': issuer} if issuer else {}
        return self._record(EventType.SETUP_LINK_CREATED, account, details)

    def log_verification(self, account: str, success: bool,
                         discrepancy: int) -> SecurityEvent:
        """
        Log a code verification attempt.

        Args:
            account: The account label (will be hashed)
            success: Whether the code was accepted
            discrepancy: Window used for the check

        Returns:
            The logged event
        """
        return self._record(
            EventType.CODE_VERIFIED if success else EventType.CODE_REJECTED,
            account,
            {'window': discrepancy},
        )

    # ========================================================================
    # Queries
    # ========================================================================

    @property
    def events(self) -> List[SecurityEvent]:
        """Recorded events, oldest first."""
        return list(self._events)

    def get_events_for_account(self, account: str) -> List[SecurityEvent]:
        account_hash = get_account_hash(account)
        return [e for e in self._events if e.account_hash == account_hash]

    def get_events_by_type(self, event_type: EventType) -> List[SecurityEvent]:
        return [e for e in self._events if e.event_type == event_type]

    def count_failures(self, account: str) -> int:
        """Number of rejected codes recorded for an account."""
        return sum(
            1 for e in self.get_events_for_account(account)
            if e.event_type == EventType.CODE_REJECTED
        )

    def clear(self) -> None:
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)


def create_event_logger(max_events: int = DEFAULT_MAX_EVENTS) -> EventLogger:
    """Create an event logger with default settings."""
    return EventLogger(max_events=max_events)
