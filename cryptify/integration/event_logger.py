"""
Event Logger Module

Audit trail for cipher operations performed through Cryptify.

Features:
- Cipher construction, encryption and decryption events
- Failed operation events with the error kind
- Privacy-preserving key fingerprints (SHA-256); key material is never stored
- In-memory only; export as JSON for the caller to keep if it wants to
"""

import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Callable

from cryptography.hazmat.primitives import hashes


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

EVENT_VERSION = "1.0"
FINGERPRINT_LENGTH = 16


# ============================================================================
# Privacy Functions
# ============================================================================

def get_key_fingerprint(key_material: str) -> str:
    """
    Compute privacy-preserving fingerprint of key material.

    Uses SHA-256 so keys are never kept in the log, while still allowing
    correlation of events that used the same key.

    Args:
        key_material: Playfair keyword or "p,q" string

    Returns:
        First 16 hex characters of the SHA-256 digest
    """
    digest = hashes.Hash(hashes.SHA256())
    digest.update(key_material.encode('utf-8'))
    return digest.finalize().hex()[:FINGERPRINT_LENGTH]


# ============================================================================
# Event Types
# ============================================================================

class EventType(Enum):
    """Types of cipher events that can be logged."""

    CIPHER_CREATED = "cipher_created"
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"
    OPERATION_FAILED = "operation_failed"


# ============================================================================
# Event Structure
# ============================================================================

@dataclass
class CipherEvent:
    """
    A single cipher operation record.

    Only the key fingerprint is kept, never the key or the text.
    """
    event_type: EventType
    method: str
    key_fingerprint: str
    timestamp: int
    details: Dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> Dict[str, Any]:
        """Convert event to a JSON-compatible dict."""
        return {
            'version': EVENT_VERSION,
            'type': self.event_type.value,
            'method': self.method,
            'key': self.key_fingerprint,
            'time': self.timestamp,
            'iso_time': datetime.fromtimestamp(self.timestamp).isoformat(),
            'details': self.details,
        }

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> 'CipherEvent':
        """Rebuild an event from to_record() output."""
        return cls(
            event_type=EventType(data['type']),
            method=data['method'],
            key_fingerprint=data['key'],
            timestamp=data['time'],
            details=data.get('details', {}),
        )

    def __str__(self) -> str:
        dt = datetime.fromtimestamp(self.timestamp)
        return (
            f"[{dt.strftime('%Y-%m-%d %H:%M:%S')}] "
            f"{self.event_type.value} | "
            f"{self.method} | "
            f"key:{self.key_fingerprint[:8]}..."
        )


# ============================================================================
# Event Logger
# ============================================================================

class EventLogger:
    """
    In-memory audit log of cipher operations.

    Each event is also forwarded to the standard `logging` module at
    INFO level (WARNING for failures).
    """

    def __init__(self, max_events: Optional[int] = None):
        """
        Initialize the event logger.

        Args:
            max_events: Keep only the newest N events (None keeps all)
        """
        self._events: List[CipherEvent] = []
        self._max_events = max_events
        self._callbacks: List[Callable[[CipherEvent], None]] = []

    def _add_event(self, event: CipherEvent) -> CipherEvent:
        """Store the event and notify callbacks."""
        self._events.append(event)
        if self._max_events is not None and len(self._events) > self._max_events:
            del self._events[:len(self._events) - self._max_events]

        level = logging.WARNING if event.event_type is EventType.OPERATION_FAILED else logging.INFO
        logger.log(level, "%s", event)

        for callback in self._callbacks:
            callback(event)
        return event

    def add_callback(self, callback: Callable[[CipherEvent], None]) -> None:
        """Add a callback to be notified of new events."""
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[CipherEvent], None]) -> None:
        """Remove a callback."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    # ========================================================================
    # Cipher Events
    # ========================================================================

    def log_cipher_created(self, method: str, key_material: str) -> CipherEvent:
        """Log construction of a cipher instance."""
        event = CipherEvent(
            event_type=EventType.CIPHER_CREATED,
            method=method,
            key_fingerprint=get_key_fingerprint(key_material),
            timestamp=int(time.time()),
        )
        return self._add_event(event)

    def log_operation(
        self,
        method: str,
        mode: str,
        key_material: str,
        input_length: int,
        output_length: int
    ) -> CipherEvent:
        """
        Log a successful encryption or decryption.

        Args:
            method: Cipher method name ("playfair" or "rsa")
            mode: "encrypt" or "decrypt"
            key_material: Key used (will be fingerprinted)
            input_length: Length of the input text
            output_length: Length of the produced output

        Returns:
            The logged event
        """
        event = CipherEvent(
            event_type=EventType(mode),
            method=method,
            key_fingerprint=get_key_fingerprint(key_material),
            timestamp=int(time.time()),
            details={
                'input_length': input_length,
                'output_length': output_length,
            }
        )
        return self._add_event(event)

    def log_failure(
        self,
        method: str,
        mode: str,
        key_material: str,
        error: Exception
    ) -> CipherEvent:
        """Log a failed operation with the error kind and message."""
        event = CipherEvent(
            event_type=EventType.OPERATION_FAILED,
            method=method,
            key_fingerprint=get_key_fingerprint(key_material),
            timestamp=int(time.time()),
            details={
                'mode': mode,
                'error': type(error).__name__,
                'message': str(error),
            }
        )
        return self._add_event(event)

    # ========================================================================
    # Retrieval
    # ========================================================================

    def get_all_events(self) -> List[CipherEvent]:
        """All retained events, oldest first."""
        return list(self._events)

    def get_events_by_type(self, event_type: EventType) -> List[CipherEvent]:
        """Get all events of a specific type."""
        return [e for e in self._events if e.event_type == event_type]

    def get_recent_events(self, count: int = 10) -> List[CipherEvent]:
        """Get the most recent events."""
        return self._events[-count:] if count > 0 else []

    def clear(self) -> None:
        """Drop all retained events."""
        self._events.clear()

    def print_audit_log(self, last_n: Optional[int] = None) -> None:
        """Print the audit log in a readable format."""
        events = self.get_recent_events(last_n) if last_n is not None else self._events

        print("\n" + "=" * 70)
        print("CIPHER AUDIT LOG")
        print("=" * 70)

        for event in events:
            print(event)
            if event.details:
                for k, v in event.details.items():
                    print(f"    {k}: {v}")

        print("=" * 70)
        print(f"Total events: {len(self._events)}")
        print("=" * 70)

    def export_log(self) -> str:
        """Export the audit log as JSON."""
        return json.dumps([e.to_record() for e in self._events], indent=2)

    @classmethod
    def import_log(cls, json_str: str, max_events: Optional[int] = None) -> 'EventLogger':
        """
        Rebuild a logger from export_log() output.

        With max_events set, only the newest imported events are kept.
        """
        event_logger = cls(max_events=max_events)
        events = [CipherEvent.from_record(r) for r in json.loads(json_str)]
        if max_events is not None:
            events = events[-max_events:] if max_events > 0 else []
        event_logger._events = events
        return event_logger

    def __len__(self) -> int:
        return len(self._events)


# ============================================================================
# Convenience Functions
# ============================================================================

def create_event_logger(max_events: Optional[int] = None) -> EventLogger:
    """Create a new event logger."""
    return EventLogger(max_events=max_events)
