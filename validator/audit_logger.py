"""
Audit Logging for the Gated Mint Controller

Structured audit trail of issuance requests, configuration changes, treasury
withdrawals and unauthorized access attempts. Events are mirrored to the
standard logging system and kept in a bounded in-memory buffer for queries
and export.
"""

import json
import logging
import time
import threading
import uuid
from collections import Counter, defaultdict, deque
from dataclasses import dataclass, field, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Deque, Dict, List, Optional


class AuditEventType(Enum):
    """Audit event type categories."""
    ISSUANCE = "issuance"
    CONFIGURATION_CHANGE = "configuration_change"
    TREASURY = "treasury"
    SECURITY_EVENT = "security_event"


class AuditResult(Enum):
    """Audit event result types."""
    APPROVED = "approved"
    REJECTED = "rejected"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    SUSPICIOUS = "suspicious"


@dataclass
class AuditEvent:
    """Single audit record."""
    event_id: str
    timestamp: float
    event_type: AuditEventType
    operation: str
    component: str
    result: AuditResult

    caller: Optional[str] = None
    amount: Optional[int] = None
    asset_ids: List[int] = field(default_factory=list)
    context: Dict[str, Any] = field(default_factory=dict)

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def __post_init__(self):
        if not self.event_id:
            self.event_id = f"audit_{int(time.time() * 1000000)}_{uuid.uuid4().hex[:8]}"
        if not self.timestamp:
            self.timestamp = time.time()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["event_type"] = self.event_type.value
        data["result"] = self.result.value
        return data


_RESULT_LEVELS = {
    AuditResult.APPROVED: logging.INFO,
    AuditResult.INFO: logging.INFO,
    AuditResult.REJECTED: logging.INFO,
    AuditResult.WARNING: logging.WARNING,
    AuditResult.SUSPICIOUS: logging.WARNING,
    AuditResult.ERROR: logging.ERROR,
}


class AuditLogger:
    """
    Collects audit events.

    Configuration keys:
        max_events: size of the in-memory buffer (default 10000)
        enabled_event_types: list of AuditEventType values to record
        log_to_logger: mirror events to the ``audit`` logger (default True)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.max_events = self.config.get("max_events", 10000)
        enabled = self.config.get("enabled_event_types")
        self.enabled_event_types = (
            {AuditEventType(t) for t in enabled} if enabled else set(AuditEventType)
        )
        self.log_to_logger = self.config.get("log_to_logger", True)

        self.events: Deque[AuditEvent] = deque(maxlen=self.max_events)
        self.handlers: Dict[AuditEventType, List[Callable[[AuditEvent], None]]] = defaultdict(list)
        self.counters = {
            "events_total": 0,
            "by_type": Counter(),
            "by_result": Counter(),
            "by_error_code": Counter(),
        }
        self._lock = threading.Lock()
        self.logger = logging.getLogger("audit")

    def log_event(self,
                  event_type: AuditEventType,
                  operation: str,
                  component: str,
                  result: AuditResult,
                  **kwargs) -> Optional[str]:
        """
        Record an audit event.

        Returns:
            The event id, or None if the event type is disabled
        """
        if event_type not in self.enabled_event_types:
            return None

        event = AuditEvent(
            event_id="",
            timestamp=0.0,
            event_type=event_type,
            operation=operation,
            component=component,
            result=result,
            **kwargs
        )

        with self._lock:
            self.events.append(event)
            self.counters["events_total"] += 1
            self.counters["by_type"][event_type.value] += 1
            self.counters["by_result"][result.value] += 1
            if event.error_code:
                self.counters["by_error_code"][event.error_code] += 1

        if self.log_to_logger:
            self.logger.log(
                _RESULT_LEVELS[result],
                f"{event_type.value}:{operation} {result.value} caller={event.caller}"
                + (f" error={event.error_code}" if event.error_code else "")
            )

        for handler in self.handlers.get(event_type, []):
            try:
                handler(event)
            except Exception as e:
                self.logger.error(f"Audit handler failed for {event.event_id}: {e}")

        return event.event_id

    def log_issuance(self, caller: str, result: AuditResult, **kwargs) -> Optional[str]:
        return self.log_event(AuditEventType.ISSUANCE, "request_issuance", "validator",
                              result, caller=caller, **kwargs)

    def log_configuration_change(self, caller: str, operation: str, old_value: Any,
                                 new_value: Any) -> Optional[str]:
        return self.log_event(
            AuditEventType.CONFIGURATION_CHANGE, operation, "registry", AuditResult.APPROVED,
            caller=caller, context={"old_value": old_value, "new_value": new_value}
        )

    def log_treasury_operation(self, caller: str, result: AuditResult, **kwargs) -> Optional[str]:
        return self.log_event(AuditEventType.TREASURY, "withdraw", "treasury",
                              result, caller=caller, **kwargs)

    def log_security_event(self, caller: str, operation: str, error_code: str,
                           **kwargs) -> Optional[str]:
        return self.log_event(AuditEventType.SECURITY_EVENT, operation, "access_guard",
                              AuditResult.SUSPICIOUS, caller=caller,
                              error_code=error_code, **kwargs)

    def add_event_handler(self, event_type: AuditEventType,
                          handler: Callable[[AuditEvent], None]) -> None:
        """Call handler for every recorded event of event_type."""
        self.handlers[event_type].append(handler)

    def get_events(self,
                   event_type: Optional[AuditEventType] = None,
                   result: Optional[AuditResult] = None,
                   caller: Optional[str] = None,
                   limit: Optional[int] = None) -> List[AuditEvent]:
        with self._lock:
            events = list(self.events)

        if event_type is not None:
            events = [e for e in events if e.event_type == event_type]
        if result is not None:
            events = [e for e in events if e.result == result]
        if caller is not None:
            events = [e for e in events if e.caller == caller]
        if limit is not None:
            events = events[-limit:]
        return events

    def get_statistics(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "events_total": self.counters["events_total"],
                "events_buffered": len(self.events),
                "by_type": dict(self.counters["by_type"]),
                "by_result": dict(self.counters["by_result"]),
                "by_error_code": dict(self.counters["by_error_code"]),
            }

    def export_audit_log(self, output_path: str,
                         event_type: Optional[AuditEventType] = None) -> int:
        """Write buffered events as a JSON array. Returns the number exported."""
        events = self.get_events(event_type=event_type)
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump([e.to_dict() for e in events], f, indent=2, default=str)
        return len(events)

    def clear(self) -> None:
        with self._lock:
            self.events.clear()


_audit_logger: Optional[AuditLogger] = None
_audit_lock = threading.Lock()


def get_audit_logger() -> AuditLogger:
    """Get the process-wide default audit logger."""
    global _audit_logger
    with _audit_lock:
        if _audit_logger is None:
            _audit_logger = AuditLogger()
        return _audit_logger


def configure_audit_logger(config: Dict[str, Any]) -> AuditLogger:
    """Replace the process-wide default audit logger."""
    global _audit_logger
    with _audit_lock:
        _audit_logger = AuditLogger(config)
        return _audit_logger
