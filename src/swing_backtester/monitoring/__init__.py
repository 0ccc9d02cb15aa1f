"""Monitoring exports."""

from swing_backtester.monitoring.audit import AuditLog
from swing_backtester.monitoring.monitor import Monitor
from swing_backtester.monitoring.notifier import LogNotifier, MemoryNotifier, Notifier

__all__ = [
    "AuditLog",
    "LogNotifier",
    "MemoryNotifier",
    "Monitor",
    "Notifier",
]
