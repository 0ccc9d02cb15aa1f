"""Where monitor messages go."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TextIO


class Notifier:
    def notify(self, event: str, message: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError


@dataclass
class LogNotifier(Notifier):
    """Prints ``PREFIX EVENT: message`` lines, skipping muted event names."""

    prefix: str = "[SWING]"
    muted: frozenset[str] = frozenset()
    stream: TextIO = field(default=sys.stdout, repr=False)

    def notify(self, event: str, message: str) -> None:
        if event in self.muted:
            return
        print(f"{self.prefix} {event}: {message}", file=self.stream)


@dataclass
class MemoryNotifier(Notifier):
    events: list[tuple[str, str]] = field(default_factory=list)

    def notify(self, event: str, message: str) -> None:
        self.events.append((event, message))

    def of(self, event: str) -> list[str]:
        return [message for name, message in self.events if name == event]
