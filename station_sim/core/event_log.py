"""
Station Sim — Event Log
Player-facing log lines produced by the engine.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum, auto
import logging
import time

logger = logging.getLogger(__name__)


class LogLevel(Enum):
    INFO = auto()
    ALERT = auto()
    CRITICAL = auto()
    SUCCESS = auto()


class LogCategory(Enum):
    SYSTEM = auto()
    CREW = auto()
    EVENT = auto()


# Python logging level each entry is mirrored at
_MIRROR_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.SUCCESS: logging.INFO,
    LogLevel.ALERT: logging.WARNING,
    LogLevel.CRITICAL: logging.ERROR,
}


@dataclass
class LogEntry:
    """One line in the station log."""
    message: str
    level: LogLevel = LogLevel.INFO
    category: LogCategory = LogCategory.SYSTEM
    timestamp: float = field(default_factory=time.time)
    tick: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "tick": self.tick,
            "message": self.message,
            "level": self.level.name.lower(),
            "category": self.category.name.lower(),
        }


class EventLog:
    """
    Append-only station log.

    Entries are also forwarded to the standard logging module.
    """

    def __init__(self, max_entries: Optional[int] = None):
        self.entries: List[LogEntry] = []
        self.max_entries = max_entries

    def add(
        self,
        message: str,
        level: LogLevel = LogLevel.INFO,
        category: LogCategory = LogCategory.SYSTEM,
        tick: Optional[int] = None,
    ) -> LogEntry:
        entry = LogEntry(message=message, level=level, category=category, tick=tick)
        self.entries.append(entry)
        if self.max_entries is not None and len(self.entries) > self.max_entries:
            del self.entries[: len(self.entries) - self.max_entries]

        logger.log(_MIRROR_LEVELS[level], f"[{category.name}] {message}")
        return entry

    def filter(self, level: Optional[LogLevel] = None, category: Optional[LogCategory] = None) -> List[LogEntry]:
        return [
            e for e in self.entries
            if (level is None or e.level == level) and (category is None or e.category == category)
        ]

    def messages(self) -> List[str]:
        return [e.message for e in self.entries]

    def __len__(self) -> int:
        return len(self.entries)
