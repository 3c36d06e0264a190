"""Command-history record types shared by storage, filtering, and the browser."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum


class ShellKind(IntEnum):
    """Shell a command was recorded from; ``UNKNOWN`` doubles as "no filter"."""

    UNKNOWN = 0
    POWERSHELL = 1
    BASH = 2
    ZSH = 3
    CMD = 4

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: object) -> ShellKind:
        """Map a wire label or integer to a shell kind, defaulting to ``UNKNOWN``."""
        if isinstance(value, ShellKind):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                return cls.UNKNOWN
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                return cls.UNKNOWN
        return cls.UNKNOWN


class CommandValidationError(ValueError):
    """Raised when a ``CommandEntry`` has an invalid field."""

    def __init__(self, field_name: str, message: str) -> None:
        super().__init__(f"{field_name}: {message}")
        self.field_name = field_name
        self.message = message


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z`` for UTC."""
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class CommandEntry:
    """One recorded command, read-only to the browser."""

    id: str
    command: str
    directory: str
    timestamp: datetime
    shell: ShellKind = ShellKind.UNKNOWN
    exit_code: int = 0
    duration: timedelta = timedelta(0)
    tags: tuple[str, ...] = field(default_factory=tuple)

    def validate(self) -> None:
        if not self.id:
            raise CommandValidationError("id", "id cannot be empty")
        if not self.command:
            raise CommandValidationError("command", "command cannot be empty")
        if not self.directory:
            raise CommandValidationError("directory", "directory cannot be empty")
        if not isinstance(self.timestamp, datetime):
            raise CommandValidationError("timestamp", "timestamp cannot be zero")
        if self.shell <= ShellKind.UNKNOWN or self.shell > ShellKind.CMD:
            raise CommandValidationError("shell", "invalid shell type")
        if self.duration < timedelta(0):
            raise CommandValidationError("duration", "duration cannot be negative")

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def to_json(self) -> dict[str, object]:
        """Serialize to the recorder's JSON export shape."""
        return {
            "id": self.id,
            "command": self.command,
            "directory": self.directory,
            "timestamp": self.timestamp.isoformat(),
            "shell": self.shell.label,
            "exit_code": self.exit_code,
            "duration": self.duration.total_seconds(),
            "tags": list(self.tags),
        }

    @classmethod
    def from_json(cls, data: dict[str, object]) -> CommandEntry:
        """Build an entry from one exported JSON object.

        ``timestamp`` must be ISO-8601; ``duration`` is seconds. Missing optional
        fields take their defaults. Raises ``ValueError`` on malformed values.
        """
        raw_timestamp = data.get("timestamp")
        if not isinstance(raw_timestamp, str):
            raise ValueError("timestamp must be an ISO-8601 string")
        raw_duration = data.get("duration", 0)
        if isinstance(raw_duration, bool) or not isinstance(raw_duration, (int, float)):
            raise ValueError("duration must be a number of seconds")
        raw_tags = data.get("tags") or []
        if not isinstance(raw_tags, list):
            raise ValueError("tags must be a list")
        raw_exit = data.get("exit_code", 0)
        if isinstance(raw_exit, bool) or not isinstance(raw_exit, int):
            raise ValueError("exit_code must be an integer")
        return cls(
            id=str(data.get("id") or ""),
            command=str(data.get("command") or ""),
            directory=str(data.get("directory") or ""),
            timestamp=parse_timestamp(raw_timestamp),
            shell=ShellKind.parse(data.get("shell")),
            exit_code=raw_exit,
            duration=timedelta(seconds=float(raw_duration)),
            tags=tuple(str(tag) for tag in raw_tags),
        )


@dataclass(frozen=True)
class DirectoryStat:
    """Per-directory aggregate used to build the directory tree."""

    path: str
    command_count: int = 0
    last_used: datetime | None = None
    is_active: bool = True


__all__ = [
    "ShellKind",
    "CommandEntry",
    "CommandValidationError",
    "DirectoryStat",
    "parse_timestamp",
]
