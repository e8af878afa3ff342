# memory.py
# Append-only transcript owned by a single Agent.
#
# Guarantees: entries are never removed, reordered or rewritten, and
# timestamps never go backwards. Everything handed out is a snapshot.

from datetime import datetime, timezone
from typing import Iterator, Sequence

from react_loop.models import Message, Role


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def current_turn(messages: Sequence[Message]) -> tuple[Message, ...]:
    """Messages from the most recent user goal onward."""
    for index in range(len(messages) - 1, -1, -1):
        if messages[index].role is Role.USER:
            return tuple(messages[index:])
    return tuple(messages)


class Transcript:
    """Ordered log of user goals, tool observations and assistant answers."""

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def append(self, role: Role, content: str) -> Message:
        """Stamp and record a new entry. The only way the log grows."""
        at = _utcnow()
        if self._messages and at < self._messages[-1].at:
            # Wall clock stepped back; hold the previous stamp.
            at = self._messages[-1].at
        message = Message(role=role, content=content, at=at)
        self._messages.append(message)
        return message

    @property
    def messages(self) -> tuple[Message, ...]:
        """Read-only snapshot, safe to hand to planners and callers."""
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]
