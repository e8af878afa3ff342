from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from react_loop.memory import Transcript, current_turn
from react_loop.models import Message, Role

# ---------------------------------------------------------------------------
# Transcript
# ---------------------------------------------------------------------------

def test_append_records_in_order():
    transcript = Transcript()
    transcript.append(Role.USER, "goal")
    transcript.append(Role.TOOL, "obs")
    transcript.append(Role.ASSISTANT, "answer")

    assert len(transcript) == 3
    assert [m.content for m in transcript] == ["goal", "obs", "answer"]
    assert transcript[1].role is Role.TOOL
    assert transcript[-1].content == "answer"


def test_transcript_has_no_removal_api():
    transcript = Transcript()
    transcript.append(Role.USER, "goal")
    with pytest.raises(TypeError):
        del transcript[0]
    assert len(transcript) == 1


def test_messages_are_snapshots():
    transcript = Transcript()
    transcript.append(Role.USER, "goal")
    snapshot = transcript.messages
    transcript.append(Role.TOOL, "obs")
    assert len(snapshot) == 1
    assert isinstance(snapshot, tuple)


def test_messages_are_frozen():
    message = Transcript().append(Role.USER, "goal")
    with pytest.raises(ValidationError):
        message.content = "rewritten"


def test_timestamps_never_go_backwards():
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    clock = iter([now, now - timedelta(seconds=5), now + timedelta(seconds=1)])

    with patch("react_loop.memory._utcnow", side_effect=lambda: next(clock)):
        transcript = Transcript()
        transcript.append(Role.USER, "a")
        transcript.append(Role.TOOL, "b")
        transcript.append(Role.ASSISTANT, "c")

    assert [m.at for m in transcript] == [now, now, now + timedelta(seconds=1)]

# ---------------------------------------------------------------------------
# current_turn
# ---------------------------------------------------------------------------

def _msg(role, content):
    return Message(role=role, content=content, at=datetime.now(timezone.utc))


def test_current_turn_starts_at_latest_goal():
    history = [
        _msg(Role.USER, "first"),
        _msg(Role.TOOL, "old"),
        _msg(Role.ASSISTANT, "done"),
        _msg(Role.USER, "second"),
        _msg(Role.TOOL, "new"),
    ]
    assert [m.content for m in current_turn(history)] == ["second", "new"]


def test_current_turn_without_goal_returns_everything():
    history = [_msg(Role.TOOL, "orphan")]
    assert current_turn(history) == tuple(history)
