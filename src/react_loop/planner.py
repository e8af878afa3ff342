# planner.py
# Decision contract for the agent loop, plus the rule-based demo planner.
#
# Planners are pure: everything they decide comes from (goal, memory, tools).
# The base class declares empty __slots__, so a planner that keeps to the
# contract cannot grow instance state between calls.

import re
from abc import ABC, abstractmethod
from typing import Mapping, Sequence

from react_loop.memory import current_turn
from react_loop.models import Action, Message, Role
from react_loop.tools import Tool

NO_TOOL_ANSWER = (
    "Não precisei usar ferramentas. Minha resposta é: depende do objetivo, "
    "mas posso te ajudar a quebrar isso em passos."
)
OBSERVED_PREFIX = "Pelo que observei usando a ferramenta: "


class Planner(ABC):
    """Chooses the next action, or stops and writes the final answer."""

    __slots__ = ()

    @abstractmethod
    def next_action(
        self, goal: str, memory: Sequence[Message], tools: Mapping[str, Tool]
    ) -> Action | None:
        """Return the next Action, or None to stop and answer."""

    @abstractmethod
    def final_answer(self, goal: str, memory: Sequence[Message]) -> str:
        """Synthesize the user-facing answer once next_action() has stopped."""


# ---------------------------------------------------------------------------
# Heuristic planner
# ---------------------------------------------------------------------------

_HAS_ARITHMETIC = re.compile(r"\d+\s*[+\-*/]\s*\d+")
_ARITHMETIC = re.compile(r"(-?\d+(?:\.\d+)?\s*[+\-*/]\s*-?\d+(?:\.\d+)?)")

KEYWORDS = ("react", "rewoo")


def _tool_observations(memory: Sequence[Message]) -> list[Message]:
    return [m for m in current_turn(memory) if m.role is Role.TOOL]


class HeuristicPlanner(Planner):
    """
    Regex-routing stand-in for a model-backed planner.

    Sends arithmetic to `calculator`, known glossary terms to `dictionary`,
    and stops as soon as the current goal has one observation. It never
    goes more than one tool call deep.
    """

    __slots__ = ()

    def next_action(
        self, goal: str, memory: Sequence[Message], tools: Mapping[str, Tool]
    ) -> Action | None:
        if _tool_observations(memory):
            return None

        lowered = goal.lower()

        if _HAS_ARITHMETIC.search(lowered):
            match = _ARITHMETIC.search(goal)
            if match:
                return Action(tool_name="calculator", input=match.group(1))

        for keyword in KEYWORDS:
            if keyword in lowered:
                return Action(tool_name="dictionary", input=keyword)

        return None

    def final_answer(self, goal: str, memory: Sequence[Message]) -> str:
        observations = _tool_observations(memory)
        if observations:
            return OBSERVED_PREFIX + observations[-1].content
        return NO_TOOL_ANSWER
