# agent.py
# ReACT agent loop driver.
#
# The Agent is the kernel. Planners and tools are passive collaborators:
# this class owns the transcript, the tool registry, the step budget and
# every transition. Neither collaborator ever sees a mutable reference.
#
# Control flow, per run():
#   goal → user message → [ planner decides → tool executes → observation ]*
#   → final answer (planner stop) | fixed fallback (budget exhausted)
#
# Nothing a planner or tool does escapes run(); the only outward failures
# are caller contract violations.
#
# All terminal output is delegated to display.py. No formatting here.

from types import MappingProxyType
from typing import Mapping

from react_loop import display
from react_loop.memory import Transcript
from react_loop.models import Action, Message, Role, StepResult, ToolOutcome
from react_loop.planner import Planner
from react_loop.tools import Tool, describe_failure, invoke

FALLBACK_ANSWER = "Parei por limite de passos. Posso continuar com mais steps se você quiser."


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class AgentBusyError(Exception):
    """Raised when an Agent is re-entered or reconfigured while a run is in progress."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_max_steps(max_steps: int) -> None:
    if isinstance(max_steps, bool) or not isinstance(max_steps, int):
        raise ValueError(f"max_steps must be a positive integer, got {max_steps!r}.")
    if max_steps < 1:
        raise ValueError(f"max_steps must be a positive integer, got {max_steps}.")


# ---------------------------------------------------------------------------
# Agent
# ---------------------------------------------------------------------------


class Agent:
    """
    Reason-then-act loop over one planner and a registry of tools.

    By default the transcript outlives a single run, so a second goal sees
    the first goal's history (a multi-turn conversation). Pass
    fresh_transcript=True to start every run from an empty transcript.

    One Agent serves one logical conversation at a time; callers that
    share an instance across threads must serialize run() themselves.

    Example:
        agent = (
            Agent(HeuristicPlanner())
            .register_tool(CalculatorTool())
            .register_tool(DictionaryTool())
        )
        answer = agent.run("Quanto é 12 * 3?", max_steps=5)
    """

    def __init__(self, planner: Planner, *, fresh_transcript: bool = False) -> None:
        self._planner = planner
        self._fresh_transcript = fresh_transcript
        self._tools: dict[str, Tool] = {}
        self._transcript = Transcript()
        self._steps: list[StepResult] = []
        self._running = False

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def register_tool(self, tool: Tool) -> "Agent":
        """Add `tool` under its name, replacing any earlier registration."""
        if self._running:
            raise AgentBusyError("Tools cannot be registered while a run is in progress.")
        if not isinstance(tool.name, str) or not tool.name.strip():
            raise ValueError(f"Tool name must be a non-empty string, got {tool.name!r}.")
        self._tools[tool.name] = tool
        return self

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def planner(self) -> Planner:
        return self._planner

    @property
    def tools(self) -> Mapping[str, Tool]:
        return MappingProxyType(self._tools)

    @property
    def memory(self) -> tuple[Message, ...]:
        return self._transcript.messages

    @property
    def steps(self) -> tuple[StepResult, ...]:
        """Action/observation pairs recorded during the most recent run."""
        return tuple(self._steps)

    # ------------------------------------------------------------------
    # Loop internals
    # ------------------------------------------------------------------

    def _record(self, role: Role, content: str) -> None:
        self._transcript.append(role, content)

    def _act(self, action: Action) -> ToolOutcome:
        """Resolve and execute one action. Never raises."""
        tool = self._tools.get(action.tool_name)
        if tool is None:
            display.tool_not_found(action.tool_name)
            return ToolOutcome.unregistered(action.tool_name)

        display.react_action(tool.name, action.input)
        outcome = invoke(tool, action.input)
        if not outcome.ok:
            display.tool_failed(tool.name, outcome.text)
        return outcome

    def _answer(self, goal: str) -> str:
        try:
            answer = self._planner.final_answer(goal, self.memory)
        except Exception as exc:
            diagnostic = f"Erro: planner falhou ao responder: {describe_failure(exc)}"
            display.planner_failed(diagnostic)
            return diagnostic

        if not isinstance(answer, str):
            diagnostic = f"Erro: planner devolveu resposta inválida: {answer!r}"
            display.planner_failed(diagnostic)
            return diagnostic
        return answer

    def _loop(self, goal: str, max_steps: int) -> str:
        self._record(Role.USER, goal)

        for step in range(1, max_steps + 1):
            display.step_start(step, max_steps)

            try:
                action = self._planner.next_action(goal, self.memory, self.tools)
            except Exception as exc:
                diagnostic = f"Erro: planner falhou ao decidir: {describe_failure(exc)}"
                display.planner_failed(diagnostic)
                self._record(Role.TOOL, diagnostic)
                continue

            # ── ANSWERING ────────────────────────────────────────────
            if action is None:
                answer = self._answer(goal)
                self._record(Role.ASSISTANT, answer)
                display.final_result(answer)
                return answer

            # ── Malformed decision: same path as an unregistered tool ─
            if not isinstance(action, Action):
                diagnostic = f"Erro: planner devolveu ação inválida: {action!r}"
                display.planner_failed(diagnostic)
                self._record(Role.TOOL, diagnostic)
                continue

            # ── ACTING → OBSERVING ───────────────────────────────────
            outcome = self._act(action)
            observation = outcome.observation
            display.react_observation(observation)
            self._record(Role.TOOL, observation)
            self._steps.append(StepResult(action=action, observation=observation, ok=outcome.ok))

        # ── EXHAUSTED ────────────────────────────────────────────────
        display.budget_exhausted(max_steps)
        self._record(Role.ASSISTANT, FALLBACK_ANSWER)
        display.final_result(FALLBACK_ANSWER)
        return FALLBACK_ANSWER

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def run(self, goal: str, max_steps: int) -> str:
        """
        Pursue `goal` for at most `max_steps` decide/act iterations.

        Returns the planner's final answer, or FALLBACK_ANSWER when the
        budget runs out first. Raises ValueError for a non-positive
        max_steps and AgentBusyError when called re-entrantly.
        """
        _check_max_steps(max_steps)
        if self._running:
            raise AgentBusyError("Agent is already running; serialize calls to run().")

        self._running = True
        try:
            if self._fresh_transcript:
                self._transcript = Transcript()
            self._steps = []
            display.goal_received(goal, max_steps)
            return self._loop(goal, max_steps)
        finally:
            self._running = False
