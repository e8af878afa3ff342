# run.py
# Entry point. Config and wiring only. No logic lives here.
#
# Settings can be overridden through the environment or a .env file:
#   REACT_MAX_STEPS         step budget per goal (default 5)
#   REACT_FRESH_TRANSCRIPT  1/true/yes/on to start each goal with an empty transcript

import os

from dotenv import load_dotenv

from react_loop import display
from react_loop.agent import Agent
from react_loop.planner import HeuristicPlanner
from react_loop.tools import default_tools

load_dotenv()


def _env_max_steps() -> int:
    raw = os.getenv("REACT_MAX_STEPS", "5")
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"REACT_MAX_STEPS must be a positive integer, got {raw!r}.") from None


MAX_STEPS = _env_max_steps()
FRESH_TRANSCRIPT = os.getenv("REACT_FRESH_TRANSCRIPT", "").strip().lower() in {"1", "true", "yes", "on"}

# Sample goals: arithmetic, a known glossary term, and a follow-up.
GOALS = [
    "Quanto é 12 * 3?",
    "Explica ReAct rapidinho",
    "E ReWOO?",
]


def build_agent() -> Agent:
    agent = Agent(HeuristicPlanner(), fresh_transcript=FRESH_TRANSCRIPT)
    for tool in default_tools():
        agent.register_tool(tool)
    return agent


def main() -> None:
    agent = build_agent()
    display.banner(type(agent.planner).__name__, list(agent.tools))

    for goal in GOALS:
        result = agent.run(goal, MAX_STEPS)
        print(f"\n[RESULT]\n{result}\n")

    display.transcript_summary(agent.memory)


if __name__ == "__main__":
    main()
