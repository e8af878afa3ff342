# tools.py
# Tool contract, the execution boundary, and the demo tools.
# The agent only ever reaches a tool through invoke(), never tool.run() directly.

import math
import re
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Callable

from react_loop.models import ToolOutcome


class ToolError(Exception):
    """Raised by a tool when its input is malformed for that tool."""


class Tool(ABC):
    """
    A named capability invoked with text, returning text.

    Subclasses set `name` (registry key) and `description` (for planners
    and humans; the loop never reads it) and implement run().
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    def run(self, input: str) -> str:
        """Execute against `input`. May raise; raise ToolError for bad input."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class FunctionTool(Tool):
    """Adapts a plain `str -> str` callable to the Tool contract."""

    def __init__(self, name: str, description: str, fn: Callable[[str], str]) -> None:
        self.name = name
        self.description = description
        self._fn = fn

    def run(self, input: str) -> str:
        return self._fn(input)


def describe_failure(exc: Exception) -> str:
    """Non-empty diagnostic for `exc`, even when its __str__ is broken."""
    try:
        text = str(exc).strip()
    except Exception:
        text = ""
    return text or type(exc).__name__


def invoke(tool: Tool, payload: str) -> ToolOutcome:
    """
    Run `tool` and convert whatever happens into a ToolOutcome.

    Never raises: exceptions and non-text returns become failed outcomes
    tagged with the tool's name.
    """
    try:
        output = tool.run(payload)
    except Exception as exc:
        return ToolOutcome.failure(tool.name, describe_failure(exc))

    if not isinstance(output, str):
        return ToolOutcome.failure(
            tool.name, f"retorno inválido ({type(output).__name__}), esperado texto."
        )
    return ToolOutcome.success(tool.name, output)


# ---------------------------------------------------------------------------
# Demo tools
# ---------------------------------------------------------------------------

_EXPRESSION = re.compile(r"\s*(-?\d+(?:\.\d+)?)\s*([+\-*/])\s*(-?\d+(?:\.\d+)?)\s*")


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return str(value)


class CalculatorTool(Tool):
    name = "calculator"
    description = "Faz contas simples: add, sub, mul, div. Ex: '12 * 3'."

    def run(self, input: str) -> str:
        match = _EXPRESSION.fullmatch(input)
        if not match:
            raise ToolError("formato inválido. Use algo como '12 * 3'.")

        a = float(match.group(1))
        op = match.group(2)
        b = float(match.group(3))

        if op == "+":
            result = a + b
        elif op == "-":
            result = a - b
        elif op == "*":
            result = a * b
        elif b == 0:
            raise ToolError("operação inválida (talvez divisão por zero).")
        else:
            result = a / b

        # Operands past float range overflow to inf, and inf * 0 is nan.
        if math.isnan(result) or math.isinf(result):
            raise ToolError("operação inválida (talvez divisão por zero).")

        return _format_number(result)


class DictionaryTool(Tool):
    """Static glossary lookup. Holds no mutable state."""

    name = "dictionary"
    description = "Explica termos curtos. Input: uma palavra."

    ENTRIES = MappingProxyType({
        "react": "ReAct = Reasoning + Acting: loop de raciocínio e ações com observações.",
        "rewoo": "ReWOO = Reasoning Without Observation: planeja tudo e executa sem replanejar no meio.",
    })
    NOT_FOUND = "Não encontrei no dicionário demo."

    def run(self, input: str) -> str:
        return self.ENTRIES.get(input.strip().lower(), self.NOT_FOUND)


def default_tools() -> list[Tool]:
    """Fresh instances of the demo tools."""
    return [CalculatorTool(), DictionaryTool()]
