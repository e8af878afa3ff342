import pytest
from unittest.mock import MagicMock
from react_loop.models import ToolOutcome
from react_loop.tools import (
    CalculatorTool,
    DictionaryTool,
    FunctionTool,
    Tool,
    ToolError,
    default_tools,
    invoke,
)

# ---------------------------------------------------------------------------
# Calculator
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "expression, expected",
    [
        ("12 * 3", "36"),
        ("7 / 2", "3.5"),
        ("-4 + 10", "6"),
        ("  1.5*2  ", "3"),
        ("10 - -2", "12"),
        ("0.1 + 0.2", str(0.1 + 0.2)),
    ],
)
def test_calculator_evaluates_binary_expressions(expression, expected):
    assert CalculatorTool().run(expression) == expected


@pytest.mark.parametrize("expression", ["", "abc", "12 *", "1 + 2 + 3", "2 ^ 3", "12 * 3?"])
def test_calculator_rejects_malformed_input(expression):
    with pytest.raises(ToolError, match="formato inválido"):
        CalculatorTool().run(expression)


def test_calculator_division_by_zero():
    with pytest.raises(ToolError, match="divisão por zero"):
        CalculatorTool().run("5 / 0")


@pytest.mark.parametrize(
    "expression",
    [
        "1" + "0" * 400 + " * 0",   # inf * 0 -> nan
        "9" * 400 + " * 2",         # overflow -> inf
        "-" + "9" * 400 + " - 1",   # overflow -> -inf
    ],
)
def test_calculator_rejects_non_finite_results(expression):
    outcome = invoke(CalculatorTool(), expression)
    assert not outcome.ok
    assert outcome.observation.startswith("calculator → erro: operação inválida")

# ---------------------------------------------------------------------------
# Dictionary
# ---------------------------------------------------------------------------

def test_dictionary_lookup_is_case_and_space_insensitive():
    tool = DictionaryTool()
    assert tool.run("  ReAct ") == DictionaryTool.ENTRIES["react"]
    assert "Reasoning Without Observation" in tool.run("REWOO")


def test_dictionary_unknown_term_is_a_normal_result():
    outcome = invoke(DictionaryTool(), "langchain")
    assert outcome.ok
    assert outcome.text == DictionaryTool.NOT_FOUND


def test_dictionary_is_idempotent():
    tool = DictionaryTool()
    first = invoke(tool, "react").observation
    second = invoke(tool, "react").observation
    assert first == second


def test_dictionary_entries_are_read_only():
    with pytest.raises(TypeError):
        DictionaryTool.ENTRIES["react"] = "changed"

# ---------------------------------------------------------------------------
# invoke(): the execution boundary
# ---------------------------------------------------------------------------

def test_invoke_success():
    outcome = invoke(CalculatorTool(), "12 * 3")
    assert outcome == ToolOutcome(tool="calculator", ok=True, text="36")
    assert outcome.observation == "calculator → 36"


def test_invoke_captures_tool_error():
    outcome = invoke(CalculatorTool(), "nonsense")
    assert not outcome.ok
    assert outcome.observation.startswith("calculator → erro: formato inválido")


def test_invoke_uses_exception_name_when_message_is_empty():
    tool = FunctionTool("broken", "raises", MagicMock(side_effect=ZeroDivisionError()))
    outcome = invoke(tool, "x")
    assert not outcome.ok
    assert outcome.text == "ZeroDivisionError"


def test_invoke_rejects_non_text_output():
    tool = FunctionTool("numeric", "returns an int", lambda s: 42)
    outcome = invoke(tool, "x")
    assert not outcome.ok
    assert "int" in outcome.text


def test_unregistered_outcome_observation():
    assert ToolOutcome.unregistered("ghost").observation == "Erro: tool 'ghost' não registrada."

# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------

def test_tool_is_abstract():
    with pytest.raises(TypeError):
        Tool()


def test_function_tool_passes_input_verbatim():
    fn = MagicMock(return_value="done")
    tool = FunctionTool("spy", "records input", fn)
    assert tool.run("  raw input ") == "done"
    fn.assert_called_once_with("  raw input ")


def test_default_tools_are_fresh_instances():
    first, second = default_tools(), default_tools()
    assert [t.name for t in first] == ["calculator", "dictionary"]
    assert first[0] is not second[0]
