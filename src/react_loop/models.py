# models.py
# Data contracts for the ReACT agent loop.
# No business logic lives here: pure schema and rendering of observations.

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Who produced a transcript entry."""

    USER = "user"
    TOOL = "tool"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """One transcript entry. Immutable once appended."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    at: datetime = Field(..., description="UTC timestamp. Audit only, never control flow.")


class Action(BaseModel):
    """A planner's request to invoke a named tool."""

    model_config = ConfigDict(frozen=True)

    tool_name: str = Field(..., description="Registry key, not guaranteed to be registered.")
    input: str = Field(default="", description="Opaque payload passed to the tool verbatim.")


class StepResult(BaseModel):
    """Record of one loop iteration that produced an action."""

    model_config = ConfigDict(frozen=True)

    action: Action
    observation: str
    ok: bool = Field(default=True, description="False for unregistered tools and tool failures.")


class ToolOutcome(BaseModel):
    """Tagged success/failure result of executing (or failing to find) a tool."""

    model_config = ConfigDict(frozen=True)

    tool: str
    ok: bool
    text: str = Field(..., description="Tool output on success, diagnostic on failure.")
    registered: bool = True

    @classmethod
    def success(cls, tool: str, output: str) -> "ToolOutcome":
        return cls(tool=tool, ok=True, text=output)

    @classmethod
    def failure(cls, tool: str, diagnostic: str) -> "ToolOutcome":
        return cls(tool=tool, ok=False, text=diagnostic)

    @classmethod
    def unregistered(cls, tool: str) -> "ToolOutcome":
        return cls(tool=tool, ok=False, text="não registrada", registered=False)

    @property
    def observation(self) -> str:
        """Text recorded in the transcript for this outcome."""
        if not self.registered:
            return f"Erro: tool '{self.tool}' não registrada."
        if self.ok:
            return f"{self.tool} → {self.text}"
        return f"{self.tool} → erro: {self.text}"
