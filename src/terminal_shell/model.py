# src/terminal_shell/model.py (Shell Layer)
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class CommandDefinition(BaseModel):
    """
    Everything the shell knows about one registered command.

    `args` is the compact argument signature understood by the
    ParameterReader (e.g. "?s", "i*", "?sj").
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    definition: str = Field(description="One-line summary shown by 'help'.")
    callback: Callable[..., Any]
    detail: str = ""
    syntax: str = ""
    example: str = ""
    args: str = ""
    aliases: List[str] = Field(default_factory=list)
    sanitized: bool = True
    generators: bool = True
    validator: Optional[Callable[..., Any]] = None


class ParsedCommand(BaseModel):
    """The immutable result of parsing a raw command line against a definition."""
    model_config = ConfigDict(frozen=True)

    cmd: str
    raw_params: str = ""
    params: Tuple[Any, ...] = ()

    @property
    def command_text(self) -> str:
        return f"{self.cmd} {self.raw_params}".strip()


class JobStatus(str, Enum):
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Job(BaseModel):
    """A tracked, in-flight command invocation."""
    id: int
    parsed: ParsedCommand
    started_at: float
    healthy: bool = True
    status: JobStatus = JobStatus.RUNNING
    error: Optional[str] = None


class StylesheetLink(BaseModel):
    """A stylesheet link element injected into the host document head."""
    url: str
    rel: str = "stylesheet"
    type: str = "text/css"
