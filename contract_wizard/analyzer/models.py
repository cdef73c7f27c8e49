"""Pydantic v2 models for the contract source analyzer.

Everything here is recomputed from scratch on every analysis pass and never
persisted: recovered entry points, event-publication sites, and the code-lens
descriptors assembled from them.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class LensKind(str, Enum):
    """The affordance a code lens offers."""
    DEPLOY = "deploy"
    INVOKE = "invoke"
    SUBSCRIBE = "subscribe"


DEPLOY_LABEL = "🚀 Deploy"
INVOKE_LABEL = "▶ Invoke"
SUBSCRIBE_LABEL = "🔔 Subscribe"

PARAM_SEPARATOR = " \\\n    "


# ---------------------------------------------------------------------------
# Signatures & events
# ---------------------------------------------------------------------------

class Parameter(BaseModel):
    """One ``name: Type`` entry of a parameter list."""
    name: str = Field(..., description="Parameter name, trimmed")
    declared_type: str = Field(default="", description="Declared type, trimmed; empty when absent")


class ContractSignature(BaseModel):
    """A callable entry point recovered from a ``#[contractimpl]`` block."""
    name: str = Field(..., min_length=1, description="Function name")
    parameters: list[Parameter] = Field(
        default_factory=list, description="Parameters in source order"
    )
    return_type: str = Field(default="", description="Return type including generics")
    return_type_generics: list[str] = Field(
        default_factory=list, description="Generic arguments of the return type"
    )
    line_number: int = Field(..., ge=1, description="1-based line of the signature")

    def parameter_types(self) -> dict[str, str]:
        """Return a ``{name: declared_type}`` mapping in source order."""
        return {p.name: p.declared_type for p in self.parameters}


class EventSite(BaseModel):
    """A line that publishes a contract event."""
    line_number: int = Field(..., ge=1)
    label: str = Field(default=SUBSCRIBE_LABEL)
    leading_indent: int = Field(default=0, ge=0, description="Leading whitespace characters")


# ---------------------------------------------------------------------------
# Code lenses
# ---------------------------------------------------------------------------

class LensCommand(BaseModel):
    """Payload handed to the command factory when a lens is built."""
    method: str = Field(..., description="Entry point name, or 'Deploy'")
    params: str = Field(default="", description="Formatted ``--flag value`` lines")


class CodeLens(BaseModel):
    """An anchored, clickable action descriptor."""
    line_number: int = Field(..., ge=1)
    label: str
    kind: LensKind
    payload: LensCommand
    command: Any = Field(default=None, description="Opaque token returned by the command factory")


class InvokeCommand(BaseModel):
    """A CLI invocation of one entry point, as ordered flag/value pairs."""
    method: str
    flags: list[tuple[str, str]] = Field(default_factory=list)

    def format_params(self) -> str:
        """Render ``--name value`` pairs joined by line continuations."""
        return PARAM_SEPARATOR.join(f"--{name} {value}" for name, value in self.flags)
