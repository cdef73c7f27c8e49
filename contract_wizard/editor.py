"""Editor integration: keeps one file's code lenses in step with its text.

An ``EditorSession`` binds a :class:`ProjectModel` file to a command factory.
On mount and on every content change it reanalyses the file and swaps in a
new :class:`LensSet`, disposing the previous one first, so at most one set
is ever live per session.

Everything a lens callback needs is captured up front in a frozen
:class:`LensContext`; callbacks never reach back into the session.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from contract_wizard.analyzer.lenses import build_code_lenses
from contract_wizard.analyzer.models import CodeLens, LensCommand
from contract_wizard.analyzer.source import find_contract_name
from contract_wizard.codegen.invoke import (
    DEFAULT_CLI_TOOL,
    DEFAULT_CONTRACT_ID,
    format_invoke_command,
)
from contract_wizard.project import ProjectModel, language_for

LensCallback = Callable[["LensContext", LensCommand], Any]


@dataclass(frozen=True)
class LensContext:
    """What a lens callback may use, fixed when the lenses were built."""

    model: ProjectModel
    file_id: int
    contract_name: str
    cli_tool: str = DEFAULT_CLI_TOOL
    contract_id: str = DEFAULT_CONTRACT_ID

    def invoke_command_for(self, payload: LensCommand) -> str:
        """The CLI command an *Invoke* lens with *payload* stands for."""
        return format_invoke_command(
            self.contract_name,
            payload.method,
            payload.params,
            cli_tool=self.cli_tool,
            contract_id=self.contract_id,
        )


@dataclass(frozen=True)
class LensAction:
    """Activation target of one lens: callback, context and payload."""

    callback: LensCallback
    context: LensContext
    payload: LensCommand

    def __call__(self) -> Any:
        return self.callback(self.context, self.payload)


@dataclass(frozen=True)
class ActionFactory:
    """Command factory handing out :class:`LensAction`s for one context."""

    context: LensContext
    callback: LensCallback

    def __call__(self, method: str, params: str) -> LensAction:
        return LensAction(self.callback, self.context, LensCommand(method=method, params=params))


@dataclass
class LensSet:
    """The lenses installed for one analysis pass."""

    lenses: list[CodeLens] = field(default_factory=list)
    disposed: bool = False

    def dispose(self) -> None:
        self.disposed = True
        self.lenses = []


class EditorSession:
    """Live lens bookkeeping for one file of a project."""

    def __init__(
        self,
        model: ProjectModel,
        file_id: int,
        callback: LensCallback,
        *,
        contract_name: str = "",
        cli_tool: str = DEFAULT_CLI_TOOL,
        contract_id: str = DEFAULT_CONTRACT_ID,
    ) -> None:
        self.model = model
        self.file_id = file_id
        self.callback = callback
        self.contract_name = contract_name
        self.cli_tool = cli_tool
        self.contract_id = contract_id
        self.active: LensSet | None = None

    def language(self) -> str | None:
        return language_for(self.model.get_file_name(self.file_id))

    def mount(self) -> LensSet:
        """Build the initial lens set."""
        return self._refresh()

    def on_change(self, text: str | None) -> LensSet:
        """Store *text* through the model, then rebuild the lens set."""
        if text is not None:
            self.model.update_file_content(self.file_id, text)
        return self._refresh()

    def dispose(self) -> None:
        if self.active is not None:
            self.active.dispose()
            self.active = None

    def _refresh(self) -> LensSet:
        self.dispose()
        text = self.model.get_file_content(self.file_id) or ""
        context = LensContext(
            model=self.model,
            file_id=self.file_id,
            contract_name=self.contract_name or find_contract_name(text) or "",
            cli_tool=self.cli_tool,
            contract_id=self.contract_id,
        )
        self.active = LensSet(
            lenses=build_code_lenses(text, ActionFactory(context, self.callback))
        )
        return self.active
