"""Template scaffolds, one generator per contract type.

Each generator renders a complete, self-contained Soroban contract from a
Jinja2 template: the contract type declaration, its ``#[contractimpl]``
block, an ``Error`` enumeration specific to the contract type, and whatever
auxiliary types it needs.  Generators hold no derived state; every call
renders from scratch.

The symbol name is not validated.  A name that is not a valid Rust
identifier produces deterministic but uncompilable output.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, ClassVar

from contract_wizard.analyzer.lenses import CommandFactory, build_code_lenses
from contract_wizard.analyzer.models import CodeLens, InvokeCommand

from .invoke import DEFAULT_CLI_TOOL, DEFAULT_CONTRACT_ID, format_invoke_command
from .templates import TemplateRenderer

DEFAULT_CONTRACT_NAME = "MyContract"


# ---------------------------------------------------------------------------
# Base generator
# ---------------------------------------------------------------------------


class ScaffoldGenerator:
    """Renders one contract type and its initializer invocation.

    Subclasses set the class attributes below; the rendering logic is shared.
    """

    trait: ClassVar[str] = ""
    template: ClassVar[str] = ""
    init_method: ClassVar[str] = "init"
    # Initializer parameters after ``env``, in declaration order.
    init_flags: ClassVar[tuple[str, ...]] = ()
    # Values the parameter form starts with.
    default_params: ClassVar[tuple[Any, ...]] = ()
    # Whether the crate manifest needs the ``rand`` dependency.
    needs_rand: ClassVar[bool] = False

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        *,
        cli_tool: str = DEFAULT_CLI_TOOL,
        contract_id: str = DEFAULT_CONTRACT_ID,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.cli_tool = cli_tool
        self.contract_id = contract_id

    def generate(self, contract_name: str) -> str:
        """Return the full contract source with *contract_name* substituted."""
        return self.renderer.render_contract(self.template, contract_name)

    def build_invoke_command(self, contract_name: str, init_params: Sequence[Any]) -> str:
        """Return the CLI call of the initializer with *init_params* in flag order.

        The parameter count is not checked: missing values render as empty
        flags and surplus values are ignored.
        """
        flags = [
            (flag, init_params[index] if index < len(init_params) else "")
            for index, flag in enumerate(self.init_flags)
        ]
        invoke = InvokeCommand(
            method=self.init_method,
            flags=[(name, str(value)) for name, value in flags],
        )
        return format_invoke_command(
            contract_name,
            invoke.method,
            invoke.format_params(),
            cli_tool=self.cli_tool,
            contract_id=self.contract_id,
        )

    def get_invokes(
        self,
        command_factory: CommandFactory,
        contract_name: str = DEFAULT_CONTRACT_NAME,
        *,
        line_offset: int = 0,
    ) -> list[CodeLens]:
        """Return code lenses for the generated source.

        *line_offset* shifts every anchor, for callers that prepend a header
        to the body before showing it.
        """
        lenses = build_code_lenses(self.generate(contract_name), command_factory)
        if line_offset:
            lenses = [
                lens.model_copy(update={"line_number": lens.line_number + line_offset})
                for lens in lenses
            ]
        return lenses

    def render_manifest(self, contract_name: str, sdk_version: str = "20.0.0") -> str:
        """Return a ``Cargo.toml`` for a crate holding this contract."""
        return self.renderer.render(
            "cargo.toml.j2",
            {
                "package_name": contract_name,
                "sdk_version": sdk_version,
                "needs_rand": self.needs_rand,
            },
        )


# ---------------------------------------------------------------------------
# Contract types
# ---------------------------------------------------------------------------


class RaffleGenerator(ScaffoldGenerator):
    """Ticket raffle paying a token pot out to randomly drawn winners."""

    trait = "Raffle"
    template = "raffle.rs.j2"
    init_flags = ("admin", "token", "max_winners_count", "ticket_price")
    default_params = ("", "", 1, 1)
    needs_rand = True


class VotingGenerator(ScaffoldGenerator):
    """Admin-created proposals with time-boxed, one-vote-per-address voting."""

    trait = "Voting"
    template = "voting.rs.j2"
    init_flags = ("admin", "voting_period_secs", "target_approval_rate_bps", "total_voters")
    default_params = ("", 3600, 5000, 2)


class PaymentSplitterGenerator(ScaffoldGenerator):
    """Splits token payments evenly between fixed stakeholders."""

    trait = "PaymentSplitter"
    template = "payment_splitter.rs.j2"
    init_flags = ("admin", "token", "stakeholders")
    default_params = ("", "", "")


# Registration order is the order the UI lists them in.
SCAFFOLDS: dict[str, type[ScaffoldGenerator]] = {
    gen.trait: gen
    for gen in (RaffleGenerator, VotingGenerator, PaymentSplitterGenerator)
}
