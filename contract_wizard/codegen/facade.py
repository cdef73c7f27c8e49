"""Single entry point the wizard UI talks to.

``GeneratorFacade`` selects a scaffold (or, for catalog-sourced contracts,
the :class:`RenameGenerator`) by contract trait, prefixes an author/license
banner, and derives code lenses and invocation commands for the result.

Unknown traits never raise: the body, lens list and invoke command all come
back empty so the caller can show "nothing to preview yet".
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from contract_wizard.analyzer.lenses import CommandFactory, build_code_lenses
from contract_wizard.analyzer.models import CodeLens

from .invoke import DEFAULT_CLI_TOOL, DEFAULT_CONTRACT_ID
from .rename import RenameGenerator
from .scaffold import DEFAULT_CONTRACT_NAME, SCAFFOLDS, ScaffoldGenerator
from .templates import TemplateRenderer


@dataclass
class GeneratedSource:
    """Header banner plus contract body, joined by one blank line."""

    header: str
    body: str

    @property
    def text(self) -> str:
        return f"{self.header}\n{self.body}"

    @property
    def body_line_offset(self) -> int:
        """Number of lines in :attr:`text` that precede the body."""
        return self.header.count("\n") + 1


class GeneratorFacade:
    """Generates the wizard's contract preview from its current inputs.

    Only the inputs (author, license, trait, name, reference sources) live on
    the instance; all derived text is recomputed on every call.
    """

    def __init__(
        self,
        author: str = "",
        license: str = "",
        trait: str = "",
        name: str = DEFAULT_CONTRACT_NAME,
        reference_sources: Mapping[str, str | None] | None = None,
        *,
        cli_tool: str = DEFAULT_CLI_TOOL,
        contract_id: str = DEFAULT_CONTRACT_ID,
    ) -> None:
        self.author = author
        self.license = license
        self.trait = trait
        self.name = name
        self.reference_sources: dict[str, str | None] = dict(reference_sources or {})
        self.renderer = TemplateRenderer()
        self.renamer = RenameGenerator()
        self._generators: dict[str, ScaffoldGenerator] = {
            trait_name: gen_cls(self.renderer, cli_tool=cli_tool, contract_id=contract_id)
            for trait_name, gen_cls in SCAFFOLDS.items()
        }

    # -- Registry ----------------------------------------------------------

    def available_traits(self) -> list[str]:
        """Scaffold traits in registration order."""
        return list(self._generators)

    def generator_for(self, trait: str) -> ScaffoldGenerator | None:
        return self._generators.get(trait)

    def default_params(self, trait: str) -> list[Any]:
        """Initial values of the trait's parameter form (``[]`` if unknown)."""
        generator = self._generators.get(trait)
        return list(generator.default_params) if generator else []

    def set_reference_source(self, trait: str, source: str | None) -> None:
        """Register (or clear, with ``None``) the fetched reference for *trait*."""
        self.reference_sources[trait] = source

    # -- Generation --------------------------------------------------------

    @staticmethod
    def generate_header(author: str, license: str) -> str:
        """Return ``// author:`` and ``// license:`` lines for non-empty values."""
        header = ""
        if author:
            header += f"// author: {author}\n"
        if license:
            header += f"// license: {license}\n"
        return header

    def generate_body(self, trait: str, name: str) -> str:
        """Render the contract body for *trait*, or ``""`` if it is unknown."""
        generator = self._generators.get(trait)
        if generator is not None:
            return generator.generate(name)
        if trait in self.reference_sources:
            return self.renamer.rename(self.reference_sources[trait], name)
        return ""

    def generate(self) -> GeneratedSource:
        return GeneratedSource(
            header=self.generate_header(self.author, self.license),
            body=self.generate_body(self.trait, self.name),
        )

    def get_code(self) -> str:
        """The exact text shown in the editor and submitted for builds."""
        return self.generate().text

    # -- Derived affordances -----------------------------------------------

    def get_invokes(self, trait: str, command_factory: CommandFactory) -> list[CodeLens]:
        """Code lenses for *trait*, anchored to lines of :meth:`get_code`."""
        offset = self.generate().body_line_offset
        generator = self._generators.get(trait)
        if generator is not None:
            return generator.get_invokes(command_factory, self.name, line_offset=offset)
        if trait in self.reference_sources:
            body = self.generate_body(trait, self.name)
            return [
                lens.model_copy(update={"line_number": lens.line_number + offset})
                for lens in build_code_lenses(body, command_factory)
            ]
        return []

    def build_invoke_command(
        self, trait: str, name: str, params: Sequence[Any]
    ) -> str:
        """Initializer invocation for *trait*, or ``""`` if it is unknown."""
        generator = self._generators.get(trait)
        if generator is None:
            return ""
        return generator.build_invoke_command(name, params)
