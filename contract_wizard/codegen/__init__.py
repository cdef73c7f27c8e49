"""Contract source generation.

Renders complete Soroban contracts from Jinja2 scaffolds, renames fetched
reference contracts, and formats CLI invocation commands.

Quick usage::

    from contract_wizard.codegen import GeneratorFacade

    facade = GeneratorFacade(author="eigerco", trait="Voting", name="MyVote")
    print(facade.get_code())
    print(facade.build_invoke_command("Voting", "MyVote", ["GABC", 3600, 5000, 2]))
"""

from contract_wizard.codegen.facade import GeneratedSource, GeneratorFacade
from contract_wizard.codegen.invoke import format_invoke_command
from contract_wizard.codegen.rename import RenameGenerator
from contract_wizard.codegen.scaffold import (
    SCAFFOLDS,
    PaymentSplitterGenerator,
    RaffleGenerator,
    ScaffoldGenerator,
    VotingGenerator,
)
from contract_wizard.codegen.templates import TemplateRenderer

__all__ = [
    "GeneratedSource",
    "GeneratorFacade",
    "format_invoke_command",
    "RenameGenerator",
    "SCAFFOLDS",
    "PaymentSplitterGenerator",
    "RaffleGenerator",
    "ScaffoldGenerator",
    "VotingGenerator",
    "TemplateRenderer",
]
