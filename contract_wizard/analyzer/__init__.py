"""Contract source analyzer.

Recovers declaration lines, entry point signatures and event sites from
contract source text, and assembles code-lens descriptors from them.

Usage::

    from contract_wizard.analyzer import extract_callable_signatures, build_code_lenses

    for sig in extract_callable_signatures(source):
        print(sig.line_number, sig.name, sig.parameter_types())

    lenses = build_code_lenses(source, lambda method, params: (method, params))
"""

from contract_wizard.analyzer.lenses import build_code_lenses, invoke_command_for
from contract_wizard.analyzer.models import (
    CodeLens,
    ContractSignature,
    EventSite,
    InvokeCommand,
    LensCommand,
    LensKind,
    Parameter,
)
from contract_wizard.analyzer.source import (
    default_for,
    extract_callable_signatures,
    find_contract_declaration_line,
    find_contract_name,
    find_event_sites,
)

__all__ = [
    "build_code_lenses",
    "invoke_command_for",
    "default_for",
    "extract_callable_signatures",
    "find_contract_declaration_line",
    "find_contract_name",
    "find_event_sites",
    "CodeLens",
    "ContractSignature",
    "EventSite",
    "InvokeCommand",
    "LensCommand",
    "LensKind",
    "Parameter",
]
