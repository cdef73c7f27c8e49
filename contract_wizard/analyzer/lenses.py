"""Code-lens assembly from analyzed contract source.

Turns the three scanning passes of :mod:`contract_wizard.analyzer.source`
into an ordered list of :class:`CodeLens` descriptors: one *Deploy* lens on
the ``#[contract]`` line, one *Invoke* lens per recovered entry point, and
one *Subscribe* lens per event site.

Activating a lens is the caller's business.  Each lens carries whatever
token the caller's *command_factory* returned for its payload.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .models import (
    DEPLOY_LABEL,
    INVOKE_LABEL,
    CodeLens,
    ContractSignature,
    InvokeCommand,
    LensCommand,
    LensKind,
)
from .source import (
    default_for,
    extract_callable_signatures,
    find_contract_declaration_line,
    find_event_sites,
)

CommandFactory = Callable[[str, str], Any]

DEPLOY_METHOD = "Deploy"
SUBSCRIBE_METHOD = "Subscribe"


def invoke_command_for(signature: ContractSignature) -> InvokeCommand:
    """Build default ``--flag value`` pairs for *signature*.

    The first parameter is the implicit ``Env`` and is omitted.
    """
    flags = [
        (param.name, default_for(param.name, param.declared_type))
        for param in signature.parameters[1:]
    ]
    return InvokeCommand(method=signature.name, flags=flags)


def build_code_lenses(text: str, command_factory: CommandFactory) -> list[CodeLens]:
    """Return the Deploy / Invoke / Subscribe lenses for *text*, in that order."""
    lenses: list[CodeLens] = []

    contract_line = find_contract_declaration_line(text)
    if contract_line != -1:
        payload = LensCommand(method=DEPLOY_METHOD)
        lenses.append(
            CodeLens(
                line_number=contract_line,
                label=DEPLOY_LABEL,
                kind=LensKind.DEPLOY,
                payload=payload,
                command=command_factory(payload.method, payload.params),
            )
        )

    for signature in extract_callable_signatures(text):
        invoke = invoke_command_for(signature)
        payload = LensCommand(method=invoke.method, params=invoke.format_params())
        lenses.append(
            CodeLens(
                line_number=signature.line_number,
                label=INVOKE_LABEL,
                kind=LensKind.INVOKE,
                payload=payload,
                command=command_factory(payload.method, payload.params),
            )
        )

    for event in find_event_sites(text):
        payload = LensCommand(method=SUBSCRIBE_METHOD)
        lenses.append(
            CodeLens(
                line_number=event.line_number,
                label=event.label,
                kind=LensKind.SUBSCRIBE,
                payload=payload,
                command=command_factory(payload.method, payload.params),
            )
        )

    return lenses
