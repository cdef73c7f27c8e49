"""Line-oriented scanning of Soroban contract source.

This is deliberately not a parser.  Each operation is a single linear pass
over ``text.split("\\n")`` looking for fixed markers of the scaffold dialect:

* ``#[contract]`` -- the contract type declaration
* ``#[contractimpl]`` -- the method implementation block
* ``env.events()`` -- an event publication

Known blind spots: signatures spread over several lines, return types with
nested generics (``Result<Vec<u32>, Error>``), and comments that contain
marker text.  Unrecognised shapes produce empty or partial results; nothing
here raises.
"""

from __future__ import annotations

import re

from .models import SUBSCRIBE_LABEL, ContractSignature, EventSite, Parameter


CONTRACT_MARKER = "#[contract]"
CONTRACT_IMPL_MARKER = "#[contractimpl]"
EVENT_MARKER = "env.events()"

_FN_PREFIXES = ("pub fn ", "fn ")

# fn name(params) -> Type<Generics> {
_SIGNATURE_RE = re.compile(
    r"fn\s+(\w+)\s*\(([^)]*)\)\s*->\s*(\w+(?:\s*<([^>]*)>)?)\s*\{"
)
_STRUCT_RE = re.compile(r"pub struct\s+(\w+)")


def find_contract_declaration_line(text: str) -> int:
    """Return the 1-based line of the first ``#[contract]`` marker, or ``-1``."""
    for index, line in enumerate(text.split("\n")):
        if line.strip().startswith(CONTRACT_MARKER):
            return index + 1
    return -1


def find_contract_name(text: str) -> str | None:
    """Identifier of the first ``pub struct`` after the ``#[contract]`` marker."""
    marker_idx = text.find(CONTRACT_MARKER)
    if marker_idx == -1:
        return None
    match = _STRUCT_RE.search(text, marker_idx)
    return match.group(1) if match else None


def extract_callable_signatures(text: str) -> list[ContractSignature]:
    """Recover single-line entry point signatures of the first impl block.

    The scan enters the block on a line starting with ``#[contractimpl]`` and
    stops at the first ``}`` in column 0 after that.  ``fn`` lines that do
    not match the signature pattern are skipped.
    """
    signatures: list[ContractSignature] = []
    inside_impl = False

    for index, line in enumerate(text.split("\n")):
        trimmed = line.strip()

        if trimmed.startswith(CONTRACT_IMPL_MARKER):
            inside_impl = True
        elif inside_impl and trimmed.startswith(_FN_PREFIXES):
            signature = _match_signature(trimmed, index + 1)
            if signature is not None:
                signatures.append(signature)
        elif inside_impl and line.startswith("}"):
            break

    return signatures


def find_event_sites(text: str) -> list[EventSite]:
    """Return one :class:`EventSite` per line starting with ``env.events()``."""
    events: list[EventSite] = []
    for index, line in enumerate(text.split("\n")):
        if line.strip().startswith(EVENT_MARKER):
            events.append(
                EventSite(
                    line_number=index + 1,
                    label=SUBSCRIBE_LABEL,
                    leading_indent=len(line) - len(line.lstrip()),
                )
            )
    return events


def default_for(param_name: str, declared_type: str) -> str:
    """Placeholder CLI value for a parameter of *declared_type*.

    ``Address`` becomes ``{<name>_address}``, the integer families
    (``u32``, ``i128``, ...) become ``1``, anything else is left empty.
    """
    if declared_type == "Address":
        return f"{{{param_name}_address}}"
    if declared_type.startswith(("u", "i")):
        return "1"
    return ""


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _match_signature(trimmed: str, line_number: int) -> ContractSignature | None:
    match = _SIGNATURE_RE.search(trimmed)
    if match is None:
        return None

    name, raw_params, return_type, raw_generics = match.groups()
    generics = (
        [g.strip() for g in raw_generics.split(",")]
        if raw_generics is not None
        else []
    )
    return ContractSignature(
        name=name,
        parameters=_split_parameters(raw_params),
        return_type=return_type,
        return_type_generics=generics,
        line_number=line_number,
    )


def _split_parameters(raw: str) -> list[Parameter]:
    """Split ``"env: Env, to: Address"`` into ordered parameters.

    A repeated name keeps its first position and takes the last type seen.
    """
    by_name: dict[str, str] = {}
    for entry in raw.split(","):
        name, _, declared_type = entry.partition(":")
        name = name.strip()
        if not name:
            continue
        by_name[name] = declared_type.strip()
    return [Parameter(name=n, declared_type=t) for n, t in by_name.items()]
