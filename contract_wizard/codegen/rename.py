"""Renaming of externally supplied reference contracts.

The catalog serves complete contracts whose type is named after the sample
(``ProposalVotingContract``, ``RaffleContract``, ...).  ``RenameGenerator``
rewrites the two places the wizard cares about:

* the ``pub struct`` identifier following ``#[contract]``
* the ``impl ... {`` header following ``#[contractimpl]``; everything between
  ``impl`` and the brace is replaced, so ``impl Trait for Old {`` becomes
  ``impl New {``

Both rewrites are independent and best-effort.  A missing marker leaves its
region untouched; nothing here raises.
"""

from __future__ import annotations

import re

from contract_wizard.analyzer.source import CONTRACT_IMPL_MARKER, CONTRACT_MARKER

_STRUCT_KEYWORD = "pub struct "
_IMPL_KEYWORD = "impl "

_IDENT_RE = re.compile(r"[ \t]*\w*")


class RenameGenerator:
    """Stateless rename of a reference contract's declaration and impl block."""

    def rename(self, reference_source: str | None, contract_name: str) -> str:
        """Return *reference_source* with its contract type renamed.

        ``None`` means the reference has not been fetched yet and yields ``""``.
        """
        if reference_source is None:
            return ""
        code = _rename_declaration(reference_source, contract_name)
        return _rename_impl_header(code, contract_name)


def _rename_declaration(code: str, contract_name: str) -> str:
    marker_idx = code.find(CONTRACT_MARKER)
    if marker_idx == -1:
        return code
    struct_idx = code.find(_STRUCT_KEYWORD, marker_idx)
    if struct_idx == -1:
        return code

    start = struct_idx + len(_STRUCT_KEYWORD)
    end_of_line = code.find("\n", start)
    if end_of_line == -1:
        end_of_line = len(code)
    # Only the identifier is replaced; a trailing ';' or '{' survives.
    ident = _IDENT_RE.match(code, start, end_of_line)
    ident_end = ident.end() if ident else start
    return code[:start] + contract_name + code[ident_end:]


def _rename_impl_header(code: str, contract_name: str) -> str:
    marker_idx = code.find(CONTRACT_IMPL_MARKER)
    if marker_idx == -1:
        return code
    impl_idx = code.find(_IMPL_KEYWORD, marker_idx + len(CONTRACT_IMPL_MARKER))
    if impl_idx == -1:
        return code
    brace_idx = code.find("{", impl_idx)
    if brace_idx == -1:
        return code

    start = impl_idx + len(_IMPL_KEYWORD)
    return code[:start] + contract_name + " " + code[brace_idx:]
