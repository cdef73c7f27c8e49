"""Invocation command formatting.

Every "invoke" affordance ends up as the same backslash-continued shell
command::

    soroban contract invoke \\
    --wasm MyContract.wasm \\
    --id 1 \\
    -- \\
    init \\
        --admin GABC... \\
        --total_voters 2

The last line never carries a continuation backslash.
"""

from __future__ import annotations

from contract_wizard.analyzer.models import PARAM_SEPARATOR

DEFAULT_CLI_TOOL = "soroban"
DEFAULT_CONTRACT_ID = "1"


def format_invoke_command(
    contract_name: str,
    method: str,
    params: str = "",
    *,
    cli_tool: str = DEFAULT_CLI_TOOL,
    contract_id: str = DEFAULT_CONTRACT_ID,
) -> str:
    """Return the full CLI invocation of *method* on *contract_name*.

    Args:
        contract_name: Contract symbol; names the ``.wasm`` artifact.
        method: Entry point to call.
        params: Pre-formatted flag lines (see :meth:`InvokeCommand.format_params`).
        cli_tool: Executable name.
        contract_id: Value passed to ``--id``.
    """
    lines = [
        f"{cli_tool} contract invoke",
        f"--wasm {contract_name}.wasm",
        f"--id {contract_id}",
        "--",
        method,
    ]
    command = " \\\n".join(lines)
    if params:
        command += PARAM_SEPARATOR + params
    return command
