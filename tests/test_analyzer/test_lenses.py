"""Tests for code-lens assembly (contract_wizard.analyzer.lenses)."""

from __future__ import annotations

import pytest

from contract_wizard.analyzer.lenses import build_code_lenses, invoke_command_for
from contract_wizard.analyzer.models import (
    ContractSignature,
    InvokeCommand,
    LensKind,
    Parameter,
)

pytestmark = pytest.mark.unit


def _record(method: str, params: str) -> tuple[str, str]:
    return (method, params)


class TestInvokeCommandFor:
    def test_env_parameter_is_dropped(self):
        signature = ContractSignature(
            name="transfer",
            parameters=[
                Parameter(name="env", declared_type="Env"),
                Parameter(name="admin", declared_type="Address"),
                Parameter(name="amount", declared_type="i128"),
            ],
            return_type="u32",
            line_number=3,
        )
        invoke = invoke_command_for(signature)
        assert invoke.method == "transfer"
        assert invoke.flags == [("admin", "{admin_address}"), ("amount", "1")]

    def test_format_params_joins_with_continuations(self):
        invoke = InvokeCommand(method="m", flags=[("admin", "{admin_address}"), ("amount", "1")])
        assert invoke.format_params() == "--admin {admin_address} \\\n    --amount 1"

    def test_env_only_gives_no_flags(self):
        signature = ContractSignature(
            name="ping",
            parameters=[Parameter(name="env", declared_type="Env")],
            line_number=1,
        )
        invoke = invoke_command_for(signature)
        assert invoke.flags == []
        assert invoke.format_params() == ""


class TestBuildCodeLenses:
    def test_order_is_deploy_invoke_subscribe(self, token_contract_source: str):
        lenses = build_code_lenses(token_contract_source, _record)
        assert [lens.kind for lens in lenses] == [
            LensKind.DEPLOY,
            LensKind.INVOKE,
            LensKind.INVOKE,
            LensKind.SUBSCRIBE,
        ]
        assert [lens.line_number for lens in lenses] == [4, 9, 14, 10]

    def test_labels(self, token_contract_source: str):
        labels = [lens.label for lens in build_code_lenses(token_contract_source, _record)]
        assert labels == ["🚀 Deploy", "▶ Invoke", "▶ Invoke", "🔔 Subscribe"]

    def test_command_is_factory_result(self, token_contract_source: str):
        lenses = build_code_lenses(token_contract_source, _record)
        assert lenses[0].command == ("Deploy", "")
        assert lenses[1].command == ("mint", "--to {to_address} \\\n    --amount 1")
        assert lenses[2].command == ("balance", "--id {id_address}")
        assert lenses[3].command == ("Subscribe", "")

    def test_factory_called_once_per_lens(self, token_contract_source: str):
        calls: list[tuple[str, str]] = []

        def factory(method: str, params: str) -> int:
            calls.append((method, params))
            return len(calls)

        lenses = build_code_lenses(token_contract_source, factory)
        assert len(calls) == len(lenses)
        assert [lens.command for lens in lenses] == [1, 2, 3, 4]

    def test_empty_source(self):
        assert build_code_lenses("", _record) == []

    def test_no_contract_marker_means_no_deploy(self):
        text = "#[contractimpl]\nimpl A {\n    pub fn a(env: Env) -> u32 {\n}"
        lenses = build_code_lenses(text, _record)
        assert [lens.kind for lens in lenses] == [LensKind.INVOKE]
