"""Tests for the template scaffolds (contract_wizard.codegen.scaffold).

Covers:
- Rendering of each contract type with a caller-chosen symbol name
- Initializer invocation commands (defaults, missing and surplus values)
- Code lenses over the rendered source, with and without a line offset
- Crate manifests
"""

from __future__ import annotations

import pytest

from contract_wizard.analyzer.models import LensKind
from contract_wizard.codegen.scaffold import (
    SCAFFOLDS,
    PaymentSplitterGenerator,
    RaffleGenerator,
    ScaffoldGenerator,
    VotingGenerator,
)
from contract_wizard.codegen.templates import TemplateRenderer

pytestmark = pytest.mark.unit


def _record(method: str, params: str) -> tuple[str, str]:
    return (method, params)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_registration_order(self):
        assert list(SCAFFOLDS) == ["Raffle", "Voting", "PaymentSplitter"]

    def test_traits_match_classes(self):
        for trait, gen_cls in SCAFFOLDS.items():
            assert gen_cls.trait == trait

    def test_every_template_is_registered(self):
        templates = sorted(gen_cls.template for gen_cls in SCAFFOLDS.values())
        assert templates == TemplateRenderer().contract_templates()


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestGenerate:
    @pytest.mark.parametrize("gen_cls", list(SCAFFOLDS.values()))
    def test_name_is_substituted(self, gen_cls: type[ScaffoldGenerator]):
        source = gen_cls().generate("Custom")
        assert "#[contract]\npub struct Custom;" in source
        assert "#[contractimpl]\nimpl Custom {" in source
        assert source.count("Custom") == 2

    @pytest.mark.parametrize("gen_cls", list(SCAFFOLDS.values()))
    def test_output_is_deterministic(self, gen_cls: type[ScaffoldGenerator]):
        assert gen_cls().generate("A") == gen_cls().generate("A")

    def test_raffle_uses_rand(self):
        source = RaffleGenerator().generate("R")
        assert "use rand::rngs::SmallRng;" in source
        assert "fn calculate_winners(" in source

    def test_voting_contains_proposal(self):
        source = VotingGenerator().generate("V")
        assert "pub struct Proposal {" in source
        assert "fn create_custom_proposal(" in source

    def test_payment_splitter_error_enum(self):
        assert "NoStakeholders = 5," in PaymentSplitterGenerator().generate("P")


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------


class TestBuildInvokeCommand:
    def test_voting_defaults(self):
        generator = VotingGenerator()
        command = generator.build_invoke_command("MyVote", ["GABC", 3600, 5000, 2])
        assert command == (
            "soroban contract invoke \\\n"
            "--wasm MyVote.wasm \\\n"
            "--id 1 \\\n"
            "-- \\\n"
            "init \\\n"
            "    --admin GABC \\\n"
            "    --voting_period_secs 3600 \\\n"
            "    --target_approval_rate_bps 5000 \\\n"
            "    --total_voters 2"
        )

    def test_missing_values_render_empty(self):
        command = RaffleGenerator().build_invoke_command("R", ["GABC"])
        assert command.endswith(
            "    --admin GABC \\\n"
            "    --token  \\\n"
            "    --max_winners_count  \\\n"
            "    --ticket_price "
        )

    def test_surplus_values_are_ignored(self):
        command = PaymentSplitterGenerator().build_invoke_command("P", ["a", "b", "c", "d"])
        assert command.endswith("--stakeholders c")
        assert " d" not in command.split("--stakeholders")[1]

    def test_custom_cli_tool_and_id(self):
        generator = VotingGenerator(cli_tool="stellar", contract_id="CABC")
        command = generator.build_invoke_command("V", [])
        assert command.startswith("stellar contract invoke \\\n--wasm V.wasm \\\n--id CABC \\\n")

    def test_defaults_match_flags(self):
        for gen_cls in SCAFFOLDS.values():
            assert len(gen_cls.default_params) == len(gen_cls.init_flags)


# ---------------------------------------------------------------------------
# Lenses
# ---------------------------------------------------------------------------


class TestGetInvokes:
    def test_raffle_lenses(self):
        lenses = RaffleGenerator().get_invokes(_record, "MyRaffle")
        assert [lens.kind for lens in lenses] == [
            LensKind.DEPLOY,
            LensKind.INVOKE,
            LensKind.INVOKE,
            LensKind.INVOKE,
            LensKind.SUBSCRIBE,
        ]
        assert [lens.payload.method for lens in lenses[1:4]] == [
            "init",
            "buy_ticket",
            "play_raffle",
        ]

    def test_raffle_init_params(self):
        init = RaffleGenerator().get_invokes(_record)[1]
        assert init.payload.params == (
            "--admin {admin_address} \\\n"
            "    --token {token_address} \\\n"
            "    --max_winners_count 1 \\\n"
            "    --ticket_price 1"
        )

    def test_lens_lines_point_at_source(self):
        generator = VotingGenerator()
        lines = generator.generate("MyVote").split("\n")
        for lens in generator.get_invokes(_record, "MyVote"):
            line = lines[lens.line_number - 1].strip()
            if lens.kind is LensKind.DEPLOY:
                assert line == "#[contract]"
            elif lens.kind is LensKind.INVOKE:
                assert line.startswith(f"pub fn {lens.payload.method}(")
            else:
                assert line.startswith("env.events()")

    def test_line_offset(self):
        generator = PaymentSplitterGenerator()
        plain = generator.get_invokes(_record)
        shifted = generator.get_invokes(_record, line_offset=3)
        assert [l.line_number + 3 for l in plain] == [l.line_number for l in shifted]

    def test_stakeholders_have_no_default(self):
        init = PaymentSplitterGenerator().get_invokes(_record)[1]
        assert init.payload.params.endswith("--stakeholders ")


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------


class TestRenderManifest:
    def test_raffle_manifest_has_rand(self):
        assert "rand = {" in RaffleGenerator().render_manifest("MyRaffle")

    def test_voting_manifest_has_no_rand(self):
        manifest = VotingGenerator().render_manifest("MyVote", sdk_version="21.0.0")
        assert "rand = {" not in manifest
        assert 'soroban-sdk = "21.0.0"' in manifest
        assert 'name = "my_vote"' in manifest
