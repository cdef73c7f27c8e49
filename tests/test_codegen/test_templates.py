"""Tests for the Jinja2 template renderer (contract_wizard.codegen.templates)."""

from __future__ import annotations

from pathlib import Path

import jinja2
import pytest

from contract_wizard.codegen.templates import TemplateRenderer, _to_snake_case


pytestmark = pytest.mark.unit


class TestTemplateRenderer:
    def test_shipped_templates(self):
        renderer = TemplateRenderer()
        assert renderer.list_templates() == [
            "cargo.toml.j2",
            "payment_splitter.rs.j2",
            "raffle.rs.j2",
            "voting.rs.j2",
        ]

    def test_contract_templates_exclude_manifest(self):
        assert TemplateRenderer().contract_templates() == [
            "payment_splitter.rs.j2",
            "raffle.rs.j2",
            "voting.rs.j2",
        ]

    def test_render_contract(self):
        source = TemplateRenderer().render_contract("raffle.rs.j2", "Lucky")
        assert "pub struct Lucky;" in source

    def test_render_string(self):
        renderer = TemplateRenderer()
        assert renderer.render_string("pub struct {{ name }};", {"name": "A"}) == "pub struct A;"

    def test_undefined_variable_raises(self):
        renderer = TemplateRenderer()
        with pytest.raises(jinja2.UndefinedError):
            renderer.render("voting.rs.j2", {})

    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "hello.rs.j2").write_text("// {{ who }}\n", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path)
        assert renderer.list_templates() == ["hello.rs.j2"]
        assert renderer.render("hello.rs.j2", {"who": "me"}) == "// me\n"

    def test_missing_template_dir(self, tmp_path: Path):
        assert TemplateRenderer(tmp_path / "nope").list_templates() == []


class TestManifestTemplate:
    def _render(self, needs_rand: bool) -> str:
        return TemplateRenderer().render(
            "cargo.toml.j2",
            {"package_name": "MyVote", "sdk_version": "20.0.0", "needs_rand": needs_rand},
        )

    def test_package_name_is_snake_case(self):
        assert 'name = "my_vote"' in self._render(False)

    def test_sdk_version(self):
        manifest = self._render(False)
        assert 'soroban-sdk = "20.0.0"' in manifest
        assert 'features = ["testutils"]' in manifest

    def test_rand_dependency_is_optional(self):
        assert "rand = {" in self._render(True)
        assert "rand = {" not in self._render(False)


class TestSnakeCaseFilter:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("MyVote", "my_vote"),
            ("PaymentSplitter", "payment_splitter"),
            ("my-contract", "my_contract"),
            ("already_snake", "already_snake"),
        ],
    )
    def test_conversion(self, value: str, expected: str):
        assert _to_snake_case(value) == expected
