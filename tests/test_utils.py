"""Tests for shared helpers (contract_wizard.utils).

Covers:
- write_text / read_text
- Rich output helpers (print_summary_table, print_signature_table, etc.)
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from contract_wizard.analyzer.source import extract_callable_signatures, find_event_sites
from contract_wizard.utils import (
    WizardError,
    print_error,
    print_signature_table,
    print_source,
    print_success,
    print_summary_table,
    print_warning,
    read_text,
    write_text,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestWriteText:
    def test_creates_parents(self, tmp_path: Path):
        target = tmp_path / "crate" / "src" / "lib.rs"
        written = write_text(target, "// hi\n")
        assert written == target.resolve()
        assert target.read_text(encoding="utf-8") == "// hi\n"

    def test_overwrites(self, tmp_path: Path):
        target = tmp_path / "lib.rs"
        write_text(target, "a")
        write_text(target, "b")
        assert target.read_text(encoding="utf-8") == "b"


class TestReadText:
    def test_reads(self, tmp_path: Path):
        target = tmp_path / "lib.rs"
        target.write_text("#[contract]", encoding="utf-8")
        assert read_text(target) == "#[contract]"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(WizardError, match="No such file"):
            read_text(tmp_path / "missing.rs")

    def test_directory_is_rejected(self, tmp_path: Path):
        with pytest.raises(WizardError):
            read_text(tmp_path)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichHelpers:
    def test_print_summary_table(self):
        # Should not raise
        print_summary_table({"Trait": "Voting", "Name": "MyVote"}, title="Preview")

    def test_print_success(self):
        print_success("Wrote contract")

    def test_print_error(self):
        print_error("Something failed")

    def test_print_warning(self):
        print_warning("No entry points")

    def test_print_source(self):
        print_source("#[contract]\npub struct A;\n")

    def test_signature_table_contents(self, token_contract_source: str):
        recorder = Console(record=True, width=200)
        with patch("contract_wizard.utils.console", recorder):
            print_signature_table(
                extract_callable_signatures(token_contract_source),
                find_event_sites(token_contract_source),
            )
        output = recorder.export_text()
        assert "mint" in output
        assert "balance" in output
        assert "to: Address" in output
        assert "event" in output
        # rows are sorted by line: mint (9), event (10), balance (14)
        assert output.index("mint") < output.index("event") < output.index("balance")
