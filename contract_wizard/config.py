"""Contract Wizard configuration.

Centralised, typed configuration for the wizard and its remote
collaborators.  All settings use Pydantic v2 models so they can be validated
at construction time and serialised to/from JSON or environment variables
without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from contract_wizard.codegen.invoke import DEFAULT_CLI_TOOL, DEFAULT_CONTRACT_ID
from contract_wizard.codegen.scaffold import DEFAULT_CONTRACT_NAME


class CatalogConfig(BaseModel):
    """Where reference contracts are fetched from (GitHub contents API)."""

    api_url: str = Field(default="https://api.github.com")
    owner: str = Field(default="eigerco")
    repo: str = Field(default="nebula")
    timeout: int = Field(default=30, ge=1, description="Per-request timeout in seconds")

    @property
    def contents_url(self) -> str:
        """Base URL that file paths are appended to."""
        return f"{self.api_url.rstrip('/')}/repos/{self.owner}/{self.repo}/contents"


class BuildServerConfig(BaseModel):
    """The compile endpoint that turns contract source into WASM."""

    url: str = Field(default="http://localhost:4000")
    timeout: int = Field(default=60, ge=1, description="Build timeout in seconds")


class WizardConfig(BaseModel):
    """Global Contract Wizard configuration.

    Instances are typically created once by the CLI entry point and then
    passed to the facade and the remote clients.
    """

    author: str = Field(default="")
    license: str = Field(default="")
    default_trait: str = Field(default="Raffle")
    contract_name: str = Field(default=DEFAULT_CONTRACT_NAME, min_length=1)
    cli_tool: str = Field(default=DEFAULT_CLI_TOOL, min_length=1)
    contract_id: str = Field(default=DEFAULT_CONTRACT_ID, min_length=1)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    build: BuildServerConfig = Field(default_factory=BuildServerConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.  Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "WizardConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "WizardConfig":
        """Build a ``WizardConfig`` from environment variables.

        Recognised variables (all optional):
            WIZARD_AUTHOR, WIZARD_LICENSE, WIZARD_TRAIT, WIZARD_CONTRACT_NAME,
            WIZARD_CLI_TOOL, WIZARD_CATALOG_URL, WIZARD_CATALOG_TIMEOUT,
            WIZARD_BUILD_URL, WIZARD_BUILD_TIMEOUT.
        """
        catalog_kwargs: dict[str, Any] = {}
        if os.environ.get("WIZARD_CATALOG_URL"):
            catalog_kwargs["api_url"] = os.environ["WIZARD_CATALOG_URL"]
        if os.environ.get("WIZARD_CATALOG_TIMEOUT"):
            catalog_kwargs["timeout"] = int(os.environ["WIZARD_CATALOG_TIMEOUT"])

        build_kwargs: dict[str, Any] = {}
        if os.environ.get("WIZARD_BUILD_URL"):
            build_kwargs["url"] = os.environ["WIZARD_BUILD_URL"]
        if os.environ.get("WIZARD_BUILD_TIMEOUT"):
            build_kwargs["timeout"] = int(os.environ["WIZARD_BUILD_TIMEOUT"])

        return cls(
            author=os.environ.get("WIZARD_AUTHOR", ""),
            license=os.environ.get("WIZARD_LICENSE", ""),
            default_trait=os.environ.get("WIZARD_TRAIT", "Raffle"),
            contract_name=os.environ.get("WIZARD_CONTRACT_NAME", DEFAULT_CONTRACT_NAME),
            cli_tool=os.environ.get("WIZARD_CLI_TOOL", DEFAULT_CLI_TOOL),
            catalog=CatalogConfig(**catalog_kwargs),
            build=BuildServerConfig(**build_kwargs),
        )
