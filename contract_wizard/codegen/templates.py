"""Jinja2 environment for the packaged contract scaffolds.

Scaffolds (``*.rs.j2``) and the crate manifest (``cargo.toml.j2``) ship in
the ``templates/`` directory next to this module.  Rendering is strict: a
template that references a variable the caller did not supply raises
``jinja2.UndefinedError`` instead of emitting an empty identifier into Rust
source.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

PACKAGED_TEMPLATES = Path(__file__).parent / "templates"

CONTRACT_SUFFIX = ".rs.j2"


def _environment(template_dir: Path) -> Environment:
    # Rust and TOML are never HTML-escaped.
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    env.filters["snake_case"] = _to_snake_case
    return env


class TemplateRenderer:
    """Loads and renders scaffold templates from one directory.

    Args:
        template_dir: Directory holding the ``.j2`` files; defaults to the
            templates packaged with :mod:`contract_wizard.codegen`.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir is not None else PACKAGED_TEMPLATES
        self.env = _environment(self.template_dir)

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render *template_path* (relative to :attr:`template_dir`)."""
        return self.env.get_template(template_path).render(**context)

    def render_contract(self, template_path: str, contract_name: str) -> str:
        """Render a contract scaffold with its type named *contract_name*."""
        return self.render(template_path, {"contract_name": contract_name})

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        return self.env.from_string(template_string).render(**context)

    def list_templates(self, suffix: str = ".j2") -> list[str]:
        """Sorted template paths ending in *suffix*; ``[]`` if the directory is missing."""
        if not self.template_dir.is_dir():
            return []
        return sorted(
            path.relative_to(self.template_dir).as_posix()
            for path in self.template_dir.rglob(f"*{suffix}")
        )

    def contract_templates(self) -> list[str]:
        """Just the contract scaffolds, without the manifest."""
        return self.list_templates(CONTRACT_SUFFIX)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def _to_snake_case(value: str) -> str:
    """``MyVote`` -> ``my_vote``; ``my-vote`` -> ``my_vote``.  Used for crate names."""
    words = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    words = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", words)
    return re.sub(r"[-\s]+", "_", words).lower()
