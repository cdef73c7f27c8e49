"""Virtual multi-file project model.

``ProjectModel`` exclusively owns an in-memory contract project: an id-keyed
store of file entries (the single source of truth for content) plus a
parent -> children layout used only to build display trees.  Callers get
snapshots from :meth:`ProjectModel.get_tree`; the only way to change file
text is :meth:`ProjectModel.update_file_content`.

Ids are allocated from a counter that survives re-initialisation, so an id
handed out once never refers to a different file later.  The synthetic root
is always id ``0``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from contract_wizard.codegen.templates import TemplateRenderer

ROOT_ID = 0

_LANGUAGES: dict[str, str] = {
    "rs": "rust",
}


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class ProjectFile(BaseModel):
    """A node of the project tree as handed to display code."""

    id: int = Field(..., ge=0)
    name: str
    content: str = ""
    children: list[ProjectFile] = Field(default_factory=list)

    @property
    def is_dir(self) -> bool:
        return bool(self.children)


class FlatNode(BaseModel):
    """One row of a flattened tree, parent-first."""

    id: int
    name: str
    parent: int | None
    children: list[int] = Field(default_factory=list)
    depth: int = 0


class _Entry(BaseModel):
    name: str
    content: str = ""
    is_dir: bool = False


# ---------------------------------------------------------------------------
# ProjectModel
# ---------------------------------------------------------------------------


class ProjectModel:
    """Owner of the virtual project's files."""

    def __init__(self, name: str = "", renderer: TemplateRenderer | None = None) -> None:
        self.name = name
        self.renderer = renderer or TemplateRenderer()
        self._next_id = ROOT_ID + 1
        self._entries: dict[int, _Entry] = {}
        self._layout: dict[int, list[int]] = {ROOT_ID: []}

    # -- Initialisation ----------------------------------------------------

    def initialize_single_file(self) -> int:
        """Replace the tree with a lone ``lib.rs``.  Returns its id."""
        self._reset()
        lib_id = self._add(ROOT_ID, "lib.rs", default_contract_source())
        return lib_id

    def initialize_multi_file(self) -> int:
        """Replace the tree with ``src/lib.rs`` and ``Cargo.toml``.

        Returns the id of ``lib.rs``.
        """
        self._reset()
        src_id = self._add(ROOT_ID, "src", is_dir=True)
        self._add(ROOT_ID, "Cargo.toml", self._manifest())
        lib_id = self._add(src_id, "lib.rs", default_contract_source())
        return lib_id

    # -- Queries -----------------------------------------------------------

    def get_file_content(self, file_id: int) -> str | None:
        entry = self._entries.get(file_id)
        return entry.content if entry is not None else None

    def get_file_name(self, file_id: int) -> str | None:
        entry = self._entries.get(file_id)
        return entry.name if entry is not None else None

    def find_file_id(self, name: str) -> int | None:
        """Id of the first entry called *name*, in display order."""
        for node in self.flatten():
            if node.name == name and node.id != ROOT_ID:
                return node.id
        return None

    def file_count(self) -> int:
        """Number of entries below the root, directories included."""
        return len(self._entries)

    def get_tree(self) -> ProjectFile:
        """Return a fresh snapshot of the tree rooted at id ``0``."""
        return self._snapshot(ROOT_ID)

    def flatten(self) -> list[FlatNode]:
        """Parent-first flattening of the tree for list-style widgets."""
        nodes: list[FlatNode] = []

        def _walk(node_id: int, parent: int | None, depth: int) -> None:
            nodes.append(
                FlatNode(
                    id=node_id,
                    name=self.name if node_id == ROOT_ID else self._entries[node_id].name,
                    parent=parent,
                    children=list(self._layout.get(node_id, [])),
                    depth=depth,
                )
            )
            for child_id in self._layout.get(node_id, []):
                _walk(child_id, node_id, depth + 1)

        _walk(ROOT_ID, None, 0)
        return nodes

    # -- Mutation ----------------------------------------------------------

    def update_file_content(self, file_id: int, content: str) -> None:
        """Replace a file's text.  Unknown ids and directories are ignored."""
        entry = self._entries.get(file_id)
        if entry is None or entry.is_dir:
            return
        entry.content = content

    # -- Internal helpers --------------------------------------------------

    def _reset(self) -> None:
        self._entries = {}
        self._layout = {ROOT_ID: []}

    def _add(self, parent_id: int, name: str, content: str = "", *, is_dir: bool = False) -> int:
        file_id = self._next_id
        self._next_id += 1
        self._entries[file_id] = _Entry(name=name, content=content, is_dir=is_dir)
        self._layout[parent_id].append(file_id)
        if is_dir:
            self._layout[file_id] = []
        return file_id

    def _snapshot(self, node_id: int) -> ProjectFile:
        if node_id == ROOT_ID:
            name, content = self.name, ""
        else:
            entry = self._entries[node_id]
            name, content = entry.name, entry.content
        return ProjectFile(
            id=node_id,
            name=name,
            content=content,
            children=[self._snapshot(child) for child in self._layout.get(node_id, [])],
        )

    def _manifest(self) -> str:
        return self.renderer.render(
            "cargo.toml.j2",
            {"package_name": "contract", "sdk_version": "20.0.0", "needs_rand": False},
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def language_for(file_name: str | None) -> str | None:
    """Editor language id inferred from the file extension.

    ``lib.rs`` -> ``"rust"``; other extensions are returned as-is; a name
    without an extension gives ``None``.
    """
    if not file_name or "." not in file_name:
        return None
    extension = file_name.rsplit(".", 1)[1]
    return _LANGUAGES.get(extension, extension)


def default_contract_source() -> str:
    """The demonstration counter contract every new project starts with."""
    return _INCREMENT_CONTRACT


_INCREMENT_CONTRACT = """#![no_std]
use soroban_sdk::{contract, contractimpl, symbol_short, Env, Symbol};

const COUNTER: Symbol = symbol_short!("COUNTER");

#[contract]
pub struct IncrementContract;

#[contractimpl]
impl IncrementContract {
    /// Increment increments an internal counter, and returns the value.
    pub fn increment(env: Env) -> u32 {
        // Get the current count.
        let mut count: u32 = env.storage().instance().get(&COUNTER).unwrap_or(0);

        // Increment the count.
        count += 1;

        // Save the count.
        env.storage().instance().set(&COUNTER, &count);

        // Publish an event about the increment occurring.
        // The event has two topics:
        //   - The "COUNTER" symbol.
        //   - The "increment" symbol.
        // The event data is the count.
        env.events()
            .publish((COUNTER, symbol_short!("increment")), count);

        // Return the count to the caller.
        count
    }
}
"""
