"""Async reader for the published reference contracts.

Reference contracts live in a GitHub repository and are read through the
contents API (``/repos/<owner>/<repo>/contents/<path>``), which returns the
file base64-encoded inside a JSON envelope.

Typical usage::

    catalog = ContractCatalog()
    result = await catalog.fetch_source(CATALOG_PATHS["voting"])
    if result.success:
        facade.set_reference_source("voting", result.content)

Failures never raise; they come back as ``FetchResult(success=False)``.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
from collections.abc import Callable

import httpx
from pydantic import BaseModel, Field

from contract_wizard.utils import console

# Catalog key -> repository path of the contract's entry file.
CATALOG_PATHS: dict[str, str] = {
    "voting": "contracts/voting/src/lib.rs",
    "raffle": "contracts/raffle/src/lib.rs",
    "payment_splitter": "contracts/payment_splitter/src/lib.rs",
}


class FetchResult(BaseModel):
    """Outcome of reading one file from the catalog."""

    path: str = Field(default="", description="Repository path that was requested")
    content: str | None = Field(default=None, description="Decoded file text")
    success: bool = Field(default=True)
    error: str | None = Field(default=None, description="Error message on failure")


class ContractCatalog:
    """Async client for the reference contract repository."""

    def __init__(
        self,
        api_url: str = "https://api.github.com",
        owner: str = "eigerco",
        repo: str = "nebula",
        timeout: int = 30,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.owner = owner
        self.repo = repo
        self.timeout = timeout

    @property
    def contents_url(self) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}/contents"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            headers={"Accept": "application/json"},
        )

    def url_for(self, path: str) -> str:
        return f"{self.contents_url}/{path.lstrip('/')}"

    @staticmethod
    def _decode_content(data: dict) -> str:
        """Decode the base64 ``content`` field of a contents API response.

        GitHub wraps the encoded payload at 60 columns, so embedded newlines
        are dropped before decoding.
        """
        encoded = "".join(data.get("content", "").split())
        return base64.b64decode(encoded).decode("utf-8")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch_source(self, path: str) -> FetchResult:
        """Read and decode one file.

        Args:
            path: Repository-relative path, e.g. ``contracts/voting/src/lib.rs``.

        Returns:
            A ``FetchResult`` with the decoded text or an error.
        """
        url = self.url_for(path)
        console.print(f"[dim]Fetching {url}[/dim]")
        try:
            async with self._client() as client:
                response = await client.get(url)
                response.raise_for_status()
                data = response.json()
                return FetchResult(path=path, content=self._decode_content(data))
        except httpx.ConnectError:
            return FetchResult(
                path=path,
                success=False,
                error=f"Cannot connect to {self.api_url}.",
            )
        except httpx.TimeoutException:
            return FetchResult(
                path=path,
                success=False,
                error=f"Request for {path} timed out after {self.timeout}s.",
            )
        except httpx.HTTPStatusError as exc:
            return FetchResult(
                path=path,
                success=False,
                error=f"Catalog returned HTTP {exc.response.status_code} for {path}",
            )
        except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
            return FetchResult(
                path=path,
                success=False,
                error=f"Could not decode {path}: {exc}",
            )

    async def list_contracts(self, directory: str = "contracts") -> list[str]:
        """Names of the sub-directories of *directory*.

        Returns an empty list when the listing cannot be read.
        """
        url = self.url_for(directory)
        console.print(f"[dim]Fetching {url}[/dim]")
        try:
            async with self._client() as client:
                response = await client.get(url)
                response.raise_for_status()
                entries = response.json()
        except (httpx.HTTPError, ValueError):
            return []

        if not isinstance(entries, list):
            return []
        return [
            entry["name"]
            for entry in entries
            if isinstance(entry, dict) and entry.get("type") == "dir" and "name" in entry
        ]


# ---------------------------------------------------------------------------
# ReferenceLoader
# ---------------------------------------------------------------------------


class ReferenceLoader:
    """Loads catalog sources and hands the current ones to a consumer.

    Each key carries a generation number that is bumped by every
    :meth:`load` and :meth:`invalidate`.  A fetch result is applied only if
    the generation it was started under is still current, so a late response
    can never overwrite a newer one.  Concurrent loads of the same path share
    one request.
    """

    def __init__(
        self,
        catalog: ContractCatalog,
        on_loaded: Callable[[str, str | None], None] | None = None,
    ) -> None:
        self.catalog = catalog
        self.on_loaded = on_loaded
        self.sources: dict[str, str | None] = {}
        self.errors: dict[str, str] = {}
        self._generations: dict[str, int] = {}
        self._inflight: dict[str, asyncio.Future[FetchResult]] = {}

    def generation(self, key: str) -> int:
        return self._generations.get(key, 0)

    def invalidate(self, key: str) -> None:
        """Discard any result still in flight for *key*."""
        self._generations[key] = self.generation(key) + 1

    async def load(self, key: str) -> str | None:
        """Fetch the source for catalog *key* and apply it if still current.

        Returns the source held for *key* after the call; unknown keys give
        ``None`` without any request.
        """
        path = CATALOG_PATHS.get(key)
        if path is None:
            return None

        self.invalidate(key)
        generation = self.generation(key)

        pending = self._inflight.get(path)
        if pending is None:
            pending = asyncio.ensure_future(self.catalog.fetch_source(path))
            self._inflight[path] = pending
            pending.add_done_callback(lambda done, p=path: self._forget(p, done))
        result = await pending

        if generation != self.generation(key):
            return self.sources.get(key)

        self.sources[key] = result.content
        if result.success:
            self.errors.pop(key, None)
        else:
            self.errors[key] = result.error or "unknown error"
        if self.on_loaded is not None:
            self.on_loaded(key, result.content)
        return result.content

    async def load_all(self) -> dict[str, str | None]:
        """Load every known catalog entry concurrently."""
        await asyncio.gather(*(self.load(key) for key in CATALOG_PATHS))
        return dict(self.sources)

    def _forget(self, path: str, done: asyncio.Future[FetchResult]) -> None:
        if self._inflight.get(path) is done:
            del self._inflight[path]
