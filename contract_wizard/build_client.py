"""Async client for the contract compile server.

The server accepts the contract source as the raw body of ``POST /run`` and
answers with the compiled WASM module.  The text sent is exactly what
:meth:`GeneratorFacade.get_code` returns, header included.
"""

from __future__ import annotations

import httpx
from pydantic import BaseModel, Field

from contract_wizard.utils import console


class BuildResult(BaseModel):
    """Structured response from a build request."""

    wasm: bytes = Field(default=b"", description="Compiled module")
    success: bool = Field(default=True)
    error: str | None = Field(default=None, description="Error message on failure")

    @property
    def size(self) -> int:
        return len(self.wasm)


class BuildClient:
    """Submits contract source to the compile server at ``base_url``."""

    def __init__(self, base_url: str = "http://localhost:4000", timeout: int = 60) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
        )

    async def build(self, source: str) -> BuildResult:
        """Compile *source* and return the WASM bytes.

        An empty source is rejected without contacting the server.
        """
        if not source:
            return BuildResult(success=False, error="No contract source to build.")

        console.print(f"[dim]Building via {self.base_url}/run[/dim]")
        try:
            async with self._client() as client:
                response = await client.post(
                    "/run",
                    content=source.encode("utf-8"),
                    headers={"Content-Type": "text/plain; charset=utf-8"},
                )
                response.raise_for_status()
                return BuildResult(wasm=response.content)
        except httpx.ConnectError:
            return BuildResult(
                success=False,
                error=f"Cannot connect to build server at {self.base_url}. Is it running?",
            )
        except httpx.TimeoutException:
            return BuildResult(
                success=False,
                error=f"Build timed out after {self.timeout}s.",
            )
        except httpx.HTTPStatusError as exc:
            return BuildResult(
                success=False,
                error=f"Build server returned HTTP {exc.response.status_code}: {exc.response.text[:500]}",
            )
