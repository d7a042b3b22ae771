"""Async wrapper for the Exa SDK with error mapping and optional retries."""

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any

from exa_py import Exa

from .config import ExaConfig
from .exceptions import (
    ExaRateLimitError,
    ExaServerError,
    classify_sdk_error,
)
from .models import ExaSearchResponse, ExaSearchResult

logger = logging.getLogger(__name__)


class ExaClient:
    """Async wrapper for the Exa SDK.

    The SDK is synchronous, so calls run in a worker thread and never block
    the event loop.
    """

    def __init__(self, api_key: str, config: ExaConfig | None = None):
        self.api_key = api_key
        self.config = config or ExaConfig()
        self._client: Exa | None = None

    async def __aenter__(self) -> "ExaClient":
        """Context manager entry - create Exa client."""
        self._client = Exa(api_key=self.api_key)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - cleanup."""
        self._client = None

    @property
    def client(self) -> Exa:
        """Get Exa client, raising if not in context."""
        if self._client is None:
            raise RuntimeError("ExaClient must be used as async context manager")
        return self._client

    async def _retry_wrapper(self, operation: str, fn: Callable[[], Any]) -> Any:
        """Run an SDK call, retrying only rate-limit and server errors."""
        attempt = 0

        while True:
            attempt += 1
            try:
                return await asyncio.to_thread(fn)
            except Exception as e:
                error = classify_sdk_error(operation, e)
                retryable = isinstance(error, (ExaRateLimitError, ExaServerError))
                if not retryable or attempt >= self.config.max_retries:
                    raise error from e

                wait_time = self.config.retry_backoff_seconds * 2 ** (attempt - 1)
                logger.warning(f"{error} - retrying {operation} in {wait_time:.1f}s")
                await asyncio.sleep(wait_time)

    async def search(
        self,
        query: str,
        include_domains: Sequence[str] | None = None,
        num_results: int | None = None,
    ) -> ExaSearchResponse:
        """Search the web and fetch page text for each hit.

        Args:
            query: Natural-language search query
            include_domains: Restrict results to these domains
            num_results: Number of results to request
        """
        num_results = num_results or self.config.num_results

        def _search():
            return self.client.search_and_contents(
                query,
                num_results=num_results,
                include_domains=list(include_domains) if include_domains else None,
                type=self.config.search_type,
                text={"max_characters": self.config.max_characters},
            )

        response = await self._retry_wrapper("search", _search)

        results = [
            ExaSearchResult(
                url=r.url,
                title=getattr(r, "title", None),
                text=getattr(r, "text", None),
                score=getattr(r, "score", None),
                published_date=getattr(r, "published_date", None),
            )
            for r in response.results
        ]
        logger.info(f"Exa search returned {len(results)} results for: {query}")

        return ExaSearchResponse(query=query, results=results)
