"""Venue lookup capability backed by Exa search."""

import logging
from collections.abc import Sequence

from eventplanner.pipeline.capabilities import SearchHit

from .client import ExaClient
from .config import ExaConfig

logger = logging.getLogger(__name__)


class ExaLookup:
    """Implements the pipeline's Lookup protocol on top of ExaClient."""

    def __init__(self, api_key: str, max_results: int = 5, config: ExaConfig | None = None):
        self.api_key = api_key
        self.config = config or ExaConfig(num_results=max_results)

    async def search(self, query: str, include_domains: Sequence[str]) -> list[SearchHit]:
        async with ExaClient(api_key=self.api_key, config=self.config) as client:
            response = await client.search(query, include_domains=include_domains)

        return [
            SearchHit(title=r.title, url=r.url, content=r.text, score=r.score)
            for r in response.results
        ]
