"""
Regulation Search
=================

Keyword search over EPA proposed and final rulemaking documents.

A program filter is resolved to the CFR parts of that program's
regulations, which are added to the search keywords. Every returned
document is then enriched with its CFR part from the documents API.

Version: 0.1.0
"""

import asyncio
from typing import Any

from services.regulations.client import EPAClient
from services.regulations.lookup import RegulationLookup
from shared.logging import get_logger
from shared.models.regulation import SearchCriteria, SearchResult


logger = get_logger(__name__)


# EPA-sourced proposed/final rules, rulemaking dockets, open for comment
DOCUMENT_FILTERS: dict[str, str] = {
    "a": "EPA",
    "dct": "PR",
    "dkt": "R",
    "cp": "O",
}

PROGRAM_SEARCH_OFFSET = 0
PROGRAM_SEARCH_LIMIT = 10000


class SearchOrchestrator:
    """Search regulatory documents and attach their CFR parts."""

    def __init__(
        self,
        client: EPAClient,
        lookup: RegulationLookup,
        max_concurrency: int | None = None,
    ) -> None:
        self.client = client
        self.lookup = lookup
        self.max_concurrency = max_concurrency or client.config.max_concurrency

    async def _program_cfrs(self, program: str) -> list[str]:
        """CFR parts of every regulation in programs matching ``program``."""
        page = await self.lookup.search_programs(
            program,
            PROGRAM_SEARCH_OFFSET,
            PROGRAM_SEARCH_LIMIT,
        )
        return [
            regulation.cfr
            for item in page.items
            for regulation in item.regulations
            if regulation.cfr
        ]

    async def _attach_cfr_parts(self, items: list[dict[str, Any]]) -> None:
        """Copy each document's ``cfrPart`` onto its search item, in place."""
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def attach(item: dict[str, Any]) -> None:
            async with semaphore:
                details = await self.client.get_document(item["documentId"])
            item["cfrPart"] = details.get("cfrPart")

        tasks = [asyncio.create_task(attach(item)) for item in items]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            # First failure aborts the search; stop the remaining lookups
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def search(self, criteria: SearchCriteria) -> SearchResult:
        """
        Search regulations.

        A program that resolves to no CFR parts returns an empty result
        without querying the documents API, even when substance or NAICS
        keywords are also given.

        Args:
            criteria: Search criteria and paging window

        Returns:
            Matching documents with their CFR parts and the upstream total

        Raises:
            UpstreamError: An upstream API returned a structured error
            httpx.HTTPError: Any other transport failure
        """
        keywords: list[str | None] = [criteria.substance, criteria.naics]

        if criteria.program:
            cfrs = await self._program_cfrs(criteria.program)
            if not cfrs:
                logger.info(
                    "regulation_search_short_circuited",
                    program=criteria.program,
                )
                return SearchResult(items=[], total=0)
            keywords.extend(cfrs)

        query = " ".join(k for k in keywords if k)

        params: dict[str, Any] = {
            **DOCUMENT_FILTERS,
            "rpp": criteria.limit,
            "po": criteria.offset,
        }
        if query:
            params["s"] = query

        payload = await self.client.search_documents(params)

        items = payload.get("documents")
        if items is None:
            return SearchResult(items=[], total=0)

        await self._attach_cfr_parts(items)

        total = payload.get("totalNumRecords") or 0

        logger.info(
            "regulation_search_completed",
            keywords=query or None,
            items=len(items),
            total=total,
        )

        return SearchResult(items=items, total=total)
