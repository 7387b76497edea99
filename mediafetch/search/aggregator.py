"""Drive outbound search calls and assemble a capped result list."""

import asyncio
import logging
from typing import Any, TypeVar

from mediafetch.config import Settings
from mediafetch.models import NormalizedResult, SearchRequest
from mediafetch.search.client import SearchClient
from mediafetch.search.items import RawItem, classify_item
from mediafetch.search.normalize import ResultNormalizer
from mediafetch.search.query import ParamSet, build_param_sets, next_start, page_size

logger = logging.getLogger(__name__)

T = TypeVar("T")


def interleave(first: list[T], second: list[T], limit: int) -> list[T]:
    """Merge two lists position by position, stopping at ``limit`` items.

    Once the shorter list runs out only the longer one contributes.
    """
    merged: list[T] = []
    i = 0
    while len(merged) < limit and (i < len(first) or i < len(second)):
        if i < len(first):
            merged.append(first[i])
        if i < len(second):
            merged.append(second[i])
        i += 1
    return merged[:limit]


class SearchAggregator:
    """Collects raw items for a request from one or two sources."""

    def __init__(self, client: SearchClient, settings: Settings):
        self.client = client
        self.settings = settings

    async def collect(self, request: SearchRequest) -> list[RawItem]:
        """
        Run every outbound call a request needs.

        Any failure aborts the whole aggregation; nothing gathered so far is
        returned.
        """
        param_sets = build_param_sets(request, self.settings)

        if len(param_sets) == 1:
            items = await self._collect_source(param_sets[0], request.start, request.desired_count)
            return items[: request.desired_count]

        image_set, video_set = param_sets
        tasks = [
            asyncio.create_task(self._collect_source(image_set, request.start, request.desired_count)),
            asyncio.create_task(self._collect_source(video_set, request.start, request.desired_count)),
        ]
        try:
            images, videos = await asyncio.gather(*tasks)
        except BaseException:
            # First failure wins; stop the other source's outbound calls
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        logger.info("Interleaving %d image and %d video items", len(images), len(videos))
        return interleave(images, videos, request.desired_count)

    async def _collect_source(self, param_set: ParamSet, start: int, wanted: int) -> list[RawItem]:
        collected: list[RawItem] = []
        current: int | None = start

        while len(collected) < wanted and current is not None:
            remaining = wanted - len(collected)
            requested = page_size(remaining, current)
            if requested < 1:
                logger.info("%s source past the result window at start=%d", param_set.kind, current)
                break
            records = await self.client.fetch_page(param_set.page(current, remaining))

            if not records:
                logger.info("%s source exhausted at start=%d", param_set.kind, current)
                break

            if param_set.kind == "images" and self.settings.verify_image_links:
                records = await self._verified(records)

            collected.extend(classify_item(record) for record in records)
            current = next_start(current, requested)

        return collected[:wanted]

    async def _verified(self, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        checks = await asyncio.gather(
            *(self._looks_like_image(record.get("link")) for record in records)
        )
        kept = [record for record, ok in zip(records, checks) if ok]
        if len(kept) < len(records):
            logger.debug("Dropped %d non-image links", len(records) - len(kept))
        return kept

    async def _looks_like_image(self, link: Any) -> bool:
        if not isinstance(link, str) or not link:
            return False
        return await self.client.is_image_url(link)


class SearchService:
    """Search pipeline: aggregate raw items, then normalize them."""

    def __init__(self, aggregator: SearchAggregator, normalizer: ResultNormalizer):
        self.aggregator = aggregator
        self.normalizer = normalizer

    async def search(self, request: SearchRequest) -> list[NormalizedResult]:
        items = await self.aggregator.collect(request)
        results = self.normalizer.normalize_all(items)
        logger.info(
            "Search successful: %d items for %r (%s)",
            len(results),
            request.query,
            request.media_type.value,
        )
        return results
