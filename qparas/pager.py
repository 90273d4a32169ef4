"""Fetch-until-minimum pagination over the Paras API.

The API paginates by result count per page and has no notion of a minimum
total, so a caller wanting at least ``N`` results loops: request page 1, 2, ...
until the accumulated count reaches ``N`` or the server runs out of data.
The page size is only a hint; an empty page always ends the loop.
"""
from __future__ import annotations

from dataclasses import dataclass
from itertools import chain
from typing import Any, Callable, Iterable, List, Optional

from qparas.api_clients.paras_client import Page
from qparas.errors import DecodeFailed
from qparas.params import Directives
from qparas.query import Query, RequestDescriptor, build_request
from qparas.utils.log_json import JsonLogger

_logger = JsonLogger("pager")

Fetch = Callable[[RequestDescriptor], Page]
Progress = Callable[[int, int], None]


def merge_pages(pages: Iterable[List[Any]]) -> List[Any]:
    """Concatenate page result arrays, keeping server order and duplicates."""
    return list(chain.from_iterable(pages))


@dataclass(slots=True)
class PagerResult:
    value: Any
    pages_fetched: int

    @property
    def entries(self) -> int:
        if isinstance(self.value, list):
            return len(self.value)
        return 1 if isinstance(self.value, dict) and self.value else 0


class Pager:
    """Drive one or more sequential requests for a single query."""

    def __init__(self, fetch: Fetch, *, progress: Optional[Progress] = None) -> None:
        self._fetch = fetch
        self._progress = progress

    def _is_last(self, page: Page, directives: Directives, total: int) -> bool:
        count = len(page.results or [])
        if count == 0 or total >= (directives.min_results or 0):
            return True
        # only a size the server reports is trusted; __limit is a hint
        return page.limit is not None and count < page.limit

    def run(self, query: Query, directives: Directives) -> PagerResult:
        if not directives.paging:
            page = self._fetch(build_request(query, directives))
            self._report(1, len(page.results or []))
            if not page.paged:
                return PagerResult(page.raw, 1)
            return PagerResult(merge_pages([page.results or []]), 1)

        pages: List[List[Any]] = []
        total = 0
        number = 1
        while True:
            page = self._fetch(build_request(query, directives, page=number))
            if not page.paged:
                raise DecodeFailed(
                    f"{query.name} page {number} has no result array to paginate"
                )
            results = page.results or []
            pages.append(results)
            total += len(results)
            self._report(number, total)
            if self._is_last(page, directives, total):
                break
            number += 1
        merged = merge_pages(pages)
        _logger.info("pager.done", query=query.name, pages=number, entries=len(merged))
        return PagerResult(merged, number)

    def _report(self, number: int, total: int) -> None:
        _logger.debug("pager.page", page=number, entries=total)
        if self._progress is not None:
            self._progress(number, total)


__all__ = ["Pager", "PagerResult", "merge_pages"]
