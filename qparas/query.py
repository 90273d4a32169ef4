"""Query model and request construction for the Paras API."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urlencode

from qparas.errors import UnknownQuery
from qparas.params import Directives, classify_all

LIMIT_PARAM = "__limit"
PAGE_PARAM = "page"

# Query name -> endpoint path. Names map one-to-one onto API resources.
QUERIES = {
    name: f"/{name}"
    for name in (
        "token-series",
        "token",
        "activities",
        "activities/top-users",
        "collections",
        "collection-stats",
        "categories",
        "profiles",
        "publications",
        "drops",
        "offers",
        "bids",
        "launchpad",
    )
}


def endpoint_for(name: str) -> str:
    """Return the endpoint path for query ``name``."""
    try:
        return QUERIES[name]
    except KeyError:
        supported = ", ".join(sorted(QUERIES))
        raise UnknownQuery(f"unknown query {name!r} (supported: {supported})") from None


@dataclass(slots=True)
class Query:
    """A named API resource plus the literal parameters to forward."""

    name: str
    params: List[Tuple[str, str]] = field(default_factory=list)

    @classmethod
    def parse(cls, name: str, args: Iterable[str]) -> Tuple["Query", Directives]:
        """Classify ``args`` and resolve ``name`` before any request is made."""
        literals, directives = classify_all(args)
        endpoint_for(name)
        return cls(name, literals), directives

    @property
    def path(self) -> str:
        return endpoint_for(self.name)


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    """Endpoint path and ordered query string for one GET."""

    path: str
    params: Tuple[Tuple[str, str], ...]

    def url(self, base_url: str) -> str:
        url = f"{base_url.rstrip('/')}{self.path}"
        if self.params:
            url = f"{url}?{urlencode(self.params)}"
        return url


def build_request(
    query: Query, directives: Directives, page: Optional[int] = None
) -> RequestDescriptor:
    """Return the request for ``query``; ``page`` is only set while paging."""
    params = list(query.params)
    if directives.page_limit is not None:
        params.append((LIMIT_PARAM, str(directives.page_limit)))
    if page is not None:
        params.append((PAGE_PARAM, str(page)))
    return RequestDescriptor(query.path, tuple(params))


__all__ = ["QUERIES", "Query", "RequestDescriptor", "build_request", "endpoint_for"]
