"""Paras.id marketplace API client."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

import requests

from qparas.config import ParasConfig, load_config
from qparas.errors import DecodeFailed, FetchFailed
from qparas.query import RequestDescriptor
from qparas.utils.log_json import JsonLogger

_logger = JsonLogger("paras-client")


@dataclass(slots=True)
class Page:
    """One decoded response.

    ``results`` is the page's result array, or ``None`` when the endpoint
    answered with a single unpaged value (kept in ``raw``). ``limit`` is the
    page size the server reports having applied, when it reports one.
    """

    results: Optional[List[Any]] = None
    limit: Optional[int] = None
    raw: Any = field(default=None)

    @property
    def paged(self) -> bool:
        return self.results is not None


def _as_page_size(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def extract_page(payload: Any) -> Page:
    """Locate the result array in a decoded body.

    Paged endpoints answer ``{"status": 1, "data": {"results": [...],
    "skip": 0, "limit": 30}}``; a bare JSON array is accepted as a page too.
    """
    if isinstance(payload, list):
        return Page(results=payload)
    if isinstance(payload, dict):
        data = payload.get("data", payload)
        if isinstance(data, dict) and isinstance(data.get("results"), list):
            return Page(results=data["results"], limit=_as_page_size(data.get("limit")))
        return Page(raw=data)
    return Page(raw=payload)


class ParasClient:
    """Client for the Paras.id HTTP API."""

    def __init__(
        self,
        config: ParasConfig | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or load_config()
        self.session = session or requests.Session()
        self._owns_session = session is None
        _logger.info(
            "api.client.init",
            base_url=self.config.base_url,
            user_agent=self.config.user_agent,
            timeout=self.config.timeout,
        )

    def _get_json(self, request: RequestDescriptor) -> Any:
        url = request.url(self.config.base_url)
        headers = {"User-Agent": self.config.user_agent, "Accept": "application/json"}
        _logger.info("api.request", url=url, params=request.params)
        try:
            resp = self.session.get(url, headers=headers, timeout=self.config.timeout)
        except requests.RequestException as exc:
            _logger.error("api.request_failed", url=url, error=str(exc))
            raise FetchFailed(f"request to {url} failed: {exc}") from exc
        if resp.status_code >= 400:
            snippet = (resp.text or "")[:200]
            _logger.error("api.request_failed", url=url, status=resp.status_code, preview=snippet)
            raise FetchFailed(
                f"{request.path} returned HTTP {resp.status_code}: {snippet}",
                status=resp.status_code,
            )
        try:
            payload = resp.json()
        except ValueError as exc:
            _logger.error("api.invalid_json", url=url, error=str(exc))
            raise DecodeFailed(f"invalid JSON from {request.path}: {exc}") from exc
        _logger.info("api.response", url=url, status=resp.status_code)
        return payload

    def fetch(self, request: RequestDescriptor) -> Page:
        """Issue one GET for ``request`` and decode the page it returns."""
        page = extract_page(self._get_json(request))
        if page.paged:
            _logger.info(
                "api.page",
                path=request.path,
                result_count=len(page.results or []),
                limit=page.limit,
            )
        else:
            _logger.info("api.unpaged", path=request.path)
        return page

    # Resource lifecycle -------------------------------------------------
    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "ParasClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["ParasClient", "Page", "extract_page"]
