"""Classification of ``key=value`` command-line arguments.

Each argument becomes one of three tagged variants:

``LiteralParam``
    forwarded to the API as a query parameter. Values of the form
    ``field::direction`` are rewritten into the API's JSON sort syntax.
``PageLimit``
    the ``__limit`` directive, forwarded as a page-size hint.
``MinResults``
    the ``__min`` directive, consumed entirely client-side by the pager.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from qparas.errors import InvalidDirective

MIN_KEY = "__min"
LIMIT_KEY = "__limit"
SORT_KEY = "__sort"
SORT_PARAM = "sort"
SORT_DELIMITER = "::"

_CANONICAL_INT_RE = re.compile(r"0|-?[1-9][0-9]*")


@dataclass(frozen=True, slots=True)
class LiteralParam:
    key: str
    value: str


@dataclass(frozen=True, slots=True)
class PageLimit:
    count: int


@dataclass(frozen=True, slots=True)
class MinResults:
    count: int


Param = Union[LiteralParam, PageLimit, MinResults]


@dataclass(slots=True)
class Directives:
    """Client-side control values extracted from the arguments."""

    page_limit: Optional[int] = None
    min_results: Optional[int] = None

    @property
    def paging(self) -> bool:
        return self.min_results is not None


def _parse_count(key: str, value: str) -> int:
    if not (value.isascii() and value.isdigit()):
        raise InvalidDirective(
            f"{key} expects a non-negative integer, got {value!r}"
        )
    return int(value)


def format_sort(value: str) -> str:
    """Rewrite ``field::direction`` into the API's JSON sort specification.

    ``metadata.score::-1`` becomes ``{"metadata.score":-1}``. Directions that
    are canonical integer literals are encoded as JSON numbers, anything else
    as a JSON string, so :func:`parse_sort` recovers the original text.
    """
    field, _, direction = value.partition(SORT_DELIMITER)
    if not field or not direction:
        raise InvalidDirective(
            f"sort value {value!r} must look like FIELD{SORT_DELIMITER}DIRECTION"
        )
    encoded: Union[int, str] = direction
    if _CANONICAL_INT_RE.fullmatch(direction):
        encoded = int(direction)
    return json.dumps({field: encoded}, separators=(",", ":"), ensure_ascii=False)


def parse_sort(spec: str) -> str:
    """Inverse of :func:`format_sort`."""
    try:
        data = json.loads(spec)
    except ValueError as exc:
        raise InvalidDirective(f"invalid sort specification {spec!r}") from exc
    if not isinstance(data, dict) or len(data) != 1:
        raise InvalidDirective(f"invalid sort specification {spec!r}")
    ((field, direction),) = data.items()
    if isinstance(direction, bool) or not isinstance(direction, (int, str)):
        raise InvalidDirective(f"invalid sort direction in {spec!r}")
    return f"{field}{SORT_DELIMITER}{direction}"


def classify(arg: str) -> Param:
    """Classify a single ``key=value`` argument."""
    key, sep, value = arg.partition("=")
    if not sep or not key:
        raise InvalidDirective(f"expected KEY=VALUE, got {arg!r}")
    if key == MIN_KEY:
        return MinResults(_parse_count(key, value))
    if key == LIMIT_KEY:
        return PageLimit(_parse_count(key, value))
    if SORT_DELIMITER in value:
        return LiteralParam(SORT_PARAM if key == SORT_KEY else key, format_sort(value))
    return LiteralParam(key, value)


def classify_all(args: Iterable[str]) -> Tuple[List[Tuple[str, str]], Directives]:
    """Split ``args`` into ordered literal parameters and directives.

    Every argument is validated before anything is returned. A repeated
    directive keeps its last value; repeated literal keys are all kept.
    """
    literals: List[Tuple[str, str]] = []
    directives = Directives()
    for arg in args:
        param = classify(arg)
        if isinstance(param, MinResults):
            directives.min_results = param.count
        elif isinstance(param, PageLimit):
            directives.page_limit = param.count
        else:
            literals.append((param.key, param.value))
    return literals, directives


__all__ = [
    "LiteralParam",
    "PageLimit",
    "MinResults",
    "Param",
    "Directives",
    "classify",
    "classify_all",
    "format_sort",
    "parse_sort",
]
