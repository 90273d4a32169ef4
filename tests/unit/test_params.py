from __future__ import annotations

import json

import pytest

from qparas.errors import InvalidDirective
from qparas.params import (
    Directives,
    LiteralParam,
    MinResults,
    PageLimit,
    classify,
    classify_all,
    format_sort,
    parse_sort,
)


@pytest.mark.parametrize(
    "arg",
    [
        "collection_id=mint.havendao.near",
        "min_price=1100000000000000000000001",
        "search=key to paras",
        "attributes[kind]=Normies",
        "null=null",
        "title=a=b",
        "empty=",
    ],
)
def test_literal_forwarded_unchanged(arg):
    key, _, value = arg.partition("=")
    assert classify(arg) == LiteralParam(key, value)


def test_directives_parsed():
    assert classify("__min=50") == MinResults(50)
    assert classify("__limit=0") == PageLimit(0)


@pytest.mark.parametrize("arg", ["__min=abc", "__min=-1", "__limit=1.5", "__min=", "__limit=²"])
def test_malformed_directive(arg):
    with pytest.raises(InvalidDirective):
        classify(arg)


@pytest.mark.parametrize("arg", ["collection_id", "=value"])
def test_missing_key_value_separator(arg):
    with pytest.raises(InvalidDirective):
        classify(arg)


def test_sort_key_renamed_and_value_rewritten():
    param = classify("__sort=metadata.score::-1")
    assert param.key == "sort"
    assert json.loads(param.value) == {"metadata.score": -1}
    assert param.value == '{"metadata.score":-1}'


def test_sort_rewrite_keeps_other_keys():
    param = classify("order=lowest_price::1")
    assert param == LiteralParam("order", '{"lowest_price":1}')


@pytest.mark.parametrize(
    "value",
    ["metadata.score::-1", "lowest_price::1", "updated_at::desc", "price::+1", "a::-0", "x::0"],
)
def test_sort_rewrite_is_reversible(value):
    assert parse_sort(format_sort(value)) == value


@pytest.mark.parametrize("value", ["::1", "price::"])
def test_incomplete_sort_rejected(value):
    with pytest.raises(InvalidDirective):
        format_sort(value)


def test_parse_sort_rejects_non_spec():
    with pytest.raises(InvalidDirective):
        parse_sort("[1, 2]")
    with pytest.raises(InvalidDirective):
        parse_sort("not json")


def test_classify_all_splits_literals_and_directives():
    literals, directives = classify_all(
        [
            "creator_id=hdriqi",
            "__limit=2",
            "creator_id=afiqshofy.near",
            "__min=2",
            "__min=5",
        ]
    )
    assert literals == [("creator_id", "hdriqi"), ("creator_id", "afiqshofy.near")]
    assert directives == Directives(page_limit=2, min_results=5)
    assert directives.paging


def test_classify_all_defaults_to_single_page():
    _, directives = classify_all(["owner_id=irfi.near"])
    assert directives == Directives()
    assert not directives.paging
