"""
Property-based tests for the result formatter.

Feature: radiofm-mcp-server
Tests structural properties of the formatted search results text.
"""

import re
import string

import pytest
from hypothesis import given, strategies as st, settings

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from radiofm_mcp.models.search_result import ResultGroup, ResultItem, UpstreamSearchResponse
from radiofm_mcp.tools.formatter import format_results
from radiofm_mcp.upstream.client import parse_search_response


HEADER_PREFIX = "🎧 "
ITEM_LINE = re.compile(r"^(\d+)\. ")

# Single-line text without digits so that names can never look like headers or item numbers
words = st.text(alphabet=string.ascii_letters + " -", max_size=20)
optional_words = st.one_of(st.none(), words.filter(bool))


result_items = st.builds(
    ResultItem,
    station_name=optional_words,
    podcast_name=optional_words,
    station_genre=optional_words,
    category_name=optional_words,
    short_url=optional_words,
    deeplink=optional_words,
)

result_groups = st.builds(
    ResultGroup,
    type=st.sampled_from(["station", "podcast", "episode", ""]),
    items=st.lists(result_items, max_size=8),
)

# Raw upstream records, including values of the wrong type
raw_values = st.one_of(
    st.none(),
    st.text(max_size=10),
    st.integers(),
    st.booleans(),
    st.lists(st.integers(), max_size=2),
)
raw_items = st.one_of(
    st.dictionaries(
        st.sampled_from(["st_name", "p_name", "st_genre", "cat_name", "st_shorturl", "deeplink", "other"]),
        raw_values,
    ),
    raw_values,
)
raw_groups = st.one_of(
    st.fixed_dictionaries(
        {},
        optional={
            "type": st.one_of(st.text(max_size=10), st.none(), st.integers()),
            "data": st.one_of(st.lists(raw_items, max_size=5), raw_values),
        },
    ),
    raw_values,
)


def item_numbers_per_group(text: str) -> list:
    """Split formatted text into the item numbers of each group block."""
    groups = []
    for line in text.split("\n"):
        if line.startswith(HEADER_PREFIX):
            groups.append([])
            continue
        match = ITEM_LINE.match(line)
        if match:
            groups[-1].append(int(match.group(1)))
    return groups


# Feature: radiofm-mcp-server, Property 1: Group and Item Line Counts
@given(query=words.filter(bool), groups=st.lists(result_groups, min_size=1, max_size=5))
@settings(max_examples=100, deadline=None)
def test_header_and_item_line_counts(query: str, groups: list):
    """
    Property 1: Group and Item Line Counts
    
    For N groups each containing Mi items, the output contains exactly N
    header lines and sum(Mi) numbered item lines.
    """
    text = format_results(query, groups)
    lines = text.split("\n")
    
    header_lines = [line for line in lines if line.startswith(HEADER_PREFIX)]
    item_lines = [line for line in lines if ITEM_LINE.match(line)]
    
    assert len(header_lines) == len(groups)
    assert len(item_lines) == sum(len(group.items) for group in groups)
    assert lines[0] == f'🔍 Results for "{query}":'


# Feature: radiofm-mcp-server, Property 2: Per-Group Numbering
@given(groups=st.lists(result_groups, min_size=1, max_size=5))
@settings(max_examples=100, deadline=None)
def test_items_numbered_within_group(groups: list):
    """
    Property 2: Per-Group Numbering
    
    Items are numbered 1..Mi within their own group, in upstream order.
    """
    text = format_results("query", groups)
    
    assert item_numbers_per_group(text) == [
        list(range(1, len(group.items) + 1)) for group in groups
    ]


# Feature: radiofm-mcp-server, Property 3: Group Order Preserved
@given(groups=st.lists(result_groups, min_size=1, max_size=5))
@settings(max_examples=100, deadline=None)
def test_group_order_preserved(groups: list):
    """
    Property 3: Group Order Preserved
    
    Header lines appear in the order the groups were supplied.
    """
    text = format_results("query", groups)
    
    headers = [line for line in text.split("\n") if line.startswith(HEADER_PREFIX)]
    assert headers == [f"{HEADER_PREFIX}{group.type.upper()}" for group in groups]


# Feature: radiofm-mcp-server, Property 4: Formatting Idempotence
@given(query=st.text(max_size=30), groups=st.lists(result_groups, max_size=4))
@settings(max_examples=100, deadline=None)
def test_formatting_is_deterministic(query: str, groups: list):
    """
    Property 4: Formatting Idempotence
    
    Formatting the same response twice yields identical text.
    """
    assert format_results(query, groups) == format_results(query, groups)


# Feature: radiofm-mcp-server, Property 5: Formatter Totality
@given(query=st.text(max_size=30), raw=st.lists(raw_groups, max_size=4))
@settings(max_examples=200, deadline=None)
def test_any_upstream_shape_formats(query: str, raw: list):
    """
    Property 5: Formatter Totality
    
    Any list of upstream groups, however malformed its entries, parses and
    formats without raising.
    """
    response = parse_search_response({"data": {"Data": raw}})
    text = format_results(query, response.groups)
    
    assert isinstance(text, str)
    assert f'"{query}"' in text


# Feature: radiofm-mcp-server, Property 6: Empty Results Message
@given(query=st.text(min_size=1, max_size=50))
@settings(max_examples=100, deadline=None)
def test_empty_results_contain_query(query: str):
    """
    Property 6: Empty Results Message
    
    Zero groups always produce the no-results sentence with the literal query.
    """
    text = format_results(query, UpstreamSearchResponse().groups)
    
    assert text.startswith("🔍 No results found for ")
    assert f'"{query}"' in text
