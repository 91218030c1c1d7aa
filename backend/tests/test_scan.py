"""Tests for QR item links."""

import pytest

from core.errors import InvalidScanPayload
from core.scan import item_path, item_url, parse_scan_payload, resolve_scan


@pytest.mark.parametrize(
    "payload, expected",
    [
        ("https://host/item/abc123", "abc123"),
        ("http://localhost:5173/item/abc123/", "abc123"),
        ("  https://host/item/abc123  ", "abc123"),
        ("/item/abc123", "abc123"),
        ("https://host/item/abc123?ref=label", "abc123"),
    ],
)
def test_item_links_resolve(payload, expected):
    assert parse_scan_payload(payload) == expected
    assert resolve_scan(payload) == expected


@pytest.mark.parametrize(
    "payload",
    [
        "hello world",
        "",
        "abc123",
        "https://host/item/",
        "https://host/items/abc123",
        "https://host/other/item/abc123",
        "https://host/item/abc/edit",
        "https:/item/abc123",
    ],
)
def test_other_payloads_are_ignored(payload):
    with pytest.raises(InvalidScanPayload):
        parse_scan_payload(payload)
    assert resolve_scan(payload) is None


def test_item_path_and_url():
    assert item_path("abc123") == "/item/abc123"
    assert item_url("abc123", base_url="https://stock.example.com/") == "https://stock.example.com/item/abc123"
    assert parse_scan_payload(item_url("abc123", base_url="https://stock.example.com")) == "abc123"
