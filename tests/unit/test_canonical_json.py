"""
Module 00 - Canonical Serialization
File: tests/unit/test_canonical_json.py

Purpose: Unit tests for canonical JSON serialization. Structured records
become Merkle items through it, so equal records must give equal bytes.
"""

import json
import math
from datetime import datetime, timedelta, timezone
from enum import Enum

import pytest
from pydantic import BaseModel

from core.schemas import (
    CanonicalizationException,
    canonical_equals,
    canonical_item,
    canonicalize_value,
    dumps_canonical,
    ensure_utc,
    format_datetime_canonical,
)


# =============================================================================
# Test Fixtures
# =============================================================================


class SampleEnum(str, Enum):
    """Sample enum for testing."""
    OPTION_A = "option_a"
    OPTION_B = "option_b"


class SampleModel(BaseModel):
    """Sample model for testing."""
    name: str
    value: int
    note: str | None = None


# =============================================================================
# Key Ordering
# =============================================================================


class TestKeyOrdering:
    def test_dict_keys_sorted(self):
        assert dumps_canonical({"b": 2, "a": 1}) == '{"a":1,"b":2}'

    def test_nested_dict_keys_sorted(self):
        result = dumps_canonical({"z": {"b": 1, "a": 2}, "y": [3]})
        assert result == '{"y":[3],"z":{"a":2,"b":1}}'

    def test_insertion_order_irrelevant(self):
        assert canonical_equals({"a": 1, "b": 2}, {"b": 2, "a": 1})


# =============================================================================
# Value Handling
# =============================================================================


class TestValues:
    def test_none_fields_dropped(self):
        assert dumps_canonical({"a": 1, "b": None}) == '{"a":1}'

    def test_list_order_kept(self):
        assert dumps_canonical([3, 1, 2]) == "[3,1,2]"

    def test_enum_value(self):
        assert canonicalize_value(SampleEnum.OPTION_B) == "option_b"

    def test_bytes_as_hex(self):
        assert canonicalize_value(b"\x01\xff") == "01ff"

    def test_pydantic_model(self):
        model = SampleModel(name="x", value=1)
        assert dumps_canonical(model) == '{"name":"x","value":1}'

    def test_non_ascii_kept(self):
        assert dumps_canonical({"k": "é"}) == '{"k":"é"}'

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_floats_rejected(self, value):
        with pytest.raises(CanonicalizationException):
            dumps_canonical({"x": value})

    def test_unsupported_type_rejected(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            dumps_canonical({"x": object()})
        assert exc_info.value.details["path"] == "x"

    def test_output_is_valid_json(self):
        obj = {"a": [1, 2.5, "s", True, None], "b": {"c": False}}
        assert json.loads(dumps_canonical(obj)) == {"a": [1, 2.5, "s", True, None], "b": {"c": False}}


# =============================================================================
# Datetime Handling
# =============================================================================


class TestDatetimes:
    def test_naive_treated_as_utc(self):
        assert ensure_utc(datetime(2026, 1, 1)).tzinfo == timezone.utc

    def test_offset_converted(self):
        dt = datetime(2026, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_datetime_canonical(dt) == "2026-01-01T10:00:00Z"

    def test_microseconds_kept(self):
        dt = datetime(2026, 1, 1, 0, 0, 0, 5, tzinfo=timezone.utc)
        assert format_datetime_canonical(dt) == "2026-01-01T00:00:00.000005Z"


# =============================================================================
# Items
# =============================================================================


class TestCanonicalItem:
    def test_item_is_utf8_of_canonical_json(self):
        assert canonical_item({"b": 1, "a": "é"}) == '{"a":"é","b":1}'.encode("utf-8")

    def test_equal_records_equal_items(self):
        assert canonical_item({"id": 1, "p": 2}) == canonical_item({"p": 2, "id": 1})

    def test_canonical_equals_false_on_failure(self):
        assert not canonical_equals({"x": math.nan}, {"x": math.nan})
