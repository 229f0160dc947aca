"""
Mflix API: Pagination and Identifier Unit Tests
===============================================

What we test:
    ✅ page/limit defaults for absent, blank and non-numeric values
    ✅ Rejection of zero, negative, and over-maximum values
    ✅ Page numbers whose skip would overflow a 64-bit integer
    ✅ skip arithmetic and ceil page counts
    ✅ ObjectId format checks
"""

import math

import pytest
from bson import ObjectId
from pydantic import ValidationError as SchemaValidationError

from mflix_api.config import settings
from mflix_api.exceptions import ValidationError
from mflix_api.schemas.common import MAX_SKIP, PageRequest, page_count
from mflix_api.services.identifiers import is_valid_object_id, parse_object_id


class TestPageRequestFromQuery:

    def test_defaults_when_absent(self):
        req = PageRequest.from_query(None, None)
        assert req.page == 1
        assert req.limit == settings.default_page_limit
        assert req.skip == 0

    def test_defaults_when_blank_or_non_numeric(self):
        req = PageRequest.from_query("", "abc")
        assert req.page == 1
        assert req.limit == 20

    def test_decimal_text_falls_back_to_default(self):
        req = PageRequest.from_query("2.5", "10.0")
        assert req.page == 1
        assert req.limit == 20

    def test_parses_integers_with_whitespace(self):
        req = PageRequest.from_query(" 3 ", "10")
        assert req.page == 3
        assert req.limit == 10
        assert req.skip == 20

    @pytest.mark.parametrize("page", ["0", "-1"])
    def test_page_below_one_rejected(self, page):
        with pytest.raises(ValidationError, match="Invalid page parameter"):
            PageRequest.from_query(page, None)

    @pytest.mark.parametrize("limit", ["0", "-5"])
    def test_limit_below_one_rejected(self, limit):
        with pytest.raises(ValidationError, match="Invalid limit parameter"):
            PageRequest.from_query(None, limit)

    def test_limit_above_maximum_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            PageRequest.from_query(None, str(settings.max_page_limit + 1))
        assert exc_info.value.field == "limit"

    def test_limit_at_maximum_accepted(self):
        req = PageRequest.from_query(None, str(settings.max_page_limit))
        assert req.limit == settings.max_page_limit

    @pytest.mark.parametrize("raw", ["1_0", "+5", "١٠", "0x10", "1e2"])
    def test_only_ascii_digits_count_as_integers(self, raw):
        req = PageRequest.from_query(raw, raw)
        assert req.page == 1
        assert req.limit == settings.default_page_limit

    def test_largest_encodable_page_accepted(self):
        last = MAX_SKIP // 20 + 1
        req = PageRequest.from_query(str(last), "20")
        assert req.page == last
        assert req.skip <= MAX_SKIP

    @pytest.mark.parametrize("page", [str(MAX_SKIP // 20 + 2), "100000000000000000000"])
    def test_page_with_unencodable_skip_rejected(self, page):
        with pytest.raises(ValidationError, match="Invalid page parameter") as exc_info:
            PageRequest.from_query(page, "20")
        assert exc_info.value.field == "page"


class TestPageRequestModel:

    def test_default_limit_follows_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "default_page_limit", 7)
        assert PageRequest().limit == 7

    def test_direct_construction_enforces_maximum_limit(self):
        with pytest.raises(SchemaValidationError):
            PageRequest(page=1, limit=settings.max_page_limit + 1)

    def test_direct_construction_enforces_skip_bound(self):
        with pytest.raises(SchemaValidationError):
            PageRequest(page=10**20, limit=20)


class TestPageCount:

    def test_matches_ceil_division(self):
        for total in range(0, 60):
            for limit in range(1, 25):
                assert page_count(total, limit) == math.ceil(total / limit)

    def test_empty_collection_has_zero_pages(self):
        assert page_count(0, 20) == 0


class TestObjectIdValidation:

    def test_valid_hex_string(self):
        assert is_valid_object_id("573a1390f29313caabcd42e8")
        assert parse_object_id("573a1390f29313caabcd42e8") == ObjectId("573a1390f29313caabcd42e8")

    def test_object_id_instance_is_valid(self):
        assert is_valid_object_id(ObjectId())

    @pytest.mark.parametrize(
        "value",
        ["", "123", "573a1390f29313caabcd42e", "573a1390f29313caabcd42zz", "abcdefghijkl", None, 42],
    )
    def test_malformed_values_rejected(self, value):
        assert not is_valid_object_id(value)

    def test_parse_raises_with_resource_in_message(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_object_id("not-an-id", "movie")
        assert exc_info.value.message == "Invalid movie ID"
        assert exc_info.value.detail == "ID format is incorrect"
