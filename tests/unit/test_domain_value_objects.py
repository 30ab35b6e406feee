"""Unit tests for domain value objects.

Tests cover:
- RateWindow and RetryPolicy validation (ConfigurationError)
- RetryPolicy backoff arithmetic
- EntityReference id validation and path building
- ApiErrorSet parsing of every observed `errors` shape
- Pagination cursor and metadata extraction
"""

import pytest

from payrix.core.enums import ErrorCode
from payrix.core.errors import ConfigurationError
from payrix.domain.enums import EntityType, FieldKind
from payrix.domain.value_objects import (
    ApiErrorEntry,
    ApiErrorSet,
    EntityReference,
    FieldSpec,
    PageInfo,
    PaginationCursor,
    PaginationFields,
    RateWindow,
    RetryPolicy,
    validate_identifier,
)


@pytest.mark.unit
class TestRateWindow:
    """RateWindow construction."""

    def test_defaults_to_documented_budget(self):
        window = RateWindow()

        assert window.limit == 100
        assert window.window_seconds == 60.0

    @pytest.mark.parametrize(
        ("limit", "window_seconds"),
        [(0, 60.0), (-1, 60.0), (10, 0), (10, -5.0), (True, 60.0)],
    )
    def test_rejects_non_positive_values(self, limit, window_seconds):
        with pytest.raises(ConfigurationError) as exc_info:
            RateWindow(limit=limit, window_seconds=window_seconds)

        assert exc_info.value.code is ErrorCode.CONFIGURATION_INVALID


@pytest.mark.unit
class TestRetryPolicy:
    """RetryPolicy validation and delays."""

    def test_backoff_grows_and_is_capped(self):
        policy = RetryPolicy(base_delay=10, multiplier=2, max_delay=50)

        assert [policy.backoff(n) for n in (1, 2, 3, 4)] == [10, 20, 40, 50]

    def test_hint_raises_delay(self):
        policy = RetryPolicy(base_delay=1, multiplier=2, max_delay=30)

        assert policy.delay_for(1, hint=7.5) == 7.5
        assert policy.delay_for(3, hint=2.0) == 4

    def test_delay_never_drops_below_previous(self):
        policy = RetryPolicy(base_delay=1, multiplier=2, max_delay=30)

        assert policy.delay_for(2, previous=12.0) == 12.0

    def test_retryable_statuses(self):
        policy = RetryPolicy()

        assert all(policy.is_retryable_status(s) for s in (500, 502, 503, 504))
        assert not policy.is_retryable_status(400)
        assert not policy.is_retryable_status(501)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_retries": -1},
            {"base_delay": -1},
            {"multiplier": 0.5},
            {"base_delay": 10, "max_delay": 5},
        ],
    )
    def test_rejects_invalid_parameters(self, kwargs):
        with pytest.raises(ConfigurationError):
            RetryPolicy(**kwargs)


@pytest.mark.unit
class TestEntityReference:
    """Identifier validation and record paths."""

    def test_path(self):
        reference = EntityReference(EntityType.CHARGEBACKS, "t1_chb_123")

        assert reference.path == "chargebacks/t1_chb_123"
        assert str(reference) == "chargebacks:t1_chb_123"

    def test_path_escapes_reserved_characters(self):
        reference = EntityReference(EntityType.CUSTOMERS, "a/b?c")

        assert reference.path == "customers/a%2Fb%3Fc"

    @pytest.mark.parametrize("value", ["", "x" * 51, "bad\nid", 123])
    def test_rejects_invalid_ids(self, value):
        with pytest.raises(ValueError):
            validate_identifier(value)

    def test_accepts_fifty_characters(self):
        assert validate_identifier("x" * 50) == "x" * 50


@pytest.mark.unit
class TestApiErrorSet:
    """ApiErrorSet.from_wire() shapes."""

    def test_list_of_entries(self):
        errors = ApiErrorSet.from_wire(
            [
                {"msg": "duplicate", "errorCode": 15, "field": "email"},
                {"message": "second", "code": "E2"},
            ]
        )

        assert errors.messages == ["duplicate", "second"]
        assert errors.codes == ["15", "E2"]
        assert list(errors)[0].field == "email"
        assert len(errors) == 2

    def test_null_msg_falls_back_to_message(self):
        errors = ApiErrorSet.from_wire([{"msg": None, "message": "invalid total"}])

        assert errors.messages == ["invalid total"]

    def test_single_mapping(self):
        errors = ApiErrorSet.from_wire({"msg": "bad request"})

        assert errors.messages == ["bad request"]

    def test_field_to_messages_mapping(self):
        errors = ApiErrorSet.from_wire({"email": ["invalid", "taken"], "zip": "short"})

        assert [(e.field, e.message) for e in errors] == [
            ("email", "invalid"),
            ("email", "taken"),
            ("zip", "short"),
        ]

    def test_plain_string(self):
        assert ApiErrorSet.from_wire("boom").messages == ["boom"]

    @pytest.mark.parametrize("value", [None, [], "", 42])
    def test_empty_shapes(self, value):
        assert not ApiErrorSet.from_wire(value)

    def test_entry_keeps_raw(self):
        raw = {"msg": "x", "severity": "error"}

        assert ApiErrorEntry.from_wire(raw).raw == raw

    def test_from_status(self):
        errors = ApiErrorSet.from_status(503, "Service Unavailable")

        assert errors.messages == ["HTTP 503 Service Unavailable"]
        assert errors.has_code("503")

    def test_str_joins_entries(self):
        errors = ApiErrorSet.from_wire([{"msg": "a", "code": "C1"}, {"msg": "b"}])

        assert str(errors) == "[C1] a; b"


@pytest.mark.unit
class TestPagination:
    """Cursor and metadata reading."""

    def test_cursor_query_and_next(self):
        cursor = PaginationCursor(page=1, limit=50)

        assert cursor.as_query() == {"page[number]": "1", "page[limit]": "50"}
        assert cursor.next() == PaginationCursor(page=2, limit=50)

    @pytest.mark.parametrize(("page", "limit"), [(0, 10), (1, 0), (1, 101)])
    def test_cursor_rejects_out_of_range(self, page, limit):
        with pytest.raises(ValueError):
            PaginationCursor(page=page, limit=limit)

    def test_reads_page_details(self):
        payload = {
            "data": [],
            "details": {
                "page": {"current": "2", "limit": 10, "hasMore": 1},
                "totals": {"count": 37},
            },
        }

        info = PaginationFields().read(payload)

        assert info == PageInfo(current=2, limit=10, has_more=True, total_count=37)

    def test_missing_details_reads_as_unknown(self):
        assert PaginationFields().read({"data": []}) == PageInfo()
        assert PaginationFields().read([]) == PageInfo()

    def test_custom_field_names(self):
        fields = PaginationFields(details="meta", has_more="more")

        info = fields.read({"meta": {"page": {"more": "false"}}})

        assert info.has_more is False


@pytest.mark.unit
class TestFieldSpec:
    """FieldSpec declarations."""

    def test_enum_kind_requires_enum(self):
        with pytest.raises(ValueError, match="enum class"):
            FieldSpec(FieldKind.ENUM)
