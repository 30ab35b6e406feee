"""Typed Payrix operations over the retry executor.

PayrixTransport is entity-agnostic: any record type that declares `ENTITY`
and `FIELDS` (see RecordProtocol) can be fetched, listed, searched, created,
updated and deleted. Responses are decoded with the flexible codec; every
operation returns a Result.

Response envelope:
    {"response": {"data": [...], "details": {"page": {...}}, "errors": []}}

Usage:
    async with create_transport() as transport:
        result = await transport.get_one(Customer, "t1_cus_123")
        match result:
            case Success(value=customer) if customer is not None:
                print(customer.email)
            case Failure(error=error):
                print(error.code, error.messages)
"""

from collections.abc import Mapping, Sequence
from types import TracebackType
from typing import Any, Self, TypeVar

import structlog

from payrix.core.constants import MAX_PAGES_DEFAULT, PAGE_LIMIT_MAX
from payrix.core.enums import ErrorCode
from payrix.core.errors import ConfigurationError
from payrix.core.result import Failure, Result, Success
from payrix.domain.enums import EntityType
from payrix.domain.errors import DecodeFailure, PayrixError
from payrix.domain.value_objects import (
    EntityReference,
    Page,
    PaginationCursor,
    PaginationFields,
)
from payrix.infrastructure.codec import FlexibleCodec
from payrix.infrastructure.http.query_builder import SearchBuilder, build_expand_query
from payrix.infrastructure.http.retry_executor import PayrixRequest, RetryExecutor

R = TypeVar("R")

type SearchInput = str | SearchBuilder | None


def _entity(record_type: type[Any]) -> EntityType:
    return record_type.ENTITY


def _search_text(search: SearchInput) -> str | None:
    if isinstance(search, SearchBuilder):
        return search.build() or None
    return search or None


def _with_expand(path: str, expand: Sequence[str] | None) -> str:
    if not expand:
        return path
    query = build_expand_query(expand)
    return f"{path}?{query}" if query else path


def _decode_failure(path: str, expected: str, observed: Any) -> Failure[DecodeFailure]:
    return Failure(
        error=DecodeFailure(
            code=ErrorCode.DECODE_FAILED,
            message=f"Cannot decode {path}: expected {expected}, got {observed!r}",
            field_path=path,
            expected=expected,
            observed=repr(observed),
        )
    )


class PayrixTransport:
    """Generic CRUD, search and pagination over Payrix endpoints.

    Args:
        executor: Retrying HTTP executor.
        codec: Wire codec. Defaults to a FlexibleCodec logging anomalies.
        page_limit: Page size for listings (1-100).
        max_pages: Upper bound on pages fetched by one listing.
        pagination_fields: Names of the pagination metadata keys.

    Raises:
        ConfigurationError: If page_limit or max_pages is out of range.
    """

    def __init__(
        self,
        *,
        executor: RetryExecutor,
        codec: FlexibleCodec | None = None,
        page_limit: int = PAGE_LIMIT_MAX,
        max_pages: int = MAX_PAGES_DEFAULT,
        pagination_fields: PaginationFields | None = None,
    ) -> None:
        if not 1 <= page_limit <= PAGE_LIMIT_MAX:
            raise ConfigurationError(
                f"page_limit must be between 1 and {PAGE_LIMIT_MAX}, got {page_limit}",
                setting="page_limit",
            )
        if max_pages < 1:
            raise ConfigurationError(
                f"max_pages must be positive, got {max_pages}", setting="max_pages"
            )
        self._executor = executor
        self._codec = codec or FlexibleCodec()
        self._page_limit = page_limit
        self._max_pages = max_pages
        self._pagination = pagination_fields or PaginationFields()
        self._logger = structlog.get_logger("payrix_transport")

    @property
    def codec(self) -> FlexibleCodec:
        return self._codec

    async def __aenter__(self) -> Self:
        await self._executor.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self._executor.aclose()

    # -------------------------------------------------------------------------
    # Payload helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _data(payload: Any, entity: str) -> Result[list[Any], DecodeFailure]:
        """Extract the `data` list from a success payload."""
        if isinstance(payload, list):
            return Success(value=payload)
        if isinstance(payload, Mapping) and "data" in payload:
            data = payload["data"]
            if data is None:
                return Success(value=[])
            if isinstance(data, Mapping):
                return Success(value=[data])
            if isinstance(data, list):
                return Success(value=data)
            return _decode_failure(f"{entity}.data", "list", data)
        return _decode_failure(f"{entity}.data", "response data", payload)

    def _first_or_none(
        self, record_type: type[R], payload: Any
    ) -> Result[R | None, DecodeFailure]:
        entity = _entity(record_type).value
        data = self._data(payload, entity)
        if isinstance(data, Failure):
            return data
        if not data.value:
            return Success(value=None)
        return self._codec.decode_record(record_type, data.value[0])

    def _first_required(
        self, record_type: type[R], payload: Any
    ) -> Result[R, DecodeFailure]:
        entity = _entity(record_type).value
        data = self._data(payload, entity)
        if isinstance(data, Failure):
            return data
        if not data.value:
            return _decode_failure(f"{entity}.data", "record", [])
        return self._codec.decode_record(record_type, data.value[0])

    def _body(self, record_type: type[Any], values: Any) -> dict[str, Any]:
        if isinstance(values, Mapping):
            return self._codec.encode_fields(record_type, values)
        return self._codec.encode_record(values)

    # -------------------------------------------------------------------------
    # Single-record operations
    # -------------------------------------------------------------------------

    async def get_one(
        self, record_type: type[R], record_id: str
    ) -> Result[R | None, PayrixError]:
        """Fetch one record by id; Success(None) when it does not exist.

        Raises:
            ValueError: If record_id is not a valid id.
        """
        return await self.get_one_expanded(record_type, record_id, ())

    async def get_one_expanded(
        self,
        record_type: type[R],
        record_id: str,
        expand: Sequence[str],
    ) -> Result[R | None, PayrixError]:
        """Fetch one record with related records expanded inline.

        Args:
            record_type: Record type to decode.
            record_id: Record id.
            expand: Relations to expand; `a|b` expands `b` inside `a`.

        Raises:
            ValueError: If record_id is not a valid id.
        """
        reference = EntityReference(_entity(record_type), record_id)
        request = PayrixRequest(
            method="GET",
            path=_with_expand(reference.path, expand),
            operation="get_one",
        )
        return await self._executor.execute(
            request, lambda payload: self._first_or_none(record_type, payload)
        )

    async def create(
        self, record_type: type[R], values: Mapping[str, Any] | Any
    ) -> Result[R, PayrixError]:
        """Create a record and return it as stored upstream.

        Args:
            record_type: Record type to create.
            values: Attribute mapping or record instance. Attribute names are
                mapped to wire names; undeclared keys pass through.
        """
        entity = _entity(record_type)
        request = PayrixRequest(
            method="POST",
            path=entity.path,
            operation="create",
            json=self._body(record_type, values),
        )
        return await self._executor.execute(
            request, lambda payload: self._first_required(record_type, payload)
        )

    async def update(
        self,
        record_type: type[R],
        record_id: str,
        values: Mapping[str, Any] | Any,
    ) -> Result[R, PayrixError]:
        """Update fields of a record and return the updated record.

        Raises:
            ValueError: If record_id is not a valid id.
        """
        reference = EntityReference(_entity(record_type), record_id)
        body = self._body(record_type, values)
        body.pop("id", None)
        request = PayrixRequest(
            method="PUT", path=reference.path, operation="update", json=body
        )
        return await self._executor.execute(
            request, lambda payload: self._first_required(record_type, payload)
        )

    async def delete(
        self, record_type: type[R], record_id: str
    ) -> Result[R, PayrixError]:
        """Delete a record and return its last state.

        Raises:
            ValueError: If record_id is not a valid id.
        """
        reference = EntityReference(_entity(record_type), record_id)
        request = PayrixRequest(
            method="DELETE", path=reference.path, operation="delete"
        )
        return await self._executor.execute(
            request, lambda payload: self._first_required(record_type, payload)
        )

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    async def get_page(
        self,
        record_type: type[R],
        *,
        cursor: PaginationCursor | None = None,
        search: SearchInput = None,
        params: Mapping[str, str] | None = None,
        expand: Sequence[str] | None = None,
    ) -> Result[Page[R], PayrixError]:
        """Fetch a single page of records."""
        entity = _entity(record_type)
        cursor = cursor or PaginationCursor(page=1, limit=self._page_limit)
        query = {**(params or {}), **cursor.as_query()}
        request = PayrixRequest(
            method="GET",
            path=_with_expand(entity.path, expand),
            operation="get_page",
            params=query,
            search=_search_text(search),
        )

        def decode(payload: Any) -> Result[Page[R], DecodeFailure]:
            data = self._data(payload, entity.value)
            if isinstance(data, Failure):
                return data
            records = self._codec.decode_records(record_type, data.value)
            if isinstance(records, Failure):
                return records
            info = self._pagination.read(payload)
            return Success(
                value=Page(
                    items=records.value,
                    cursor=cursor,
                    has_more=info.has_more,
                    total_count=info.total_count,
                    current=info.current,
                )
            )

        return await self._executor.execute(request, decode)

    async def get_all(
        self,
        record_type: type[R],
        *,
        search: SearchInput = None,
        params: Mapping[str, str] | None = None,
        expand: Sequence[str] | None = None,
        page_limit: int | None = None,
        max_pages: int | None = None,
    ) -> Result[list[R], PayrixError]:
        """Fetch every record of a listing, following pagination.

        Stops on an empty page or on `hasMore = false`. A page shorter than
        the limit does not end the listing. Records keep server order. At most
        `max_pages` pages are fetched; reaching the cap returns the records
        collected so far.
        """
        entity = _entity(record_type)
        limit = page_limit or self._page_limit
        page_cap = max_pages or self._max_pages
        cursor = PaginationCursor(page=1, limit=limit)
        records: list[R] = []

        for _ in range(page_cap):
            result = await self.get_page(
                record_type,
                cursor=cursor,
                search=search,
                params=params,
                expand=expand,
            )
            if isinstance(result, Failure):
                return result

            page = result.value
            records.extend(page.items)
            if not page.items or page.has_more is False:
                break
            reported = page.current if page.current and page.current > 0 else None
            next_number = (reported or cursor.page) + 1
            cursor = PaginationCursor(page=next_number, limit=limit)
        else:
            self._logger.warning(
                "payrix_listing_page_cap_reached",
                entity=entity.value,
                max_pages=page_cap,
                records=len(records),
            )

        self._logger.debug(
            "payrix_listing_completed",
            entity=entity.value,
            records=len(records),
        )
        return Success(value=records)

    async def search(
        self,
        record_type: type[R],
        search: str | SearchBuilder,
        *,
        expand: Sequence[str] | None = None,
    ) -> Result[list[R], PayrixError]:
        """List every record matching a search expression."""
        return await self.get_all(record_type, search=search, expand=expand)

    async def find_one(
        self,
        record_type: type[R],
        search: str | SearchBuilder,
    ) -> Result[R | None, PayrixError]:
        """Return the first record matching a search expression, or None."""
        result = await self.get_page(
            record_type,
            cursor=PaginationCursor(page=1, limit=1),
            search=search,
        )
        if isinstance(result, Failure):
            return result
        items = result.value.items
        return Success(value=items[0] if items else None)
