"""Record contract consumed by the transport and the codec.

A record type is a keyword-constructible dataclass that declares which
endpoint it lives at and how each attribute is encoded on the wire. The
transport needs nothing else to fetch, list, create or update it.

Example:
    @dataclass(frozen=True, slots=True, kw_only=True)
    class Customer:
        ENTITY: ClassVar[EntityType] = EntityType.CUSTOMERS
        FIELDS: ClassVar[Mapping[str, FieldSpec]] = {
            "id": FieldSpec(FieldKind.IDENTIFIER),
            "first": FieldSpec(FieldKind.TEXT),
        }

        id: str | None = None
        first: str | None = None
        raw: Mapping[str, Any] = field(default_factory=dict, repr=False)
"""

from collections.abc import Mapping
from typing import Any, ClassVar, Protocol

from payrix.domain.enums import EntityType
from payrix.domain.value_objects import FieldSpec


class RecordProtocol(Protocol):
    """Typed record with a known entity identifier.

    Attributes:
        ENTITY: Endpoint the record type is served from.
        FIELDS: Attribute name -> FieldSpec, in declaration order.
        id: Record id (None on not-yet-created records).
        raw: Wire mapping the record was decoded from.
    """

    ENTITY: ClassVar[EntityType]
    FIELDS: ClassVar[Mapping[str, FieldSpec]]

    id: str | None
    raw: Mapping[str, Any]

    def __init__(self, **kwargs: Any) -> None: ...
