"""Customer record."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from payrix.domain.enums import EntityType, FieldKind
from payrix.domain.value_objects import FieldSpec, PayrixDate


@dataclass(frozen=True, slots=True, kw_only=True)
class Customer:
    """Customer of a merchant (`/customers`).

    Attributes:
        id: Customer id.
        merchant: Owning merchant id.
        first, middle, last, company: Name fields.
        email, phone: Contact details.
        address1, address2, city, state, zip, country: Postal address. `zip`
            arrives as a number for numeric postal codes.
        custom: Free-form custom data.
        created, modified: Timestamps.
        inactive, frozen: Status flags.
        raw: Wire mapping the record was decoded from.
    """

    ENTITY: ClassVar[EntityType] = EntityType.CUSTOMERS
    FIELDS: ClassVar[Mapping[str, FieldSpec]] = {
        "id": FieldSpec(FieldKind.IDENTIFIER, required=True),
        "merchant": FieldSpec(FieldKind.RELATION),
        "login": FieldSpec(FieldKind.RELATION),
        "first": FieldSpec(FieldKind.TEXT),
        "middle": FieldSpec(FieldKind.TEXT),
        "last": FieldSpec(FieldKind.TEXT),
        "company": FieldSpec(FieldKind.TEXT),
        "email": FieldSpec(FieldKind.TEXT),
        "phone": FieldSpec(FieldKind.TEXT),
        "address1": FieldSpec(FieldKind.TEXT),
        "address2": FieldSpec(FieldKind.TEXT),
        "city": FieldSpec(FieldKind.TEXT),
        "state": FieldSpec(FieldKind.TEXT),
        "zip": FieldSpec(FieldKind.TEXT),
        "country": FieldSpec(FieldKind.TEXT),
        "custom": FieldSpec(FieldKind.TEXT),
        "created": FieldSpec(FieldKind.TIMESTAMP),
        "modified": FieldSpec(FieldKind.TIMESTAMP),
        "inactive": FieldSpec(FieldKind.BOOLEAN),
        "frozen": FieldSpec(FieldKind.BOOLEAN),
    }

    id: str | None = None
    merchant: str | Mapping[str, Any] | None = None
    login: str | Mapping[str, Any] | None = None
    first: str | None = None
    middle: str | None = None
    last: str | None = None
    company: str | None = None
    email: str | None = None
    phone: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    custom: str | None = None
    created: PayrixDate | None = None
    modified: PayrixDate | None = None
    inactive: bool | None = None
    frozen: bool | None = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first, self.middle, self.last) if part)
