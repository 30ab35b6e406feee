"""Entity reference value object.

Identifies one upstream record as (entity type, id). Id length varies across
endpoints, so only length and printability are checked.
"""

from dataclasses import dataclass
from urllib.parse import quote

from payrix.core.constants import IDENTIFIER_MAX_LENGTH
from payrix.domain.enums import EntityType


def validate_identifier(value: str) -> str:
    """Validate an entity id.

    Raises:
        ValueError: If the id is empty, longer than 50 characters, or
            contains non-printable characters.
    """
    if not isinstance(value, str):
        raise ValueError(f"Entity id must be a string, got {type(value).__name__}")
    if not value:
        raise ValueError("Entity id cannot be empty")
    if len(value) > IDENTIFIER_MAX_LENGTH:
        raise ValueError(
            f"Entity id cannot exceed {IDENTIFIER_MAX_LENGTH} characters, "
            f"got {len(value)}"
        )
    if not value.isprintable():
        raise ValueError("Entity id contains non-printable characters")
    return value


@dataclass(frozen=True, slots=True)
class EntityReference:
    """Reference to one upstream record.

    Attributes:
        entity_type: Entity kind (endpoint).
        id: Record id, 1-50 printable characters.

    Raises:
        ValueError: If the id is invalid.
    """

    entity_type: EntityType
    id: str

    def __post_init__(self) -> None:
        validate_identifier(self.id)

    @property
    def path(self) -> str:
        """Return the record path, e.g. `customers/t1_cus_123`."""
        return f"{self.entity_type.path}/{quote(self.id, safe='')}"

    def __str__(self) -> str:
        return f"{self.entity_type.value}:{self.id}"
