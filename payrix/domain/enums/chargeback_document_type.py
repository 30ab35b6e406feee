"""Chargeback document types (integer codes on the wire)."""

from enum import IntEnum


class ChargebackDocumentType(IntEnum):
    """Kind of evidence document attached to a chargeback."""

    IMAGE = 1
    PDF = 2
    TEXT = 3
    OTHER = 4

    @classmethod
    def from_mime_type(cls, mime_type: str) -> "ChargebackDocumentType":
        """Map a MIME type to the upstream document type."""
        lowered = mime_type.lower()
        if lowered == "application/pdf":
            return cls.PDF
        if lowered == "text/plain":
            return cls.TEXT
        if lowered.startswith("image/"):
            return cls.IMAGE
        return cls.OTHER
