"""Evidence for chargeback representment.

Evidence is a required explanatory message plus up to eight supporting
documents. Limits are checked locally, before anything is sent, so a bad
upload never leaves a half-posted representment behind.

Limits:
    - message must not be blank
    - at most 8 documents
    - at most 1 MiB per document, 8 MiB in total
    - PDF, TIFF, PNG, JPEG or GIF only

Usage:
    evidence = Evidence(
        message="Goods delivered, tracking 1Z999",
        documents=(
            EvidenceDocument(
                name="receipt.pdf", content=pdf_bytes, mime_type="application/pdf"
            ),
        ),
    )
    match evidence.validate():
        case Failure(error=error):
            print(error.reason)
"""

import base64
import binascii
from dataclasses import dataclass, field
from pathlib import Path

from payrix.core.enums import ErrorCode
from payrix.core.result import Failure, Result, Success
from payrix.domain.enums import ChargebackDocumentType
from payrix.domain.errors import EvidenceInvalid

MAX_DOCUMENTS = 8
MAX_DOCUMENT_SIZE = 1_048_576  # 1 MiB
MAX_TOTAL_SIZE = 8_388_608  # 8 MiB

SUPPORTED_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "image/tiff",
        "image/tif",
        "image/png",
        "image/jpeg",
        "image/jpg",
        "image/gif",
    }
)

_EXTENSION_MIME_TYPES = {
    "pdf": "application/pdf",
    "tif": "image/tiff",
    "tiff": "image/tiff",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
}


def _invalid(reason: str, message: str) -> Failure[EvidenceInvalid]:
    return Failure(
        error=EvidenceInvalid(
            code=ErrorCode.EVIDENCE_INVALID,
            message=message,
            reason=reason,
        )
    )


def mime_type_for_filename(filename: str) -> str | None:
    """Infer the MIME type from a file extension (case-insensitive)."""
    _, dot, extension = filename.rpartition(".")
    if not dot:
        return None
    return _EXTENSION_MIME_TYPES.get(extension.lower())


@dataclass(frozen=True, slots=True, kw_only=True)
class EvidenceDocument:
    """One supporting document.

    Attributes:
        name: File name shown to the card network.
        content: Raw file bytes.
        mime_type: MIME type of the content.
    """

    name: str
    content: bytes = field(repr=False)
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def document_type(self) -> ChargebackDocumentType:
        return ChargebackDocumentType.from_mime_type(self.mime_type)

    def encoded(self) -> str:
        """Return the content base64 encoded, as the upstream expects."""
        return base64.b64encode(self.content).decode("ascii")

    def validate(self) -> Result[None, EvidenceInvalid]:
        """Check size and MIME type of this document."""
        if self.size > MAX_DOCUMENT_SIZE:
            return _invalid(
                "document_too_large",
                f"Document '{self.name}' exceeds {MAX_DOCUMENT_SIZE} bytes "
                f"(actual: {self.size} bytes)",
            )
        if self.mime_type.lower() not in SUPPORTED_MIME_TYPES:
            return _invalid(
                "unsupported_mime_type",
                f"Document '{self.name}' has unsupported MIME type "
                f"'{self.mime_type}'",
            )
        return Success(value=None)

    @classmethod
    def from_bytes(
        cls, filename: str, content: bytes
    ) -> Result["EvidenceDocument", EvidenceInvalid]:
        """Build a validated document, inferring the MIME type from the name."""
        mime_type = mime_type_for_filename(filename)
        if mime_type is None:
            return _invalid(
                "unsupported_file_type",
                f"Cannot infer a supported MIME type from '{filename}'",
            )
        document = cls(name=filename, content=content, mime_type=mime_type)
        validation = document.validate()
        if isinstance(validation, Failure):
            return validation
        return Success(value=document)

    @classmethod
    def from_path(cls, path: str | Path) -> Result["EvidenceDocument", EvidenceInvalid]:
        """Read a file and build a validated document from it.

        Raises:
            OSError: If the file cannot be read.
        """
        path = Path(path)
        return cls.from_bytes(path.name, path.read_bytes())

    @classmethod
    def from_data_url(
        cls, filename: str, data_url: str
    ) -> Result["EvidenceDocument", EvidenceInvalid]:
        """Build a validated document from a `data:<mime>;base64,<data>` URL.

        Browser uploads read with FileReader.readAsDataURL() arrive in this
        form. Only base64 payloads are accepted.
        """
        if not data_url.startswith("data:"):
            return _invalid("invalid_data_url", "Data URL must start with 'data:'")
        header, comma, payload = data_url.removeprefix("data:").partition(",")
        if not comma:
            return _invalid("invalid_data_url", "Data URL is missing ','")

        parts = header.split(";")
        if "base64" not in parts[1:]:
            return _invalid(
                "invalid_data_url", "Only base64-encoded data URLs are supported"
            )
        try:
            content = base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            return _invalid("invalid_data_url", f"Invalid base64 in data URL: {e}")

        document = cls(
            name=filename,
            content=content,
            mime_type=parts[0] or "application/octet-stream",
        )
        validation = document.validate()
        if isinstance(validation, Failure):
            return validation
        return Success(value=document)


@dataclass(frozen=True, slots=True, kw_only=True)
class Evidence:
    """Message and documents submitted with a representment.

    Attributes:
        message: Explanation of why the chargeback should be reversed.
        documents: Supporting documents, in upload order.
    """

    message: str
    documents: tuple[EvidenceDocument, ...] = ()

    @property
    def total_size(self) -> int:
        return sum(document.size for document in self.documents)

    def with_document(self, document: EvidenceDocument) -> "Evidence":
        """Return a copy with one more document appended."""
        return Evidence(message=self.message, documents=(*self.documents, document))

    def validate(self) -> Result[None, EvidenceInvalid]:
        """Check every evidence limit; the first violation is returned."""
        if not self.message.strip():
            return _invalid("empty_message", "Evidence message cannot be empty")
        if len(self.documents) > MAX_DOCUMENTS:
            return _invalid(
                "too_many_documents",
                f"Too many documents: {len(self.documents)} "
                f"(maximum: {MAX_DOCUMENTS})",
            )
        if self.total_size > MAX_TOTAL_SIZE:
            return _invalid(
                "total_too_large",
                f"Total document size {self.total_size} bytes exceeds "
                f"{MAX_TOTAL_SIZE} bytes",
            )
        for document in self.documents:
            validation = document.validate()
            if isinstance(validation, Failure):
                return validation
        return Success(value=None)
