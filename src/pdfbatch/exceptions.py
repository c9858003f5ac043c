"""Unified exception hierarchy for pdfbatch.

All pdfbatch exceptions inherit from PdfBatchError, enabling:
- Catching all pdfbatch errors with `except PdfBatchError`
- Error context preservation via the `context` attribute
- A stable `code` for the error manifest
- Causality chains via `raise ... from e` patterns
"""

from typing import Any


class PdfBatchError(Exception):
    """Base exception for all pdfbatch errors.

    Args:
        message: Human-readable error description
        context: Optional dict of contextual information (file, step, etc.)
    """

    code = "PDFBATCH"

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        base = super().__str__()
        if self.context:
            details = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base} [{details}]"
        return base


class ConfigError(PdfBatchError):
    """Raised when configuration is missing, unreadable or invalid."""

    code = "CONFIG"


class IndexFormatError(ConfigError):
    """Raised when an index file line cannot be parsed."""

    code = "INDEX_FORMAT"


class PreconditionError(PdfBatchError):
    """Raised when the job's working set does not fit the selected action."""

    code = "PRECONDITION"


class TransformError(PdfBatchError):
    """Raised when a page transformation request cannot be carried out."""

    code = "TRANSFORM"


class TransformPolicyError(TransformError):
    """Raised when a request combines options the trigger policy cannot express."""

    code = "TRANSFORM_POLICY"


class SplitRangeError(PdfBatchError):
    """Raised when a split range does not fit inside the source document.

    Attributes:
        range_index: Counter of the offending index entry
        filename: Output file name of the offending entry
        first_page: Requested first page (1-indexed)
        last_page: Requested last page (1-indexed, inclusive)
        page_count: Actual page count of the source document
    """

    code = "SPLIT_RANGE"

    def __init__(
        self,
        range_index: int,
        filename: str,
        first_page: int,
        last_page: int,
        page_count: int,
    ):
        self.range_index = range_index
        self.filename = filename
        self.first_page = first_page
        self.last_page = last_page
        self.page_count = page_count
        super().__init__(
            f"Range {range_index} ({filename}) requests pages {first_page}-{last_page} "
            f"but the document has {page_count} pages",
            context={"range": range_index, "file": filename, "pages": page_count},
        )


class MergeError(PdfBatchError):
    """Raised when folding one unit into a merged output fails.

    Attributes:
        kind: "Annotation" when inserting the break marker failed,
            "Merging" when appending the unit's pages failed
        position: 1-based position of the unit in the merge order
        filename: File name of the unit
    """

    ANNOTATION = "Annotation"
    MERGING = "Merging"

    def __init__(self, kind: str, position: int, filename: str, reason: str = ""):
        self.kind = kind
        self.position = position
        self.filename = filename
        message = f"{kind} failed for unit {position} ({filename})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, context={"step": kind, "position": position})

    @property
    def code(self) -> str:  # type: ignore[override]
        return "ANNOTATION" if self.kind == self.ANNOTATION else "MERGE"


class CleanupError(PdfBatchError):
    """Raised when the job workspace cannot be removed."""

    code = "CLEANUP"
