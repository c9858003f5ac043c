"""Error aggregation and the job error manifest.

Every stage of a job catches failures at its own boundary and hands them to
the job's ErrorLog. The log is append-only; once it holds a record, later
stages that would touch documents are skipped. When a job ends with at least
one record, the log is written out as a JSON manifest next to the outputs.
"""

import json
import traceback
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from pdfbatch.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ErrorRecord:
    """One recorded failure.

    Attributes:
        timestamp: ISO-8601 local time of the failure
        filename: File being processed, or the archive name for job-level steps
        step: Pipeline step that failed (e.g. "unpack", "select_action", "split")
        code: Stable error code, None for validation records
        message: Human-readable description
        trace: Formatted traceback, None for validation records
        module: Component that produced the record
    """

    timestamp: str
    filename: str
    step: str
    code: str | None
    message: str
    trace: str | None
    module: str

    def to_dict(self, debug: bool = False) -> dict[str, Any]:
        """Serialize with the manifest's key names.

        Traces are blanked unless ``debug`` is set.
        """
        trace = self.trace
        if trace is not None and not debug:
            trace = ""
        return {
            "TimeStamp": self.timestamp,
            "FileName": self.filename,
            "ActiveStep": self.step,
            "Code": self.code,
            "Message": self.message,
            "StackTrace": trace,
            "Module": self.module,
        }


def error_code(exc: BaseException) -> str:
    """Stable code for an exception: its ``code`` attribute or its class name."""
    code = getattr(exc, "code", None)
    if isinstance(code, str) and code:
        return code
    return type(exc).__name__


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


class ErrorLog:
    """Append-only list of error records for one job."""

    def __init__(self) -> None:
        self._records: list[ErrorRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def has_errors(self) -> bool:
        return bool(self._records)

    @property
    def records(self) -> list[ErrorRecord]:
        """Records in occurrence order (a copy)."""
        return list(self._records)

    def record_failure(
        self,
        exc: BaseException,
        filename: str,
        step: str,
        module: str,
    ) -> ErrorRecord:
        """Record a caught exception."""
        message = getattr(exc, "message", None) or str(exc) or type(exc).__name__
        record = ErrorRecord(
            timestamp=_now(),
            filename=filename,
            step=step,
            code=error_code(exc),
            message=message,
            trace="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            module=module,
        )
        self._records.append(record)
        logger.error("%s failed for %s: %s", step, filename, message)
        return record

    def record_validation(self, message: str, filename: str, step: str, module: str) -> ErrorRecord:
        """Record a validation failure that has no exception behind it."""
        record = ErrorRecord(
            timestamp=_now(),
            filename=filename,
            step=step,
            code=None,
            message=message,
            trace=None,
            module=module,
        )
        self._records.append(record)
        logger.error("%s", message)
        return record

    def write_manifest(self, path: Path, debug: bool = False) -> Path | None:
        """Write the records as a JSON array.

        Nothing is written when the log is empty.

        Returns:
            The manifest path, or None when there was nothing to write
        """
        if not self._records:
            return None

        path.parent.mkdir(parents=True, exist_ok=True)
        payload = [record.to_dict(debug) for record in self._records]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        logger.info("Wrote error manifest with %d record(s): %s", len(payload), path.name)
        return path
