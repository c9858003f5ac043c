"""Parsers for the ``||``-separated index files shipped in job archives.

Three layouts exist, one record per line:

- concatenation: ``counter||filename``
- split: ``counter||filename||firstPage||lastPage``
- page overrides: ``counter||page||degrees||width||height||scaleX||scaleY||shiftX||shiftY``

Blank lines are skipped. Fields are stripped of surrounding whitespace.
File names must be bare names; they are resolved inside the job workspace.
"""

from dataclasses import dataclass
from pathlib import Path

from pdfbatch.constants import INDEX_SEPARATOR
from pdfbatch.exceptions import IndexFormatError
from pdfbatch.transforms.base import PageOverride


@dataclass(frozen=True)
class ConcatEntry:
    """One document to fold into a concatenation, in index order."""
    counter: int
    filename: str


@dataclass(frozen=True)
class SplitRange:
    """One output document of a split: pages first..last, 1-indexed, inclusive."""
    counter: int
    filename: str
    first_page: int
    last_page: int

    @property
    def page_range(self) -> int:
        return self.last_page - self.first_page


def _read_records(index_path: Path, field_count: int) -> list[tuple[int, list[str]]]:
    """Read an index file into (line number, fields) pairs."""
    if not index_path.exists():
        raise FileNotFoundError(f"Index File : {index_path.name} not found")

    records = []
    with open(index_path, "r", encoding="utf-8-sig") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            parts = [p.strip() for p in line.split(INDEX_SEPARATOR)]
            if len(parts) < field_count:
                raise IndexFormatError(
                    f"Expected {field_count} fields separated by '{INDEX_SEPARATOR}', "
                    f"got {len(parts)}",
                    context={"file": index_path.name, "line": line_no},
                )
            records.append((line_no, parts))
    return records


def _to_int(value: str, name: str, index_path: Path, line_no: int) -> int:
    try:
        return int(value)
    except ValueError:
        raise IndexFormatError(
            f"Field '{name}' must be an integer, got '{value}'",
            context={"file": index_path.name, "line": line_no},
        )


def _to_float(value: str, name: str, index_path: Path, line_no: int) -> float:
    try:
        return float(value)
    except ValueError:
        raise IndexFormatError(
            f"Field '{name}' must be a number, got '{value}'",
            context={"file": index_path.name, "line": line_no},
        )


def _to_filename(value: str, index_path: Path, line_no: int) -> str:
    """Accept only a bare file name, resolved later inside the job workspace."""
    if not value or value in (".", "..") or Path(value).name != value or Path(value).is_absolute():
        raise IndexFormatError(
            f"Field 'filename' must be a plain file name, got '{value}'",
            context={"file": index_path.name, "line": line_no},
        )
    return value


def read_concat_index(index_path: Path) -> list[ConcatEntry]:
    """Read a concatenation index. File order is merge order."""
    entries = []
    for line_no, parts in _read_records(index_path, 2):
        entries.append(ConcatEntry(
            counter=_to_int(parts[0], "counter", index_path, line_no),
            filename=_to_filename(parts[1], index_path, line_no),
        ))
    return entries


def read_split_index(index_path: Path) -> list[SplitRange]:
    """Read a split index."""
    ranges = []
    for line_no, parts in _read_records(index_path, 4):
        ranges.append(SplitRange(
            counter=_to_int(parts[0], "counter", index_path, line_no),
            filename=_to_filename(parts[1], index_path, line_no),
            first_page=_to_int(parts[2], "firstPage", index_path, line_no),
            last_page=_to_int(parts[3], "lastPage", index_path, line_no),
        ))
    return ranges


def read_override_index(index_path: Path) -> list[PageOverride]:
    """Read a per-page override index.

    Entries keep file order; duplicate page numbers are kept as-is.
    """
    overrides = []
    for line_no, parts in _read_records(index_path, 9):
        overrides.append(PageOverride(
            counter=_to_int(parts[0], "counter", index_path, line_no),
            page=_to_int(parts[1], "page", index_path, line_no),
            rotation=_to_int(parts[2], "degrees", index_path, line_no),
            width=_to_float(parts[3], "width", index_path, line_no),
            height=_to_float(parts[4], "height", index_path, line_no),
            scale_x=_to_float(parts[5], "scaleX", index_path, line_no),
            scale_y=_to_float(parts[6], "scaleY", index_path, line_no),
            shift_x=_to_float(parts[7], "shiftX", index_path, line_no),
            shift_y=_to_float(parts[8], "shiftY", index_path, line_no),
        ))
    return overrides
