"""Shared pypdf helpers for the action executors."""

from io import BytesIO
from pathlib import Path

from pypdf import PdfReader, PdfWriter
from pypdf.annotations import Text

from pdfbatch.config import ConcatenationSettings
from pdfbatch.exceptions import MergeError


def write_optimized(writer: PdfWriter, path: Path) -> Path:
    """Write ``writer`` with duplicate objects merged and content streams compressed."""
    for page in writer.pages:
        page.compress_content_streams()
    writer.compress_identical_objects()
    with open(path, "wb") as f:
        writer.write(f)
    return path


def write_document(writer: PdfWriter, path: Path) -> Path:
    with open(path, "wb") as f:
        writer.write(f)
    return path


def annotate_unit(reader: PdfReader, break_text: str, filename: str) -> PdfReader:
    """Return a copy of ``reader`` with a break marker on its first page.

    The marker is a zero-size text annotation titled ``break_text`` whose
    contents is the unit's file name.
    """
    writer = PdfWriter(clone_from=reader)
    writer.add_annotation(
        0,
        Text(rect=(0, 0, 0, 0), text=filename, title_bar=break_text),
    )
    buffer = BytesIO()
    writer.write(buffer)
    buffer.seek(0)
    return PdfReader(buffer)


def fold_unit(
    merged: PdfWriter,
    reader: PdfReader,
    position: int,
    filename: str,
    settings: ConcatenationSettings,
) -> None:
    """Append one unit to a merged document, marking it first when configured.

    Raises:
        MergeError: With kind "Annotation" or "Merging" depending on which
            step failed
    """
    unit = reader
    if settings.add_doc_break:
        try:
            unit = annotate_unit(reader, settings.break_text, filename)
        except Exception as e:
            raise MergeError(MergeError.ANNOTATION, position, filename, str(e)) from e

    try:
        merged.append(unit, import_outline=False)
    except Exception as e:
        raise MergeError(MergeError.MERGING, position, filename, str(e)) from e


def flatten_form_fields(writer: PdfWriter) -> bool:
    """Burn form field appearances into page content and drop the form.

    Returns:
        True if the document had a form
    """
    if "/AcroForm" not in writer.root_object:
        return False

    values: dict = {}
    for name, field in (writer.get_fields() or {}).items():
        if field.get("/FT") == "/Btn":
            # Checkboxes and radios keep their current state
            values[name] = str(field.get("/V", "/Off"))
        else:
            values[name] = None
    if values:
        writer.update_page_form_field_values(None, values, auto_regenerate=False, flatten=True)

    writer.remove_annotations(subtypes="/Widget")
    del writer.root_object["/AcroForm"]
    return True


def strip_comments(writer: PdfWriter) -> None:
    """Remove every annotation and the outline tree."""
    writer.remove_annotations(subtypes=None)
    if "/Outlines" in writer.root_object:
        del writer.root_object["/Outlines"]


def discard(paths: list[Path]) -> None:
    """Delete speculative outputs of a failed unit."""
    for path in paths:
        path.unlink(missing_ok=True)
