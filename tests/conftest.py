"""Shared fixtures for pdfbatch tests."""

import json
import logging
import shutil
import tempfile
import zipfile
from pathlib import Path

import pytest
import yaml
from pypdf import PdfWriter
from pypdf.generic import DecodedStreamObject, DictionaryObject, NameObject

from pdfbatch.config import ActionConfig, Directories, ServerConfig, parse_action_config
from pdfbatch.job import Job, create_workspace


# === Helpers ===

def write_pdf(
    path: Path,
    sizes: list[tuple[float, float]] | None = None,
    rotations: list[int] | None = None,
    texts: list[str] | None = None,
) -> Path:
    """Write a PDF with one page per size.

    Args:
        path: Destination file
        sizes: (width, height) per page, default one letter portrait page
        rotations: Stored /Rotate per page
        texts: Text drawn on each page with Helvetica
    """
    sizes = sizes or [(612, 792)]
    writer = PdfWriter()
    for i, (width, height) in enumerate(sizes):
        page = writer.add_blank_page(width=width, height=height)
        if rotations and rotations[i]:
            page.rotate(rotations[i])
        if texts:
            font = DictionaryObject({
                NameObject("/Type"): NameObject("/Font"),
                NameObject("/Subtype"): NameObject("/Type1"),
                NameObject("/BaseFont"): NameObject("/Helvetica"),
            })
            page[NameObject("/Resources")] = DictionaryObject({
                NameObject("/Font"): DictionaryObject({NameObject("/F1"): font}),
            })
            stream = DecodedStreamObject()
            stream.set_data(f"BT /F1 12 Tf 72 700 Td ({texts[i]}) Tj ET".encode("latin-1"))
            page.replace_contents(stream)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        writer.write(f)
    return path


def action_config_dict(action: str | None = None, **settings) -> dict:
    """A job config with one action (or none) enabled and the given Settings sections."""
    flags = {
        name: name == action
        for name in ("Split", "Concatenate", "MakeCopies", "ScaleAndRotate", "SmartSave", "TextConvert")
    }
    return {
        "Author": "tests",
        "Date": "2024-01-01",
        "Description": f"{action} job",
        "EnableDebug": False,
        "Notes": "",
        "ProcessingActions": flags,
        "Settings": settings,
    }


def build_job_archive(
    archive_path: Path,
    files: dict[str, Path | str | bytes],
    config: dict | None = None,
    config_name: str | None = None,
) -> Path:
    """Zip ``files`` (name -> path, text or bytes) plus an action config."""
    archive_path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(archive_path, "w") as archive:
        if config is not None:
            name = config_name or f"{archive_path.stem}.config.json"
            archive.writestr(name, json.dumps(config))
        for name, content in files.items():
            if isinstance(content, Path):
                archive.write(content, arcname=name)
            else:
                archive.writestr(name, content)
    return archive_path


# === Logging ===

@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers that setup_logging attached during a test."""
    yield
    logger = logging.getLogger("pdfbatch")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(logging.NullHandler())


# === Path/Directory Fixtures ===

@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


# === PDF Fixtures ===

@pytest.fixture
def temp_pdf(temp_dir):
    """Create a temporary single-page portrait PDF."""
    return write_pdf(temp_dir / "test.pdf")


@pytest.fixture
def temp_multi_page_pdf(temp_dir):
    """Create a temporary 4-page portrait PDF."""
    return write_pdf(temp_dir / "multi_page.pdf", sizes=[(612, 792)] * 4)


@pytest.fixture
def temp_landscape_pdf(temp_dir):
    """Create a temporary landscape PDF."""
    return write_pdf(temp_dir / "landscape.pdf", sizes=[(792, 612)])


# === Config Fixtures ===

@pytest.fixture
def server_config(temp_dir):
    """Server config with every directory under the temp dir."""
    return ServerConfig(
        directories=Directories(
            log_dir=temp_dir / "log",
            out_dir=temp_dir / "out",
            work_dir=temp_dir / "work",
        )
    )


@pytest.fixture
def server_config_file(temp_dir):
    """Server config YAML file with every directory under the temp dir."""
    config_path = temp_dir / "serverconfig.yaml"
    data = {
        "author": "tests",
        "directories": {
            "log_dir": str(temp_dir / "log"),
            "out_dir": str(temp_dir / "out"),
            "work_dir": str(temp_dir / "work"),
        },
    }
    with open(config_path, "w") as f:
        yaml.dump(data, f)
    return config_path


# === Job Fixtures ===

@pytest.fixture
def make_job(temp_dir):
    """Factory for a job with a fresh workspace.

    Usage:
        job = make_job("batch", config_dict, files={"a.pdf": path})
    """

    def _make(
        stem: str = "batch",
        config: dict | ActionConfig | None = None,
        files: dict[str, Path | str | bytes] | None = None,
    ) -> Job:
        workspace = create_workspace(temp_dir / "work")
        if isinstance(config, dict):
            config = parse_action_config(config)
        job = Job(
            archive_path=temp_dir / f"{stem}.zip",
            workspace=workspace,
            out_dir=temp_dir / "out",
            config=config or ActionConfig(),
        )
        for name, content in (files or {}).items():
            target = workspace.root / name
            if isinstance(content, Path):
                shutil.copyfile(content, target)
            elif isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return job

    return _make


# === Helper Fixtures ===

@pytest.fixture
def make_pdf():
    """Expose ``write_pdf`` to tests."""
    return write_pdf


@pytest.fixture
def make_config():
    """Expose ``action_config_dict`` to tests."""
    return action_config_dict


@pytest.fixture
def make_archive():
    """Expose ``build_job_archive`` to tests."""
    return build_job_archive
