"""Job state and the archive/workspace collaborators.

A job owns a private workspace under the server's work directory:

    <work_dir>/<uuid>/            extracted archive contents (the working set)
    <work_dir>/<uuid>/config/     the action config, moved out of the working set
    <work_dir>/<uuid>/output/     everything that goes into the result archive
"""

import shutil
import uuid
import zipfile
from dataclasses import dataclass, field
from pathlib import Path

from pdfbatch.config import ActionConfig
from pdfbatch.constants import (
    CONFIG_DIRNAME,
    CONFIG_GLOB,
    INDEX_SUFFIX,
    MANIFEST_SUFFIX,
    OUTPUT_DIRNAME,
    PDF_SUFFIX,
)
from pdfbatch.errors import ErrorLog
from pdfbatch.exceptions import CleanupError, ConfigError
from pdfbatch.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class JobWorkspace:
    root: Path

    @property
    def output_dir(self) -> Path:
        return self.root / OUTPUT_DIRNAME

    @property
    def config_dir(self) -> Path:
        return self.root / CONFIG_DIRNAME


@dataclass
class Job:
    """One archive being processed.

    Attributes:
        archive_path: The input job archive
        workspace: Private working directories of this job
        out_dir: Where the result archive is copied
        config: Action config; defaults until the archive has been unpacked
        errors: Failures recorded so far, in occurrence order
    """

    archive_path: Path
    workspace: JobWorkspace
    out_dir: Path
    config: ActionConfig = field(default_factory=ActionConfig)
    errors: ErrorLog = field(default_factory=ErrorLog)

    @property
    def name(self) -> str:
        return self.archive_path.name

    @property
    def stem(self) -> str:
        return self.archive_path.stem

    @property
    def index_path(self) -> Path:
        return self.workspace.root / f"{self.stem}{INDEX_SUFFIX}"

    @property
    def manifest_path(self) -> Path:
        return self.workspace.output_dir / f"{self.stem}{MANIFEST_SUFFIX}"

    @property
    def debug(self) -> bool:
        return self.config.enable_debug


def is_pdf(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() == PDF_SUFFIX


def create_workspace(work_dir: Path) -> JobWorkspace:
    """Create a fresh, uniquely named workspace under ``work_dir``."""
    workspace = JobWorkspace(root=work_dir / uuid.uuid4().hex)
    workspace.output_dir.mkdir(parents=True)
    workspace.config_dir.mkdir()
    logger.debug("Created workspace %s", workspace.root)
    return workspace


def unpack_job(archive_path: Path, workspace: JobWorkspace) -> Path:
    """Extract the archive into the workspace and set its action config aside.

    Returns:
        Path of the action config inside ``config/``

    Raises:
        zipfile.BadZipFile: If the archive cannot be read
        ConfigError: If the archive holds no action config
    """
    with zipfile.ZipFile(archive_path) as archive:
        archive.extractall(workspace.root)

    candidates = sorted(p for p in workspace.root.glob(CONFIG_GLOB) if p.is_file())
    if not candidates:
        raise ConfigError(
            f"There is no {CONFIG_GLOB} configuration file",
            context={"archive": archive_path.name},
        )
    if len(candidates) > 1:
        logger.warning(
            "Found %d configuration files, using %s", len(candidates), candidates[0].name
        )

    config_path = workspace.config_dir / candidates[0].name
    shutil.move(str(candidates[0]), str(config_path))
    logger.info("Unpacked %s", archive_path.name)
    return config_path


def list_documents(workspace: JobWorkspace) -> list[Path]:
    """PDF documents of the working set, sorted by name."""
    return sorted(p for p in workspace.root.iterdir() if is_pdf(p))


def pass_through_files(workspace: JobWorkspace, keep: tuple[Path, ...] = ()) -> list[Path]:
    """Move every non-PDF file of the working set into ``output/`` unchanged.

    Args:
        workspace: The job workspace
        keep: Files to leave where they are (e.g. an index the action reads)

    Returns:
        Destination paths of the moved files
    """
    moved = []
    for path in sorted(workspace.root.iterdir()):
        if not path.is_file() or is_pdf(path) or path in keep:
            continue
        destination = workspace.output_dir / path.name
        shutil.move(str(path), str(destination))
        moved.append(destination)
    if moved:
        logger.info("Passed through %d non-PDF file(s)", len(moved))
    return moved


def package_output(job: Job) -> Path:
    """Zip ``output/`` and copy the archive into the job's output directory.

    Returns:
        Path of the copied result archive
    """
    archive_path = job.workspace.root / f"{job.stem}.zip"
    output_dir = job.workspace.output_dir
    with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for path in sorted(output_dir.rglob("*")):
            if path.is_file():
                archive.write(path, arcname=path.relative_to(output_dir).as_posix())

    job.out_dir.mkdir(parents=True, exist_ok=True)
    destination = job.out_dir / archive_path.name
    shutil.copyfile(archive_path, destination)
    logger.info("Created: %s", destination)
    return destination


def cleanup_workspace(workspace: JobWorkspace) -> None:
    """Delete the workspace and everything in it.

    Raises:
        CleanupError: If the directory tree cannot be removed
    """
    try:
        shutil.rmtree(workspace.root)
    except OSError as e:
        raise CleanupError(
            f"Could not delete workspace: {e}",
            context={"workspace": str(workspace.root)},
        ) from e
    logger.debug("Removed workspace %s", workspace.root)
