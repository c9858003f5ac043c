"""Job orchestration for pdfbatch.

A job moves through fixed stages: unpack, select action, execute, write the
error manifest, package, clean up. Every stage records its own failures in
the job's ErrorLog. Document stages are skipped once anything is recorded,
while the manifest and packaging always run. Only a failed cleanup changes
the exit status.
"""

import zipfile
from pathlib import Path

from pdfbatch.actions import get_action
from pdfbatch.config import ProcessingAction, ServerConfig, load_action_config
from pdfbatch.exceptions import CleanupError
from pdfbatch.job import Job, cleanup_workspace, create_workspace, package_output, unpack_job
from pdfbatch.logging_config import get_logger, set_job_context
from pdfbatch.selector import select_action

logger = get_logger(__name__)


def unpack_and_configure(job: Job) -> None:
    """Extract the archive and load its action config into ``job.config``.

    On failure the job keeps the default config, which enables no action.
    """
    try:
        config_path = unpack_job(job.archive_path, job.workspace)
    except Exception as e:
        job.errors.record_failure(e, job.name, "unpack", "job")
        return

    try:
        job.config = load_action_config(config_path)
    except Exception as e:
        job.errors.record_failure(e, config_path.name, "load_config", "config")
        return

    if job.config.description:
        logger.info("Job: %s", job.config.description)
    if job.config.enable_debug:
        logger.debug("Debug enabled for %s", job.name)


def choose_action(job: Job) -> ProcessingAction | None:
    """Run the action selector; a failed selection is recorded, not raised."""
    if job.errors.has_errors:
        return None

    selection = select_action(job.config)
    if not selection.ok:
        job.errors.record_validation(selection.error or "", job.name, "select_action", "selector")
        return None

    logger.info("Action: %s", selection.action.value)
    return selection.action


def execute_action(job: Job, action: ProcessingAction) -> None:
    if job.errors.has_errors:
        return

    executor = get_action(action)(job)
    try:
        executor.run()
    except Exception as e:
        job.errors.record_failure(e, job.name, action.value, executor.module)


def finish_job(job: Job) -> Path | None:
    """Write the manifest when needed and package the output.

    Returns:
        Path of the result archive, or None if packaging failed
    """
    if job.errors.has_errors:
        try:
            job.errors.write_manifest(job.manifest_path, debug=job.debug)
        except OSError as e:
            logger.error("Could not write error manifest: %s", e)

    try:
        return package_output(job)
    except (OSError, zipfile.BadZipFile) as e:
        logger.error("Packaging failed: %s", e)
        return None


def run_job(archive_path: Path, server_config: ServerConfig) -> int:
    """Process one job archive from start to finish.

    Args:
        archive_path: The job archive
        server_config: Directories to work in and deliver to

    Returns:
        Exit status: 0, or 1 if the workspace could not be removed
    """
    dirs = server_config.directories
    workspace = create_workspace(dirs.work_dir)
    job = Job(archive_path=archive_path, workspace=workspace, out_dir=dirs.out_dir)
    set_job_context(job.name)
    logger.info("Processing: %s", job.name)

    status = 0
    try:
        unpack_and_configure(job)
        action = choose_action(job)
        if action is not None:
            execute_action(job, action)
        finish_job(job)

        if job.errors.has_errors:
            logger.info("Finished %s with %d error(s)", job.name, len(job.errors))
        else:
            logger.info("Finished %s", job.name)
    finally:
        try:
            cleanup_workspace(workspace)
        except CleanupError as e:
            logger.error("%s", e)
            status = 1
        set_job_context(None)
    return status
