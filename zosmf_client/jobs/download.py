"""Bulk spool download to local files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from zosmf_client.adapters import ZosmfResponseError
from zosmf_client.domain import (
    DEFAULT_DOWNLOAD_DIRECTORY,
    DEFAULT_SPOOL_FILE_EXTENSION,
    DownloadSpoolParms,
    JobIdentity,
    SpoolFileRef,
)

from .query import JobQueryService, job_query_require_identity


class JobDownloadService:
    """Write every spool file of a job below a local directory."""

    def __init__(self, query_service: JobQueryService, logger: Any | None = None):
        if query_service is None:
            raise ValueError("query_service must not be None")
        self._query = query_service
        self._log = logger or structlog.get_logger(__name__)

    def job_download_all_spool_content(self, parms: DownloadSpoolParms) -> list[Path]:
        """Download all spool files of one job, one local file per spool file.

        Files land at `<out_dir>/<jobid>/[<procstep>/][<stepname>/]<ddname><extension>`.

        Args:
            parms: Job identity, output directory and file naming options.

        Returns:
            list[Path]: Written file paths in spool enumeration order.

        Raises:
            MissingParameterError: Raised when job name or id is blank.
            ZosmfResponseError: Raised before any write when a remote name is not a plain path segment.
            ZosmfAdapterError: Propagated from listing or content retrieval.
            OSError: Raised when local files cannot be written.
        """

        jobname, jobid = job_query_require_identity(parms.jobname, parms.jobid)
        extension = job_download_normalize_extension(parms.extension) or DEFAULT_SPOOL_FILE_EXTENSION
        out_dir = Path(parms.out_dir) if parms.out_dir else Path(DEFAULT_DOWNLOAD_DIRECTORY)

        spool_files = self._query.job_list_spool_files(JobIdentity(jobname=jobname, jobid=jobid))
        target_paths = [
            job_download_spool_file_path(
                spool_file=spool_file,
                out_dir=out_dir,
                extension=extension,
                omit_jobid_directory=parms.omit_jobid_directory,
            )
            for spool_file in spool_files
        ]
        written_paths: list[Path] = []
        for spool_file, target_path in zip(spool_files, target_paths):
            content = self._query.job_get_spool_content(spool_file)
            target_path.parent.mkdir(parents=True, exist_ok=True)
            target_path.write_text(content, encoding="utf-8")
            written_paths.append(target_path)

        self._log.info("Downloaded spool content", jobname=jobname, jobid=jobid, files=len(written_paths))
        return written_paths


def job_download_spool_file_path(
    spool_file: SpoolFileRef,
    out_dir: Path,
    extension: str,
    omit_jobid_directory: bool = False,
) -> Path:
    """Return the local path for one downloaded spool file.

    Args:
        spool_file: Spool descriptor.
        out_dir: Download root directory.
        extension: Normalized file extension.
        omit_jobid_directory: Skip the `<jobid>` directory level.

    Returns:
        Path: Target file path.

    Raises:
        ZosmfResponseError: Raised when a remote name is not a plain path segment.
    """

    directory = out_dir if omit_jobid_directory else out_dir / _download_path_segment(spool_file.jobid, "jobid")
    if spool_file.procstep:
        directory = directory / _download_path_segment(spool_file.procstep, "procstep")
    if spool_file.stepname:
        directory = directory / _download_path_segment(spool_file.stepname, "stepname")
    return directory / f"{_download_path_segment(spool_file.ddname, 'ddname')}{extension}"


def job_download_normalize_extension(extension: str | None) -> str | None:
    """Normalize a file extension so that it starts with a dot.

    Args:
        extension: Caller-supplied extension such as `txt` or `.log`.

    Returns:
        str | None: Extension with leading dot, None when blank.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if extension is None:
        return None
    normalized_extension = extension.strip()
    if not normalized_extension:
        return None
    if not normalized_extension.startswith("."):
        normalized_extension = f".{normalized_extension}"
    return normalized_extension


def _download_path_segment(value: str, field_name: str) -> str:
    # remote names must stay below out_dir
    if not value or value in (".", "..") or "/" in value or "\\" in value or "\x00" in value:
        raise ZosmfResponseError(f"spool file {field_name} `{value}` is not a valid local path segment")
    return value
