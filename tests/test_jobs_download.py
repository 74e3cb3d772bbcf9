"""Regression tests for spool download layout and query parsing."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import pytest

from zosmf_client.adapters import ZosmfResponseError
from zosmf_client.domain import DownloadSpoolParms, JobIdentity, SpoolFileRef
from zosmf_client.jobs import (
    JobDownloadService,
    JobQueryService,
    job_download_normalize_extension,
    job_download_spool_file_path,
)

_SPOOL_LISTING = [
    {"jobname": "TESTJOB", "jobid": "JOB00007", "id": 2, "ddname": "JESMSGLG", "stepname": "JES2", "record-count": 14},
    {"jobname": "TESTJOB", "jobid": "JOB00007", "id": 102, "ddname": "SYSPRINT", "stepname": "STEP1", "procstep": "PROC1"},
    {"jobname": "TESTJOB", "jobid": "JOB00007", "id": 103, "ddname": "SYSOUT"},
]


class _StubRestAdapter:
    def __init__(self, listing: Any):
        self._listing = listing
        self.resources: list[str] = []

    def adapter_get_json(self, resource: str, headers: Mapping[str, str] | None = None) -> Any:
        self.resources.append(resource)
        return self._listing

    def adapter_get_text(self, resource: str, headers: Mapping[str, str] | None = None) -> str:
        self.resources.append(resource)
        return f"records from {resource}\n"

    def adapter_put_json(self, resource: str, payload: Any, headers: Mapping[str, str] | None = None) -> Any:
        raise AssertionError("unexpected PUT")


def test_jobs_download_writes_one_file_per_spool_file(tmp_path: Path) -> None:
    """Write spool files below `<dir>/<jobid>/[procstep/][stepname/]<ddname>.txt`.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate file layout and content.

    Raises:
        AssertionError: Raised when layout or content is incorrect.
    """

    rest_adapter = _StubRestAdapter(_SPOOL_LISTING)
    download_service = JobDownloadService(query_service=JobQueryService(rest_adapter=rest_adapter))

    written_paths = download_service.job_download_all_spool_content(
        DownloadSpoolParms(jobname="TESTJOB", jobid="JOB00007", out_dir=tmp_path)
    )

    assert written_paths == [
        tmp_path / "JOB00007" / "JES2" / "JESMSGLG.txt",
        tmp_path / "JOB00007" / "PROC1" / "STEP1" / "SYSPRINT.txt",
        tmp_path / "JOB00007" / "SYSOUT.txt",
    ]
    assert written_paths[1].read_text(encoding="utf-8") == (
        "records from /zosmf/restjobs/jobs/TESTJOB/JOB00007/files/102/records\n"
    )
    assert rest_adapter.resources[0] == "/zosmf/restjobs/jobs/TESTJOB/JOB00007/files"


def test_jobs_download_omits_jobid_directory_and_uses_extension(tmp_path: Path) -> None:
    """Honor omitted job id directory and custom extension."""

    download_service = JobDownloadService(query_service=JobQueryService(rest_adapter=_StubRestAdapter(_SPOOL_LISTING)))

    written_paths = download_service.job_download_all_spool_content(
        DownloadSpoolParms(
            jobname="TESTJOB",
            jobid="JOB00007",
            out_dir=str(tmp_path),
            extension="log",
            omit_jobid_directory=True,
        )
    )

    assert written_paths[2] == tmp_path / "SYSOUT.log"
    assert all(path.exists() for path in written_paths)


@pytest.mark.parametrize(
    ("extension", "expected"),
    [(None, None), ("", None), ("  ", None), ("txt", ".txt"), (".log", ".log"), (" out ", ".out")],
)
def test_jobs_download_normalize_extension(extension: str | None, expected: str | None) -> None:
    """Prefix extensions with a dot and drop blank values."""

    assert job_download_normalize_extension(extension) == expected


def test_jobs_download_spool_file_path_without_step_names() -> None:
    """Place spool files without step names directly below the job directory."""

    spool_file = SpoolFileRef(jobname="TESTJOB", jobid="JOB00007", id=1, ddname="JESMSGLG")

    assert job_download_spool_file_path(spool_file, Path("out"), ".txt") == Path("out/JOB00007/JESMSGLG.txt")


def test_jobs_query_rejects_non_list_spool_listing() -> None:
    """Raise response contract error when spool listing is not a JSON array."""

    query_service = JobQueryService(rest_adapter=_StubRestAdapter({"items": []}))

    with pytest.raises(ZosmfResponseError, match="not a JSON array"):
        query_service.job_list_spool_files(JobIdentity(jobname="TESTJOB", jobid="JOB00007"))


def test_jobs_query_parses_spool_listing_fields() -> None:
    """Parse spool listing entries into descriptors in listing order."""

    query_service = JobQueryService(rest_adapter=_StubRestAdapter(_SPOOL_LISTING))

    spool_files = query_service.job_list_spool_files(JobIdentity(jobname="TESTJOB", jobid="JOB00007"))

    assert [spool_file.id for spool_file in spool_files] == [2, 102, 103]
    assert spool_files[0].record_count == 14
    assert spool_files[1].procstep == "PROC1"
    assert spool_files[2].stepname is None


@pytest.mark.parametrize(
    "unsafe_entry",
    [
        {"ddname": "SYSOUT", "stepname": ".."},
        {"ddname": "../escape"},
        {"ddname": "SYSOUT", "procstep": "a\\b"},
        {"ddname": "."},
    ],
)
def test_jobs_download_rejects_unsafe_remote_names_before_writing(
    tmp_path: Path,
    unsafe_entry: dict[str, str],
) -> None:
    """Reject remote names that would leave the download directory, before any file is written.

    Args:
        tmp_path: Pytest temporary directory fixture.
        unsafe_entry: Spool listing fields with a path-escaping value.

    Returns:
        None: Assertions validate rejection and absence of written files.

    Raises:
        AssertionError: Raised when an unsafe name reaches the filesystem.
    """

    listing = [
        _SPOOL_LISTING[0],
        {"jobname": "TESTJOB", "jobid": "JOB00007", "id": 200, **unsafe_entry},
    ]
    out_dir = tmp_path / "out"
    download_service = JobDownloadService(query_service=JobQueryService(rest_adapter=_StubRestAdapter(listing)))

    with pytest.raises(ZosmfResponseError, match="not a valid local path segment"):
        download_service.job_download_all_spool_content(
            DownloadSpoolParms(jobname="TESTJOB", jobid="JOB00007", out_dir=out_dir)
        )

    assert list(tmp_path.rglob("*")) == []
