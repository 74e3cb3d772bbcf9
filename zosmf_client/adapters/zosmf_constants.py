"""z/OSMF REST resource paths and request header constants."""

from __future__ import annotations

from typing import Final
from urllib.parse import quote

JOBS_RESOURCE: Final[str] = "/zosmf/restjobs/jobs"
JOBS_SPOOL_FILES_SUFFIX: Final[str] = "/files"
JOBS_SPOOL_CONTENT_SUFFIX: Final[str] = "/records"
WORKFLOW_RESOURCE: Final[str] = "/zosmf/workflow/rest"
WORKFLOW_API_VERSION: Final[str] = "1.0"

HEADER_CSRF: Final[dict[str, str]] = {"X-CSRF-ZOSMF-HEADER": "true"}
HEADER_APPLICATION_JSON: Final[dict[str, str]] = {"Content-Type": "application/json"}
HEADER_TEXT_PLAIN_UTF8: Final[dict[str, str]] = {"Content-Type": "text/plain; charset=utf-8"}
HEADER_INTRDR_MODE_TEXT: Final[dict[str, str]] = {"X-IBM-Intrdr-Mode": "TEXT"}
HEADER_INTRDR_RECFM: Final[str] = "X-IBM-Intrdr-Recfm"
HEADER_INTRDR_LRECL: Final[str] = "X-IBM-Intrdr-Lrecl"

WORKFLOW_CONFLICT_POLICIES: Final[frozenset[str]] = frozenset({"outputFileValue", "existingValue", "leaveConflict"})


def zosmf_job_resource(jobname: str, jobid: str) -> str:
    """Return the REST resource path of one job.

    Job name and id are percent-encoded as single path segments; `#`, `$` and `@`
    are valid in JES job names.

    Args:
        jobname: Job name.
        jobid: Job identifier.

    Returns:
        str: Resource path relative to the z/OSMF base URL.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return f"{JOBS_RESOURCE}/{quote(jobname, safe='')}/{quote(jobid, safe='')}"


def zosmf_workflow_resource(workflow_key: str, zosmf_version: str = WORKFLOW_API_VERSION) -> str:
    """Return the REST resource path of one workflow instance.

    Args:
        workflow_key: Workflow instance key.
        zosmf_version: Workflow REST API version.

    Returns:
        str: Resource path relative to the z/OSMF base URL.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return f"{WORKFLOW_RESOURCE}/{zosmf_version}/workflows/{quote(workflow_key, safe='')}"
