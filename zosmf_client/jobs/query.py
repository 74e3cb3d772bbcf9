"""Job status and spool retrieval over the z/OSMF jobs REST interface."""

from __future__ import annotations

from typing import Any

import structlog

from zosmf_client.adapters import ZosmfRestPort, ZosmfResponseError
from zosmf_client.adapters.zosmf_constants import (
    JOBS_SPOOL_CONTENT_SUFFIX,
    JOBS_SPOOL_FILES_SUFFIX,
    zosmf_job_resource,
)
from zosmf_client.domain import JobDocument, JobIdentity, MissingParameterError, SpoolFileRef


class JobQueryService:
    """Read-only job queries: status snapshot, spool listing and spool content."""

    def __init__(self, rest_adapter: ZosmfRestPort, logger: Any | None = None):
        """Initialize job query service.

        Args:
            rest_adapter: z/OSMF REST port.
            logger: Optional structlog logger.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if rest_adapter is None:
            raise ValueError("rest_adapter must not be None")
        self._rest = rest_adapter
        self._log = logger or structlog.get_logger(__name__)

    def job_get_status(self, identity: JobIdentity) -> JobDocument:
        """Fetch a fresh status snapshot of one job.

        Args:
            identity: Job name and id.

        Returns:
            JobDocument: Current job document.

        Raises:
            MissingParameterError: Raised when job name or id is blank.
            ZosmfAdapterError: Propagated from the REST adapter.
        """

        jobname, jobid = job_query_require_identity(identity.jobname, identity.jobid)
        payload = self._rest.adapter_get_json(zosmf_job_resource(jobname, jobid))
        if not isinstance(payload, dict):
            raise ZosmfResponseError(f"job status response for {jobname}({jobid}) is not a JSON object")
        return JobDocument.from_payload(payload)

    def job_list_spool_files(self, identity: JobIdentity) -> list[SpoolFileRef]:
        """List spool file descriptors of one job in remote enumeration order.

        Args:
            identity: Job name and id.

        Returns:
            list[SpoolFileRef]: Spool descriptors.

        Raises:
            MissingParameterError: Raised when job name or id is blank.
            ZosmfAdapterError: Propagated from the REST adapter.
        """

        jobname, jobid = job_query_require_identity(identity.jobname, identity.jobid)
        payload = self._rest.adapter_get_json(f"{zosmf_job_resource(jobname, jobid)}{JOBS_SPOOL_FILES_SUFFIX}")
        if not isinstance(payload, list):
            raise ZosmfResponseError(f"spool file listing for {jobname}({jobid}) is not a JSON array")
        spool_files = [SpoolFileRef.from_payload(entry) for entry in payload]
        self._log.debug("Listed spool files", jobname=jobname, jobid=jobid, count=len(spool_files))
        return spool_files

    def job_get_spool_content(self, spool_file: SpoolFileRef) -> str:
        """Fetch full text content of one spool file.

        Args:
            spool_file: Spool descriptor.

        Returns:
            str: Spool file content.

        Raises:
            ZosmfAdapterError: Propagated from the REST adapter.
        """

        resource = (
            f"{zosmf_job_resource(spool_file.jobname, spool_file.jobid)}"
            f"{JOBS_SPOOL_FILES_SUFFIX}/{spool_file.id}{JOBS_SPOOL_CONTENT_SUFFIX}"
        )
        return self._rest.adapter_get_text(resource)


def job_query_require_identity(jobname: str | None, jobid: str | None) -> tuple[str, str]:
    """Validate and normalize a job name and id pair.

    Args:
        jobname: Candidate job name.
        jobid: Candidate job id.

    Returns:
        tuple[str, str]: Stripped job name and job id.

    Raises:
        MissingParameterError: Raised when either value is absent or blank.
    """

    normalized_jobname = (jobname or "").strip()
    normalized_jobid = (jobid or "").strip()
    if not normalized_jobname or not normalized_jobid:
        raise MissingParameterError("The job object you provide must contain both 'jobname' and 'jobid'.")
    return normalized_jobname, normalized_jobid
