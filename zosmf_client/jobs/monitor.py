"""Bounded status-poll loop for submitted jobs."""

from __future__ import annotations

import time
from typing import Any

import structlog

from zosmf_client.domain import (
    DEFAULT_JOB_STATUS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_WATCH_DELAY_SECONDS,
    InvalidParameterError,
    JobDocument,
    JobIdentity,
    JobStatus,
    MaxAttemptsExceededError,
    MonitorWaitParms,
    domain_job_status_reached,
)

from .query import JobQueryService, job_query_require_identity


class JobMonitorService:
    """Poll job status at a constant interval until a target status is reached."""

    def __init__(
        self,
        query_service: JobQueryService,
        default_watch_delay_seconds: float = DEFAULT_WATCH_DELAY_SECONDS,
        default_max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        logger: Any | None = None,
    ):
        """Initialize job monitor service.

        Args:
            query_service: Job status query service.
            default_watch_delay_seconds: Poll interval used when a wait does not set one.
            default_max_attempts: Attempt cap used when a wait does not set one.
            logger: Optional structlog logger.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or defaults are invalid.
        """

        if query_service is None:
            raise ValueError("query_service must not be None")
        if default_watch_delay_seconds < 0:
            raise ValueError("default_watch_delay_seconds must be >= 0")
        if default_max_attempts < 1:
            raise ValueError("default_max_attempts must be >= 1")

        self._query = query_service
        self._default_watch_delay_seconds = default_watch_delay_seconds
        self._default_max_attempts = default_max_attempts
        self._log = logger or structlog.get_logger(__name__)

    def job_wait_for_status(self, parms: MonitorWaitParms) -> JobDocument:
        """Poll until the job reaches the target status or attempts run out.

        The first query is issued immediately; the loop sleeps the watch delay
        between queries and never after the last one.

        Args:
            parms: Job identity, target status, interval and attempt cap.

        Returns:
            JobDocument: Snapshot that satisfied the target status.

        Raises:
            MissingParameterError: Raised when job name or id is blank.
            InvalidParameterError: Raised for unknown status or invalid interval/attempts.
            MaxAttemptsExceededError: Raised when the target was not reached in time.
            ZosmfAdapterError: Propagated from status queries.
        """

        jobname, jobid = job_query_require_identity(parms.jobname, parms.jobid)
        target_status = job_monitor_resolve_status(parms.status)
        watch_delay_seconds = self._monitor_resolve_watch_delay(parms.watch_delay_seconds)
        max_attempts = self._monitor_resolve_max_attempts(parms.max_attempts)
        identity = JobIdentity(jobname=jobname, jobid=jobid)

        self._log.debug(
            "Waiting for job status",
            jobname=jobname,
            jobid=jobid,
            status=target_status.value,
            watch_delay_seconds=watch_delay_seconds,
            max_attempts=max_attempts,
        )
        last_status: str | None = None
        for attempt in range(1, max_attempts + 1):
            job = self._query.job_get_status(identity)
            last_status = job.status
            self._log.debug("Polled job status", jobname=jobname, jobid=jobid, attempt=attempt, status=job.status)
            if domain_job_status_reached(job.status, target_status):
                self._log.info(
                    "Job reached status",
                    jobname=jobname,
                    jobid=jobid,
                    status=job.status,
                    retcode=job.retcode,
                    attempts=attempt,
                )
                return job
            if attempt < max_attempts and watch_delay_seconds > 0:
                time.sleep(watch_delay_seconds)

        raise MaxAttemptsExceededError(
            f"Job {jobname}({jobid}) did not reach status {target_status.value} after {max_attempts} attempts; "
            f"last status was {last_status}",
            attempts=max_attempts,
            last_status=last_status,
        )

    def job_wait_for_output(self, job: JobDocument | JobIdentity) -> JobDocument:
        """Wait with default interval and attempts until the job reaches OUTPUT.

        Args:
            job: Job document or identity.

        Returns:
            JobDocument: Snapshot in OUTPUT status.

        Raises:
            MaxAttemptsExceededError: Raised when OUTPUT was not reached in time.
        """

        return self.job_wait_for_status(
            MonitorWaitParms(jobname=job.jobname, jobid=job.jobid, status=JobStatus.OUTPUT)
        )

    def _monitor_resolve_watch_delay(self, watch_delay_seconds: float | None) -> float:
        if watch_delay_seconds is None:
            return self._default_watch_delay_seconds
        if watch_delay_seconds < 0:
            raise InvalidParameterError("watch_delay_seconds must be >= 0")
        return float(watch_delay_seconds)

    def _monitor_resolve_max_attempts(self, max_attempts: int | None) -> int:
        if max_attempts is None:
            return self._default_max_attempts
        if max_attempts < 1:
            raise InvalidParameterError("max_attempts must be >= 1")
        return int(max_attempts)


def job_monitor_resolve_status(status: JobStatus | str | None) -> JobStatus:
    """Resolve a caller-supplied target status.

    Args:
        status: Status enum, status text, or None for the default.

    Returns:
        JobStatus: Target status, OUTPUT when omitted.

    Raises:
        InvalidParameterError: Raised when the status is not a known job status.
    """

    if status is None:
        return DEFAULT_JOB_STATUS
    if isinstance(status, JobStatus):
        return status
    try:
        return JobStatus(str(status).strip().upper())
    except ValueError as error:
        allowed_values = ", ".join(member.value for member in JobStatus)
        raise InvalidParameterError(f"Invalid status `{status}`; expected one of {allowed_values}") from error
