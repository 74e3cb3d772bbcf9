"""Job submission through the z/OSMF internal reader and post-submission option handling."""

from __future__ import annotations

from typing import Any

import structlog

from zosmf_client.adapters import ZosmfResponseError, ZosmfRestPort
from zosmf_client.adapters.zosmf_constants import (
    HEADER_APPLICATION_JSON,
    HEADER_INTRDR_LRECL,
    HEADER_INTRDR_MODE_TEXT,
    HEADER_INTRDR_RECFM,
    HEADER_TEXT_PLAIN_UTF8,
    JOBS_RESOURCE,
)
from zosmf_client.domain import (
    DEFAULT_INTERNAL_READER_LRECL,
    DEFAULT_INTERNAL_READER_RECFM,
    PROGRESS_SEVENTY_PERCENT,
    PROGRESS_THIRTY_PERCENT,
    DownloadSpoolParms,
    JobDocument,
    JobStatus,
    MissingParameterError,
    MonitorWaitParms,
    SpoolFileContent,
    SubmitOptions,
)

from .download import JobDownloadService, job_download_normalize_extension
from .monitor import JobMonitorService
from .query import JobQueryService

_MISSING_JCL_MESSAGE = "No JCL provided. You must provide a JCL string to submit."
_MISSING_DATASET_MESSAGE = "You must provide a data set containing JCL to submit."


class JobSubmitService:
    """Submit jobs by data set or literal JCL and resolve post-submission options."""

    def __init__(
        self,
        rest_adapter: ZosmfRestPort,
        query_service: JobQueryService,
        monitor_service: JobMonitorService,
        download_service: JobDownloadService,
        logger: Any | None = None,
    ):
        """Initialize job submit service.

        Args:
            rest_adapter: z/OSMF REST port.
            query_service: Job status and spool query service.
            monitor_service: Job status poll service.
            download_service: Bulk spool download service.
            logger: Optional structlog logger.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if rest_adapter is None:
            raise ValueError("rest_adapter must not be None")
        if query_service is None:
            raise ValueError("query_service must not be None")
        if monitor_service is None:
            raise ValueError("monitor_service must not be None")
        if download_service is None:
            raise ValueError("download_service must not be None")

        self._rest = rest_adapter
        self._query = query_service
        self._monitor = monitor_service
        self._download = download_service
        self._log = logger or structlog.get_logger(__name__)

    def job_submit_dataset(self, job_dataset: str | None) -> JobDocument:
        """Submit JCL stored in a z/OS data set.

        Args:
            job_dataset: Fully qualified data set name, optionally with member, e.g. `IBMUSER.JCL(IEFBR14)`.

        Returns:
            JobDocument: Job document of the submitted job.

        Raises:
            MissingParameterError: Raised when the data set name is absent or blank.
            ZosmfAdapterError: Propagated from the REST adapter.
        """

        normalized_dataset = (job_dataset or "").strip()
        if not normalized_dataset:
            raise MissingParameterError(_MISSING_DATASET_MESSAGE)

        self._log.debug("Submitting job from data set", dataset=normalized_dataset)
        payload = self._rest.adapter_put_json(
            JOBS_RESOURCE,
            {"file": f"//'{normalized_dataset}'"},
            headers=HEADER_APPLICATION_JSON,
        )
        return self._submit_parse_job(payload)

    def job_submit_jcl(
        self,
        jcl: str | None,
        internal_reader_recfm: str | None = None,
        internal_reader_lrecl: str | None = None,
    ) -> JobDocument:
        """Submit literal JCL text to the internal reader.

        Args:
            jcl: JCL text.
            internal_reader_recfm: Record format, `F` (default) or `V`.
            internal_reader_lrecl: Logical record length, `80` by default.

        Returns:
            JobDocument: Job document of the submitted job.

        Raises:
            MissingParameterError: Raised when the JCL is absent or empty.
            ZosmfAdapterError: Propagated from the REST adapter.
        """

        if not jcl:
            raise MissingParameterError(_MISSING_JCL_MESSAGE)

        headers = job_submit_build_jcl_headers(
            internal_reader_recfm=internal_reader_recfm,
            internal_reader_lrecl=internal_reader_lrecl,
        )
        self._log.debug(
            "Submitting JCL",
            jcl_length=len(jcl),
            recfm=headers[HEADER_INTRDR_RECFM],
            lrecl=headers[HEADER_INTRDR_LRECL],
        )
        payload = self._rest.adapter_put_json(JOBS_RESOURCE, jcl, headers=headers)
        return self._submit_parse_job(payload)

    def job_submit_jcl_string(
        self,
        jcl: str | None,
        options: SubmitOptions,
        internal_reader_recfm: str | None = None,
        internal_reader_lrecl: str | None = None,
    ) -> JobDocument | list[SpoolFileContent]:
        """Submit literal JCL and apply post-submission options.

        Args:
            jcl: JCL text.
            options: Post-submission behavior.
            internal_reader_recfm: Record format override.
            internal_reader_lrecl: Logical record length override.

        Returns:
            JobDocument | list[SpoolFileContent]: See `job_check_submit_options`.

        Raises:
            MissingParameterError: Raised before any remote call when the JCL is absent or empty.
        """

        if not jcl:
            raise MissingParameterError(_MISSING_JCL_MESSAGE)
        job = self.job_submit_jcl(
            jcl,
            internal_reader_recfm=internal_reader_recfm,
            internal_reader_lrecl=internal_reader_lrecl,
        )
        return self.job_check_submit_options(options, job)

    def job_submit_dataset_with_options(
        self,
        job_dataset: str | None,
        options: SubmitOptions,
    ) -> JobDocument | list[SpoolFileContent]:
        """Submit JCL from a data set and apply post-submission options.

        Args:
            job_dataset: Data set containing JCL.
            options: Post-submission behavior.

        Returns:
            JobDocument | list[SpoolFileContent]: See `job_check_submit_options`.

        Raises:
            MissingParameterError: Raised when the data set name is absent or blank.
        """

        job = self.job_submit_dataset(job_dataset)
        return self.job_check_submit_options(options, job)

    def job_submit_jcl_notify(
        self,
        jcl: str | None,
        status: JobStatus | str | None = None,
        watch_delay_seconds: float | None = None,
        max_attempts: int | None = None,
        internal_reader_recfm: str | None = None,
        internal_reader_lrecl: str | None = None,
    ) -> JobDocument:
        """Submit literal JCL and wait until the job reaches a status.

        Args:
            jcl: JCL text.
            status: Target status, `OUTPUT` by default.
            watch_delay_seconds: Poll interval, client default when omitted.
            max_attempts: Poll attempt cap, client default when omitted.
            internal_reader_recfm: Record format override.
            internal_reader_lrecl: Logical record length override.

        Returns:
            JobDocument: Snapshot at or past the target status.

        Raises:
            MissingParameterError: Raised when the JCL is absent or the response lacks job name/id.
            MaxAttemptsExceededError: Raised when the status was not reached in time.
        """

        job = self.job_submit_jcl(
            jcl,
            internal_reader_recfm=internal_reader_recfm,
            internal_reader_lrecl=internal_reader_lrecl,
        )
        return self._submit_notify(job, status, watch_delay_seconds, max_attempts)

    def job_submit_dataset_notify(
        self,
        job_dataset: str | None,
        status: JobStatus | str | None = None,
        watch_delay_seconds: float | None = None,
        max_attempts: int | None = None,
    ) -> JobDocument:
        """Submit JCL from a data set and wait until the job reaches a status.

        Args:
            job_dataset: Data set containing JCL.
            status: Target status, `OUTPUT` by default.
            watch_delay_seconds: Poll interval, client default when omitted.
            max_attempts: Poll attempt cap, client default when omitted.

        Returns:
            JobDocument: Snapshot at or past the target status.

        Raises:
            MissingParameterError: Raised when the data set is absent or the response lacks job name/id.
            MaxAttemptsExceededError: Raised when the status was not reached in time.
        """

        job = self.job_submit_dataset(job_dataset)
        return self._submit_notify(job, status, watch_delay_seconds, max_attempts)

    def job_check_submit_options(
        self,
        options: SubmitOptions,
        job: JobDocument,
    ) -> JobDocument | list[SpoolFileContent]:
        """Resolve post-submission options for a freshly submitted job.

        First match wins:
        1. `wait_for_active`: wait for ACTIVE and return the snapshot.
        2. `view_all_spool_content` or `wait_for_output`: wait for OUTPUT; with
           `view_all_spool_content` fetch every spool file sequentially and return
           their contents in enumeration order, otherwise return the snapshot.
        3. `directory`: wait for OUTPUT, download all spool files, return the snapshot.
        4. Otherwise return the submitted job document unchanged without polling.

        A failure fetching any spool file aborts the whole collection.

        Args:
            options: Post-submission behavior.
            job: Job document returned by submission.

        Returns:
            JobDocument | list[SpoolFileContent]: Snapshot or ordered spool contents.

        Raises:
            MaxAttemptsExceededError: Raised when the target status was not reached in time.
            ZosmfAdapterError: Propagated from status, listing, content or download calls.
        """

        wait_parms = MonitorWaitParms(
            jobname=job.jobname,
            jobid=job.jobid,
            status=JobStatus.ACTIVE if options.wait_for_active else JobStatus.OUTPUT,
            watch_delay_seconds=options.watch_delay_seconds,
            max_attempts=options.max_attempts,
        )

        if options.wait_for_active:
            return self._monitor.job_wait_for_status(wait_parms)

        if options.view_all_spool_content or options.wait_for_output:
            self._submit_report_progress(
                options, f"Waiting for {job.jobid} to enter OUTPUT", PROGRESS_THIRTY_PERCENT
            )
            output_job = self._monitor.job_wait_for_status(wait_parms)
            if not options.view_all_spool_content:
                return output_job
            self._submit_report_progress(
                options,
                f"Retrieving spool content for {output_job.jobid}{_submit_retcode_suffix(output_job)}",
                PROGRESS_SEVENTY_PERCENT,
            )
            return self._submit_collect_spool_content(output_job)

        if options.directory:
            self._submit_report_progress(
                options, f"Waiting for {job.jobid} to enter OUTPUT", PROGRESS_THIRTY_PERCENT
            )
            output_job = self._monitor.job_wait_for_status(wait_parms)
            self._submit_report_progress(
                options,
                f"Downloading spool content for {output_job.jobid}{_submit_retcode_suffix(output_job)}",
                PROGRESS_SEVENTY_PERCENT,
            )
            self._download.job_download_all_spool_content(
                DownloadSpoolParms(
                    jobname=output_job.jobname,
                    jobid=output_job.jobid,
                    out_dir=options.directory,
                    extension=job_download_normalize_extension(options.extension),
                    omit_jobid_directory=options.omit_jobid_directory,
                )
            )
            return output_job

        return job

    def _submit_collect_spool_content(self, job: JobDocument) -> list[SpoolFileContent]:
        spool_contents: list[SpoolFileContent] = []
        for spool_file in self._query.job_list_spool_files(job.identity):
            spool_contents.append(
                SpoolFileContent(
                    id=spool_file.id,
                    dd_name=spool_file.ddname,
                    step_name=spool_file.stepname,
                    proc_name=spool_file.procstep,
                    data=self._query.job_get_spool_content(spool_file),
                )
            )
        return spool_contents

    def _submit_notify(
        self,
        job: JobDocument,
        status: JobStatus | str | None,
        watch_delay_seconds: float | None,
        max_attempts: int | None,
    ) -> JobDocument:
        if not job.jobname or not job.jobid:
            raise MissingParameterError("The job object you provide must contain both 'jobname' and 'jobid'.")
        self._log.debug("Waiting to be notified of job completion", jobname=job.jobname, jobid=job.jobid)
        return self._monitor.job_wait_for_status(
            MonitorWaitParms(
                jobname=job.jobname,
                jobid=job.jobid,
                status=status,
                watch_delay_seconds=watch_delay_seconds,
                max_attempts=max_attempts,
            )
        )

    def _submit_parse_job(self, payload: Any) -> JobDocument:
        if not isinstance(payload, dict):
            raise ZosmfResponseError("job submission response is not a JSON object")
        job = JobDocument.from_payload(payload)
        self._log.info("Submitted job", jobname=job.jobname, jobid=job.jobid, status=job.status)
        return job

    def _submit_report_progress(self, options: SubmitOptions, status_message: str, percent_complete: int) -> None:
        if options.progress is not None:
            options.progress.progress_update(status_message, percent_complete)


def job_submit_build_jcl_headers(
    internal_reader_recfm: str | None = None,
    internal_reader_lrecl: str | None = None,
) -> dict[str, str]:
    """Build internal reader request headers for literal JCL submission.

    Args:
        internal_reader_recfm: Record format override, `F` when omitted.
        internal_reader_lrecl: Logical record length override, `80` when omitted.

    Returns:
        dict[str, str]: Request headers.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    recfm = (internal_reader_recfm or "").strip() or DEFAULT_INTERNAL_READER_RECFM
    lrecl = str(internal_reader_lrecl or "").strip() or DEFAULT_INTERNAL_READER_LRECL
    return {
        **HEADER_TEXT_PLAIN_UTF8,
        **HEADER_INTRDR_MODE_TEXT,
        HEADER_INTRDR_LRECL: lrecl,
        HEADER_INTRDR_RECFM: recfm,
    }


def _submit_retcode_suffix(job: JobDocument) -> str:
    return "" if job.retcode is None else f", {job.retcode}"
