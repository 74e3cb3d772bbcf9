"""Typed domain models shared across client layer boundaries.

Remote documents are parsed into frozen dataclasses so that nothing returned
by the client can be mutated after it was observed. No entity is cached; each
status query produces a fresh snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Final, Mapping

from .progress import ProgressSinkPort

DEFAULT_WATCH_DELAY_SECONDS: Final[float] = 3.0
DEFAULT_MAX_ATTEMPTS: Final[int] = 1000
DEFAULT_INTERNAL_READER_RECFM: Final[str] = "F"
DEFAULT_INTERNAL_READER_LRECL: Final[str] = "80"
DEFAULT_SPOOL_FILE_EXTENSION: Final[str] = ".txt"
DEFAULT_DOWNLOAD_DIRECTORY: Final[str] = "./output"


class JobStatus(str, Enum):
    """Job phases reported by the z/OS jobs REST interface, in lifecycle order."""

    INPUT = "INPUT"
    ACTIVE = "ACTIVE"
    OUTPUT = "OUTPUT"


JOB_STATUS_ORDER: Final[tuple[JobStatus, ...]] = (JobStatus.INPUT, JobStatus.ACTIVE, JobStatus.OUTPUT)
DEFAULT_JOB_STATUS: Final[JobStatus] = JobStatus.OUTPUT


def domain_job_status_reached(observed_status: str | None, target_status: JobStatus) -> bool:
    """Return whether an observed job status is at or past the target status.

    Args:
        observed_status: Raw status value from a job document.
        target_status: Status the caller is waiting for.

    Returns:
        bool: True when observed status equals the target or is later in lifecycle order.
            Unknown or missing statuses never satisfy a target.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if observed_status is None:
        return False
    try:
        observed = JobStatus(observed_status.strip().upper())
    except ValueError:
        return False
    return JOB_STATUS_ORDER.index(observed) >= JOB_STATUS_ORDER.index(target_status)


@dataclass(frozen=True)
class JobIdentity:
    """Remote-assigned job key used for every follow-up query.

    Attributes:
        jobname: Job name from the JOB card.
        jobid: JES job identifier, for example `JOB01234`.
    """

    jobname: str
    jobid: str


@dataclass(frozen=True)
class JobDocument:
    """Point-in-time job snapshot returned by submit and status endpoints.

    Attributes:
        jobname: Job name.
        jobid: JES job identifier.
        status: Job phase (`INPUT`, `ACTIVE`, `OUTPUT`) or other remote value.
        retcode: Completion code such as `CC 0000`, None while running.
        owner: Submitting user id.
        subsystem: JES subsystem name.
        job_type: Job type (`JOB`, `STC`, `TSU`).
        job_class: Job class.
        url: Job resource URL.
        files_url: Spool file listing URL.
        job_correlator: Sysplex-unique job correlator.
        phase: Numeric job phase.
        phase_name: Job phase description.
    """

    jobname: str
    jobid: str
    status: str | None = None
    retcode: str | None = None
    owner: str | None = None
    subsystem: str | None = None
    job_type: str | None = None
    job_class: str | None = None
    url: str | None = None
    files_url: str | None = None
    job_correlator: str | None = None
    phase: int | None = None
    phase_name: str | None = None

    @property
    def identity(self) -> JobIdentity:
        return JobIdentity(jobname=self.jobname, jobid=self.jobid)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "JobDocument":
        """Build a job document from a z/OSMF JSON job object.

        Absent job name or id parse to empty strings; callers that need the
        identity validate it before issuing follow-up queries.

        Args:
            payload: Decoded JSON job object.

        Returns:
            JobDocument: Parsed job snapshot.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        jobname = _domain_optional_text(payload.get("jobname")) or ""
        jobid = _domain_optional_text(payload.get("jobid")) or ""
        phase_value = payload.get("phase")
        return cls(
            jobname=jobname,
            jobid=jobid,
            status=_domain_optional_text(payload.get("status")),
            retcode=_domain_optional_text(payload.get("retcode")),
            owner=_domain_optional_text(payload.get("owner")),
            subsystem=_domain_optional_text(payload.get("subsystem")),
            job_type=_domain_optional_text(payload.get("type")),
            job_class=_domain_optional_text(payload.get("class")),
            url=_domain_optional_text(payload.get("url")),
            files_url=_domain_optional_text(payload.get("files-url")),
            job_correlator=_domain_optional_text(payload.get("job-correlator")),
            phase=phase_value if isinstance(phase_value, int) else None,
            phase_name=_domain_optional_text(payload.get("phase-name")),
        )


@dataclass(frozen=True)
class SpoolFileRef:
    """Descriptor for one spool output stream of a job.

    Attributes:
        jobname: Owning job name.
        jobid: Owning job identifier.
        id: Spool file id, unique within the job.
        ddname: DD name of the output stream.
        stepname: Step that produced the output, if any.
        procstep: Procedure step that produced the output, if any.
        record_count: Number of records reported by JES.
        byte_count: Number of bytes reported by JES.
    """

    jobname: str
    jobid: str
    id: int
    ddname: str
    stepname: str | None = None
    procstep: str | None = None
    record_count: int | None = None
    byte_count: int | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SpoolFileRef":
        """Build a spool descriptor from one z/OSMF `files` listing entry.

        Args:
            payload: Decoded JSON spool file object.

        Returns:
            SpoolFileRef: Parsed descriptor.

        Raises:
            ValueError: Raised when required fields are missing or malformed.
        """

        jobname = _domain_optional_text(payload.get("jobname"))
        jobid = _domain_optional_text(payload.get("jobid"))
        ddname = _domain_optional_text(payload.get("ddname"))
        spool_id = payload.get("id")
        if jobname is None or jobid is None or ddname is None or not isinstance(spool_id, int):
            raise ValueError("spool file entry must contain jobname, jobid, ddname and integer id")
        record_count = payload.get("record-count")
        byte_count = payload.get("byte-count")
        return cls(
            jobname=jobname,
            jobid=jobid,
            id=spool_id,
            ddname=ddname,
            stepname=_domain_optional_text(payload.get("stepname")),
            procstep=_domain_optional_text(payload.get("procstep")),
            record_count=record_count if isinstance(record_count, int) else None,
            byte_count=byte_count if isinstance(byte_count, int) else None,
        )


@dataclass(frozen=True)
class SpoolFileContent:
    """Fetched content of one spool file.

    Attributes:
        id: Spool file id.
        dd_name: DD name.
        step_name: Step name, if any.
        proc_name: Procedure step name, if any.
        data: Full text content of the spool file.
    """

    id: int
    dd_name: str
    step_name: str | None
    proc_name: str | None
    data: str


@dataclass(frozen=True)
class SubmitOptions:
    """Post-submission behavior selected by the caller.

    Several flags may be set together; resolution order is wait-for-active,
    then view-all-spool-content / wait-for-output, then directory download.

    Attributes:
        wait_for_active: Poll until the job reaches ACTIVE.
        wait_for_output: Poll until the job reaches OUTPUT.
        view_all_spool_content: Poll until OUTPUT, then fetch every spool file.
        directory: Poll until OUTPUT, then download all spool files below this directory.
        extension: Optional file extension for downloaded spool files.
        omit_jobid_directory: Write downloaded files without a `<jobid>` directory level.
        max_attempts: Poll attempt cap, None for the client default.
        watch_delay_seconds: Poll interval, None for the client default.
        progress: Optional sink receiving status text and percent complete.
    """

    wait_for_active: bool = False
    wait_for_output: bool = False
    view_all_spool_content: bool = False
    directory: str | Path | None = None
    extension: str | None = None
    omit_jobid_directory: bool = False
    max_attempts: int | None = None
    watch_delay_seconds: float | None = None
    progress: ProgressSinkPort | None = field(default=None, compare=False)


@dataclass(frozen=True)
class MonitorWaitParms:
    """Inputs for one job status wait.

    Attributes:
        jobname: Job name.
        jobid: Job identifier.
        status: Target status, `OUTPUT` when omitted.
        watch_delay_seconds: Poll interval, None for the client default.
        max_attempts: Poll attempt cap, None for the client default.
    """

    jobname: str | None
    jobid: str | None
    status: JobStatus | str | None = None
    watch_delay_seconds: float | None = None
    max_attempts: int | None = None


@dataclass(frozen=True)
class DownloadSpoolParms:
    """Inputs for bulk spool download.

    Attributes:
        jobname: Job name.
        jobid: Job identifier.
        out_dir: Target directory, `./output` when omitted.
        extension: File extension, `.txt` when omitted.
        omit_jobid_directory: Skip the `<jobid>` directory level.
    """

    jobname: str
    jobid: str
    out_dir: str | Path | None = None
    extension: str | None = None
    omit_jobid_directory: bool = False


@dataclass(frozen=True)
class AutomationStatus:
    """Automation progress block of a workflow properties document.

    Attributes:
        current_step_name: Step being automated, None once automation stopped.
        current_step_number: Step number being automated.
        current_step_title: Step title being automated.
        started_time: Automation start time in epoch milliseconds.
        stopped_time: Automation stop time in epoch milliseconds.
        message_id: Message id reported by automation.
        message_text: Message text reported by automation.
    """

    current_step_name: str | None = None
    current_step_number: str | None = None
    current_step_title: str | None = None
    started_time: int | None = None
    stopped_time: int | None = None
    message_id: str | None = None
    message_text: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "AutomationStatus":
        started_time = payload.get("startedTime")
        stopped_time = payload.get("stoppedTime")
        step_number = payload.get("currentStepNumber")
        return cls(
            current_step_name=_domain_optional_text(payload.get("currentStepName")),
            current_step_number=str(step_number) if step_number is not None else None,
            current_step_title=_domain_optional_text(payload.get("currentStepTitle")),
            started_time=started_time if isinstance(started_time, int) else None,
            stopped_time=stopped_time if isinstance(stopped_time, int) else None,
            message_id=_domain_optional_text(payload.get("messageID")),
            message_text=_domain_optional_text(payload.get("messageText")),
        )


@dataclass(frozen=True)
class WorkflowProperties:
    """Subset of the z/OSMF workflow properties document used for wait decisions.

    Attributes:
        workflow_key: Workflow instance key.
        workflow_name: Workflow instance name.
        status_name: Workflow status (`in-progress`, `complete`, `automation-in-progress`, ...).
        percent_complete: Completion percentage reported by z/OSMF.
        automation_status: Automation block, None when the workflow was never automated.
    """

    workflow_key: str
    workflow_name: str | None
    status_name: str | None
    percent_complete: int | None
    automation_status: AutomationStatus | None

    @classmethod
    def from_payload(cls, workflow_key: str, payload: Mapping[str, Any]) -> "WorkflowProperties":
        automation_payload = payload.get("automationStatus")
        percent_complete = payload.get("percentComplete")
        return cls(
            workflow_key=_domain_optional_text(payload.get("workflowKey")) or workflow_key,
            workflow_name=_domain_optional_text(payload.get("workflowName")),
            status_name=_domain_optional_text(payload.get("statusName")),
            percent_complete=percent_complete if isinstance(percent_complete, int) else None,
            automation_status=(
                AutomationStatus.from_payload(automation_payload) if isinstance(automation_payload, Mapping) else None
            ),
        )

    def workflow_automation_finished(self) -> bool:
        """Return whether automation has stopped (no current step).

        Returns:
            bool: True when an automation block exists and names no current step.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return self.automation_status is not None and self.automation_status.current_step_name is None


@dataclass(frozen=True)
class WorkflowStartParms:
    """Inputs for starting a workflow and optionally waiting for it.

    Attributes:
        workflow_key: Workflow instance key.
        resolve_conflict: Variable conflict policy (`outputFileValue`, `existingValue`, `leaveConflict`).
        step_name: Step to start from, None for the first ready step.
        perform_subsequent: Continue with subsequent automated steps.
        wait: Poll properties until automation stops.
        watch_delay_seconds: Poll interval, None for the client default.
        max_attempts: Poll attempt cap, None for the client default.
    """

    workflow_key: str
    resolve_conflict: str | None = None
    step_name: str | None = None
    perform_subsequent: bool | None = None
    wait: bool = False
    watch_delay_seconds: float | None = None
    max_attempts: int | None = None


@dataclass(frozen=True)
class WorkflowRunResult:
    """Outcome of a workflow start, with or without waiting.

    Attributes:
        workflow_key: Workflow instance key.
        outcome: `started`, `complete` or `failed`.
        status_name: Last observed workflow status, None when not polled.
        attempts: Number of property polls performed.
    """

    workflow_key: str
    outcome: str
    status_name: str | None = None
    attempts: int = 0


def _domain_optional_text(value: object | None) -> str | None:
    if not isinstance(value, str):
        return None
    stripped_value = value.strip()
    return stripped_value or None
