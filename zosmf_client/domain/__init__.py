"""Domain models, defaults and error kinds used across client layer boundaries."""

from .errors import InvalidParameterError, MaxAttemptsExceededError, MissingParameterError, ZosmfClientError
from .models import (
    DEFAULT_DOWNLOAD_DIRECTORY,
    DEFAULT_INTERNAL_READER_LRECL,
    DEFAULT_INTERNAL_READER_RECFM,
    DEFAULT_JOB_STATUS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_SPOOL_FILE_EXTENSION,
    DEFAULT_WATCH_DELAY_SECONDS,
    JOB_STATUS_ORDER,
    AutomationStatus,
    DownloadSpoolParms,
    JobDocument,
    JobIdentity,
    JobStatus,
    MonitorWaitParms,
    SpoolFileContent,
    SpoolFileRef,
    SubmitOptions,
    WorkflowProperties,
    WorkflowRunResult,
    WorkflowStartParms,
    domain_job_status_reached,
)
from .progress import PROGRESS_SEVENTY_PERCENT, PROGRESS_THIRTY_PERCENT, ProgressSinkPort, TaskProgress

__all__ = [
	"AutomationStatus",
	"DEFAULT_DOWNLOAD_DIRECTORY",
	"DEFAULT_INTERNAL_READER_LRECL",
	"DEFAULT_INTERNAL_READER_RECFM",
	"DEFAULT_JOB_STATUS",
	"DEFAULT_MAX_ATTEMPTS",
	"DEFAULT_SPOOL_FILE_EXTENSION",
	"DEFAULT_WATCH_DELAY_SECONDS",
	"DownloadSpoolParms",
	"InvalidParameterError",
	"JOB_STATUS_ORDER",
	"JobDocument",
	"JobIdentity",
	"JobStatus",
	"MaxAttemptsExceededError",
	"MissingParameterError",
	"MonitorWaitParms",
	"PROGRESS_SEVENTY_PERCENT",
	"PROGRESS_THIRTY_PERCENT",
	"ProgressSinkPort",
	"SpoolFileContent",
	"SpoolFileRef",
	"SubmitOptions",
	"TaskProgress",
	"WorkflowProperties",
	"WorkflowRunResult",
	"WorkflowStartParms",
	"ZosmfClientError",
	"domain_job_status_reached",
]
