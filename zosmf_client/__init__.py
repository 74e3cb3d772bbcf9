"""z/OSMF batch client: job submission, status polling, workflows and remote shell."""

from .adapters import SshShellAdapter, ZosmfAdapterError, ZosmfRestAdapter
from .domain import (
    JobDocument,
    JobIdentity,
    JobStatus,
    MaxAttemptsExceededError,
    MissingParameterError,
    SpoolFileContent,
    SpoolFileRef,
    SubmitOptions,
    WorkflowRunResult,
    WorkflowStartParms,
)
from .jobs import JobDownloadService, JobMonitorService, JobQueryService, JobSubmitService
from .shell import ShellService
from .workflows import WorkflowService

__version__ = "1.0.0"

__all__ = [
	"JobDocument",
	"JobDownloadService",
	"JobIdentity",
	"JobMonitorService",
	"JobQueryService",
	"JobStatus",
	"JobSubmitService",
	"MaxAttemptsExceededError",
	"MissingParameterError",
	"ShellService",
	"SpoolFileContent",
	"SpoolFileRef",
	"SshShellAdapter",
	"SubmitOptions",
	"WorkflowRunResult",
	"WorkflowService",
	"WorkflowStartParms",
	"ZosmfAdapterError",
	"ZosmfRestAdapter",
]
