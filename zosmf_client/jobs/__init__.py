"""Job layer package for submission, status polling and spool retrieval."""

from .download import JobDownloadService, job_download_normalize_extension, job_download_spool_file_path
from .monitor import JobMonitorService, job_monitor_resolve_status
from .query import JobQueryService, job_query_require_identity
from .submit import JobSubmitService, job_submit_build_jcl_headers

__all__ = [
	"JobDownloadService",
	"JobMonitorService",
	"JobQueryService",
	"JobSubmitService",
	"job_download_normalize_extension",
	"job_download_spool_file_path",
	"job_monitor_resolve_status",
	"job_query_require_identity",
	"job_submit_build_jcl_headers",
]
