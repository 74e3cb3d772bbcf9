"""Client bootstrap wiring for startup validation and dependency assembly."""

from __future__ import annotations

import structlog

from zosmf_client.adapters import SshShellAdapter, ZosmfRestAdapter
from zosmf_client.config import ZosmfSettings, config_load_settings
from zosmf_client.jobs import JobDownloadService, JobMonitorService, JobQueryService, JobSubmitService
from zosmf_client.shell import ShellService
from zosmf_client.workflows import WorkflowService


def bootstrap_create_rest_adapter(settings: ZosmfSettings) -> ZosmfRestAdapter:
    """Build the z/OSMF REST adapter from validated settings.

    Args:
        settings: Validated runtime settings.

    Returns:
        ZosmfRestAdapter: Pooled REST adapter.

    Raises:
        ValueError: Raised when settings values are rejected by the adapter.
    """

    return ZosmfRestAdapter(
        host=settings.zosmf_host,
        user=settings.zosmf_user,
        password=settings.zosmf_password,
        port=settings.zosmf_port,
        protocol=settings.zosmf_protocol,
        base_path=settings.zosmf_base_path,
        reject_unauthorized=settings.zosmf_reject_unauthorized,
        request_timeout_seconds=settings.zosmf_request_timeout_seconds,
        logger=structlog.get_logger("zosmf_client.adapters.zosmf_rest"),
    )


def bootstrap_create_job_submit_service(
    settings: ZosmfSettings | None = None,
    rest_adapter: ZosmfRestAdapter | None = None,
) -> JobSubmitService:
    """Build a fully wired job submit service.

    Args:
        settings: Optional settings; loaded from environment when omitted.
        rest_adapter: Optional shared REST adapter; built from settings when omitted.

    Returns:
        JobSubmitService: Submit service with query, monitor and download collaborators.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    resolved_adapter = rest_adapter or bootstrap_create_rest_adapter(resolved_settings)
    logger = structlog.get_logger("zosmf_client.jobs")
    query_service = JobQueryService(rest_adapter=resolved_adapter, logger=logger)
    monitor_service = JobMonitorService(
        query_service=query_service,
        default_watch_delay_seconds=resolved_settings.job_watch_delay_seconds,
        default_max_attempts=resolved_settings.job_max_attempts,
        logger=logger,
    )
    download_service = JobDownloadService(query_service=query_service, logger=logger)
    return JobSubmitService(
        rest_adapter=resolved_adapter,
        query_service=query_service,
        monitor_service=monitor_service,
        download_service=download_service,
        logger=logger,
    )


def bootstrap_create_workflow_service(
    settings: ZosmfSettings | None = None,
    rest_adapter: ZosmfRestAdapter | None = None,
) -> WorkflowService:
    """Build a workflow service.

    Args:
        settings: Optional settings; loaded from environment when omitted.
        rest_adapter: Optional shared REST adapter; built from settings when omitted.

    Returns:
        WorkflowService: Workflow service with configured poll defaults.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    return WorkflowService(
        rest_adapter=rest_adapter or bootstrap_create_rest_adapter(resolved_settings),
        default_watch_delay_seconds=resolved_settings.workflow_watch_delay_seconds,
        default_max_attempts=resolved_settings.workflow_max_attempts,
        logger=structlog.get_logger("zosmf_client.workflows"),
    )


def bootstrap_create_shell_service(settings: ZosmfSettings | None = None) -> ShellService:
    """Build a remote shell service over SSH.

    Args:
        settings: Optional settings; loaded from environment when omitted.

    Returns:
        ShellService: Shell service bound to the configured SSH host.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    ssh_adapter = SshShellAdapter(
        host=resolved_settings.settings_resolve_ssh_host(),
        user=resolved_settings.settings_resolve_ssh_user(),
        port=resolved_settings.ssh_port,
        password=resolved_settings.settings_resolve_ssh_password(),
        private_key_path=resolved_settings.ssh_private_key,
        key_passphrase=resolved_settings.ssh_key_passphrase,
        handshake_timeout_seconds=resolved_settings.ssh_handshake_timeout_seconds,
        logger=structlog.get_logger("zosmf_client.adapters.ssh_shell"),
    )
    return ShellService(ssh_adapter=ssh_adapter, logger=structlog.get_logger("zosmf_client.shell"))
