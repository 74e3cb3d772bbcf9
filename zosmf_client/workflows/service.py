"""Workflow start and bounded completion wait over the z/OSMF workflow REST interface."""

from __future__ import annotations

import time
from typing import Any, Final

import structlog

from zosmf_client.adapters import ZosmfResponseError, ZosmfRestPort
from zosmf_client.adapters.zosmf_constants import (
    HEADER_APPLICATION_JSON,
    WORKFLOW_API_VERSION,
    WORKFLOW_CONFLICT_POLICIES,
    zosmf_workflow_resource,
)
from zosmf_client.domain import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_WATCH_DELAY_SECONDS,
    InvalidParameterError,
    MaxAttemptsExceededError,
    MissingParameterError,
    WorkflowProperties,
    WorkflowRunResult,
    WorkflowStartParms,
)

WORKFLOW_STATUS_COMPLETE: Final[str] = "complete"
WORKFLOW_OUTCOME_STARTED: Final[str] = "started"
WORKFLOW_OUTCOME_COMPLETE: Final[str] = "complete"
WORKFLOW_OUTCOME_FAILED: Final[str] = "failed"


class WorkflowService:
    """Start workflow automation and poll workflow properties until automation stops."""

    def __init__(
        self,
        rest_adapter: ZosmfRestPort,
        default_watch_delay_seconds: float = DEFAULT_WATCH_DELAY_SECONDS,
        default_max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        zosmf_version: str = WORKFLOW_API_VERSION,
        logger: Any | None = None,
    ):
        """Initialize workflow service.

        Args:
            rest_adapter: z/OSMF REST port.
            default_watch_delay_seconds: Poll interval used when a wait does not set one.
            default_max_attempts: Attempt cap used when a wait does not set one.
            zosmf_version: Workflow REST API version.
            logger: Optional structlog logger.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or defaults are invalid.
        """

        if rest_adapter is None:
            raise ValueError("rest_adapter must not be None")
        if default_watch_delay_seconds < 0:
            raise ValueError("default_watch_delay_seconds must be >= 0")
        if default_max_attempts < 1:
            raise ValueError("default_max_attempts must be >= 1")
        if not zosmf_version.strip():
            raise ValueError("zosmf_version must not be blank")

        self._rest = rest_adapter
        self._default_watch_delay_seconds = default_watch_delay_seconds
        self._default_max_attempts = default_max_attempts
        self._zosmf_version = zosmf_version.strip()
        self._log = logger or structlog.get_logger(__name__)

    def workflow_start(
        self,
        workflow_key: str | None,
        resolve_conflict: str | None = None,
        step_name: str | None = None,
        perform_subsequent: bool | None = None,
    ) -> None:
        """Start automation of a workflow instance.

        Args:
            workflow_key: Workflow instance key.
            resolve_conflict: Variable conflict policy.
            step_name: Step to start from.
            perform_subsequent: Continue with subsequent automated steps.

        Returns:
            None: z/OSMF answers the start request without a body.

        Raises:
            MissingParameterError: Raised when the workflow key is blank.
            InvalidParameterError: Raised for an unknown conflict policy.
            ZosmfAdapterError: Propagated from the REST adapter.
        """

        normalized_key = workflow_require_key(workflow_key)
        request_body: dict[str, object] = {}
        if resolve_conflict is not None:
            if resolve_conflict not in WORKFLOW_CONFLICT_POLICIES:
                allowed_values = ", ".join(sorted(WORKFLOW_CONFLICT_POLICIES))
                raise InvalidParameterError(
                    f"Invalid resolve_conflict `{resolve_conflict}`; expected one of {allowed_values}"
                )
            request_body["resolveConflictByUsing"] = resolve_conflict
        if step_name:
            request_body["stepName"] = step_name
        if perform_subsequent is not None:
            request_body["performSubsequent"] = perform_subsequent

        self._log.debug("Starting workflow", workflow_key=normalized_key, step_name=step_name)
        self._rest.adapter_put_json(
            f"{zosmf_workflow_resource(normalized_key, self._zosmf_version)}/operations/start",
            request_body,
            headers=HEADER_APPLICATION_JSON,
        )

    def workflow_get_properties(self, workflow_key: str | None) -> WorkflowProperties:
        """Fetch workflow properties.

        Args:
            workflow_key: Workflow instance key.

        Returns:
            WorkflowProperties: Current workflow status and automation block.

        Raises:
            MissingParameterError: Raised when the workflow key is blank.
            ZosmfAdapterError: Propagated from the REST adapter.
        """

        normalized_key = workflow_require_key(workflow_key)
        payload = self._rest.adapter_get_json(zosmf_workflow_resource(normalized_key, self._zosmf_version))
        if not isinstance(payload, dict):
            raise ZosmfResponseError(f"workflow properties for {normalized_key} are not a JSON object")
        return WorkflowProperties.from_payload(normalized_key, payload)

    def workflow_start_and_wait(self, parms: WorkflowStartParms) -> WorkflowRunResult:
        """Start a workflow and, when requested, wait until automation stops.

        Automation has stopped once the properties carry an automation block
        without a current step. Status `complete` means success; anything else
        is reported as failed.

        Args:
            parms: Start and wait inputs.

        Returns:
            WorkflowRunResult: `started` without waiting, else `complete` or `failed`.

        Raises:
            MissingParameterError: Raised when the workflow key is blank.
            InvalidParameterError: Raised for invalid policy, interval or attempts.
            MaxAttemptsExceededError: Raised when automation did not stop in time.
            ZosmfAdapterError: Propagated from the REST adapter.
        """

        normalized_key = workflow_require_key(parms.workflow_key)
        watch_delay_seconds = self._workflow_resolve_watch_delay(parms.watch_delay_seconds)
        max_attempts = self._workflow_resolve_max_attempts(parms.max_attempts)

        self.workflow_start(
            normalized_key,
            resolve_conflict=parms.resolve_conflict,
            step_name=parms.step_name,
            perform_subsequent=parms.perform_subsequent,
        )
        if not parms.wait:
            self._log.info("Workflow started", workflow_key=normalized_key)
            return WorkflowRunResult(workflow_key=normalized_key, outcome=WORKFLOW_OUTCOME_STARTED)

        last_status: str | None = None
        for attempt in range(1, max_attempts + 1):
            properties = self.workflow_get_properties(normalized_key)
            last_status = properties.status_name
            if properties.workflow_automation_finished():
                outcome = (
                    WORKFLOW_OUTCOME_COMPLETE
                    if properties.status_name == WORKFLOW_STATUS_COMPLETE
                    else WORKFLOW_OUTCOME_FAILED
                )
                self._log.info(
                    "Workflow automation stopped",
                    workflow_key=normalized_key,
                    status_name=properties.status_name,
                    outcome=outcome,
                    attempts=attempt,
                )
                return WorkflowRunResult(
                    workflow_key=normalized_key,
                    outcome=outcome,
                    status_name=properties.status_name,
                    attempts=attempt,
                )
            if attempt < max_attempts and watch_delay_seconds > 0:
                time.sleep(watch_delay_seconds)

        raise MaxAttemptsExceededError(
            f"Workflow {normalized_key} automation did not stop after {max_attempts} attempts; "
            f"last status was {last_status}",
            attempts=max_attempts,
            last_status=last_status,
        )

    def _workflow_resolve_watch_delay(self, watch_delay_seconds: float | None) -> float:
        if watch_delay_seconds is None:
            return self._default_watch_delay_seconds
        if watch_delay_seconds < 0:
            raise InvalidParameterError("watch_delay_seconds must be >= 0")
        return float(watch_delay_seconds)

    def _workflow_resolve_max_attempts(self, max_attempts: int | None) -> int:
        if max_attempts is None:
            return self._default_max_attempts
        if max_attempts < 1:
            raise InvalidParameterError("max_attempts must be >= 1")
        return int(max_attempts)


def workflow_require_key(workflow_key: str | None) -> str:
    """Validate and normalize a workflow key.

    Args:
        workflow_key: Candidate workflow key.

    Returns:
        str: Stripped workflow key.

    Raises:
        MissingParameterError: Raised when the key is absent or blank.
    """

    normalized_key = (workflow_key or "").strip()
    if not normalized_key:
        raise MissingParameterError("Workflow key must be provided.")
    return normalized_key
