"""Regression tests for job submission request shaping and input validation."""

from __future__ import annotations

from typing import Any, Mapping

import pytest

from zosmf_client.adapters import ZosmfResponseError
from zosmf_client.domain import JobStatus, MissingParameterError, SubmitOptions
from zosmf_client.jobs import (
    JobDownloadService,
    JobMonitorService,
    JobQueryService,
    JobSubmitService,
    job_submit_build_jcl_headers,
)
import zosmf_client.jobs.monitor as monitor_module


class _StubRestAdapter:
    """Record REST calls and answer from queued payloads."""

    def __init__(self, put_payload: Any = None, get_payloads: list[Any] | None = None):
        self.put_payload = put_payload
        self.get_payloads = list(get_payloads or [])
        self.calls: list[tuple[str, str, Any, Mapping[str, str] | None]] = []

    def adapter_get_json(self, resource: str, headers: Mapping[str, str] | None = None) -> Any:
        self.calls.append(("GET", resource, None, headers))
        return self.get_payloads.pop(0)

    def adapter_get_text(self, resource: str, headers: Mapping[str, str] | None = None) -> str:
        self.calls.append(("GET_TEXT", resource, None, headers))
        return self.get_payloads.pop(0)

    def adapter_put_json(
        self,
        resource: str,
        payload: Mapping[str, Any] | str,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        self.calls.append(("PUT", resource, payload, headers))
        return self.put_payload


def _build_submit_service(rest_adapter: _StubRestAdapter) -> JobSubmitService:
    query_service = JobQueryService(rest_adapter=rest_adapter)
    return JobSubmitService(
        rest_adapter=rest_adapter,
        query_service=query_service,
        monitor_service=JobMonitorService(query_service=query_service, default_watch_delay_seconds=0),
        download_service=JobDownloadService(query_service=query_service),
    )


_SUBMITTED_JOB = {"jobname": "TESTJOB", "jobid": "JOB00123", "status": "INPUT", "owner": "IBMUSER"}


@pytest.mark.parametrize("jcl", [None, ""])
def test_jobs_submit_missing_jcl_raises_before_remote_call(jcl: str | None) -> None:
    """Reject absent JCL without issuing any remote request.

    Args:
        jcl: Absent or empty JCL value.

    Returns:
        None: Assertions validate validation ordering.

    Raises:
        AssertionError: Raised when a remote call escapes validation.
    """

    rest_adapter = _StubRestAdapter(put_payload=_SUBMITTED_JOB)
    submit_service = _build_submit_service(rest_adapter)

    with pytest.raises(MissingParameterError, match="No JCL provided"):
        submit_service.job_submit_jcl(jcl)
    with pytest.raises(MissingParameterError, match="No JCL provided"):
        submit_service.job_submit_jcl_string(jcl, SubmitOptions(view_all_spool_content=True))

    assert rest_adapter.calls == []


def test_jobs_submit_jcl_uses_default_internal_reader_headers() -> None:
    """Submit literal JCL with fixed-80 internal reader defaults.

    Returns:
        None: Assertions validate resource, body and headers.

    Raises:
        AssertionError: Raised when defaults are not applied.
    """

    rest_adapter = _StubRestAdapter(put_payload=_SUBMITTED_JOB)
    jcl = "//TESTJOB JOB (ACCT)\n//STEP1 EXEC PGM=IEFBR14\n"

    job = _build_submit_service(rest_adapter).job_submit_jcl(jcl)

    assert job.jobname == "TESTJOB"
    assert job.jobid == "JOB00123"
    assert job.owner == "IBMUSER"
    method, resource, payload, headers = rest_adapter.calls[0]
    assert (method, resource, payload) == ("PUT", "/zosmf/restjobs/jobs", jcl)
    assert headers == {
        "Content-Type": "text/plain; charset=utf-8",
        "X-IBM-Intrdr-Mode": "TEXT",
        "X-IBM-Intrdr-Lrecl": "80",
        "X-IBM-Intrdr-Recfm": "F",
    }


def test_jobs_submit_jcl_applies_record_format_overrides() -> None:
    """Forward caller-supplied record format and length to internal reader headers."""

    headers = job_submit_build_jcl_headers(internal_reader_recfm="V", internal_reader_lrecl="256")

    assert headers["X-IBM-Intrdr-Recfm"] == "V"
    assert headers["X-IBM-Intrdr-Lrecl"] == "256"


def test_jobs_submit_dataset_wraps_name_in_dataset_reference() -> None:
    """Submit data set JCL as a quoted `//'DSN'` reference in a JSON body.

    Returns:
        None: Assertions validate request body shape.

    Raises:
        AssertionError: Raised when the reference is not wrapped correctly.
    """

    rest_adapter = _StubRestAdapter(put_payload=_SUBMITTED_JOB)

    job = _build_submit_service(rest_adapter).job_submit_dataset(" IBMUSER.JCL(IEFBR14) ")

    assert job.status == "INPUT"
    method, resource, payload, headers = rest_adapter.calls[0]
    assert (method, resource) == ("PUT", "/zosmf/restjobs/jobs")
    assert payload == {"file": "//'IBMUSER.JCL(IEFBR14)'"}
    assert headers == {"Content-Type": "application/json"}


@pytest.mark.parametrize("job_dataset", [None, "", "   "])
def test_jobs_submit_dataset_requires_name(job_dataset: str | None) -> None:
    """Reject blank data set names before any remote call."""

    rest_adapter = _StubRestAdapter(put_payload=_SUBMITTED_JOB)

    with pytest.raises(MissingParameterError, match="data set"):
        _build_submit_service(rest_adapter).job_submit_dataset(job_dataset)
    assert rest_adapter.calls == []


def test_jobs_submit_rejects_non_object_response() -> None:
    """Raise response contract error when submission answers with a non-object body."""

    rest_adapter = _StubRestAdapter(put_payload=["unexpected"])

    with pytest.raises(ZosmfResponseError, match="not a JSON object"):
        _build_submit_service(rest_adapter).job_submit_jcl("//TESTJOB JOB\n")


def test_jobs_submit_notify_rejects_job_without_identity() -> None:
    """Reject submission responses that lack job name or job id before polling.

    Returns:
        None: Assertions validate identity validation.

    Raises:
        AssertionError: Raised when polling starts without identity.
    """

    rest_adapter = _StubRestAdapter(put_payload={"jobname": "TESTJOB"})

    with pytest.raises(MissingParameterError, match="'jobname' and 'jobid'"):
        _build_submit_service(rest_adapter).job_submit_jcl_notify("//TESTJOB JOB\n")

    assert [call[0] for call in rest_adapter.calls] == ["PUT"]


def test_jobs_submit_dataset_notify_polls_until_output(monkeypatch: pytest.MonkeyPatch) -> None:
    """Submit from a data set and poll until the default OUTPUT status is reached.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate notify flow.

    Raises:
        AssertionError: Raised when notify does not wait for OUTPUT.
    """

    rest_adapter = _StubRestAdapter(
        put_payload=_SUBMITTED_JOB,
        get_payloads=[
            {**_SUBMITTED_JOB, "status": "ACTIVE"},
            {**_SUBMITTED_JOB, "status": "OUTPUT", "retcode": "CC 0000"},
        ],
    )
    monkeypatch.setattr(monitor_module.time, "sleep", lambda seconds: None)

    job = _build_submit_service(rest_adapter).job_submit_dataset_notify("IBMUSER.JCL(IEFBR14)")

    assert job.status == JobStatus.OUTPUT.value
    assert job.retcode == "CC 0000"
    assert [call[1] for call in rest_adapter.calls] == [
        "/zosmf/restjobs/jobs",
        "/zosmf/restjobs/jobs/TESTJOB/JOB00123",
        "/zosmf/restjobs/jobs/TESTJOB/JOB00123",
    ]


def test_jobs_submit_jcl_notify_honors_target_status_and_attempts() -> None:
    """Stop polling at the requested ACTIVE status using caller attempts."""

    rest_adapter = _StubRestAdapter(
        put_payload=_SUBMITTED_JOB,
        get_payloads=[{**_SUBMITTED_JOB, "status": "ACTIVE"}],
    )

    job = _build_submit_service(rest_adapter).job_submit_jcl_notify(
        "//TESTJOB JOB\n",
        status="active",
        watch_delay_seconds=0,
        max_attempts=1,
    )

    assert job.status == "ACTIVE"
    assert len(rest_adapter.calls) == 2


def test_jobs_submit_plain_submission_returns_document_without_identity() -> None:
    """Return the submission document as-is when job name or id is absent.

    Identity is only required once a follow-up wait is requested.

    Returns:
        None: Assertions validate plain submission leniency.

    Raises:
        AssertionError: Raised when plain submission rejects the response.
    """

    rest_adapter = _StubRestAdapter(put_payload={"jobname": "TESTJOB", "status": "INPUT"})
    submit_service = _build_submit_service(rest_adapter)

    job = submit_service.job_submit_jcl("//TESTJOB JOB\n")
    dataset_job = submit_service.job_submit_dataset("IBMUSER.JCL(IEFBR14)")

    assert (job.jobname, job.jobid, job.status) == ("TESTJOB", "", "INPUT")
    assert dataset_job.jobid == ""
    assert [call[0] for call in rest_adapter.calls] == ["PUT", "PUT"]
