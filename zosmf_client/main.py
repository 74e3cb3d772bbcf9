"""Main module entrypoint for command-line execution.

This module validates startup configuration, wires services and maps their
results to console output and exit codes.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.status import Status

from zosmf_client.adapters import ZosmfAdapterError
from zosmf_client.bootstrap import (
    bootstrap_create_job_submit_service,
    bootstrap_create_rest_adapter,
    bootstrap_create_shell_service,
    bootstrap_create_workflow_service,
)
from zosmf_client.config import SettingsLoadError, ZosmfSettings, config_configure_logging, config_load_settings
from zosmf_client.domain import JobDocument, SpoolFileContent, SubmitOptions, WorkflowStartParms, ZosmfClientError
from zosmf_client.workflows import WORKFLOW_OUTCOME_COMPLETE, WORKFLOW_OUTCOME_STARTED

console = Console()
error_console = Console(stderr=True)


class RichStatusProgress:
    """Progress sink that renders submit progress on a rich status spinner."""

    def __init__(self, status: Status):
        self._status = status

    def progress_update(self, status_message: str, percent_complete: int) -> None:
        self._status.update(f"{status_message} ({percent_complete}%)")


def main(argv: Sequence[str] | None = None) -> None:
    """Run selected client command with validated startup configuration.

    Args:
        argv: Optional argument vector, `sys.argv[1:]` when omitted.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SystemExit: Raised with a non-zero code when the command fails.
    """

    parsed_arguments = main_build_parser().parse_args(argv)
    try:
        settings = config_load_settings()
        config_configure_logging(settings.log_level)
        exit_code = parsed_arguments.handler(parsed_arguments, settings)
    except (SettingsLoadError, ZosmfClientError, ZosmfAdapterError, OSError) as error:
        error_console.print(f"Error: {error}", style="bold red", markup=False, highlight=False)
        raise SystemExit(1) from error
    if exit_code:
        raise SystemExit(exit_code)


def main_build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser with one sub-command per operation.

    Returns:
        argparse.ArgumentParser: Configured parser.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    argument_parser = argparse.ArgumentParser(prog="zosmf-client", description="z/OSMF batch job client")
    subparsers = argument_parser.add_subparsers(dest="command", required=True)

    dataset_parser = subparsers.add_parser("submit-dataset", help="Submit JCL stored in a data set")
    dataset_parser.add_argument("dataset", type=str, help="Data set containing JCL, e.g. IBMUSER.JCL(IEFBR14)")
    _main_add_submit_options(dataset_parser)
    dataset_parser.set_defaults(handler=main_run_submit_dataset)

    jcl_parser = subparsers.add_parser("submit-jcl", help="Submit JCL from a local file or stdin")
    jcl_parser.add_argument("file", nargs="?", default="-", type=str, help="Local JCL file, `-` for stdin")
    jcl_parser.add_argument("--recfm", dest="recfm", type=str, help="Internal reader record format (F or V)")
    jcl_parser.add_argument("--lrecl", dest="lrecl", type=str, help="Internal reader logical record length")
    _main_add_submit_options(jcl_parser)
    jcl_parser.set_defaults(handler=main_run_submit_jcl)

    workflow_parser = subparsers.add_parser("workflow-start", help="Start a z/OSMF workflow")
    workflow_parser.add_argument("workflow_key", type=str, help="Workflow instance key")
    workflow_parser.add_argument(
        "--resolve-conflict",
        dest="resolve_conflict",
        choices=("outputFileValue", "existingValue", "leaveConflict"),
        default="outputFileValue",
        help="How variable conflicts are resolved",
    )
    workflow_parser.add_argument("--step-name", dest="step_name", type=str, help="Step to start from")
    workflow_parser.add_argument(
        "--perform-one-step",
        dest="perform_one_step",
        action="store_true",
        help="Run only the given step instead of subsequent automated steps",
    )
    workflow_parser.add_argument("--wait", action="store_true", help="Wait until automation stops")
    workflow_parser.add_argument("--watch-delay", dest="watch_delay", type=float, help="Seconds between polls")
    workflow_parser.add_argument("--max-attempts", dest="max_attempts", type=int, help="Maximum number of polls")
    workflow_parser.set_defaults(handler=main_run_workflow_start)

    ssh_parser = subparsers.add_parser("ssh-exec", help="Run a command on the remote host over SSH")
    ssh_parser.add_argument("remote_command", type=str, help="Command line to run")
    ssh_parser.add_argument("--cwd", dest="cwd", type=str, help="Remote working directory")
    ssh_parser.set_defaults(handler=main_run_ssh_exec)

    return argument_parser


def main_run_submit_dataset(arguments: argparse.Namespace, settings: ZosmfSettings) -> int:
    with bootstrap_create_rest_adapter(settings) as rest_adapter:
        submit_service = bootstrap_create_job_submit_service(settings=settings, rest_adapter=rest_adapter)
        with console.status(f"Submitting {arguments.dataset}") as status:
            result = submit_service.job_submit_dataset_with_options(
                arguments.dataset,
                _main_build_submit_options(arguments, RichStatusProgress(status)),
            )
    main_print_submit_result(result)
    return 0


def main_run_submit_jcl(arguments: argparse.Namespace, settings: ZosmfSettings) -> int:
    if arguments.file == "-":
        jcl = sys.stdin.read()
    else:
        jcl = Path(arguments.file).read_text(encoding="utf-8")
    with bootstrap_create_rest_adapter(settings) as rest_adapter:
        submit_service = bootstrap_create_job_submit_service(settings=settings, rest_adapter=rest_adapter)
        with console.status("Submitting JCL") as status:
            result = submit_service.job_submit_jcl_string(
                jcl,
                _main_build_submit_options(arguments, RichStatusProgress(status)),
                internal_reader_recfm=arguments.recfm,
                internal_reader_lrecl=arguments.lrecl,
            )
    main_print_submit_result(result)
    return 0


def main_run_workflow_start(arguments: argparse.Namespace, settings: ZosmfSettings) -> int:
    with bootstrap_create_rest_adapter(settings) as rest_adapter:
        workflow_service = bootstrap_create_workflow_service(settings=settings, rest_adapter=rest_adapter)
        with console.status(f"Starting workflow {arguments.workflow_key}"):
            result = workflow_service.workflow_start_and_wait(
                WorkflowStartParms(
                    workflow_key=arguments.workflow_key,
                    resolve_conflict=arguments.resolve_conflict,
                    step_name=arguments.step_name,
                    perform_subsequent=not arguments.perform_one_step,
                    wait=arguments.wait,
                    watch_delay_seconds=arguments.watch_delay,
                    max_attempts=arguments.max_attempts,
                )
            )
    if result.outcome == WORKFLOW_OUTCOME_STARTED:
        console.print("Workflow started.")
        return 0
    if result.outcome == WORKFLOW_OUTCOME_COMPLETE:
        console.print("Workflow completed successfully.")
        return 0
    console.print("Workflow failed.")
    return 1


def main_run_ssh_exec(arguments: argparse.Namespace, settings: ZosmfSettings) -> int:
    shell_service = bootstrap_create_shell_service(settings=settings)

    def _write_chunk(chunk: str) -> None:
        sys.stdout.write(chunk)
        sys.stdout.flush()

    if arguments.cwd:
        return shell_service.shell_execute_in_directory(arguments.remote_command, arguments.cwd, _write_chunk)
    return shell_service.shell_execute(arguments.remote_command, _write_chunk)


def main_print_submit_result(result: JobDocument | list[SpoolFileContent]) -> None:
    """Print a job document as JSON or spool contents as labelled sections.

    Args:
        result: Submit result.

    Returns:
        None: Prints to stdout as side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if isinstance(result, JobDocument):
        console.print_json(json.dumps(dataclasses.asdict(result)))
        return
    for spool_content in result:
        header_parts = [spool_content.dd_name, spool_content.step_name, spool_content.proc_name]
        header = " ".join(part for part in header_parts if part)
        console.rule(f"[bold]{header}[/] (id: {spool_content.id})")
        console.out(spool_content.data, highlight=False)


def _main_add_submit_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--wait-for-active", dest="wait_for_active", action="store_true")
    parser.add_argument("--wait-for-output", dest="wait_for_output", action="store_true")
    parser.add_argument("--view-all-spool-content", dest="view_all_spool_content", action="store_true")
    parser.add_argument("--directory", dest="directory", type=str, help="Download spool files below this directory")
    parser.add_argument("--extension", dest="extension", type=str, help="File extension for downloaded spool files")
    parser.add_argument("--omit-jobid-directory", dest="omit_jobid_directory", action="store_true")
    parser.add_argument("--watch-delay", dest="watch_delay", type=float, help="Seconds between status polls")
    parser.add_argument("--max-attempts", dest="max_attempts", type=int, help="Maximum number of status polls")


def _main_build_submit_options(arguments: argparse.Namespace, progress: RichStatusProgress) -> SubmitOptions:
    return SubmitOptions(
        wait_for_active=arguments.wait_for_active,
        wait_for_output=arguments.wait_for_output,
        view_all_spool_content=arguments.view_all_spool_content,
        directory=arguments.directory,
        extension=arguments.extension,
        omit_jobid_directory=arguments.omit_jobid_directory,
        max_attempts=arguments.max_attempts,
        watch_delay_seconds=arguments.watch_delay,
        progress=progress,
    )


if __name__ == "__main__":
    main()
