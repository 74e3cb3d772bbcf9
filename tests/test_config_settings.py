"""Regression tests for runtime settings loading and logging setup."""

from __future__ import annotations

import pytest
import structlog

from zosmf_client.config import SettingsLoadError, ZosmfSettings, config_configure_logging, config_load_settings


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Run each test without a dotenv file and with a clean z/OSMF environment."""

    monkeypatch.chdir(tmp_path)
    for variable_name in (
        "ZOSMF_HOST",
        "ZOSMF_USER",
        "ZOSMF_PASSWORD",
        "ZOSMF_PORT",
        "ZOSMF_PROTOCOL",
        "ZOSMF_BASE_PATH",
        "JOB_MAX_ATTEMPTS",
        "SSH_HOST",
        "SSH_USER",
        "SSH_PASSWORD",
        "SSH_PRIVATE_KEY",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(variable_name, raising=False)


def _set_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZOSMF_HOST", "zos.example.test")
    monkeypatch.setenv("ZOSMF_USER", "ibmuser")
    monkeypatch.setenv("ZOSMF_PASSWORD", "secret")


def test_config_load_settings_applies_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Load required values from environment and apply documented defaults.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate defaults.

    Raises:
        AssertionError: Raised when defaults drift.
    """

    _set_required(monkeypatch)
    monkeypatch.setenv("ZOSMF_BASE_PATH", "ibmzosmf/api/v1/")

    settings = config_load_settings()

    assert settings.zosmf_port == 443
    assert settings.zosmf_protocol == "https"
    assert settings.zosmf_base_path == "/ibmzosmf/api/v1"
    assert settings.zosmf_reject_unauthorized is True
    assert settings.job_watch_delay_seconds == 3.0
    assert settings.job_max_attempts == 1000
    assert settings.workflow_max_attempts == 1000
    assert settings.log_level == "INFO"


def test_config_load_settings_wraps_validation_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    """Raise settings load error when required values are missing or invalid."""

    monkeypatch.setenv("ZOSMF_HOST", "zos.example.test")
    monkeypatch.setenv("ZOSMF_USER", "ibmuser")

    with pytest.raises(SettingsLoadError, match="Startup configuration validation failed"):
        config_load_settings()

    monkeypatch.setenv("ZOSMF_PASSWORD", "secret")
    monkeypatch.setenv("JOB_MAX_ATTEMPTS", "0")

    with pytest.raises(SettingsLoadError):
        config_load_settings()


def test_config_ssh_settings_fall_back_to_zosmf_credentials() -> None:
    """Resolve SSH host, user and password from z/OSMF values when unset.

    Returns:
        None: Assertions validate SSH fallbacks.

    Raises:
        AssertionError: Raised when fallbacks are not applied.
    """

    settings = ZosmfSettings(zosmf_host="zos.example.test", zosmf_user="ibmuser", zosmf_password="secret")

    assert settings.settings_resolve_ssh_host() == "zos.example.test"
    assert settings.settings_resolve_ssh_user() == "ibmuser"
    assert settings.settings_resolve_ssh_password() == "secret"


def test_config_ssh_private_key_disables_password_fallback() -> None:
    """Skip the z/OSMF password when key authentication is configured."""

    settings = ZosmfSettings(
        zosmf_host="zos.example.test",
        zosmf_user="ibmuser",
        zosmf_password="secret",
        ssh_host="uss.example.test",
        ssh_user="omvsuser",
        ssh_private_key="/home/me/.ssh/id_ed25519",
    )

    assert settings.settings_resolve_ssh_host() == "uss.example.test"
    assert settings.settings_resolve_ssh_user() == "omvsuser"
    assert settings.settings_resolve_ssh_password() is None


def test_config_configure_logging_rejects_unknown_level() -> None:
    """Reject unknown log level names."""

    with pytest.raises(ValueError, match="unknown log_level"):
        config_configure_logging("chatty")
    config_configure_logging("debug", json_output=True)
    structlog.reset_defaults()
