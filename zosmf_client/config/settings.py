"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class ZosmfSettings(BaseSettings):
    """Client settings for z/OSMF REST access, polling defaults and SSH access.

    Environment variable names map directly to field names in uppercase.
    Example: `zosmf_host` reads from `ZOSMF_HOST`.

    Attributes:
        zosmf_host: z/OSMF host name.
        zosmf_port: z/OSMF HTTPS port.
        zosmf_protocol: URL scheme, `https` or `http`.
        zosmf_base_path: Optional API mediation layer path prefix.
        zosmf_user: z/OSMF user id.
        zosmf_password: z/OSMF password.
        zosmf_reject_unauthorized: Whether TLS certificates are verified.
        zosmf_request_timeout_seconds: Per-request HTTP timeout.
        job_watch_delay_seconds: Default delay between job status polls.
        job_max_attempts: Default cap on job status polls.
        workflow_watch_delay_seconds: Default delay between workflow property polls.
        workflow_max_attempts: Default cap on workflow property polls.
        ssh_host: SSH host; falls back to `zosmf_host`.
        ssh_port: SSH port.
        ssh_user: SSH user; falls back to `zosmf_user`.
        ssh_password: SSH password; falls back to `zosmf_password` when no key is configured.
        ssh_private_key: Path to an SSH private key file.
        ssh_key_passphrase: Passphrase for the SSH private key.
        ssh_handshake_timeout_seconds: SSH connect and banner timeout.
        log_level: structlog level filter.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    zosmf_host: str = Field(min_length=1)
    zosmf_port: int = Field(default=443, ge=1, le=65535)
    zosmf_protocol: str = Field(default="https")
    zosmf_base_path: str = Field(default="")
    zosmf_user: str = Field(min_length=1)
    zosmf_password: str = Field(min_length=1)
    zosmf_reject_unauthorized: bool = Field(default=True)
    zosmf_request_timeout_seconds: float = Field(default=30.0, gt=0)
    job_watch_delay_seconds: float = Field(default=3.0, ge=0)
    job_max_attempts: int = Field(default=1000, ge=1)
    workflow_watch_delay_seconds: float = Field(default=3.0, ge=0)
    workflow_max_attempts: int = Field(default=1000, ge=1)
    ssh_host: str | None = Field(default=None)
    ssh_port: int = Field(default=22, ge=1, le=65535)
    ssh_user: str | None = Field(default=None)
    ssh_password: str | None = Field(default=None)
    ssh_private_key: str | None = Field(default=None)
    ssh_key_passphrase: str | None = Field(default=None)
    ssh_handshake_timeout_seconds: float = Field(default=30.0, gt=0)
    log_level: str = Field(default="INFO")

    @field_validator("zosmf_host", "zosmf_user", "zosmf_password")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("zosmf_protocol")
    @classmethod
    def _validate_protocol(cls, value: str) -> str:
        normalized_value = value.strip().lower()
        if normalized_value not in ("http", "https"):
            raise ValueError("zosmf_protocol must be `http` or `https`")
        return normalized_value

    @field_validator("zosmf_base_path")
    @classmethod
    def _validate_base_path(cls, value: str) -> str:
        normalized_value = value.strip().rstrip("/")
        if normalized_value and not normalized_value.startswith("/"):
            normalized_value = f"/{normalized_value}"
        return normalized_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR")
        return normalized_value

    def settings_resolve_ssh_host(self) -> str:
        """Return the SSH host, defaulting to the z/OSMF host.

        Returns:
            str: SSH host name.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return (self.ssh_host or "").strip() or self.zosmf_host

    def settings_resolve_ssh_user(self) -> str:
        """Return the SSH user, defaulting to the z/OSMF user.

        Returns:
            str: SSH user id.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return (self.ssh_user or "").strip() or self.zosmf_user

    def settings_resolve_ssh_password(self) -> str | None:
        """Return the SSH password, or None when key authentication is configured.

        Returns:
            str | None: Password used for SSH authentication.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        if self.ssh_password:
            return self.ssh_password
        if self.ssh_private_key:
            return None
        return self.zosmf_password


def config_load_settings() -> ZosmfSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        ZosmfSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return ZosmfSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
