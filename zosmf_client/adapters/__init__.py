"""Adapter layer package for z/OSMF REST and SSH integration boundaries."""

from .interfaces import SshShellPort, ZosmfRestPort
from .ssh_shell import SshShellAdapter
from .zosmf_errors import (
	SshShellError,
	ZosmfAdapterError,
	ZosmfConnectionError,
	ZosmfHttpError,
	ZosmfResponseError,
	ZosmfTransportTimeoutError,
)
from .zosmf_rest import ZosmfRestAdapter

__all__ = [
	"SshShellAdapter",
	"SshShellError",
	"SshShellPort",
	"ZosmfAdapterError",
	"ZosmfConnectionError",
	"ZosmfHttpError",
	"ZosmfResponseError",
	"ZosmfRestAdapter",
	"ZosmfRestPort",
	"ZosmfTransportTimeoutError",
]
