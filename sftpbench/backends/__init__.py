"""
SFTP client backends
"""
from typing import Callable, Dict

from ..core.config import Backend
from ..core.exceptions import InvalidArgument
from ..core.interfaces import TransferClient
from .paramiko_client import ParamikoTransferClient
from .asyncssh_client import AsyncsshTransferClient

BACKENDS: Dict[Backend, Callable[[], TransferClient]] = {
    Backend.PARAMIKO: ParamikoTransferClient,
    Backend.ASYNCSSH: AsyncsshTransferClient,
}


def create_client(backend) -> TransferClient:
    """
    Create an unconnected client for the selected backend.

    Raises:
        InvalidArgument: If the backend is unknown
    """
    factory = BACKENDS.get(Backend.parse(backend))
    if factory is None:
        raise InvalidArgument(f"Unexpected SFTP client type: {backend!r}")
    return factory()


__all__ = [
    "BACKENDS",
    "create_client",
    "ParamikoTransferClient",
    "AsyncsshTransferClient",
]
