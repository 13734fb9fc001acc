"""
Core interfaces for dependency injection
"""
from abc import ABC, abstractmethod
from typing import BinaryIO

from .config import BenchConfig


class TransferClient(ABC):
    """
    SFTP client interface shared by every backend.

    A client owns at most one session, opened by connect() and released by
    disconnect(). The upload driver only talks to this interface.
    """

    @property
    @abstractmethod
    def connected(self) -> bool:
        """Whether a session is currently open"""
        pass

    @abstractmethod
    def connect(self, config: BenchConfig) -> None:
        """
        Open and authenticate a session.

        Raises:
            ConnectionError: On timeout, refusal or rejected credentials.
                No session is left open.
        """
        pass

    @abstractmethod
    def send_file(self, source: BinaryIO, remote_path: str) -> None:
        """
        Stream the whole of source to remote_path, creating or truncating it.

        Raises:
            TransferError: If the stream fails. The remote file may be partial.
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release the session. Safe to call when not connected."""
        pass

    def __enter__(self) -> "TransferClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.disconnect()
