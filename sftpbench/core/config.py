"""
Benchmark run configuration
"""
import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from .constants import DEFAULT_SSH_PORT, DEFAULT_CONNECT_TIMEOUT, DEFAULT_CHUNK_SIZE
from .exceptions import InvalidArgument


class Backend(str, Enum):
    """Selectable SFTP client implementation"""
    PARAMIKO = "paramiko"
    ASYNCSSH = "asyncssh"

    @classmethod
    def parse(cls, value: Any) -> "Backend":
        """
        Resolve a backend selector.

        Args:
            value: Backend instance or selector string (case-insensitive)

        Returns:
            Backend member

        Raises:
            InvalidArgument: If the selector names no known backend
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        choices = ", ".join(b.value for b in cls)
        raise InvalidArgument(f"Invalid client type: {value!r} (expected one of: {choices})")


@dataclass(frozen=True)
class BenchConfig:
    """Connection and run parameters, fixed for the whole run"""
    host: str
    username: str
    password: str
    local_dir: Path
    backend: Backend
    port: int = DEFAULT_SSH_PORT
    remote_dir: str = ""
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        # frozen: normalised values go through object.__setattr__
        missing = [
            name for name in ("host", "username", "password", "local_dir")
            if getattr(self, name) in (None, "")
        ]
        if missing:
            raise InvalidArgument(f"Missing required values: {', '.join(missing)}")

        object.__setattr__(self, "backend", Backend.parse(self.backend))
        object.__setattr__(self, "local_dir", Path(self.local_dir).expanduser())
        object.__setattr__(self, "remote_dir", self.remote_dir or "")

        if isinstance(self.port, bool) or not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise InvalidArgument(f"Invalid port: {self.port!r}")
        if not math.isfinite(self.connect_timeout) or self.connect_timeout <= 0:
            raise InvalidArgument(f"Connect timeout must be positive, got {self.connect_timeout}")
        if self.chunk_size <= 0:
            raise InvalidArgument(f"Chunk size must be positive, got {self.chunk_size}")

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def describe(self) -> Dict[str, Any]:
        """Parsed arguments for display, password masked"""
        return {
            "host": self.host,
            "port": self.port,
            "username": self.username,
            "password": "*" * len(self.password),
            "local_dir": str(self.local_dir),
            "remote_dir": self.remote_dir,
            "backend": self.backend.value,
            "connect_timeout": self.connect_timeout,
            "chunk_size": self.chunk_size,
        }
