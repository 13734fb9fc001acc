"""
Shared fixtures: in-memory transfer client and a manual clock
"""
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Set

import pytest

from sftpbench.core.config import Backend, BenchConfig
from sftpbench.core.exceptions import ConnectionError, TransferError
from sftpbench.core.interfaces import TransferClient


class ManualClock:
    """Clock that only moves when told to"""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTransferClient(TransferClient):
    """Stores uploads in memory and records every call"""

    def __init__(
        self,
        clock: Optional[ManualClock] = None,
        delay: float = 0.0,
        fail_on: Optional[Set[str]] = None,
        refuse_connect: bool = False,
    ):
        self.clock = clock
        self.delay = delay
        self.fail_on = fail_on or set()
        self.refuse_connect = refuse_connect
        self.files: Dict[str, bytes] = {}
        self.attempts: List[str] = []
        self.connect_calls = 0
        self.disconnect_calls = 0
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self, config: BenchConfig) -> None:
        self.connect_calls += 1
        if self.refuse_connect:
            raise ConnectionError("Authentication failed")
        self._connected = True

    def send_file(self, source: BinaryIO, remote_path: str) -> None:
        if not self._connected:
            raise TransferError("Not connected")
        self.attempts.append(remote_path)
        if remote_path in self.fail_on:
            raise TransferError(f"Failed to upload {remote_path}: broken pipe")
        chunks = []
        while True:
            data = source.read(7)
            if not data:
                break
            chunks.append(data)
        self.files[remote_path] = b"".join(chunks)
        if self.clock is not None:
            self.clock.advance(self.delay)

    def disconnect(self) -> None:
        self.disconnect_calls += 1
        self._connected = False


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def local_dir(tmp_path):
    d = tmp_path / "outgoing"
    d.mkdir()
    return d


@pytest.fixture
def make_config(local_dir):
    def _make(**overrides) -> BenchConfig:
        values = dict(
            host="sftp.example.org",
            username="bench",
            password="secret",
            local_dir=local_dir,
            backend=Backend.PARAMIKO,
            remote_dir="/incoming",
        )
        values.update(overrides)
        return BenchConfig(**values)
    return _make


def write_file(directory: Path, name: str, data: bytes) -> Path:
    path = directory / name
    path.write_bytes(data)
    return path
