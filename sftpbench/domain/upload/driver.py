"""
Upload driver: streams local files through a TransferClient and times them
"""
import posixpath
import time
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, List, Optional

from ...core.config import BenchConfig
from ...core.exceptions import InvalidArgument, TransferError
from ...core.interfaces import TransferClient
from ...core.logging import get_logger
from .models import TransferMetrics, RunSummary

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]


def list_local_files(local_dir: Path) -> List[Path]:
    """
    List the immediate regular files of a directory, sorted by name.

    Subdirectories are skipped, not descended into.

    Raises:
        InvalidArgument: If local_dir is missing or not a directory
    """
    local_dir = Path(local_dir)
    if not local_dir.is_dir():
        raise InvalidArgument(f"Local directory does not exist: {local_dir}")
    return sorted(
        (p for p in local_dir.iterdir() if p.is_file()),
        key=lambda p: p.name,
    )


def build_remote_path(remote_dir: str, name: str) -> str:
    """Join remote_dir and a file name; empty remote_dir means the server's default dir"""
    if not remote_dir:
        return name
    return posixpath.join(remote_dir, name)


class _CountingReader:
    """Read-only wrapper counting the bytes handed to the backend"""

    def __init__(
        self,
        stream: BinaryIO,
        total: int,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        self._stream = stream
        self._total = total
        self._progress_callback = progress_callback
        self.bytes_read = 0

    def read(self, size: int = -1) -> bytes:
        data = self._stream.read(size)
        if data:
            self.bytes_read += len(data)
            if self._progress_callback:
                self._progress_callback(self.bytes_read, self._total)
        return data


class UploadDriver:
    """Sequential uploader over a connected TransferClient"""

    def __init__(
        self,
        client: TransferClient,
        config: BenchConfig,
        clock: Callable[[], float] = time.perf_counter,
    ):
        """
        Initialize upload driver.

        Args:
            client: Connected transfer client
            config: Run configuration (remote_dir is used)
            clock: Monotonic clock in seconds
        """
        self.client = client
        self.config = config
        self.clock = clock

    def upload_file(
        self,
        local_file: Path,
        on_start: Optional[Callable[[Path, str], None]] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> TransferMetrics:
        """
        Upload one file and time it.

        Args:
            local_file: Local file path
            on_start: Called with (local_file, remote_path) before streaming
            progress_callback: Optional progress callback (sent_bytes, total_bytes)

        Returns:
            Metrics of the upload

        Raises:
            TransferError: If the upload fails or the file was not fully read
        """
        local_file = Path(local_file)
        try:
            total_bytes = local_file.stat().st_size
        except OSError as e:
            raise TransferError(f"Failed to read {local_file}: {e}") from e
        remote_path = build_remote_path(self.config.remote_dir, local_file.name)

        if on_start:
            on_start(local_file, remote_path)
        logger.debug(f"Uploading {local_file} ({total_bytes} bytes) to {remote_path}")

        try:
            with open(local_file, 'rb') as local_f:
                reader = _CountingReader(local_f, total_bytes, progress_callback)
                start = self.clock()
                self.client.send_file(reader, remote_path)
                elapsed = self.clock() - start
        except OSError as e:
            raise TransferError(f"Failed to read {local_file}: {e}") from e

        if reader.bytes_read != total_bytes:
            raise TransferError(
                f"{local_file.name}: expected {total_bytes} bytes, sent {reader.bytes_read}"
            )

        return TransferMetrics(
            name=local_file.name,
            remote_path=remote_path,
            bytes_transferred=reader.bytes_read,
            elapsed_seconds=elapsed,
        )

    def upload_all(
        self,
        files: Iterable[Path],
        on_start: Optional[Callable[[Path, str], None]] = None,
        on_complete: Optional[Callable[[TransferMetrics], None]] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> RunSummary:
        """
        Upload files one at a time, in order.

        The first failure propagates; later files are not attempted.
        """
        summary = RunSummary()
        for local_file in files:
            metrics = self.upload_file(local_file, on_start, progress_callback)
            summary.add(metrics)
            if on_complete:
                on_complete(metrics)
        return summary
