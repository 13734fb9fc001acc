"""
Benchmark service - runs one upload benchmark end to end
"""
import time
from pathlib import Path
from typing import Callable, Optional

from ...backends import create_client
from ...core.config import Backend, BenchConfig
from ...core.interfaces import TransferClient
from ...core.logging import get_logger
from ..upload import UploadDriver, RunSummary, TransferMetrics, list_local_files
from ..upload.driver import ProgressCallback

logger = get_logger(__name__)


class BenchmarkService:
    """
    Benchmark service - pure orchestration.

    list files -> select backend -> connect -> upload all -> disconnect
    """

    def __init__(
        self,
        client_factory: Callable[[Backend], TransferClient] = create_client,
        clock: Callable[[], float] = time.perf_counter,
    ):
        """
        Initialize benchmark service.

        Args:
            client_factory: Builds an unconnected client for a backend
            clock: Monotonic clock used for timing uploads
        """
        self.client_factory = client_factory
        self.clock = clock

    def run(
        self,
        config: BenchConfig,
        on_connecting: Optional[Callable[[BenchConfig], None]] = None,
        on_connected: Optional[Callable[[BenchConfig], None]] = None,
        on_start: Optional[Callable[[Path, str], None]] = None,
        on_complete: Optional[Callable[[TransferMetrics], None]] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> RunSummary:
        """
        Upload every file of config.local_dir.

        Returns:
            Run summary with one entry per uploaded file

        Raises:
            InvalidArgument: Bad local directory or backend, before any network I/O
            ConnectionError: If connecting fails
            TransferError: If an upload fails (remaining files are skipped)
        """
        files = list_local_files(config.local_dir)
        client = self.client_factory(config.backend)
        logger.debug(f"{len(files)} file(s) to upload with {config.backend.value}")

        if on_connecting:
            on_connecting(config)
        client.connect(config)
        try:
            if on_connected:
                on_connected(config)
            driver = UploadDriver(client, config, clock=self.clock)
            return driver.upload_all(
                files,
                on_start=on_start,
                on_complete=on_complete,
                progress_callback=progress_callback,
            )
        finally:
            client.disconnect()
            logger.debug("Disconnected")
