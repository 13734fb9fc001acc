"""
asyncssh backend: chunked uploads with explicit open / write(offset) / close
"""
import asyncio
from typing import Any, BinaryIO, Optional

import asyncssh

from ..core.config import BenchConfig
from ..core.constants import DEFAULT_CHUNK_SIZE
from ..core.exceptions import ConnectionError, TransferError
from ..core.interfaces import TransferClient
from ..core.logging import get_logger

logger = get_logger(__name__)


class AsyncsshTransferClient(TransferClient):
    """
    asyncssh connection + SFTP session driven from synchronous code.

    The client owns a private event loop; each public call runs its
    coroutine to completion on it, so callers see plain blocking methods.
    """

    def __init__(self) -> None:
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._conn: Optional[asyncssh.SSHClientConnection] = None
        self._sftp: Optional[asyncssh.SFTPClient] = None
        self._chunk_size = DEFAULT_CHUNK_SIZE

    @property
    def connected(self) -> bool:
        return self._sftp is not None

    def _run(self, coro) -> Any:
        if self._loop is None or self._loop.is_closed():
            self._loop = asyncio.new_event_loop()
        return self._loop.run_until_complete(coro)

    # --------------------
    # Connection management
    # --------------------
    def connect(self, config: BenchConfig) -> None:
        if self.connected:
            raise ConnectionError("Already connected")

        self._chunk_size = config.chunk_size
        logger.info(f"Connecting to {config.address} as {config.username}")
        try:
            self._run(self._open_session(config))
        except (asyncssh.Error, asyncio.TimeoutError, OSError) as e:
            self.disconnect()
            raise ConnectionError(f"Failed to connect to {config.address}: {e}") from e
        logger.info("Logged in")

    async def _open_session(self, config: BenchConfig) -> None:
        # Each step gets its own timeout; a timed-out connect never reaches auth
        self._conn = await asyncio.wait_for(
            asyncssh.connect(
                config.host,
                config.port,
                username=config.username,
                password=config.password,
                known_hosts=None,
                client_keys=None,
                agent_path=None,
            ),
            timeout=config.connect_timeout,
        )
        self._sftp = await asyncio.wait_for(
            self._conn.start_sftp_client(),
            timeout=config.connect_timeout,
        )

    def disconnect(self) -> None:
        if self._loop is None:
            return
        try:
            if not self._loop.is_closed():
                self._loop.run_until_complete(self._close_session())
        except Exception as e:
            logger.debug(f"Ignoring error while closing asyncssh session: {e}")
        finally:
            self._sftp = None
            self._conn = None
            if not self._loop.is_closed():
                self._loop.close()
            self._loop = None

    async def _close_session(self) -> None:
        if self._sftp is not None:
            self._sftp.exit()
        if self._conn is not None:
            self._conn.close()
            await self._conn.wait_closed()

    # --------------------
    # Transfer
    # --------------------
    def send_file(self, source: BinaryIO, remote_path: str) -> None:
        if self._sftp is None:
            raise TransferError("Not connected")

        try:
            self._run(self._write_chunks(source, remote_path))
        except (asyncssh.Error, OSError) as e:
            raise TransferError(f"Failed to upload {remote_path}: {e}") from e

    async def _write_chunks(self, source: BinaryIO, remote_path: str) -> None:
        handle = await self._sftp.open(remote_path, "wb")
        try:
            offset = 0
            while True:
                data = source.read(self._chunk_size)
                if not data:
                    break
                await handle.write(data, offset)
                offset += len(data)
        finally:
            await handle.close()
        logger.debug(f"Wrote {offset} bytes to {remote_path}")
