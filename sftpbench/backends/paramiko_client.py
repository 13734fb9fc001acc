"""
Paramiko backend: whole-stream uploads through SFTPClient.putfo
"""
import socket
from typing import BinaryIO, Optional

import paramiko

from ..core.config import BenchConfig
from ..core.exceptions import ConnectionError, TransferError
from ..core.interfaces import TransferClient
from ..core.logging import get_logger

logger = get_logger(__name__)


class ParamikoTransferClient(TransferClient):
    """
    Paramiko SSHClient + SFTPClient session.

    - password authentication only (no agent, no key lookup)
    - unknown host keys are accepted
    - every network step bounded by config.connect_timeout
    """

    def __init__(self) -> None:
        self._client: Optional[paramiko.SSHClient] = None
        self._sftp: Optional[paramiko.SFTPClient] = None

    @property
    def connected(self) -> bool:
        return self._sftp is not None

    # --------------------
    # Connection management
    # --------------------
    def connect(self, config: BenchConfig) -> None:
        if self.connected:
            raise ConnectionError("Already connected")

        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        logger.info(f"Connecting to {config.address} as {config.username}")
        try:
            client.connect(
                hostname=config.host,
                port=config.port,
                username=config.username,
                password=config.password,
                timeout=config.connect_timeout,
                banner_timeout=config.connect_timeout,
                auth_timeout=config.connect_timeout,
                look_for_keys=False,
                allow_agent=False,
            )
            sftp = client.open_sftp()
        except (paramiko.SSHException, paramiko.SFTPError, socket.timeout, OSError) as e:
            client.close()
            raise ConnectionError(f"Failed to connect to {config.address}: {e}") from e

        self._client = client
        self._sftp = sftp
        logger.info("Logged in")

    def disconnect(self) -> None:
        if self._sftp is not None:
            try:
                self._sftp.close()
            except Exception as e:
                logger.debug(f"Ignoring error while closing SFTP channel: {e}")
        if self._client is not None:
            try:
                self._client.close()
            except Exception as e:
                logger.debug(f"Ignoring error while closing SSH client: {e}")
        self._sftp = None
        self._client = None

    # --------------------
    # Transfer
    # --------------------
    def send_file(self, source: BinaryIO, remote_path: str) -> None:
        if self._sftp is None:
            raise TransferError("Not connected")

        try:
            # confirm=False: size checks are done by the caller on bytes read
            self._sftp.putfo(source, remote_path, confirm=False)
        except (paramiko.SSHException, paramiko.SFTPError, OSError) as e:
            raise TransferError(f"Failed to upload {remote_path}: {e}") from e
