"""
Tests for the paramiko and asyncssh backends with the libraries mocked out
"""
import asyncio
import io
import socket
from unittest.mock import MagicMock, patch

import asyncssh
import paramiko
import pytest

from sftpbench.backends import AsyncsshTransferClient, ParamikoTransferClient
from sftpbench.core.exceptions import ConnectionError, TransferError


# ============================================================
# Paramiko
# ============================================================

@pytest.fixture
def ssh_client():
    with patch("sftpbench.backends.paramiko_client.paramiko.SSHClient") as cls:
        yield cls.return_value


class TestParamikoTransferClient:
    def test_connect(self, ssh_client, make_config):
        client = ParamikoTransferClient()
        client.connect(make_config(port=2222, connect_timeout=3.0))

        kwargs = ssh_client.connect.call_args.kwargs
        assert kwargs["hostname"] == "sftp.example.org"
        assert kwargs["port"] == 2222
        assert kwargs["username"] == "bench"
        assert kwargs["password"] == "secret"
        assert kwargs["timeout"] == kwargs["auth_timeout"] == 3.0
        assert kwargs["look_for_keys"] is False
        assert kwargs["allow_agent"] is False
        ssh_client.open_sftp.assert_called_once_with()
        assert client.connected

    @pytest.mark.parametrize("error", [
        paramiko.AuthenticationException("Authentication failed."),
        socket.timeout("timed out"),
        OSError("Connection refused"),
    ])
    def test_connect_failure(self, ssh_client, make_config, error):
        ssh_client.connect.side_effect = error
        client = ParamikoTransferClient()

        with pytest.raises(ConnectionError):
            client.connect(make_config())

        ssh_client.close.assert_called_once_with()
        assert not client.connected

    def test_sftp_negotiation_failure_closes_transport(self, ssh_client, make_config):
        ssh_client.open_sftp.side_effect = paramiko.SFTPError("Incompatible sftp protocol")
        client = ParamikoTransferClient()

        with pytest.raises(ConnectionError, match="Incompatible sftp protocol"):
            client.connect(make_config())

        ssh_client.close.assert_called_once_with()
        assert not client.connected

    def test_send_file_uses_putfo(self, ssh_client, make_config):
        client = ParamikoTransferClient()
        client.connect(make_config())
        source = io.BytesIO(b"payload")

        client.send_file(source, "/incoming/a.txt")

        ssh_client.open_sftp.return_value.putfo.assert_called_once_with(
            source, "/incoming/a.txt", confirm=False
        )

    def test_send_file_failure(self, ssh_client, make_config):
        ssh_client.open_sftp.return_value.putfo.side_effect = IOError("Failure")
        client = ParamikoTransferClient()
        client.connect(make_config())

        with pytest.raises(TransferError, match="/incoming/a.txt"):
            client.send_file(io.BytesIO(b"x"), "/incoming/a.txt")

    def test_send_file_sftp_error(self, ssh_client, make_config):
        ssh_client.open_sftp.return_value.putfo.side_effect = paramiko.SFTPError("Expected handle")
        client = ParamikoTransferClient()
        client.connect(make_config())

        with pytest.raises(TransferError, match="Expected handle"):
            client.send_file(io.BytesIO(b"x"), "/incoming/a.txt")

    def test_send_file_requires_session(self):
        with pytest.raises(TransferError, match="Not connected"):
            ParamikoTransferClient().send_file(io.BytesIO(b"x"), "a.txt")

    def test_disconnect_is_idempotent(self, ssh_client, make_config):
        client = ParamikoTransferClient()
        client.disconnect()

        client.connect(make_config())
        ssh_client.open_sftp.return_value.close.side_effect = EOFError()
        client.disconnect()
        client.disconnect()

        ssh_client.close.assert_called_once_with()
        assert not client.connected

    def test_context_manager_disconnects(self, ssh_client, make_config):
        with ParamikoTransferClient() as client:
            client.connect(make_config())
        ssh_client.close.assert_called_once_with()


# ============================================================
# asyncssh
# ============================================================

class FakeHandle:
    def __init__(self, fail_at=None):
        self.writes = []
        self.closed = False
        self.fail_at = fail_at

    async def write(self, data, offset):
        if offset == self.fail_at:
            raise asyncssh.SFTPFailure("disk full")
        self.writes.append((offset, data))
        return len(data)

    async def close(self):
        self.closed = True


class FakeSFTP:
    def __init__(self, handle):
        self.handle = handle
        self.opened = []
        self.exited = False

    async def open(self, path, mode):
        self.opened.append((path, mode))
        return self.handle

    def exit(self):
        self.exited = True


class FakeConnection:
    def __init__(self, sftp):
        self.sftp = sftp
        self.closed = False

    async def start_sftp_client(self):
        return self.sftp

    def close(self):
        self.closed = True

    async def wait_closed(self):
        pass


@pytest.fixture
def fake_asyncssh():
    handle = FakeHandle()
    conn = FakeConnection(FakeSFTP(handle))
    calls = []

    async def open_connection():
        return conn

    def connect(*args, **kwargs):
        calls.append((args, kwargs))
        return open_connection()

    with patch("sftpbench.backends.asyncssh_client.asyncssh.connect", side_effect=connect):
        yield conn, calls


class TestAsyncsshTransferClient:
    def test_connect(self, fake_asyncssh, make_config):
        conn, calls = fake_asyncssh
        client = AsyncsshTransferClient()
        client.connect(make_config(backend="asyncssh", port=2022))

        args, kwargs = calls[0]
        assert args == ("sftp.example.org", 2022)
        assert kwargs["username"] == "bench"
        assert kwargs["password"] == "secret"
        assert kwargs["known_hosts"] is None
        assert kwargs["client_keys"] is None
        assert client.connected
        client.disconnect()

    def test_send_file_writes_chunks_at_offsets(self, fake_asyncssh, make_config):
        conn, _ = fake_asyncssh
        client = AsyncsshTransferClient()
        client.connect(make_config(backend="asyncssh", chunk_size=4))

        client.send_file(io.BytesIO(b"0123456789"), "/incoming/a.txt")

        assert conn.sftp.opened == [("/incoming/a.txt", "wb")]
        assert conn.sftp.handle.writes == [(0, b"0123"), (4, b"4567"), (8, b"89")]
        assert conn.sftp.handle.closed
        client.disconnect()

    def test_send_empty_file_creates_remote_file(self, fake_asyncssh, make_config):
        conn, _ = fake_asyncssh
        client = AsyncsshTransferClient()
        client.connect(make_config(backend="asyncssh"))

        client.send_file(io.BytesIO(b""), "/incoming/empty")

        assert conn.sftp.opened == [("/incoming/empty", "wb")]
        assert conn.sftp.handle.writes == []
        assert conn.sftp.handle.closed
        client.disconnect()

    def test_write_failure_closes_handle(self, fake_asyncssh, make_config):
        conn, _ = fake_asyncssh
        conn.sftp.handle.fail_at = 4
        client = AsyncsshTransferClient()
        client.connect(make_config(backend="asyncssh", chunk_size=4))

        with pytest.raises(TransferError, match="disk full"):
            client.send_file(io.BytesIO(b"0123456789"), "/incoming/a.txt")

        assert conn.sftp.handle.writes == [(0, b"0123")]
        assert conn.sftp.handle.closed
        client.disconnect()

    def test_connect_timeout_fails_fast(self, make_config):
        async def never_answers():
            await asyncio.sleep(30)

        with patch(
            "sftpbench.backends.asyncssh_client.asyncssh.connect",
            side_effect=lambda *a, **kw: never_answers(),
        ):
            client = AsyncsshTransferClient()
            with pytest.raises(ConnectionError):
                client.connect(make_config(backend="asyncssh", connect_timeout=0.05))

        assert not client.connected

    def test_authentication_rejected(self, make_config):
        async def reject():
            raise asyncssh.PermissionDenied("Permission denied")

        with patch(
            "sftpbench.backends.asyncssh_client.asyncssh.connect",
            side_effect=lambda *a, **kw: reject(),
        ):
            client = AsyncsshTransferClient()
            with pytest.raises(ConnectionError, match="Permission denied"):
                client.connect(make_config(backend="asyncssh"))

        assert not client.connected

    def test_disconnect(self, fake_asyncssh, make_config):
        conn, _ = fake_asyncssh
        client = AsyncsshTransferClient()
        client.disconnect()

        client.connect(make_config(backend="asyncssh"))
        client.disconnect()
        client.disconnect()

        assert conn.sftp.exited
        assert conn.closed
        assert not client.connected

    def test_send_file_requires_session(self):
        with pytest.raises(TransferError, match="Not connected"):
            AsyncsshTransferClient().send_file(io.BytesIO(b"x"), "a.txt")
