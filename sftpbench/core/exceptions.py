"""
Unified exception definitions
"""


class SftpBenchError(Exception):
    """Base exception class"""
    pass


class InvalidArgument(SftpBenchError):
    """Bad or missing input, raised before any network activity"""
    pass


class ConnectionError(SftpBenchError):
    """Connection or authentication error"""
    pass


class TransferError(SftpBenchError):
    """I/O failure while streaming a file"""
    pass
