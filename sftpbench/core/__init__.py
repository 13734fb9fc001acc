"""
Core infrastructure layer
"""
from .config import Backend, BenchConfig
from .constants import *
from .exceptions import *
from .logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from .interfaces import TransferClient

__all__ = [
    "Backend",
    "BenchConfig",
    "setup_logging",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
    "TransferClient",
    "SftpBenchError",
    "InvalidArgument",
    "ConnectionError",
    "TransferError",
]
