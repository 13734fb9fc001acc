"""
sftpbench - SFTP upload benchmarking harness

Uploads every file of a local directory to an SFTP server through one of
several client libraries and reports per-file throughput:
- paramiko (whole-stream put)
- asyncssh (chunked writes at explicit offsets)
"""

__version__ = "0.1.0"

from .core import (
    Backend,
    BenchConfig,
    TransferClient,
    SftpBenchError,
    InvalidArgument,
    ConnectionError,
    TransferError,
)

from .backends import (
    create_client,
    ParamikoTransferClient,
    AsyncsshTransferClient,
)

from .domain.upload import (
    UploadDriver,
    TransferMetrics,
    RunSummary,
)

from .domain.benchmark import BenchmarkService

__all__ = [
    # Version
    "__version__",
    # Configuration
    "Backend",
    "BenchConfig",
    # Clients
    "TransferClient",
    "create_client",
    "ParamikoTransferClient",
    "AsyncsshTransferClient",
    # Upload
    "UploadDriver",
    "TransferMetrics",
    "RunSummary",
    "BenchmarkService",
    # Errors
    "SftpBenchError",
    "InvalidArgument",
    "ConnectionError",
    "TransferError",
]
