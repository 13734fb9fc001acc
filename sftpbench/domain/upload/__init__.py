"""
Upload domain module
"""
from .models import TransferMetrics, RunSummary, compute_throughput
from .driver import UploadDriver, list_local_files, build_remote_path

__all__ = [
    "TransferMetrics",
    "RunSummary",
    "compute_throughput",
    "UploadDriver",
    "list_local_files",
    "build_remote_path",
]
