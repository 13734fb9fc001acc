"""
Upload metrics models
"""
from dataclasses import dataclass, field
from typing import List, Dict, Any


def compute_throughput(bytes_transferred: int, elapsed_seconds: float) -> float:
    """
    Throughput in KB/s (bytes / elapsed / 1024).

    Zero bytes or a non-positive elapsed time give 0.0 rather than a
    division by (near) zero.
    """
    if bytes_transferred <= 0 or elapsed_seconds <= 0:
        return 0.0
    return bytes_transferred / elapsed_seconds / 1024.0


@dataclass(frozen=True)
class TransferMetrics:
    """Timing of a single file upload"""
    name: str
    remote_path: str
    bytes_transferred: int
    elapsed_seconds: float

    @property
    def throughput_kbps(self) -> float:
        return compute_throughput(self.bytes_transferred, self.elapsed_seconds)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "name": self.name,
            "remote_path": self.remote_path,
            "bytes_transferred": self.bytes_transferred,
            "elapsed_seconds": self.elapsed_seconds,
            "throughput_kbps": self.throughput_kbps,
        }


@dataclass
class RunSummary:
    """Totals over every file uploaded in one run"""
    transfers: List[TransferMetrics] = field(default_factory=list)

    def add(self, metrics: TransferMetrics) -> None:
        self.transfers.append(metrics)

    @property
    def files(self) -> int:
        return len(self.transfers)

    @property
    def total_bytes(self) -> int:
        return sum(m.bytes_transferred for m in self.transfers)

    @property
    def total_seconds(self) -> float:
        return sum(m.elapsed_seconds for m in self.transfers)

    @property
    def throughput_kbps(self) -> float:
        return compute_throughput(self.total_bytes, self.total_seconds)
