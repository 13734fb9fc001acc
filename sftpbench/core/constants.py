"""
Project constants definitions
"""

# ============================================================
# Default Values
# ============================================================

DEFAULT_SSH_PORT = 22
DEFAULT_CONNECT_TIMEOUT = 4.0
DEFAULT_CHUNK_SIZE = 32 * 1024

# ============================================================
# Configuration
# ============================================================

ENV_PREFIX = "SFTPBENCH_"

# ============================================================
# Exit Codes
# ============================================================

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_INVALID_ARGUMENT = 2
EXIT_CONNECTION_ERROR = 3
EXIT_TRANSFER_ERROR = 4
