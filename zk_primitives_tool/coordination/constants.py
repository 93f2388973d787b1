"""
Constants for coordination operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

# Default connection settings
DEFAULT_HOSTS = "127.0.0.1:2181"
DEFAULT_TIMEOUT = 10.0  # seconds to wait for a session on start

# Default path segment for work records: /<cluster>/<work path>/<work id>
DEFAULT_WORK_PATH = "work"

# Environment variables backing the CLI options
ENV_HOSTS = "ZK_HOSTS"
ENV_CLUSTER = "ZK_CLUSTER"
ENV_WORK_PATH = "ZK_WORK_PATH"
ENV_TIMEOUT = "ZK_TIMEOUT"

# Unconditional delete, ignores the node version
ANY_VERSION = -1

# Payload encoding for work records
PAYLOAD_ENCODING = "utf-8"

# Exit codes shared by all commands
EXIT_NOT_FOUND = 1
EXIT_CONFLICT = 1
EXIT_USAGE = 2
EXIT_REMOTE_ERROR = 3
