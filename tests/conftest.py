import os
import tempfile

# Keep rotating log files out of the working tree during test runs.
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="almanac-logs-"))
