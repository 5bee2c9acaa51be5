"""Keep logs, outputs and .env lookups of the test run out of the user's home directory."""

import os
import tempfile

_home = tempfile.mkdtemp(prefix="exchange-tasks-test-")
os.environ.setdefault("EXCHANGE_TASKS_HOME", _home)
os.environ.setdefault("EXCHANGE_TASKS_LOG_DIR", os.path.join(_home, "logs"))
os.environ["TRACING_ENABLED"] = "false"
