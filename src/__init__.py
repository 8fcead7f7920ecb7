# tailscan - rotating log file tailer
# Package initialization file

# Package metadata
__version__ = "1.0.0"
__author__ = "tailscan Team"
__license__ = "MIT"

# Import main public API from internal modules
from .errors import TailError, SourceReadError, SinkWriteError, ConfigError
from .reader import PollResult, read_increment
from .sink import sink_path, append_to_sink
from .session import PollOutcome, SessionSettings, SessionState, SessionSummary, TailSession
from .alerts import Notifier, send_slack, send_email
from .config import DEFAULT_CONFIG, load_config, settings_from_config

# Define what is exposed when `from tailscan import *` is used
__all__ = [
    "TailError",
    "SourceReadError",
    "SinkWriteError",
    "ConfigError",
    "PollResult",
    "read_increment",
    "sink_path",
    "append_to_sink",
    "PollOutcome",
    "SessionSettings",
    "SessionState",
    "SessionSummary",
    "TailSession",
    "Notifier",
    "send_slack",
    "send_email",
    "DEFAULT_CONFIG",
    "load_config",
    "settings_from_config",
]
