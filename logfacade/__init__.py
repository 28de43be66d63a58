"""
logfacade: structured logging with Sentry error reporting.

Provides:
- ``Log``: facade with one method per syslog level and Flask middleware
- ``set_defaults`` / ``LogDefaults``: factory defaults for new loggers
- ``partition``: caller meta → Sentry tags / extra / fingerprint / level
- ``transports``: console, rotating file, syslog, HTTP and in-memory sinks
"""

__version__ = "0.1.0"

from .config import LogDefaults, load_config, reset_defaults, set_defaults, validate_config
from .errors import ConfigurationError, LogFacadeError, RecordConsumedError, UnknownLevelError
from .levels import LEVEL_NAMES, SYSLOG_LEVELS
from .log import Log
from .middleware import RequestLogger
from .partition import ErrorReport, partition
from .record import LogRecordBuilder
from .reporting import ErrorReporter

__all__ = [
    "Log",
    "LogDefaults",
    "set_defaults",
    "reset_defaults",
    "load_config",
    "validate_config",
    "partition",
    "ErrorReport",
    "ErrorReporter",
    "LogRecordBuilder",
    "RequestLogger",
    "LEVEL_NAMES",
    "SYSLOG_LEVELS",
    "LogFacadeError",
    "ConfigurationError",
    "UnknownLevelError",
    "RecordConsumedError",
]
