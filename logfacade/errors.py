"""
Exception hierarchy for the logging facade.

Only construction problems and programming errors are raised by the core.
Failures from transports or the Sentry client propagate unchanged and are
never wrapped in these types.
"""


class LogFacadeError(Exception):
    """Base class for every error raised by ``logfacade`` itself."""


class ConfigurationError(LogFacadeError):
    """Raised when a ``Log`` cannot be built from its configuration."""


class UnknownLevelError(LogFacadeError, ValueError):
    """Raised when a severity name is not one of the syslog levels."""


class RecordConsumedError(LogFacadeError, RuntimeError):
    """Raised when a log record is touched after it has been emitted."""
