"""
Centralised constants for the logging facade.

Environment variable names, fallbacks and transport defaults live here so
they can be imported by any module without circular dependencies.
"""

# ── Version ──────────────────────────────────────────────────────
APP_VERSION = "0.1.0"

# ── Environment ──────────────────────────────────────────────────
ENV_VAR = "APP_ENV"
DEFAULT_ENV = "development"
SENTRY_DSN_VAR = "SENTRY_DSN"
SERVICE_NAME_VAR = "LOG_SERVICE_NAME"
LOG_FORMAT_VAR = "LOG_FORMAT"
DEFAULT_SERVICE_NAME = "logfacade"

# ── Metadata partitioning ────────────────────────────────────────
# Keys lifted out of caller meta into dedicated error-report fields.
RESERVED_META_KEYS = frozenset({"tags", "fingerprint", "level"})

# ── Record fields ────────────────────────────────────────────────
ERR_MSG_KEY = "errMsg"
ERR_STACK_KEY = "errStack"

# ── Logger ───────────────────────────────────────────────────────
DEFAULT_LOGGER_NAME = "logfacade"
DEFAULT_LOGGER_LEVEL = "debug"

# ── File transport ───────────────────────────────────────────────
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB per log file
LOG_BACKUP_COUNT = 5

# ── Syslog transport ─────────────────────────────────────────────
DEFAULT_SYSLOG_ADDRESS = ("localhost", 514)

# ── HTTP transport ───────────────────────────────────────────────
HTTP_TIMEOUT_SECONDS = 10

# ── Default config file ──────────────────────────────────────────
DEFAULT_CONFIG_PATH = "logging.json"
