"""Syslog transport.

The eight levels are native syslog priorities, so the record's level name
is handed to ``SysLogHandler`` untranslated.
"""

from logging.handlers import SysLogHandler
from typing import Optional, Tuple, Union

from ..constants import DEFAULT_SYSLOG_ADDRESS
from ..errors import ConfigurationError
from ..formatters import SyslogFormatter
from .base import HandlerTransport, RaisingHandlerMixin


class _SyslogHandler(RaisingHandlerMixin, SysLogHandler):
    def mapPriority(self, levelName: str) -> str:  # noqa: N802
        return levelName.lower()


class SyslogTransport(HandlerTransport):
    kind = "Syslog"

    def __init__(
        self,
        level: Optional[str] = None,
        address: Union[str, Tuple[str, int], list] = DEFAULT_SYSLOG_ADDRESS,
        facility: Union[str, int] = SysLogHandler.LOG_USER,
    ) -> None:
        """
        Args:
            level: Threshold level.
            address: ``(host, port)`` for UDP or a unix socket path.
            facility: Facility name (``"local0"``) or number.
        """
        if isinstance(address, list):
            address = tuple(address)
        if isinstance(facility, str):
            try:
                facility = SysLogHandler.facility_names[facility]
            except KeyError:
                raise ConfigurationError(
                    f"Unknown syslog facility {facility!r}; expected one of "
                    + ", ".join(sorted(SysLogHandler.facility_names))
                ) from None
        super().__init__(
            _SyslogHandler(address=address, facility=facility),
            level=level,
            formatter=SyslogFormatter(),
        )
