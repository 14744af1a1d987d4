import contextvars

from hdfs_itt.logging.models import LogLevel, LogLevelName

from .stream_type import StreamType


_log_level = contextvars.ContextVar("itt_log_level", default=LogLevel.INFO)
_log_stream = contextvars.ContextVar("itt_log_stream", default=StreamType.STDERR)
_log_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "itt_log_path",
    default=None,
)


class LoggingConfig:
    """
    Process-wide logging settings. Every ``LoggerStream`` reads the level,
    console stream and JSON log file path from here when it logs.
    """

    def update(
        self,
        log_path: str | None = None,
        log_level: LogLevelName | None = None,
        log_stream: StreamType | None = None,
    ):
        if log_path:
            _log_path.set(log_path)

        if log_level:
            _log_level.set(LogLevel.to_level(log_level))

        if log_stream:
            _log_stream.set(log_stream)

    def enabled(self, level: LogLevel) -> bool:
        return level.rank >= _log_level.get().rank

    @property
    def level(self) -> LogLevel:
        return _log_level.get()

    @property
    def stream(self) -> StreamType:
        return _log_stream.get()

    @property
    def path(self) -> str | None:
        return _log_path.get()
