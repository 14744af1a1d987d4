from .logging_config import LoggingConfig as LoggingConfig
from .stream_type import StreamType as StreamType
