from .models import (
    Entry as Entry,
    Log as Log,
    LogLevel as LogLevel,
    LogLevelName as LogLevelName,
)
from .config import LoggingConfig as LoggingConfig, StreamType as StreamType
from .streams import Logger as Logger, LoggerStream as LoggerStream
from .itt_logging_models import (
    ClusterCommandDebug as ClusterCommandDebug,
    PhaseError as PhaseError,
    PhaseInfo as PhaseInfo,
    TopologyInfo as TopologyInfo,
    VerificationError as VerificationError,
    VerificationInfo as VerificationInfo,
)
