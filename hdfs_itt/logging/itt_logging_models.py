from .models import Entry, LogLevel


class PhaseInfo(Entry, kw_only=True):
    phase: str
    working_directory: str
    level: LogLevel = LogLevel.INFO


class PhaseError(Entry, kw_only=True):
    phase: str
    working_directory: str
    error_type: str
    level: LogLevel = LogLevel.ERROR


class TopologyInfo(Entry, kw_only=True):
    provisioner: str
    node_count: int
    entry_point: str
    level: LogLevel = LogLevel.INFO


class ClusterCommandDebug(Entry, kw_only=True):
    ordinal: int
    command: str
    level: LogLevel = LogLevel.DEBUG


class VerificationInfo(Entry, kw_only=True):
    path: str
    level: LogLevel = LogLevel.INFO


class VerificationError(Entry, kw_only=True):
    path: str
    expected: str
    actual: str
    level: LogLevel = LogLevel.ERROR
