from enum import Enum


class LifecycleState(Enum):
    UNINITIALIZED = "UNINITIALIZED"
    PREPARED = "PREPARED"
    INPUT_READY = "INPUT_READY"
    EXECUTED = "EXECUTED"
    VALIDATED = "VALIDATED"
    CLEANED_UP = "CLEANED_UP"
    FAILED = "FAILED"


# Phase commands may be issued individually, so any state can move to any
# phase. Only a failed run is locked until it is explicitly cleaned up.
FAILED_EXITS = frozenset(
    {
        LifecycleState.CLEANED_UP,
        LifecycleState.FAILED,
    }
)


def can_transition(current: LifecycleState, target: LifecycleState) -> bool:
    if current == LifecycleState.FAILED:
        return target in FAILED_EXITS

    return True
