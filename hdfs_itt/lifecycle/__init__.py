from .lifecycle_controller import LifecycleController as LifecycleController
from .lifecycle_state import LifecycleState as LifecycleState
from .preparedness import (
    PreparationDecision as PreparationDecision,
    check_preparedness as check_preparedness,
)
from .run_state import RunState as RunState
