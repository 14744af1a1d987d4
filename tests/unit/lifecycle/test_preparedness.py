import pathlib

from hdfs_itt.lifecycle import LifecycleState, PreparationDecision, RunState, check_preparedness
from hdfs_itt.lifecycle.lifecycle_state import can_transition
from hdfs_itt.lifecycle.preparedness import create_marker, remove_marker


class TestPreparedness:
    def test_absent_marker(self, working_directory: pathlib.Path):
        decision = check_preparedness(working_directory)

        assert decision == PreparationDecision.ABSENT
        assert decision.should_prepare

    def test_present_marker(self, working_directory: pathlib.Path):
        create_marker(working_directory)

        decision = check_preparedness(working_directory)

        assert decision == PreparationDecision.PRESENT
        assert not decision.should_prepare
        assert (working_directory / ".prepared").stat().st_size == 0

    def test_forced_ignores_marker(self, working_directory: pathlib.Path):
        create_marker(working_directory)

        assert check_preparedness(working_directory, force=True) == PreparationDecision.FORCED

    def test_remove_marker_tolerates_absence(self, working_directory: pathlib.Path):
        remove_marker(working_directory)
        create_marker(working_directory)
        remove_marker(working_directory)

        assert check_preparedness(working_directory) == PreparationDecision.ABSENT


class TestLifecycleState:
    def test_failed_only_allows_cleanup(self):
        assert can_transition(LifecycleState.FAILED, LifecycleState.CLEANED_UP)
        assert not can_transition(LifecycleState.FAILED, LifecycleState.VALIDATED)
        assert not can_transition(LifecycleState.FAILED, LifecycleState.PREPARED)

    def test_phases_can_be_run_individually(self):
        assert can_transition(LifecycleState.UNINITIALIZED, LifecycleState.VALIDATED)
        assert can_transition(LifecycleState.CLEANED_UP, LifecycleState.PREPARED)


class TestRunState:
    def test_round_trip(self, working_directory: pathlib.Path):
        RunState(state=LifecycleState.EXECUTED, phase="execute").save(working_directory)

        loaded = RunState.load(working_directory)

        assert loaded.state == LifecycleState.EXECUTED
        assert loaded.phase == "execute"
        assert loaded.updated_at is not None

    def test_missing_state_is_uninitialized(self, working_directory: pathlib.Path):
        assert RunState.load(working_directory).state == LifecycleState.UNINITIALIZED
