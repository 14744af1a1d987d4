import pathlib
from enum import Enum


MARKER_FILE = ".prepared"


class PreparationDecision(Enum):
    ABSENT = "ABSENT"
    PRESENT = "PRESENT"
    FORCED = "FORCED"

    @property
    def should_prepare(self) -> bool:
        return self != PreparationDecision.PRESENT


def marker_path(working_directory: str | pathlib.Path) -> pathlib.Path:
    return pathlib.Path(working_directory) / MARKER_FILE


def check_preparedness(
    working_directory: str | pathlib.Path,
    force: bool = False,
) -> PreparationDecision:
    if force:
        return PreparationDecision.FORCED

    if marker_path(working_directory).exists():
        return PreparationDecision.PRESENT

    return PreparationDecision.ABSENT


def create_marker(working_directory: str | pathlib.Path) -> None:
    marker_path(working_directory).write_bytes(b"")


def remove_marker(working_directory: str | pathlib.Path) -> None:
    marker_path(working_directory).unlink(missing_ok=True)
