from __future__ import annotations

import datetime
import pathlib

import orjson
from pydantic import BaseModel, StrictStr

from .lifecycle_state import LifecycleState


STATE_FILE = ".state"


class RunState(BaseModel):
    state: LifecycleState = LifecycleState.UNINITIALIZED
    phase: StrictStr | None = None
    error: StrictStr | None = None
    updated_at: StrictStr | None = None

    def save(self, working_directory: str | pathlib.Path) -> None:
        self.updated_at = datetime.datetime.now(datetime.UTC).isoformat()
        (pathlib.Path(working_directory) / STATE_FILE).write_bytes(
            orjson.dumps(
                self.model_dump(mode="json"),
                option=orjson.OPT_INDENT_2,
            )
        )

    @classmethod
    def load(cls, working_directory: str | pathlib.Path) -> RunState:
        state_path = pathlib.Path(working_directory) / STATE_FILE
        if not state_path.exists():
            return cls()

        return cls(**orjson.loads(state_path.read_bytes()))

    @staticmethod
    def remove(working_directory: str | pathlib.Path) -> None:
        (pathlib.Path(working_directory) / STATE_FILE).unlink(missing_ok=True)
