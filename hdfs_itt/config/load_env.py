import os
from typing import Dict, TypeVar

from dotenv import dotenv_values
from pydantic import ValidationError

from hdfs_itt.errors import ConfigurationError

from .env import Env, PrimaryType

T = TypeVar("T", bound=Env)


def load_env(
    default: type[T] = Env,
    env_file: str | None = None,
    override: T | None = None,
) -> T:
    """
    Build an ``Env`` from process environment variables, then values from
    ``env_file`` (``itt.env`` when not given), then ``override``.
    Later sources win.
    """
    envars = default.types_map()

    if env_file is None:
        env_file = "itt.env"

    values: Dict[str, PrimaryType] = {}
    for envar_name, envar_type in envars.items():
        envar_value = os.getenv(envar_name)
        if envar_value:
            values[envar_name] = envar_type(envar_value)

    if env_file and os.path.exists(env_file):
        env_file_values = dotenv_values(dotenv_path=env_file)

        for envar_name, envar_value in env_file_values.items():
            envar_type = envars.get(envar_name)
            if envar_type and envar_value:
                values[envar_name] = envar_type(envar_value)

    if override:
        values.update(**override.model_dump(exclude_none=True))

    try:
        return default(
            **{name: value for name, value in values.items() if value is not None}
        )

    except (ValidationError, ValueError) as err:
        raise ConfigurationError(
            "Invalid configuration",
            env_file=env_file,
            error=str(err),
        ) from err
