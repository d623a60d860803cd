import logging
from collections.abc import Callable
from sys import modules
from typing import Any, get_type_hints

from pydantic import create_model
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, SettingsConfigDict


def _is_setting_name(name: str) -> bool:
    return name[:1] != '_' and name.isupper()


def pydantic_settings_integration(
    caller_name: str,
    caller_globals: dict[str, Any],
    /,
    *,
    env_prefix: str = '',
    env_file: str | None = '.env',
    name_filter: Callable[[str], bool] = _is_setting_name,
) -> None:
    """
    Override the calling module's uppercase globals with values from the environment.

    A settings model is derived from the module's type hints (or the default values' types),
    populated from environment variables and the optional .env file, and the validated
    values are written back into the module globals.
    """
    filtered_globals = {k: v for k, v in caller_globals.items() if name_filter(k)}
    if not filtered_globals:
        logging.warning('No settings found in %s matching the filter', caller_name)
        return

    type_hints = get_type_hints(modules[caller_name])
    fields: dict[str, tuple[Any, Any]] = {
        name: (
            type_hints.get(name, Any if isinstance(value, FieldInfo) else type(value)),
            value,
        )
        for name, value in filtered_globals.items()
    }

    config = SettingsConfigDict(
        env_prefix=env_prefix,
        env_file=env_file,
        extra='ignore',
    )
    model_instance = create_model(
        f'{caller_name}_DynamicSettings',
        __base__=type(
            f'{caller_name}_DynamicBaseSettings',
            (BaseSettings,),
            {'model_config': config},
        ),
        **fields,  # type: ignore
    )()

    for name in filtered_globals:
        caller_globals[name] = getattr(model_instance, name)
