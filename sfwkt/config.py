from logging.config import dictConfig
from typing import Literal

from pydantic import ByteSize, ConfigDict, Field

from sfwkt.lib.pydantic_settings_integration import pydantic_settings_integration


def _ByteSize(v: str) -> ByteSize:  # noqa: N802
    return ByteSize._validate(v, None)  # noqa: SLF001  # type: ignore


# -------------------- System Configuration --------------------

ENV: Literal['dev', 'test', 'prod'] = 'prod'
LOG_LEVEL: Literal['DEBUG', 'INFO', 'WARNING'] | None = None

# -------------------- Codec Limits --------------------

WKT_PARSE_MAX_SIZE: ByteSize = _ByteSize('64 MiB')
WKT_NESTING_MAX_DEPTH: int = Field(100, gt=0)

# library settings come from the process environment only
pydantic_settings_integration(__name__, globals(), env_prefix='SFWKT_', env_file=None)

PYDANTIC_CONFIG = ConfigDict(
    extra='forbid',
    arbitrary_types_allowed=True,
    allow_inf_nan=False,
    strict=True,
)

if LOG_LEVEL is None:
    LOG_LEVEL = 'INFO' if ENV == 'prod' else 'DEBUG'  # pyright: ignore[reportConstantRedefinition]

# -------------------- Logging configuration --------------------

dictConfig({
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            '()': 'uvicorn.logging.DefaultFormatter',
            'fmt': '%(levelprefix)s | %(asctime)s | %(name)s %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'handlers': {
        'default': {
            'formatter': 'default',
            'class': 'logging.StreamHandler',
            'stream': 'ext://sys.stderr',
        },
    },
    'loggers': {
        'sfwkt': {'handlers': ['default'], 'level': LOG_LEVEL, 'propagate': False},
    },
})
