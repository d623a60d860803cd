from os import process_cpu_count
from pathlib import Path

from Cython.Build import cythonize
from Cython.Compiler import Options
from setuptools import Extension, setup

import sfwkt.config  # DO NOT REMOVE  # noqa: F401
from sfwkt.lib.pydantic_settings_integration import pydantic_settings_integration

CYTHON_MARCH = 'native'
CYTHON_MTUNE = 'native'
CYTHON_FLAGS = ''

pydantic_settings_integration(__name__, globals(), env_prefix='SFWKT_')

Options.docstrings = False
Options.annotate = True

dirs = ('sfwkt/lib',)

blacklist: dict[str, set[str]] = {
    'sfwkt/lib': {
        # Reason: dynamic model creation relies on runtime type hints
        'pydantic_settings_integration.py',
    },
}

paths = [
    p
    for dir_ in dirs
    for p in Path(dir_).rglob('*.py')
    if p.name not in blacklist.get(p.parent.as_posix(), set())
]

extra_args: list[str] = [
    '-g',
    '-O3',
    '-pipe',
    f'-march={CYTHON_MARCH}',
    f'-mtune={CYTHON_MTUNE}',
    '-fno-semantic-interposition',
    '-fno-plt',
    '-fvisibility=hidden',
    *CYTHON_FLAGS.split(),
]

setup(
    ext_modules=cythonize(
        [
            Extension(
                path.with_suffix('').as_posix().replace('/', '.'),
                [str(path)],
                extra_compile_args=extra_args,
                extra_link_args=extra_args,
            )
            for path in paths
        ],
        nthreads=process_cpu_count() or 1,
        compiler_directives={
            # https://cython.readthedocs.io/en/latest/src/userguide/source_files_and_compilation.html#compiler-directives
            'overflowcheck': True,
            'embedsignature': True,
            'language_level': 3,
        },
    ),
)
