"""Version banner printed by ``-v``/``--version`` flags."""

import platform
from typing import NamedTuple

from cliutil.options import Options

UNDEFINED = "undefined"


class RuntimeInfo(NamedTuple):
    """Interpreter and platform the program runs on."""
    compiler: str
    compiler_version: str
    os: str
    arch: str


def runtime_info() -> RuntimeInfo:
    return RuntimeInfo(
        compiler=platform.python_implementation(),
        compiler_version=platform.python_version(),
        os=platform.system().lower(),
        arch=platform.machine().lower(),
    )


def version_string(opts: Options) -> str:
    """Return the version banner for a program.

    Reads ``program-name``, ``program-version`` and ``program-timestamp``
    from the options, each defaulting to ``undefined``. When
    ``program-buildgoos`` is set, a third line names the build platform
    (``program-buildgoos``/``program-buildgoarch``, defaulting to empty).

    Args:
        opts: Options to read the program metadata from

    Returns:
        Banner of the form::

            name: version
            Built timestamp with: CPython/3.12.1 for linux/x86_64
    """
    name = opts.get("program-name", UNDEFINED)
    version = opts.get("program-version", UNDEFINED)
    timestamp = opts.get("program-timestamp", UNDEFINED)

    rest = ""
    if opts.is_set("program-buildgoos"):
        rest = "\nBuilt on {}/{}".format(
            opts.get("program-buildgoos", ""),
            opts.get("program-buildgoarch", ""),
        )

    info = runtime_info()
    return (
        f"{name}: {version}\n"
        f"Built {timestamp} with: {info.compiler}/{info.compiler_version} "
        f"for {info.os}/{info.arch}{rest}"
    )
