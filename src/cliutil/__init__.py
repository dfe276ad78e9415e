"""cliutil - Error reporting and version banners for command-line programs.

cliutil provides a small error reporter (annotation, printing, fatal faults),
an aggregate error list, and a formatter for ``--version`` output.
"""

__version__ = "0.1.0"
__author__ = "rpapub"
__email__ = "contact@rpapub.dev"
__description__ = "Error reporting and version banners for command-line programs"

from cliutil.errors import (
    ErrorList,
    ErrorReporter,
    IrrecoverableError,
    TracedError,
    default_reporter,
    fault,
)
from cliutil.options import Options, ProgramOptions, load_options
from cliutil.version import version_string

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    "__description__",
    "ErrorList",
    "ErrorReporter",
    "IrrecoverableError",
    "Options",
    "ProgramOptions",
    "TracedError",
    "default_reporter",
    "fault",
    "load_options",
    "version_string",
]
