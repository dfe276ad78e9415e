"""Error creation, annotation and reporting for command-line programs.

Errors created through an ``ErrorReporter`` remember where they were created
and which error they annotate, so they can be printed either as a single
flattened line or with the full chain and creation frames.
"""

import logging
import sys
import threading
import traceback
from collections.abc import Iterator
from dataclasses import dataclass
from typing import NoReturn, TextIO

logger = logging.getLogger(__name__)

IRRECOVERABLE_MESSAGE = "Irrecoverable error"

_write_lock = threading.Lock()


def _join(parts: tuple[object, ...]) -> str:
    return "".join(str(part) for part in parts)


def _capture_stack() -> list[str]:
    """Return formatted frames of the caller, skipping frames of this module."""
    frames = [frame for frame in traceback.extract_stack() if frame.filename != __file__]
    return traceback.StackSummary.from_list(frames).format()


class IrrecoverableError(BaseException):
    """Raised by ``ErrorReporter.panic`` after the error has been printed.

    Derives from BaseException so ordinary ``except Exception`` handlers
    let it reach the top level.
    """


class TracedError(Exception):
    """Error value carrying an optional cause and its creation frames."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.__cause__ = cause
        self.stack = _capture_stack()

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"

    def chain(self) -> Iterator[BaseException]:
        """Iterate from this error down to the root cause."""
        current: BaseException | None = self
        while current is not None:
            yield current
            current = current.cause if isinstance(current, TracedError) else None

    def root_cause(self) -> BaseException:
        """Return the innermost error of the chain."""
        *_, root = self.chain()
        return root


def format_trace(err: BaseException) -> str:
    """Format an error with its annotation chain and origin frames.

    Annotated errors render their cause first and their own message last, so
    the output reads from the root cause outwards.

    Args:
        err: Error to format.

    Returns:
        Multi-line rendering without a trailing newline.
    """
    if isinstance(err, TracedError):
        if err.cause is not None:
            return f"{format_trace(err.cause)}\n{err.message}"
        return f"{err.message}\n{''.join(err.stack)}".rstrip("\n")

    return "".join(traceback.format_exception(type(err), err, err.__traceback__)).rstrip("\n")


@dataclass(frozen=True)
class ErrorReporter:
    """Creates, annotates and prints errors.

    Attributes:
        out: Writer the errors are printed to. ``None`` writes to the
            current ``sys.stderr``.
        include_trace: Print the annotation chain and creation frames
            instead of the flattened message.
    """
    out: TextIO | None = None
    include_trace: bool = True

    @property
    def sink(self) -> TextIO:
        return self.out if self.out is not None else sys.stderr

    def new(self, format_string: str, *args: object) -> TracedError:
        """Create a new error from a printf-style format string.

        Arguments that do not fit the format string are appended to it
        instead of failing.
        """
        try:
            message = format_string % args if args else format_string
        except (TypeError, ValueError):
            extra = ", ".join(repr(arg) for arg in args)
            message = f"{format_string} (extra args: {extra})"
        return TracedError(message)

    def annotate(self, err: BaseException | None, *context: object) -> TracedError:
        """Wrap ``err`` with leading context.

        The context parts are concatenated and joined to the wrapped error's
        message with ``": "``. Annotating ``None`` creates a fresh error from
        the context alone.
        """
        message = _join(context)
        if err is None:
            logger.debug("Annotating missing error, creating new error: %s", message)
            return TracedError(message)
        return TracedError(message, cause=err)

    def print(self, err: BaseException, *prefix: object) -> None:
        """Write ``err`` to the sink, preceded by ``Error: `` and an optional prefix.

        Args:
            err: Error to print.
            *prefix: Parts concatenated and printed before the error,
                followed by ``": "``.
        """
        text = "Error: "
        if prefix:
            text += _join(prefix) + ": "
        if self.include_trace:
            text += format_trace(err)
        else:
            text += f"{err}\n"

        self._write(text)

    def print_list(self, errors: "ErrorList") -> None:
        """Write the rendering of a non-empty error list, ending the line.

        The rendering already starts with ``Error: ``, so no prefix is added.
        With tracing enabled, every error of the list follows on its own
        ``Error: `` line with its origin frames.
        """
        if errors.is_empty():
            return

        text = errors.render() + "\n"
        if self.include_trace:
            text += "".join(f"Error: {format_trace(err)}\n" for err in errors)

        self._write(text)

    def _write(self, text: str) -> None:
        with _write_lock:
            self.sink.write(text)
            flush = getattr(self.sink, "flush", None)
            if flush is not None:
                flush()

    def panic(self, err: BaseException, *prefix: object) -> NoReturn:
        """Print ``err`` and abort with ``IrrecoverableError``."""
        self.print(err, *prefix)
        logger.debug("Aborting after irrecoverable error: %s", err)
        raise IrrecoverableError(IRRECOVERABLE_MESSAGE) from err


default_reporter = ErrorReporter()


class ErrorList(Exception):
    """Named, ordered collection of errors printed in a single message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self._errors: list[BaseException] = []

    @property
    def errors(self) -> tuple[BaseException, ...]:
        return tuple(self._errors)

    def append(self, err: BaseException) -> None:
        """Add an error to the end of the list."""
        self._errors.append(err)

    def is_empty(self) -> bool:
        return len(self._errors) == 0

    def render(self) -> str:
        """Render all errors as one string, or ``""`` if the list is empty."""
        if not self._errors:
            return ""

        ret = f"Error: {self.message}: "
        for i, err in enumerate(self._errors, start=1):
            ret += f"Error {i}: {err}; "
        return ret

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ErrorList(message={self.message!r}, errors={len(self._errors)})"

    def __len__(self) -> int:
        return len(self._errors)

    def __bool__(self) -> bool:
        # Still an error value when empty; use is_empty() to test for content.
        return True

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self._errors)


def fault(err: BaseException | None, message: str, *args: str) -> None:
    """Exit the process with status 1 if ``err`` is set.

    Meant for top-level error handling in a program's entry point. Writes
    ``Error: <message><args>. (error: <err>)`` to standard error before
    exiting.

    Args:
        err: Error to check; nothing happens when it is None.
        message: Description of what was being done.
        *args: Extra words appended to the message, joined with spaces.
    """
    if err is None:
        return

    logger.debug("Fatal error, exiting: %s", err)
    sys.stderr.write(f"Error: {message}{' '.join(args)}. (error: {err})\n")
    sys.stderr.flush()
    sys.exit(1)
