"""Helpers that add context to an existing error."""

from __future__ import annotations


class AnnotatedError(Exception):
    """An error carrying a context message in front of the error it wraps."""

    def __init__(self, message: str, cause: BaseException) -> None:
        super().__init__(f"{message}: {cause}")
        self.message = message
        self.cause = cause
        self.__cause__ = cause


def annotate(err: BaseException | None, message: str) -> AnnotatedError | None:
    """Wrap ``err`` with ``message``; return None when there is no error."""
    if err is None:
        return None
    return AnnotatedError(message, err)


def annotatef(
    err: BaseException | None, message: str, *args: object
) -> AnnotatedError | None:
    """Like :func:`annotate`, formatting ``message`` with ``args`` first."""
    if err is None:
        return None
    text = message % args if args else message
    return AnnotatedError(text, err)