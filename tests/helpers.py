"""Shorthand constructors for expected diff lines."""

from linediff.core.models import DiffLine, DiffLineType


def unchanged(content, old, new=None):
    return DiffLine(DiffLineType.UNCHANGED, content, old, old if new is None else new)


def added(content, new):
    return DiffLine(DiffLineType.ADDED, content, None, new)


def removed(content, old):
    return DiffLine(DiffLineType.REMOVED, content, old, None)
