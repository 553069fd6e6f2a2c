"""Send default logging to a file, since the terminal is taken by the UI."""

from __future__ import annotations

import logging
import os
from typing import TextIO

__all__ = ["log_to_file"]


class _PrefixFormatter(logging.Formatter):
    def __init__(self, prefix: str) -> None:
        super().__init__("%(message)s")
        self._prefix = prefix

    def format(self, record: logging.LogRecord) -> str:
        return self._prefix + super().format(record)


def log_to_file(path: str | os.PathLike, prefix: str) -> TextIO:
    """Direct the root logger to append to ``path``, creating it if needed.

    A space is added after a non-empty prefix that does not already end in
    whitespace. The open file is returned; close it when done.
    """
    f = open(path, "a", encoding="utf-8")

    if prefix and not prefix[-1].isspace():
        prefix += " "

    handler = logging.StreamHandler(f)
    handler.setFormatter(_PrefixFormatter(prefix))

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    return f