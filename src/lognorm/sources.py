"""
Line sources for the lognorm CLI.

Both sources yield one line at a time without its line ending, so
appliance logs of any size are streamed rather than loaded.
"""

import sys
from pathlib import Path
from typing import Iterator, TextIO

__all__ = ["FileStreamSource", "StdinStreamSource", "create_source"]


class FileStreamSource:
    """
    Lines of a log file, decoded as UTF-8 with undecodable bytes replaced.

    The file is opened when iteration starts; a missing or unreadable path
    surfaces then as an OSError.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read_lines(self) -> Iterator[str]:
        with self.path.open(encoding="utf-8", errors="replace") as f:
            for line in f:
                yield line.rstrip("\r\n")

    @property
    def name(self) -> str:
        return self.path.name


class StdinStreamSource:
    """Lines piped on standard input (``cat pulse.log | lognorm parse``)."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdin

    def read_lines(self) -> Iterator[str]:
        for line in self.stream:
            yield line.rstrip("\r\n")

    @property
    def name(self) -> str:
        return "<stdin>"


def create_source(file_path: str | None) -> FileStreamSource | StdinStreamSource:
    """Pick the source for a path, with None or "-" meaning stdin."""
    if file_path is None or file_path == "-":
        return StdinStreamSource()
    return FileStreamSource(file_path)
