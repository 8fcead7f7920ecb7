import os
import time
from dataclasses import dataclass

from .errors import SourceReadError


@dataclass(frozen=True)
class PollResult:
    data: bytes
    offset: int
    cost: float = 0.0

    @property
    def size(self) -> int:
        return len(self.data)


def read_increment(path: str, offset: int) -> PollResult:
    """
    Read everything from `offset` (counted from the start of the file)
    to the current end of file.

    A fresh handle is used on every call. If the file is now shorter than
    `offset` nothing is read and the returned offset is unchanged.
    """
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")

    try:
        fh = open(path, "rb")
    except OSError as e:
        raise SourceReadError(path, "open", e) from e

    with fh:
        try:
            fh.seek(offset, os.SEEK_SET)
        except OSError as e:
            raise SourceReadError(path, "seek", e) from e

        start = time.perf_counter()
        try:
            data = fh.read()
        except OSError as e:
            raise SourceReadError(path, "read", e) from e
        cost = time.perf_counter() - start

        try:
            end = fh.tell()
        except OSError as e:
            raise SourceReadError(path, "seek", e) from e

    return PollResult(data=data, offset=end, cost=cost)
