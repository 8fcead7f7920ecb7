import os

from .errors import SinkWriteError

SINK_PREFIX = "result_"


def sink_path(source: str, rotation_count: int) -> str:
    """Sink file for the given rotation epoch, next to the source."""
    directory, name = os.path.split(source)
    return os.path.join(directory, f"{SINK_PREFIX}{rotation_count}_{name}")


def append_to_sink(source: str, rotation_count: int, data: bytes) -> str:
    path = sink_path(source, rotation_count)
    try:
        with open(path, "ab") as f:
            f.write(data)
    except OSError as e:
        raise SinkWriteError(path, "write", e) from e
    return path
