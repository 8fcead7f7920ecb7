class TailError(IOError):
    """Base class for I/O failures that end a tail session."""

    def __init__(self, path: str, operation: str, reason):
        self.path = path
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} failed for {path}: {reason}")


class SourceReadError(TailError):
    pass


class SinkWriteError(TailError):
    pass


class ConfigError(ValueError):
    pass
