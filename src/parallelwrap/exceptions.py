"""
Errors raised by the validated Wrapper setters.
"""


class ParallelWrapError(Exception):
    """Base class for every ParallelWrap error"""


class InvalidBinaryError(ParallelWrapError):
    def __init__(self, path: str):
        super().__init__(f"Not an executable file: {path!r}")
        self.path = path


class InvalidOutputDirectoryError(ParallelWrapError):
    def __init__(self, path: str):
        super().__init__(f"Results directory is not a writable directory: {path!r}")
        self.path = path


class InvalidTempDirectoryError(ParallelWrapError):
    def __init__(self, path: str):
        super().__init__(f"Temp directory is not a writable directory: {path!r}")
        self.path = path
