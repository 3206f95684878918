class BMPError(Exception):
    """Base class for everything the BMP reader raises."""


class NotFoundOrUnreadableError(BMPError):
    pass


class ExtensionMismatchError(BMPError):
    def __init__(self, path, expected, actual):
        super().__init__(f"{path}: expected extension '{expected}', got '{actual}'")
        self.path = path
        self.expected = expected
        self.actual = actual


class AlreadyOpenError(BMPError):
    pass


class NotOpenError(BMPError):
    pass


class ShortReadError(BMPError):
    def __init__(self, path, expected, got):
        super().__init__(f"{path}: read {got} of {expected} bytes")
        self.path = path
        self.expected = expected
        self.got = got


class AlreadyLoadedError(BMPError):
    pass


class NotLoadedError(BMPError):
    pass


class InvalidBitmapError(BMPError):
    pass


class DecodeFailedError(BMPError):
    # stage is one of: open, size, read, close, header
    def __init__(self, stage, cause):
        super().__init__(f"decode failed at '{stage}': {cause}")
        self.stage = stage
        self.cause = cause
