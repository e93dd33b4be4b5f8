class DecodeError(ValueError):
    """Base class for every error raised while decoding bencoded input."""


class MalformedError(DecodeError):
    """The byte stream violates the bencode grammar."""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} (at byte {offset})")
        self.offset = offset


class MissingFieldError(DecodeError):
    """A required dictionary key is absent."""

    def __init__(self, field: str):
        super().__init__(f"Missing required field: {field!r}")
        self.field = field


class InvalidValueError(DecodeError):
    """A field is present but its value is out of range, mistyped or not text."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid value for {field!r}: {reason}")
        self.field = field
        self.reason = reason
