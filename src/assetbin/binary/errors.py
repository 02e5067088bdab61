from __future__ import annotations


class DecodeError(ValueError):
    """A decode operation failed; carries the operation name and byte offset."""

    def __init__(self, operation: str, offset: int, detail: str):
        self.operation = operation
        self.offset = offset
        self.detail = detail
        super().__init__(f"{operation} at offset {offset}: {detail}")


class TruncatedInputError(DecodeError):
    def __init__(self, operation: str, offset: int, needed: int, available: int):
        self.needed = needed
        self.available = available
        super().__init__(
            operation, offset, f"underrun: need {needed} bytes, {available} left"
        )


class MissingTerminatorError(TruncatedInputError):
    def __init__(self, operation: str, offset: int, available: int):
        # At least one more byte (the terminator) would have been needed.
        super().__init__(operation, offset, available + 1, available)
        self.detail = f"no NUL terminator in the {available} remaining bytes"
        self.args = (f"{operation} at offset {offset}: {self.detail}",)


class MalformedDataError(DecodeError):
    pass


class MalformedEnumError(MalformedDataError):
    def __init__(self, operation: str, offset: int, enum_name: str, value: int):
        self.enum_name = enum_name
        self.value = value
        super().__init__(operation, offset, f"unexpected value for {enum_name}: {value}")


class GridSizeError(DecodeError):
    pass


class TrailingDataError(DecodeError):
    def __init__(self, operation: str, offset: int, leftover: int):
        self.leftover = leftover
        super().__init__(operation, offset, f"{leftover} unconsumed bytes")


class LayoutError(ValueError):
    """A StructLayout definition is inconsistent (raised when it is built)."""
