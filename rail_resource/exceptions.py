"""
Exceptions raised by the resource library.

Structural errors (invalid payload, size limits, decoding) abort a whole
batch before anything is persisted. Per-item failures are never raised:
they are reported on the resources of the returned list.
"""

from typing import Optional


class ResourceError(Exception):
    """Base exception for resource operations."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return self.message


class InvalidArgumentError(ResourceError, ValueError):
    """Raised when an argument given to the library is invalid."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_ARGUMENT")


class UnexpectedTypeError(InvalidArgumentError):
    """Raised when an object is not an instance of the expected class."""

    def __init__(self, value, expected_type: str, position: Optional[int] = None):
        given = value.__qualname__ if isinstance(value, type) else type(value).__qualname__
        message = f'Expected argument of type "{expected_type}", "{given}" given'
        if position is not None:
            message += f' at the position "{position}"'
        super().__init__(message)
        self.code = "UNEXPECTED_TYPE"
        self.value = value
        self.expected_type = expected_type
        self.position = position


class InvalidResourceError(ResourceError):
    """Raised when the submitted payload cannot be processed."""

    def __init__(self, message: str, code: str = "INVALID_RESOURCE"):
        super().__init__(message, code=code)


class InvalidPayloadStructureError(InvalidResourceError):
    """Raised when the batch payload does not have the expected structure."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_PAYLOAD_STRUCTURE")


class PayloadTooLargeError(InvalidResourceError):
    """Raised when the payload contains more records than allowed."""

    def __init__(self, message: str, limit: int):
        super().__init__(message, code="PAYLOAD_TOO_LARGE")
        self.limit = limit


class SizeMismatchError(InvalidResourceError):
    """Raised when the record count differs from the object count."""

    def __init__(self, message: str, request_size: int, object_size: int):
        super().__init__(message, code="SIZE_MISMATCH")
        self.request_size = request_size
        self.object_size = object_size


class DecodeError(InvalidResourceError):
    """Raised when the request content cannot be decoded."""

    def __init__(self, message: str, code: str = "DECODE_ERROR"):
        super().__init__(message, code=code)


class ConverterNotFoundError(DecodeError):
    """Raised when no converter is registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(
            f'The converter "{name}" does not exist', code="CONVERTER_NOT_FOUND"
        )
        self.name = name
