"""
Batch resource processing for Django models.

The domain module depends on the app registry and is imported from
``rail_resource.domain`` once Django is set up.
"""

from .defaults import LIBRARY_VERSION as __version__
from .exceptions import (
    ConverterNotFoundError,
    DecodeError,
    InvalidArgumentError,
    InvalidPayloadStructureError,
    InvalidResourceError,
    PayloadTooLargeError,
    ResourceError,
    SizeMismatchError,
    UnexpectedTypeError,
)
from .resource import Resource
from .resource_list import ResourceList
from .status import ResourceListStatus, ResourceStatus
from .violations import ConstraintViolation, ConstraintViolationList

__all__ = [
    "ConstraintViolation",
    "ConstraintViolationList",
    "ConverterNotFoundError",
    "DecodeError",
    "InvalidArgumentError",
    "InvalidPayloadStructureError",
    "InvalidResourceError",
    "PayloadTooLargeError",
    "Resource",
    "ResourceError",
    "ResourceList",
    "ResourceListStatus",
    "ResourceStatus",
    "SizeMismatchError",
    "UnexpectedTypeError",
    "__version__",
]
