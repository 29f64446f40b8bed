"""
Binding of request payloads to domain objects.
"""

from .config import FormConfig, FormConfigList
from .domain_config import DomainFormConfigList
from .form_handler import FormHandler, ResourceLimits

__all__ = [
    "DomainFormConfigList",
    "FormConfig",
    "FormConfigList",
    "FormHandler",
    "ResourceLimits",
]
