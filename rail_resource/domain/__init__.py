"""
Resource domains.
"""

from .base import BaseDomain, cancel_all_success_resources
from .domain import Domain

__all__ = ["BaseDomain", "Domain", "cancel_all_success_resources"]
