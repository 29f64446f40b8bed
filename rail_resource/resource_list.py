"""
Ordered, status-aggregating collection of resources.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from .resource import Resource
from .status import ResourceListStatus, ResourceStatus
from .violations import ConstraintViolation, ConstraintViolationList


class ResourceList:
    """
    Resources produced by one batch call.

    The list status is derived from the statuses of its members each time it
    is read, so it always reflects the current state of the resources.
    ``errors`` only holds the list-level violations, not the children ones.
    """

    def __init__(
        self,
        resources: Iterable[Resource] = (),
        errors: Optional[Iterable[ConstraintViolation]] = None,
    ):
        self._resources: list[Resource] = []
        self.errors = ConstraintViolationList(errors or ())
        for resource in resources:
            self.add(resource)

    def __repr__(self) -> str:
        return f"<ResourceList status={self.status.value!r} size={len(self)}>"

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[Resource]:
        return iter(list(self._resources))

    def __contains__(self, resource) -> bool:
        return resource in self._resources

    def __getitem__(self, offset: int) -> Resource:
        return self.get(offset)

    def __setitem__(self, offset: int, resource: Resource) -> None:
        self.set(offset, resource)

    def __delitem__(self, offset: int) -> None:
        self.remove(offset)

    @property
    def resources(self) -> list[Resource]:
        return list(self._resources)

    def all(self) -> list[Resource]:
        return list(self._resources)

    def add(self, resource: Resource) -> None:
        if not isinstance(resource, Resource):
            raise TypeError(
                f"ResourceList only accepts Resource instances, got {type(resource).__name__}"
            )
        self._resources.append(resource)

    def add_all(self, other: "ResourceList") -> None:
        for resource in other.all():
            self.add(resource)
        self.errors.add_all(other.errors)

    def has(self, offset: int) -> bool:
        return 0 <= offset < len(self._resources)

    def get(self, offset: int) -> Resource:
        if not self.has(offset):
            raise IndexError(f'The offset "{offset}" does not exist in resource list')
        return self._resources[offset]

    def set(self, offset: int, resource: Resource) -> None:
        if not isinstance(resource, Resource):
            raise TypeError(
                f"ResourceList only accepts Resource instances, got {type(resource).__name__}"
            )
        if offset == len(self._resources):
            self._resources.append(resource)
            return
        if not self.has(offset):
            raise IndexError(f'The offset "{offset}" does not exist in resource list')
        self._resources[offset] = resource

    def remove(self, offset: int) -> None:
        if self.has(offset):
            del self._resources[offset]

    @property
    def status(self) -> ResourceListStatus:
        count_pending = 0
        count_cancel = 0
        count_error = 0
        count_success = 0

        for resource in self._resources:
            if resource.status == ResourceStatus.PENDING:
                count_pending += 1
            elif resource.status == ResourceStatus.CANCELED:
                count_cancel += 1
            elif resource.status == ResourceStatus.ERROR:
                count_error += 1
            else:
                count_success += 1

        return self._get_status_value(
            count_pending, count_cancel, count_error, count_success
        )

    def _get_status_value(
        self, count_pending: int, count_cancel: int, count_error: int, count_success: int
    ) -> ResourceListStatus:
        count = len(self._resources)
        if count == 0:
            return ResourceListStatus.SUCCESSFULLY

        if count == count_pending:
            return ResourceListStatus.PENDING
        if count == count_cancel:
            return ResourceListStatus.CANCEL
        if count == count_error:
            return ResourceListStatus.ERROR
        if count == count_success:
            return ResourceListStatus.SUCCESSFULLY
        return ResourceListStatus.MIXED

    def has_errors(self) -> bool:
        """Check if there is an error on the list or on an unfinished child."""
        if len(self.errors) > 0:
            return True

        for resource in self._resources:
            if not resource.is_valid() and resource.status in (
                ResourceStatus.ERROR,
                ResourceStatus.PENDING,
            ):
                return True

        return False
