"""
Batch submission: bind the request records and persist them in one call.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from .domain import Domain
from .exceptions import InvalidArgumentError
from .handler import FormConfigList, FormHandler
from .resource_list import ResourceList

BATCH_ACTIONS = ("create", "update", "upsert")


def submit_batch(
    domain: Domain,
    handler: FormHandler,
    config: FormConfigList,
    action: str,
    objects: Optional[Sequence[Any]] = None,
) -> ResourceList:
    """
    Process the forms of the request and run the domain action on them.

    Each record is committed on its own when the config is not
    transactional, which the payload can request with its ``transaction``
    key.

    Raises:
        InvalidArgumentError: When the action is not a form action.
        InvalidResourceError: When the payload cannot be processed.
    """
    if action not in BATCH_ACTIONS:
        raise InvalidArgumentError(
            f'The batch action "{action}" is not one of {", ".join(BATCH_ACTIONS)}'
        )

    forms = handler.process_forms(config, objects)
    operation = getattr(domain, f"{action}s")
    return operation(forms, auto_commit=not config.transactional)
