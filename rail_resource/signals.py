"""
Signals sent by the resource domain around batch operations.

Every signal is sent with the model class as sender and the ``domain`` and
``resources`` (a ``ResourceList``) keyword arguments. Receivers of the
``pre_*`` signals may flag resources as errors before anything is persisted.
"""

from django.dispatch import Signal

pre_creates = Signal()
post_creates = Signal()
pre_updates = Signal()
post_updates = Signal()
pre_upserts = Signal()
post_upserts = Signal()
pre_deletes = Signal()
post_deletes = Signal()
pre_undeletes = Signal()
post_undeletes = Signal()

ACTION_SIGNALS = {
    "create": (pre_creates, post_creates),
    "update": (pre_updates, post_updates),
    "upsert": (pre_upserts, post_upserts),
    "delete": (pre_deletes, post_deletes),
    "undelete": (pre_undeletes, post_undeletes),
}
