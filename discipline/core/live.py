"""
Live lists.

A page mirrors a filtered collection (a student's notices, the pending
accounts, ...). Every push carries the whole result set and the page state is
rebuilt from it with ``apply_snapshot``: the newest push always replaces what
was shown before, nothing is merged.

``LiveQuery`` is the server side. ``fetch()`` reads the current snapshot;
``follow()`` keeps fetching and hands a snapshot to a listener every time the
result set changes. Browsers do the same by polling the JSON snapshot views.
"""
import hashlib
import logging
import time
from dataclasses import dataclass, replace
from operator import attrgetter
from typing import Callable, Optional

from django.db import DatabaseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    records: tuple = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ListState:
    records: tuple = ()
    loading: bool = True
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.loading and not self.records


def sort_newest_first(records, timestamp_field: str):
    # sorted() stays stable with reverse=True: equal timestamps keep their order
    return tuple(sorted(records, key=attrgetter(timestamp_field), reverse=True))


def apply_snapshot(state: ListState, snapshot: Snapshot, timestamp_field: str = "created_at") -> ListState:
    if not snapshot.ok:
        return replace(state, loading=False, error=snapshot.error)
    return ListState(
        records=sort_newest_first(snapshot.records, timestamp_field),
        loading=False,
        error=None,
    )


def partition_profiles(records):
    """Split a profile snapshot into (pending, active)."""
    pending, active = [], []
    for profile in records:
        (pending if profile.role == "pendiente" else active).append(profile)
    return pending, active


def fingerprint(records) -> str:
    h = hashlib.sha1()
    for obj in records:
        values = tuple(getattr(obj, f.attname) for f in obj._meta.concrete_fields)
        h.update(repr(values).encode("utf-8"))
    return h.hexdigest()


class LiveQuery:
    def __init__(self, model, timestamp_field: str, error_message: str = "Error al cargar los datos.", **filters):
        self.model = model
        self.timestamp_field = timestamp_field
        self.error_message = error_message
        self.filters = filters

    def fetch(self) -> Snapshot:
        try:
            rows = list(self.model.objects.filter(**self.filters))
        except DatabaseError:
            logger.exception("Live query on %s failed (filters=%s)", self.model.__name__, self.filters)
            return Snapshot(error=self.error_message)
        return Snapshot(records=sort_newest_first(rows, self.timestamp_field))

    def follow(
        self,
        listener: Callable[[Snapshot], None],
        interval: float = 2.0,
        rounds: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """
        Push the current snapshot, then a new one whenever the result set
        changes. Stops after ``rounds`` fetches (forever when None) or on the
        first error snapshot. Returns the number of pushes.
        """
        last = None
        pushes = 0
        done = 0
        while rounds is None or done < rounds:
            if done:
                sleep(interval)
            done += 1
            snapshot = self.fetch()
            if not snapshot.ok:
                listener(snapshot)
                return pushes + 1
            current = fingerprint(snapshot.records)
            if current != last:
                last = current
                listener(snapshot)
                pushes += 1
        return pushes
