# serialized_attributes/state.py
# Copyright (C) 2026 the sqlalchemy-serialized authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-serialized and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Defines instrumentation of instances.

This module is usually not directly visible to user applications, but
defines a large part of the serialized attribute's interactivity.

"""

from __future__ import annotations

from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Tuple
from typing import TYPE_CHECKING

from sqlalchemy import inspect
from sqlalchemy.orm.attributes import flag_dirty

from . import exc
from . import log

if TYPE_CHECKING:
    from .schema import Schema

_STATE_KEY = "_serialized_state"

NO_VALUE = object()


@log.class_logger
class SerializedState:
    """tracks state information at the instance level.

    ``raw`` is the decoded mapping that backs the declared attributes,
    ``committed_state`` is the baseline it is compared against, and
    ``before_type_cast`` holds the last value handed to each setter.

    """

    def __init__(self, schema: Schema, raw: Dict[str, Any]):
        for attr in schema:
            if attr.key in raw:
                raw[attr.key] = attr.canonical(raw[attr.key])

        self.schema = schema
        self.raw = raw
        self.committed_state = dict(raw)
        self.before_type_cast: Dict[str, Any] = {}

        if self._should_log_debug():  # type: ignore[attr-defined]
            unknown = sorted(set(raw).difference(schema.keys()))
            if unknown:
                self.logger.debug(
                    "Keys %s have no declared attribute; passing through",
                    unknown,
                )

    def set(self, key: str, value: Any) -> None:
        self.raw[key] = value

    def clear(self, key: str) -> None:
        self.raw.pop(key, None)

    def changed_keys(self) -> List[str]:
        raw, committed = self.raw, self.committed_state
        return sorted(
            key
            for key in set(raw).union(committed)
            if raw.get(key, NO_VALUE) != committed.get(key, NO_VALUE)
        )

    @property
    def changed(self) -> bool:
        return self.raw != self.committed_state

    def change(self, key: str) -> Optional[Tuple[Any, Any]]:
        """Return the (old, new) stored values of ``key``, or None if
        the key didn't change.  An absent value is reported as None."""

        old = self.committed_state.get(key, NO_VALUE)
        new = self.raw.get(key, NO_VALUE)
        if old == new:
            return None
        return (
            None if old is NO_VALUE else old,
            None if new is NO_VALUE else new,
        )

    def commit_all(self) -> None:
        self.committed_state = dict(self.raw)

    def modified_event(self, obj: Any) -> None:
        """Let the ORM know ``obj`` has pending serialized changes.

        A change to the raw mapping touches no mapped column, so the
        instance is flagged dirty explicitly; the ``before_flush``
        listener then writes the blob.  A no-op for unmapped objects.

        """
        if inspect(obj, raiseerr=False) is not None:
            flag_dirty(obj)

    def flush(self, obj: Any) -> None:
        """Encode the raw mapping into ``obj``'s blob attribute and
        reset change tracking."""

        blob_key = self.schema.blob_key
        if self._should_log_debug():  # type: ignore[attr-defined]
            self.logger.debug(
                "Flushing %d keys into %s.%s; changed: %s",
                len(self.raw),
                type(obj).__name__,
                blob_key,
                self.changed_keys(),
            )
        setattr(obj, blob_key, self.schema.codec.encode(self.raw))
        self.commit_all()


def _schema_of(obj: Any) -> Schema:
    schema = getattr(type(obj), "__serialized_schema__", None)
    if schema is None:
        raise exc.InvalidRequestError(
            "Class %s declares no serialized attributes; "
            "subclass the Serialized mixin" % (type(obj).__name__,)
        )
    return schema  # type: ignore[no-any-return]


def instance_state(obj: Any) -> SerializedState:
    """Return the :class:`.SerializedState` for ``obj``, decoding its
    blob on first access."""

    state = obj.__dict__.get(_STATE_KEY)
    if state is None:
        schema = _schema_of(obj)
        raw = schema.codec.decode(getattr(obj, schema.blob_key, None))
        state = obj.__dict__[_STATE_KEY] = SerializedState(schema, raw)
    return state  # type: ignore[no-any-return]


def has_state(obj: Any) -> bool:
    return _STATE_KEY in obj.__dict__


def reset_state(obj: Any) -> None:
    obj.__dict__.pop(_STATE_KEY, None)
