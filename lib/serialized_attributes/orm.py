# serialized_attributes/orm.py
# Copyright (C) 2026 the sqlalchemy-serialized authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-serialized and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Integration of serialized attributes with the SQLAlchemy ORM.

Importing :mod:`serialized_attributes` establishes the listeners below;
a mapped class only needs to include the :class:`.Serialized` mixin::

    class Base(DeclarativeBase):
        pass


    class Profile(Serialized, Base):
        __tablename__ = "profile"

        id = mapped_column(Integer, primary_key=True)
        data = mapped_column(Text)

        title = serialized(String)

* ``before_flush`` on :class:`~sqlalchemy.orm.Session` encodes the raw
  mapping of every affected instance into its blob column, so changes
  that only touched serialized attributes are flushed too.

* ``expire`` and ``refresh`` on the mixin discard decoded values when
  the blob column is expired or reloaded, e.g. after ``commit()``.

A write can still be vetoed by the application, e.g. by raising from its
own ``before_flush`` listener; this module only performs the encoding.

"""

from __future__ import annotations

import itertools
import logging
from typing import Any
from typing import Iterator
from typing import Optional

from sqlalchemy import event
from sqlalchemy.orm import Session

from .schema import Serialized
from .state import has_state
from .state import reset_state

logger = logging.getLogger(__name__)


def flush_serialized(obj: Serialized) -> None:
    """Encode ``obj``'s serialized attributes into its blob column."""
    obj.flush_serialized()


def _serialized_for_flush(session: Session) -> Iterator[Serialized]:
    deleted = session.deleted
    for obj in itertools.chain(session.new, session.dirty):
        if (
            isinstance(obj, Serialized)
            and obj not in deleted
            and has_state(obj)
        ):
            yield obj


@event.listens_for(Session, "before_flush")
def _before_flush(
    session: Session, flush_context: Any, instances: Any
) -> None:
    for obj in _serialized_for_flush(session):
        flush_serialized(obj)


def _blob_affected(target: Serialized, attrs: Optional[Any]) -> bool:
    return attrs is None or target.__serialized_schema__.blob_key in attrs


@event.listens_for(Serialized, "expire", propagate=True)
def _expire(target: Serialized, attrs: Optional[Any]) -> None:
    if _blob_affected(target, attrs):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Discarding serialized state of %r", target)
        reset_state(target)


@event.listens_for(Serialized, "refresh", propagate=True)
def _refresh(target: Serialized, context: Any, attrs: Optional[Any]) -> None:
    if _blob_affected(target, attrs):
        reset_state(target)
