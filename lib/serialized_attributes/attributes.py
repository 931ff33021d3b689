# serialized_attributes/attributes.py
# Copyright (C) 2026 the sqlalchemy-serialized authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-serialized and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Descriptors presenting keys of the raw mapping as typed attributes."""

from __future__ import annotations

from operator import itemgetter
from typing import Any
from typing import Callable
from typing import Dict
from typing import Optional

from . import processors
from . import types
from .state import instance_state
from .state import SerializedState


class Change(tuple):  # type: ignore[type-arg]
    """A 2-tuple of old and new values, representing a change which has
    occurred on a serialized attribute.

    Compares equal to a plain ``(old, new)`` tuple.

    """

    __slots__ = ()

    old = property(itemgetter(0))
    """Return the value as of the last load or flush."""

    new = property(itemgetter(1))
    """Return the current value."""

    def __new__(cls, old: Any, new: Any) -> "Change":
        return tuple.__new__(cls, (old, new))

    def __repr__(self) -> str:
        return "Change(old=%r, new=%r)" % self


class SerializedAttribute:
    """A typed attribute stored under its own key in a record's blob.

    Produced by :func:`.serialized`; the key is the name of the class
    attribute the descriptor is assigned to.

    """

    key: Optional[str]

    def __init__(
        self, type_: Any, default: Any = None, doc: Optional[str] = None
    ):
        self.type = types.to_instance(type_)
        self.default = default
        self.key = None
        self.__doc__ = doc
        self._bind = self.type.bind_processor()
        self._result = self.type.result_processor()

    def __set_name__(self, owner: Any, name: str) -> None:
        if self.key is None:
            self.key = name

    def __repr__(self) -> str:
        return "%s(%r, %r)" % (self.__class__.__name__, self.key, self.type)

    def __get__(self, obj: Any, owner: Any) -> Any:
        if obj is None:
            return self
        return self.get(instance_state(obj))

    def __set__(self, obj: Any, value: Any) -> None:
        state = instance_state(obj)
        self.set(state, value)
        state.modified_event(obj)

    def __delete__(self, obj: Any) -> None:
        state = instance_state(obj)
        self.set(state, None)
        state.modified_event(obj)

    def _typed(self, value: Any) -> Any:
        if value is None:
            return None
        return self._result(value)

    def canonical(self, stored: Any) -> Any:
        """Return the stored form the setter would produce for a value
        read from a blob; values it can't represent are kept as is."""

        if stored is None:
            return None
        value = self._bind(stored)
        return stored if value is None else value

    def get(self, state: SerializedState) -> Any:
        if self.key in state.raw:
            return self._typed(state.raw[self.key])
        else:
            return self.default

    def set(self, state: SerializedState, value: Any) -> None:
        key = self.key
        state.before_type_cast[key] = value

        if value is None or (
            self.type.clears_on_blank and processors.is_blank(value)
        ):
            state.clear(key)
            return

        stored = self._bind(value)
        if stored is None:
            state.clear(key)
        else:
            state.set(key, stored)

    def get_before_type_cast(self, state: SerializedState) -> Any:
        return state.before_type_cast.get(
            self.key, self.type.before_type_cast_default
        )

    def is_changed(self, state: SerializedState) -> bool:
        return state.change(self.key) is not None

    def get_change(self, state: SerializedState) -> Optional[Change]:
        change = state.change(self.key)
        if change is None:
            return None
        old, new = change
        return Change(self._typed(old), self._typed(new))


def serialized(
    type_: Any, default: Any = None, doc: Optional[str] = None
) -> SerializedAttribute:
    """Declare a serialized attribute on a :class:`.Serialized` class.

    E.g.::

        class Profile(Serialized, Base):
            __tablename__ = "profile"

            id = mapped_column(Integer, primary_key=True)
            data = mapped_column(Text)

            title = serialized(String)
            age = serialized(Integer, default=0)
            active = serialized("boolean")

    :param type_: a :class:`.TypeEngine` class or instance, one of the
     names ``"string"``, ``"integer"``, ``"float"``, ``"boolean"`` or
     ``"timestamp"``, or a SQLAlchemy column type with an equivalent
     ``python_type``.

    :param default: value returned while the attribute is not set.

    :param doc: docstring for the attribute.

    """
    return SerializedAttribute(type_, default=default, doc=doc)


def accessors_for(attr: SerializedAttribute) -> Dict[str, property]:
    """Return the generated per-attribute properties, keyed by name."""

    key = attr.key

    def _before_type_cast(self: Any) -> Any:
        return attr.get_before_type_cast(instance_state(self))

    def _changed(self: Any) -> bool:
        return attr.is_changed(instance_state(self))

    def _change(self: Any) -> Optional[Change]:
        return attr.get_change(instance_state(self))

    getters: Dict[str, Callable[[Any], Any]] = {
        "%s_before_type_cast" % key: _before_type_cast,
        "%s_changed" % key: _changed,
        "%s_change" % key: _change,
    }
    return {
        name: property(fget, doc="Generated accessor for %r." % key)
        for name, fget in getters.items()
    }
