# serialized_attributes/schema.py
# Copyright (C) 2026 the sqlalchemy-serialized authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-serialized and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""The :class:`.Serialized` mixin and the per-class :class:`.Schema`.

A class opts in by subclassing :class:`.Serialized` and assigning
:func:`.serialized` attributes in its body.  The schema is assembled
once, when the class is created, and can't be altered afterwards::

    class Profile(Serialized, Base):
        __tablename__ = "profile"
        __serialized_blob__ = "data"

        id = mapped_column(Integer, primary_key=True)
        data = mapped_column(Text)

        title = serialized(String)
        age = serialized(Integer)

    p = Profile(data=encode({"title": "abc", "age": 5}))
    p.age = "6"
    p.age_change        # Change(old=5, new=6)
    p.raw_data_changed_keys   # ['age']

"""

from __future__ import annotations

from typing import Any
from typing import Dict
from typing import Iterable
from typing import Iterator
from typing import List
from typing import Optional

from sqlalchemy.util import immutabledict

from . import exc
from . import log
from .attributes import accessors_for
from .attributes import SerializedAttribute
from .codec import Codec
from .codec import default_codec
from .state import instance_state
from .state import reset_state


class Schema:
    """An ordered, immutable collection of :class:`.SerializedAttribute`
    declarations, together with the name of the blob attribute and the
    :class:`.Codec` used for it."""

    def __init__(
        self,
        blob_key: str,
        attributes: Iterable[SerializedAttribute],
        codec: Codec = default_codec,
    ):
        self.blob_key = blob_key
        self.codec = codec
        self._attributes: immutabledict = immutabledict(
            {attr.key: attr for attr in attributes}
        )

    def keys(self) -> List[str]:
        return list(self._attributes)

    def __iter__(self) -> Iterator[SerializedAttribute]:
        return iter(self._attributes.values())

    def __contains__(self, key: object) -> bool:
        return key in self._attributes

    def __getitem__(self, key: str) -> SerializedAttribute:
        return self._attributes[key]  # type: ignore[no-any-return]

    def __len__(self) -> int:
        return len(self._attributes)

    def __repr__(self) -> str:
        return "Schema(%r, [%s])" % (
            self.blob_key,
            ", ".join(repr(attr) for attr in self),
        )


def _parent_schema(cls: type) -> Optional[Schema]:
    for base in cls.__mro__[1:]:
        if "__serialized_schema__" in base.__dict__:
            return base.__dict__["__serialized_schema__"]  # type: ignore
    return None


def _build_schema(cls: type) -> Schema:
    blob_key = getattr(cls, "__serialized_blob__", None)
    if not isinstance(blob_key, str) or not blob_key:
        raise exc.ArgumentError(
            "__serialized_blob__ on %s must be a non-empty string, got %r"
            % (cls.__name__, blob_key)
        )

    codec = getattr(cls, "__serialized_codec__", None)
    if not isinstance(codec, Codec):
        raise exc.ArgumentError(
            "__serialized_codec__ on %s must be a Codec, got %r"
            % (cls.__name__, codec)
        )

    parent = _parent_schema(cls)
    attributes: Dict[str, SerializedAttribute] = (
        {attr.key: attr for attr in parent} if parent is not None else {}
    )
    inherited_accessors = {
        accessor: attr.key
        for attr in attributes.values()
        for accessor in accessors_for(attr)
    }

    for name, value in list(cls.__dict__.items()):
        if not isinstance(value, SerializedAttribute):
            continue

        if value.key != name:
            raise exc.ArgumentError(
                "Serialized attribute %r on %s is already declared as %r"
                % (name, cls.__name__, value.key)
            )
        if name == blob_key:
            raise exc.ArgumentError(
                "Serialized attribute %r on %s has the same name as the "
                "blob attribute" % (name, cls.__name__)
            )
        if hasattr(Serialized, name):
            raise exc.ArgumentError(
                "Serialized attribute name %r on %s is reserved"
                % (name, cls.__name__)
            )
        if name in inherited_accessors:
            raise exc.ArgumentError(
                "Serialized attribute %r on %s has the same name as an "
                "accessor generated for inherited serialized attribute %r"
                % (name, cls.__name__, inherited_accessors[name])
            )

        overrides = name in attributes
        for accessor, prop in accessors_for(value).items():
            if not overrides and hasattr(cls, accessor):
                raise exc.ArgumentError(
                    "Can't generate %s.%s for serialized attribute %r; "
                    "the name is already in use"
                    % (cls.__name__, accessor, name)
                )
            setattr(cls, accessor, prop)
        attributes[name] = value

    return Schema(blob_key, attributes.values(), codec)


@log.class_logger
class Serialized:
    """Mixin adding serialized attributes to a class.

    The blob is read from and written to the attribute named by
    ``__serialized_blob__`` (``"data"`` by default), using the
    :class:`.Codec` in ``__serialized_codec__``.  Works for plain
    classes as well as SQLAlchemy mapped classes; see
    :mod:`serialized_attributes.orm` for the latter.

    """

    __serialized_blob__ = "data"
    __serialized_codec__ = default_codec

    def __init_subclass__(cls, **kw: Any) -> None:
        cls.__serialized_schema__ = _build_schema(cls)
        cls.logger.debug(  # type: ignore[attr-defined]
            "Registered %r on %s", cls.__serialized_schema__, cls.__name__
        )
        super().__init_subclass__(**kw)

    def _serialized_attribute(self, name: str) -> SerializedAttribute:
        schema = self.__serialized_schema__
        if name not in schema:
            raise AttributeError(
                "%s has no serialized attribute %r"
                % (type(self).__name__, name)
            )
        return schema[name]

    @property
    def raw_data(self) -> immutabledict:
        """A read-only copy of the decoded mapping, including keys that
        have no declared attribute."""
        return immutabledict(instance_state(self).raw)

    @property
    def raw_data_changed(self) -> bool:
        return instance_state(self).changed

    @property
    def raw_data_changed_keys(self) -> List[str]:
        return instance_state(self).changed_keys()

    @property
    def serialized_attributes(self) -> Dict[str, Any]:
        """Typed values of the declared attributes that are set."""
        state = instance_state(self)
        return {
            attr.key: attr.get(state)
            for attr in self.__serialized_schema__
            if attr.key in state.raw
        }

    def read_serialized(self, name: str) -> Any:
        return self._serialized_attribute(name).get(instance_state(self))

    def write_serialized(self, name: str, value: Any) -> Any:
        """Assign ``value`` to the serialized attribute ``name`` and
        return the attribute's value after coercion."""
        attr = self._serialized_attribute(name)
        state = instance_state(self)
        attr.set(state, value)
        state.modified_event(self)
        return attr.get(state)

    def flush_serialized(self) -> None:
        """Encode the current values into the blob attribute.

        Call this immediately before the record is written.  The mapped
        class integration in :mod:`serialized_attributes.orm` does so from
        the session's ``before_flush`` event.  Change tracking is reset
        afterwards.

        """
        instance_state(self).flush(self)

    def reset_serialized(self) -> None:
        """Discard decoded values; the next access decodes the blob."""
        reset_state(self)
