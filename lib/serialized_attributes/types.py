# serialized_attributes/types.py
# Copyright (C) 2026 the sqlalchemy-serialized authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-serialized and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Attribute types for serialized attributes.

Each type pairs a *bind processor*, which coerces arbitrary setter input
into the value kept in the raw mapping, with a *result processor*, which
turns a stored value back into a Python value.  Both are taken from
:mod:`serialized_attributes.processors`.

"""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Any
from typing import Callable
from typing import Dict
from typing import Optional
from typing import Type

from sqlalchemy.types import TypeEngine as _SQLTypeEngine

from . import exc
from . import processors


class TypeEngine:
    """The ultimate base class for serialized attribute types."""

    __visit_name__ = "type"

    python_type: Type[Any] = object

    clears_on_blank = True
    """If True, a blank string given to the setter clears the attribute."""

    before_type_cast_default = ""
    """Value of ``<name>_before_type_cast`` when nothing was assigned."""

    def bind_processor(self) -> Callable[[Any], Any]:
        """Return a conversion function for setter input.

        The function returns ``None`` when the input can't be
        represented at all, which clears the attribute.

        """
        return processors.COERCIONS[self.__visit_name__]

    def result_processor(self) -> Callable[[Any], Any]:
        """Return a conversion function for stored values."""
        raise NotImplementedError()

    def __repr__(self) -> str:
        return "%s()" % self.__class__.__name__


class String(TypeEngine):
    __visit_name__ = "string"
    python_type = str

    def result_processor(self) -> Callable[[Any], Any]:
        return processors.to_string


class Integer(TypeEngine):
    __visit_name__ = "integer"
    python_type = int

    def result_processor(self) -> Callable[[Any], Any]:
        return processors.to_integer


class Float(TypeEngine):
    __visit_name__ = "float"
    python_type = float

    def result_processor(self) -> Callable[[Any], Any]:
        return processors.to_float


class Boolean(TypeEngine):
    """A bool datatype.

    Unlike the other types, a blank string is a definite ``False``;
    only ``None`` clears a boolean attribute.

    """

    __visit_name__ = "boolean"
    python_type = bool

    clears_on_blank = False
    before_type_cast_default = "0"

    def result_processor(self) -> Callable[[Any], Any]:
        return processors.to_boolean


class DateTime(TypeEngine):
    """A UTC timestamp, stored as an ISO-8601 string.

    Stored values keep microsecond precision; results are timezone-aware
    :class:`datetime.datetime` objects in UTC.

    """

    __visit_name__ = "timestamp"
    python_type = datetime.datetime

    def result_processor(self) -> Callable[[Any], Any]:
        return processors.to_datetime


Timestamp = DateTime

_type_map: Dict[str, Type[TypeEngine]] = {
    "string": String,
    "str": String,
    "integer": Integer,
    "int": Integer,
    "float": Float,
    "boolean": Boolean,
    "bool": Boolean,
    "timestamp": DateTime,
    "datetime": DateTime,
    "time": DateTime,
}

_python_type_map: Dict[Type[Any], Type[TypeEngine]] = {
    str: String,
    int: Integer,
    float: Float,
    Decimal: Float,
    bool: Boolean,
    datetime.datetime: DateTime,
    datetime.date: DateTime,
}


def _from_sql_type(sqltype: _SQLTypeEngine[Any]) -> TypeEngine:
    try:
        python_type = sqltype.python_type
    except NotImplementedError:
        python_type = None

    cls = _python_type_map.get(python_type)  # type: ignore[arg-type]
    if cls is None:
        raise exc.ArgumentError(
            "SQL type %r has no serialized attribute equivalent" % (sqltype,)
        )
    return cls()


def to_instance(typeobj: Any) -> TypeEngine:
    """Coerce a type specification into a :class:`.TypeEngine` instance.

    Accepts :class:`.TypeEngine` classes and instances, the names in
    ``_type_map``, and SQLAlchemy column types whose ``python_type``
    is one of the supported scalars.

    """
    if isinstance(typeobj, TypeEngine):
        return typeobj
    elif isinstance(typeobj, type) and issubclass(typeobj, TypeEngine):
        if typeobj is TypeEngine:
            raise exc.ArgumentError("TypeEngine is abstract; use a subclass")
        return typeobj()
    elif isinstance(typeobj, str):
        cls: Optional[Type[TypeEngine]] = _type_map.get(typeobj.lower())
        if cls is None:
            raise exc.ArgumentError(
                "Unknown serialized attribute type %r; expected one of %s"
                % (typeobj, ", ".join(sorted(_type_map)))
            )
        return cls()
    elif isinstance(typeobj, type) and issubclass(typeobj, _SQLTypeEngine):
        return _from_sql_type(typeobj())
    elif isinstance(typeobj, _SQLTypeEngine):
        return _from_sql_type(typeobj)
    else:
        raise exc.ArgumentError(
            "Can't interpret %r as a serialized attribute type" % (typeobj,)
        )
