# serialized_attributes/exc.py
# Copyright (C) 2026 the sqlalchemy-serialized authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-serialized and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Exceptions used with sqlalchemy-serialized.

The base exception class is :exc:`.SerializedAttributesError`.  There is
deliberately no "cast" error; attribute setters absorb malformed input
and coerce it to a zero value for the declared type.

"""

from __future__ import annotations

from typing import Any
from typing import Optional


class SerializedAttributesError(Exception):
    """Generic error class."""

    code: Optional[str] = None

    def __init__(self, *arg: Any, **kw: Any):
        code = kw.pop("code", None)
        if code is not None:
            self.code = code
        super().__init__(*arg, **kw)

    def _code_str(self) -> str:
        if not self.code:
            return ""
        else:
            return "(error code: %s)" % (self.code,)

    def _message(self) -> str:
        if len(self.args) == 1:
            return str(self.args[0])
        else:
            # not a normal case; str() of the tuple matches what
            # Exception.__str__ would produce
            return str(self.args)

    def __str__(self) -> str:
        message = self._message()

        if self.code:
            message = "%s %s" % (message, self._code_str())

        return message


class ArgumentError(SerializedAttributesError):
    """Raised when an invalid or conflicting function argument is supplied.

    This error generally corresponds to construction time state errors,
    such as a malformed attribute declaration or a value that cannot be
    encoded.

    """


class InvalidRequestError(SerializedAttributesError):
    """sqlalchemy-serialized was asked to do something it can't do.

    This error generally corresponds to runtime state errors.

    """


class DecodeError(SerializedAttributesError):
    """Raised when a stored blob can't be parsed into a mapping.

    The underlying parser error, if any, is available as ``__cause__``.

    """

    code = "dcd1"
