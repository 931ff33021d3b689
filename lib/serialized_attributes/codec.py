# serialized_attributes/codec.py
# Copyright (C) 2026 the sqlalchemy-serialized authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-serialized and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Encode and decode the blob holding a record's serialized attributes.

The codec works on the flat key/value level only and knows nothing about
attribute declarations.  The blob is a JSON object, optionally deflated
with zlib::

    >>> from serialized_attributes import codec
    >>> codec.encode({"title": "abc", "active": True})
    '{"active":1,"title":"abc"}'
    >>> codec.decode('{"active":1,"title":"abc"}')
    {'active': 1, 'title': 'abc'}

"""

from __future__ import annotations

import datetime
from decimal import Decimal
import functools
import json
from typing import Any
from typing import Callable
from typing import Dict
from typing import Mapping
from typing import Optional
from typing import Union
import zlib

from . import exc
from . import log
from . import processors

Blob = Union[str, bytes]

_default_serializer = functools.partial(
    json.dumps, separators=(",", ":"), ensure_ascii=False
)


class Codec(log.Identified):
    """Serialize string-keyed mappings of scalars to and from a blob.

    :param json_serializer: callable used to render the mapping as a JSON
     string; defaults to :func:`json.dumps`.

    :param json_deserializer: callable used to parse a JSON string;
     defaults to :func:`json.loads`.

    :param compress: if True, the JSON text is deflated with zlib and
     the blob is ``bytes``.  Uncompressed JSON blobs are still accepted
     by :meth:`.decode`, so rows written before compression was turned
     on remain readable.

    :param compression_level: zlib level, ``-1`` for the zlib default.

    :param echo: if True, the codec logs its activity at INFO level;
     ``"debug"`` logs at DEBUG level.  See :mod:`serialized_attributes.log`.

    """

    echo = log.echo_property()

    def __init__(
        self,
        json_serializer: Optional[Callable[[Any], str]] = None,
        json_deserializer: Optional[Callable[[str], Any]] = None,
        compress: bool = False,
        compression_level: int = -1,
        echo: log._EchoFlagType = None,
    ):
        if not -1 <= compression_level <= 9:
            raise exc.ArgumentError(
                "compression_level must be between -1 and 9, got %r"
                % (compression_level,)
            )
        self._json_serializer = json_serializer or _default_serializer
        self._json_deserializer = json_deserializer or json.loads
        self.compress = compress
        self.compression_level = compression_level
        self.echo = echo

    def __repr__(self) -> str:
        return "Codec(compress=%r)" % (self.compress,)

    def _scalar(self, key: str, value: Any) -> Any:
        if value is None or isinstance(value, (str, float)):
            return value
        elif isinstance(value, bool):
            return int(value)
        elif isinstance(value, int):
            return value
        elif isinstance(value, (list, dict)):
            # values from foreign writers pass through untouched
            return value

        if isinstance(value, Decimal) and value.is_finite():
            return float(value)
        elif isinstance(value, (datetime.datetime, datetime.date)):
            text = processors.to_timestamp(value)
            if text is not None:
                return text

        raise exc.ArgumentError(
            "Can't encode value %r for key %r; expected a string, "
            "integer, float, boolean or timestamp" % (value, key)
        )

    def encode(self, mapping: Mapping[str, Any]) -> Blob:
        """Serialize ``mapping`` into a blob.

        Keys are written in sorted order, booleans as ``1``/``0`` and
        timestamps as ISO-8601 UTC strings.

        """
        for key in mapping:
            if not isinstance(key, str):
                raise exc.ArgumentError(
                    "Serialized mapping keys must be strings, got %r" % (key,)
                )

        payload = {
            key: self._scalar(key, mapping[key]) for key in sorted(mapping)
        }
        text = self._json_serializer(payload)

        if self._should_log_debug():  # type: ignore[attr-defined]
            self.logger.debug("Encoded %d keys", len(payload))

        if self.compress:
            return zlib.compress(text.encode("utf-8"), self.compression_level)
        else:
            return text

    def decode(self, blob: Optional[Blob]) -> Dict[str, Any]:
        """Parse a blob into a new dictionary.

        ``None`` and empty blobs produce an empty dictionary.  A blob that
        isn't a serialized JSON object raises :class:`.DecodeError`.

        """
        if blob is None or (
            isinstance(blob, (str, bytes, bytearray, memoryview))
            and len(blob) == 0
        ):
            return {}

        try:
            text = self._text(blob)
            value = self._json_deserializer(text)
        except exc.DecodeError:
            raise
        except (ValueError, TypeError) as err:
            self.logger.info("Couldn't decode serialized blob: %s", err)
            raise exc.DecodeError(
                "Couldn't decode serialized blob: %s" % (err,)
            ) from err

        if not isinstance(value, dict):
            raise exc.DecodeError(
                "Serialized blob must contain a JSON object, got %s"
                % (type(value).__name__,)
            )

        if self._should_log_debug():  # type: ignore[attr-defined]
            self.logger.debug("Decoded %d keys", len(value))
        return value

    def _text(self, blob: Any) -> str:
        if isinstance(blob, str):
            return blob
        elif not isinstance(blob, (bytes, bytearray, memoryview)):
            raise exc.DecodeError(
                "Can't decode blob of type %s" % (type(blob).__name__,)
            )

        data = bytes(blob)
        if self.compress and not data.lstrip().startswith(b"{"):
            try:
                data = zlib.decompress(data)
            except zlib.error as err:
                raise exc.DecodeError(
                    "Couldn't inflate serialized blob: %s" % (err,)
                ) from err
        # UnicodeDecodeError is a ValueError, handled by decode()
        return data.decode("utf-8")


default_codec = Codec()


def encode(mapping: Mapping[str, Any]) -> Blob:
    """Serialize ``mapping`` with the default :class:`.Codec`."""
    return default_codec.encode(mapping)


def decode(blob: Optional[Blob]) -> Dict[str, Any]:
    """Parse ``blob`` with the default :class:`.Codec`."""
    return default_codec.decode(blob)
