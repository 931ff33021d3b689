# serialized_attributes/__init__.py
# Copyright (C) 2026 the sqlalchemy-serialized authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-serialized and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

from . import orm as orm
from .attributes import Change as Change
from .attributes import serialized as serialized
from .attributes import SerializedAttribute as SerializedAttribute
from .codec import Codec as Codec
from .codec import decode as decode
from .codec import encode as encode
from .exc import ArgumentError as ArgumentError
from .exc import DecodeError as DecodeError
from .exc import InvalidRequestError as InvalidRequestError
from .exc import SerializedAttributesError as SerializedAttributesError
from .orm import flush_serialized as flush_serialized
from .schema import Schema as Schema
from .schema import Serialized as Serialized
from .types import Boolean as Boolean
from .types import DateTime as DateTime
from .types import Float as Float
from .types import Integer as Integer
from .types import String as String
from .types import Timestamp as Timestamp
from .types import TypeEngine as TypeEngine

__version__ = "1.0.0"
