# serialized_attributes/log.py
# Copyright (C) 2026 the sqlalchemy-serialized authors and contributors
# <see AUTHORS file>
#
# This module is part of sqlalchemy-serialized and is released under
# the MIT License: https://www.opensource.org/licenses/mit-license.php

"""Logging control and utilities.

Control of logging for sqlalchemy-serialized can be performed from the
regular python logging module.  The regular dotted module namespace is
used, starting at 'serialized_attributes'.  For class-level logging, the
class name is appended.

The "echo" keyword parameter which is available on :class:`.Codec`
objects corresponds to a logger specific to that instance only.

E.g.::

    codec.echo = True

is equivalent to::

    import logging
    logger = logging.getLogger(
        'serialized_attributes.codec.Codec.%s' % codec.logging_name
    )
    logger.setLevel(logging.INFO)

"""

from __future__ import annotations

import logging
import sys
from typing import Any
from typing import Optional
from typing import Type
from typing import TypeVar
from typing import Union

from sqlalchemy.util import memoized_property

_EchoFlagType = Union[None, bool, str]

rootlogger = logging.getLogger("serialized_attributes")
if rootlogger.level == logging.NOTSET:
    rootlogger.setLevel(logging.WARN)

default_enabled = False


def default_logging(name: str) -> None:
    global default_enabled
    if logging.getLogger(name).getEffectiveLevel() < logging.WARN:
        default_enabled = True
    if not default_enabled:
        default_enabled = True
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        rootlogger.addHandler(handler)


_IT = TypeVar("_IT", bound=Type[Any])


def class_logger(cls: _IT) -> _IT:
    logger = logging.getLogger(cls.__module__ + "." + cls.__name__)
    cls._should_log_debug = lambda self: logger.isEnabledFor(  # type: ignore
        logging.DEBUG
    )
    cls._should_log_info = lambda self: logger.isEnabledFor(  # type: ignore
        logging.INFO
    )
    cls.logger = logger
    return cls


class Identified:
    @memoized_property
    def logging_name(self) -> str:
        # limit the number of loggers by chopping off the hex(id).
        return "0x...%s" % hex(id(self))[-4:]


def instance_logger(
    instance: Identified, echoflag: _EchoFlagType = None
) -> logging.Logger:
    """create a logger for an instance that implements :class:`.Identified`.

    Warning: each distinct name is a permanent logger in the logging
    module; use only for long-lived objects such as codecs.

    """

    name = "%s.%s.%s" % (
        instance.__class__.__module__,
        instance.__class__.__name__,
        instance.logging_name,
    )

    logger = logging.getLogger(name)
    if echoflag == "debug":
        default_logging(name)
        logger.setLevel(logging.DEBUG)
    elif echoflag is True:
        default_logging(name)
        logger.setLevel(logging.INFO)
    elif echoflag is False:
        logger.setLevel(logging.WARN)

    instance._should_log_debug = lambda: logger.isEnabledFor(  # type: ignore
        logging.DEBUG
    )
    instance._should_log_info = lambda: logger.isEnabledFor(  # type: ignore
        logging.INFO
    )
    return logger


class echo_property:
    __doc__ = """\
    When ``True``, enable log output for this element.

    This has the effect of setting the Python logging level for the namespace
    of this element's class and object reference.  A value of boolean ``True``
    indicates that the loglevel ``logging.INFO`` will be set for the logger,
    whereas the string value ``debug`` will set the loglevel to
    ``logging.DEBUG``.
    """

    def __get__(
        self, instance: Optional[Identified], owner: Type[Any]
    ) -> Any:
        if instance is None:
            return self
        elif instance._should_log_debug():  # type: ignore
            return "debug"
        else:
            return instance._should_log_info()  # type: ignore

    def __set__(self, instance: Identified, value: _EchoFlagType) -> None:
        instance.logger = instance_logger(  # type: ignore
            instance, echoflag=value
        )
