import logging

from sqlalchemy.testing import eq_
from sqlalchemy.testing import is_
from sqlalchemy.testing import is_false
from sqlalchemy.testing import is_true

from serialized_attributes import log
from serialized_attributes.codec import Codec


class LogTest:
    def teardown_method(self):
        for name in list(logging.Logger.manager.loggerDict):
            if name.startswith("serialized_attributes.codec.Codec."):
                logging.getLogger(name).setLevel(logging.NOTSET)

    def test_echo_flag(self):
        c = Codec()
        is_false(c.echo)

        c.echo = True
        is_(c.echo, True)
        is_true(c.logger.isEnabledFor(logging.INFO))

        c.echo = "debug"
        eq_(c.echo, "debug")

        c.echo = False
        is_false(c.echo)

    def test_instance_logger_name(self):
        c = Codec(echo=False)
        eq_(
            c.logger.name,
            "serialized_attributes.codec.Codec.%s" % c.logging_name,
        )

    def test_debug_output(self, caplog):
        c = Codec(echo="debug")
        with caplog.at_level(logging.DEBUG, logger=c.logger.name):
            c.encode({"a": 1})
        eq_(
            [rec.getMessage() for rec in caplog.records],
            ["Encoded 1 keys"],
        )

    def test_class_logger(self):
        @log.class_logger
        class Thing:
            pass

        eq_(Thing.logger.name, "%s.Thing" % __name__)
        is_false(Thing()._should_log_debug())
