import datetime

import sqlalchemy
from sqlalchemy.testing import assert_raises_message
from sqlalchemy.testing import eq_
from sqlalchemy.testing import is_
from sqlalchemy.testing import is_false
from sqlalchemy.testing import is_true
from sqlalchemy.testing.assertions import is_instance_of

from serialized_attributes import exc
from serialized_attributes import types


class ToInstanceTest:
    def test_class(self):
        is_instance_of(types.to_instance(types.Integer), types.Integer)

    def test_instance(self):
        t = types.String()
        is_(types.to_instance(t), t)

    def test_names(self):
        for name, cls in [
            ("string", types.String),
            ("integer", types.Integer),
            ("float", types.Float),
            ("boolean", types.Boolean),
            ("timestamp", types.DateTime),
            ("datetime", types.DateTime),
            ("Time", types.DateTime),
        ]:
            is_instance_of(types.to_instance(name), cls)

    def test_unknown_name(self):
        assert_raises_message(
            exc.ArgumentError,
            "Unknown serialized attribute type 'decimal'",
            types.to_instance,
            "decimal",
        )

    def test_sqlalchemy_types(self):
        for sqltype, cls in [
            (sqlalchemy.String, types.String),
            (sqlalchemy.Text(), types.String),
            (sqlalchemy.Integer, types.Integer),
            (sqlalchemy.Float, types.Float),
            (sqlalchemy.Numeric(10, 2), types.Float),
            (sqlalchemy.Boolean, types.Boolean),
            (sqlalchemy.DateTime, types.DateTime),
            (sqlalchemy.Date(), types.DateTime),
        ]:
            is_instance_of(types.to_instance(sqltype), cls)

    def test_unsupported_sqlalchemy_type(self):
        assert_raises_message(
            exc.ArgumentError,
            "has no serialized attribute equivalent",
            types.to_instance,
            sqlalchemy.LargeBinary,
        )

    def test_abstract(self):
        assert_raises_message(
            exc.ArgumentError,
            "TypeEngine is abstract",
            types.to_instance,
            types.TypeEngine,
        )

    def test_garbage(self):
        assert_raises_message(
            exc.ArgumentError,
            "Can't interpret 5 as a serialized attribute type",
            types.to_instance,
            5,
        )


class ProcessorTest:
    def test_string(self):
        t = types.String()
        eq_(t.bind_processor()(12), "12")
        eq_(t.result_processor()("abc"), "abc")

    def test_integer(self):
        t = types.Integer()
        eq_(t.bind_processor()("1.2"), 1)
        eq_(t.result_processor()("7"), 7)

    def test_float(self):
        t = types.Float()
        eq_(t.bind_processor()("abc"), 0.0)
        eq_(t.result_processor()(5), 5.0)

    def test_boolean(self):
        t = types.Boolean()
        is_true(t.bind_processor()("1"))
        is_false(t.result_processor()(0))
        is_true(t.result_processor()(1))

    def test_datetime(self):
        t = types.DateTime()
        eq_(
            t.bind_processor()("2020-01-01T00:00:00+00:00"),
            "2020-01-01T00:00:00Z",
        )
        eq_(
            t.result_processor()("2020-01-01T00:00:00Z"),
            datetime.datetime(2020, 1, 1, tzinfo=datetime.timezone.utc),
        )

    def test_blank_policy(self):
        is_true(types.String.clears_on_blank)
        is_true(types.Integer.clears_on_blank)
        is_true(types.DateTime.clears_on_blank)
        is_false(types.Boolean.clears_on_blank)

    def test_before_type_cast_defaults(self):
        eq_(types.String.before_type_cast_default, "")
        eq_(types.Boolean.before_type_cast_default, "0")

    def test_repr(self):
        eq_(repr(types.Timestamp()), "DateTime()")
