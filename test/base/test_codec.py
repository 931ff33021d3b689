import datetime
from decimal import Decimal
import json
import zlib

from sqlalchemy.testing import assert_raises
from sqlalchemy.testing import assert_raises_message
from sqlalchemy.testing import assert_raises as assert_raises_return
from sqlalchemy.testing import eq_
from sqlalchemy.testing import is_true
from sqlalchemy.testing.assertions import is_instance_of

from serialized_attributes import codec
from serialized_attributes import exc
from serialized_attributes.codec import Codec


class EncodeDecodeTest:
    def test_round_trip(self):
        hash_ = {"a": 1, "b": 2}
        eq_(codec.decode(codec.encode(hash_)), hash_)

    def test_round_trip_scalars(self):
        mapping = {
            "title": "abc",
            "age": 5,
            "average": 5.1,
            "birthday": "2020-01-01T00:00:00Z",
            "active": True,
        }
        eq_(
            codec.decode(codec.encode(mapping)),
            {
                "title": "abc",
                "age": 5,
                "average": 5.1,
                "birthday": "2020-01-01T00:00:00Z",
                "active": 1,
            },
        )

    def test_booleans_canonicalize(self):
        eq_(codec.encode({"t": True, "f": False}), '{"f":0,"t":1}')

    def test_keys_sorted(self):
        eq_(codec.encode({"b": 1, "a": 2, "c": 3}), '{"a":2,"b":1,"c":3}')

    def test_empty_mapping(self):
        eq_(codec.encode({}), "{}")
        eq_(codec.decode(codec.encode({})), {})

    def test_datetime_values(self):
        dt = datetime.datetime(
            2020, 1, 1, 5, 30, tzinfo=datetime.timezone(
                datetime.timedelta(hours=2)
            )
        )
        eq_(
            codec.decode(codec.encode({"at": dt})),
            {"at": "2020-01-01T03:30:00Z"},
        )

    def test_date_values(self):
        eq_(
            codec.decode(codec.encode({"on": datetime.date(2020, 2, 3)})),
            {"on": "2020-02-03T00:00:00Z"},
        )

    def test_decimal_values(self):
        eq_(codec.decode(codec.encode({"n": Decimal("1.5")})), {"n": 1.5})

    def test_unicode(self):
        eq_(codec.decode(codec.encode({"t": "snowman ☃"})), {
            "t": "snowman ☃"
        })

    def test_foreign_values_pass_through(self):
        mapping = {"tags": ["a", "b"], "nothing": None}
        eq_(codec.decode(codec.encode(mapping)), mapping)

    def test_non_string_key(self):
        assert_raises_message(
            exc.ArgumentError,
            "keys must be strings",
            codec.encode,
            {1: "a"},
        )

    def test_unencodable_value(self):
        assert_raises_message(
            exc.ArgumentError,
            "Can't encode value .* for key 'x'",
            codec.encode,
            {"x": object()},
        )

    def test_unencodable_special_values(self):
        plus_five = datetime.timezone(datetime.timedelta(hours=5))
        for value in (
            Decimal("sNaN"),
            Decimal("Infinity"),
            datetime.datetime(1, 1, 1, tzinfo=plus_five),
        ):
            assert_raises_message(
                exc.ArgumentError,
                "Can't encode value .* for key 'x'",
                codec.encode,
                {"x": value},
            )


class DecodeTest:
    def test_none(self):
        eq_(codec.decode(None), {})

    def test_empty(self):
        eq_(codec.decode(""), {})
        eq_(codec.decode(b""), {})

    def test_bytes(self):
        eq_(codec.decode(b'{"a":1}'), {"a": 1})

    def test_malformed(self):
        err = assert_raises_return(exc.DecodeError, codec.decode, "{not json")
        is_instance_of(err.__cause__, ValueError)

    def test_not_an_object(self):
        assert_raises_message(
            exc.DecodeError,
            "must contain a JSON object, got list",
            codec.decode,
            "[1, 2]",
        )

    def test_bad_utf8(self):
        assert_raises(exc.DecodeError, codec.decode, b'{"a": "\xff"}')

    def test_wrong_type(self):
        assert_raises_message(
            exc.DecodeError,
            "Can't decode blob of type int",
            codec.decode,
            12,
        )

    def test_error_code_in_message(self):
        err = assert_raises_return(exc.DecodeError, codec.decode, "nope")
        is_true("(error code: dcd1)" in str(err))


class CompressedCodecTest:
    def test_round_trip(self):
        c = Codec(compress=True)
        blob = c.encode({"title": "abc", "age": 5})
        is_instance_of(blob, bytes)
        eq_(c.decode(blob), {"title": "abc", "age": 5})

    def test_blob_is_deflated_json(self):
        c = Codec(compress=True, compression_level=9)
        blob = c.encode({"a": 1})
        eq_(json.loads(zlib.decompress(blob)), {"a": 1})

    def test_reads_uncompressed_blobs(self):
        c = Codec(compress=True)
        eq_(c.decode('{"a":1}'), {"a": 1})
        eq_(c.decode(b'{"a":1}'), {"a": 1})

    def test_bad_stream(self):
        c = Codec(compress=True)
        err = assert_raises_return(
            exc.DecodeError, c.decode, b"\x78\x9c garbage"
        )
        is_instance_of(err.__cause__, zlib.error)

    def test_uncompressed_codec_rejects_compressed(self):
        blob = Codec(compress=True).encode({"a": 1})
        assert_raises(exc.DecodeError, codec.decode, blob)

    def test_compression_level_range(self):
        assert_raises_message(
            exc.ArgumentError,
            "compression_level must be between -1 and 9",
            Codec,
            compression_level=12,
        )


class CustomSerializerTest:
    def test_custom_serializer(self):
        calls = []

        def dumps(value):
            calls.append(value)
            return json.dumps(value)

        c = Codec(json_serializer=dumps, json_deserializer=json.loads)
        eq_(c.decode(c.encode({"b": 1, "a": True})), {"a": 1, "b": 1})
        eq_(calls, [{"a": 1, "b": 1}])
        eq_(list(calls[0]), ["a", "b"])

    def test_custom_deserializer_errors_wrapped(self):
        def loads(text):
            raise TypeError("nope")

        c = Codec(json_deserializer=loads)
        assert_raises_message(exc.DecodeError, "nope", c.decode, "{}")
