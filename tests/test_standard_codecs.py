"""Tests for the standard codec set."""

import datetime as dt
import math
import re
from collections import OrderedDict
from types import MappingProxyType

import pytest

from tagjson import CodecRegistry
from tagjson.codecs import BigIntegerCodec
from tagjson.codecs import ExactNumberCodec
from tagjson.codecs import KeyedCollectionCodec
from tagjson.codecs import PatternCodec
from tagjson.codecs import TimestampCodec
from tagjson.codecs import UniqueCollectionCodec
from tagjson.codecs.standard import MAX_SAFE_INTEGER


def _round_trip(registry: CodecRegistry, value):
    return registry.deserialize(registry.serialize(value))


class TestExactNumberCodec:
    """Tests for the (00) exact-number codec."""

    codec = ExactNumberCodec()

    @pytest.mark.parametrize(
        "value, payload",
        [(0, "0"), (27, "r"), (-10, "-a"), (36, "10"), (MAX_SAFE_INTEGER, "2gosa7pa2gv")],
    )
    def test_integers_as_base36(self, value: int, payload: str) -> None:
        """Integers are written as signed base-36 digits."""
        assert self.codec.matches(value)
        assert self.codec.encode(value) == payload
        assert self.codec.decode(payload) == value

    @pytest.mark.parametrize("value", [0.1, -2.5, 1e300, 5e-324, 3.0, math.inf, -math.inf])
    def test_floats_are_lossless(self, value: float) -> None:
        """Floats keep their exact value and type."""
        decoded = self.codec.decode(self.codec.encode(value))
        assert decoded == value
        assert isinstance(decoded, float)

    def test_nan(self) -> None:
        """NaN survives as NaN."""
        assert math.isnan(self.codec.decode(self.codec.encode(math.nan)))

    @pytest.mark.parametrize("value", [True, False, MAX_SAFE_INTEGER + 1, "1", None])
    def test_non_matching(self, value) -> None:
        """Booleans, unsafe integers and non-numbers are not handled."""
        assert not self.codec.matches(value)

    @pytest.mark.parametrize("payload", ["", "Z", "1.5", "~abc", "-", " 1"])
    def test_malformed_payload(self, payload: str) -> None:
        """Malformed payloads are left undecoded."""
        assert self.codec.decode(payload) is None

    def test_overlong_payload(self, standard_registry: CodecRegistry) -> None:
        """Base-36 payloads too long to convert are left as strings."""
        text = "(00)" + "z" * 5000

        assert self.codec.decode(text[4:]) is None
        assert standard_registry.deserialize(f'"{text}"') == text


class TestBigIntegerCodec:
    """Tests for the (01) big-integer codec."""

    codec = BigIntegerCodec()

    @pytest.mark.parametrize("value", [-10, 0, 2**64, -(3**100)])
    def test_round_trip(self, value: int) -> None:
        """Integers are written as decimal text."""
        assert self.codec.matches(value)
        assert self.codec.encode(value) == str(value)
        assert self.codec.decode(str(value)) == value

    def test_unsafe_integers_use_big_integer(self, standard_registry: CodecRegistry) -> None:
        """Integers outside the safe range fall through to the big-integer codec."""
        value = MAX_SAFE_INTEGER + 1
        assert standard_registry.serialize(value) == f'"(01){value}"'
        assert _round_trip(standard_registry, -(2**100)) == -(2**100)

    def test_alone(self, registry: CodecRegistry) -> None:
        """On its own the codec handles small integers too."""
        registry.register_codec(BigIntegerCodec())
        assert registry.serialize({"n": -10}) == '{"n":"(01)-10"}'
        assert registry.deserialize('{"n":"(01)-10"}') == {"n": -10}

    @pytest.mark.parametrize("payload", ["", "1.0", "abc", "--1"])
    def test_malformed_payload(self, payload: str) -> None:
        """Non-decimal payloads are left undecoded."""
        assert self.codec.decode(payload) is None

    def test_rejects_bool(self) -> None:
        """Booleans are not integers here."""
        assert not self.codec.matches(True)

    def test_beyond_interpreter_digit_limit(self, standard_registry: CodecRegistry) -> None:
        """Integers with more digits than str(int) allows still round trip."""
        value = -(10**5000) + 7

        text = standard_registry.serialize({"n": value})

        assert text.startswith('{"n":"(01)-9')
        assert standard_registry.deserialize(text) == {"n": value}

    def test_long_payload_decodes(self) -> None:
        """A 5000-digit payload decodes without hitting the conversion limit."""
        payload = "9" * 5000
        assert self.codec.decode(payload) == 10**5000 - 1


class TestPatternCodec:
    """Tests for the (02) pattern codec."""

    codec = PatternCodec()

    def test_multiple_flags(self) -> None:
        """Source and flags survive a round trip."""
        pattern = re.compile(r"^a+\d{2}$", re.IGNORECASE | re.MULTILINE | re.DOTALL)

        payload = self.codec.encode(pattern)
        decoded = self.codec.decode(payload)

        assert payload == r"^a+\d{2}$___flags___ims"
        assert decoded.pattern == pattern.pattern
        assert decoded.flags == pattern.flags

    def test_no_flags(self) -> None:
        """Patterns without explicit flags encode an empty flag list."""
        assert self.codec.encode(re.compile("abc")) == "abc___flags___"
        assert self.codec.decode("abc___flags___").flags == re.compile("abc").flags

    def test_ascii_and_verbose(self) -> None:
        """ASCII and VERBOSE flags are preserved."""
        pattern = re.compile(r" \w + # word", re.ASCII | re.VERBOSE)
        decoded = self.codec.decode(self.codec.encode(pattern))
        assert decoded.flags == pattern.flags

    def test_separator_inside_source(self) -> None:
        """The last separator splits source from flags."""
        pattern = re.compile("x___flags___y", re.I)
        decoded = self.codec.decode(self.codec.encode(pattern))
        assert decoded.pattern == "x___flags___y"
        assert decoded.flags == pattern.flags

    def test_bytes_patterns_not_matched(self) -> None:
        """Only str patterns are handled."""
        assert not self.codec.matches(re.compile(b"abc"))
        assert not self.codec.matches("abc")

    @pytest.mark.parametrize("payload", ["abc", "abc___flags___q", "(___flags___"])
    def test_malformed_payload(self, payload: str) -> None:
        """Missing separators, unknown flags and invalid patterns are left undecoded."""
        assert self.codec.decode(payload) is None

    def test_through_registry(self, standard_registry: CodecRegistry) -> None:
        """Patterns nested in a document round trip."""
        decoded = _round_trip(standard_registry, {"re": re.compile("a|b", re.I)})
        assert decoded["re"].pattern == "a|b"
        assert decoded["re"].flags == re.compile("a|b", re.I).flags


class TestTimestampCodec:
    """Tests for the (03) timestamp codec."""

    codec = TimestampCodec()

    def test_known_instant(self) -> None:
        """The payload is base-36 milliseconds since the epoch."""
        instant = dt.datetime(2020, 7, 27, 7, 2, 59, 259000, tzinfo=dt.timezone.utc)
        assert self.codec.encode(instant) == "kd45zo3f"
        assert self.codec.decode("kd45zo3f") == instant

    def test_epoch_and_before(self) -> None:
        """The epoch itself and earlier instants round trip."""
        epoch = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
        before = dt.datetime(1969, 12, 31, 23, 59, 59, 999000, tzinfo=dt.timezone.utc)

        assert self.codec.encode(epoch) == "0"
        assert self.codec.decode("0") == epoch
        assert self.codec.encode(before) == "-1"
        assert self.codec.decode("-1") == before

    def test_other_timezones(self) -> None:
        """Aware datetimes in other zones decode to the same instant in UTC."""
        tz = dt.timezone(dt.timedelta(hours=2))
        instant = dt.datetime(2020, 7, 27, 9, 2, 59, 259000, tzinfo=tz)

        decoded = self.codec.decode(self.codec.encode(instant))

        assert decoded == instant
        assert decoded.tzinfo == dt.timezone.utc

    def test_naive_is_utc(self) -> None:
        """Naive datetimes are taken to be UTC."""
        naive = dt.datetime(2020, 7, 27, 7, 2, 59, 259000)
        decoded = self.codec.decode(self.codec.encode(naive))
        assert decoded == naive.replace(tzinfo=dt.timezone.utc)

    def test_truncates_microseconds(self) -> None:
        """Sub-millisecond precision is dropped."""
        instant = dt.datetime(2020, 1, 1, 0, 0, 0, 123456, tzinfo=dt.timezone.utc)
        decoded = self.codec.decode(self.codec.encode(instant))
        assert decoded == instant.replace(microsecond=123000)

    def test_dates_not_matched(self) -> None:
        """Plain dates are not datetimes."""
        assert not self.codec.matches(dt.date(2020, 1, 1))

    @pytest.mark.parametrize("payload", ["", "1.5", "zzzzzzzzzzzzzzzz"])
    def test_malformed_payload(self, payload: str) -> None:
        """Unparseable or out-of-range payloads are left undecoded."""
        assert self.codec.decode(payload) is None


class TestKeyedCollectionCodec:
    """Tests for the (04) keyed-collection codec."""

    def test_non_string_keys(self, standard_registry: CodecRegistry) -> None:
        """Dicts with non-string keys keep their keys."""
        value = {1: "one", "two": 2, (3, 4): "pair"}
        assert _round_trip(standard_registry, value) == value

    def test_nested_tagged_values(self, standard_registry: CodecRegistry) -> None:
        """Keys and values inside the mapping are tagged themselves."""
        when = dt.datetime(2021, 5, 1, tzinfo=dt.timezone.utc)
        value = OrderedDict([(when, {1, 2}), ("n", 2**70)])

        decoded = _round_trip(standard_registry, {"m": value})

        assert decoded == {"m": {when: {1, 2}, "n": 2**70}}
        assert list(decoded["m"]) == [when, "n"]

    def test_payload_is_tagged_json(self, standard_registry: CodecRegistry) -> None:
        """The payload is the serialized list of pairs."""
        text = standard_registry.serialize({"m": {1: "a"}})
        assert text == '{"m":"(04)[[\\"(00)1\\",\\"a\\"]]"}'

    def test_matches(self, standard_registry: CodecRegistry) -> None:
        """Plain JSON objects are left to JSON; other mappings are handled."""
        codec = KeyedCollectionCodec(standard_registry)

        assert not codec.matches({"a": 1})
        assert not codec.matches({})
        assert codec.matches({1: "a"})
        assert codec.matches(OrderedDict(a=1))
        assert codec.matches(MappingProxyType({"a": 1}))
        assert not codec.matches([("a", 1)])

    def test_empty_ordered_dict(self, standard_registry: CodecRegistry) -> None:
        """Empty mappings decode to an empty dict rather than staying tagged."""
        assert _round_trip(standard_registry, [OrderedDict()]) == [{}]

    @pytest.mark.parametrize("payload", ["not json", '{"a": 1}', "[1, 2]", "[[1, 2, 3]]"])
    def test_malformed_payload(self, standard_registry: CodecRegistry, payload: str) -> None:
        """Payloads that are not a list of pairs are left undecoded."""
        assert KeyedCollectionCodec(standard_registry).decode(payload) is None

    def test_unhashable_key_payload(self, standard_registry: CodecRegistry) -> None:
        """Keys that decode to JSON objects cannot key a dict, so the string is kept."""
        text = '["(04)[[{},1]]"]'

        assert KeyedCollectionCodec(standard_registry).decode("[[{},1]]") is None
        assert standard_registry.deserialize(text) == ["(04)[[{},1]]"]


class TestUniqueCollectionCodec:
    """Tests for the (05) unique-collection codec."""

    def test_round_trip(self, standard_registry: CodecRegistry) -> None:
        """Sets and frozensets decode to sets."""
        assert _round_trip(standard_registry, {"s": {1, "a", 2.5}}) == {"s": {1, "a", 2.5}}
        assert _round_trip(standard_registry, frozenset({3})) == {3}

    def test_duplicates_removed_on_decode(self, standard_registry: CodecRegistry) -> None:
        """Duplicate members in a payload collapse by equality."""
        decoded = standard_registry.deserialize('"(05)[\\"(00)1\\",\\"(00)1\\",\\"(01)1\\"]"')
        assert decoded == {1}

    def test_tuple_members(self, standard_registry: CodecRegistry) -> None:
        """Tuple members come back as tuples."""
        assert _round_trip(standard_registry, {(1, 2), (3, 4)}) == {(1, 2), (3, 4)}

    def test_nested_sets(self, standard_registry: CodecRegistry) -> None:
        """Nested frozensets are decoded and frozen again."""
        value = {frozenset({1}), frozenset({2, 3})}
        assert _round_trip(standard_registry, value) == value

    def test_empty_set(self, standard_registry: CodecRegistry) -> None:
        """Empty sets are valid decode results."""
        assert _round_trip(standard_registry, {"s": set()}) == {"s": set()}

    def test_matches(self, standard_registry: CodecRegistry) -> None:
        """Only sets are handled."""
        codec = UniqueCollectionCodec(standard_registry)
        assert codec.matches(set())
        assert codec.matches(frozenset())
        assert not codec.matches([1, 2])

    @pytest.mark.parametrize("payload", ["nope", '{"a": 1}', "1"])
    def test_malformed_payload(self, standard_registry: CodecRegistry, payload: str) -> None:
        """Payloads that are not a JSON array are left undecoded."""
        assert UniqueCollectionCodec(standard_registry).decode(payload) is None

    def test_unhashable_member_payload(self, standard_registry: CodecRegistry) -> None:
        """Members that decode to JSON objects cannot join a set, so the string is kept."""
        text = '["(05)[{\\"a\\":1}]"]'

        assert UniqueCollectionCodec(standard_registry).decode('[{"a":1}]') is None
        assert standard_registry.deserialize(text) == ['(05)[{"a":1}]']
