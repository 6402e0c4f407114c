import datetime
import json

import pytest

from ntpclock.struct.timestamp import Timestamp, NTP_DELTA, FRACTION, UNIX_EPOCH


def test_unix_epoch_is_ntp_delta_seconds():
    assert Timestamp.from_unix_ns(0) == Timestamp(seconds=NTP_DELTA, fraction=0)
    assert Timestamp(seconds=NTP_DELTA, fraction=0).to_datetime() == UNIX_EPOCH


def test_half_second_is_half_fraction():
    assert Timestamp.from_unix_ns(500_000_000).fraction == FRACTION // 2
    assert Timestamp(seconds=NTP_DELTA, fraction=FRACTION // 2).to_unix_ns() == 500_000_000


@pytest.mark.parametrize('nanoseconds', [
    1,
    999_999_999,
    1_000_000_000,
    1_792_411_200_123_456_789,
    1_792_411_200_999_999_999,
    -1_000_000_001,
])
def test_nanosecond_round_trip(nanoseconds):
    assert Timestamp.from_unix_ns(nanoseconds).to_unix_ns() == nanoseconds


def test_datetime_round_trip():
    value = datetime.datetime(2026, 10, 19, 12, 0, 0, 123456, tzinfo=datetime.timezone.utc)
    timestamp = Timestamp.from_datetime(value)
    assert timestamp.seconds == 1_792_411_200 + NTP_DELTA
    assert timestamp.to_datetime() == value


def test_datetime_with_offset_is_converted_to_utc():
    value = datetime.datetime(
        2026, 10, 19, 14, 0, 0, tzinfo=datetime.timezone(datetime.timedelta(hours=2))
    )
    assert Timestamp.from_datetime(value).to_datetime() == value
    assert Timestamp.from_datetime(value).to_datetime().utcoffset() == datetime.timedelta(0)


def test_naive_datetime_is_rejected():
    with pytest.raises(ValueError):
        Timestamp.from_datetime(datetime.datetime(2026, 10, 19))


@pytest.mark.parametrize('seconds, fraction', [(-1, 0), (FRACTION, 0), (0, FRACTION), (0, -1)])
def test_fields_must_be_unsigned_32_bit(seconds, fraction):
    with pytest.raises(ValueError):
        Timestamp(seconds=seconds, fraction=fraction)


def test_fields_must_be_integers():
    with pytest.raises(TypeError):
        Timestamp(seconds=1.5, fraction=0)


def test_before_ntp_epoch_is_rejected():
    with pytest.raises(ValueError):
        Timestamp.from_unix_ns(-(NTP_DELTA + 1) * 1_000_000_000)


def test_timestamp_is_immutable():
    timestamp = Timestamp(seconds=1, fraction=2)
    with pytest.raises(AttributeError):
        timestamp.seconds = 3


def test_repr_is_json():
    assert json.loads(repr(Timestamp(seconds=1, fraction=2))) == {'seconds': 1, 'fraction': 2}
