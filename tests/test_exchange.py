import datetime
import json

from ntpclock.struct.exchange import Exchange, Sample

T = datetime.datetime(2026, 10, 19, 12, 0, 0, tzinfo=datetime.timezone.utc)


def ms(milliseconds):
    return T + datetime.timedelta(milliseconds=milliseconds)


def test_synchronized_zero_latency_exchange():
    exchange = Exchange(t1=T, t2=T, t3=T, t4=T)

    assert exchange.offset == 0
    assert exchange.delay == 0


def test_server_ahead_gives_positive_offset():
    exchange = Exchange(t1=T, t2=ms(100), t3=ms(100), t4=T)
    swapped = Exchange(t1=ms(100), t2=T, t3=T, t4=ms(100))

    assert exchange.offset == 100
    assert swapped.offset == -100


def test_delay_excludes_server_processing():
    # 10ms each way, 5ms processing, server 250ms ahead
    exchange = Exchange(t1=ms(0), t2=ms(260), t3=ms(265), t4=ms(25))

    assert exchange.delay == 20
    assert exchange.offset == 250


def test_asymmetric_path_delay_is_not_clamped():
    exchange = Exchange(t1=ms(0), t2=ms(0), t3=ms(10), t4=ms(5))

    assert exchange.delay == -5


def test_to_dict_is_json():
    exchange = Exchange(t1=T, t2=ms(1), t3=ms(2), t4=ms(3), server='time.google.com')
    values = json.loads(repr(exchange))

    assert values['server'] == 'time.google.com'
    assert values['delay'] == 2
    assert values['t1'] == '2026-10-19T12:00:00+00:00'


def test_sample_to_dict():
    sample = Sample(offset=10.0, weight=10000.0, server='time.apple.com')

    assert sample.to_dict() == {'server': 'time.apple.com', 'offset': 10.0, 'weight': 10000.0}
