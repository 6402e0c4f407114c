""" Network time protocol timestamp """

from __future__ import annotations
from dataclasses import dataclass
import datetime
import json

# Number of seconds between 1 Jan 1900 (the ntp epoch) and 1 Jan 1970 (the unix epoch)
NTP_DELTA: int = 2_208_988_800

# Resolution of the 32-bit binary fraction field
FRACTION: int = 2 ** 32
NANOSECONDS: int = 10 ** 9

UNIX_EPOCH: datetime.datetime = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)


@dataclass(frozen=True)
class Timestamp():
    """ A `class` that represents a 64-bit network time protocol timestamp.

    Attributes
    ----------
    seconds: `int`
        The unsigned 32-bit number of whole seconds since 1 Jan 1900 UTC.
    fraction: `int`
        The unsigned 32-bit binary fraction of a second, in units of 1 / 2^32 seconds.
    """
    seconds: int
    fraction: int

    def __post_init__(self):
        """ Validates the bit-width of each field. """
        for name, value in [('seconds', self.seconds), ('fraction', self.fraction)]:
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError('Invalid type. {%s} must be an `int`.' % name)
            if not 0 <= value < FRACTION:
                raise ValueError(
                    'Invalid value. {%s} must be an unsigned 32-bit integer, not {%s}.' % (
                        name, value
                    )
                )

    def from_unix_ns(nanoseconds: int) -> Timestamp:
        """ Returns a `ntpclock.struct.timestamp.Timestamp` object from the number of
        nanoseconds since the unix epoch.

        The fraction is rounded to the nearest 1 / 2^32 seconds, so converting back with
        `to_unix_ns()` returns the same number of nanoseconds.

        Parameters
        ----------
        nanoseconds: `int`
            The number of nanoseconds since 1 Jan 1970 UTC.
        """
        seconds, remainder = divmod(int(nanoseconds), NANOSECONDS)
        fraction = (remainder * FRACTION + NANOSECONDS // 2) // NANOSECONDS
        return Timestamp(seconds=seconds + NTP_DELTA, fraction=fraction)

    def from_datetime(datetime_: datetime.datetime) -> Timestamp:
        """ Returns a `ntpclock.struct.timestamp.Timestamp` object from a timezone-aware
        `datetime.datetime` object.

        Parameters
        ----------
        datetime_: `datetime.datetime`
            A timezone-aware date-time.
        """
        if datetime_.tzinfo is None:
            raise ValueError('Invalid value. {datetime_} must be timezone-aware.')

        microseconds = (datetime_ - UNIX_EPOCH) // datetime.timedelta(microseconds=1)
        return Timestamp.from_unix_ns(microseconds * 1000)

    def to_unix_ns(self) -> int:
        """ Returns the timestamp as the number of nanoseconds since the unix epoch. """
        nanoseconds = (self.fraction * NANOSECONDS + FRACTION // 2) // FRACTION
        return (self.seconds - NTP_DELTA) * NANOSECONDS + nanoseconds

    def to_datetime(self) -> datetime.datetime:
        """ Returns the timestamp as a UTC `datetime.datetime` object, rounded to the
        nearest microsecond.
        """
        microseconds = (self.to_unix_ns() + 500) // 1000
        return UNIX_EPOCH + datetime.timedelta(microseconds=microseconds)

    def to_dict(self):
        """ Returns the `ntpclock.struct.timestamp.Timestamp` object as a `dict`. """
        return {
            'seconds': self.seconds,
            'fraction': self.fraction
        }

    def __repr__(self):
        """ Returns the `ntpclock.struct.timestamp.Timestamp` object as a json-formatted `str`. """
        return json.dumps(self.to_dict(), indent=2)
