""" Local system clock """

import datetime
import time

from ntpclock import platform


def utcnow() -> datetime.datetime:
    """ Returns the current local system time as a timezone-aware UTC date-time. """
    return datetime.datetime.now(datetime.timezone.utc)


class Clock():
    """ A `class` that represents the local system clock.

    The base clock can only read the time. Setting the time is a platform capability
    provided by a sub-class.
    """

    def get(self) -> datetime.datetime:
        """ Returns the current local system time as a timezone-aware date-time in the
        local timezone.
        """
        return datetime.datetime.now().astimezone()

    def set(self, datetime_: datetime.datetime):
        """ Sets the local system time.

        Parameters
        ----------
        datetime_: `datetime.datetime`
            A timezone-aware date-time.
        """
        raise platform.UnsupportedPlatformError(
            'Unsupported platform {%s}. Setting the system time is not available.' % (
                platform.NAME
            )
        )


class PosixClock(Clock):
    """ A `class` that represents the local system clock of a POSIX platform. """

    @platform.requires('linux', 'darwin')
    def set(self, datetime_: datetime.datetime):
        """ Sets the local system time with `clock_settime(CLOCK_REALTIME)`.

        Setting the time typically requires elevated privileges. Errors from the
        operating-system are raised unchanged as `OSError`.

        Parameters
        ----------
        datetime_: `datetime.datetime`
            A timezone-aware date-time.
        """
        if datetime_.tzinfo is None:
            raise ValueError('Invalid value. {datetime_} must be timezone-aware.')

        epoch = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
        microseconds = (datetime_ - epoch) // datetime.timedelta(microseconds=1)
        time.clock_settime_ns(time.CLOCK_REALTIME, microseconds * 1000)


def get_clock() -> Clock:
    """ Returns the local system clock for the current platform. """
    if platform.NAME in ['linux', 'darwin']:
        return PosixClock()
    return Clock()
