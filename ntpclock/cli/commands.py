""" ntpclock commands """

from typing import List, Literal, Union
import datetime
import email.utils

import ntpclock
from ntpclock import clock, dal, ntp, platform
from ntpclock.logging import get_cli_logger
from ntpclock.struct.settings import Settings


# Define output formatting function(s)
def format_datetime(
    datetime_: datetime.datetime,
    standard: Literal['rfc3339', 'rfc2822', 'timestamp'] = 'rfc3339'
) -> str:
    """ Returns a timezone-aware date-time formatted as a time standard.

    Parameters
    ----------
    datetime_: `datetime.datetime`
        A timezone-aware date-time.
    standard: `Literal['rfc3339', 'rfc2822', 'timestamp']`
        The time standard.
    """
    if standard == 'rfc3339':
        return datetime_.isoformat()
    if standard == 'rfc2822':
        return email.utils.format_datetime(datetime_)
    if standard == 'timestamp':
        return str(int(datetime_.timestamp()))

    raise ValueError(
        "Invalid value. {standard} must be either ['%s']." % "', '".join(ntpclock.STANDARDS)
    )


def parse_datetime(
    value: str,
    standard: Literal['rfc3339', 'rfc2822', 'timestamp'] = 'rfc3339'
) -> datetime.datetime:
    """ Returns a timezone-aware date-time parsed from a time standard.

    Parameters
    ----------
    value: `str`
        The formatted date-time.
    standard: `Literal['rfc3339', 'rfc2822', 'timestamp']`
        The time standard.
    """
    value = value.strip()

    if standard == 'rfc3339':
        if value[-1:] in ['Z', 'z']:
            value = value[:-1] + '+00:00'
        datetime_ = datetime.datetime.fromisoformat(value)
    elif standard == 'rfc2822':
        try:
            datetime_ = email.utils.parsedate_to_datetime(value)
        except (TypeError, IndexError) as e:
            raise ValueError('Invalid value. {%s} is not an rfc2822 date-time.' % value) from e
        if datetime_ is None:
            raise ValueError('Invalid value. {%s} is not an rfc2822 date-time.' % value)
    elif standard == 'timestamp':
        datetime_ = datetime.datetime.fromtimestamp(int(value), tz=datetime.timezone.utc)
    else:
        raise ValueError(
            "Invalid value. {standard} must be either ['%s']." % "', '".join(ntpclock.STANDARDS)
        )

    if datetime_.tzinfo is None:
        raise ValueError('Invalid value. {%s} has no timezone offset.' % value)

    return datetime_


def format_offset(offset: float) -> str:
    """ Returns a clock offset in milliseconds as a signed, human-readable duration.

    Parameters
    ----------
    offset: `float`
        The clock offset in milliseconds.
    """
    sign = '-' if offset < 0 else '+'
    milliseconds = abs(offset)

    if milliseconds < 1000:
        return '%s%.3fms' % (sign, milliseconds)
    if milliseconds < 60_000:
        return '%s%.3fs' % (sign, milliseconds / 1000)

    return '%s%s' % (sign, datetime.timedelta(milliseconds=milliseconds))


def set_clock(datetime_: datetime.datetime) -> int:
    """ Sets the local system time and returns an exit status.

    Parameters
    ----------
    datetime_: `datetime.datetime`
        A timezone-aware date-time.
    """
    logger = get_cli_logger()

    try:
        clock.get_clock().set(datetime_)

    except platform.UnsupportedPlatformError as e:

        # Logging
        logger.error('Unable to set the time. %s' % e)

        return ntpclock.errors.UNSUPPORTED

    except OSError as e:

        # Logging
        logger.error('Unable to set the time. [%s] %s' % (type(e).__name__, e))

        return e.errno if e.errno else ntpclock.errors.DEVICE_ERROR

    # Logging
    logger.info('The system time was set to %s.' % datetime_.isoformat())

    return 0


# Define ntpclock sub-command function(s)
def get(
    standard: Literal['rfc3339', 'rfc2822', 'timestamp'] = 'rfc3339'
) -> int:
    """ Prints the local system time.

    Parameters
    ----------
    standard: `Literal['rfc3339', 'rfc2822', 'timestamp']`
        The time standard of the output.

    Examples
    --------
    ``` console
    ntpclock get --use-standard rfc2822
    ```

    """
    print(format_datetime(clock.get_clock().get(), standard))
    return 0


def set_(
    datetime_: str,
    standard: Literal['rfc3339', 'rfc2822', 'timestamp'] = 'rfc3339'
) -> int:
    """ Sets the local system time.

    Parameters
    ----------
    datetime_: `str`
        The date-time formatted as {standard}.
    standard: `Literal['rfc3339', 'rfc2822', 'timestamp']`
        The time standard of {datetime_}.

    Examples
    --------
    ``` console
    sudo ntpclock set 2026-10-19T12:00:00+00:00
    ```

    """
    logger = get_cli_logger()

    try:
        value = parse_datetime(datetime_, standard)
    except (ValueError, OverflowError, OSError):

        # Logging
        logger.error('Unable to parse {%s} as {%s}.' % (datetime_, standard))

        return ntpclock.errors.INVALID_VALUE

    return set_clock(value)


def check(
    servers: Union[List[str], None] = None,
    port: Union[int, None] = None,
    time_out: Union[float, None] = None,
    workers: Union[int, None] = None,
    apply: bool = False
) -> int:
    """ Checks the local system time against the network time protocol servers and
    prints the corrected time with the signed clock offset.

    Parameters
    ----------
    servers: `Union[List[str], None]`
        The network time protocol servers, as `host` or `host:port`.
    port: `Union[int, None]`
        The default network time protocol port.
    time_out: `Union[float, None]`
        The time-out in seconds for each server exchange.
    workers: `Union[int, None]`
        The number of concurrent server exchanges.
    apply: `bool`
        Whether to set the local system time to the corrected time.

    Examples
    --------
    ``` console
    ntpclock check --servers time.google.com time.apple.com
    ```

    """
    logger = get_cli_logger()

    overrides = {
        key: value for key, value in {
            'servers': servers,
            'port': port,
            'time_out': time_out,
            'workers': workers
        }.items() if value is not None
    }
    if workers is not None and workers > 1:
        overrides['local_port'] = 0

    try:
        settings = Settings(**overrides)
    except ValueError as e:

        # Logging
        logger.error('Invalid settings. %s' % e)

        return ntpclock.errors.INVALID_VALUE

    try:
        offset = ntp.Synchronizer(settings=settings).check_time()
    except ntp.NoDataError as e:

        # Logging
        logger.error(str(e))

        return ntpclock.errors.NO_DATA

    now = clock.utcnow() + datetime.timedelta(milliseconds=offset)
    print('%s  (%s)' % (now.isoformat(), format_offset(offset)))

    if apply:
        return set_clock(now)

    return 0


def config(
    servers: Union[List[str], None] = None,
    port: Union[int, None] = None,
    time_out: Union[float, None] = None,
    workers: Union[int, None] = None,
    reset: bool = False
) -> int:
    """ Saves any new values to `~/.ntpclock/settings.json` and prints the saved settings,
    or prints the effective settings when no values are given.

    Parameters
    ----------
    servers: `Union[List[str], None]`
        The network time protocol servers, as `host` or `host:port`.
    port: `Union[int, None]`
        The default network time protocol port.
    time_out: `Union[float, None]`
        The time-out in seconds for each server exchange.
    workers: `Union[int, None]`
        The number of concurrent server exchanges.
    reset: `bool`
        Whether to delete the saved settings before applying new values.

    Examples
    --------
    ``` console
    ntpclock config --servers time.google.com --time-out 0.5
    ```

    """
    logger = get_cli_logger()

    if reset:
        dal.settings.delete()

    overrides = {
        key: value for key, value in {
            'servers': servers,
            'port': port,
            'time_out': time_out,
            'workers': workers
        }.items() if value is not None
    }
    if workers is not None and workers > 1:
        overrides['local_port'] = 0

    try:
        if overrides:
            settings = dal.settings.save(
                Settings.from_dict({**dal.settings.load().to_dict(), **overrides})
            )

            # Logging
            logger.info('Settings saved to %s.' % dal.settings.file_path())

        else:
            settings = dal.settings.get()

    except ValueError as e:

        # Logging
        logger.error('Invalid settings. %s' % e)

        return ntpclock.errors.INVALID_VALUE

    print(repr(settings))

    return 0
