""" ntpclock

`ntpclock` is a small network time protocol (ntp) client written in Python that
gets, sets and checks the local system clock against public time servers.
"""

from typing import List
import errno

from ntpclock import platform, logging, struct, codec, clock, ntp, dal

__all__ = ['platform', 'logging', 'struct', 'codec', 'clock', 'ntp', 'dal']

NAME: str = 'ntpclock'
VERSION: str = '0.1.0'
DESCRIPTION: str = ''.join([
    '`ntpclock` gets and sets the local system time and checks it against',
    ' network time protocol servers.'
])

# Output configuration
STANDARDS: List[str] = ['rfc3339', 'rfc2822', 'timestamp']


# Errors
class errors:
    """ A `class` that represents static error codes. """
    INVALID_VALUE: int = errno.EINVAL
    NO_DATA: int = errno.EHOSTUNREACH
    DEVICE_ERROR: int = errno.EIO
    UNSUPPORTED: int = errno.ENOTSUP
