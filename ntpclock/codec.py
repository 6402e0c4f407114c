""" Network time protocol message codec

The request and response messages share a fixed 48-byte layout. Only the header byte of
the request and the receive / transmit timestamps of the response are used.

     0 1 2 3 4 5 6 7
    +-+-+-+-+-+-+-+-+
    |LI | VN  |MODE |   byte 0
    +-+-+-+-+-+-+-+-+
    ...
    receive timestamp    bytes 32-39
    transmit timestamp   bytes 40-47
"""

from typing import Tuple, Union
import struct

from ntpclock.struct.timestamp import Timestamp

# Message configuration
MESSAGE_LENGTH: int = 48
LEAP_INDICATOR: int = 0  # No leap-second warning
VERSION: int = 3
MODE: int = 3  # Client
SERVER_MODE: int = 4  # The mode of a server response
RECEIVE_TIMESTAMP: int = 32  # The byte offset of the server receive timestamp
TRANSMIT_TIMESTAMP: int = 40  # The byte offset of the server transmit timestamp

# Two big-endian unsigned 32-bit integers, seconds then fraction
TIMESTAMP: struct.Struct = struct.Struct('!II')


def build_request(
    leap: int = LEAP_INDICATOR,
    version: int = VERSION,
    mode: int = MODE
) -> bytes:
    """ Returns a zero-filled 48-byte request message with the header byte packed as
    `(leap << 6) | (version << 3) | mode`.

    Parameters
    ----------
    leap: `int`
        The 2-bit leap indicator.
    version: `int`
        The 3-bit protocol version.
    mode: `int`
        The 3-bit association mode.
    """
    for name, value, bits in [('leap', leap, 2), ('version', version, 3), ('mode', mode, 3)]:
        if not 0 <= value < 2 ** bits:
            raise ValueError(
                'Invalid value. {%s} must fit in %s bits, not {%s}.' % (name, bits, value)
            )

    message = bytearray(MESSAGE_LENGTH)
    message[0] = (leap << 6) | (version << 3) | mode
    return bytes(message)


def header(buffer: Union[bytes, bytearray]) -> Tuple[int, int, int]:
    """ Returns the leap indicator, version and mode from the header byte of a message.

    Parameters
    ----------
    buffer: `Union[bytes, bytearray]`
        The network time protocol message.
    """
    if len(buffer) < 1:
        raise TruncatedError('Truncated message. The message has no header byte.')

    first = buffer[0]
    return (first >> 6) & 0b11, (first >> 3) & 0b111, first & 0b111


def parse_timestamp(buffer: Union[bytes, bytearray], offset: int) -> Timestamp:
    """ Returns the `ntpclock.struct.timestamp.Timestamp` stored in the 8 bytes of the
    message starting at {offset}.

    Parameters
    ----------
    buffer: `Union[bytes, bytearray]`
        The network time protocol message.
    offset: `int`
        The byte offset of the timestamp.
    """
    try:
        length = len(buffer)
    except TypeError as e:
        raise MalformedError('Malformed message. %s.' % e) from e

    if offset < 0 or length - offset < TIMESTAMP.size:
        raise TruncatedError(
            'Truncated message. Reading %s bytes at offset {%s} requires %s bytes, got %s.' % (
                TIMESTAMP.size, offset, offset + TIMESTAMP.size, length
            )
        )

    try:
        seconds, fraction = TIMESTAMP.unpack_from(buffer, offset)
    except (struct.error, TypeError) as e:
        raise MalformedError('Malformed message. %s.' % e) from e

    return Timestamp(seconds=seconds, fraction=fraction)


def receive_timestamp(response: Union[bytes, bytearray]) -> Timestamp:
    """ Returns the server's record of the request arrival (t2). """
    return parse_timestamp(response, RECEIVE_TIMESTAMP)


def transmit_timestamp(response: Union[bytes, bytearray]) -> Timestamp:
    """ Returns the server's record of the response departure (t3). """
    return parse_timestamp(response, TRANSMIT_TIMESTAMP)


def encode_timestamp(timestamp: Timestamp) -> bytes:
    """ Returns the 8-byte wire representation of a timestamp.

    Parameters
    ----------
    timestamp: `ntpclock.struct.timestamp.Timestamp`
        An instance of a `ntpclock.struct.timestamp.Timestamp` object.
    """
    return TIMESTAMP.pack(timestamp.seconds, timestamp.fraction)


# Exception(s)
class ParseError(Exception):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class TruncatedError(ParseError):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class MalformedError(ParseError):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
