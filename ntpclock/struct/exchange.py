""" Time-synchronization exchange """

from dataclasses import dataclass, field
import datetime
import json

MILLISECOND: datetime.timedelta = datetime.timedelta(milliseconds=1)


@dataclass(frozen=True)
class Exchange():
    """ A `class` that represents a single request / response exchange with a network time
    protocol server.

    Attributes
    ----------
    t1: `datetime.datetime`
        The local time when the request was sent.
    t2: `datetime.datetime`
        The server time when the request was received.
    t3: `datetime.datetime`
        The server time when the response was sent.
    t4: `datetime.datetime`
        The local time when the response was received.
    server: `str`
        The network time protocol server.
    """
    t1: datetime.datetime
    t2: datetime.datetime
    t3: datetime.datetime
    t4: datetime.datetime
    server: str = field(default='')

    @property
    def delay(self) -> float:
        """ Returns the round-trip delay in milliseconds, excluding the time spent by the
        server between receiving the request and sending the response.

            delay = (t4 - t1) - (t3 - t2)

        The delay can be zero or negative under asymmetric network paths.
        """
        return ((self.t4 - self.t1) - (self.t3 - self.t2)) / MILLISECOND

    @property
    def offset(self) -> float:
        """ Returns the clock offset in milliseconds, the signed correction to add to the
        local clock. A positive offset means the local clock is behind the server.

            offset = ((t2 - t1) + (t3 - t4)) / 2
        """
        return ((self.t2 - self.t1) + (self.t3 - self.t4)) / MILLISECOND / 2

    def to_dict(self):
        """ Returns the `ntpclock.struct.exchange.Exchange` object as a `dict`. """
        return {
            'server': self.server,
            't1': self.t1.isoformat(),
            't2': self.t2.isoformat(),
            't3': self.t3.isoformat(),
            't4': self.t4.isoformat(),
            'delay': self.delay,
            'offset': self.offset
        }

    def __repr__(self):
        """ Returns the `ntpclock.struct.exchange.Exchange` object as a json-formatted `str`. """
        return json.dumps(self.to_dict(), indent=2)


@dataclass(frozen=True)
class Sample():
    """ A `class` that represents a weighted clock offset estimate from one server.

    Attributes
    ----------
    offset: `float`
        The clock offset in milliseconds.
    weight: `float`
        The finite, non-negative weight of the estimate.
    server: `str`
        The network time protocol server.
    """
    offset: float
    weight: float
    server: str = field(default='')

    def to_dict(self):
        """ Returns the `ntpclock.struct.exchange.Sample` object as a `dict`. """
        return {
            'server': self.server,
            'offset': self.offset,
            'weight': self.weight
        }

    def __repr__(self):
        """ Returns the `ntpclock.struct.exchange.Sample` object as a json-formatted `str`. """
        return json.dumps(self.to_dict(), indent=2)
