""" Network time protocol (ntp) synchronizer """

from typing import List, Optional, Union
import concurrent.futures
import dataclasses
import socket
import numpy as np

from ntpclock import clock, codec
from ntpclock import logging as logging_
from ntpclock.struct.exchange import Exchange, Sample
from ntpclock.struct.settings import (
    Settings, split_address, PORT, ADDRESS, LOCAL_PORT, TIME_OUT
)

BUFFER_SIZE: int = 1024  # The receive buffer size in bytes

# Weights are `WEIGHT_SCALE / delay^2` with the delay in milliseconds
WEIGHT_SCALE: float = 1_000_000.0


def exchange(
    server: str,
    port: int = PORT,
    time_out: float = TIME_OUT,
    address: str = ADDRESS,
    local_port: int = LOCAL_PORT
) -> Exchange:
    """ Sends a client request to a network time protocol server and returns the four
    timestamps of the exchange.

    Parameters
    ----------
    server: `str`
        The network time protocol server.
    port: `int`
        The network time protocol port.
    time_out: `float`
        The time-out in seconds for the response.
    address: `str`
        The local ip-address to bind.
    local_port: `int`
        The local port to bind, `0` for an ephemeral port.
    """
    request = codec.build_request()

    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.bind((address, local_port))
            sock.connect((server, port))

            t1 = clock.utcnow()
            sock.send(request)
            sock.settimeout(time_out)
            response = sock.recv(BUFFER_SIZE)
            t4 = clock.utcnow()

    except (OSError, UnicodeError, TypeError) as e:
        raise NetworkError(
            'Communication with the ntp server {%s:%s} failed. [%s] %s' % (
                server, port, type(e).__name__, e
            ),
            server=server
        ) from e

    t2 = codec.receive_timestamp(response).to_datetime()
    t3 = codec.transmit_timestamp(response).to_datetime()

    _, _, mode = codec.header(response)
    if mode != codec.SERVER_MODE:
        raise codec.MalformedError(
            'Malformed message. The response mode is {%s}, not {%s}.' % (mode, codec.SERVER_MODE)
        )

    return Exchange(t1=t1, t2=t2, t3=t3, t4=t4, server=server)


def weight(delay: float) -> float:
    """ Returns the weight of a clock offset estimate from its round-trip delay in
    milliseconds.

    The weight is `1,000,000 / delay^2`. A lower round-trip delay bounds the timing
    uncertainty more tightly, so low-delay estimates dominate the mean. This is a
    heuristic precision weighting, not a statistically optimal estimator. Only the
    preference for lower delays matters, not the scale constant.

    A zero delay returns `inf` and a very large delay returns `0.0`.

    Parameters
    ----------
    delay: `float`
        The round-trip delay in milliseconds.
    """
    with np.errstate(divide='ignore', over='ignore'):
        return float(np.float64(WEIGHT_SCALE) / np.square(np.float64(delay)))


def weighted_mean(samples: List[Sample]) -> float:
    """ Returns the weighted mean clock offset in milliseconds.

    Parameters
    ----------
    samples: `List[ntpclock.struct.exchange.Sample]`
        The finite-weight clock offset estimates.
    """
    if not samples:
        raise NoDataError('No ntp server returned a usable clock offset.')

    offsets = np.array([sample.offset for sample in samples], dtype=np.float64)
    weights = np.array([sample.weight for sample in samples], dtype=np.float64)

    if not np.all(np.isfinite(weights)) or np.any(weights < 0):
        raise ValueError('Invalid value. Weights must be finite and non-negative.')

    # Normalize by the largest weight to keep the sums finite
    largest = weights.max()
    if largest <= 0:
        raise NoDataError('No ntp server returned a clock offset with a non-zero weight.')
    weights = weights / largest

    return float(np.dot(offsets, weights) / weights.sum())


class Synchronizer():
    """ A `class` that represents a consensus of network time protocol servers. """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        logger: Optional[logging_.logger] = None
    ):
        """ An instance of the network time protocol consensus for checking the local
        system time.

        Parameters
        ----------
        settings: `ntpclock.struct.settings.Settings`
            The time-synchronization settings.
        logger: `ntpclock.logging.logger`
            The console logger.
        """
        self.settings = settings if settings is not None else Settings()
        self.logger = logger if logger is not None else logging_.get_ntp_logger()

    def sync(self, server: str) -> Union[Exchange, None]:
        """ Returns the exchange with a single network time protocol server, or `None`
        when the server is unreachable or its response cannot be parsed.

        Parameters
        ----------
        server: `str`
            The network time protocol server, as `host` or `host:port`.
        """
        host, port = split_address(server, self.settings.port)

        try:
            result = exchange(
                server=host,
                port=port,
                time_out=self.settings.time_out,
                address=self.settings.address,
                local_port=self.settings.local_port
            )

        except NetworkError as e:

            # Logging
            self.logger.warning('%s => ? [no response] %s' % (server, e))

            return None

        except codec.ParseError as e:

            # Logging
            self.logger.warning('%s => ? [invalid response] %s' % (server, e))

            return None

        # Logging
        self.logger.info(
            '%s => %.0fms away from local system time (delay %.0fms).' % (
                server, result.offset, result.delay
            )
        )

        return dataclasses.replace(result, server=server)

    def exchanges(self) -> List[Exchange]:
        """ Returns the exchanges with every responsive network time protocol server.

        With `workers > 1` the servers are queried concurrently, each exchange keeping
        its own time-out. The result order follows the server order either way.
        """
        servers = list(self.settings.servers)

        if self.settings.workers > 1 and len(servers) > 1:
            with concurrent.futures.ThreadPoolExecutor(
                max_workers=self.settings.workers
            ) as pool:
                results = list(pool.map(self.sync, servers))
        else:
            results = [self.sync(server) for server in servers]

        return [result for result in results if result is not None]

    def samples(self, exchanges: List[Exchange]) -> List[Sample]:
        """ Returns the weighted clock offset estimates, excluding exchanges with a
        non-finite weight.

        Parameters
        ----------
        exchanges: `List[ntpclock.struct.exchange.Exchange]`
            The exchanges with the responsive network time protocol servers.
        """
        samples = []
        for exchange_ in exchanges:
            weight_ = weight(exchange_.delay)

            if not np.isfinite(weight_):

                # Logging
                self.logger.warning(
                    '%s => excluded, the delay {%.3fms} has no finite weight.' % (
                        exchange_.server, exchange_.delay
                    )
                )

                continue

            # Logging
            self.logger.debug('%s => weight %.6g.' % (exchange_.server, weight_))

            samples.append(
                Sample(offset=exchange_.offset, weight=weight_, server=exchange_.server)
            )

        return samples

    def check_time(self) -> float:
        """ Returns the weighted mean clock offset in milliseconds across the network
        time protocol servers.
        """
        offset = weighted_mean(self.samples(self.exchanges()))

        # Logging
        self.logger.info('The consensus ntp offset is %.3fms.' % offset)

        return offset


def check_time(
    servers: List[str],
    port: int = PORT,
    **kwargs
) -> float:
    """ Returns the weighted mean clock offset in milliseconds across the network time
    protocol servers.

    Parameters
    ----------
    servers: `List[str]`
        The network time protocol servers, as `host` or `host:port`.
    port: `int`
        The default network time protocol port.
    **kwargs
        Additional `ntpclock.struct.settings.Settings` values.
    """
    return Synchronizer(settings=Settings(servers=list(servers), port=port, **kwargs)).check_time()


# Exception(s)
class NetworkError(Exception):
    def __init__(self, *args, server: str = '', **kwargs):
        super().__init__(*args, **kwargs)
        self.server = server


class AggregationError(Exception):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class NoDataError(AggregationError):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
