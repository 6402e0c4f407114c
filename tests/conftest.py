import os
import socket
import threading
import time

import pytest

from ntpclock import codec
from ntpclock.struct import settings as settings_
from ntpclock.struct.timestamp import Timestamp


class MockServer(threading.Thread):
    """ A local ntp server with a simulated clock skew and network latency. """

    def __init__(self, skew=0.0, latency=0.0, processing=5.0, response=None):
        super().__init__(daemon=True)
        self.skew_ns = int(skew * 1_000_000)
        self.latency = latency / 1000
        self.processing = processing / 1000
        self.response = response
        self.requests = []
        self.stopped = threading.Event()
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.sock.bind(('127.0.0.1', 0))
        self.sock.settimeout(0.05)
        self.port = self.sock.getsockname()[1]

    @property
    def address(self):
        return '127.0.0.1:%s' % self.port

    def now(self):
        return Timestamp.from_unix_ns(time.time_ns() + self.skew_ns)

    def run(self):
        while not self.stopped.is_set():
            try:
                request, client = self.sock.recvfrom(1024)
            except socket.timeout:
                continue
            except OSError:
                break
            self.requests.append(request)

            time.sleep(self.latency)
            t2 = self.now()
            time.sleep(self.processing)
            t3 = self.now()
            time.sleep(self.latency)

            if self.response is not None:
                response = self.response
            else:
                message = bytearray(codec.build_request(mode=4))
                message[32:40] = codec.encode_timestamp(t2)
                message[40:48] = codec.encode_timestamp(t3)
                response = bytes(message)
            self.sock.sendto(response, client)

    def stop(self):
        self.stopped.set()
        self.join(timeout=1)
        self.sock.close()


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """ Keeps the user's settings file, `.env` and environment out of the tests. """
    monkeypatch.setattr(settings_, 'PATH', str(tmp_path / '.ntpclock'))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith('NTPCLOCK_'):
            monkeypatch.delenv(key)
    return tmp_path


@pytest.fixture
def mock_server():
    servers = []

    def factory(**kwargs):
        server = MockServer(**kwargs)
        server.start()
        servers.append(server)
        return server

    yield factory

    for server in servers:
        server.stop()


@pytest.fixture
def silent_server():
    """ A bound udp socket that never answers. """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(('127.0.0.1', 0))
    yield '127.0.0.1:%s' % sock.getsockname()[1]
    sock.close()


@pytest.fixture
def closed_port():
    """ A local udp port with nothing listening. """
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(('127.0.0.1', 0))
    port = sock.getsockname()[1]
    sock.close()
    return '127.0.0.1:%s' % port
