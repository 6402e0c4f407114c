""" Time-synchronization settings """

from __future__ import annotations
from typing import List, Tuple
import os
import json
from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict
)

# Configuration-layer location
PATH: str = os.path.abspath(os.path.join(os.path.expanduser('~'), '.ntpclock'))
FILE_NAME: str = 'settings.json'

# Network configuration
SERVERS: List[str] = [
    'time.nist.gov',
    'time.apple.com',
    'time.euro.apple.com',
    'time.google.com',
    'time2.google.com',
]
PORT: int = 123  # The well-known network time protocol port
ADDRESS: str = '0.0.0.0'  # The local bind address
LOCAL_PORT: int = 12300  # The local source port, 0 for an ephemeral port
TIME_OUT: float = 1.0  # The time-out in seconds for each server exchange
WORKERS: int = 1  # The number of concurrent server exchanges


def split_address(server: str, port: int = PORT) -> Tuple[str, int]:
    """ Returns the host and port of a `host` or `host:port` server address.

    Parameters
    ----------
    server: `str`
        The network time protocol server.
    port: `int`
        The port used when the server address has no port.
    """
    if '\x00' in server:
        raise ValueError('Invalid value. {%r} contains a null character.' % server)

    host, separator, suffix = server.strip().rpartition(':')

    # Bare ipv6-addresses contain more than one colon and carry no port
    if not separator or not host or ':' in host:
        return server.strip(), port

    if not suffix.isdigit() or not 0 < int(suffix) < 65536:
        raise ValueError('Invalid value. {%s} has an invalid port.' % server)

    return host, int(suffix)


class Settings(BaseSettings):
    """ A `class` that represents the time-synchronization settings.

    Values are read, in order of precedence, from keyword arguments, `NTPCLOCK_*`
    environment variables, a `.env` file in the working directory and
    `~/.ntpclock/settings.json`, falling back to the package defaults.

    Attributes
    ----------
    servers: `List[str]`
        The network time protocol servers, as `host` or `host:port`.
    port: `int`
        The default remote network time protocol port.
    address: `str`
        The local ip-address to bind.
    local_port: `int`
        The local port to bind, `0` for an ephemeral port.
    time_out: `float`
        The time-out in seconds for each server exchange.
    workers: `int`
        The number of concurrent server exchanges, `1` queries servers sequentially.
    """
    model_config = SettingsConfigDict(
        env_prefix='NTPCLOCK_',
        env_file='.env',
        extra='ignore'
    )

    servers: List[str] = Field(default_factory=lambda: list(SERVERS))
    port: int = Field(default=PORT, ge=1, le=65535)
    address: str = Field(default=ADDRESS)
    local_port: int = Field(default=LOCAL_PORT, ge=0, le=65535)
    time_out: float = Field(default=TIME_OUT, gt=0)
    workers: int = Field(default=WORKERS, ge=1)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """ Adds the json configuration file as the lowest-precedence settings source. """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls, json_file=os.path.join(PATH, FILE_NAME)),
        )

    @field_validator('servers')
    @classmethod
    def validate_servers(cls, servers: List[str]) -> List[str]:
        """ Strips each server and rejects empty server names. """
        servers = [server.strip() for server in servers]
        if any(not server for server in servers):
            raise ValueError('Invalid value. {servers} cannot contain an empty server.')
        for server in servers:
            split_address(server)
        return servers

    @model_validator(mode='after')
    def validate_workers(self) -> Settings:
        """ Concurrent exchanges cannot share a single fixed local port. """
        if self.workers > 1 and self.local_port != 0:
            raise ValueError(
                'Invalid value. {local_port} must be `0` when {workers} is greater than `1`.'
            )
        return self

    def from_dict(dict_object: dict) -> Settings:
        """ Returns a `ntpclock.struct.settings.Settings` object from a `dict`.

        Parameters
        ----------
        dict_object : `dict`
            The dictionary object to convert to a `ntpclock.struct.settings.Settings` object.
        """

        # Assert object type
        if not isinstance(dict_object, dict):
            raise TypeError('Object must be a `dict`.')

        return Settings(**dict_object)

    def to_dict(self) -> dict:
        """ Returns the `ntpclock.struct.settings.Settings` object as a `dict`. """
        return {
            'servers': list(self.servers),
            'port': self.port,
            'address': self.address,
            'local_port': self.local_port,
            'time_out': self.time_out,
            'workers': self.workers
        }

    def __repr__(self):
        """ Returns the `ntpclock.struct.settings.Settings` object as a json-formatted `str`. """
        return json.dumps(self.to_dict(), indent=2)
