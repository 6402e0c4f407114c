import json
import os

import pytest

from ntpclock import dal
from ntpclock.struct import settings as settings_
from ntpclock.struct.settings import Settings, split_address


def test_defaults():
    settings = Settings()

    assert settings.servers == settings_.SERVERS
    assert settings.port == 123
    assert settings.address == '0.0.0.0'
    assert settings.local_port == 12300
    assert settings.time_out == 1.0
    assert settings.workers == 1


@pytest.mark.parametrize('server, expected', [
    ('time.google.com', ('time.google.com', 123)),
    (' time.google.com:1234 ', ('time.google.com', 1234)),
    ('127.0.0.1:5000', ('127.0.0.1', 5000)),
    ('::1', ('::1', 123)),
])
def test_split_address(server, expected):
    assert split_address(server) == expected


@pytest.mark.parametrize('server', ['time.google.com:ntp', 'time.google.com:0', 'localhost:70000'])
def test_split_address_with_invalid_port_raises(server):
    with pytest.raises(ValueError):
        split_address(server)


@pytest.mark.parametrize('kwargs', [
    {'servers': ['time.google.com', ' ']},
    {'servers': ['time.google.com:port']},
    {'servers': ['time\x00.google.com']},
    {'port': 0},
    {'local_port': 65536},
    {'time_out': 0},
    {'workers': 0},
    {'workers': 2},
])
def test_invalid_settings_raise(kwargs):
    with pytest.raises(ValueError):
        Settings(**kwargs)


def test_concurrent_workers_require_an_ephemeral_port():
    assert Settings(workers=4, local_port=0).workers == 4


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv('NTPCLOCK_SERVERS', '["a.example", "b.example:1234"]')
    monkeypatch.setenv('NTPCLOCK_TIME_OUT', '0.5')
    settings = Settings()

    assert settings.servers == ['a.example', 'b.example:1234']
    assert settings.time_out == 0.5


def test_dotenv_file_overrides_defaults(isolated_settings):
    (isolated_settings / '.env').write_text('NTPCLOCK_PORT=1123\n')

    assert Settings().port == 1123


def test_keyword_arguments_override_environment(monkeypatch):
    monkeypatch.setenv('NTPCLOCK_PORT', '1123')

    assert Settings(port=2123).port == 2123


def test_from_dict_and_repr():
    settings = Settings.from_dict({'servers': ['time.apple.com'], 'workers': 2, 'local_port': 0})

    assert json.loads(repr(settings)) == {
        'servers': ['time.apple.com'],
        'port': 123,
        'address': '0.0.0.0',
        'local_port': 0,
        'time_out': 1.0,
        'workers': 2
    }
    with pytest.raises(TypeError):
        Settings.from_dict(['time.apple.com'])


def test_save_and_get_settings_file():
    assert not dal.settings.exists()

    dal.settings.save(Settings(servers=['time.apple.com'], port=1123))

    assert dal.settings.exists()
    assert os.path.dirname(dal.settings.file_path()) == settings_.PATH
    assert dal.settings.get().servers == ['time.apple.com']
    assert dal.settings.get().port == 1123


def test_environment_overrides_settings_file(monkeypatch):
    dal.settings.save(Settings(servers=['time.apple.com'], port=1123))
    monkeypatch.setenv('NTPCLOCK_PORT', '2123')

    assert dal.settings.get().servers == ['time.apple.com']
    assert dal.settings.get().port == 2123


def test_get_or_create_and_delete():
    settings = dal.settings.get_or_create()

    assert dal.settings.exists()
    assert dal.settings.get_or_create() == settings

    dal.settings.delete()
    assert not dal.settings.exists()


def test_create_ignores_the_environment(monkeypatch):
    monkeypatch.setenv('NTPCLOCK_PORT', '2123')
    dal.settings.create()

    with open(dal.settings.file_path(), 'r', encoding='utf-8') as file:
        assert json.load(file)['port'] == 123


def test_load_reads_the_settings_file_alone(monkeypatch):
    dal.settings.save(Settings(servers=['time.apple.com'], port=1123))
    monkeypatch.setenv('NTPCLOCK_PORT', '2123')
    monkeypatch.setenv('NTPCLOCK_TIME_OUT', '3.5')

    settings = dal.settings.load()
    assert settings.servers == ['time.apple.com']
    assert settings.port == 1123
    assert settings.time_out == 1.0


def test_load_without_settings_file_returns_defaults():
    assert not dal.settings.exists()
    assert dal.settings.load().to_dict() == Settings().to_dict()
