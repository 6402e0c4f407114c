""" Settings configuration-layer """

from typing import Union
import os
import json
from ntpclock.struct import settings


def file_path() -> Union[str, os.PathLike]:
    """ Returns the path of the settings configuration file. """
    return os.path.abspath(os.path.join(settings.PATH, settings.FILE_NAME))


def exists() -> bool:
    """ Returns `True` when the settings configuration file exists. """
    if os.path.isfile(file_path()):
        return True
    else:
        return False


def create() -> settings.Settings:
    """ Creates the settings configuration file from the package defaults and returns
    the contents as a `ntpclock.struct.settings.Settings` object.
    """
    return save(load())


def get() -> settings.Settings:
    """ Returns the contents of the settings configuration as a
    `ntpclock.struct.settings.Settings` object.

    Environment variables and a `.env` file take precedence over the configuration file.
    """
    return settings.Settings()


def read() -> dict:
    """ Returns the raw contents of the settings configuration file, or an empty `dict`
    when the file does not exist.
    """
    if not exists():
        return {}

    with open(file_path(), 'r', encoding='utf-8') as file:
        contents = json.load(file)

    # Assert object type
    if not isinstance(contents, dict):
        raise ValueError('Invalid settings. {%s} must contain a json object.' % file_path())

    return contents


def load() -> settings.Settings:
    """ Returns the contents of the settings configuration file alone as a
    `ntpclock.struct.settings.Settings` object, falling back to the package defaults.

    Unlike `get()`, environment variables and a `.env` file are ignored, so the result
    is safe to write back to the configuration file.
    """
    values = {
        name: field.get_default(call_default_factory=True)
        for name, field in settings.Settings.model_fields.items()
    }
    values.update(
        {key: value for key, value in read().items() if key in values}
    )

    # Every field is passed explicitly, leaving no field to the environment
    return settings.Settings.from_dict(values)


def get_or_create() -> settings.Settings:
    """ Creates or reads the settings configuration file and returns the contents as
    a `ntpclock.struct.settings.Settings` object.
    """
    if exists():
        return get()
    else:
        return create()


def save(settings_: settings.Settings) -> settings.Settings:
    """ Saves the settings configuration to `~/.ntpclock/settings.json`.

    Parameters
    ----------
    settings_: `ntpclock.struct.settings.Settings`
        An instance of a `ntpclock.struct.settings.Settings` object.
    """

    # Create the settings configuration-layer directory
    if not os.path.isdir(settings.PATH):
        os.makedirs(settings.PATH)

    # Write the configuration file
    with open(file_path(), 'w', encoding='utf-8') as file:
        json.dump(settings_.to_dict(), file, indent=2)

    return settings_


def delete():
    """ Deletes the settings configuration file, restoring the package defaults. """
    if exists():
        os.remove(file_path())
