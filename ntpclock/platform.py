""" Operating-system management """

from typing import Callable, Literal
import platform

NAME = platform.system().strip().lower()
VERSION = platform.version().strip().lower()
PLATFORMS = ['any', 'windows', 'linux', 'darwin']


# Decorator function(s)
def requires(
    *platforms_: Literal['any', 'windows', 'linux', 'darwin']
) -> Callable:
    """ Raises an `UnsupportedPlatformError` when the function is called on an unsupported
    platform.

    Parameters
    ----------
    platforms_: `Literal['any', 'windows', 'linux', 'darwin']`
        The supported platform(s). Default='any'.
    """
    platforms_ = tuple(p.strip().lower() for p in platforms_) or ('any',)

    invalid = [p for p in platforms_ if p not in PLATFORMS]
    if invalid:
        raise ValueError(
            "Invalid platform {%s}. Platform must be either ['%s']." % (
                ', '.join(invalid),
                "', '".join(PLATFORMS)
            )
        )

    def decorator(func: Callable):
        def wrapper(*args, **kwargs):

            # Check the platform
            if 'any' not in platforms_:
                if NAME.strip().lower() not in platforms_:
                    raise UnsupportedPlatformError(
                        "Invalid platform {%s}. %s() requires {%s}." % (
                            NAME.strip().lower(),
                            func.__name__,
                            ', '.join(platforms_)
                        )
                    )

            return func(*args, **kwargs)
        return wrapper

    return decorator


# Exception(s)
class UnsupportedPlatformError(Exception):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
