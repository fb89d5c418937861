"""Library version information and compatibility checks."""

VERSION = 210
VERSION_MAJOR = 2
VERSION_MINOR = 1
VERSION_PATCH = 0

MIN_VERSION = 200
MIN_VERSION_MAJOR = 2
MIN_VERSION_MINOR = 0
MIN_VERSION_PATCH = 0


def _friendly(major: int, minor: int, patch: int) -> str:
    return f"{major}.{minor}.{patch}"


def friendly_version() -> str:
    """Return the library version as a dotted string."""
    return _friendly(VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH)


def min_friendly_version() -> str:
    """Return the minimum compatible interface version as a dotted string."""
    return _friendly(MIN_VERSION_MAJOR, MIN_VERSION_MINOR, MIN_VERSION_PATCH)


def is_compatible(major: int, minor: int, patch: int) -> bool:
    """Tell whether code written for the given version works with this library.

    Any version in the same major branch at or above the minimum
    interface version is compatible.
    """
    if major != MIN_VERSION_MAJOR:
        return False
    if minor < MIN_VERSION_MINOR:
        return False
    if minor == MIN_VERSION_MINOR and patch < MIN_VERSION_PATCH:
        return False
    return True