import re

from schema_discovery.schema import SystemInfo

_VERSION = re.compile(r"^(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def parse_version(text: str) -> SystemInfo:
    """Parse ``sqlite_version()``, e.g. ``3.39.2`` -> 30902."""
    version = text.strip()
    match = _VERSION.match(version)
    if match is None:
        return SystemInfo(system="SQLite", version=version)
    major, minor, patch = (int(part or 0) for part in match.groups())
    return SystemInfo(
        system="SQLite", version=version, version_number=major * 10000 + minor * 100 + patch
    )
