import re

from schema_discovery.schema import SystemInfo

_VERSION = re.compile(r"^\s*(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def parse_version(text: str) -> SystemInfo:
    """Parse ``SELECT VERSION()``, e.g. ``8.0.23-log`` or ``10.5.8-MariaDB-1:10.5.8``."""
    head, *suffix = text.strip().split("-")
    match = _VERSION.match(head)
    if match is None:
        return SystemInfo(system="MySQL", version=text.strip(), suffix=suffix)
    major, minor, patch = (int(part or 0) for part in match.groups())
    system = "MariaDB" if any(s.lower() == "mariadb" for s in suffix) else "MySQL"
    return SystemInfo(
        system=system,
        version=head,
        version_number=major * 10000 + minor * 100 + patch,
        suffix=suffix,
    )
