import re

from schema_discovery.schema import SystemInfo

_VERSION = re.compile(r"^PostgreSQL (\d+)(?:\.(\d+))?(?:\.(\d+))?(\S*)\s*(.*)$", re.DOTALL)


def parse_version(text: str) -> SystemInfo:
    """Parse ``SELECT version()``, e.g. ``PostgreSQL 13.2 on x86_64-pc-linux-gnu, ...``.

    Since 10.0 the second component is the minor release, so 13.2 -> 130002.
    """
    match = _VERSION.match(text.strip())
    if match is None:
        return SystemInfo(system="PostgreSQL", version=text.strip())
    major, minor, patch = (int(part or 0) for part in match.group(1, 2, 3))
    tag, rest = match.group(4), match.group(5)
    version = ".".join(p for p in match.group(1, 2, 3) if p) + tag
    return SystemInfo(
        system="PostgreSQL",
        version=version,
        version_number=major * 10000 + minor * 100 + patch,
        suffix=[rest] if rest else [],
    )
