"""Device locale and timezone lookups."""

import locale
import os
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_ZONEINFO_MARKER = "zoneinfo/"


def current_language() -> Optional[str]:
    """Locale identifier such as ``en_US``, or None when unset."""
    try:
        language, _ = locale.getlocale()
    except ValueError:
        language = None
    if not language:
        for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
            value = os.environ.get(var)
            if value:
                language = value
                break
    if not language or language in ("C", "POSIX"):
        return None
    # Drop encoding and modifier: en_US.UTF-8@euro -> en_US
    return language.split(".")[0].split("@")[0] or None


def _valid_zone_name(name: Optional[str]) -> Optional[str]:
    """Return *name* if it is an IANA zone key, not a path or POSIX rule."""
    if not name or name.startswith("/"):
        return None
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return None
    return name


def _system_timezone() -> Optional[str]:
    """Zone name from /etc/localtime or /etc/timezone."""
    try:
        target = str(Path("/etc/localtime").resolve())
    except OSError:
        target = ""
    if _ZONEINFO_MARKER in target:
        name = _valid_zone_name(target.split(_ZONEINFO_MARKER, 1)[1])
        if name:
            return name
    try:
        name = Path("/etc/timezone").read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return _valid_zone_name(name)


def current_timezone() -> Optional[str]:
    """IANA timezone identifier such as ``Europe/Amsterdam``, or None."""
    tz = _valid_zone_name(os.environ.get("TZ", "").lstrip(":"))
    return tz or _system_timezone()
