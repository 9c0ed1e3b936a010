import re
from functools import lru_cache


@lru_cache(maxsize=256)
def _compile_glob(pattern):
    """
    Translate a route glob into a regex. ``**`` matches any number of path
    segments, ``*`` matches within a single segment.
    """
    parts = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("/**", i):
            # "/**" also matches the bare prefix ("/api/**" matches "/api")
            parts.append("(?:/.*)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("^" + "".join(parts) + "$")


def path_matches(path, pattern):
    return bool(_compile_glob(pattern).match(path))


def matches_any(path, patterns):
    """Trailing slashes are ignored so "/api/health/" matches "/api/health"."""
    normalized = path.rstrip("/") or "/"
    return any(
        path_matches(normalized, pattern) or path_matches(path, pattern)
        for pattern in patterns
    )
