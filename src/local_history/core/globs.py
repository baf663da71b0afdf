"""Glob patterns for workspace exclusion.

Patterns are matched against "/"-separated workspace-relative paths and
support brace alternatives ("{out,dist}", nestable), "**" spanning any
number of directories, "*" and "?" within one path segment, and "[...]"
character classes ("[!...]" negates).
"""

import re
from pathlib import PurePath


def expand_braces(pattern: str) -> list[str]:
    """Expand the brace alternatives of a pattern.

    Args:
        pattern: Glob pattern, e.g. "{.history,**/node_modules}"

    Returns:
        One pattern per alternative; unbalanced braces are kept literally
    """
    start = pattern.find("{")
    if start == -1:
        return [pattern]

    depth = 0
    options: list[str] = []
    option_start = start + 1
    for i in range(start, len(pattern)):
        c = pattern[i]
        if c == "{":
            depth += 1
        elif c == "," and depth == 1:
            options.append(pattern[option_start:i])
            option_start = i + 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                options.append(pattern[option_start:i])
                prefix, suffix = pattern[:start], pattern[i + 1 :]
                expanded: list[str] = []
                for option in options:
                    expanded.extend(expand_braces(prefix + option + suffix))
                return expanded
    return [pattern]


def translate(pattern: str) -> str:
    """Translate a brace-free glob into a regular expression body."""
    parts: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**", i):
                i += 2
                if i < n and pattern[i] == "/":
                    i += 1
                    parts.append("(?:.*/)?")
                else:
                    parts.append(".*")
                continue
            parts.append("[^/]*")
        elif c == "?":
            parts.append("[^/]")
        elif c == "[":
            end = pattern.find("]", i + 2)
            if end == -1:
                parts.append(re.escape(c))
            else:
                body = pattern[i + 1 : end].replace("\\", "\\\\")
                if body.startswith("!"):
                    body = "^" + body[1:]
                parts.append(f"[{body}]")
                i = end + 1
                continue
        else:
            parts.append(re.escape(c))
        i += 1
    return "".join(parts)


class GlobMatcher:
    """Compiled glob pattern matched against workspace-relative paths."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        alternatives = []
        for alternative in expand_braces(pattern):
            alternative = alternative.strip().replace("\\", "/")
            if alternative.startswith("./"):
                alternative = alternative[2:]
            if alternative:
                alternatives.append(translate(alternative.rstrip("/")))
        self._regex = re.compile("|".join(alternatives)) if alternatives else None

    def match(self, relative_path: str | PurePath) -> bool:
        """Return True if the path itself matches."""
        if self._regex is None:
            return False
        return self._regex.fullmatch(_as_posix(relative_path)) is not None

    def match_path_or_parent(self, relative_path: str | PurePath) -> bool:
        """Return True if the path or any directory containing it matches.

        Excluding a folder excludes everything below it.
        """
        parts = _as_posix(relative_path).split("/")
        return any(self.match("/".join(parts[: i + 1])) for i in range(len(parts)))


def _as_posix(path: str | PurePath) -> str:
    if isinstance(path, PurePath):
        return path.as_posix()
    return path.replace("\\", "/")
