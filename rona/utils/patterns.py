# Rona Pattern Matching
# Compiled glob patterns for repository-relative paths

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from rona.errors import InvalidPattern


def _translate_segment(pattern: str, segment: str) -> str:
    """
    Translate one path segment of a glob into a regular expression.

    Args:
        pattern: Full pattern text (for error messages).
        segment: Segment without any '/'.

    Returns:
        Regex source matching exactly that segment.

    Raises:
        InvalidPattern: For unterminated character classes.
    """
    i, n = 0, len(segment)
    out: list[str] = []

    while i < n:
        char = segment[i]
        i += 1

        if char == "*":
            out.append("[^/]*")
        elif char == "?":
            out.append("[^/]")
        elif char == "[":
            j = i
            if j < n and segment[j] in "!^":
                j += 1
            if j < n and segment[j] == "]":
                j += 1
            while j < n and segment[j] != "]":
                j += 1
            if j >= n:
                raise InvalidPattern(pattern, "unterminated character class")

            content = segment[i:j].replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
            i = j + 1
            if content[0] in "!^":
                out.append(f"[^/{content[1:]}]")
            else:
                out.append(f"[{content}]")
        else:
            out.append(re.escape(char))

    return "".join(out)


@dataclass(frozen=True)
class ExclusionPattern:
    """
    A glob pattern compiled once and applied to many paths.

    Semantics:
    - ``*`` matches within a path segment, ``?`` a single character
    - ``[...]`` is a character class (``[!...]`` negated)
    - ``**`` as a whole segment matches any number of segments
    - a trailing ``/`` matches every path below that directory
    - a pattern without ``/`` matches the basename at any depth,
      any other pattern is anchored at the repository root

    Matching is case-sensitive.
    """

    text: str
    directory: bool
    anchored: bool
    _regex: re.Pattern = field(repr=False, compare=False)

    @classmethod
    def compile(cls, text: str) -> "ExclusionPattern":
        """
        Parse a glob pattern.

        Args:
            text: Pattern as given by the user.

        Returns:
            Compiled pattern.

        Raises:
            InvalidPattern: If the glob is malformed.
        """
        if not text or not text.strip():
            raise InvalidPattern(text, "pattern is empty")

        directory = text.endswith("/")
        body = text.rstrip("/")
        anchored = directory or "/" in body
        body = body.lstrip("/")

        if not body:
            raise InvalidPattern(text, "pattern has no path component")

        segments = body.split("/")
        parts: list[str] = []

        for index, segment in enumerate(segments):
            is_last = index == len(segments) - 1

            if segment == "**":
                parts.append(".*" if is_last else "(?:[^/]+/)*")
                continue

            if "***" in segment:
                raise InvalidPattern(text, "wildcards are either regular '*' or recursive '**'")
            if "**" in segment:
                raise InvalidPattern(text, "recursive wildcards must form a single path component")
            if not segment:
                raise InvalidPattern(text, "empty path component")

            parts.append(_translate_segment(text, segment))
            if not is_last:
                parts.append("/")

        source = "".join(parts)
        if directory:
            source += "/.*"
        if not anchored:
            source = "(?:.*/)?" + source

        try:
            regex = re.compile(source, re.DOTALL)
        except re.error as e:
            raise InvalidPattern(text, str(e)) from e

        return cls(text=text, directory=directory, anchored=anchored, _regex=regex)

    def matches(self, path: str) -> bool:
        """Check a repository-relative path against this pattern."""
        if path.startswith("./"):
            path = path[2:]
        return self._regex.fullmatch(path) is not None

    def matches_path_or_parent(self, path: str) -> bool:
        """Check the path itself and every directory above it."""
        if self.matches(path):
            return True

        parts = path.strip("/").split("/")
        for depth in range(1, len(parts)):
            if self.matches("/".join(parts[:depth])):
                return True
        return False

    def __str__(self) -> str:
        return self.text


def compile_patterns(patterns: Iterable[str]) -> list[ExclusionPattern]:
    """
    Compile every pattern up front.

    Args:
        patterns: Raw glob strings.

    Returns:
        Compiled patterns in input order.

    Raises:
        InvalidPattern: On the first malformed pattern.
    """
    return [ExclusionPattern.compile(p) for p in patterns]


def matches_any(path: str, patterns: Iterable[ExclusionPattern]) -> bool:
    """Check if path matches any compiled pattern."""
    return any(p.matches(path) for p in patterns)
