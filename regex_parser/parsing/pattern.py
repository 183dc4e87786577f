"""Compiled pattern wrapper around the RE2 engine.

RE2 matches in time linear in the input length and keeps no mutable state in
the compiled object, so a single ``CompiledPattern`` can be shared by any
number of threads.

RE2's Perl classes (``\\d``, ``\\w``, ``\\s``) only cover ASCII. Patterns are
rewritten to the equivalent Unicode property classes before compiling, so
``\\w+`` captures ``José`` whole. ``\\b``/``\\B`` and the negated classes inside
brackets have no RE2 equivalent and stay ASCII.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import re2

from regex_parser.errors import PatternCompileFailure

_WORD = r"\p{L}\p{N}\p{M}\p{Pc}"
_SPACE = r"\t\n\v\f\r\p{Z}\x{85}"

# Replacements outside and inside a bracketed class.
_CLASSES = {
    "d": (r"\p{Nd}", r"\p{Nd}"),
    "D": (r"\P{Nd}", r"\P{Nd}"),
    "w": (f"[{_WORD}]", _WORD),
    "W": (f"[^{_WORD}]", None),
    "s": (f"[{_SPACE}]", _SPACE),
    "S": (f"[^{_SPACE}]", None),
}


def unicode_classes(source: str) -> str:
    """Rewrite ASCII-only Perl classes in ``source`` to Unicode ones."""
    out: list[str] = []
    i, n = 0, len(source)
    in_class = False
    class_start = 0
    while i < n:
        ch = source[i]
        if ch == "\\" and i + 1 < n:
            nxt = source[i + 1]
            if nxt == "Q":
                end = source.find("\\E", i + 2)
                end = n if end == -1 else end + 2
                out.append(source[i:end])
                i = end
                continue
            replacement = _CLASSES.get(nxt, (None, None))[1 if in_class else 0]
            out.append(replacement if replacement is not None else source[i:i + 2])
            i += 2
            continue

        if in_class:
            if ch == "[" and source.startswith("[:", i):
                end = source.find(":]", i + 2)
                if end != -1:
                    out.append(source[i:end + 2])
                    i = end + 2
                    continue
            # A ']' right after '[' or '[^' is a literal.
            if ch == "]" and i > class_start:
                in_class = False
        elif ch == "[":
            in_class = True
            class_start = i + 1
            if source.startswith("^", class_start):
                class_start += 1
                out.append("[^")
                i += 2
                continue
        out.append(ch)
        i += 1
    return "".join(out)


@dataclass(frozen=True)
class CompiledPattern:
    """Immutable compiled regular expression and its named groups.

    Attributes
    ----------
    source : str
        The pattern text the expression was compiled from.
    group_names : tuple[str, ...]
        Named capture groups, in order of appearance in ``source``.
    """

    source: str
    group_names: tuple[str, ...]
    _regexp: Any = field(repr=False, compare=False)

    @classmethod
    def compile(cls, source: str, option_name: str = "regex") -> CompiledPattern:
        """Compile ``source``.

        Raises
        ------
        regex_parser.errors.PatternCompileFailure
            If the engine rejects the pattern.
        """
        try:
            regexp = re2.compile(unicode_classes(source))
        except (re2.error, TypeError) as err:
            raise PatternCompileFailure(option_name, source, err) from err

        ordered = sorted(regexp.groupindex.items(), key=lambda item: item[1])
        return cls(
            source=source,
            group_names=tuple(name for name, _ in ordered),
            _regexp=regexp,
        )

    def search(self, text: str):
        """Return the first match in ``text`` or None.

        Lone surrogates can't be encoded for RE2; each is matched as '?'.
        """
        try:
            return self._regexp.search(text)
        except UnicodeEncodeError:
            text = text.encode("utf-8", "replace").decode("utf-8")
            return self._regexp.search(text)
