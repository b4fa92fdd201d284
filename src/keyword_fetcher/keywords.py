from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

# Characters the results tree cannot hold in a path segment, plus whitespace.
_DISALLOWED_KEY_CHARS_RE = re.compile(r"[.#$/\[\]\s]+")


def sanitize_key(text: str) -> str:
    """Turn a keyword into a single path segment of the results tree.

    Each run of path-delimiting characters and whitespace collapses into one
    underscore, so sanitizing an already sanitized key returns it unchanged.
    """
    return _DISALLOWED_KEY_CHARS_RE.sub("_", text)


@dataclass(frozen=True)
class Keyword:
    text: str

    @property
    def key(self) -> str:
        return sanitize_key(self.text)


def parse_keywords(raw_values: Iterable[object]) -> list[Keyword]:
    keywords: list[Keyword] = []
    for value in raw_values:
        if value is None:
            continue
        text = str(value)
        if not text.strip():
            continue
        keywords.append(Keyword(text=text))
    return keywords
