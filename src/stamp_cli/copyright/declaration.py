"""Locating and splicing the copyright declaration in assembly info text."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .constants import (
    ASSEMBLY_COPYRIGHT_PATTERN,
    COPYRIGHT_GROUP,
    DIALECT_DELIMITERS,
)


def _group_name(dialect: str) -> str:
    return f"{COPYRIGHT_GROUP}_{dialect}"


def build_assembly_info_pattern() -> str:
    """Return the combined pattern for C#, F# and Visual Basic assembly info files."""
    alternatives = [
        prefix + ASSEMBLY_COPYRIGHT_PATTERN.format(group=_group_name(dialect)) + suffix
        for dialect, prefix, suffix in DIALECT_DELIMITERS
    ]
    return r"^\s*(?:" + "|".join(alternatives) + r")\s*$"


ASSEMBLY_INFO_REGEX = re.compile(build_assembly_info_pattern(), re.MULTILINE)


@dataclass
class CopyrightDeclaration:
    """An ``AssemblyCopyright`` declaration found in a text.

    ``start``/``end`` cover the whole match including the dialect brackets;
    ``copyright_start``/``copyright_end`` cover only the quoted text.
    """
    dialect: str
    copyright: str
    start: int
    end: int
    copyright_start: int
    copyright_end: int

    def replace_copyright(self, text: str, value: str) -> str:
        """Return ``text`` with the quoted copyright replaced by ``value``; nothing else changes."""
        return text[: self.copyright_start] + value + text[self.copyright_end :]


def find_copyright_declaration(text: str) -> Optional[CopyrightDeclaration]:
    """Locate the first copyright declaration in document order.

    Only the first declaration is returned; files declaring the copyright more
    than once are not supported.
    """
    match = ASSEMBLY_INFO_REGEX.search(text)
    if not match:
        return None

    for dialect, _prefix, _suffix in DIALECT_DELIMITERS:
        group = _group_name(dialect)
        if match.group(group) is not None:
            return CopyrightDeclaration(
                dialect=dialect,
                copyright=match.group(group),
                start=match.start(),
                end=match.end(),
                copyright_start=match.start(group),
                copyright_end=match.end(group),
            )
    return None
