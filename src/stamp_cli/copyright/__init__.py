"""Copyright year substitution for assembly info files and copyright properties."""

from .constants import YEAR_TOKEN, DIALECT_DELIMITERS
from .declaration import (
    CopyrightDeclaration,
    find_copyright_declaration,
    build_assembly_info_pattern,
    ASSEMBLY_INFO_REGEX
)
from .rewriter import (
    ConfigurationError,
    CopyrightYearConfig,
    CopyrightYearResult,
    CopyrightYearRewriter,
    rewrite_copyright_year,
    replace_year_token,
    current_year
)

__all__ = [
    # Grammar
    'YEAR_TOKEN',
    'DIALECT_DELIMITERS',
    'CopyrightDeclaration',
    'find_copyright_declaration',
    'build_assembly_info_pattern',
    'ASSEMBLY_INFO_REGEX',

    # Rewrite task
    'ConfigurationError',
    'CopyrightYearConfig',
    'CopyrightYearResult',
    'CopyrightYearRewriter',
    'rewrite_copyright_year',
    'replace_year_token',
    'current_year'
]
