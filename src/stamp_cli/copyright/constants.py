"""Shared constants for copyright year substitution.

Every dialect wraps the same ``AssemblyCopyright("...")`` call in its own
assembly-attribute brackets, so the grammar is a table of delimiter pairs
around one inner pattern. Change the inner pattern in one place only.
"""

YEAR_TOKEN = "{YEAR}"

# Name of the capture group holding the quoted copyright text
COPYRIGHT_GROUP = "copyright"

# Inner pattern; "{group}" is filled with a per-dialect group name since
# Python regexes cannot reuse one group name across alternatives.
ASSEMBLY_COPYRIGHT_PATTERN = (
    r'\s*(?:System\.Reflection\.)?AssemblyCopyright\s*\(\s*\$?@?"(?P<{group}>.*)"\s*\)\s*'
)

# (dialect, prefix, suffix), tried in this order
DIALECT_DELIMITERS = (
    ("csharp", r"\[\s*assembly:", r"\]"),
    ("fsharp", r"\[<\s*assembly:", r">\]"),
    ("visualbasic", r"<\s*Assembly:", r">"),
)

# Project file holding defaults for the copyright-year command
PROJECT_CONFIG_FILE = "stamp.yml"
PROJECT_CONFIG_SECTION = "copyright_year"
