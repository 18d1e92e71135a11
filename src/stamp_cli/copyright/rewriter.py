"""Copyright year substitution for build pipelines.

Replaces the ``{YEAR}`` token with the current UTC year in an inline copyright
property and/or in the ``AssemblyCopyright`` declaration of an assembly info
source file. The file is rewritten only inside the quoted copyright text; all
other bytes, including newlines and a leading BOM, are copied verbatim.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

import yaml

from .constants import YEAR_TOKEN, PROJECT_CONFIG_FILE, PROJECT_CONFIG_SECTION
from .declaration import find_copyright_declaration


class ConfigurationError(ValueError):
    """Required rewrite settings are missing or inconsistent."""


# stamp.yml key -> CopyrightYearConfig field
_STAMP_YML_KEYS = {
    'copyright': 'copyright_input',
    'assembly_info_input': 'assembly_info_input',
    'assembly_info_output': 'assembly_info_output',
}


@dataclass
class CopyrightYearConfig:
    """Settings for a copyright year rewrite."""
    project_dir: Optional[str] = None
    copyright_input: Optional[str] = None
    assembly_info_input: Optional[str] = None
    assembly_info_output: Optional[str] = None

    def validate(self):
        """Fail fast on missing companion settings.

        Raises:
            ConfigurationError: If the settings cannot drive a rewrite.
        """
        if not self.project_dir:
            raise ConfigurationError("project_dir must be defined!")
        if (self.assembly_info_input is None and self.assembly_info_output is None
                and self.copyright_input is None):
            raise ConfigurationError("copyright_input or assembly_info_output must be defined!")
        if self.assembly_info_input is not None and self.assembly_info_output is None:
            raise ConfigurationError(
                "assembly_info_output must be defined if assembly_info_input is defined!")
        if self.assembly_info_output is not None and self.assembly_info_input is None:
            raise ConfigurationError(
                "assembly_info_input must be defined if assembly_info_output is defined!")

    def resolve(self, path: str) -> Path:
        """Resolve ``path`` against the project directory unless it is absolute."""
        resolved = Path(path)
        if not resolved.is_absolute():
            resolved = Path(self.project_dir) / resolved
        return resolved

    @classmethod
    def from_stamp_yml(cls, project_dir: str, **overrides) -> 'CopyrightYearConfig':
        """Create configuration from the project's stamp.yml with command-line overrides.

        Reads the ``copyright_year`` section, whose keys are ``copyright``,
        ``assembly_info_input`` and ``assembly_info_output``.

        Args:
            project_dir: Project directory holding stamp.yml.
            **overrides: Command-line values; None means "not given".

        Raises:
            ValueError: If stamp.yml exists but is not a YAML object.
            ConfigurationError: If a setting in stamp.yml is not a string.
        """
        config = cls(project_dir=project_dir)

        config_path = Path(project_dir) / PROJECT_CONFIG_FILE
        if config_path.exists():
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML format in {config_path}: {e}")

            if not isinstance(data, dict):
                raise ValueError(f"{PROJECT_CONFIG_FILE} must contain a YAML object, got {type(data)}")

            section = data.get(PROJECT_CONFIG_SECTION) or {}
            if not isinstance(section, dict):
                raise ValueError(f"'{PROJECT_CONFIG_SECTION}' in {PROJECT_CONFIG_FILE} must be a YAML object")
            for yml_key, attr in _STAMP_YML_KEYS.items():
                if yml_key not in section or section[yml_key] is None:
                    continue
                value = section[yml_key]
                if not isinstance(value, str):
                    # e.g. unquoted "copyright: {YEAR}" loads as a mapping
                    raise ConfigurationError(
                        f"'{PROJECT_CONFIG_SECTION}.{yml_key}' in {PROJECT_CONFIG_FILE} must be a string, "
                        f"got {type(value).__name__} (quote the value)")
                setattr(config, attr, value)

        # Command-line values take priority
        for key, value in overrides.items():
            if value is not None:
                setattr(config, key, value)

        return config


@dataclass
class CopyrightYearResult:
    """Outputs of a rewrite.

    ``copyright`` and ``assembly_info`` are set only when their target was
    processed. ``found`` is True if any target had a token substituted.
    """
    copyright: Optional[str] = None
    assembly_info: Optional[Path] = None
    found: bool = False
    warnings: List[str] = field(default_factory=list)


def current_year() -> int:
    return datetime.now(timezone.utc).year


def replace_year_token(value: str, year: Union[int, str]) -> str:
    return value.replace(YEAR_TOKEN, str(year))


class CopyrightYearRewriter:
    """Applies the current year to copyright properties and assembly info files."""

    def __init__(self):
        self.warnings: List[str] = []

    def _warn(self, message: str):
        self.warnings.append(message)

    def rewrite(self, config: CopyrightYearConfig, year: Optional[int] = None) -> CopyrightYearResult:
        """Run the substitution for every configured target.

        Args:
            config: Targets to process.
            year: Year to substitute; defaults to the current UTC year.

        Returns:
            CopyrightYearResult: New values, output path and warnings.

        Raises:
            ConfigurationError: Before any I/O, if the config is incomplete.
            OSError: If an existing input cannot be read or the output cannot be written.
        """
        config.validate()
        self.warnings = []
        year_text = str(year if year is not None else current_year())
        result = CopyrightYearResult()

        if config.assembly_info_output is not None:
            self._rewrite_assembly_info(config, year_text, result)
        if config.copyright_input is not None:
            self._rewrite_property(config, year_text, result)

        if not result.found:
            self._warn(f"No {YEAR_TOKEN} token was found to replace!")

        result.warnings = list(self.warnings)
        return result

    def _rewrite_assembly_info(self, config: CopyrightYearConfig, year: str, result: CopyrightYearResult):
        """Replace the copyright year in an assembly info file and write the new file."""
        in_file = config.resolve(config.assembly_info_input)
        out_file = config.resolve(config.assembly_info_output)

        if not in_file.is_file():
            self._warn(f"Could not find assembly info file {in_file}!")
            return

        # newline='' keeps CRLF/LF exactly as in the source
        with open(in_file, 'r', encoding='utf-8', newline='') as f:
            text = f.read()

        declaration = find_copyright_declaration(text)
        if declaration is not None:
            if YEAR_TOKEN not in declaration.copyright:
                self._warn(f"Could not find {YEAR_TOKEN} token in AssemblyCopyright!")
            else:
                result.found = True
                text = declaration.replace_copyright(
                    text, replace_year_token(declaration.copyright, year))

        # Always emit the output so the build can reference it
        out_file.parent.mkdir(parents=True, exist_ok=True)
        with open(out_file, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
        result.assembly_info = out_file

    def _rewrite_property(self, config: CopyrightYearConfig, year: str, result: CopyrightYearResult):
        """Replace the copyright year in the inline property."""
        copyright = config.copyright_input
        if not copyright:
            return

        if YEAR_TOKEN not in copyright:
            self._warn(f"Could not find {YEAR_TOKEN} token in Copyright property!")
        else:
            result.found = True
            copyright = replace_year_token(copyright, year)

        result.copyright = copyright


def rewrite_copyright_year(config: CopyrightYearConfig, year: Optional[int] = None) -> CopyrightYearResult:
    """Convenience wrapper around ``CopyrightYearRewriter().rewrite``."""
    return CopyrightYearRewriter().rewrite(config, year=year)
