from datetime import datetime, timezone
from pathlib import Path

import pytest

from stamp_cli.copyright import (
    ConfigurationError,
    CopyrightYearConfig,
    CopyrightYearRewriter,
    current_year,
    rewrite_copyright_year,
)

NO_TOKEN_WARNING = "No {YEAR} token was found to replace!"

ASSEMBLY_INFO = (
    "using System.Reflection;\n"
    "\n"
    "// keep this comment\n"
    "[assembly: AssemblyTitle(\"Acme\")]\n"
    "[assembly: AssemblyCopyright(\"Copyright © {YEAR} Acme\")]\n"
    "[assembly: AssemblyVersion(\"1.0.0.0\")]\n"
)


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    return path


def _config(project_dir: Path, **kwargs) -> CopyrightYearConfig:
    return CopyrightYearConfig(project_dir=str(project_dir), **kwargs)


def test_assembly_info_rewrite_is_byte_exact(tmp_path) -> None:
    _write(tmp_path / "Properties" / "AssemblyInfo.cs", ASSEMBLY_INFO)
    config = _config(tmp_path,
                     assembly_info_input="Properties/AssemblyInfo.cs",
                     assembly_info_output="obj/AssemblyInfo.g.cs")

    result = CopyrightYearRewriter().rewrite(config, year=2024)

    out_file = tmp_path / "obj" / "AssemblyInfo.g.cs"
    assert result.found
    assert result.assembly_info == out_file
    assert result.copyright is None
    assert result.warnings == []
    expected = ASSEMBLY_INFO.replace("Copyright © {YEAR} Acme", "Copyright © 2024 Acme")
    assert out_file.read_bytes() == expected.encode("utf-8")


@pytest.mark.parametrize("line", [
    '[assembly: AssemblyCopyright("© {YEAR} Acme")]',
    '[<assembly: AssemblyCopyright("© {YEAR} Acme")>]',
    '<Assembly: AssemblyCopyright("© {YEAR} Acme")>',
])
def test_each_dialect_is_rewritten(tmp_path, line: str) -> None:
    _write(tmp_path / "AssemblyInfo.src", f"header\n{line}\nfooter\n")
    config = _config(tmp_path, assembly_info_input="AssemblyInfo.src", assembly_info_output="out/AssemblyInfo")

    result = rewrite_copyright_year(config, year=2031)

    assert result.found
    expected = f"header\n{line.replace('{YEAR}', '2031')}\nfooter\n"
    assert result.assembly_info.read_text(encoding="utf-8") == expected


def test_every_token_in_copyright_is_replaced(tmp_path) -> None:
    _write(tmp_path / "a.cs", '[assembly: AssemblyCopyright("2001-{YEAR} ({YEAR})")]\n')
    config = _config(tmp_path, assembly_info_input="a.cs", assembly_info_output="b.cs")
    result = rewrite_copyright_year(config, year=2024)
    assert (tmp_path / "b.cs").read_text(encoding="utf-8") == '[assembly: AssemblyCopyright("2001-2024 (2024)")]\n'
    assert result.found


def test_tokens_outside_copyright_are_untouched(tmp_path) -> None:
    text = '// built {YEAR}\n[assembly: AssemblyCopyright("(c) {YEAR}")]\n[assembly: AssemblyProduct("{YEAR}")]\n'
    _write(tmp_path / "a.cs", text)
    config = _config(tmp_path, assembly_info_input="a.cs", assembly_info_output="b.cs")
    rewrite_copyright_year(config, year=2024)
    assert (tmp_path / "b.cs").read_text(encoding="utf-8") == text.replace('"(c) {YEAR}"', '"(c) 2024"')


def test_crlf_and_bom_preserved(tmp_path) -> None:
    text = '\ufeffusing System;\r\n[assembly: AssemblyCopyright("(c) {YEAR}")]\r\n'
    _write(tmp_path / "a.cs", text)
    config = _config(tmp_path, assembly_info_input="a.cs", assembly_info_output="b.cs")
    rewrite_copyright_year(config, year=2024)
    expected = text.replace("{YEAR}", "2024").encode("utf-8")
    assert (tmp_path / "b.cs").read_bytes() == expected


def test_copyright_without_token_is_copied_unchanged(tmp_path) -> None:
    text = ASSEMBLY_INFO.replace("{YEAR}", "2019")
    _write(tmp_path / "a.cs", text)
    config = _config(tmp_path, assembly_info_input="a.cs", assembly_info_output="b.cs")

    result = rewrite_copyright_year(config, year=2024)

    assert not result.found
    assert (tmp_path / "b.cs").read_bytes() == text.encode("utf-8")
    assert result.warnings == [
        "Could not find {YEAR} token in AssemblyCopyright!",
        NO_TOKEN_WARNING,
    ]


def test_file_without_declaration_is_copied(tmp_path) -> None:
    text = "using System;\n[assembly: AssemblyTitle(\"Acme\")]\n"
    _write(tmp_path / "a.cs", text)
    config = _config(tmp_path, assembly_info_input="a.cs", assembly_info_output="b.cs")

    result = rewrite_copyright_year(config, year=2024)

    assert (tmp_path / "b.cs").read_text(encoding="utf-8") == text
    assert result.assembly_info == tmp_path / "b.cs"
    assert result.warnings == [NO_TOKEN_WARNING]


def test_file_without_declaration_but_inline_substituted(tmp_path) -> None:
    _write(tmp_path / "a.cs", "using System;\n")
    config = _config(tmp_path, assembly_info_input="a.cs", assembly_info_output="b.cs",
                     copyright_input="© {YEAR} Acme")
    result = rewrite_copyright_year(config, year=2024)
    assert result.found
    assert result.warnings == []


def test_only_first_declaration_is_rewritten(tmp_path) -> None:
    text = '[assembly: AssemblyCopyright("a {YEAR}")]\n[assembly: AssemblyCopyright("b {YEAR}")]\n'
    _write(tmp_path / "a.cs", text)
    config = _config(tmp_path, assembly_info_input="a.cs", assembly_info_output="b.cs")
    rewrite_copyright_year(config, year=2024)
    assert (tmp_path / "b.cs").read_text(encoding="utf-8") == text.replace("a {YEAR}", "a 2024")


def test_existing_output_is_overwritten(tmp_path) -> None:
    _write(tmp_path / "a.cs", ASSEMBLY_INFO)
    _write(tmp_path / "b.cs", "stale")
    config = _config(tmp_path, assembly_info_input="a.cs", assembly_info_output="b.cs")
    rewrite_copyright_year(config, year=2024)
    assert "stale" not in (tmp_path / "b.cs").read_text(encoding="utf-8")


def test_absolute_paths_ignore_project_dir(tmp_path) -> None:
    source = _write(tmp_path / "src" / "AssemblyInfo.cs", ASSEMBLY_INFO)
    output = tmp_path / "build" / "AssemblyInfo.cs"
    config = _config(tmp_path / "elsewhere", assembly_info_input=str(source), assembly_info_output=str(output))
    result = rewrite_copyright_year(config, year=2024)
    assert result.assembly_info == output
    assert output.exists()


def test_inline_copyright_only() -> None:
    config = CopyrightYearConfig(project_dir=".", copyright_input="© {YEAR} Acme")
    result = rewrite_copyright_year(config, year=2024)
    assert result.copyright == "© 2024 Acme"
    assert result.assembly_info is None
    assert result.found
    assert result.warnings == []


def test_inline_copyright_without_token() -> None:
    config = CopyrightYearConfig(project_dir=".", copyright_input="© 2019 Acme")
    result = rewrite_copyright_year(config, year=2024)
    assert result.copyright == "© 2019 Acme"
    assert not result.found
    assert result.warnings == ["Could not find {YEAR} token in Copyright property!", NO_TOKEN_WARNING]


def test_missing_input_file_and_empty_copyright(tmp_path) -> None:
    config = _config(tmp_path, assembly_info_input="missing.cs", assembly_info_output="out/missing.cs",
                     copyright_input="")
    result = rewrite_copyright_year(config, year=2024)
    assert result.assembly_info is None
    assert result.copyright is None
    assert not result.found
    assert not (tmp_path / "out").exists()
    assert len(result.warnings) == 2
    assert result.warnings[0].startswith("Could not find assembly info file")
    assert result.warnings[-1] == NO_TOKEN_WARNING


def test_default_year_is_current_utc_year() -> None:
    config = CopyrightYearConfig(project_dir=".", copyright_input="{YEAR}")
    before = datetime.now(timezone.utc).year
    result = rewrite_copyright_year(config)
    after = datetime.now(timezone.utc).year
    assert int(result.copyright) in (before, after)
    assert current_year() >= before


@pytest.mark.parametrize("kwargs", [
    {},
    {"assembly_info_input": "a.cs"},
    {"assembly_info_output": "b.cs"},
])
def test_configuration_errors(tmp_path, kwargs) -> None:
    config = _config(tmp_path, **kwargs)
    with pytest.raises(ConfigurationError):
        rewrite_copyright_year(config)


def test_project_dir_required() -> None:
    with pytest.raises(ConfigurationError):
        rewrite_copyright_year(CopyrightYearConfig(copyright_input="{YEAR}"))


def test_configuration_error_before_io(tmp_path) -> None:
    _write(tmp_path / "a.cs", ASSEMBLY_INFO)
    config = _config(tmp_path, assembly_info_input="a.cs")
    with pytest.raises(ConfigurationError):
        rewrite_copyright_year(config)
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.cs"]


def test_unreadable_input_propagates(tmp_path) -> None:
    (tmp_path / "a.cs").write_bytes(b"\xff\xfe[assembly: \xff]")
    config = _config(tmp_path, assembly_info_input="a.cs", assembly_info_output="b.cs")
    with pytest.raises(ValueError):
        rewrite_copyright_year(config)


def test_from_stamp_yml_with_overrides(tmp_path) -> None:
    (tmp_path / "stamp.yml").write_text(
        "copyright_year:\n"
        "  copyright: \"© {YEAR} Acme\"\n"
        "  assembly_info_input: Properties/AssemblyInfo.cs\n"
        "  assembly_info_output: obj/AssemblyInfo.cs\n",
        encoding="utf-8",
    )
    config = CopyrightYearConfig.from_stamp_yml(str(tmp_path), copyright_input="© {YEAR} Other",
                                                assembly_info_input=None)
    assert config.project_dir == str(tmp_path)
    assert config.copyright_input == "© {YEAR} Other"
    assert config.assembly_info_input == "Properties/AssemblyInfo.cs"
    assert config.assembly_info_output == "obj/AssemblyInfo.cs"


def test_from_stamp_yml_without_file(tmp_path) -> None:
    config = CopyrightYearConfig.from_stamp_yml(str(tmp_path), copyright_input="{YEAR}")
    assert config == CopyrightYearConfig(project_dir=str(tmp_path), copyright_input="{YEAR}")


@pytest.mark.parametrize("content", ["- a\n- b\n", "copyright_year: [1, 2]\n", "copyright_year: {bad\n"])
def test_from_stamp_yml_rejects_bad_yaml(tmp_path, content: str) -> None:
    (tmp_path / "stamp.yml").write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        CopyrightYearConfig.from_stamp_yml(str(tmp_path))


@pytest.mark.parametrize("content, key", [
    ("copyright_year:\n  copyright: {YEAR}\n", "copyright"),
    ("copyright_year:\n  copyright: 2024\n", "copyright"),
    ("copyright_year:\n  assembly_info_input: 5\n  assembly_info_output: out.cs\n", "assembly_info_input"),
    ("copyright_year:\n  assembly_info_input: in.cs\n  assembly_info_output: [out.cs]\n", "assembly_info_output"),
])
def test_from_stamp_yml_rejects_non_string_values(tmp_path, content: str, key: str) -> None:
    (tmp_path / "stamp.yml").write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError, match=f"copyright_year.{key}"):
        CopyrightYearConfig.from_stamp_yml(str(tmp_path))


def test_from_stamp_yml_accepts_quoted_token(tmp_path) -> None:
    (tmp_path / "stamp.yml").write_text("copyright_year:\n  copyright: '{YEAR}'\n", encoding="utf-8")
    config = CopyrightYearConfig.from_stamp_yml(str(tmp_path))
    assert config.copyright_input == "{YEAR}"
