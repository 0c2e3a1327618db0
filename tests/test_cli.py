"""Tests for the command line interface."""

import pytest
from click.testing import CliRunner

from stringsgen import __version__
from stringsgen.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def table_file(tmp_path):
    path = tmp_path / "Localizable.strings"
    path.write_text('''/* Number of apples */
"apples.count" = "You have %d apples";
"bananas.owner" = "Those %d bananas belong to %@.";
''', encoding='utf-8')
    return path


@pytest.fixture
def colliding_file(tmp_path):
    path = tmp_path / "Colliding.strings"
    path.write_text('"alert__title" = "Title";\n"alert.title" = "Other";\n', encoding='utf-8')
    return path


class TestGenerateCommand:
    """Tests for the generate command."""

    def test_to_stdout(self, runner, table_file):
        """Test output is printed when no destination is given."""
        result = runner.invoke(cli, ['generate', str(table_file), '--profile', 'objc-h'])

        assert result.exit_code == 0
        assert "@interface LocLocalizable : NSObject" in result.output
        assert "+ (NSString*)applesCountWithValue:(NSInteger)p1;" in result.output

    def test_to_file(self, runner, table_file, tmp_path):
        """Test writing to an output file with parameters."""
        output = tmp_path / "Strings.swift"
        result = runner.invoke(cli, [
            'generate', str(table_file),
            '-p', 'swift5',
            '-o', str(output),
            '--param', 'enum_name=Strings',
            '--param', 'public_access=true',
        ])

        assert result.exit_code == 0
        text = output.read_text(encoding='utf-8')
        assert "public enum Strings {" in text
        assert "public static func applesCount(_ p1: Int) -> String {" in text

    def test_several_tables_to_directory(self, runner, table_file, tmp_path):
        """Test each table gets its own file in the output directory."""
        other = tmp_path / "Menu.json"
        other.write_text('{"file": {"open": "Open"}}', encoding='utf-8')
        out_dir = tmp_path / "out"

        result = runner.invoke(cli, [
            'generate', str(table_file), str(other), '-p', 'swift5', '-o', str(out_dir), '-j', '2'
        ])

        assert result.exit_code == 0
        assert (out_dir / "Localizable.swift").is_file()
        assert (out_dir / "Menu.swift").is_file()

    def test_collision_fails_without_output(self, runner, colliding_file, tmp_path):
        """Test a collision exits non-zero and writes nothing."""
        output = tmp_path / "Colliding.h"
        result = runner.invoke(cli, [
            'generate', str(colliding_file), '-p', 'objc-h', '-o', str(output)
        ])

        assert result.exit_code == 1
        assert "alertTitle" in result.output
        assert not output.exists()

    def test_other_tables_still_written(self, runner, table_file, colliding_file, tmp_path):
        """Test a failing table does not block the rest of the run."""
        out_dir = tmp_path / "out"
        result = runner.invoke(cli, [
            'generate', str(colliding_file), str(table_file), '-p', 'objc-h', '-o', str(out_dir)
        ])

        assert result.exit_code == 1
        assert (out_dir / "LocLocalizable.h").is_file()
        assert not (out_dir / "LocColliding.h").exists()

    def test_tables_sharing_a_file_name(self, runner, tmp_path):
        """Test same-named tables from two folders fail instead of overwriting."""
        inputs = []
        for lang in ("en", "de"):
            path = tmp_path / lang / "Localizable.strings"
            path.parent.mkdir()
            path.write_text('"greeting" = "Hi";\n', encoding='utf-8')
            inputs.append(str(path))
        out_dir = tmp_path / "out"

        result = runner.invoke(cli, ['generate', *inputs, '-p', 'swift5', '-o', str(out_dir)])

        assert result.exit_code == 1
        assert "both generate" in result.output
        assert not out_dir.exists()

    def test_unknown_param(self, runner, table_file):
        """Test an unknown template parameter is reported."""
        result = runner.invoke(cli, [
            'generate', str(table_file), '-p', 'objc-h', '--param', 'enum_name=X'
        ])

        assert result.exit_code == 1
        assert "Unknown parameter" in result.output

    def test_malformed_param(self, runner, table_file):
        """Test --param requires KEY=VALUE."""
        result = runner.invoke(cli, [
            'generate', str(table_file), '-p', 'objc-h', '--param', 'class_name'
        ])

        assert result.exit_code == 2

    def test_unknown_profile(self, runner, table_file):
        """Test profile names are restricted to the built-in ones."""
        result = runner.invoke(cli, ['generate', str(table_file), '-p', 'kotlin'])
        assert result.exit_code == 2

    def test_empty_table_warns(self, runner, tmp_path):
        """Test an empty table is a warning, not a failure."""
        empty = tmp_path / "Empty.strings"
        empty.write_text("/* nothing yet */\n", encoding='utf-8')

        result = runner.invoke(cli, ['generate', str(empty), '-p', 'objc-h'])

        assert result.exit_code == 0
        assert "Warning" in result.output
        assert "@interface LocEmpty : NSObject" in result.output


class TestRunCommand:
    """Tests for the run command."""

    def test_run_config(self, runner, table_file, tmp_path):
        """Test every configured output is generated."""
        config_file = tmp_path / "stringsgen.yml"
        config_file.write_text(f'''strings:
  inputs:
    - {table_file.name}
  outputs:
    - profile: objc-h
      output: Generated/Loc.h
    - profile: swift5-structured
      output: Generated/Strings.swift
''', encoding='utf-8')

        result = runner.invoke(cli, ['run', '--config', str(config_file)])

        assert result.exit_code == 0
        assert (tmp_path / "Generated" / "Loc.h").is_file()
        structured = (tmp_path / "Generated" / "Strings.swift").read_text(encoding='utf-8')
        assert "internal enum Apples {" in structured

    def test_missing_config(self, runner, tmp_path):
        """Test a missing configuration file."""
        result = runner.invoke(cli, ['run', '--config', str(tmp_path / "missing.yml")])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestParseCommand:
    """Tests for the parse command."""

    def test_parse(self, runner, table_file):
        """Test entries and signatures are listed."""
        result = runner.invoke(cli, ['parse', str(table_file)])

        assert result.exit_code == 0
        assert "Entries (2 total)" in result.output
        assert '"apples.count" = "You have %d apples";' in result.output
        assert "-> bananasOwner(p1: integer, p2: object)" in result.output

    def test_parse_error(self, runner, colliding_file):
        """Test table errors are reported with a non-zero exit."""
        result = runner.invoke(cli, ['parse', str(colliding_file)])

        assert result.exit_code == 1
        assert "Error" in result.output


class TestMiscCommands:
    """Tests for profiles and --version."""

    def test_profiles(self, runner):
        """Test built-in profiles are listed."""
        result = runner.invoke(cli, ['profiles'])

        assert result.exit_code == 0
        for name in ("objc-h", "objc-m", "swift5", "swift5-structured"):
            assert name in result.output

    def test_version(self, runner):
        """Test the version option."""
        result = runner.invoke(cli, ['--version'])

        assert result.exit_code == 0
        assert __version__ in result.output
