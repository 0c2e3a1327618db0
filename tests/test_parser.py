"""Tests for the .strings file parser."""

import pytest

from stringsgen.errors import DuplicateKeyError, MalformedKeyError, TableFormatError
from stringsgen.strings import ResourceEntry, StringsParser


class TestResourceEntry:
    """Tests for ResourceEntry dataclass."""

    def test_basic_entry(self):
        """Test basic entry creation."""
        entry = ResourceEntry(key="test", template="Test Value")
        assert entry.key == "test"
        assert entry.template == "Test Value"
        assert entry.comment is None
        assert entry.line is None

    def test_entry_is_immutable(self):
        """Test entries cannot be modified after parsing."""
        entry = ResourceEntry(key="test", template="Test")
        with pytest.raises(AttributeError):
            entry.template = "Other"

    def test_line_is_not_part_of_equality(self):
        """Test entries from different lines compare equal."""
        assert ResourceEntry("a", "b", line=1) == ResourceEntry("a", "b", line=7)

    def test_to_strings_format_with_comment(self):
        """Test formatting with comment."""
        entry = ResourceEntry(key="hello", template="Hello", comment="Greeting")
        expected = '/* Greeting */\n"hello" = "Hello";'
        assert entry.to_strings_format() == expected

    def test_unescape_sequences(self):
        """Test unescaping."""
        unescaped = ResourceEntry._unescape('Hello\\nWorld\\t\\"test\\"\\\\')
        assert unescaped == 'Hello\nWorld\t"test"\\'

    def test_unescape_unicode(self):
        """Test \\U escapes."""
        assert ResourceEntry._unescape('caf\\U00E9') == 'café'


class TestStringsParser:
    """Tests for StringsParser."""

    @pytest.fixture
    def parser(self):
        """Create parser instance."""
        return StringsParser()

    def test_parse_basic(self, parser):
        """Test basic parsing."""
        entries = parser.parse('"key" = "value";')
        assert len(entries) == 1
        assert entries[0].key == "key"
        assert entries[0].template == "value"
        assert entries[0].line == 1

    def test_parse_with_comment(self, parser):
        """Test parsing with comments."""
        content = '''/* A comment */
"key" = "value";'''
        entries = parser.parse(content)
        assert len(entries) == 1
        assert entries[0].comment == "A comment"
        assert entries[0].line == 2

    def test_parse_line_comment(self, parser):
        """Test // comments attach to the next entry."""
        content = '''// Shown in the title bar
"title" = "Stringsgen";'''
        entries = parser.parse(content)
        assert entries[0].comment == "Shown in the title bar"

    def test_comment_applies_to_next_entry_only(self, parser):
        """Test a comment is not carried over to later entries."""
        content = '''/* First */
"key1" = "value1";
"key2" = "value2";'''
        entries = parser.parse(content)
        assert entries[0].comment == "First"
        assert entries[1].comment is None

    def test_parse_multiple_entries_in_order(self, parser):
        """Test parsing keeps table order and line numbers."""
        content = '''
"key3" = "value3";
"key1" = "value1";

"key2" = "value2";
'''
        entries = parser.parse(content)
        assert [e.key for e in entries] == ["key3", "key1", "key2"]
        assert [e.line for e in entries] == [2, 3, 5]

    def test_parse_multiline_entry(self, parser):
        """Test an entry spanning several lines."""
        content = '''"first" = "one";
"multi" =
    "two";
"last" = "three";'''
        entries = parser.parse(content)
        assert [e.key for e in entries] == ["first", "multi", "last"]
        assert entries[1].template == "two"
        assert entries[2].line == 4

    def test_parse_escaped_values(self, parser):
        """Test parsing escaped values."""
        entries = parser.parse(r'"test" = "Line1\nLine2";')
        assert entries[0].template == "Line1\nLine2"

    def test_parse_quoted_values(self, parser):
        """Test parsing values with escaped quotes."""
        entries = parser.parse(r'"test" = "She said \"Hello\"";')
        assert entries[0].template == 'She said "Hello"'

    def test_parse_unexpected_content(self, parser):
        """Test text that is neither entry nor comment is rejected."""
        content = '''"key" = "value";
garbage here'''
        with pytest.raises(TableFormatError) as exc_info:
            parser.parse(content)
        assert exc_info.value.line == 2

    def test_parse_unterminated_comment(self, parser):
        """Test an unterminated comment is rejected."""
        with pytest.raises(TableFormatError):
            parser.parse('/* never closed\n"key" = "value";')

    def test_parse_table_duplicate_key(self, parser):
        """Test duplicate keys are fatal."""
        content = '''"apples.count" = "%d apples";
"apples.count" = "%d more apples";'''
        with pytest.raises(DuplicateKeyError) as exc_info:
            parser.parse_table(content, name="Localizable")
        assert exc_info.value.key == "apples.count"
        assert exc_info.value.line == 2
        assert exc_info.value.first_line == 1

    def test_parse_table_malformed_key(self, parser):
        """Test keys with empty segments are rejected with their line."""
        content = '''"ok" = "fine";
"apples..count" = "%d apples";'''
        with pytest.raises(MalformedKeyError) as exc_info:
            parser.parse_table(content, name="Localizable")
        assert exc_info.value.key == "apples..count"
        assert exc_info.value.line == 2

    def test_parse_table_invalid_characters(self, parser):
        """Test keys with spaces are malformed."""
        with pytest.raises(MalformedKeyError):
            parser.parse_table('"Hello World" = "Hello";', name="Localizable")

    def test_parse_file_utf8(self, parser, tmp_path):
        """Test reading a UTF-8 file names the table after its stem."""
        path = tmp_path / "Localizable.strings"
        path.write_text('/* Application name */\n"app_name" = "Café";\n', encoding='utf-8')

        table = parser.parse_file(path)
        assert table.name == "Localizable"
        assert table.path == path
        assert table.entries[0].template == "Café"
        assert table.entries[0].comment == "Application name"

    def test_parse_file_utf16(self, parser, tmp_path):
        """Test reading a UTF-16 file with BOM."""
        path = tmp_path / "Localizable.strings"
        path.write_bytes('"greeting" = "Hello!";\n'.encode('utf-16'))

        table = parser.parse_file(path)
        assert [e.key for e in table.entries] == ["greeting"]

    def test_parse_file_error_has_path(self, parser, tmp_path):
        """Test errors raised while parsing a file carry its path."""
        path = tmp_path / "Localizable.strings"
        path.write_text('"a" = "1";\n"a" = "2";\n', encoding='utf-8')

        with pytest.raises(DuplicateKeyError) as exc_info:
            parser.parse_file(path)
        assert exc_info.value.path == path
