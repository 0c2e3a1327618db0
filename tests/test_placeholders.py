"""Tests for placeholder analysis."""

import pytest

from stringsgen.analysis import PlaceholderKind, PlaceholderSpec, analyze_template
from stringsgen.errors import NonContiguousIndicesError, UnsupportedDirectiveError

INTEGER = PlaceholderKind.INTEGER
FLOAT = PlaceholderKind.FLOAT
STRING = PlaceholderKind.STRING
OBJECT = PlaceholderKind.OBJECT


def kinds(template):
    return [spec.kind for spec in analyze_template(template)]


class TestAnalyzeTemplate:
    """Tests for analyze_template."""

    def test_no_placeholders(self):
        """Test plain text has no placeholders."""
        assert analyze_template("Some alert body there") == ()

    def test_single_integer(self):
        """Test the apples example."""
        assert analyze_template("You have %d apples") == (PlaceholderSpec(1, INTEGER),)

    def test_integer_then_object(self):
        """Test the bananas example."""
        specs = analyze_template("Those %d bananas belong to %@.")
        assert specs == (PlaceholderSpec(1, INTEGER), PlaceholderSpec(2, OBJECT))

    def test_escaped_percent(self):
        """Test %% is a literal percent sign."""
        assert analyze_template("This is a %% character.") == ()
        assert kinds("%d%% done") == [INTEGER]

    @pytest.mark.parametrize("template, expected", [
        ("%i %u %x %X %o", [INTEGER] * 5),
        ("%ld %lld %lu %hhd %zd %qd", [INTEGER] * 6),
        ("%f %.2f %5.1f %e %g %A", [FLOAT] * 6),
        ("%s %S", [STRING] * 2),
        ("%c %C %p", [INTEGER] * 3),
        ("%@ %@", [OBJECT] * 2),
        ("%-5d %+d %05d % d %#x", [INTEGER] * 5),
    ])
    def test_conversion_table(self, template, expected):
        """Test conversion characters map to their kinds."""
        assert kinds(template) == expected

    def test_positional_placeholders_sorted_by_index(self):
        """Test positional directives are returned in index order."""
        specs = analyze_template("%2$@ owns %1$d bananas")
        assert specs == (PlaceholderSpec(1, INTEGER), PlaceholderSpec(2, OBJECT))

    def test_positional_with_format(self):
        """Test positional directives with flags and precision."""
        assert kinds("%1$.2f and %2$05ld") == [FLOAT, INTEGER]

    @pytest.mark.parametrize("count", [1, 2, 5, 12])
    def test_contiguous_positions(self, count):
        """Test N contiguous positions yield exactly N placeholders."""
        template = " ".join(f"%{i}$d" for i in reversed(range(1, count + 1)))
        specs = analyze_template(template)
        assert [spec.index for spec in specs] == list(range(1, count + 1))

    def test_gap_in_positions(self):
        """Test a missing position is fatal."""
        with pytest.raises(NonContiguousIndicesError) as exc_info:
            analyze_template("%1$d and %3$d", key="gap.key")
        assert exc_info.value.indices == [1, 3]
        assert exc_info.value.key == "gap.key"

    def test_repeated_position(self):
        """Test a repeated position is fatal."""
        with pytest.raises(NonContiguousIndicesError):
            analyze_template("%1$@ and %1$@")

    def test_positions_not_starting_at_one(self):
        """Test positions must start at 1."""
        with pytest.raises(NonContiguousIndicesError):
            analyze_template("%2$d")

    def test_mixed_positional_and_sequential(self):
        """Test mixing positional and sequential directives is fatal."""
        with pytest.raises(NonContiguousIndicesError):
            analyze_template("%1$d and %@")

    def test_unsupported_conversion(self):
        """Test an unknown conversion character."""
        with pytest.raises(UnsupportedDirectiveError) as exc_info:
            analyze_template("Value: %y", key="value.key")
        assert exc_info.value.directive == "%y"
        assert exc_info.value.position == 7
        assert exc_info.value.key == "value.key"

    def test_trailing_percent(self):
        """Test a lone percent sign at the end."""
        with pytest.raises(UnsupportedDirectiveError) as exc_info:
            analyze_template("100%")
        assert exc_info.value.position == 3

    def test_star_width(self):
        """Test * width is not supported."""
        with pytest.raises(UnsupportedDirectiveError):
            analyze_template("%*d")
