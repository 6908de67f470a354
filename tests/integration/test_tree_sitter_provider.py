"""Integration tests for the tree-sitter C# syntax provider."""

import pytest

pytest.importorskip("tree_sitter_c_sharp")

from force_feedback.analysis.scanner import SyntaxScanner  # noqa: E402
from force_feedback.analysis.tree_sitter_provider import (  # noqa: E402
    TreeSitterSyntaxProvider,
)
from force_feedback.models import DeclarationKind, TextSnapshot  # noqa: E402

pytestmark = pytest.mark.integration

SOURCE = """\
abstract class Shape
{
    public Shape(int sides)
    {
        Sides = sides;
    }

    public int Sides { get; }

    public abstract double Area();

    public int Doubled() => Sides * 2;

    public void Describe()
    {
        var name = "shape";
        Console.WriteLine(name);
        Console.WriteLine(Sides);
    }
}
"""


@pytest.fixture(scope="module")
def provider():
    return TreeSitterSyntaxProvider()


class TestTreeSitterSyntaxProvider:
    """Tests for TreeSitterSyntaxProvider against real C# source."""

    def test_reports_methods_and_constructors(self, provider):
        declarations = provider.collect_declarations(SOURCE)

        assert [(d.kind, d.name) for d in declarations] == [
            (DeclarationKind.CONSTRUCTOR, "Shape"),
            (DeclarationKind.METHOD, "Area"),
            (DeclarationKind.METHOD, "Doubled"),
            (DeclarationKind.METHOD, "Describe"),
        ]

    def test_only_block_bodies_count(self, provider):
        by_name = {d.name: d for d in provider.collect_declarations(SOURCE)}

        assert by_name["Area"].body_span is None
        assert by_name["Doubled"].body_span is None
        body = by_name["Describe"].body_span
        assert SOURCE[body.start] == "{"
        assert SOURCE[body.end - 1] == "}"

    def test_declaration_span_covers_header(self, provider):
        describe = next(
            d for d in provider.collect_declarations(SOURCE) if d.name == "Describe"
        )

        assert SOURCE[describe.span.start :].startswith("public void Describe()")
        assert describe.span.start in describe.child_positions

    def test_offsets_are_characters_not_bytes(self, provider):
        source = "// Größe ändern ✓\n" + SOURCE

        describe = next(
            d for d in provider.collect_declarations(source) if d.name == "Describe"
        )

        assert source[describe.span.start :].startswith("public void Describe()")
        assert source[describe.body_span.end - 1] == "}"

    @pytest.mark.asyncio
    async def test_scanner_line_counts(self, provider):
        regions = list(await SyntaxScanner(provider).scan(TextSnapshot(SOURCE, 3)))

        assert [(r.name, r.line_count) for r in regions] == [
            ("Shape", 3),
            ("Describe", 5),
        ]
