"""Tests for the HTML document query layer."""

import pytest
from seo_grader.document import Document


class TestDocument:
    """Test cases for Document."""

    @pytest.fixture
    def document(self):
        """A small page with a few queryable elements."""
        return Document("""<!DOCTYPE html>
<html>
<head>
    <title>
        Coffee   Guide
    </title>
    <link rel="canonical stylesheet" href="https://example.com/">
</head>
<body>
    <p class="intro lead">First   paragraph
    spans lines.</p>
    <p>Second paragraph.</p>
    <img src="cup.jpg">
</body>
</html>""")

    def test_query_returns_matches_in_document_order(self, document):
        """Test that query returns every match in order."""
        paragraphs = document.query("p")
        assert len(paragraphs) == 2
        assert document.text(paragraphs[0]).startswith("First")

    def test_query_with_no_matches_returns_empty_list(self, document):
        """Test that a selector with no matches does not raise."""
        assert document.query("h1") == []
        assert document.first("h1") is None

    def test_text_collapses_whitespace(self, document):
        """Test that runs of whitespace and newlines become single spaces."""
        assert document.text("title") == "Coffee Guide"
        assert document.text("p.intro") == "First paragraph spans lines."

    def test_text_joins_multiple_elements(self, document):
        """Test that text of several matched elements is concatenated."""
        assert document.text("p") == "First paragraph spans lines. Second paragraph."

    def test_text_of_missing_selector_is_empty(self, document):
        """Test that text of an unmatched selector is an empty string."""
        assert document.text("h6") == ""

    def test_attribute_lookup(self, document):
        """Test attribute values, absent attributes and multi-valued attributes."""
        image = document.first("img")
        assert document.attribute(image, "src") == "cup.jpg"
        assert document.attribute(image, "alt") is None
        assert document.attribute(document.first("p"), "class") == "intro lead"

    def test_attribute_selector_matches_multi_valued_rel(self, document):
        """Test that rel tokens can still be matched by selector."""
        assert document.query('link[rel~="canonical"]')

    def test_starts_with_is_case_insensitive_and_ignores_leading_space(self):
        """Test the markup prefix check."""
        assert Document("<!DOCTYPE html><html></html>").starts_with("<!doctype html>")
        assert Document("\n   <!doctype HTML>\n<html></html>").starts_with("<!doctype html>")
        assert not Document("<html></html>").starts_with("<!doctype html>")

    def test_malformed_markup_does_not_raise(self):
        """Test that broken markup is parsed leniently."""
        document = Document("<html><body><h1>Unclosed <p>text <img src=x")
        assert len(document.query("h1")) == 1
        assert "Unclosed" in document.text("h1")

    def test_empty_and_plain_text_input(self):
        """Test that empty and non-HTML input produce a usable document."""
        assert Document("").query("title") == []
        assert Document("just some words").text("body") == "just some words"

    def test_text_includes_script_and_style_contents(self):
        """Test that inline script and style text count like any other text."""
        document = Document(
            "<html><body><p>coffee beans</p>\n"
            "<script>var coffee = 1;</script>\n"
            "<style>p { color: red }</style></body></html>"
        )
        assert document.text("body") == "coffee beans var coffee = 1; p { color: red }"

    def test_text_leaves_out_comments(self):
        """Test that HTML comments are not part of the text."""
        document = Document("<html><body><p>coffee</p><!-- hidden note --></body></html>")
        assert document.text("body") == "coffee"
