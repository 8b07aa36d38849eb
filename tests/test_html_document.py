"""Tests for highlighting the code blocks of an HTML page."""

from __future__ import annotations

from pathlib import Path

from documents import CodeBlock, HTMLDocument
from highlight_engine import HTMLHighlighter

PAGE = """<!DOCTYPE html>
<html>
<head><title>Demo</title></head>
<body>
<div data-js="code"><p class="a">Hi</p></div>
<div class="other"><p>Not code</p></div>
<section data-js="code"><!-- note --><br/></section>
</body>
</html>
"""


def parsed(html: str) -> HTMLDocument:
    document = HTMLDocument.from_string(html)
    assert document.parse()
    return document


class RecordingHighlighter:
    """Highlighter stand-in that remembers its inputs."""

    def __init__(self) -> None:
        self.inputs: list[str] = []

    def highlight(self, text: str) -> str:
        self.inputs.append(text)
        return text


class TestCodeBlock:
    """Single-element operations."""

    def test_source_html_is_inner_html(self) -> None:
        block = parsed(PAGE).find_code_blocks()[0]
        assert block.get_source_html() == '<p class="a">Hi</p>'

    def test_comment_kept_in_source_html(self) -> None:
        block = parsed(PAGE).find_code_blocks()[1]
        assert block.get_source_html().startswith("<!-- note -->")

    def test_set_content_keeps_attributes(self) -> None:
        document = parsed(PAGE)
        block = document.find_code_blocks()[0]
        block.set_content_html('lead <b>bold</b> tail')
        assert block.element.get("data-js") == "code"
        assert block.get_source_html() == "lead <b>bold</b> tail"

    def test_set_empty_content(self) -> None:
        block = parsed(PAGE).find_code_blocks()[0]
        block.set_content_html("")
        assert block.get_source_html() == ""

    def test_wrap_with_pre_code(self) -> None:
        block = parsed(PAGE).find_code_blocks()[0]
        assert not block.is_wrapped()
        block.wrap_with_pre_code()
        assert block.is_wrapped()
        assert block.get_source_html() == '<pre><code><p class="a">Hi</p></code></pre>'


class TestHTMLDocument:
    """Page-level operations."""

    def test_finds_only_marked_elements(self) -> None:
        blocks = parsed(PAGE).find_code_blocks()
        assert [b.element.tag for b in blocks] == ["div", "section"]
        assert all(isinstance(b, CodeBlock) for b in blocks)

    def test_custom_selector(self) -> None:
        blocks = parsed(PAGE).find_code_blocks(attribute="class", value="other")
        assert len(blocks) == 1

    def test_highlight_and_wrap(self) -> None:
        document = parsed(PAGE)
        assert document.highlight_code_blocks(HTMLHighlighter()) == 2

        output = document.to_string()
        assert ('<div data-js="code"><pre><code><span class="highlight-tag">&lt;</span>'
                '<span class="highlight-tag-name">p</span>') in output
        assert '<span class="highlight-text">Hi</span>' in output
        assert '<span class="highlight-comment">&lt;!-- note --&gt;' in output
        assert '<div class="other"><p>Not code</p></div>' in output

        stats = document.get_statistics()
        assert stats["total_blocks"] == 2
        assert stats["wrapped_blocks"] == 2

    def test_highlighter_never_sees_pre_code(self) -> None:
        recorder = RecordingHighlighter()
        parsed(PAGE).highlight_code_blocks(recorder)
        assert len(recorder.inputs) == 2
        assert not any("<pre>" in text for text in recorder.inputs)

    def test_no_wrap(self) -> None:
        document = parsed(PAGE)
        document.highlight_code_blocks(HTMLHighlighter(), wrap=False)
        assert "<pre>" not in document.to_string()
        assert document.get_statistics()["wrapped_blocks"] == 0

    def test_empty_block_statistics(self) -> None:
        document = parsed('<div data-js="code"></div><div data-js="code">x</div>')
        stats = document.get_statistics()
        assert stats == {"total_blocks": 2, "wrapped_blocks": 0, "empty_blocks": 1}

    def test_save_keeps_doctype(self, tmp_path: Path) -> None:
        page = tmp_path / "page.html"
        page.write_text(PAGE, encoding="utf-8")

        document = HTMLDocument(str(page))
        assert document.parse()
        document.highlight_code_blocks(HTMLHighlighter())
        assert document.save()

        saved = page.read_text(encoding="utf-8")
        assert saved.startswith("<!DOCTYPE html>")
        assert "highlight-tag-name" in saved

    def test_save_to_other_path(self, tmp_path: Path) -> None:
        document = parsed(PAGE)
        out = tmp_path / "out.html"
        assert document.save(str(out))
        assert out.exists()

    def test_missing_file_fails_to_parse(self, tmp_path: Path) -> None:
        assert HTMLDocument(str(tmp_path / "missing.html")).parse() is False

    def test_unparsed_document_has_no_blocks(self) -> None:
        assert HTMLDocument.from_string(PAGE).find_code_blocks() == []
