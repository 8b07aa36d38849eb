"""HTML syntax highlighting engine."""

from .html_highlighter import HTMLHighlighter, TagMatch, AttributeMatch, highlight

__all__ = ['HTMLHighlighter', 'TagMatch', 'AttributeMatch', 'highlight']
