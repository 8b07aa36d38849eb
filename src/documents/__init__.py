"""HTML pages containing code blocks."""

from .html_document import HTMLDocument, CodeBlock

__all__ = ['HTMLDocument', 'CodeBlock']
