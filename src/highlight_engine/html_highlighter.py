"""
Syntax highlighter for HTML source text.
Escapes the source and wraps tags, attributes, comments and text in <span> markers.
"""

import re
import regex  # More powerful regex library with better Unicode support
from typing import Optional
from dataclasses import dataclass

from styles.style_classes import StyleClassMap, STYLE_CLASSES

# What a browser counts as whitespace. Both re's \s and str.isspace() also
# accept \x1c-\x1f, which would strip characters a browser keeps.
WHITESPACE = r'[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]'


@dataclass
class TagMatch:
    """A tag found in escaped text, split into its structural parts."""
    opening_bracket: str  # '&lt;' or '&lt;/'
    name: str
    attributes: str  # raw attribute region, may be empty
    self_closing_slash: str  # '/' or ''
    closing_bracket: str

    @classmethod
    def from_match(cls, match) -> 'TagMatch':
        return cls(*match.groups())


@dataclass
class AttributeMatch:
    """One name=value pair inside a tag's attribute region."""
    whitespace: str
    name: str
    equal_sign: str
    quoted_value: Optional[str]  # quotes included, None when no quoted value follows '='

    @classmethod
    def from_match(cls, match) -> 'AttributeMatch':
        return cls(*match.groups())


class HTMLHighlighter:
    """
    Turns raw HTML source into escaped, annotated HTML.

    The passes always run in the same order: dedent, escape, comments, text, tags.
    Comments go first so each one is a single span before the text and tag
    passes run. Tag-shaped text inside a comment is still colored by the tag pass.
    """

    ESCAPED_LT = "&lt;"
    ESCAPED_GT = "&gt;"
    COMMENT_OPEN = "&lt;!--"

    def __init__(self, style_classes: StyleClassMap = STYLE_CLASSES, use_advanced_regex: bool = True):
        """
        Initialize highlighter.

        Args:
            style_classes: Class names used for each token kind
            use_advanced_regex: Use 'regex' library instead of 're' for better Unicode support.
                Whitespace is matched with an explicit class, so both give the same output.
        """
        self.style_classes = style_classes
        self.regex_module = regex if use_advanced_regex else re

        self._leading_blank_pattern = self.regex_module.compile(r'^%s*\n' % WHITESPACE)
        self._trailing_space_pattern = self.regex_module.compile(r'%s+\Z' % WHITESPACE)
        self._blank_pattern = self.regex_module.compile(r'%s*\Z' % WHITESPACE)
        self._indent_pattern = self.regex_module.compile(r'^[\t ]*')
        self._comment_pattern = self.regex_module.compile(r'(&lt;!--[\s\S]*?--&gt;)')
        self._text_pattern = self.regex_module.compile(r'(&gt;)([^&]+?)(&lt;)')
        self._tag_pattern = self.regex_module.compile(
            r'(&lt;/?)([a-zA-Z0-9\-]+)([\s\S]*?)(/?)(&gt;)')
        self._attribute_pattern = self.regex_module.compile(
            r'(%s+)([a-zA-Z\-:]+)(=)("[^"]*"|\'[^\']*\')?' % WHITESPACE)

    def highlight(self, text: str) -> str:
        """
        Run the full pipeline on raw HTML source.

        Args:
            text: HTML source, as found inside the code element

        Returns:
            Escaped HTML with every token wrapped in a style marker
        """
        html = self.dedent(text)
        html = self.escape(html)
        html = self.color_comments(html)
        html = self.color_text(html)
        html = self.color_tags(html)
        return html

    def wrap(self, kind: str, content: str) -> str:
        """Wrap content in the span for a token kind."""
        return f'<span class="{self.style_classes.class_for(kind)}">{content}</span>'

    def _is_blank(self, text: str) -> bool:
        return self._blank_pattern.match(text) is not None

    def dedent(self, text: str) -> str:
        """
        Drop the leading blank line and trailing whitespace, then remove the
        indentation shared by all non-blank lines.

        Relative indentation between lines is preserved. Whitespace-only
        lines do not count towards the shared indent but are stripped by it.
        """
        cleaned = self._leading_blank_pattern.sub('', str(text), count=1)
        cleaned = self._trailing_space_pattern.sub('', cleaned)

        lines = cleaned.split('\n')
        non_empty_lines = [line for line in lines if not self._is_blank(line)]
        if not non_empty_lines:
            return ""

        smallest_indent = min(
            self._indent_pattern.match(line).end() for line in non_empty_lines)
        strip_pattern = self.regex_module.compile(r'^[\t ]{0,%d}' % smallest_indent)

        return '\n'.join(strip_pattern.sub('', line, count=1) for line in lines)

    def escape(self, text: str) -> str:
        """
        Escape < and > so the browser shows the source instead of rendering it.

        & is left alone: escaping it would double-escape entities already
        written in the source.
        """
        return text.replace("<", self.ESCAPED_LT).replace(">", self.ESCAPED_GT)

    def color_comments(self, text: str) -> str:
        """Wrap each escaped comment, delimiters included, in the comment marker."""
        return self._comment_pattern.sub(
            lambda match: self.wrap('comment', match.group(1)), text)

    def color_text(self, text: str) -> str:
        """
        Wrap text runs found between a closing and an opening bracket.

        Whitespace-only runs are left as they are. So is a run whose closing
        bracket starts a comment: such a run has already swallowed the opening
        of the comment span, so the check looks at the seven characters at the
        bracket rather than parsing the comment.

        The bracket is located from the first occurrence of the matched run
        in the text, not from the match itself. Identical earlier runs
        therefore decide for later ones, e.g. both "Hi" in
        "<p>Hi</p><p>Hi<!-- c" are colored.
        """
        def replace(match):
            tag_closing_bracket, content, tag_opening_bracket = match.groups()
            if self._is_blank(content):
                return match.group(0)

            run = match.group(0)
            bracket_start = text.find(run) + len(run) - len(self.ESCAPED_LT)
            if text[bracket_start:bracket_start + len(self.COMMENT_OPEN)] == self.COMMENT_OPEN:
                return match.group(0)

            return tag_closing_bracket + self.wrap('text', content) + tag_opening_bracket

        return self._text_pattern.sub(replace, text)

    def color_tags(self, text: str) -> str:
        """
        Wrap brackets, names and attributes of every escaped tag.

        The attribute region is matched lazily, so the first closing bracket
        ends the tag.
        """
        return self._tag_pattern.sub(
            lambda match: self._render_tag(TagMatch.from_match(match)), text)

    def _render_tag(self, tag: TagMatch) -> str:
        parts = [
            self.wrap('tag', tag.opening_bracket),
            self.wrap('tag_name', tag.name),
            self.color_attributes(tag.attributes),
        ]
        if tag.self_closing_slash:
            parts.append(self.wrap('tag', tag.self_closing_slash))
        parts.append(self.wrap('tag', tag.closing_bracket))
        return ''.join(parts)

    def color_attributes(self, attrs: str) -> str:
        """
        Wrap name, equal sign and quoted value of each attribute.

        Boolean attributes (no '=') are not matched and pass through.
        Unquoted values are left outside any marker.
        """
        return self._attribute_pattern.sub(
            lambda match: self._render_attribute(AttributeMatch.from_match(match)), attrs)

    def _render_attribute(self, attribute: AttributeMatch) -> str:
        colored = attribute.whitespace
        colored += self.wrap('attribute_name', attribute.name)
        colored += self.wrap('equal_sign', attribute.equal_sign)
        if attribute.quoted_value:
            colored += self.wrap('attribute_value', attribute.quoted_value)
        return colored


_default_highlighter = HTMLHighlighter()


def highlight(text: str) -> str:
    """Highlight HTML source with the default class names."""
    return _default_highlighter.highlight(text)
