"""
HTML page handling for the highlighter.
Finds the code elements of a page, replaces their content with highlighted
source and wraps the result in <pre><code>.
"""

from lxml import etree
from lxml import html as lxml_html
from typing import List, Dict, Optional
from dataclasses import dataclass
from pathlib import Path


DEFAULT_ATTRIBUTE = 'data-js'
DEFAULT_VALUE = 'code'


@dataclass
class CodeBlock:
    """An element whose HTML content is shown as highlighted source."""
    element: etree._Element

    def get_source_html(self) -> str:
        """
        Serialize the element's content (its inner HTML).

        The element itself is serialized and its own start and end tags are
        cut off, so text, children and comments keep their markup.
        """
        content = etree.tostring(self.element, encoding='unicode', method='html', with_tail=False)

        start_tag_end = content.find('>')
        end_tag_start = content.rfind(f'</{self.element.tag}>')

        if start_tag_end >= 0 and end_tag_start > start_tag_end:
            return content[start_tag_end + 1:end_tag_start]

        return ""

    def set_content_html(self, html: str) -> None:
        """Replace the element's content with an HTML fragment. Attributes and tail are kept."""
        for child in list(self.element):
            self.element.remove(child)
        self.element.text = None

        if not html:
            return

        wrapper = lxml_html.fragment_fromstring(html, create_parent='div')
        self.element.text = wrapper.text
        for child in list(wrapper):
            self.element.append(child)

    def wrap_with_pre_code(self) -> None:
        """Move the element's content into a new <pre><code> pair."""
        pre = lxml_html.Element('pre')
        code = lxml_html.Element('code')
        pre.append(code)

        code.text = self.element.text
        self.element.text = None
        for child in list(self.element):
            code.append(child)

        self.element.append(pre)

    def is_wrapped(self) -> bool:
        return (not (self.element.text or '').strip()
                and len(self.element) == 1
                and self.element[0].tag == 'pre'
                and len(self.element[0]) == 1
                and self.element[0][0].tag == 'code')


class HTMLDocument:
    """
    An HTML page loaded with lxml.
    Code elements are selected by attribute, e.g. <div data-js="code">.
    """

    def __init__(self, file_path: Optional[str] = None):
        self.file_path = Path(file_path) if file_path else None
        self.tree: Optional[etree._ElementTree] = None
        self.root: Optional[etree._Element] = None
        self._source: Optional[str] = None

    @classmethod
    def from_string(cls, html: str) -> 'HTMLDocument':
        """Create a document from markup instead of a file. Call parse() afterwards."""
        document = cls()
        document._source = html
        return document

    def parse(self) -> bool:
        """
        Parse the page.
        Returns True if successful, False otherwise.
        """
        try:
            source = self._source
            if source is None:
                source = self.file_path.read_text(encoding='utf-8')

            # No default doctype, so pages without one are saved without one
            parser = lxml_html.HTMLParser(remove_blank_text=False, default_doctype=False)
            self.root = lxml_html.document_fromstring(source, parser=parser)
            self.tree = self.root.getroottree()

            return True

        except Exception as e:
            print(f"Error parsing HTML document: {e}")
            return False

    def find_code_blocks(self,
                         attribute: str = DEFAULT_ATTRIBUTE,
                         value: str = DEFAULT_VALUE) -> List[CodeBlock]:
        """All elements whose attribute equals value, in document order."""
        if self.root is None:
            return []
        return [CodeBlock(element)
                for element in self.root.xpath(f'//*[@{attribute}=$value]', value=value)]

    def highlight_code_blocks(self,
                              highlighter,
                              wrap: bool = True,
                              attribute: str = DEFAULT_ATTRIBUTE,
                              value: str = DEFAULT_VALUE) -> int:
        """
        Highlight every code block, then wrap each one in <pre><code>.

        All blocks are colored before any is wrapped: the highlighter must see
        the raw content, never the pre/code pair.

        Args:
            highlighter: Object with a highlight(text) -> str method
            wrap: Wrap the highlighted content in <pre><code>
            attribute: Attribute that marks code blocks
            value: Value the attribute must have

        Returns:
            Number of blocks highlighted
        """
        blocks = self.find_code_blocks(attribute, value)

        for block in blocks:
            block.set_content_html(highlighter.highlight(block.get_source_html()))

        if wrap:
            for block in blocks:
                block.wrap_with_pre_code()

        return len(blocks)

    def to_string(self) -> str:
        doctype = self.tree.docinfo.doctype or None
        return lxml_html.tostring(self.root, encoding='unicode', doctype=doctype)

    def save(self, output_path: Optional[str] = None) -> bool:
        """
        Save the page.
        If output_path is None, overwrites the original file.
        """
        try:
            save_path = Path(output_path) if output_path else self.file_path
            save_path.write_text(self.to_string(), encoding='utf-8')
            return True

        except Exception as e:
            print(f"Error saving HTML document: {e}")
            return False

    def get_statistics(self,
                       attribute: str = DEFAULT_ATTRIBUTE,
                       value: str = DEFAULT_VALUE) -> Dict[str, int]:
        """Get statistics about the code blocks of the page."""
        blocks = self.find_code_blocks(attribute, value)
        stats = {
            'total_blocks': len(blocks),
            'wrapped_blocks': sum(1 for b in blocks if b.is_wrapped()),
            'empty_blocks': sum(1 for b in blocks if not b.get_source_html().strip())
        }
        return stats
