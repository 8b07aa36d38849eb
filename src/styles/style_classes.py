"""
CSS class names emitted around each highlighted token.
Stylesheets bind colors to these seven classes.
"""

from dataclasses import dataclass, fields
from typing import Dict, List


# camelCase token kind names used in stylesheets and JSON theme files
TOKEN_KIND_ALIASES = {
    'tag': 'tag',
    'tagName': 'tag_name',
    'attributeName': 'attribute_name',
    'attributeValue': 'attribute_value',
    'comment': 'comment',
    'equalSign': 'equal_sign',
    'text': 'text',
}


@dataclass(frozen=True)
class StyleClassMap:
    """Maps each token kind to the class used to wrap it."""
    tag: str = "highlight-tag"                          # < and > around tags
    tag_name: str = "highlight-tag-name"
    attribute_name: str = "highlight-attribute-name"
    attribute_value: str = "highlight-attribute-value"  # quotes included
    comment: str = "highlight-comment"
    equal_sign: str = "highlight-equal-sign"
    text: str = "highlight-text"                        # plain text between tags

    @classmethod
    def with_prefix(cls, prefix: str) -> 'StyleClassMap':
        """
        Build a map whose classes use a different prefix.

        Args:
            prefix: Class prefix, e.g. "hl-" gives "hl-tag", "hl-tag-name", ...

        Returns:
            New StyleClassMap
        """
        return cls(**{
            name: prefix + default[len("highlight-"):]
            for name, default in cls().to_dict().items()
        })

    @staticmethod
    def kinds() -> List[str]:
        """Token kinds in declaration order."""
        return [f.name for f in fields(StyleClassMap)]

    def class_for(self, kind: str) -> str:
        """Class for a token kind, accepting 'tag_name' or 'tagName'."""
        name = TOKEN_KIND_ALIASES.get(kind, kind)
        if name not in self.kinds():
            raise KeyError(f"Unknown token kind: {kind}")
        return getattr(self, name)

    def to_dict(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in self.kinds()}


STYLE_CLASSES = StyleClassMap()
