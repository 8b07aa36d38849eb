"""
Theme library for highlighted HTML.
Ships a few built-in color schemes and turns any of them into a stylesheet
for the classes in StyleClassMap.
"""

import json
from pathlib import Path
from typing import List, Dict, Optional
from dataclasses import dataclass, asdict

from .style_classes import StyleClassMap, STYLE_CLASSES, TOKEN_KIND_ALIASES


@dataclass
class Theme:
    """A color scheme keyed by token kind."""
    name: str
    colors: Dict[str, str] = None
    description: str = ""
    background: Optional[str] = None
    font_family: str = "monospace"
    italic_comments: bool = True

    def __post_init__(self):
        if self.colors is None:
            self.colors = {}
        # Accept camelCase kinds from hand-written JSON
        self.colors = {TOKEN_KIND_ALIASES.get(k, k): v for k, v in self.colors.items()}

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'Theme':
        return cls(**data)


class ThemeLibrary:
    """
    Manages built-in and custom themes.
    Custom themes are kept in a JSON file and override built-ins of the same name.
    """

    def __init__(self, library_path: Optional[str] = None):
        """
        Initialize theme library.

        Args:
            library_path: Path to JSON file for custom themes.
                         If None, uses default location.
        """
        if library_path:
            self.library_path = Path(library_path)
        else:
            self.library_path = Path.home() / '.html_highlighter' / 'themes.json'

        self.themes: List[Theme] = []
        self._load_builtin_themes()
        self._builtin_names = {t.name for t in self.themes}

    def _load_builtin_themes(self):
        """Load the themes that ship with the tool."""
        self.themes.extend([
            Theme(
                name="light",
                description="Dark text on a light background",
                background="#fafafa",
                colors={
                    'tag': "#7a7a7a",
                    'tag_name': "#22863a",
                    'attribute_name': "#6f42c1",
                    'attribute_value': "#032f62",
                    'comment': "#6a737d",
                    'equal_sign': "#7a7a7a",
                    'text': "#24292e",
                },
            ),
            Theme(
                name="dark",
                description="Muted colors for dark pages",
                background="#1e1e1e",
                colors={
                    'tag': "#808080",
                    'tag_name': "#569cd6",
                    'attribute_name': "#9cdcfe",
                    'attribute_value': "#ce9178",
                    'comment': "#6a9955",
                    'equal_sign': "#d4d4d4",
                    'text': "#d4d4d4",
                },
            ),
            Theme(
                name="monochrome",
                description="Grayscale, for print",
                colors={
                    'tag': "#555555",
                    'tag_name': "#000000",
                    'attribute_name': "#333333",
                    'attribute_value': "#555555",
                    'comment': "#999999",
                    'equal_sign': "#555555",
                    'text': "#000000",
                },
            ),
        ])

    def load_custom_themes(self) -> bool:
        """Load custom themes from JSON file."""
        try:
            if not self.library_path.exists():
                return False

            with open(self.library_path, 'r', encoding='utf-8') as f:
                data = json.load(f)

            for theme_data in data.get('themes', []):
                theme = Theme.from_dict(theme_data)
                existing = self.get_theme_by_name(theme.name)
                if existing:
                    self.themes.remove(existing)
                self.themes.append(theme)

            return True

        except Exception as e:
            print(f"Error loading custom themes: {e}")
            return False

    def save_custom_themes(self) -> bool:
        """Save all themes to JSON file."""
        try:
            self.library_path.parent.mkdir(parents=True, exist_ok=True)

            data = {
                'themes': [t.to_dict() for t in self.themes]
            }

            with open(self.library_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            return True

        except Exception as e:
            print(f"Error saving themes: {e}")
            return False

    def add_theme(self, theme: Theme) -> bool:
        """Add a new theme to the library."""
        if self.get_theme_by_name(theme.name):
            print(f"Theme with name '{theme.name}' already exists")
            return False

        self.themes.append(theme)
        return True

    def is_builtin(self, name: str) -> bool:
        return name in self._builtin_names

    def remove_theme(self, name: str) -> bool:
        """Remove a custom theme by name. Built-in themes cannot be removed."""
        if self.is_builtin(name):
            print(f"Built-in theme '{name}' cannot be removed")
            return False

        theme = self.get_theme_by_name(name)
        if theme:
            self.themes.remove(theme)
            return True
        return False

    def get_theme_by_name(self, name: str) -> Optional[Theme]:
        for theme in self.themes:
            if theme.name == name:
                return theme
        return None

    def list_themes(self) -> List[Theme]:
        return list(self.themes)


def build_stylesheet(theme: Theme, style_classes: StyleClassMap = STYLE_CLASSES) -> str:
    """
    Render a theme as CSS rules for the highlight classes.

    Token kinds the theme has no color for get no rule.
    """
    rules = []

    container = [f"  font-family: {theme.font_family};", "  white-space: pre;"]
    if theme.background:
        container.append(f"  background: {theme.background};")
    rules.append('[data-js="code"] pre {\n' + "\n".join(container) + "\n}")

    for kind in style_classes.kinds():
        color = theme.colors.get(kind)
        if not color:
            continue
        body = [f"  color: {color};"]
        if kind == 'comment' and theme.italic_comments:
            body.append("  font-style: italic;")
        rules.append(f".{style_classes.class_for(kind)} {{\n" + "\n".join(body) + "\n}")

    return "\n\n".join(rules) + "\n"
