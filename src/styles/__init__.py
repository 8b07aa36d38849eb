"""Style classes and themes for highlighted HTML."""

from .style_classes import StyleClassMap, STYLE_CLASSES
from .theme_library import Theme, ThemeLibrary, build_stylesheet

__all__ = ['StyleClassMap', 'STYLE_CLASSES', 'Theme', 'ThemeLibrary', 'build_stylesheet']
