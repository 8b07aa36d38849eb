#!/usr/bin/env python3
"""
Command-line interface for the HTML source highlighter.
Highlights snippets and pages, and writes the matching stylesheet.
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from highlight_engine.html_highlighter import HTMLHighlighter
from documents.html_document import HTMLDocument, DEFAULT_ATTRIBUTE, DEFAULT_VALUE
from backup.backup_manager import BackupManager
from styles.style_classes import StyleClassMap, STYLE_CLASSES
from styles.theme_library import Theme, ThemeLibrary, build_stylesheet
import json


def _style_classes(args) -> StyleClassMap:
    prefix = getattr(args, 'class_prefix', None)
    return StyleClassMap.with_prefix(prefix) if prefix else STYLE_CLASSES


def _write_output(text: str, output_path) -> bool:
    if not output_path:
        print(text)
        return True
    try:
        Path(output_path).write_text(text, encoding='utf-8')
        return True
    except Exception as e:
        print(f"Failed to write {output_path}: {e}")
        return False


def highlight_command(args):
    """Highlight an HTML snippet read from a file or stdin."""
    try:
        if args.file == '-':
            source = sys.stdin.read()
        else:
            source = Path(args.file).read_text(encoding='utf-8')
    except Exception as e:
        print(f"Failed to read input: {e}")
        return 1

    highlighter = HTMLHighlighter(_style_classes(args))
    highlighted = highlighter.highlight(source)

    if args.json:
        print(json.dumps({
            'source': source,
            'highlighted': highlighted,
            'classes': highlighter.style_classes.to_dict()
        }, ensure_ascii=False, indent=2))
        return 0

    return 0 if _write_output(highlighted, args.output) else 1


def page_command(args):
    """Highlight every code block of an HTML page."""
    document = HTMLDocument(args.file)
    if not document.parse():
        if args.json:
            print(json.dumps({"error": "Failed to parse HTML file"}))
        else:
            print("Failed to parse HTML file")
        return 1

    highlighter = HTMLHighlighter(_style_classes(args))
    count = document.highlight_code_blocks(
        highlighter,
        wrap=not args.no_wrap,
        attribute=args.attribute,
        value=args.value
    )

    if count == 0:
        if args.json:
            print(json.dumps({'success': False, 'blocks': 0, 'output_path': None}))
        else:
            print(f'No [{args.attribute}="{args.value}"] elements found - file unchanged')
        return 0

    output_path = args.output if args.output else args.file

    # Backup only when the page itself is overwritten
    if not args.output and not args.no_backup:
        backup_path = BackupManager().create_backup(args.file)
        if backup_path:
            if not args.json:
                print(f"Backup created: {backup_path}")
        elif not args.json:
            print("Warning: Backup failed")

    if not document.save(output_path):
        print("Failed to save file")
        return 1

    if args.json:
        print(json.dumps({'success': True, 'blocks': count, 'output_path': output_path}))
    else:
        print(f"Highlighted {count} code block(s)")
        print(f"Saved to: {output_path}")

    return 0


def stylesheet_command(args):
    """Write the CSS for a theme."""
    library = ThemeLibrary(args.library)
    library.load_custom_themes()

    theme = library.get_theme_by_name(args.theme)
    if not theme:
        print(f"Theme '{args.theme}' not found")
        return 1

    css = build_stylesheet(theme, _style_classes(args))
    return 0 if _write_output(css.rstrip('\n'), args.output) else 1


def _parse_colors(pairs) -> dict:
    """Turn ['tag=#888', 'text=#000'] into a color dict."""
    colors = {}
    for pair in pairs or []:
        kind, _, color = pair.partition('=')
        if not color:
            raise ValueError(f"Expected KIND=COLOR, got '{pair}'")
        STYLE_CLASSES.class_for(kind.strip())  # raises KeyError for unknown kinds
        colors[kind.strip()] = color.strip()
    return colors


def themes_command(args):
    """Manage the theme library."""
    library = ThemeLibrary(args.library)
    library.load_custom_themes()

    if args.action == 'list':
        themes = library.list_themes()
        print(f"Themes ({len(themes)}):")
        print("─" * 60)
        for theme in themes:
            print(f"  {theme.name}")
            if theme.description:
                print(f"    {theme.description}")

    elif args.action == 'show':
        if not args.name:
            print("Error: --name required for show")
            return 1

        theme = library.get_theme_by_name(args.name)
        if not theme:
            print(f"Theme '{args.name}' not found")
            return 1

        print(json.dumps(theme.to_dict(), ensure_ascii=False, indent=2))

    elif args.action == 'add':
        if not args.name or not args.color:
            print("Error: --name and --color required for add")
            return 1

        try:
            colors = _parse_colors(args.color)
        except (ValueError, KeyError) as e:
            print(f"Invalid color: {e}")
            return 1

        new_theme = Theme(
            name=args.name,
            colors=colors,
            description=args.description or "",
            background=args.background
        )

        if library.add_theme(new_theme):
            if library.save_custom_themes():
                print(f"Theme '{args.name}' added successfully")
            else:
                print("Failed to save theme")
                return 1
        else:
            print("Failed to add theme (duplicate name?)")
            return 1

    elif args.action == 'remove':
        if not args.name:
            print("Error: --name required for remove")
            return 1

        if library.is_builtin(args.name):
            print(f"Built-in theme '{args.name}' cannot be removed")
            return 1

        if library.remove_theme(args.name):
            if library.save_custom_themes():
                print(f"Theme '{args.name}' removed")
            else:
                print("Failed to save changes")
                return 1
        else:
            print(f"Theme '{args.name}' not found")
            return 1

    return 0


def backup_command(args):
    """Manage backups."""
    backup_mgr = BackupManager()

    if args.action == 'list':
        backups = backup_mgr.list_backups(args.file)
        if backups:
            print(f"Backups for {args.file}:")
            for backup in backups:
                info = backup_mgr.get_backup_info(backup)
                print(f"  - {info['name']} ({info['size']} bytes, {info['modified']})")
        else:
            print("No backups found")

    elif args.action == 'restore':
        if not args.backup:
            print("Error: --backup argument required for restore")
            return 1
        if not backup_mgr.restore_backup(args.backup, args.file):
            print("Failed to restore backup")
            return 1

    elif args.action == 'cleanup':
        count = backup_mgr.cleanup_old_backups(args.file, keep_count=args.keep)
        print(f"Deleted {count} old backups")

    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='HTML Highlighter - Show HTML source as colored, escaped markup'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Highlight command
    highlight_parser = subparsers.add_parser('highlight', help='Highlight an HTML snippet')
    highlight_parser.add_argument('file', nargs='?', default='-', help='HTML file path (default: stdin)')
    highlight_parser.add_argument('--output', '-o', help='Output file (default: stdout)')
    highlight_parser.add_argument('--class-prefix', help='Class prefix (default: highlight-)')
    highlight_parser.add_argument('--json', action='store_true', help='Output as JSON')
    highlight_parser.set_defaults(func=highlight_command)

    # Page command
    page_parser = subparsers.add_parser('page', help='Highlight the code blocks of an HTML page')
    page_parser.add_argument('file', help='HTML page path')
    page_parser.add_argument('--output', '-o', help='Output file (default: overwrite input)')
    page_parser.add_argument('--attribute', default=DEFAULT_ATTRIBUTE,
                             help=f'Attribute marking code blocks (default: {DEFAULT_ATTRIBUTE})')
    page_parser.add_argument('--value', default=DEFAULT_VALUE,
                             help=f'Attribute value marking code blocks (default: {DEFAULT_VALUE})')
    page_parser.add_argument('--no-wrap', action='store_true', help='Do not wrap blocks in <pre><code>')
    page_parser.add_argument('--no-backup', action='store_true', help='Skip backup creation')
    page_parser.add_argument('--class-prefix', help='Class prefix (default: highlight-)')
    page_parser.add_argument('--json', action='store_true', help='Output as JSON')
    page_parser.set_defaults(func=page_command)

    # Stylesheet command
    stylesheet_parser = subparsers.add_parser('stylesheet', help='Write CSS for a theme')
    stylesheet_parser.add_argument('--theme', default='light', help='Theme name (default: light)')
    stylesheet_parser.add_argument('--class-prefix', help='Class prefix (default: highlight-)')
    stylesheet_parser.add_argument('--output', '-o', help='Output file (default: stdout)')
    stylesheet_parser.add_argument('--library', help='Custom theme library JSON file')
    stylesheet_parser.set_defaults(func=stylesheet_command)

    # Themes command
    themes_parser = subparsers.add_parser('themes', help='Manage theme library')
    themes_parser.add_argument('action', choices=['list', 'show', 'add', 'remove'], help='Theme action')
    themes_parser.add_argument('--name', help='Theme name')
    themes_parser.add_argument('--color', action='append', metavar='KIND=COLOR',
                               help='Token color, e.g. tag_name=#22863a (for add, repeatable)')
    themes_parser.add_argument('--background', help='Background color (for add)')
    themes_parser.add_argument('--description', help='Theme description (for add)')
    themes_parser.add_argument('--library', help='Custom theme library JSON file')
    themes_parser.set_defaults(func=themes_command)

    # Backup command
    backup_parser = subparsers.add_parser('backup', help='Manage backups')
    backup_parser.add_argument('action', choices=['list', 'restore', 'cleanup'],
                              help='Backup action')
    backup_parser.add_argument('file', help='Original file path')
    backup_parser.add_argument('--backup', help='Backup file to restore')
    backup_parser.add_argument('--keep', type=int, default=10,
                              help='Number of backups to keep (for cleanup)')
    backup_parser.set_defaults(func=backup_command)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
