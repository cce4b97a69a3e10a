"""Entry point for `python -m themeramp`."""

from __future__ import annotations

import argparse
import sys

from themeramp.errors import ThemeError, format_error_for_user
from themeramp.themes.loader import parse_color_reference
from themeramp.themes.schema import ColorReference


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="themeramp", description="Inspect and edit UI color themes.")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List every theme")

    show = commands.add_parser("show", help="Print the resolved colors of a theme")
    show.add_argument("family", nargs="?")
    show.add_argument("theme", nargs="?")

    current = commands.add_parser("current", help="Show or change the current theme")
    current.add_argument("family", nargs="?")
    current.add_argument("theme", nargs="?")

    edit = commands.add_parser("edit", help="Change one UI color of a theme")
    edit.add_argument("family")
    edit.add_argument("theme")
    edit.add_argument("identifier")
    edit.add_argument("value", help="'scale.index', 'scale.alpha.index' or 'h,s,l,a'")
    return parser


def _parse_value(text: str) -> ColorReference:
    if "," in text:
        return parse_color_reference([float(part) for part in text.split(",")], "value")
    return parse_color_reference(text, "value")


def run(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    from themeramp.app import create_theme_service

    service = create_theme_service()
    try:
        if args.command == "list":
            current = service.current_theme()
            for row in service.available_themes():
                marker = "*" if row.ref == current else " "
                print(f"{marker} {row.family} / {row.theme} ({row.appearance.value}, {row.provenance.value})")
        elif args.command == "show":
            colors = service.resolved_colors(args.family, args.theme)
            for identifier, color in colors.items():
                h, s, l, a = color.to_tuple()
                print(f"{identifier:<34} hsla({h:.3f}, {s:.3f}, {l:.3f}, {a:.3f})")
        elif args.command == "current":
            if args.family and args.theme:
                ok, message = service.set_current_theme(args.family, args.theme)
                print(message)
                return 0 if ok else 1
            ref = service.current_theme()
            print(f"{ref.family} / {ref.theme}")
        elif args.command == "edit":
            edited = service.edit_color(
                args.identifier,
                _parse_value(args.value),
                family=args.family,
                theme=args.theme,
            )
            print(f"Saved {edited.family} / {edited.name} to {service.theme_path(edited.family)}")
    except ThemeError as exc:
        print(format_error_for_user(exc), file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Invalid value: {exc}", file=sys.stderr)
        return 2
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
