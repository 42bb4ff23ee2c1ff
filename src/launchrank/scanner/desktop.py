"""Parser for freedesktop.org ``.desktop`` entry files.

Only the ``[Desktop Entry]`` group is read. Localised keys (``Name[de]``)
are ignored; the unlocalised value is what gets indexed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from launchrank.models.entry import Entry

if TYPE_CHECKING:
    from pathlib import Path

_DESKTOP_ENTRY_GROUP = "[Desktop Entry]"


def parse_key_value(line: str) -> tuple[str, str] | None:
    key, sep, value = line.partition("=")
    if not sep:
        return None
    return key.strip(), value.strip()


def parse_categories(value: str) -> list[str]:
    return [cat.strip() for cat in value.split(";") if cat.strip()]


def parse_desktop_file(path: Path) -> Entry | None:
    """Parse one desktop file into an ``Entry``.

    Returns ``None`` for anything that should not be offered to the user:
    non-application types, ``NoDisplay``/``Hidden`` entries, and records
    missing a name or command. Raises ``OSError`` if the file cannot be read.
    """
    fields: dict[str, str | bool | list[str]] = {}
    in_desktop_entry = False
    is_application = False
    no_display = False
    hidden = False

    with open(path, encoding="utf-8", errors="replace") as f:
        for raw_line in f:
            line = raw_line.strip()

            if line == _DESKTOP_ENTRY_GROUP:
                in_desktop_entry = True
                continue
            if line.startswith("["):
                in_desktop_entry = False
                continue
            if not in_desktop_entry or not line or line.startswith("#"):
                continue

            parsed = parse_key_value(line)
            if parsed is None:
                continue
            key, value = parsed

            match key:
                case "Type":
                    is_application = value == "Application"
                case "Name":
                    fields["name"] = value
                case "GenericName":
                    fields["generic_name"] = value
                case "Comment":
                    fields["comment"] = value
                case "Exec":
                    fields["exec"] = value
                case "Icon":
                    fields["icon"] = value
                case "Terminal":
                    fields["terminal"] = value == "true"
                case "Categories":
                    fields["categories"] = parse_categories(value)
                case "NoDisplay":
                    no_display = value == "true"
                case "Hidden":
                    hidden = value == "true"

    if not is_application or no_display or hidden:
        return None

    try:
        return Entry(path=str(path), **fields)
    except ValidationError:
        return None
