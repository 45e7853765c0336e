import os
from dataclasses import dataclass
from datetime import datetime, timezone

from tstranslate.classes import Catalog, PluralEntry


@dataclass
class PoHeader:
    project_id_version: str = "InvitYou V2.2"
    language_team: str = "InvitYou <contact@invityou.com>"
    language: str = "en"


def format_timestamp(timestamp: datetime) -> str:
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return timestamp.strftime("%Y-%m-%dT%H:%M:%S.") + f"{timestamp.microsecond // 1000:03d}Z"


def escape_po(text: str) -> str:
    # Only double quotes are escaped, newlines and backslashes pass through
    return text.replace('"', '\\"')


def render_header(header: PoHeader, timestamp: datetime) -> str:
    lines = [
        'msgid ""',
        'msgstr ""',
        f'"Project-Id-Version: {header.project_id_version}\\n"',
        f'"POT-Creation-Date: {format_timestamp(timestamp)}\\n"',
        f'"Language-Team: {header.language_team}\\n"',
        f'"Language: {header.language}\\n"',
        '"MIME-Version: 1.0\\n"',
        '"Content-Type: text/plain; charset=UTF-8\\n"',
        '"Content-Transfer-Encoding: 8bit\\n"',
        '"Plural-Forms: nplurals=2; plural=(n != 1);\\n"',
    ]
    return "\n".join(lines) + "\n"


def render(
    catalog: Catalog,
    timestamp: datetime,
    *,
    header: PoHeader | None = None,
    base_path: str | None = None,
) -> str:
    """Render the catalog as a gettext PO file.

    Every entry gets one ``#:`` comment per recorded location, with the path
    made relative to ``base_path`` (the current working directory when not
    given), followed by its msgid block and a blank line.
    """
    if header is None:
        header = PoHeader()
    if base_path is None:
        base_path = os.getcwd()

    output = render_header(header, timestamp) + "\n"
    for key, entry in catalog.items():
        for location in entry.locations:
            output += f"#: {os.path.relpath(location.file, base_path)}\n"

        if isinstance(entry, PluralEntry):
            output += f'msgid "{escape_po(entry.singular)}"\n'
            output += f'msgid_plural "{escape_po(entry.plural)}"\n'
            output += 'msgstr[0] ""\n'
            output += 'msgstr[1] ""\n'
        else:
            output += f'msgid "{escape_po(key)}"\n'
            output += 'msgstr ""\n'

        output += "\n"
    return output
