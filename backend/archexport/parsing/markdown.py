"""
Markdown helpers for vault documents.

Pure text -> structure functions. None of them raise on malformed input:
anything that does not match a recognised shape is skipped.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

TableRow = Dict[str, str]

FRONT_MATTER_RE = re.compile(r"---\n(.*?)\n---", re.DOTALL)
SEPARATOR_RE = re.compile(r"^[\s|:-]+$")
HEADING_RE = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$")
QUOTE_RE = re.compile(r"^[\"']|[\"']$")


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def parse_front_matter(text: str) -> Dict[str, str]:
    """
    Parse the leading ``---`` block into a flat key/value map.

    Only the first colon splits a line, so values may contain colons
    (timestamps, URLs). Lines without a colon are ignored.
    """
    match = FRONT_MATTER_RE.match(normalize_newlines(text))
    if not match:
        return {}

    result: Dict[str, str] = {}
    for line in match.group(1).split("\n"):
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        value = QUOTE_RE.sub("", value.strip())
        if key and value:
            result[key] = value
    return result


def _is_table_line(line: str) -> bool:
    return line.startswith("|") and line.endswith("|")


def _is_header_line(line: str) -> bool:
    return _is_table_line(line) and len(line.split("|")) >= 3


def _is_separator_line(line: str) -> bool:
    return line.startswith("|") and bool(SEPARATOR_RE.match(line))


def parse_tables(text: str) -> List[List[TableRow]]:
    """
    Parse every pipe table into a list of rows keyed by header.

    A short row is padded with empty strings for the missing trailing
    columns. Tables without data rows are dropped.
    """
    tables: List[List[TableRow]] = []
    lines = normalize_newlines(text).split("\n")

    i = 0
    while i < len(lines):
        line = lines[i].strip()
        next_line = lines[i + 1].strip() if i + 1 < len(lines) else ""

        if not (_is_header_line(line) and _is_separator_line(next_line)):
            i += 1
            continue

        headers = [h.strip() for h in line.split("|") if h.strip()]
        rows: List[TableRow] = []

        j = i + 2
        while j < len(lines):
            data_line = lines[j].strip()
            if not _is_table_line(data_line):
                break
            cells = [c.strip() for c in data_line.split("|")[1:-1]]
            if not cells:
                break

            row: TableRow = {}
            for k, header in enumerate(headers):
                row[header] = cells[k] if k < len(cells) else ""
            rows.append(row)
            j += 1

        if rows:
            tables.append(rows)
        else:
            logger.debug("Discarding table with headers %s: no data rows", headers)

        i = j

    return tables


@dataclass
class Section:
    heading: Optional[str]
    level: int
    body: str


def split_sections(text: str) -> List[Section]:
    """
    Split a document on markdown headings.

    Text before the first heading becomes a section with ``heading=None``.
    Headings inside fenced code blocks are not treated as headings.
    """
    sections: List[Section] = []
    heading: Optional[str] = None
    level = 0
    body: List[str] = []
    in_fence = False

    for line in normalize_newlines(text).split("\n"):
        if line.lstrip().startswith("```"):
            in_fence = not in_fence

        match = None if in_fence else HEADING_RE.match(line)
        if match:
            if heading is not None or any(b.strip() for b in body):
                sections.append(Section(heading, level, "\n".join(body)))
            heading = match.group(2).strip()
            level = len(match.group(1))
            body = []
        else:
            body.append(line)

    if heading is not None or any(b.strip() for b in body):
        sections.append(Section(heading, level, "\n".join(body)))

    return sections
