_XML_ESCAPES = [
    ("&", "&amp;"),  # must run first
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
]


def escape_xml(text) -> str:
    """Escape the five XML special characters for element text and attributes."""
    text = "" if text is None else str(text)
    for raw, entity in _XML_ESCAPES:
        text = text.replace(raw, entity)
    return text


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 1] + "…"
