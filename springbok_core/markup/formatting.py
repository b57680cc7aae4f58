"""
AsciiDoc inline markup for struck and inserted law text.

    strike("ten dollars", "1")  -> [.line-through .red]#ten dollars#^1^
    insert("fifty dollars", "1") -> [.blue]#fifty dollars#^1^

Spans covering several lines use the unconstrained form (##...##) and turn
every newline into a hard line break (" +\\n") so the span is not cut at a
paragraph boundary.
"""
STRIKE_ROLE = ".line-through .red"
INSERT_ROLE = ".blue"
LINE_CONTINUATION = " +\n"

# A struck phrase starting with one of these needs a space before its span
LEADING_PUNCTUATION = (",", ".", ":", " ")

QUOTE_OPENERS = ("“", "\"")
QUOTE_CLOSERS = ("”", "\"")


def cite(section_number: str) -> str:
    """Superscript citation of the bill section that made an edit."""
    return f"^{section_number}^" if section_number else ""


def span(role: str, text: str) -> str:
    if "\n" in text:
        return "[" + role + "]##" + text.replace("\n", LINE_CONTINUATION) + "##"
    return f"[{role}]#{text}#"


def strike(text: str, section_number: str = "") -> str:
    return span(STRIKE_ROLE, text) + cite(section_number)


def insert(text: str, section_number: str = "") -> str:
    return span(INSERT_ROLE, text) + cite(section_number)


def leading_buffer(struck_text: str) -> str:
    return " " if struck_text.startswith(LEADING_PUNCTUATION) else ""


def unquote(text: str) -> str:
    """Strip one pair of straight or curly double quotes surrounding the whole text."""
    text = text.strip()
    if len(text) < 2 or text[0] not in QUOTE_OPENERS or text[-1] not in QUOTE_CLOSERS:
        return text
    inner = text[1:-1]
    # “a” and “b” is two quoted phrases, not one
    if any(quote in inner for quote in QUOTE_OPENERS + QUOTE_CLOSERS):
        return text
    return inner.strip()


def footnote(raw_text: str) -> str:
    """Italicized bill text appended when an edit cannot be located."""
    return f"_{raw_text.strip()}_"


def repeal_marker(specification: str, section_number: str = "") -> str:
    marker = f"REPEALED {specification}" if specification else "REPEALED"
    return marker + cite(section_number)
