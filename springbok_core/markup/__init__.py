"""
Law text markup.

- MarkupEngine: applies a bill's strike/insert/repeal edits to law sections
- formatting: AsciiDoc spans for struck and inserted text
"""
from springbok_core.markup.engine import MarkupEngine
from springbok_core.markup import formatting

__all__ = ["MarkupEngine", "formatting"]
