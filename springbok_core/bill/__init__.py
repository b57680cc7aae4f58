"""
Bill text understanding.

Components:
- segment / classify / count_section_types: bill sections from text fragments
- extract: law chapter and section numbers referenced by a bill section
- CrossReferenceIndex: deduplicated law sections to fetch, with backrefs
"""
from springbok_core.bill.segmenter import segment, classify, count_section_types
from springbok_core.bill.references import extract, split_section_list
from springbok_core.bill.cross_reference import CrossReferenceIndex, resolve_backrefs

__all__ = [
    "segment",
    "classify",
    "count_section_types",
    "extract",
    "split_section_list",
    "CrossReferenceIndex",
    "resolve_backrefs",
]
