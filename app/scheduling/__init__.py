from .overlap import find_overlapping, has_overlap
from .today import resolve_for_date
from .print_window import is_printable

__all__ = [
    "find_overlapping",
    "has_overlap",
    "resolve_for_date",
    "is_printable",
]
