from .parsing import parse_timestamp, parse_score, clamp, format_span
from .validation import InputValidator

__all__ = [
    "parse_timestamp",
    "parse_score",
    "clamp",
    "format_span",
    "InputValidator",
]
