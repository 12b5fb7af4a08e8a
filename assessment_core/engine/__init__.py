"""Recognition engine boundary: payload parsing and the Azure Speech adapter."""
from .payload import parse_segment, parse_status, parse_word

__all__ = ["parse_segment", "parse_status", "parse_word"]
