"""
Converter services for turning external input into order fields.
"""

from .order_line_parser import ParsedOrderLine, iter_order_file, parse_order_line

__all__ = ["ParsedOrderLine", "iter_order_file", "parse_order_line"]
