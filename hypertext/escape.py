"""
Escaping of plain text for embedding in HTML markup: in element content and inside double-quoted attribute values.
"""

from html import escape as _html_escape


def escape(text):
    """
    Replace the characters & < > " ' in `text` with their entity equivalents.
    The result can be placed safely in element content and in attribute values quoted with either " or '.
    """
    return _html_escape(text, quote = True)

escape_attribute = escape       # attribute values are always emitted in double quotes, the same entity set suffices


def is_number(value):
    """
    True if `value` is a number whose text form consists of digits, sign, decimal point and exponent only.
    Subclasses of int and float (bool, enums) are excluded, as they may override __str__.
    """
    return type(value) in (int, float)


def to_text(value):
    """
    Convert a value of a dynamic expression to a pair (text, needs_escaping).
    None converts to an empty string; numbers convert to their decimal form that never needs escaping.
    """
    if value is None: return '', False
    if is_number(value): return str(value), False
    return str(value), True
