import re

from rainbox.core.errors import LandscapeParseError

DELIMITERS = re.compile(r"[ ,]")
# Plain ASCII decimal literals only: no digit underscores, no Unicode digits, no padding
NUMBER = re.compile(
    r"[+-]?(\d+\.?\d*(e[+-]?\d+)?|\.\d+(e[+-]?\d+)?|inf|infinity|nan)",
    re.ASCII | re.IGNORECASE)


def parse_landscape(text):
    """
    Parses a landscape like "1 3,2 0" into segment heights.
    Every single space or comma is a delimiter, so "1, 2" has an empty
    token and fails. Raises LandscapeParseError on the first bad token.
    """
    heights = []
    for token in DELIMITERS.split(text):
        if not NUMBER.fullmatch(token):
            raise LandscapeParseError(token, "invalid float literal")
        heights.append(float(token))
    return heights


def parse_rain_hours(text):
    """Value-as-number semantics of a numeric field: anything unparsable is NaN."""
    try:
        return float(text)
    except (TypeError, ValueError):
        return float("nan")
