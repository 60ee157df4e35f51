"""
CSV numeric parser for ground truth and submission files
"""
import re
from typing import List

from scoreboard.errors import InvalidNumericDataError


# Leading number of a token; whatever follows it is ignored ("1.5abc" -> 1.5).
# ASCII digits only, and "Infinity" is the only non-finite spelling.
LEADING_NUMBER = re.compile(
    r'\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))',
    re.ASCII
)


def parse_number(token: str) -> float:
    """
    Read the leading number of a token

    Examples:
        >>> parse_number(" 2.5e1kg")
        25.0
        >>> parse_number("1_000")
        1.0

    Raises:
        ValueError: If the token does not start with a number
    """
    match = LEADING_NUMBER.match(token)
    if not match:
        raise ValueError(f"not a number: {token!r}")
    return float(match.group(1))


def parse_numeric_column(text: str, source: str = "file") -> List[float]:
    """
    Parse the value column of an uploaded CSV

    CSV format:
        id,value
        0,1.25
        1,3.5

    The header line is skipped and the second comma-separated field of every
    following line is read as a number. Parsing is all-or-nothing: any row
    that does not yield a number fails the whole file.

    Args:
        text: Decoded file contents
        source: Label used in error messages ("ground truth", "submission")

    Returns:
        Values in row order

    Raises:
        InvalidNumericDataError: If any row is blank, has no second field, or
            its value does not start with a number; or if there are no data rows
    """
    lines = text.strip().split("\n")
    values = []

    for line_no, line in enumerate(lines[1:], start=2):
        fields = line.split(",")
        if len(fields) < 2:
            raise InvalidNumericDataError(
                f"{source} line {line_no}: expected '<id>,<value>', got {line.strip()!r}"
            )

        token = fields[1]
        try:
            values.append(parse_number(token))
        except ValueError:
            raise InvalidNumericDataError(
                f"{source} line {line_no}: value {token.strip()!r} is not a number"
            ) from None

    if not values:
        raise InvalidNumericDataError(f"{source} has no data rows")

    return values
