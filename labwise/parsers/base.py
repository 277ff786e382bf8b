import re
from typing import List, Optional, Tuple

_THOUSANDS = re.compile(r"(?<=\d),(?=\d{3}(?!\d))")


def _split_lines(text: str) -> List[str]:
    return [line for line in re.split(r"\r\n|\n|\r", text or "") if line.strip()]


def _strip_thousands(line: str) -> str:
    """'4,500' -> '4500'; decimals and lists like '1,2' are left alone."""
    return _THOUSANDS.sub("", line)


def parse_number(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        return float(raw.strip())
    except ValueError:
        return None


def parse_range(normal_range: str) -> Tuple[float, float]:
    """'13.0-17.0' -> (13.0, 17.0)"""
    low, high = normal_range.split("-", 1)
    return float(low), float(high)
