import re
from typing import Callable, List, Optional, Sequence, Tuple

from labwise.commons.logger import logger

from .base import _split_lines, _strip_thousands, parse_number, parse_range
from .catalog import CATALOG, CatalogEntry
from .models import LabParameter, Severity, Status

_NUM = r"([0-9]+\.?[0-9]*)"

# (name, value) candidate for one line
Candidate = Tuple[str, float]
Matcher = Callable[[str], Optional[Candidate]]


def classify_status(value: float, normal_range: str) -> Status:
    low, high = parse_range(normal_range)
    if value < low:
        return Status.LOW
    if value > high:
        return Status.HIGH
    return Status.NORMAL


def classify_severity(status: Status, value: float, normal_range: str) -> Severity:
    """Distance outside the band, relative to the band width: >0.5 critical, >0.2 moderate."""
    if status == Status.NORMAL:
        return Severity.NORMAL

    low, high = parse_range(normal_range)
    span = high - low
    if status == Status.HIGH:
        deviation = (value - high) / span if span > 0 else float("inf")
    else:
        deviation = (low - value) / span if span > 0 else float("inf")

    if deviation > 0.5:
        return Severity.CRITICAL
    if deviation > 0.2:
        return Severity.MODERATE
    return Severity.MILD


def _synonym_pattern(synonym: str) -> str:
    return re.escape(synonym).replace(r"\ ", r"\s+")


def _name_value(groups: Sequence[Optional[str]], fallback: str) -> Optional[Candidate]:
    # Name is whichever group is not a number
    first, second = groups
    if first is not None and parse_number(first) is None:
        name, value = first, parse_number(second)
    else:
        name, value = second or fallback, parse_number(first)
    if value is None or value <= 0:
        return None
    return name.strip(), value


def _build_matchers(entry: CatalogEntry) -> List[Matcher]:
    names = "|".join(_synonym_pattern(s) for s in entry.synonyms)
    name = rf"(?<![A-Za-z])({names})(?![A-Za-z])"
    unit = rf"(?:{re.escape(entry.unit)})?"

    shapes = [
        rf"{name}\s*[:\-]?\s*{_NUM}\s*{unit}",  # name: value unit
        rf"{name}.*?{_NUM}",  # name ... value
        rf"{_NUM}\s*{unit}\s*.*?{name}",  # value unit ... name
    ]
    compiled = [re.compile(s, re.IGNORECASE) for s in shapes]

    def _matcher(rx: "re.Pattern") -> Matcher:
        def match(line: str) -> Optional[Candidate]:
            m = rx.search(line)
            return _name_value(m.groups(), entry.name) if m else None

        return match

    return [_matcher(rx) for rx in compiled]


# Built once; read-only afterwards
_MATCHERS: Tuple[Tuple[CatalogEntry, Tuple[Matcher, ...]], ...] = tuple(
    (entry, tuple(_build_matchers(entry))) for entry in CATALOG
)


def _is_duplicate(name: str, collected: List[LabParameter]) -> bool:
    key = name.lower()
    return any(key in p.name.lower() or p.name.lower() in key for p in collected)


def extract_parameters(text: str) -> List[LabParameter]:
    """Scan every line against the catalog and return one parameter per detected test.

    Lines are visited in document order. For each catalog entry not yet
    claimed, the matchers are tried in order and the first candidate that
    is numeric, positive and not a duplicate of an already collected name
    wins. A claimed entry is not scanned again.
    """
    lines = _split_lines(text)
    logger.debug(f"Extrayendo parámetros de {len(lines)} líneas")

    parameters: List[LabParameter] = []
    claimed = set()

    for raw_line in lines:
        line = _strip_thousands(raw_line)
        for entry, matchers in _MATCHERS:
            if entry.name in claimed:
                continue
            for match in matchers:
                candidate = match(line)
                if candidate is None:
                    continue
                name, value = candidate
                if _is_duplicate(name, parameters):
                    continue

                status = classify_status(value, entry.normal_range)
                parameters.append(
                    LabParameter(
                        name=name,
                        value=value,
                        unit=entry.unit,
                        normal_range=entry.normal_range,
                        status=status,
                        severity=classify_severity(status, value, entry.normal_range),
                    )
                )
                claimed.add(entry.name)
                logger.debug(f"Parámetro extraído: {name}={value} ({status.value})")
                break

    logger.info(f"Total de parámetros extraídos: {len(parameters)}")
    return parameters
