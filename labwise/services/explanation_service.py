import re
from dataclasses import fields
from typing import List, Optional, Union

from labwise.parsers import catalog
from labwise.parsers.models import EnhancedParameter, LabParameter, Status
from labwise.services.explanation_data import EXPLANATIONS

_PREFIX = re.compile(r"^(?:Mean|Total|Complete)\s+", re.IGNORECASE)
_COUNT = re.compile(r"\s+Count$", re.IGNORECASE)
_CELL = re.compile(r"\s+Cell.*$", re.IGNORECASE)

# Ordered: the lipoprotein fractions must win over the generic cholesterol rule
_ALIASES = [
    (re.compile(r"\bvldl\b|very low density", re.IGNORECASE), "VLDL Cholesterol"),
    (re.compile(r"\bhdl\b|high density", re.IGNORECASE), "HDL Cholesterol"),
    (re.compile(r"\bldl\b|low density", re.IGNORECASE), "LDL Cholesterol"),
    (re.compile(r"cholesterol", re.IGNORECASE), "Cholesterol"),
    (
        re.compile(
            r"\b(?:alt|ast|sgpt|sgot|ggtp?|alp)\b|transaminase|aminotransferase|alkaline phosphatase|liver",
            re.IGNORECASE,
        ),
        "Liver",
    ),
]


def clean_parameter_name(name: str) -> str:
    cleaned = _PREFIX.sub("", (name or "").strip())
    cleaned = _COUNT.sub("", cleaned)
    cleaned = _CELL.sub("", cleaned)
    return cleaned.strip()


def canonical_name(name: str) -> str:
    """Key of the explanation table for a name as it was read off the report."""
    for pattern, canonical in _ALIASES:
        if pattern.search(name or ""):
            return canonical

    cleaned = clean_parameter_name(name)
    entry = catalog.lookup(name) or catalog.lookup(cleaned)
    if entry is not None:
        return entry.name
    return cleaned or (name or "").strip() or "parameter"


def _coerce_status(status: Union[Status, str]) -> Optional[Status]:
    try:
        return Status(str(getattr(status, "value", status)).lower())
    except ValueError:
        return None


def generate_explanation(
    parameter_name: str, status: Union[Status, str], value: float, normal_range: str
) -> str:
    name = canonical_name(parameter_name)
    st = _coerce_status(status)

    explanation = EXPLANATIONS.get(name, {}).get(st.value) if st else None
    if explanation:
        return explanation

    if st == Status.NORMAL:
        return f"Your {name} level is within the normal range ({normal_range})."
    direction = "above" if st == Status.HIGH else "below"
    return f"Your {name} level is {direction} the normal range ({normal_range})."


def enhance_parameters(parameters: List[LabParameter]) -> List[EnhancedParameter]:
    return [
        EnhancedParameter(
            **{f.name: getattr(p, f.name) for f in fields(LabParameter)},
            explanation=generate_explanation(p.name, p.status, p.value, p.normal_range),
        )
        for p in parameters
    ]
