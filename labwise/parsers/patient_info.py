import re
from datetime import date
from typing import Callable, List, Optional, Pattern

from labwise.commons.logger import logger

from .models import PatientInfo

_NAME_CHARS = r"[A-Za-z \t.]"
_NAME_STOP = re.compile(
    r"[ \t]{2,}|\t|\b(?:Age|Sex|Gender|DOB|Date|Ref|Referred|ID|UHID|Lab)\b", re.IGNORECASE
)

NAME_PATTERNS: List[Pattern] = [
    re.compile(
        rf"(?<!Test )(?:Patient\s*Name|Name|PATIENT|Mr\.|Mrs\.|Ms\.)[ \t]*[:\-]?[ \t]*({_NAME_CHARS}{{2,40}})",
        re.IGNORECASE,
    ),
    re.compile(rf"Name[ \t]*:[ \t]*({_NAME_CHARS}{{2,40}})", re.IGNORECASE),
    re.compile(rf"Patient[ \t]*:[ \t]*({_NAME_CHARS}{{2,40}})", re.IGNORECASE),
    # Primera línea "Nombre Apellido"
    re.compile(r"^([A-Z][a-z]+[ \t]+[A-Z][a-z]+)", re.MULTILINE),
]

AGE_PATTERNS: List[Pattern] = [
    re.compile(r"Age[ \t]*[:\-]?[ \t]*(\d{1,3})[ \t]*(?:Years?|YRS?|Y)?", re.IGNORECASE),
    re.compile(r"(\d{1,3})[ \t]*(?:Years?|YRS?|Y)\b[ \t]*(?:old)?", re.IGNORECASE),
    re.compile(r"Age[:\s]*(\d{1,3})", re.IGNORECASE),
]

GENDER_PATTERNS: List[Pattern] = [
    re.compile(r"(?:Sex|Gender)[ \t]*[:\-]?[ \t]*(Male|Female|M|F)\b", re.IGNORECASE),
    re.compile(r"\b(Male|Female|M|F)\b", re.IGNORECASE),
]

_NUMERIC_DATE = r"\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4}"
_MONTH_DATE = r"\d{1,2}[ \t]+(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*[ \t,]+\d{2,4}"

DATE_PATTERNS: List[Pattern] = [
    re.compile(
        rf"(?:Report[ \t]*Date|Collection[ \t]*Date|Test[ \t]*Date|Date)[ \t]*[:\-]?[ \t]*({_NUMERIC_DATE}|{_MONTH_DATE})",
        re.IGNORECASE,
    ),
    re.compile(rf"({_NUMERIC_DATE})"),
    re.compile(rf"({_MONTH_DATE})", re.IGNORECASE),
]

_LAB_KEYWORDS = r"(?:LABORATORIES|LABORATORY|LABS|LAB|DIAGNOSTICS|PATHOLOGY|HOSPITAL|CLINIC)"

LAB_NAME_PATTERNS: List[Pattern] = [
    # keyword may be glued to the previous word ("PATHLABS", "Polyclinic")
    re.compile(rf"([A-Za-z][A-Za-z.&' \t]*?{_LAB_KEYWORDS})(?![A-Za-z])", re.IGNORECASE),
    # "Dr. Lal PathLabs"
    re.compile(r"((?:Dr\.?[ \t]+)?[A-Z][A-Za-z]+[ \t]+[A-Z][a-z]*(?:Labs?|Diagnostics))\b"),
]


def _first_match(
    text: str, patterns: List[Pattern], accept: Callable[[str], Optional[str]]
) -> Optional[str]:
    for pattern in patterns:
        m = pattern.search(text)
        if not m or not m.group(1):
            continue
        value = accept(m.group(1))
        if value is not None:
            return value
    return None


def _accept_name(raw: str) -> Optional[str]:
    # "Name: John Doe  Age: 45" -> "John Doe"
    name = _NAME_STOP.split(raw.strip(), 1)[0].strip()
    return name if 2 < len(name) < 40 else None


def _accept_age(raw: str) -> Optional[str]:
    age = int(raw)
    return f"{age} YRS" if 0 < age < 150 else None


def _accept_gender(raw: str) -> Optional[str]:
    g = raw.upper()
    if g in ("M", "MALE"):
        return "M"
    if g in ("F", "FEMALE"):
        return "F"
    return None


def _accept_date(raw: str) -> Optional[str]:
    return raw.strip()


def _accept_lab(raw: str) -> Optional[str]:
    lab = " ".join(raw.split())
    return lab if len(lab) > 3 else None


def extract_patient_info(text: str, today: Optional[date] = None) -> PatientInfo:
    """Patient metadata from report text; fields that cannot be found keep their defaults."""
    text = text or ""
    report_date = _first_match(text, DATE_PATTERNS, _accept_date)
    if report_date is None:
        report_date = (today or date.today()).strftime("%m/%d/%Y")

    info = PatientInfo(
        name=_first_match(text, NAME_PATTERNS, _accept_name) or "Patient",
        age=_first_match(text, AGE_PATTERNS, _accept_age) or "Unknown",
        gender=_first_match(text, GENDER_PATTERNS, _accept_gender) or "Unknown",
        report_date=report_date,
        lab_name=_first_match(text, LAB_NAME_PATTERNS, _accept_lab),
    )
    logger.info(
        f"Paciente: name={info.name} age={info.age} gender={info.gender} "
        f"date={info.report_date} lab={info.lab_name}"
    )
    return info
