# ===============================
# File: labwise/parsers/models.py
# ===============================
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Status(str, Enum):
    NORMAL = "normal"
    HIGH = "high"
    LOW = "low"


class Severity(str, Enum):
    NORMAL = "normal"
    MILD = "mild"
    MODERATE = "moderate"
    CRITICAL = "critical"


class Urgency(str, Enum):
    CRITICAL = "critical"
    URGENT = "urgent"
    MODERATE = "moderate"
    ROUTINE = "routine"


class Specialty(str, Enum):
    EMERGENCY = "Emergency Medicine"
    NEPHROLOGY = "Nephrologist"
    ENDOCRINOLOGY = "Endocrinologist"
    HEMATOLOGY = "Hematologist"
    GENERAL = "General Physician"


@dataclass(frozen=True)
class PatientInfo:
    name: str = "Patient"
    age: str = "Unknown"  # "<N> YRS"
    gender: str = "Unknown"  # M | F | Unknown
    report_date: str = ""
    lab_name: Optional[str] = None


@dataclass(frozen=True)
class LabParameter:
    name: str
    value: float
    unit: str
    normal_range: str  # "min-max"
    status: Status
    severity: Severity

    @property
    def is_abnormal(self) -> bool:
        return self.status != Status.NORMAL

    @property
    def is_critical(self) -> bool:
        return self.severity == Severity.CRITICAL


@dataclass(frozen=True)
class EnhancedParameter(LabParameter):
    explanation: str = ""


@dataclass(frozen=True)
class KeyAbnormality:
    test_name: str
    result: str
    clinical_significance: str
    severity: Urgency


@dataclass(frozen=True)
class Recommendation:
    specialty: Specialty
    urgency: Urgency
    reason: str
    timeframe: str
    next_steps: List[str]
    immediate_actions: List[str] = field(default_factory=list)
    investigations: List[str] = field(default_factory=list)
    lifestyle_adjustments: List[str] = field(default_factory=list)
    patient_education: List[str] = field(default_factory=list)
    critical_notes: List[str] = field(default_factory=list)
    condition_recommendations: Dict[str, List[str]] = field(default_factory=dict)
    key_abnormalities: List[KeyAbnormality] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    patient_info: PatientInfo
    parameters: List[EnhancedParameter]
    recommendation: Recommendation
