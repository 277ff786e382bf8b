import json
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from labwise.parsers.models import AnalysisResult, Urgency

# label, color
URGENCY_STYLES: Dict[Urgency, Tuple[str, str]] = {
    Urgency.CRITICAL: ("Critical", "red"),
    Urgency.URGENT: ("Urgent", "red"),
    Urgency.MODERATE: ("Moderate Priority", "orange"),
    Urgency.ROUTINE: ("Routine", "blue"),
}


@dataclass(frozen=True)
class SummaryStats:
    normal: int
    abnormal: int
    critical: int

    @property
    def attention(self) -> int:
        """Abnormal but not critical."""
        return self.abnormal - self.critical

    @property
    def total(self) -> int:
        return self.normal + self.abnormal


def calculate_summary_stats(result: AnalysisResult) -> SummaryStats:
    abnormal = [p for p in result.parameters if p.is_abnormal]
    return SummaryStats(
        normal=len(result.parameters) - len(abnormal),
        abnormal=len(abnormal),
        critical=sum(1 for p in abnormal if p.is_critical),
    )


def urgency_style(urgency: Union[Urgency, str]) -> Tuple[str, str]:
    return URGENCY_STYLES[Urgency(urgency)]


def format_file_name(patient_name: str, on: Optional[date] = None, extension: str = "json") -> str:
    clean = "-".join((patient_name or "patient").lower().split())
    return f"lab-report-{clean}-{(on or date.today()).isoformat()}.{extension}"


def to_payload(result: AnalysisResult) -> Dict:
    """JSON-ready view of an analysis for the dashboard / export consumers."""
    info = result.patient_info
    rec = result.recommendation
    stats = calculate_summary_stats(result)
    label, color = urgency_style(rec.urgency)
    return {
        "patientInfo": {
            "name": info.name,
            "age": info.age,
            "gender": info.gender,
            "reportDate": info.report_date,
            "labName": info.lab_name,
        },
        "parameters": [
            {
                "name": p.name,
                "value": p.value,
                "unit": p.unit,
                "normalRange": p.normal_range,
                "status": p.status.value,
                "severity": p.severity.value,
                "explanation": p.explanation,
            }
            for p in result.parameters
        ],
        "recommendation": {
            "specialty": rec.specialty.value,
            "urgency": rec.urgency.value,
            "urgencyLabel": label,
            "urgencyColor": color,
            "reason": rec.reason,
            "timeframe": rec.timeframe,
            "nextSteps": list(rec.next_steps),
            "immediateActions": list(rec.immediate_actions),
            "investigations": list(rec.investigations),
            "lifestyleAdjustments": list(rec.lifestyle_adjustments),
            "patientEducation": list(rec.patient_education),
            "criticalNotes": list(rec.critical_notes),
            "conditionRecommendations": {k: list(v) for k, v in rec.condition_recommendations.items()},
            "keyAbnormalities": [
                {
                    "testName": a.test_name,
                    "result": a.result,
                    "clinicalSignificance": a.clinical_significance,
                    "severity": a.severity.value,
                }
                for a in rec.key_abnormalities
            ],
        },
        "summary": {
            "normal": stats.normal,
            "attention": stats.attention,
            "abnormal": stats.abnormal,
            "critical": stats.critical,
        },
    }


def export_json(result: AnalysisResult, out_path: Union[str, Path]) -> Path:
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(to_payload(result), ensure_ascii=False, indent=2), encoding="utf-8")
    return out
