"""Aggregate classified parameters into one triage recommendation.

Tiers are evaluated most severe first and the first one that applies wins:

    critical  -> at least one parameter with critical severity
    multiple  -> more than MULTI_ABNORMAL_THRESHOLD abnormal parameters
    few       -> 1..MULTI_ABNORMAL_THRESHOLD abnormal parameters
    normal    -> nothing abnormal (also the empty report)
"""
from enum import Enum
from typing import Dict, Iterable, List, Sequence, Tuple

from labwise.commons.logger import logger
from labwise.parsers.models import (
    KeyAbnormality,
    LabParameter,
    Recommendation,
    Severity,
    Specialty,
    Status,
    Urgency,
)
from labwise.services.explanation_service import canonical_name

MULTI_ABNORMAL_THRESHOLD = 3
MAX_NEXT_STEPS = 5

Keywords = Tuple[str, ...]


class Tier(str, Enum):
    CRITICAL = "critical"
    MULTIPLE = "multiple"
    FEW = "few"
    NORMAL = "normal"


TIMEFRAMES: Dict[Tier, str] = {
    Tier.CRITICAL: "Within 24 hours",
    Tier.MULTIPLE: "Within 1-2 weeks",
    Tier.FEW: "Within 2-4 weeks",
    Tier.NORMAL: "Annual check-up",
}

NEXT_STEPS: Dict[Tier, Tuple[str, ...]] = {
    Tier.CRITICAL: (
        "Seek immediate medical attention within 24 hours",
        "Contact your healthcare provider immediately",
        "Do not delay seeking medical care",
        "Bring your complete lab report",
        "Contact emergency services if symptoms worsen",
    ),
    Tier.MULTIPLE: (
        "Schedule an appointment with your doctor",
        "Prepare a list of current medications",
        "Note any symptoms or changes in health",
        "Bring your complete lab report",
    ),
    Tier.FEW: (
        "Schedule a follow-up appointment with your doctor",
        "Repeat abnormal tests to confirm results",
        "Note any symptoms or changes in health",
    ),
    Tier.NORMAL: (
        "Schedule a routine follow-up appointment",
        "Continue current healthy lifestyle",
        "Monitor overall health",
    ),
}

# Keywords looked up in the reported name and in its canonical name (lowercase)
KIDNEY: Keywords = ("creatinine", "urea", "egfr", "kidney", "renal")
ENDOCRINE: Keywords = ("glucose", "sugar", "hba1c", "a1c", "diabetes")
BLOOD: Keywords = ("hemoglobin", "haemoglobin", "hgb", "blood")
HEMOGLOBIN: Keywords = ("hemoglobin", "haemoglobin", "hgb")
CARDIOVASCULAR: Keywords = ("cholesterol", "ldl", "hdl")

# Specialty inference, checked in this order
SPECIALTY_RULES: Tuple[Tuple[Keywords, Specialty], ...] = (
    (KIDNEY, Specialty.NEPHROLOGY),
    (ENDOCRINE, Specialty.ENDOCRINOLOGY),
    (BLOOD, Specialty.HEMATOLOGY),
)

CLINICAL_SIGNIFICANCE: Dict[str, Dict[str, str]] = {
    "Hemoglobin": {
        "low": "Indicates anemia, may cause fatigue and reduced oxygen delivery",
        "high": "May indicate dehydration or polycythemia, increases blood viscosity",
    },
    "Glucose": {
        "high": "Suggests diabetes or prediabetes, increases cardiovascular risk",
        "low": "May cause hypoglycemic symptoms, requires immediate attention",
    },
    "Creatinine": {
        "high": "Indicates reduced kidney function, may require nephrology consultation",
    },
    "Cholesterol": {
        "high": "Increases cardiovascular disease risk, lifestyle modification needed",
    },
    "White Blood Cell": {
        "high": "May indicate infection, inflammation, or hematologic disorder",
        "low": "Suggests immunosuppression or bone marrow dysfunction",
    },
}

SEVERITY_TO_URGENCY: Dict[Severity, Urgency] = {
    Severity.CRITICAL: Urgency.CRITICAL,
    Severity.MODERATE: Urgency.URGENT,
    Severity.MILD: Urgency.MODERATE,
    Severity.NORMAL: Urgency.ROUTINE,
}

BASE_LIFESTYLE = (
    "Maintain balanced diet with adequate hydration",
    "Regular physical activity as appropriate for age and condition",
    "Adequate sleep (7-9 hours nightly)",
    "Stress management techniques",
)

BASE_EDUCATION = (
    "Understand the importance of medication compliance",
    "Recognize warning signs that require immediate medical attention",
    "Keep a health diary tracking symptoms and measurements",
)

BASE_CRITICAL_NOTES = (
    "All recommendations should be correlated with clinical symptoms and patient history",
    "Repeat abnormal tests to confirm results before major treatment changes",
    "Consider medication interactions and patient allergies before prescribing",
)


def _unique(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


def _tier(abnormal: Sequence[LabParameter], critical: Sequence[LabParameter]) -> Tier:
    if critical:
        return Tier.CRITICAL
    if len(abnormal) > MULTI_ABNORMAL_THRESHOLD:
        return Tier.MULTIPLE
    if abnormal:
        return Tier.FEW
    return Tier.NORMAL


def _urgency(tier: Tier, abnormal: Sequence[LabParameter]) -> Urgency:
    if tier == Tier.CRITICAL:
        return Urgency.CRITICAL
    if tier == Tier.MULTIPLE:
        return Urgency.MODERATE
    if tier == Tier.FEW and any(p.severity == Severity.MODERATE for p in abnormal):
        return Urgency.MODERATE
    return Urgency.ROUTINE


def _mentions(parameter: LabParameter, keywords: Keywords) -> bool:
    text = f"{parameter.name} {canonical_name(parameter.name)}".lower()
    return any(k in text for k in keywords)


def infer_specialty(parameters: Sequence[LabParameter], default: Specialty) -> Specialty:
    for keywords, specialty in SPECIALTY_RULES:
        if any(_mentions(p, keywords) for p in parameters):
            return specialty
    return default


def _reason(tier: Tier, abnormal: Sequence[LabParameter], critical: Sequence[LabParameter]) -> str:
    if tier == Tier.CRITICAL:
        names = ", ".join(p.name for p in critical)
        return (
            f"Critical values detected in {len(critical)} parameter(s): {names}. "
            "Immediate medical evaluation required to prevent complications."
        )
    if tier == Tier.MULTIPLE:
        return (
            f"Multiple parameters ({len(abnormal)}) are outside normal range, "
            "suggesting systemic involvement requiring comprehensive evaluation."
        )
    if tier == Tier.FEW:
        return (
            f"{len(abnormal)} parameter(s) need monitoring. "
            "Early intervention can prevent progression to more serious conditions."
        )
    return "All parameters are within normal limits. Continue current health maintenance practices."


def _key_abnormalities(abnormal: Sequence[LabParameter]) -> List[KeyAbnormality]:
    out = []
    for p in abnormal:
        name = canonical_name(p.name)
        significance = CLINICAL_SIGNIFICANCE.get(name, {}).get(p.status.value)
        out.append(
            KeyAbnormality(
                test_name=p.name,
                result=f"{p.value:g} {p.unit}",
                clinical_significance=significance
                or f"{p.status.value.capitalize()} {p.name} requires clinical evaluation",
                severity=SEVERITY_TO_URGENCY[p.severity],
            )
        )
    return out


def _immediate_actions(tier: Tier, critical: Sequence[LabParameter]) -> List[str]:
    actions: List[str] = []
    if tier == Tier.CRITICAL:
        actions += [
            "Contact healthcare provider immediately",
            "Monitor symptoms closely",
            "Have emergency contact information ready",
        ]
    for p in critical:
        if _mentions(p, ENDOCRINE):
            actions.append("Check blood glucose levels frequently")
        if _mentions(p, HEMOGLOBIN):
            actions.append("Monitor for signs of severe anemia (dizziness, shortness of breath)")
    return _unique(actions)


def _investigations(abnormal: Sequence[LabParameter]) -> List[str]:
    out: List[str] = []
    for p in abnormal:
        if _mentions(p, ENDOCRINE):
            out += ["HbA1c if not done recently", "Fasting glucose confirmation"]
        if _mentions(p, KIDNEY):
            out += ["Complete metabolic panel", "Urinalysis"]
        if _mentions(p, HEMOGLOBIN):
            out += ["Iron studies (ferritin, TIBC, transferrin saturation)", "B12 and folate levels"]
    return _unique(out)


def _lifestyle(abnormal: Sequence[LabParameter]) -> List[str]:
    out = list(BASE_LIFESTYLE)
    for p in abnormal:
        if _mentions(p, ENDOCRINE):
            out += ["Carbohydrate counting and portion control", "Regular meal timing"]
        if _mentions(p, CARDIOVASCULAR):
            out += ["Low saturated fat diet", "Increase omega-3 fatty acids"]
    return _unique(out)


def _education(abnormal: Sequence[LabParameter]) -> List[str]:
    out = list(BASE_EDUCATION)
    for p in abnormal:
        if _mentions(p, ENDOCRINE):
            out += [
                "Learn proper blood glucose monitoring technique",
                "Understand signs of hypoglycemia and hyperglycemia",
            ]
        if _mentions(p, HEMOGLOBIN):
            out.append("Recognize symptoms of anemia (fatigue, weakness, pale skin)")
    return _unique(out)


def _critical_notes(abnormal: Sequence[LabParameter]) -> List[str]:
    notes = list(BASE_CRITICAL_NOTES)
    for p in abnormal:
        if _mentions(p, ("creatinine",)) and p.status == Status.HIGH:
            notes.append("Creatinine elevation may affect drug dosing - adjust medications as needed")
        if _mentions(p, ("glucose", "sugar")) and p.is_critical:
            notes.append("Severe hyperglycemia may indicate diabetic ketoacidosis - check ketones")
        if _mentions(p, HEMOGLOBIN) and p.is_critical:
            notes.append("Severe anemia may require blood transfusion - assess symptoms urgently")
    return _unique(notes)


def _condition_recommendations(abnormal: Sequence[LabParameter]) -> Dict[str, List[str]]:
    conditions: Dict[str, List[str]] = {}

    if any(_mentions(p, ENDOCRINE) for p in abnormal):
        conditions["Diabetes Management"] = [
            "Annual diabetic eye examination",
            "Foot care and daily inspection",
            "Blood pressure monitoring",
            "Lipid profile every 6 months",
            "Kidney function monitoring",
        ]
    if any(_mentions(p, HEMOGLOBIN) and p.status == Status.LOW for p in abnormal):
        conditions["Anemia Management"] = [
            "Iron studies if not already done",
            "B12 and folate levels",
            "Stool occult blood test",
            "Dietary iron supplementation",
            "Monitor for underlying causes",
        ]
    if any(_mentions(p, CARDIOVASCULAR) for p in abnormal):
        conditions["Cardiovascular Risk"] = [
            "Low saturated fat diet",
            "Regular aerobic exercise",
            "Smoking cessation if applicable",
            "Blood pressure monitoring",
            "Consider statin therapy",
        ]
    return conditions


def generate_recommendation(parameters: Sequence[LabParameter]) -> Recommendation:
    abnormal = [p for p in parameters if p.is_abnormal]
    critical = [p for p in abnormal if p.is_critical]
    tier = _tier(abnormal, critical)

    if tier == Tier.CRITICAL:
        specialty = infer_specialty(critical, Specialty.EMERGENCY)
    else:
        specialty = infer_specialty(abnormal, Specialty.GENERAL)

    recommendation = Recommendation(
        specialty=specialty,
        urgency=_urgency(tier, abnormal),
        reason=_reason(tier, abnormal, critical),
        timeframe=TIMEFRAMES[tier],
        next_steps=_unique(NEXT_STEPS[tier])[:MAX_NEXT_STEPS],
        immediate_actions=_immediate_actions(tier, critical),
        investigations=_investigations(abnormal),
        lifestyle_adjustments=_lifestyle(abnormal),
        patient_education=_education(abnormal),
        critical_notes=_critical_notes(abnormal),
        condition_recommendations=_condition_recommendations(abnormal),
        key_abnormalities=_key_abnormalities(abnormal),
    )
    logger.info(
        f"Recomendación: tier={tier.value} urgency={recommendation.urgency.value} "
        f"specialty={recommendation.specialty.value} abnormal={len(abnormal)} critical={len(critical)}"
    )
    return recommendation
