# flake8: noqa

from labwise.parsers.models import EnhancedParameter, LabParameter, Severity, Status
from labwise.services.explanation_data import EXPLANATIONS
from labwise.services.explanation_service import (
    canonical_name,
    clean_parameter_name,
    enhance_parameters,
    generate_explanation,
)


def test_known_test_uses_table():
    text = generate_explanation("Hemoglobin", Status.LOW, 10.5, "13.0-17.0")
    assert text.startswith("Low hemoglobin indicates anemia")


def test_synonym_and_string_status():
    text = generate_explanation("Fasting Glucose", "high", 145, "70-100")
    assert text == "High blood glucose levels may indicate diabetes or prediabetes."


def test_liver_enzymes_share_explanation():
    assert generate_explanation("SGPT", Status.HIGH, 80, "7-56") == EXPLANATIONS["Liver"]["high"]
    assert generate_explanation("Alkaline Phosphatase", Status.HIGH, 200, "44-147") == EXPLANATIONS["Liver"]["high"]


def test_lipoprotein_fraction_beats_total_cholesterol():
    text = generate_explanation("HDL Cholesterol", Status.LOW, 30, "40-60")
    assert text == EXPLANATIONS["HDL Cholesterol"]["low"]


def test_fallback_texts():
    assert (
        generate_explanation("Zinc", Status.HIGH, 150, "60-120")
        == "Your Zinc level is above the normal range (60-120)."
    )
    assert (
        generate_explanation("Zinc", Status.LOW, 40, "60-120")
        == "Your Zinc level is below the normal range (60-120)."
    )
    assert (
        generate_explanation("Glucose", Status.NORMAL, 90, "70-100")
        == "Your Glucose level is within the normal range (70-100)."
    )


def test_name_cleanup():
    assert clean_parameter_name("Total Platelet Count") == "Platelet"
    assert canonical_name("White Blood Cell Count") == "White Blood Cell"
    assert canonical_name("Serum Creatinine") == "Creatinine"


def test_enhance_keeps_fields():
    p = LabParameter("Hemoglobin", 10.5, "g/dL", "13.0-17.0", Status.LOW, Severity.CRITICAL)
    [e] = enhance_parameters([p])
    assert isinstance(e, EnhancedParameter)
    assert (e.name, e.value, e.unit, e.normal_range, e.status, e.severity) == (
        "Hemoglobin",
        10.5,
        "g/dL",
        "13.0-17.0",
        Status.LOW,
        Severity.CRITICAL,
    )
    assert e.explanation.startswith("Low hemoglobin")
