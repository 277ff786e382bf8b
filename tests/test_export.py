# flake8: noqa

import json
from datetime import date

from labwise.helpers.report_export import export_json, format_file_name, to_payload, urgency_style
from labwise.parsers.models import Urgency
from labwise.services.analysis_service import analyze

REPORT = """Patient Name: John Smith
Age: 45 Years
Hemoglobin: 10.5 g/dL
Serum Creatinine: 1.1 mg/dL
"""


def test_file_name():
    assert format_file_name("John  Smith", on=date(2024, 3, 12)) == "lab-report-john-smith-2024-03-12.json"
    assert format_file_name("", on=date(2024, 3, 12), extension="pdf") == "lab-report-patient-2024-03-12.pdf"


def test_urgency_styles():
    assert urgency_style(Urgency.CRITICAL) == ("Critical", "red")
    assert urgency_style("urgent") == ("Urgent", "red")
    assert urgency_style("moderate") == ("Moderate Priority", "orange")
    assert urgency_style(Urgency.ROUTINE) == ("Routine", "blue")


def test_payload_shape():
    payload = to_payload(analyze(REPORT, today=date(2024, 3, 12)))
    assert payload["patientInfo"]["name"] == "John Smith"
    assert [p["name"] for p in payload["parameters"]] == ["Hemoglobin", "Serum Creatinine"]
    assert payload["parameters"][0]["status"] == "low"
    assert payload["parameters"][0]["severity"] == "critical"
    assert payload["recommendation"]["urgency"] == "critical"
    assert payload["recommendation"]["urgencyColor"] == "red"
    assert payload["summary"] == {"normal": 1, "attention": 0, "abnormal": 1, "critical": 1}


def test_export_json(tmp_path):
    result = analyze(REPORT, today=date(2024, 3, 12))
    out = export_json(result, tmp_path / "out" / "report.json")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data == json.loads(json.dumps(to_payload(result)))
