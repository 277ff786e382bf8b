# flake8: noqa

from datetime import date

from labwise.parsers.patient_info import extract_patient_info

HEADER = """CITY CARE DIAGNOSTICS
Patient Name: John Smith
Age: 45 Years
Sex: Male
Report Date: 12/03/2024
"""

ONE_LINE = "Name: Jane Doe  Age: 32  Sex: F\n"


def test_header_fields():
    info = extract_patient_info(HEADER)
    assert info.name == "John Smith"
    assert info.age == "45 YRS"
    assert info.gender == "M"
    assert info.report_date == "12/03/2024"
    assert info.lab_name == "CITY CARE DIAGNOSTICS"


def test_fields_on_one_line():
    info = extract_patient_info(ONE_LINE)
    assert info.name == "Jane Doe"
    assert info.age == "32 YRS"
    assert info.gender == "F"


def test_defaults_when_nothing_found():
    info = extract_patient_info("", today=date(2024, 1, 5))
    assert info.name == "Patient"
    assert info.age == "Unknown"
    assert info.gender == "Unknown"
    assert info.report_date == "01/05/2024"
    assert info.lab_name is None


def test_age_out_of_range_is_ignored():
    assert extract_patient_info("Age: 200").age == "Unknown"


def test_month_name_date():
    info = extract_patient_info("Collected on 5 March 2024")
    assert info.report_date == "5 March 2024"


def test_test_name_column_is_not_patient_name():
    info = extract_patient_info("Test Name: Hemoglobin\nPatient: Ravi Kumar\n")
    assert info.name == "Ravi Kumar"


def test_lab_keyword_inside_last_word():
    info = extract_patient_info("DR LAL PATHLABS\nPatient Name: Asha Rao\n")
    assert info.lab_name == "DR LAL PATHLABS"
    assert info.name == "Asha Rao"


def test_clinical_is_not_a_clinic():
    assert extract_patient_info("Clinical notes: none").lab_name is None
