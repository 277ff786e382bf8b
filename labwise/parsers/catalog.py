# ===============================
# File: labwise/parsers/catalog.py
# ===============================
"""Reference catalog of the lab tests the parameter extractor looks for.

Entries whose synonyms contain another entry's synonym (MCH / Hemoglobin,
Direct Bilirubin / Bilirubin, Free T3 / T3, ...) are listed first, so the
more specific test claims its line before the generic one can.
Synonyms are matched case-insensitively and longest-first within an entry.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    synonyms: Tuple[str, ...]
    normal_range: str  # "min-max"
    unit: str


def _entry(name: str, synonyms: str, normal_range: str, unit: str) -> CatalogEntry:
    return CatalogEntry(name, tuple(synonyms.split("|")), normal_range, unit)


CATALOG: Tuple[CatalogEntry, ...] = (
    # --- Hematology ---
    _entry("MCHC", "Mean Corpuscular Hemoglobin Concentration|Mean Cell Hemoglobin Concentration|MCHC", "32.0-36.0", "g/dL"),
    _entry("MCH", "Mean Corpuscular Hemoglobin|Mean Cell Hemoglobin|MCH", "27.0-33.0", "pg"),
    _entry("MCV", "Mean Corpuscular Volume|Mean Cell Volume|MCV", "80-100", "fL"),
    _entry("HbA1c", "Glycated Hemoglobin|Glycosylated Hemoglobin|HbA1c|A1C", "4.0-5.6", "%"),
    _entry("Hemoglobin", "Hemoglobin|Haemoglobin|HGB|Hb", "13.0-17.0", "g/dL"),
    _entry("RDW", "Red Cell Distribution Width|RDW-CV|RDW", "11.5-14.5", "%"),
    _entry("Red Blood Cell", "Red Blood Cell Count|Red Blood Cells|Red Blood Cell|Total RBC|RBC Count|RBC", "4.5-5.5", "million/mcL"),
    _entry(
        "White Blood Cell",
        "White Blood Cell Count|White Blood Cells|White Blood Cell|Total Leucocyte Count|"
        "Total Leukocyte Count|Total WBC|WBC Count|TLC|WBC",
        "4000-11000",
        "/mcL",
    ),
    _entry("MPV", "Mean Platelet Volume|MPV", "7.5-11.5", "fL"),
    _entry("Platelet", "Platelet Count|Platelets|Platelet|PLT", "150-450", "thousand/mcL"),
    _entry("Hematocrit", "Hematocrit|Haematocrit|Packed Cell Volume|PCV|HCT", "40-50", "%"),
    _entry("Neutrophil", "Neutrophils|Neutrophil|NEUT", "50-70", "%"),
    _entry("Lymphocyte", "Lymphocytes|Lymphocyte|LYMPH", "20-40", "%"),
    _entry("Monocyte", "Monocytes|Monocyte|MONO", "2-10", "%"),
    _entry("Eosinophil", "Eosinophils|Eosinophil|EOS", "1-4", "%"),
    _entry("Basophil", "Basophils|Basophil|BASO", "0-1", "%"),
    _entry("ESR", "Erythrocyte Sedimentation Rate|ESR", "0-20", "mm/hr"),
    _entry("Reticulocyte", "Reticulocyte Count|Reticulocytes|Retic", "0.5-2.5", "%"),
    # --- Diabetes ---
    _entry(
        "Glucose",
        "Fasting Blood Sugar|Fasting Glucose|Random Glucose|Blood Glucose|Blood Sugar|Glucose|Sugar|FBS|RBS",
        "70-100",
        "mg/dL",
    ),
    _entry("Insulin", "Fasting Insulin|Insulin", "2.6-24.9", "uIU/mL"),
    # --- Kidney ---
    _entry("eGFR", "Estimated GFR|eGFR|GFR", "90-120", "mL/min/1.73m2"),
    _entry("Urea", "Blood Urea Nitrogen|Urea Nitrogen|Blood Urea|Urea|BUN", "7-20", "mg/dL"),
    _entry("Creatinine", "Serum Creatinine|Creatinine", "0.6-1.3", "mg/dL"),
    _entry("Uric Acid", "Serum Uric Acid|Uric Acid", "3.5-7.2", "mg/dL"),
    # --- Electrolytes ---
    _entry("Sodium", "Serum Sodium|Sodium", "135-145", "mmol/L"),
    _entry("Potassium", "Serum Potassium|Potassium", "3.5-5.1", "mmol/L"),
    _entry("Chloride", "Serum Chloride|Chloride", "98-107", "mmol/L"),
    _entry("Bicarbonate", "Bicarbonate|Total CO2|HCO3", "22-29", "mmol/L"),
    _entry("Calcium", "Serum Calcium|Total Calcium|Calcium", "8.5-10.5", "mg/dL"),
    _entry("Phosphorus", "Inorganic Phosphorus|Phosphorus|Phosphate", "2.5-4.5", "mg/dL"),
    _entry("Magnesium", "Serum Magnesium|Magnesium", "1.7-2.2", "mg/dL"),
    # --- Lipids ---
    _entry("HDL Cholesterol", "HDL Cholesterol|High Density Lipoprotein|HDL", "40-60", "mg/dL"),
    _entry("VLDL Cholesterol", "VLDL Cholesterol|Very Low Density Lipoprotein|VLDL", "5-40", "mg/dL"),
    _entry("LDL Cholesterol", "LDL Cholesterol|Low Density Lipoprotein|LDL", "50-130", "mg/dL"),
    _entry("Cholesterol", "Total Cholesterol|Serum Cholesterol|Cholesterol", "150-200", "mg/dL"),
    _entry("Triglycerides", "Triglycerides|Triglyceride|TG", "50-150", "mg/dL"),
    # --- Liver ---
    _entry("Direct Bilirubin", "Direct Bilirubin|Conjugated Bilirubin|Bilirubin Direct", "0.0-0.3", "mg/dL"),
    _entry("Indirect Bilirubin", "Indirect Bilirubin|Unconjugated Bilirubin|Bilirubin Indirect", "0.2-0.9", "mg/dL"),
    _entry("Bilirubin", "Total Bilirubin|Bilirubin Total|Serum Bilirubin|Bilirubin", "0.3-1.2", "mg/dL"),
    _entry("ALT", "Alanine Aminotransferase|Alanine Transaminase|SGPT|ALT", "7-56", "U/L"),
    _entry("AST", "Aspartate Aminotransferase|Aspartate Transaminase|SGOT|AST", "10-40", "U/L"),
    _entry("Alkaline Phosphatase", "Alkaline Phosphatase|ALP", "44-147", "U/L"),
    _entry("GGT", "Gamma Glutamyl Transferase|Gamma GT|GGTP|GGT", "9-48", "U/L"),
    _entry("A/G Ratio", "Albumin/Globulin Ratio|A/G Ratio|AG Ratio", "1.1-2.5", "ratio"),
    _entry("Albumin", "Serum Albumin|Albumin", "3.5-5.0", "g/dL"),
    _entry("Globulin", "Serum Globulin|Globulin", "2.0-3.5", "g/dL"),
    _entry("Total Protein", "Total Proteins|Total Protein|Serum Protein", "6.0-8.3", "g/dL"),
    _entry("LDH", "Lactate Dehydrogenase|LDH", "140-280", "U/L"),
    # --- Thyroid ---
    _entry("Free T3", "Free Triiodothyronine|Free T3|FT3", "2.3-4.2", "pg/mL"),
    _entry("Free T4", "Free Thyroxine|Free T4|FT4", "0.8-1.8", "ng/dL"),
    _entry("T3", "Total T3|Triiodothyronine|T3", "80-200", "ng/dL"),
    _entry("T4", "Total T4|Thyroxine|T4", "5.0-12.0", "ug/dL"),
    _entry("TSH", "Thyroid Stimulating Hormone|TSH", "0.4-4.0", "mIU/L"),
    # --- Iron studies ---
    _entry("Transferrin Saturation", "Transferrin Saturation|TSAT", "20-50", "%"),
    _entry("TIBC", "Total Iron Binding Capacity|TIBC", "250-450", "ug/dL"),
    _entry("Ferritin", "Serum Ferritin|Ferritin", "30-400", "ng/mL"),
    _entry("Iron", "Serum Iron|Iron", "60-170", "ug/dL"),
    # --- Vitamins ---
    _entry("Vitamin D", "25-Hydroxy Vitamin D|25-OH Vitamin D|Vitamin D3|Vitamin D|Vit D", "30-100", "ng/mL"),
    _entry("Vitamin B12", "Vitamin B12|Vit B12|Cobalamin|B12", "200-900", "pg/mL"),
    _entry("Folate", "Serum Folate|Folic Acid|Folate", "2.7-17.0", "ng/mL"),
    # --- Inflammation / cardiac ---
    _entry("hs-CRP", "High Sensitivity CRP|hs-CRP|hsCRP", "0.1-3.0", "mg/L"),
    _entry("CRP", "C-Reactive Protein|C Reactive Protein|CRP", "0.1-10.0", "mg/L"),
    _entry("Troponin", "Troponin I|Troponin T|Troponin", "0.01-0.04", "ng/mL"),
    _entry("CK-MB", "CK-MB|CKMB", "0-25", "U/L"),
    _entry("Creatine Kinase", "Creatine Kinase|CPK|CK", "30-200", "U/L"),
    _entry("Amylase", "Serum Amylase|Amylase", "30-110", "U/L"),
    _entry("Lipase", "Serum Lipase|Lipase", "10-140", "U/L"),
    # --- Coagulation ---
    _entry("INR", "International Normalized Ratio|INR", "0.8-1.2", "ratio"),
    _entry("APTT", "Activated Partial Thromboplastin Time|APTT", "25-35", "seconds"),
    _entry("Prothrombin Time", "Prothrombin Time|PT", "11.0-13.5", "seconds"),
    _entry("D-Dimer", "D-Dimer|D Dimer", "0.1-0.5", "ug/mL"),
    # --- Hormones / markers ---
    _entry("PSA", "Prostate Specific Antigen|Total PSA|PSA", "0.1-4.0", "ng/mL"),
    _entry("Cortisol", "Serum Cortisol|Cortisol", "6-23", "ug/dL"),
    _entry("Prolactin", "Serum Prolactin|Prolactin", "4-23", "ng/mL"),
    _entry("Testosterone", "Total Testosterone|Testosterone", "300-1000", "ng/dL"),
)


def _build_synonym_index() -> Dict[str, CatalogEntry]:
    index: Dict[str, CatalogEntry] = {}
    for entry in CATALOG:
        for syn in (entry.name,) + entry.synonyms:
            index.setdefault(syn.lower(), entry)
    return index


_SYNONYM_INDEX = _build_synonym_index()


def lookup(name: str) -> Optional[CatalogEntry]:
    """Catalog entry whose canonical name or synonym equals ``name`` (any case)."""
    return _SYNONYM_INDEX.get(" ".join((name or "").split()).lower())
