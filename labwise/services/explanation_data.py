# Canned explanations keyed by canonical test name, then by status.
from types import MappingProxyType
from typing import Dict, Mapping

_EXPLANATIONS: Dict[str, Dict[str, str]] = {
    "Hemoglobin": {
        "low": "Low hemoglobin indicates anemia, which means your blood has fewer red blood cells than normal. "
        "This can cause fatigue, weakness, and shortness of breath.",
        "high": "High hemoglobin levels may indicate dehydration, lung disease, or other conditions. "
        "Your blood is thicker than normal.",
    },
    "Red Blood Cell": {
        "low": "A low red blood cell count can mean anemia, blood loss, or a nutritional deficiency such as iron, B12 or folate.",
        "high": "A high red blood cell count may be caused by dehydration, smoking, or conditions that lower oxygen levels.",
    },
    "White Blood Cell": {
        "low": "A low white blood cell count can weaken your defence against infections. "
        "It may follow viral illness, some medicines, or bone marrow problems.",
        "high": "A high white blood cell count usually means your body is fighting an infection or inflammation.",
    },
    "Platelet": {
        "low": "Low platelets can make you bruise or bleed more easily.",
        "high": "High platelets are often a reaction to infection, inflammation or iron deficiency, "
        "and occasionally a bone marrow condition.",
    },
    "Glucose": {
        "high": "High blood glucose levels may indicate diabetes or prediabetes.",
        "low": "Low blood glucose can cause dizziness and weakness.",
    },
    "HbA1c": {
        "high": "HbA1c reflects your average blood sugar over the last 2-3 months. "
        "A high value suggests prediabetes or diabetes.",
    },
    "Creatinine": {
        "high": "High creatinine levels suggest your kidneys may not be filtering waste effectively.",
        "low": "Low creatinine is usually related to low muscle mass and is rarely a concern on its own.",
    },
    "Urea": {
        "high": "High urea can mean dehydration, a high protein diet, or reduced kidney function.",
        "low": "Low urea may be seen with low protein intake or liver problems.",
    },
    "Uric Acid": {
        "high": "High uric acid can lead to gout and kidney stones.",
    },
    "Cholesterol": {
        "high": "High cholesterol increases your risk of heart disease and stroke over time.",
        "low": "Low cholesterol is uncommon and is usually not a concern, but may relate to diet or thyroid activity.",
    },
    "HDL Cholesterol": {
        "low": "HDL is the 'good' cholesterol. A low level means less protection against heart disease.",
        "high": "A high HDL level is generally considered protective for your heart.",
    },
    "LDL Cholesterol": {
        "high": "LDL is the 'bad' cholesterol. High levels can build up in artery walls and raise heart disease risk.",
    },
    "Triglycerides": {
        "high": "High triglycerides are linked to diet, alcohol, excess weight and diabetes, and raise heart disease risk.",
    },
    "Liver": {
        "high": "Raised liver enzymes suggest irritation or injury of liver cells, "
        "which can be caused by fatty liver, alcohol, medicines or infection.",
        "low": "Low liver enzyme values are rarely significant.",
    },
    "Bilirubin": {
        "high": "High bilirubin can cause yellowing of the skin and eyes and may point to liver or bile duct problems, "
        "or faster breakdown of red blood cells.",
    },
    "Albumin": {
        "low": "Low albumin may reflect poor nutrition, liver disease, or protein loss through the kidneys.",
    },
    "TSH": {
        "high": "High TSH usually means an underactive thyroid (hypothyroidism), which can cause tiredness and weight gain.",
        "low": "Low TSH usually means an overactive thyroid (hyperthyroidism), "
        "which can cause weight loss and a fast heartbeat.",
    },
    "Sodium": {
        "low": "Low sodium can cause confusion, headache and muscle cramps, and is often related to fluid balance or medicines.",
        "high": "High sodium usually means dehydration.",
    },
    "Potassium": {
        "high": "High potassium can affect your heart rhythm and needs prompt review.",
        "low": "Low potassium can cause muscle weakness, cramps and irregular heartbeat.",
    },
    "Calcium": {
        "high": "High calcium can be caused by parathyroid problems or some medicines, and may cause thirst and tiredness.",
        "low": "Low calcium may relate to low vitamin D or parathyroid function and can cause tingling or cramps.",
    },
    "Vitamin D": {
        "low": "Low vitamin D is common and can affect bone strength, muscles and immunity.",
    },
    "Vitamin B12": {
        "low": "Low vitamin B12 can cause anemia, tiredness, and tingling in the hands and feet.",
    },
    "Ferritin": {
        "low": "Low ferritin means your iron stores are depleted, which is the most common cause of anemia.",
        "high": "High ferritin can be a sign of inflammation, liver disease or iron overload.",
    },
    "CRP": {
        "high": "A raised CRP shows there is inflammation or infection somewhere in the body.",
    },
    "Lymphocyte": {
        "low": "A low lymphocyte percentage could indicate a recent infection or immune system stress.",
        "high": "A high lymphocyte percentage is often seen during or after viral infections.",
    },
    "Neutrophil": {
        "high": "A high neutrophil percentage usually points to a bacterial infection or stress response.",
        "low": "A low neutrophil percentage can increase the risk of infections.",
    },
    "Monocyte": {
        "low": "A slightly low monocyte count is usually not concerning but is worth monitoring in follow-up tests.",
        "high": "High monocytes may be seen with chronic infections or inflammation.",
    },
    "Eosinophil": {
        "high": "High eosinophils are commonly associated with allergies, asthma or parasitic infections.",
    },
}

EXPLANATIONS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {name: MappingProxyType(by_status) for name, by_status in _EXPLANATIONS.items()}
)
