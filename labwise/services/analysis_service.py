# labwise/services/analysis_service.py
from datetime import date
from typing import Optional

from labwise.commons.errors import LabWiseError
from labwise.commons.logger import logger
from labwise.helpers.ocr_client import OcrSpaceClient
from labwise.parsers.models import AnalysisResult
from labwise.parsers.parameters import extract_parameters
from labwise.parsers.patient_info import extract_patient_info
from labwise.services.explanation_service import enhance_parameters
from labwise.services.recommendation_service import generate_recommendation


def analyze(raw_text: str, today: Optional[date] = None) -> AnalysisResult:
    """Text -> patient info, explained parameters and recommendation. Never raises on text input."""
    patient_info = extract_patient_info(raw_text, today=today)
    parameters = extract_parameters(raw_text)
    return AnalysisResult(
        patient_info=patient_info,
        parameters=enhance_parameters(parameters),
        recommendation=generate_recommendation(parameters),
    )


class AnalysisService:
    def __init__(self, ocr_client: OcrSpaceClient):
        self.ocr_client = ocr_client

    async def analyze_document(self, document: bytes, filename: str) -> AnalysisResult:
        # 1) OCR (único paso asíncrono)
        try:
            text = await self.ocr_client.recognize_text(document, filename)
        except LabWiseError as ex:
            logger.error(f"OCR falló para {filename}: {ex.message}")
            raise
        # 2) extracción + recomendación, sin suspensiones
        result = analyze(text)
        logger.info(
            f"Análisis de {filename}: {len(result.parameters)} parámetros, "
            f"urgencia={result.recommendation.urgency.value}"
        )
        return result
