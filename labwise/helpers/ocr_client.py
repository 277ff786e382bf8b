import asyncio
from typing import Any, Dict, List, Optional, Tuple

import httpx

from labwise.commons.errors import (
    InvalidCredentialError,
    LowQualityScanError,
    OcrServiceError,
    QuotaExceededError,
    RateLimitError,
    TransientOcrError,
)
from labwise.commons.logger import logger
from labwise.commons.types import OcrCfg, RetryCfg
from labwise.validation.validators import validate_document_or_raise, validate_text_or_raise

# 1x1 PNG used to probe a key
_PROBE_IMAGE = (
    "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk"
    "+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)


def _is_credential_message(message: str) -> bool:
    m = (message or "").lower()
    return "api key" in m or "apikey" in m


def _is_quota_message(message: str) -> bool:
    return "quota" in (message or "").lower()


class OcrSpaceClient:
    """Async client for the OCR.space parse endpoint.

    Rate limiting is retried with exponential backoff. A key that is
    invalid, out of quota or still rate limited after the last retry fails
    over once to the fallback key. Everything else surfaces immediately as
    a LabWiseError subclass.
    """

    def __init__(
        self,
        cfg: OcrCfg,
        retry: Optional[RetryCfg] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cfg = cfg
        self.retry = retry or RetryCfg()
        self.transport = transport

    def _keys(self) -> List[str]:
        return [k for k in dict.fromkeys([self.cfg.api_key, self.cfg.fallback_api_key]) if k]

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.cfg.timeout_sec, transport=self.transport)

    def _form(self, api_key: str) -> Dict[str, str]:
        return {
            "apikey": api_key,
            "language": self.cfg.language,
            "isOverlayRequired": "false",
            "detectOrientation": "true",
            "isTable": "true",
            "scale": "true",
            "OCREngine": str(self.cfg.engine),
        }

    async def _post(
        self, client: httpx.AsyncClient, data: Dict[str, str], files: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        attempts = self.retry.attempts
        for attempt in range(1, attempts + 1):
            logger.debug(f"OCR intento {attempt}/{attempts}")
            try:
                resp = await client.post(self.cfg.api_url, data=data, files=files)
            except httpx.HTTPError as ex:
                logger.error(f"OCR sin respuesta: {ex}")
                raise OcrServiceError(f"Could not reach the OCR service: {ex}") from ex

            rate_limited = resp.status_code == 429 or (
                resp.status_code == 403 and "concurrent connections" in resp.text.lower()
            )
            if rate_limited:
                if attempt < attempts:
                    delay = self.retry.backoff_sec * 2 ** (attempt - 1)
                    logger.warning(f"OCR rate limited, reintento en {delay}s")
                    await asyncio.sleep(delay)
                    continue
                raise RateLimitError(
                    "The OCR service is busy (too many concurrent requests). Please try again later."
                )
            if resp.status_code in (401, 403):
                logger.error(f"OCR {resp.status_code}: {resp.text[:200]}")
                raise InvalidCredentialError(
                    "OCR API access denied. Please check your OCR.space API key."
                )
            if resp.status_code >= 400:
                raise OcrServiceError(
                    f"OCR API request failed: {resp.status_code} - {resp.reason_phrase}"
                )
            try:
                return resp.json()
            except ValueError as ex:
                logger.error(f"Respuesta OCR no es JSON: {resp.text[:200]}")
                raise OcrServiceError("The OCR service returned an unreadable response.") from ex
        raise RateLimitError("The OCR service is busy. Please try again later.")

    @staticmethod
    def _raise_for_processing_error(result: Dict[str, Any]) -> None:
        if not result.get("IsErroredOnProcessing"):
            return
        parsed = result.get("ParsedResults") or [{}]
        message = parsed[0].get("ErrorMessage") or result.get("ErrorMessage") or "Unknown OCR processing error"
        if isinstance(message, list):
            message = " ".join(str(m) for m in message)
        if _is_credential_message(message):
            raise InvalidCredentialError(f"OCR processing failed: {message}")
        if _is_quota_message(message):
            raise QuotaExceededError(f"OCR quota exceeded: {message}")
        raise OcrServiceError(f"OCR processing failed: {message}")

    async def recognize_text(self, document: bytes, filename: str) -> str:
        max_bytes = int(self.cfg.max_file_mb * 1024 * 1024)
        validate_document_or_raise(filename, len(document), max_bytes)

        keys = self._keys()
        if not keys:
            raise InvalidCredentialError("No OCR API key configured. Set OCR_API_KEY or ocr.api_key.")

        last_error: Optional[Exception] = None
        async with self._client() as client:
            for idx, key in enumerate(keys):
                logger.info(f"OCR de {filename} ({len(document) // 1024} KB) con clave #{idx + 1}")
                try:
                    result = await self._post(
                        client, self._form(key), files={"file": (filename, document)}
                    )
                    self._raise_for_processing_error(result)
                except (InvalidCredentialError, TransientOcrError) as ex:
                    last_error = ex
                    if idx + 1 < len(keys):
                        logger.warning(f"Clave OCR #{idx + 1} falló ({ex.message}), probando la secundaria")
                    continue

                parsed = result.get("ParsedResults") or []
                if not parsed:
                    raise LowQualityScanError(
                        "No text could be extracted from the image. "
                        "Please ensure the image is clear and contains readable text."
                    )
                text = parsed[0].get("ParsedText") or ""
                logger.info(f"OCR completado, longitud de texto: {len(text)}")
                return validate_text_or_raise(text)

        if len(keys) > 1 and not isinstance(last_error, RateLimitError):
            raise InvalidCredentialError(
                "Both primary and secondary OCR API keys failed. "
                "Please check your API key or try again later."
            ) from last_error
        raise last_error

    async def validate_api_key(self, api_key: str) -> Tuple[bool, Optional[str]]:
        form = self._form(api_key)
        form["base64Image"] = _PROBE_IMAGE
        form["isTable"] = "false"
        try:
            async with self._client() as client:
                result = await self._post(client, form)
            self._raise_for_processing_error(result)
        except InvalidCredentialError:
            return False, "Invalid API key. Please check your OCR.space API key."
        except (RateLimitError, QuotaExceededError) as ex:
            return False, ex.message
        except OcrServiceError as ex:
            if not ex.message.startswith("OCR processing failed"):
                return False, ex.message
            # La clave fue aceptada; el servicio rechazó la imagen de prueba
            logger.debug(f"Validación de clave: {ex.message}")
        return True, None
