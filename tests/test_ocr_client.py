# flake8: noqa

import httpx
import pytest

from labwise.commons.errors import (
    FileTooLargeError,
    InvalidCredentialError,
    LowQualityScanError,
    OcrServiceError,
    RateLimitError,
    UnsupportedDocumentError,
)
from labwise.commons.types import OcrCfg, RetryCfg
from labwise.helpers.ocr_client import OcrSpaceClient

TEXT = "Hemoglobin: 10.5 g/dL\nFasting Glucose: 145 mg/dL"

OK = {"ParsedResults": [{"ParsedText": TEXT}], "IsErroredOnProcessing": False}


def _client(handler, api_key="key-primary", fallback="", max_file_mb=5.0, attempts=3):
    cfg = OcrCfg(api_key=api_key, fallback_api_key=fallback, max_file_mb=max_file_mb)
    return OcrSpaceClient(cfg, RetryCfg(attempts=attempts, backoff_sec=0), transport=httpx.MockTransport(handler))


def _resp(status, **kwargs):
    # una respuesta nueva por request
    return lambda request: httpx.Response(status, **kwargs)


def _by_key(primary, secondary):
    return lambda request: (secondary if b"key-secondary" in request.content else primary)(request)


class Recorder:
    """Handler that replays ``responses`` in order (the last one repeats) and records the key of each call."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.keys = []

    def __call__(self, request: httpx.Request):
        self.keys.append("secondary" if b"key-secondary" in request.content else "primary")
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        return response(request)


@pytest.mark.asyncio
async def test_recognize_text_ok():
    rec = Recorder(_resp(200, json=OK))
    text = await _client(rec).recognize_text(b"img", "report.png")
    assert text == TEXT
    assert rec.keys == ["primary"]


@pytest.mark.asyncio
async def test_rate_limit_is_retried():
    rec = Recorder(_resp(429), _resp(429), _resp(200, json=OK))
    text = await _client(rec).recognize_text(b"img", "report.png")
    assert text == TEXT
    assert len(rec.keys) == 3


@pytest.mark.asyncio
async def test_rate_limit_gives_up_after_attempts():
    rec = Recorder(_resp(403, text="You may only perform 10 concurrent connections"))
    with pytest.raises(RateLimitError):
        await _client(rec, attempts=2).recognize_text(b"img", "report.png")
    assert len(rec.keys) == 2


@pytest.mark.asyncio
async def test_failover_to_secondary_key():
    rec = Recorder(_by_key(_resp(403, text="Forbidden"), _resp(200, json=OK)))
    text = await _client(rec, fallback="key-secondary").recognize_text(b"img", "report.png")
    assert text == TEXT
    assert rec.keys == ["primary", "secondary"]


@pytest.mark.asyncio
async def test_quota_on_primary_fails_over():
    quota = {
        "IsErroredOnProcessing": True,
        "ErrorMessage": ["Daily quota exceeded for this account"],
    }
    rec = Recorder(_by_key(_resp(200, json=quota), _resp(200, json=OK)))
    text = await _client(rec, fallback="key-secondary").recognize_text(b"img", "report.png")
    assert text == TEXT


@pytest.mark.asyncio
async def test_both_keys_rejected():
    rec = Recorder(_resp(401))
    with pytest.raises(InvalidCredentialError) as ex:
        await _client(rec, fallback="key-secondary").recognize_text(b"img", "report.png")
    assert ex.value.message.startswith("Both primary and secondary")
    assert rec.keys == ["primary", "secondary"]


@pytest.mark.asyncio
async def test_single_key_rejected():
    rec = Recorder(_resp(401))
    with pytest.raises(InvalidCredentialError):
        await _client(rec).recognize_text(b"img", "report.png")
    assert rec.keys == ["primary"]


@pytest.mark.asyncio
async def test_no_key_configured():
    rec = Recorder(_resp(200, json=OK))
    with pytest.raises(InvalidCredentialError):
        await _client(rec, api_key="").recognize_text(b"img", "report.png")
    assert rec.keys == []


@pytest.mark.asyncio
async def test_file_checks_happen_before_any_request():
    rec = Recorder(_resp(200, json=OK))
    with pytest.raises(FileTooLargeError):
        await _client(rec, max_file_mb=0.001).recognize_text(b"x" * 2000, "report.png")
    with pytest.raises(UnsupportedDocumentError):
        await _client(rec).recognize_text(b"x", "report.docx")
    assert rec.keys == []


@pytest.mark.asyncio
async def test_no_text_is_low_quality():
    empty = Recorder(_resp(200, json={"ParsedResults": [], "IsErroredOnProcessing": False}))
    with pytest.raises(LowQualityScanError):
        await _client(empty).recognize_text(b"img", "report.png")

    short = Recorder(_resp(200, json={"ParsedResults": [{"ParsedText": " ab "}]}))
    with pytest.raises(LowQualityScanError):
        await _client(short).recognize_text(b"img", "report.png")


@pytest.mark.asyncio
async def test_server_error_is_terminal():
    rec = Recorder(_resp(500))
    with pytest.raises(OcrServiceError):
        await _client(rec, fallback="key-secondary").recognize_text(b"img", "report.png")
    assert rec.keys == ["primary"]


@pytest.mark.asyncio
async def test_validate_api_key():
    good = _client(Recorder(_resp(200, json=OK)))
    assert await good.validate_api_key("key-primary") == (True, None)

    bad = _client(Recorder(_resp(403, text="Forbidden")))
    ok, error = await bad.validate_api_key("key-primary")
    assert not ok
    assert error == "Invalid API key. Please check your OCR.space API key."

    # la clave se aceptó aunque la imagen de prueba no se pudo leer
    unreadable = {"IsErroredOnProcessing": True, "ErrorMessage": ["Unable to recognize the file type"]}
    probe = _client(Recorder(_resp(200, json=unreadable)))
    assert await probe.validate_api_key("key-primary") == (True, None)


@pytest.mark.asyncio
async def test_rate_limited_primary_fails_over_after_retries():
    busy = _resp(403, text="You may only perform 10 concurrent connections")
    rec = Recorder(_by_key(busy, _resp(200, json=OK)))
    text = await _client(rec, fallback="key-secondary").recognize_text(b"img", "report.png")
    assert text == TEXT
    assert rec.keys == ["primary", "primary", "primary", "secondary"]


@pytest.mark.asyncio
async def test_both_keys_rate_limited():
    rec = Recorder(_resp(429))
    with pytest.raises(RateLimitError):
        await _client(rec, fallback="key-secondary", attempts=2).recognize_text(b"img", "report.png")
    assert rec.keys == ["primary", "primary", "secondary", "secondary"]


@pytest.mark.asyncio
async def test_non_json_body_is_a_service_error():
    rec = Recorder(_resp(200, text="<html>maintenance</html>"))
    with pytest.raises(OcrServiceError) as ex:
        await _client(rec).recognize_text(b"img", "report.png")
    assert "unreadable response" in ex.value.message
