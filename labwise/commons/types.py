from typing import Any, Dict

from pydantic import BaseModel, Field


class OcrCfg(BaseModel):
    api_url: str = "https://api.ocr.space/parse/image"
    api_key: str = ""
    fallback_api_key: str = ""
    language: str = "eng"
    engine: int = 2
    timeout_sec: float = 60.0
    max_file_mb: float = 5.0


class RetryCfg(BaseModel):
    attempts: int = Field(default=3, ge=1)
    backoff_sec: float = Field(default=2.0, ge=0)


class Settings(BaseModel):
    app: Dict[str, Any] = {}
    paths: Dict[str, str] = {"logs_root": "logs", "output": "output"}
    ocr: OcrCfg = OcrCfg()
    retry: RetryCfg = RetryCfg()
