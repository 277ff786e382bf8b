import asyncio
import os
import sys
from pathlib import Path
from typing import Optional

import typer
import yaml

from labwise.commons.errors import LabWiseError
from labwise.commons.logger import setup_logging
from labwise.commons.types import Settings
from labwise.helpers.ocr_client import OcrSpaceClient
from labwise.helpers.report_export import calculate_summary_stats, export_json, format_file_name, urgency_style
from labwise.parsers.models import AnalysisResult
from labwise.services.analysis_service import AnalysisService, analyze

app = typer.Typer(add_completion=False, help="LabWise lab report analyzer")

DEFAULT_CFG = Path(__file__).resolve().parent / "labwise" / "configs" / "settings.yaml"


def load_cfg(path: Optional[str] = None) -> Settings:
    """Carga settings.yaml; las claves OCR pueden venir de variables de entorno."""
    config_path = Path(path or os.getenv("LABWISE_CONFIG", DEFAULT_CFG))
    raw = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    cfg = Settings.model_validate(raw)
    cfg.ocr.api_key = os.getenv("OCR_API_KEY", cfg.ocr.api_key)
    cfg.ocr.fallback_api_key = os.getenv("OCR_FALLBACK_API_KEY", cfg.ocr.fallback_api_key)
    return cfg


def _logging(cfg: Settings):
    return setup_logging(cfg.paths.get("logs_root", "logs"), os.getenv("LOG_LEVEL", cfg.app.get("log_level", "INFO")))


def _print_summary(result: AnalysisResult) -> None:
    info = result.patient_info
    rec = result.recommendation
    stats = calculate_summary_stats(result)
    label, _ = urgency_style(rec.urgency)

    typer.echo(f"Patient: {info.name} | {info.age} | {info.gender} | {info.report_date}")
    if info.lab_name:
        typer.echo(f"Laboratory: {info.lab_name}")
    typer.echo(
        f"Parameters: {stats.total} (normal {stats.normal}, attention {stats.attention}, critical {stats.critical})"
    )
    for p in result.parameters:
        typer.echo(f"  - {p.name}: {p.value:g} {p.unit} [{p.normal_range}] {p.status.value}/{p.severity.value}")
    typer.echo(f"{label}: see a {rec.specialty.value} ({rec.timeframe})")
    typer.echo(f"  {rec.reason}")
    for step in rec.next_steps:
        typer.echo(f"  * {step}")


def _write(result: AnalysisResult, cfg: Settings, output: Optional[Path]) -> Path:
    out = output or Path(cfg.paths.get("output", "output")) / format_file_name(result.patient_info.name)
    return export_json(result, out)


@app.command()
def parse(
    text_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="texto ya transcrito"),
    output: Optional[Path] = typer.Option(None, help="ruta del JSON exportado"),
):
    """Analiza un reporte ya convertido a texto."""
    cfg = load_cfg()
    logger = _logging(cfg)
    logger.info(f"Analizando texto {text_file}")
    result = analyze(text_file.read_text(encoding="utf-8"))
    _print_summary(result)
    typer.echo(f"Exported: {_write(result, cfg, output)}")


@app.command("analyze")
def analyze_document(
    document: Path = typer.Argument(..., exists=True, dir_okay=False, help="imagen o PDF del reporte"),
    output: Optional[Path] = typer.Option(None, help="ruta del JSON exportado"),
):
    """OCR + análisis de un reporte fotografiado o escaneado."""
    cfg = load_cfg()
    logger = _logging(cfg)
    svc = AnalysisService(OcrSpaceClient(cfg.ocr, cfg.retry))
    try:
        result = asyncio.run(svc.analyze_document(document.read_bytes(), document.name))
    except LabWiseError as ex:
        logger.error(f"Error procesando {document}: {ex.message}")
        typer.echo(f"Error: {ex.message}", err=True)
        raise typer.Exit(code=1)
    _print_summary(result)
    typer.echo(f"Exported: {_write(result, cfg, output)}")


@app.command("check-key")
def check_key(api_key: Optional[str] = typer.Argument(None, help="por defecto la clave configurada")):
    """Valida una clave de OCR.space."""
    cfg = load_cfg()
    _logging(cfg)
    key = api_key or cfg.ocr.api_key
    if not key:
        typer.echo("Error: no API key given or configured", err=True)
        raise typer.Exit(code=2)
    ok, error = asyncio.run(OcrSpaceClient(cfg.ocr, cfg.retry).validate_api_key(key))
    if not ok:
        typer.echo(f"Invalid: {error}", err=True)
        raise typer.Exit(code=1)
    typer.echo("API key is valid")


if __name__ == "__main__":
    sys.exit(app())
