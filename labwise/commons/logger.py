import sys
from datetime import datetime
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}"


def setup_logging(root: str, level: str = "INFO", filename: str = "labwise.log"):
    """Archivo diario <root>/YYYY/MM/DD/<filename> + consola en stderr."""
    logdir = Path(root) / datetime.now().strftime("%Y/%m/%d")
    logdir.mkdir(parents=True, exist_ok=True)
    logger.remove()
    logger.add(
        str(logdir / filename),
        rotation="00:00",
        retention="14 days",
        level=level,
        enqueue=True,
        backtrace=True,
        # sin valores de variables en las trazas: contienen texto del reporte
        diagnose=False,
    )
    # stdout queda para el resumen y la ruta del JSON exportado
    logger.add(lambda m: print(m, end="", file=sys.stderr), level=level, format=CONSOLE_FORMAT)
    return logger
