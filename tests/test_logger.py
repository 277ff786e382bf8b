# flake8: noqa

from labwise.commons.logger import setup_logging


def test_setup_logging_writes_dated_file(tmp_path):
    log = setup_logging(str(tmp_path), "INFO")
    log.debug("no debe aparecer")
    log.info("Análisis listo")
    log.remove()  # drena la cola del sink de archivo

    [logfile] = list(tmp_path.rglob("labwise.log"))
    assert len(logfile.relative_to(tmp_path).parts) == 4  # YYYY/MM/DD/labwise.log
    content = logfile.read_text(encoding="utf-8")
    assert "Análisis listo" in content
    assert "no debe aparecer" not in content
