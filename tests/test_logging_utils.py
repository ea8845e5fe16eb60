from loguru import logger

from aduana_rd.config.settings import Config
from aduana_rd.utils.logging_utils import log_calculation, log_file_for, setup_logger


def test_entry_points_use_configured_file_names(monkeypatch, tmp_path):
    monkeypatch.setattr(Config, "LOGS_DIR", tmp_path)

    assert log_file_for("aduana_rd") == tmp_path / Config.MAIN_LOG_FILE
    assert log_file_for("streamlit_app") == tmp_path / Config.STREAMLIT_LOG_FILE
    assert log_file_for("scratch") == tmp_path / "scratch.log"


def test_setup_logger_writes_debug_to_file(monkeypatch, tmp_path):
    monkeypatch.setattr(Config, "LOGS_DIR", tmp_path / "logs")

    log_file = setup_logger("aduana_rd")
    logger.debug("detalle de prueba")
    log_calculation("TOYOTA", "COROLLA", 7683.28, True)
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "detalle de prueba" in content
    assert "DR-CAFTA | Total 7,683.28 USD" in content
