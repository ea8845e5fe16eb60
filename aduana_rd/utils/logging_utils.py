"""
Logging utilities for the DR Vehicle Import Calculator.

Console output goes to stderr at Config.LOG_LEVEL; every entry point also
writes a DEBUG-level rotating file under Config.LOGS_DIR.
"""
import sys
from pathlib import Path
from loguru import logger
from aduana_rd.config.settings import Config

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"

def log_file_for(module_name: str) -> Path:
    """Entry points have a fixed file name; anything else logs to '<module_name>.log'."""
    filename = Config.LOG_FILES.get(module_name, f"{module_name}.log")
    return Config.LOGS_DIR / filename

def setup_logger(module_name: str = "aduana_rd") -> Path:
    """
    Replace loguru's default sink with a console sink and a rotating file sink.

    Args:
        module_name: Entry point name ("aduana_rd" for the CLI, "streamlit_app" for the web app)

    Returns:
        Path of the log file in use
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=Config.LOG_LEVEL)

    log_file = log_file_for(module_name)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        format=FILE_FORMAT,
        level="DEBUG",
        rotation=Config.LOG_ROTATION,
        retention=Config.LOG_RETENTION_DAYS,
        compression=Config.LOG_COMPRESSION,
        enqueue=True
    )

    logger.info(f"Logger initialized for {module_name} -> {log_file}")
    return log_file

def log_system_startup(component: str) -> None:
    logger.info(f"🚀 Starting {component}")

def log_system_error(component: str, error: str) -> None:
    logger.error(f"❌ {component} Error: {error}")

def log_system_success(component: str, message: str) -> None:
    logger.success(f"✅ {component}: {message}")

def log_rpc_call(rpc_name: str, params: dict) -> None:
    """Trace a Supabase RPC with the exact parameters sent."""
    logger.debug(f"📡 [Supabase] rpc={rpc_name} params={params}")

def log_rate_source(source: str, rate: float) -> None:
    logger.info(f"💱 Exchange rate {rate} DOP/USD from {source}")

def log_calculation(marca: str, modelo: str, total_usd: float, es_dr_cafta: bool) -> None:
    treaty = "DR-CAFTA" if es_dr_cafta else "General"
    logger.info(f"🧮 {marca} {modelo} | {treaty} | Total {total_usd:,.2f} USD")
