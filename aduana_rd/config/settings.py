"""
Centralized configuration settings for the DR Vehicle Import Calculator.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Main configuration class containing all system settings."""

    # Base paths
    BASE_DIR = Path(__file__).parent.parent.parent
    LOGS_DIR = BASE_DIR / "logs"

    # Supabase Configuration
    SUPABASE_URL = os.getenv('SUPABASE_URL')
    SUPABASE_ANON_KEY = os.getenv('SUPABASE_ANON_KEY')

    # Exchange Rate Sources
    BCRD_API_URL = os.getenv('BCRD_API_URL', "https://api.bcrd.gob.do/indicators/exchange-rate")
    EXCHANGE_RATE_API_KEY = os.getenv('EXCHANGE_RATE_API_KEY', "")
    EXCHANGE_RATE_API_BASE = os.getenv('EXCHANGE_RATE_API_BASE', "https://v6.exchangerate-api.com/v6")
    FALLBACK_EXCHANGE_RATE = float(os.getenv('FALLBACK_EXCHANGE_RATE', "58.50"))
    RATE_CACHE_SECONDS = int(os.getenv('RATE_CACHE_SECONDS', "3600"))  # 1 hour
    RATE_TIMEOUT_SECONDS = 5

    # Dropdown Settings (seed lists shared across sessions)
    DROPDOWN_CACHE_SECONDS = 3600

    # Calculation Settings
    # Whether the backing store expects especificacion uppercased (pending confirmation with the data provider)
    UPPERCASE_ESPECIFICACION = _env_bool('UPPERCASE_ESPECIFICACION', False)

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', "INFO")
    LOG_ROTATION = "10 MB"
    LOG_RETENTION_DAYS = "14 days"
    LOG_COMPRESSION = "zip"
    MAIN_LOG_FILE = "aduana_rd.log"
    STREAMLIT_LOG_FILE = "streamlit_app.log"
    LOG_FILES = {
        "aduana_rd": MAIN_LOG_FILE,
        "streamlit_app": STREAMLIT_LOG_FILE,
    }

    REQUIRED_SETTINGS = ('SUPABASE_URL', 'SUPABASE_ANON_KEY')

    @classmethod
    def validate(cls) -> list:
        """Return the names of required settings that are not configured."""
        return [name for name in cls.REQUIRED_SETTINGS if not getattr(cls, name)]

    @classmethod
    def exchange_rate_api_url(cls) -> str:
        return f"{cls.EXCHANGE_RATE_API_BASE}/{cls.EXCHANGE_RATE_API_KEY}/latest/USD"
