"""
config.py
----------
Sovelluksen asetukset ympäristömuuttujista (ja .env-tiedostosta).

API-avainta ei kirjoiteta koodiin: se luetaan DASHSCOPE_API_KEY-muuttujasta
ja sen olemassaolo tarkistetaan käynnistyksessä.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

from viestiapuri.errors import ConfigError

load_dotenv()

DEFAULT_DASHSCOPE_URL = (
    "https://dashscope.aliyuncs.com/api/v1/services/aigc/text-generation/generation"
)


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Kaikki konfiguraatio yhdessä paikassa."""

    def __init__(self, **overrides):
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "3000"))
        self.database_url: str = os.getenv("DATABASE_URL", "sqlite:///./feedback.db")
        self.sql_echo: bool = _env_bool("SQL_ECHO")
        self.dashscope_api_key: str | None = os.getenv("DASHSCOPE_API_KEY")
        self.dashscope_url: str = os.getenv("DASHSCOPE_URL", DEFAULT_DASHSCOPE_URL)
        self.dashscope_model: str = os.getenv("DASHSCOPE_MODEL", "qwen-turbo")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise TypeError(f"Tuntematon asetus: {key}")
            setattr(self, key, value)

    def validate(self) -> None:
        """Kaatuu heti, jos pakollinen API-avain puuttuu."""
        if not self.dashscope_api_key:
            raise ConfigError(
                "DASHSCOPE_API_KEY puuttuu. Aseta se ympäristöön tai .env-tiedostoon."
            )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
