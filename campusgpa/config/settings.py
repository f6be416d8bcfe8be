import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    db_path: str = os.getenv("CAMPUSGPA_DB_PATH", "data/campusgpa.db")
    web_mode: bool = os.getenv("CAMPUSGPA_WEB", "0") == "1"
    port: int = int(os.getenv("PORT", "8550"))
    low_grade_threshold: float = float(os.getenv("CAMPUSGPA_LOW_GRADE_THRESHOLD", "2.0"))
    log_level: str = os.getenv("CAMPUSGPA_LOG_LEVEL", "INFO")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = Settings()
