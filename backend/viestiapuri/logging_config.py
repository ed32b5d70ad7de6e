"""
logging_config.py
------------------
Lokituksen alustus. Kutsutaan kerran käynnistyksessä (main.run).
"""

import logging
import sys


class FlushStreamHandler(logging.StreamHandler):
    """Tyhjentää puskurin jokaisen rivin jälkeen, jotta lokit näkyvät heti."""

    def emit(self, record):
        super().emit(record)
        self.flush()


def configure_logging(level: str = "INFO") -> None:
    # Poistetaan mahdolliset aiemmat handlerit (esim. uvicornin reload)
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
        handlers=[FlushStreamHandler(sys.stdout)],
    )
