import logging
import os

APP_NAME = "MovieVerse Replay"
APP_VERSION = "1.0.0"

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

PASSWORD_SCHEME = os.getenv("PASSWORD_SCHEME", "pbkdf2_sha256")

FREE_PREMIUM_MOVIES = int(os.getenv("FREE_PREMIUM_MOVIES", "15"))
MOVIE_PRICE_TOKENS = int(os.getenv("MOVIE_PRICE_TOKENS", "2"))
PREMIUM_PRICE_TOKENS = int(os.getenv("PREMIUM_PRICE_TOKENS", "10"))
MIN_RATING = 1
MAX_RATING = 5

# 0 keeps every snapshot
HISTORY_MAX_DEPTH = max(0, int(os.getenv("HISTORY_MAX_DEPTH", "0")))


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING), format=LOG_FORMAT)
