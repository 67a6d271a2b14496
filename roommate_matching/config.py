from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    top_k: int = 10
    openai_model: str = "gpt-5-mini"


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings() -> Settings:
    """Read settings from the environment (after loading a local .env, if any)."""
    load_dotenv()
    return Settings(
        log_level=os.environ.get("ROOMMATE_MATCH_LOG_LEVEL", "WARNING").upper(),
        top_k=_int_env("ROOMMATE_MATCH_TOP_K", 10),
        openai_model=os.environ.get("OPENAI_MODEL", "gpt-5-mini"),
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
