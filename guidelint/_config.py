"""Konfiguracja guidelint — przez zmienne środowiskowe (flagi CLI mają pierwszeństwo)."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Settings:
    manifest: str | None     # domyślny manifest reguł
    mode: str                # strict | consistency
    output_format: str       # text | json | table
    http_timeout: float      # sekundy, dla lint-url
    log_level: str           # nazwa poziomu logging


def _float_env(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} musi być liczbą (otrzymano '{raw}').") from None
    if value <= 0:
        raise ValueError(f"{name} musi być dodatnie (otrzymano '{raw}').")
    return value


def load_settings() -> Settings:
    """
    Raises:
        ValueError: zmienna liczbowa ma nieprawidłową wartość.
    """
    return Settings(
        manifest      = os.getenv("GUIDELINT_MANIFEST") or None,
        mode          = os.getenv("GUIDELINT_MODE",         "strict"),
        output_format = os.getenv("GUIDELINT_FORMAT",       "text"),
        http_timeout  = _float_env("GUIDELINT_HTTP_TIMEOUT", "30"),
        log_level     = os.getenv("GUIDELINT_LOG_LEVEL",    "WARNING").upper(),
    )
