from __future__ import annotations


def _split_locale(locale: str) -> list[str]:
    if not isinstance(locale, str) or not locale.strip():
        raise ValueError(f"Locale must be a non-empty string, got {locale!r}")
    return locale.strip().replace("_", "-").split("-")


def to_language_code(locale: str) -> str:
    """Strip the region suffix from a locale tag (``fr-FR`` -> ``fr``)."""
    return _split_locale(locale)[0]


def to_upper_language_code(locale: str) -> str:
    """Uppercase language code used by backends such as DeepL (``de-DE`` -> ``DE``)."""
    return to_language_code(locale).upper()


def region_of(locale: str) -> str | None:
    parts = _split_locale(locale)
    if len(parts) < 2:
        return None
    return parts[1].upper()
