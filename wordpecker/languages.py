from typing import Dict

LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "ja": "Japanese",
    "zh": "Chinese",
    "ar": "Arabic",
    "ru": "Russian",
    "tr": "Turkish",
    "ko": "Korean",
}


def language_name(code: str) -> str:
    """Display name for a language code; unknown codes are returned as-is."""
    return LANGUAGE_NAMES.get(code.lower(), code)
