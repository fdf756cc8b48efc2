"""Transcription languages accepted by the Trint upload server."""

from types import MappingProxyType

SUPPORTED_LANGUAGES = MappingProxyType(
    {
        "en-GB": "English (British spelling)",
        "en": "English (American spelling)",
        "es": "Spanish",
        "de": "German",
        "ar": "Arabic",
        "bg": "Bulgarian",
        "bn": "Bengali",
        "ca": "Catalan",
        "cmn": "Chinese Mandarin",
        "hr": "Croatian",
        "cs": "Czech",
        "da": "Danish",
        "nl": "Dutch",
        "fa": "Farsi (Persian)",
        "fi": "Finnish",
        "fr": "French",
        "el": "Greek",
        "he": "Hebrew",
        "hi": "Hindi",
        "hu": "Hungarian",
        "it": "Italian",
        "ja": "Japanese",
        "ko": "Korean",
        "lv": "Latvian",
        "lt": "Lithuanian",
        "ms": "Malay",
        "no": "Norwegian",
        "pl": "Polish",
        "pt": "Portugese",
        "ro": "Romanian",
        "ru": "Russian",
        "sk": "Slovakian",
        "sl": "Slovenian",
        "sv": "Swedish",
        "sw": "Swahili",
        "tr": "Turkish",
        "id": "Indonesian",
        "uk": "Ukrainian",
        "yue": "Cantonese",
        "cy": "Welsh",
        "ba": "Bashkir",
        "eu": "Basque",
        "be": "Belarusian",
        "et": "Estonian",
        "ga": "Irish",
        "gl": "Galician",
        "mn": "Mongolian",
        "mr": "Marathi",
        "mt": "Maltese",
        "ta": "Tamil",
        "th": "Thai",
        "ug": "Uyghur",
        "ur": "Urdu",
        "vi": "Vietnamese",
    }
)


def is_known_language(code: str) -> bool:
    return code in SUPPORTED_LANGUAGES


def describe_language(code: str) -> str:
    """Return a display label like ``fr (French)``, or the bare code if unknown."""
    name = SUPPORTED_LANGUAGES.get(code)
    return f"{code} ({name})" if name else code
