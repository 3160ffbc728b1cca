from dataclasses import dataclass
from pathlib import PurePosixPath
from types import MappingProxyType
from typing import List, Mapping, Optional
from urllib.parse import urlparse

TRANSLATION_FILE_SUFFIX = ".json"


@dataclass(frozen=True)
class Language:
    code: str
    name: str


# Language codes understood in translation file names. Some names appear
# under more than one code (legacy aliases such as iw/he).
LANGUAGE_ENTRIES: Mapping[str, str] = MappingProxyType(
    {
        "af": "Afrikaans",
        "ak": "Akan",
        "sq": "Albanian",
        "am": "Amharic",
        "ar": "Arabic",
        "hy": "Armenian",
        "as": "Assamese",
        "ay": "Aymara",
        "az": "Azerbaijani",
        "bm": "Bambara",
        "eu": "Basque",
        "be": "Belarusian",
        "bn": "Bengali",
        "bho": "Bhojpuri",
        "bs": "Bosnian",
        "bg": "Bulgarian",
        "ca": "Catalan",
        "ceb": "Cebuano",
        "ny": "Chichewa",
        "zh": "Chinese (Simplified)",
        "zh-CN": "Chinese (Simplified)",
        "zh-TW": "Chinese (Traditional)",
        "co": "Corsican",
        "hr": "Croatian",
        "cs": "Czech",
        "da": "Danish",
        "dv": "Divehi",
        "doi": "Dogri",
        "nl": "Dutch",
        "en": "English",
        "eo": "Esperanto",
        "et": "Estonian",
        "ee": "Ewe",
        "tl": "Filipino",
        "fi": "Finnish",
        "fr": "French",
        "fy": "Frisian",
        "gl": "Galician",
        "lg": "Ganda",
        "ka": "Georgian",
        "de": "German",
        "gom": "Goan Konkani",
        "el": "Greek",
        "gn": "Guarani",
        "gu": "Gujarati",
        "ht": "Haitian Creole",
        "ha": "Hausa",
        "haw": "Hawaiian",
        "he": "Hebrew",
        "iw": "Hebrew",
        "hi": "Hindi",
        "hmn": "Hmong",
        "hu": "Hungarian",
        "is": "Icelandic",
        "ig": "Igbo",
        "ilo": "Iloko",
        "id": "Indonesian",
        "ga": "Irish",
        "it": "Italian",
        "ja": "Japanese",
        "jw": "Javanese",
        "jv": "Javanese",
        "kn": "Kannada",
        "kk": "Kazakh",
        "km": "Khmer",
        "rw": "Kinyarwanda",
        "ko": "Korean",
        "kri": "Krio",
        "ku": "Kurdish (Kurmanji)",
        "ckb": "Kurdish (Sorani)",
        "ky": "Kyrgyz",
        "lo": "Lao",
        "la": "Latin",
        "lv": "Latvian",
        "ln": "Lingala",
        "lt": "Lithuanian",
        "lb": "Luxembourgish",
        "mk": "Macedonian",
        "mai": "Maithili",
        "mg": "Malagasy",
        "ms": "Malay",
        "ml": "Malayalam",
        "mt": "Maltese",
        "mni-Mtei": "Manipuri (Meitei Mayek)",
        "mi": "Maori",
        "mr": "Marathi",
        "lus": "Mizo",
        "mn": "Mongolian",
        "my": "Myanmar (Burmese)",
        "ne": "Nepali",
        "nso": "Northern Sotho",
        "no": "Norwegian",
        "or": "Odia (Oriya)",
        "om": "Oromo",
        "ps": "Pashto",
        "fa": "Persian",
        "pl": "Polish",
        "pt": "Portuguese",
        "pa": "Punjabi",
        "qu": "Quechua",
        "ro": "Romanian",
        "ru": "Russian",
        "sm": "Samoan",
        "sa": "Sanskrit",
        "gd": "Scots Gaelic",
        "sr": "Serbian",
        "st": "Sesotho",
        "sn": "Shona",
        "sd": "Sindhi",
        "si": "Sinhala",
        "sk": "Slovak",
        "sl": "Slovenian",
        "so": "Somali",
        "es": "Spanish",
        "su": "Sundanese",
        "sw": "Swahili",
        "sv": "Swedish",
        "tg": "Tajik",
        "ta": "Tamil",
        "tt": "Tatar",
        "te": "Telugu",
        "th": "Thai",
        "ti": "Tigrinya",
        "ts": "Tsonga",
        "tr": "Turkish",
        "tk": "Turkmen",
        "uk": "Ukrainian",
        "ur": "Urdu",
        "ug": "Uyghur",
        "uz": "Uzbek",
        "vi": "Vietnamese",
        "cy": "Welsh",
        "xh": "Xhosa",
        "yi": "Yiddish",
        "yo": "Yoruba",
        "zu": "Zulu",
    }
)


def get_language_codes() -> List[str]:
    return list(LANGUAGE_ENTRIES.keys())


def get_language_names() -> List[str]:
    return list(LANGUAGE_ENTRIES.values())


def get_language_by_code(code: str) -> Optional[Language]:
    """Look up a language by its exact code, e.g. 'fr' or 'zh-TW'."""
    name = LANGUAGE_ENTRIES.get(code)
    return Language(code, name) if name else None


def get_language_by_name(name: str) -> Optional[Language]:
    """Look up a language by display name, ignoring case.

    The first code registered for the name wins, so 'Hebrew' resolves to 'he'.
    """
    wanted = name.lower()
    for code, language_name in LANGUAGE_ENTRIES.items():
        if language_name.lower() == wanted:
            return Language(code, language_name)
    return None


def language_from_filename(location: str) -> Optional[Language]:
    """Resolve the language of a translation file from its path or URL.

    The base name without the .json extension is used as the language code,
    so 'locales/pt.json' and 'https://cdn.example.com/i18n/pt.json' both map
    to Portuguese.

    Args:
        location: File system path or URL of the translation file

    Returns:
        The matching Language, or None if the name is not a known code
    """
    path = urlparse(location).path if "://" in location else location
    file_name = PurePosixPath(path.replace("\\", "/")).name
    if not file_name:
        return None
    if file_name.endswith(TRANSLATION_FILE_SUFFIX):
        file_name = file_name[: -len(TRANSLATION_FILE_SUFFIX)]
    return get_language_by_code(file_name)
