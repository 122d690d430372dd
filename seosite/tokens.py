from __future__ import annotations

import re
import unicodedata
from typing import Iterator

MIN_TOKEN_LENGTH = 3

# Spanish function words, pronouns and deictic time words, already accent-free.
STOPWORDS = frozenset(
    {
        "a", "al", "algo", "algunos", "ante", "antes", "asi", "aun", "aunque", "bajo",
        "bien", "cada", "casi", "como", "con", "contra", "cual", "cuando", "de", "del",
        "desde", "donde", "dos", "el", "ella", "ellas", "ellos", "en", "entre", "era",
        "eres", "es", "esa", "ese", "eso", "esta", "estaba", "estamos", "estan", "estar",
        "este", "esto", "estos", "fue", "ha", "hace", "hacia", "han", "hasta", "hay",
        "la", "las", "le", "les", "lo", "los", "mas", "me", "mi", "mis", "mismo",
        "mucho", "muy", "no", "nos", "nuestra", "nuestro", "o", "otra", "para", "pero",
        "poco", "por", "porque", "que", "quien", "se", "sea", "ser", "si", "sin",
        "sobre", "solo", "son", "su", "sus", "tambien", "te", "tener", "tiene", "tu",
        "tus", "un", "una", "uno", "y", "ya", "vos", "tuya", "tuyo",
        "hoy", "manana", "ayer",
    }
)

NON_WORD_RE = re.compile(r"[^a-z0-9\s-]")


def strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_text(text: str) -> str:
    """Lowercase, drop diacritics and blank out anything but ``[a-z0-9\\s-]``."""
    return NON_WORD_RE.sub(" ", strip_accents((text or "").lower()))


def iter_tokens(text: str) -> Iterator[str]:
    for word in normalize_text(text).split():
        if len(word) < MIN_TOKEN_LENGTH or word in STOPWORDS:
            continue
        yield word


def tokenize(text: str) -> list[str]:
    return list(iter_tokens(text))
