from typing import Callable, Dict, Optional

from nltk.stem import PorterStemmer

from .tokenizer import Stemmer

SUFFIX_RULES = (
    ("ization", "ize"),
    ("ational", "ate"),
    ("fulness", "ful"),
    ("ousness", "ous"),
    ("iveness", "ive"),
    ("tional", "tion"),
    ("biliti", "ble"),
    ("lessly", "less"),
    ("ments", "ment"),
    ("ations", "ation"),
    ("ation", "ate"),
    ("encies", "ency"),
    ("ness", ""),
    ("ment", ""),
    ("tion", ""),
    ("sion", ""),
    ("able", ""),
    ("ible", ""),
    ("ship", ""),
    ("hood", ""),
    ("ward", ""),
    ("wise", ""),
    ("ing", ""),
    ("ed", ""),
    ("ly", ""),
    ("es", "e"),
    ("s", ""),
)

MIN_STEM_LEN = 3


def light_stem(word: str) -> str:
    """Strip the first matching suffix, keeping at least MIN_STEM_LEN chars."""
    if len(word) <= MIN_STEM_LEN:
        return word
    t = word
    if t.endswith("'s") and len(t) - 2 >= MIN_STEM_LEN:
        t = t[:-2]
    for suf, rep in SUFFIX_RULES:
        if t.endswith(suf) and len(t) - len(suf) >= MIN_STEM_LEN:
            return t[: -len(suf)] + rep
    return t


def porter_stemmer() -> Stemmer:
    return PorterStemmer().stem


STEMMERS: Dict[str, Callable[[], Stemmer]] = {
    "porter": porter_stemmer,
    "light": lambda: light_stem,
}


def get_stemmer(name: Optional[str]) -> Optional[Stemmer]:
    if name is None:
        return None
    try:
        factory = STEMMERS[name]
    except KeyError:
        raise ValueError(f"unknown stemmer: {name!r}") from None
    return factory()
