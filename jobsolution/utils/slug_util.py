import re
import unicodedata

TRANSLITERATION = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "yo", "ж": "zh",
    "з": "z", "и": "i", "й": "y", "к": "k", "л": "l", "м": "m", "н": "n", "о": "o",
    "п": "p", "р": "r", "с": "s", "т": "t", "у": "u", "ф": "f", "х": "kh", "ц": "ts",
    "ч": "ch", "ш": "sh", "щ": "sch", "ъ": "", "ы": "y", "ь": "", "э": "e", "ю": "yu",
    "я": "ya",
}

NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def transliterate(text: str) -> str:
    # NFD splits "й" into "и" + breve, so map it before stripping marks
    text = text.replace("й", "y").replace("Й", "Y").replace("ё", "yo").replace("Ё", "Yo")
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    result = []
    for ch in unicodedata.normalize("NFC", stripped):
        lower = ch.lower()
        if lower in TRANSLITERATION:
            mapped = TRANSLITERATION[lower]
            result.append(mapped.capitalize() if ch != lower else mapped)
        else:
            result.append(ch)
    return "".join(result)


def slugify(name: str) -> str:
    slug = transliterate(name.lower())
    slug = NON_ALPHANUMERIC.sub("-", slug)
    return slug.strip("-")


def company_slug(name: str, company_id: int) -> str:
    base = slugify(name)
    if not base:
        return str(company_id)
    return f"{base}-{company_id}"
