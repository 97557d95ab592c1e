"""
Shared lookup tables for field extraction.

Every table here is built once at import time and is immutable (frozenset,
tuple, or a read-only mapping). Extraction code only ever reads from them.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Iterable, Mapping


def _alternation(words: Iterable[str]) -> str:
    """Regex alternation, longest first so "Street" wins over "St"."""
    return "|".join(re.escape(w) for w in sorted(set(words), key=len, reverse=True))


# ---------------------------------------------------------------------------
# Fillers / hesitations (EN + ES)
# ---------------------------------------------------------------------------

FILLER_WORDS_EN: tuple[str, ...] = (
    "uh", "uhh", "uhm", "um", "umm", "er", "erm", "ah", "ahh",
    "hm", "hmm", "hmmm", "mhm", "uh-huh", "mm-hmm",
)

FILLER_WORDS_ES: tuple[str, ...] = (
    "este", "pues", "bueno", "entonces", "o sea", "a ver",
    "mira", "oye", "verdad", "sabes",
)

FILLER_WORDS: tuple[str, ...] = FILLER_WORDS_EN + FILLER_WORDS_ES


# ---------------------------------------------------------------------------
# Number words
# ---------------------------------------------------------------------------

ONES: Mapping[str, int] = MappingProxyType({
    "zero": 0, "oh": 0, "one": 1, "two": 2, "three": 3, "four": 4,
    "five": 5, "six": 6, "seven": 7, "eight": 8, "nine": 9,
    "cero": 0, "uno": 1, "dos": 2, "tres": 3, "cuatro": 4, "cinco": 5,
    "seis": 6, "siete": 7, "ocho": 8, "nueve": 9,
})

TEENS: Mapping[str, int] = MappingProxyType({
    "ten": 10, "eleven": 11, "twelve": 12, "thirteen": 13, "fourteen": 14,
    "fifteen": 15, "sixteen": 16, "seventeen": 17, "eighteen": 18, "nineteen": 19,
    "diez": 10, "once": 11, "doce": 12, "trece": 13, "catorce": 14, "quince": 15,
    "dieciseis": 16, "dieciséis": 16, "diecisiete": 17, "dieciocho": 18,
    "diecinueve": 19,
    "veintiuno": 21, "veintidos": 22, "veintidós": 22, "veintitres": 23,
    "veintitrés": 23, "veinticuatro": 24, "veinticinco": 25, "veintiseis": 26,
    "veintiséis": 26, "veintisiete": 27, "veintiocho": 28, "veintinueve": 29,
})

TENS: Mapping[str, int] = MappingProxyType({
    "twenty": 20, "thirty": 30, "forty": 40, "fifty": 50, "sixty": 60,
    "seventy": 70, "eighty": 80, "ninety": 90,
    "veinte": 20, "treinta": 30, "cuarenta": 40, "cincuenta": 50,
    "sesenta": 60, "setenta": 70, "ochenta": 80, "noventa": 90,
})

# Spanish hundreds are values in their own right, not multipliers.
HUNDREDS: Mapping[str, int] = MappingProxyType({
    "doscientos": 200, "trescientos": 300, "cuatrocientos": 400,
    "quinientos": 500, "seiscientos": 600, "setecientos": 700,
    "ochocientos": 800, "novecientos": 900,
})

MULTIPLIERS: Mapping[str, int] = MappingProxyType({
    "hundred": 100, "thousand": 1000,
    "cien": 100, "ciento": 100, "mil": 1000,
})

NUMBER_CONJUNCTIONS: frozenset[str] = frozenset({"y"})

NUMBER_WORDS: frozenset[str] = frozenset(
    set(ONES) | set(TEENS) | set(TENS) | set(HUNDREDS) | set(MULTIPLIERS)
)

# Words that only count as numbers after another number word: "oh" is an
# interjection and "once" is an English adverb far more often than Spanish 11.
NUMBER_NON_STARTERS: frozenset[str] = frozenset({"oh", "once"})

NUMBER_WORD_ALT: str = _alternation(NUMBER_WORDS)
_NUMBER_START_ALT = _alternation(NUMBER_WORDS - NUMBER_NON_STARTERS)

# A contiguous run of number words, e.g. "eleven twenty two" or "treinta y cinco".
SPOKEN_NUMBER_RUN: str = (
    rf"(?:{_NUMBER_START_ALT})\b"
    rf"(?:[\s-]+(?:y\s+)?(?:{NUMBER_WORD_ALT})\b)*"
)


# ---------------------------------------------------------------------------
# Street types
# ---------------------------------------------------------------------------

STREET_SUFFIXES_EN: tuple[str, ...] = (
    "Street", "St", "Avenue", "Ave", "Drive", "Dr", "Road", "Rd",
    "Boulevard", "Blvd", "Lane", "Ln", "Way", "Court", "Ct", "Place", "Pl",
    "Circle", "Cir", "Terrace", "Ter", "Trail", "Trl", "Parkway", "Pkwy",
    "Highway", "Hwy",
)

STREET_SUFFIXES_ES: tuple[str, ...] = (
    "Calle", "Avenida", "Camino", "Carretera", "Calzada", "Paseo",
    "Privada", "Bulevar", "Callejón", "Callejon",
)

STREET_SUFFIXES: tuple[str, ...] = STREET_SUFFIXES_EN + STREET_SUFFIXES_ES
STREET_SUFFIX_ALT: str = _alternation(STREET_SUFFIXES)
STREET_SUFFIX_SET: frozenset[str] = frozenset(s.lower() for s in STREET_SUFFIXES)

# Spanish addresses lead with the street type: "Calle Morelos 45".
SPANISH_STREET_PREFIXES: tuple[str, ...] = (
    "Calle", "Avenida", "Av", "Avda", "Calzada", "Camino", "Carretera",
    "Paseo", "Privada", "Bulevar", "Boulevard", "Callejón", "Callejon",
)
SPANISH_STREET_PREFIX_ALT: str = _alternation(SPANISH_STREET_PREFIXES)


# ---------------------------------------------------------------------------
# Stop words and common words
# ---------------------------------------------------------------------------

ARTICLES_AND_PREPOSITIONS: frozenset[str] = frozenset({
    "the", "a", "an", "at", "on", "in", "to", "for", "of",
    "and", "or", "but", "is", "it",
})

STOP_WORDS: frozenset[str] = frozenset({
    # greetings / acknowledgements
    "hello", "hi", "hey", "yeah", "yes", "no", "okay", "ok", "sure", "thanks",
    "thank", "please", "bye", "goodbye", "morning", "afternoon", "evening",
    "hola", "gracias", "si", "sí", "buenos", "buenas", "dias", "días",
    "tardes", "noches", "adios", "adiós", "favor",
    # fillers that survive as words
    "um", "uh", "well", "so", "like", "just", "actually", "basically",
    # pronouns, articles, prepositions, conjunctions
    "you", "i", "me", "my", "we", "our", "us", "he", "she", "they", "them",
    "his", "her", "their", "your", "this", "that", "these", "those", "it",
    "there", "here", "the", "a", "an", "at", "on", "in", "to", "for", "of",
    "and", "or", "but", "with", "from", "about", "because", "by", "near",
    "not", "also", "still", "very", "really", "too", "out", "up", "down",
    "el", "la", "los", "las", "un", "una", "de", "del", "en", "con", "por",
    "para", "que", "y", "o", "mi", "su", "yo", "usted", "aqui", "aquí",
    "porque", "sobre", "muy", "tambien", "también",
    # auxiliaries / common verbs
    "is", "are", "was", "were", "be", "been", "am", "have", "has", "had",
    "do", "does", "did", "will", "would", "could", "should", "may", "might",
    "must", "can", "need", "want", "got", "get", "live", "saw", "called",
    "es", "soy", "estoy", "esta", "está", "tengo", "hay", "vivo", "quiero",
    "necesito",
    # gerunds of calling / reporting
    "calling", "reporting", "texting", "writing", "messaging", "phoning",
    "having", "trying", "looking", "wondering", "reaching", "going",
    "getting", "contacting", "following",
    "llamando", "reportando", "escribiendo", "hablando", "marcando",
    "comunicando", "preguntando",
    # predicates that follow "it's" / "this is"
    "broken", "flooded", "blocked", "damaged", "clogged", "cracked", "stuck",
    "dead", "dark", "off", "open", "closed", "gone", "missing", "fixed",
    "done", "ready", "urgent", "bad", "terrible", "again", "back", "over",
    "already", "leaking", "roto", "rota", "tapado", "tapada", "inundado",
    "inundada", "descompuesto", "apagado", "apagada", "urgente",
    # adjectives that follow "i'm"
    "fine", "good", "great", "glad", "happy", "sorry", "worried",
    "concerned", "upset", "afraid", "new", "not", "here", "home",
    # quantifiers
    "nothing", "something", "anything", "everything", "none", "all",
    "someone", "somebody", "anyone", "nobody",
    # generic nouns
    "street", "road", "avenue", "problem", "issue", "help", "city",
    "resident", "neighbor", "calle", "problema", "ayuda", "vecino", "vecina",
    "residente", "ciudad",
})

COMMON_WORDS: frozenset[str] = frozenset({
    "light", "lights", "streetlight", "pothole", "water", "trash", "garbage",
    "leak", "noise", "dog", "car", "tree", "house", "home", "park", "sidewalk",
    "report", "complaint", "question", "emergency", "department", "service",
    "bill", "payment", "power", "sewer", "drain", "corner", "block", "today",
    "tomorrow", "yesterday", "now", "please", "caller", "customer", "unknown",
    "english", "spanish", "ingles", "inglés", "espanol", "español",
    "agua", "luz", "basura", "bache", "casa", "perro", "arbol", "árbol",
    "queja", "reporte", "servicio", "cliente", "hoy", "mañana", "ayer",
    "rosa", "cruz", "sol", "paz", "pilar", "blanca", "esperanza", "dolores",
    "mercedes", "consuelo", "soledad", "amparo", "rocio", "rocío", "victoria",
})

# Legitimate given names that collide with common Spanish nouns.
SPANISH_GIVEN_NAMES: frozenset[str] = frozenset({
    "luz", "rosa", "cruz", "sol", "paz", "pilar", "blanca", "esperanza",
    "dolores", "mercedes", "consuelo", "soledad", "amparo", "rocio", "rocío",
    "victoria", "angel", "ángel",
})

# Names shaped like gerunds ("-ing", "-ando", "-iendo").
GERUND_SHAPED_NAMES: frozenset[str] = frozenset({
    "irving", "fleming", "manning", "browning", "sterling", "harding",
    "channing", "keating", "fielding", "golding", "redding", "cushing",
    "fernando", "armando", "orlando", "rolando", "hernando", "ernando",
})


# ---------------------------------------------------------------------------
# Language detection
# ---------------------------------------------------------------------------

# Accent-free: detection text is folded before matching. Words that are
# also common in English place names (el, la, los, las, del) are left out.
SPANISH_INDICATORS: tuple[str, ...] = (
    # greetings / courtesy
    "hola", "gracias", "por favor", "buenos dias", "buenas tardes",
    "buenas noches", "disculpe", "oiga", "senor", "senora", "senorita",
    # function words
    "que", "porque", "pero", "para", "por", "una", "unos", "unas", "es",
    "esta", "estan", "estoy", "muy", "tambien", "aqui", "ahi", "alli",
    "donde", "cuando", "como", "usted", "ustedes", "nosotros", "ellos",
    "ella", "mi nombre", "me llamo",
    # fillers that double as signal
    "este", "pues", "bueno", "entonces", "o sea", "sabes", "verdad",
    # verbs
    "tengo", "hay", "necesito", "quiero", "puedo", "vivo", "llamo",
    "ayuda", "ayudar",
    # domain nouns
    "calle", "avenida", "colonia", "direccion", "problema", "agua", "luz",
    "basura", "bache", "alumbrado", "semaforo", "fuga", "drenaje", "casa",
    "vecino", "vecinos", "banqueta",
)
SPANISH_INDICATOR_ALT: str = _alternation(SPANISH_INDICATORS)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_NAME: str = "Unknown Caller"
DEFAULT_ADDRESS: str = "Not provided"
