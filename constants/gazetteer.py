"""
Gazetteer and Proximity Constants

Static place tables used for location detection and relevance matching:
- GAZETTEER: canonical city -> aliases that identify it in free text
- PROXIMITY_MAP: anchor city -> satellite towns relevant to its residents
- NATIONAL_TOKENS: phrases that make an event relevant country-wide
- AMBIGUOUS_ALIASES: city names that are also everyday Hebrew words
- CITY_COORDINATES: approximate city centres for reverse geocoding

All tables are built once at import time and are read-only. GAZETTEER order
is the location-detection priority (first match wins), north to south.
"""
from types import MappingProxyType
from typing import FrozenSet, Mapping, NamedTuple, Tuple


UNKNOWN_LOCATION = "לא ידוע"

TEL_AVIV = "תל אביב-יפו"


class GazetteerEntry(NamedTuple):
    """A canonical city and the strings that indicate it in text."""
    city: str
    aliases: FrozenSet[str]


class ProximityEntry(NamedTuple):
    """An anchor city and the satellite towns treated as near it."""
    anchor: str
    satellites: Tuple[str, ...]


def _entry(city: str, *aliases: str) -> GazetteerEntry:
    return GazetteerEntry(city=city, aliases=frozenset((city,) + aliases))


# ============================================
# GAZETTEER
# ============================================

GAZETTEER_ENTRIES: Tuple[GazetteerEntry, ...] = (
    _entry("נהריה", "נהרייה", "nahariya", "nahariyya"),
    _entry("מטולה", "metula"),
    _entry("קריית שמונה", "קרית שמונה", "kiryat shmona"),
    _entry("שלומי", "shlomi"),
    _entry("צפת", "safed", "tzfat"),
    _entry("עכו", "akko"),
    _entry("כרמיאל", "karmiel"),
    _entry("טבריה", "tiberias"),
    _entry("חיפה", "haifa"),
    _entry("עפולה", "afula"),
    _entry("חדרה", "hadera"),
    _entry("נתניה", "netanya"),
    _entry("הרצליה", "herzliya"),
    _entry("רמת גן", "ramat gan"),
    _entry("גבעתיים", "givatayim"),
    _entry("בני ברק", "bnei brak"),
    _entry("פתח תקווה", "פתח תקוה", "petah tikva"),
    _entry(TEL_AVIV, "תל אביב", "תל-אביב", "ת\"א", "tel aviv", "tel-aviv"),
    _entry("חולון", "holon"),
    _entry("בת ים", "bat yam"),
    _entry("ראשון לציון", "ראשל\"צ", "rishon lezion"),
    _entry("רחובות", "rehovot"),
    _entry("מודיעין", "modiin"),
    _entry("ירושלים", "jerusalem"),
    _entry("בית שמש", "beit shemesh"),
    _entry("אשדוד", "ashdod"),
    _entry("אשקלון", "ashkelon"),
    _entry("שדרות", "sderot"),
    _entry("נתיבות", "netivot"),
    _entry("אופקים", "ofakim"),
    _entry("באר שבע", "באר-שבע", "beersheba", "beer sheva"),
    _entry("דימונה", "dimona"),
    _entry("אילת", "eilat"),
)

GAZETTEER: Mapping[str, FrozenSet[str]] = MappingProxyType({
    entry.city: entry.aliases for entry in GAZETTEER_ENTRIES
})


# ============================================
# PROXIMITY MAP
# ============================================

PROXIMITY_ENTRIES: Tuple[ProximityEntry, ...] = (
    ProximityEntry(TEL_AVIV, (
        "רמת גן", "גבעתיים", "בני ברק", "חולון", "בת ים", "הרצליה",
        "ramat gan", "givatayim", "bnei brak", "holon", "bat yam", "herzliya",
    )),
    ProximityEntry("ירושלים", (
        "מבשרת ציון", "בית שמש", "מעלה אדומים", "גבעת זאב",
        "mevaseret zion", "beit shemesh", "maale adumim",
    )),
    ProximityEntry("חיפה", (
        "קריית אתא", "קריית ביאליק", "קריית מוצקין", "קריית ים", "נשר", "טירת כרמל",
        "kiryat ata", "kiryat bialik", "kiryat motzkin", "nesher", "tirat carmel",
    )),
    ProximityEntry("נהריה", (
        "שלומי", "מעלות", "עכו", "shlomi", "maalot", "akko",
    )),
    ProximityEntry("קריית שמונה", (
        "מטולה", "מרגליות", "metula", "margaliot",
    )),
    ProximityEntry("אשקלון", (
        "שדרות", "זיקים", "sderot", "zikim",
    )),
    ProximityEntry("אשדוד", (
        "יבנה", "גן יבנה", "yavne", "gan yavne",
    )),
    ProximityEntry("באר שבע", (
        "אופקים", "נתיבות", "דימונה", "עומר", "ofakim", "netivot", "dimona", "omer",
    )),
)

PROXIMITY_MAP: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    entry.anchor: entry.satellites for entry in PROXIMITY_ENTRIES
})


# ============================================
# AMBIGUOUS ALIASES
# ============================================

# Also common nouns (רחובות = streets, מודיעין = intelligence). Counted as a
# place only after a locative prefix (ברחובות) or a locative word (לעבר שדרות),
# and not in construct state (ברחובות העיר).
AMBIGUOUS_ALIASES: FrozenSet[str] = frozenset({
    "רחובות",
    "שדרות",
    "נתיבות",
    "אופקים",
    "מודיעין",
})

LOCATIVE_CUES: Tuple[str, ...] = (
    "לעבר",
    "באזור",
    "ליד",
    "העיר",
    "בעיר",
    "ביישוב",
    "תושבי",
)


# ============================================
# NATIONAL TOKENS
# ============================================

NATIONAL_TOKENS: FrozenSet[str] = frozenset({
    "ישראל",
    "כל הארץ",
    "כלל הארץ",
    "מרכז הארץ",
    "המרכז",
    "הדרום",
    "הצפון",
    "גוש דן",
    "israel",
    "the whole country",
    "nationwide",
    "the center",
    "the south",
    "the north",
    "gush dan",
})


# ============================================
# CITY COORDINATES
# ============================================

class CityCoordinates(NamedTuple):
    city: str
    latitude: float
    longitude: float


CITY_COORDINATES: Tuple[CityCoordinates, ...] = (
    CityCoordinates("נהריה", 33.0036, 35.0981),
    CityCoordinates("קריית שמונה", 33.2074, 35.5697),
    CityCoordinates("צפת", 32.9646, 35.4960),
    CityCoordinates("חיפה", 32.7940, 34.9896),
    CityCoordinates("טבריה", 32.7922, 35.5312),
    CityCoordinates("נתניה", 32.3215, 34.8532),
    CityCoordinates(TEL_AVIV, 32.0853, 34.7818),
    CityCoordinates("ירושלים", 31.7683, 35.2137),
    CityCoordinates("אשדוד", 31.8014, 34.6435),
    CityCoordinates("אשקלון", 31.6688, 34.5743),
    CityCoordinates("באר שבע", 31.2518, 34.7913),
    CityCoordinates("אילת", 29.5577, 34.9519),
)
