"""
Security Keyword Lexicon

Terms that mark a news item as a security event. Matching is done on
case-folded text, so English entries are stored lower case and matched as
whole words (a trailing plural "s" is allowed). Hebrew terms are listed in the
forms that appear in headlines (with and without the common plural);
substring matching covers prefixed forms like "באזעקה".
"""
from typing import FrozenSet


SECURITY_KEYWORDS_HE: FrozenSet[str] = frozenset({
    # Alerts
    "אזעקה",
    "אזעקות",
    "צבע אדום",
    "התרעה",
    "מרחב מוגן",
    "מרחבים מוגנים",
    # Rocket / missile fire
    "רקטה",
    "רקטות",
    "טיל",
    "טילים",
    "ירי רקטות",
    "ירי טילים",
    "פצמ\"ר",
    "יירוט",
    "יירוטים",
    "כלי טיס עוין",
    "כטב\"ם",
    "רחפן נפץ",
    # Attacks and infiltration
    "פיגוע",
    "מחבל",
    "מחבלים",
    "חדירה",
    "חדירת",
    "חדירת מחבלים",
    "ירי לעבר",
    "אירוע ירי",
    "יריות",
    "דקירה",
    "פיגוע דריסה",
    "מתקפה",
    "התקפה",
    "חילופי אש",
    "חילופי האש",
    "תקרית",
    # Casualties
    "פצועים",
    "הרוגים",
    "נפגעים",
    "נרצח",
    # Hostile actors
    "חמאס",
    "חיזבאללה",
    "הג'יהאד האסלאמי",
    "איראן",
    "החות'ים",
})

SECURITY_KEYWORDS_EN: FrozenSet[str] = frozenset({
    "siren",
    "red alert",
    "rocket",
    "missile",
    "mortar",
    "interception",
    "intercepted",
    "hostile aircraft",
    "drone",
    "uav",
    "terror",
    "terror attack",
    "terrorist",
    "rocket attack",
    "missile attack",
    "drone attack",
    "armed attack",
    "infiltration",
    "gunfire",
    "shooting",
    "stabbing",
    "ramming",
    "exchange of fire",
    "casualties",
    "wounded",
    "killed",
    "hamas",
    "hezbollah",
    "islamic jihad",
    "houthi",
})

SECURITY_KEYWORDS: FrozenSet[str] = SECURITY_KEYWORDS_HE | SECURITY_KEYWORDS_EN
