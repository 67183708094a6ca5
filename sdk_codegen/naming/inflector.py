"""
English noun inflection used to derive resource path names and class names.

Rules are ordered tables of (pattern, replacement); the first pattern that matches
the word decides the result.
"""

from __future__ import annotations

import re

UNCOUNTABLE = frozenset(
    {
        "equipment",
        "information",
        "rice",
        "money",
        "species",
        "series",
        "fish",
        "sheep",
        "data",
        "item_constraint_criteria",
    }
)


def _rules(*pairs: tuple[str, str] | tuple[str, str, int]) -> tuple[tuple[re.Pattern[str], str], ...]:
    compiled = []
    for pair in pairs:
        pattern, replacement, *flags = pair
        compiled.append((re.compile(pattern, *flags), replacement))
    return tuple(compiled)


PLURAL_RULES = _rules(
    (r"(data)$", r"\g<1>"),
    (r"(quiz)$", r"\g<1>zes", re.IGNORECASE),
    (r"^(ox)$", r"\g<1>en", re.IGNORECASE),
    (r"([m|l])ouse$", r"\g<1>ice", re.IGNORECASE),
    (r"(matr|vert|ind)(?:ix|ex)$", r"\g<1>ices", re.IGNORECASE),
    (r"(x|ch|ss|sh)$", r"\g<1>es", re.IGNORECASE),
    (r"([^aeiouy]|qu)y$", r"\g<1>ies", re.IGNORECASE),
    (r"(slave)$", r"\g<1>s", re.IGNORECASE),
    (r"(hive)$", r"\g<1>s", re.IGNORECASE),
    (r"(?:([^f])fe|([lr])f)$", r"\g<1>\g<2>ves", re.IGNORECASE),
    (r"sis$", "ses"),
    (r"([ti])um$", r"\g<1>a", re.IGNORECASE),
    (r"(buffal|tomat)o$", r"\g<1>oes", re.IGNORECASE),
    (r"(bu)s$", r"\g<1>es", re.IGNORECASE),
    (r"(alias|status)$", r"\g<1>es", re.IGNORECASE),
    (r"(octop|vir)us$", r"\g<1>i", re.IGNORECASE),
    (r"(tax)$", r"\g<1>es", re.IGNORECASE),
    (r"(ax|test)is$", r"\g<1>es", re.IGNORECASE),
    (r"s$", "s", re.IGNORECASE),
    (r"$", "s"),
)

SINGULAR_RULES = _rules(
    (r"(data)$", r"\g<1>"),
    (r"(database)s$", r"\g<1>"),
    (r"(quiz)zes$", r"\g<1>"),
    (r"(matr)ices$", r"\g<1>ix"),
    (r"(virt|ind)ices$", r"\g<1>ex"),
    (r"(ox)en$", r"\g<1>"),
    (r"(alias|status)es$", r"\g<1>"),
    (r"(octop|vir)i$", r"\g<1>us"),
    (r"(tax)es$", r"\g<1>", re.IGNORECASE),
    (r"(cris|ax|test)es$", r"\g<1>is"),
    (r"(shoe)s$", r"\g<1>"),
    (r"(o)es$", r"\g<1>"),
    (r"(bus)es$", r"\g<1>"),
    (r"([m|l])ice$", r"\g<1>ouse"),
    (r"(x|ch|ss|sh)es$", r"\g<1>"),
    (r"(m)ovies$", r"\g<1>ovie"),
    (r"(s)eries$", r"\g<1>eries"),
    (r"([^aeiouy]|qu)ies$", r"\g<1>y"),
    (r"([lr])ves$", r"\g<1>f"),
    (r"(tive)s$", r"\g<1>"),
    (r"(slave)s$", r"\g<1>", re.IGNORECASE),
    (r"(hive)s$", r"\g<1>"),
    (r"([^f])ves$", r"\g<1>fe"),
    (r"(^analy)ses$", r"\g<1>sis"),
    (r"((a)naly|(b)a|(d)iagno|(p)arenthe|(p)rogno|(s)ynop|(t)he)ses$", r"\g<1>sis"),
    (r"(n)ews$", r"\g<1>ews"),
    (r"ss$", "ss"),
    (r"s$", ""),
)


def _apply(word: str, rules: tuple[tuple[re.Pattern[str], str], ...]) -> str:
    if not word or word.lower() in UNCOUNTABLE:
        return word
    for pattern, replacement in rules:
        if pattern.search(word):
            # Unmatched optional groups expand to "" (Python >= 3.5)
            return pattern.sub(replacement, word)
    return word


def pluralize(word: str) -> str:
    """Return the plural form of ``word`` ("customer" -> "customers", "entity" -> "entities")."""
    return _apply(word, PLURAL_RULES)


def singularize(word: str) -> str:
    """Return the singular form of ``word`` ("addresses" -> "address", "taxes" -> "tax")."""
    return _apply(word, SINGULAR_RULES)
