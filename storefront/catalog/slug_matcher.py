"""Slug to label pattern translation.

Category and subcategory labels are stored as free text
(e.g. ``1 1/4" Rod End Parts``) while the storefront links to them by
slug (``1-14-rod-end-parts``). This module rebuilds a case-insensitive,
fully anchored pattern from a slug that matches the original label despite
punctuation, spacing and fraction formatting differences.

Example usage:
    pattern = build_subcategory_pattern("1-14-rod-end-parts")
    pattern.match('1 1/4" Rod End Parts')  # matches
    pattern.match("1 1/2\\" Rod End Parts")  # None
"""

import re
from typing import Any

# Between any two emitted tokens
TOKEN_SEPARATOR = r"[\s/\-\"']+"

# Between the numbers of a sequence such as 1-1-4
NUMBER_SEPARATOR = r"[\s/\-]+"

OPTIONAL_QUOTE = r"[\"']?"

AMPERSAND_OR_AND = r"(?:&|and)"

# True end of string; a bare $ also matches before a trailing newline
END_OF_LABEL = r"$(?!\n)"

_NUMERIC = re.compile(r"[0-9]+")


def _tokenize(slug: Any) -> list[str]:
    """Split a slug into non-empty tokens.

    Returns an empty list for anything that is not a non-blank string.
    """
    if not isinstance(slug, str):
        return []
    return [token for token in slug.strip().split("-") if token]


def _is_number(token: str) -> bool:
    return _NUMERIC.fullmatch(token) is not None


def _collapse_number_sequences(tokens: list[str]) -> list[str | tuple[str, ...]]:
    """Group runs of two or more numeric tokens into tuples.

    Words and isolated numbers are passed through as plain strings.
    """
    parts: list[str | tuple[str, ...]] = []
    i = 0
    while i < len(tokens):
        j = i
        while j < len(tokens) and _is_number(tokens[j]):
            j += 1

        if j - i > 1:
            parts.append(tuple(tokens[i:j]))
            i = j
        else:
            parts.append(tokens[i])
            i += 1
    return parts


def _number_sequence_pattern(numbers: tuple[str, ...]) -> str:
    """Render a number sequence.

    A single digit followed by two digits (``1-14``) is ambiguous: it is
    either the fraction ``1 1/4`` or the plain pair ``1-14``. The fraction
    branch only accepts whitespace before the fraction so that it never
    overlaps a hyphenated plain pair.
    """
    if len(numbers) == 2:
        first, second = numbers
        if len(first) == 1 and len(second) == 2:
            numerator, denominator = second
            return (
                f"{first}(?:\\s+{numerator}/{denominator}"
                f"|[\\s\\-]+{second})"
            )
    return NUMBER_SEPARATOR.join(numbers)


def _word_pattern(word: str) -> str:
    if word.lower() == "and":
        return AMPERSAND_OR_AND
    return re.escape(word)


def _build_pattern(slug: Any, *, collapse_numbers: bool) -> re.Pattern[str] | None:
    tokens = _tokenize(slug)
    if not tokens:
        return None

    parts: list[str | tuple[str, ...]]
    if collapse_numbers:
        parts = _collapse_number_sequences(tokens)
    else:
        parts = list(tokens)

    rendered = [
        _number_sequence_pattern(part) if isinstance(part, tuple) else _word_pattern(part)
        for part in parts
    ]

    body = TOKEN_SEPARATOR.join(rendered)
    pattern = f"^{OPTIONAL_QUOTE}{body}{OPTIONAL_QUOTE}{END_OF_LABEL}"
    return re.compile(pattern, re.IGNORECASE)


def build_subcategory_pattern(slug: Any) -> re.Pattern[str] | None:
    """Build a pattern matching the subcategory label a slug came from.

    Consecutive numeric tokens are read as measurements, so ``1-14`` matches
    ``1 1/4``, ``1 14`` and ``1-14``, and ``1-1-4`` matches ``1 1/4`` or
    ``1-1-4``. The word ``and`` also matches ``&``.

    Args:
        slug: Hyphen-separated slug, typically a query parameter.

    Returns:
        Compiled case-insensitive pattern, or None when the slug is not a
        non-empty string (no filter should be applied).
    """
    return _build_pattern(slug, collapse_numbers=True)


def build_category_pattern(slug: Any) -> re.Pattern[str] | None:
    """Build a pattern matching the top-level category label of a slug.

    Same rules as :func:`build_subcategory_pattern` without the numeric
    sequence handling; digits are matched literally.
    """
    return _build_pattern(slug, collapse_numbers=False)
