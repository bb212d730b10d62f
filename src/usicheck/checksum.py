"""
Luhn Mod N check characters for Unique Student Identifiers (USI).

What this does
--------------
A USI is 10 symbols long: a 9-symbol payload followed by one check symbol.
Symbols come from a fixed 32-symbol alphabet (digits 2-9 and the letters A-Z
without I and O, so nothing can be misread as 0/1). A symbol's position in
the alphabet is its *codepoint*.

The check symbol is derived with Luhn Mod N (N = 32):

  1) Walk the payload right to left, weighting codepoints 2, 1, 2, 1, ...
  2) Fold each weighted addend back into range: ``a // N + a % N``.
  3) Sum the addends; the check codepoint is ``(N - sum % N) % N``.

Design principles
-----------------
- **Pure functions**: no I/O, no shared mutable state; safe from any thread.
- **Fail fast**: the first bad length or symbol raises; there are no partial
  results.
"""

from __future__ import annotations

import logging

from .errors import InvalidCharacter, InvalidLength

logger = logging.getLogger(__name__)

# Order is significant: index == codepoint.
ALPHABET = "23456789ABCDEFGHJKLMNPQRSTUVWXYZ"
ALPHABET_SIZE = len(ALPHABET)

KEY_LENGTH = 10
PREFIX_LENGTH = KEY_LENGTH - 1


def index_of(symbol: str, alphabet: str = ALPHABET) -> int:
    """
    Return the zero-based position of `symbol` in `alphabet`, or -1 if absent.

    Example:
        >>> index_of("A")
        8
        >>> index_of("1")
        -1
    """
    for i, candidate in enumerate(alphabet):
        if candidate == symbol:
            return i
    return -1


def alternate_factor(factor: int) -> int:
    """
    Return the weight that follows `factor` in the 2, 1, 2, 1, ... sequence.

    Defined for every integer: 2 maps to 1 and anything else maps to 2.
    """
    if factor == 2:
        return 1
    return 2


def generate_check_character(prefix: str) -> str:
    """
    Compute the check symbol for a 9-symbol USI payload.

    The prefix is used as given; lowercase letters are not in the alphabet and
    are rejected, so callers should uppercase first.

    Args:
        prefix: The first 9 symbols of a USI.

    Returns:
        The single alphabet symbol that completes the identifier.

    Raises:
        InvalidLength: If `prefix` is not exactly 9 symbols long.
        InvalidCharacter: On the first symbol (scanning right to left) that is
            not in the alphabet.

    Example:
        >>> generate_check_character("BNGH7C75F")
        'N'
    """
    if len(prefix) != PREFIX_LENGTH:
        raise InvalidLength(
            f"input length must be {PREFIX_LENGTH} characters",
            expected=PREFIX_LENGTH,
            actual=len(prefix),
        )

    factor = 2
    total = 0
    n = ALPHABET_SIZE

    for position in range(len(prefix) - 1, -1, -1):
        symbol = prefix[position]
        codepoint = index_of(symbol)
        if codepoint == -1:
            raise InvalidCharacter(
                "invalid character in input", symbol=symbol, position=position
            )

        addend = factor * codepoint
        factor = alternate_factor(factor)
        # factor <= 2 and codepoint < n, so one fold brings it back in range.
        addend = (addend // n) + (addend % n)
        total += addend

    remainder = total % n
    return ALPHABET[(n - remainder) % n]


def upper_ascii(s: str) -> str:
    """
    Uppercase ASCII letters only, leaving every other character untouched.

    `str.upper()` can change the length ("ß" -> "SS", "ﬀ" -> "FF"); only
    ASCII symbols can be in the alphabet, so nothing valid is lost.
    """
    return "".join(ch.upper() if ch.isascii() else ch for ch in s)


def verify_key(key: str) -> bool:
    """
    Check a 10-symbol USI against its own check symbol.

    Input is case-insensitive. Only the 9 payload symbols are validated
    against the alphabet; the 10th is just compared, so an out-of-alphabet
    check symbol makes the key invalid rather than raising.

    Raises:
        InvalidLength: If `key` is not exactly 10 symbols long.
        InvalidCharacter: If a payload symbol is not in the alphabet.

    Example:
        >>> verify_key("BNGH7C75FN")
        True
    """
    if len(key) != KEY_LENGTH:
        raise InvalidLength(
            f"key length must be {KEY_LENGTH} characters",
            expected=KEY_LENGTH,
            actual=len(key),
        )

    key = upper_ascii(key)
    expected = generate_check_character(key[:PREFIX_LENGTH])
    valid = key[PREFIX_LENGTH] == expected
    logger.debug("verified %s: expected check %s, valid=%s", key, expected, valid)
    return valid


def normalize_spaces_dashes(s: str) -> str:
    """
    Remove spaces and dashes from a string.

    Lets user-facing callers accept grouped input such as "BNGH-7C75-FN"
    while the engine only ever sees the canonical 10-symbol form.
    """
    return s.replace(" ", "").replace("-", "")
