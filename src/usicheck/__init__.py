"""Luhn Mod N validation and check characters for Unique Student Identifiers."""

from .checksum import (
    ALPHABET,
    ALPHABET_SIZE,
    KEY_LENGTH,
    PREFIX_LENGTH,
    alternate_factor,
    generate_check_character,
    index_of,
    verify_key,
)
from .errors import InvalidCharacter, InvalidLength, UsiError

__version__ = "0.1.0"

__all__ = [
    "ALPHABET",
    "ALPHABET_SIZE",
    "KEY_LENGTH",
    "PREFIX_LENGTH",
    "alternate_factor",
    "generate_check_character",
    "index_of",
    "verify_key",
    "InvalidCharacter",
    "InvalidLength",
    "UsiError",
]
