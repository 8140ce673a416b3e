"""Mnemonic recovery words → 32-byte key entropy.

Recovery phrases are 12 words from the BIP39 English wordlist. The list is
built so that the first four letters of a word identify it, so users may
enter truncated words (``"catc"`` for ``"catch"``).

Phrases produced by the mobile wallet never carry a computed checksum: the
4 checksum bits are always ``0000``. That value is the only one accepted
here, and no BIP39 checksum is derived. The 16 bytes of entropy are then
duplicated to form the 32-byte seed the mobile wallet uses.
"""

from __future__ import annotations

import functools

from mnemonic import Mnemonic

from helium_wallet.errors.wallet_errors import (
    ChecksumMismatchError,
    InvalidInputError,
    WordNotFoundError,
)

MNEMONIC_WORD_COUNT = 12
EXPECTED_CHECKSUM = "0000"

# Prefix length that uniquely identifies a wordlist entry
_MIN_CMP_LEN = 4
_BITS_PER_WORD = 11


@functools.cache
def english_wordlist() -> tuple[str, ...]:
    """The 2048-word English wordlist, loaded once."""
    words = tuple(Mnemonic("english").wordlist)
    if len(words) != 1 << _BITS_PER_WORD:
        msg = f"wordlist has {len(words)} entries, expected {1 << _BITS_PER_WORD}"
        raise RuntimeError(msg)
    return words


def find_word(user_word: str) -> int | None:
    """Index of *user_word* in the wordlist, accepting 4-letter prefixes.

    Candidates are scanned in order. A candidate matches when it equals the
    lower-cased input, or when both are at least four characters long and
    share their first four characters.
    """
    user_word = user_word.lower()
    for idx, list_word in enumerate(english_wordlist()):
        if (
            len(user_word) >= _MIN_CMP_LEN
            and len(list_word) >= _MIN_CMP_LEN
            and user_word[:_MIN_CMP_LEN] == list_word[:_MIN_CMP_LEN]
        ):
            return idx
        if user_word == list_word:
            return idx
    return None


def decode_mnemonic(words: list[str]) -> bytes:
    """Convert a 12-word mnemonic to the 32-byte entropy used for keys.

    Args:
        words: Recovery words, full or truncated to at least four letters.

    Returns:
        32 bytes: the 16 entropy bytes repeated twice.

    Raises:
        InvalidInputError: If there are not exactly 12 words.
        WordNotFoundError: If a word is not in the wordlist.
        ChecksumMismatchError: If the checksum bits are not ``0000``.
    """
    if len(words) != MNEMONIC_WORD_COUNT:
        msg = f"invalid number of seed words: {len(words)}, expected {MNEMONIC_WORD_COUNT}"
        raise InvalidInputError(msg)

    bits = ""
    for word in words:
        idx = find_word(word)
        if idx is None:
            raise WordNotFoundError(word)
        bits += format(idx, f"0{_BITS_PER_WORD}b")

    divider = len(bits) * 32 // 33
    entropy_bits, checksum_bits = bits[:divider], bits[divider:]
    if checksum_bits != EXPECTED_CHECKSUM:
        raise ChecksumMismatchError(checksum_bits)

    entropy = bytes(int(entropy_bits[i : i + 8], 2) for i in range(0, len(entropy_bits), 8))
    return entropy + entropy


def entropy_to_mnemonic(entropy: bytes) -> list[str]:
    """Inverse of :func:`decode_mnemonic`.

    Accepts the 16 entropy bytes or the 32-byte doubled form, and appends
    the all-zero checksum the decoder expects.

    Raises:
        InvalidInputError: On an unsupported entropy length.
    """
    if len(entropy) == 32 and entropy[:16] == entropy[16:]:
        entropy = entropy[:16]
    if len(entropy) != 16:
        msg = f"entropy must be 16 bytes (or 32 with identical halves), got {len(entropy)}"
        raise InvalidInputError(msg)

    bits = "".join(format(b, "08b") for b in entropy) + EXPECTED_CHECKSUM
    wordlist = english_wordlist()
    return [
        wordlist[int(bits[i : i + _BITS_PER_WORD], 2)]
        for i in range(0, len(bits), _BITS_PER_WORD)
    ]
