"""Human-memorable fingerprints of poster addresses.

A mnemonic lets moderators tell that two anonymous posts came from the same
address without ever seeing the address. It is derived on every read from a
salted BLAKE3 digest of the packed address and is never stored.
"""

from __future__ import annotations

import ipaddress

from board_reader.core.errors import MnemonicError
from board_reader.utils.hash import blake3_digest

WORD_COUNT = 3

# 64 syllables, so one digest byte maps to one syllable without bias.
SYLLABLES: tuple[str, ...] = (
    "a", "i", "u", "e", "o",
    "ka", "ki", "ku", "ke", "ko",
    "sa", "shi", "su", "se", "so",
    "ta", "chi", "tsu", "te", "to",
    "na", "ni", "nu", "ne", "no",
    "ha", "hi", "fu", "he", "ho",
    "ma", "mi", "mu", "me", "mo",
    "ya", "yu", "yo",
    "ra", "ri", "ru", "re", "ro",
    "wa", "wo", "n",
    "ga", "gi", "gu", "ge", "go",
    "za", "ji", "zu", "ze", "zo",
    "da", "de", "do",
    "ba", "bi", "bu", "be", "bo",
)


def mnemonic(ip: str | None, salt: str) -> str:
    """Return the mnemonic of an address.

    Args:
        ip: IPv4 or IPv6 address in text form.
        salt: Deployment secret mixed into the digest.

    Returns:
        ``WORD_COUNT`` two-syllable words separated by spaces. The same
        address and salt always give the same mnemonic.

    Raises:
        MnemonicError: If the address is missing or malformed.
    """
    if not ip:
        raise MnemonicError("Post has no address")
    try:
        address = ipaddress.ip_address(ip.strip())
    except ValueError as exc:
        raise MnemonicError("Malformed address") from exc

    # IPv4 clients seen through a dual-stack socket map to their IPv4 form.
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        address = address.ipv4_mapped

    digest = blake3_digest(salt.encode("utf-8") + address.packed)
    words = [
        SYLLABLES[digest[2 * i] % len(SYLLABLES)] + SYLLABLES[digest[2 * i + 1] % len(SYLLABLES)]
        for i in range(WORD_COUNT)
    ]
    return " ".join(words)
