"""Base58 encoding with the Bitcoin alphabet."""

from __future__ import annotations

ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {ch: i for i, ch in enumerate(ALPHABET)}


def b58encode(data: bytes) -> str:
    """Encode bytes as base58; each leading zero byte becomes a ``1``."""
    data = bytes(data)
    stripped = data.lstrip(b"\0")
    zeros = len(data) - len(stripped)
    num = int.from_bytes(stripped, "big")
    digits = []
    while num:
        num, rem = divmod(num, 58)
        digits.append(ALPHABET[rem])
    return "1" * zeros + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode base58 text; raises ValueError on characters outside the alphabet."""
    stripped = text.lstrip("1")
    zeros = len(text) - len(stripped)
    num = 0
    for ch in stripped:
        try:
            num = num * 58 + _INDEX[ch]
        except KeyError:
            raise ValueError(f"invalid base58 character {ch!r}") from None
    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    return b"\0" * zeros + body