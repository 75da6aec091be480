"""Address checksum primitives: EIP-55 (keccak-256) and base58 decoding.

Keccak-256 here is the original Keccak padding used by Ethereum, which is
NOT hashlib.sha3_256.
"""

from eth_hash.auto import keccak

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE58_INDEX = {char: i for i, char in enumerate(BASE58_ALPHABET)}


class Base58Error(ValueError):
    """Raised when a string is not valid base58."""
    pass


def keccak256_hex(data: str) -> str:
    """Keccak-256 of the UTF-8 bytes of data, as 64 lowercase hex chars."""
    return keccak(data.encode("utf-8")).hex()


def to_checksum_address(address: str) -> str:
    """EIP-55 mixed-case encoding of a 0x-prefixed 40-hex-digit address.

    Each hex letter is uppercased when the matching nibble of
    keccak256(lowercase hex) is >= 8. Idempotent.
    """
    lower_hex = address[2:].lower()
    digest = keccak256_hex(lower_hex)
    chars = []
    for char, nibble in zip(lower_hex, digest):
        if char in "abcdef" and int(nibble, 16) >= 8:
            chars.append(char.upper())
        else:
            chars.append(char)
    return "0x" + "".join(chars)


def is_valid_checksum(address: str) -> bool:
    """True when address equals its own EIP-55 encoding."""
    return address == to_checksum_address(address)


def decode_base58(value: str) -> bytes:
    """Decode a base58 (Bitcoin alphabet) string, keeping leading zero bytes."""
    num = 0
    for char in value:
        digit = _BASE58_INDEX.get(char)
        if digit is None:
            raise Base58Error(f"Invalid base58 character {char!r}")
        num = num * 58 + digit

    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    # Each leading '1' encodes one leading zero byte
    pad = len(value) - len(value.lstrip("1"))
    return b"\x00" * pad + body
