"""Tests for EIP-55 checksums, base58 decoding and chain-aware address checks."""

import pytest

from x402lint.codes import IssueCode
from x402lint.kernel.address import (
    network_namespace,
    validate_address,
    validate_evm_address,
    validate_solana_address,
)
from x402lint.kernel.checksum import (
    Base58Error,
    decode_base58,
    is_valid_checksum,
    keccak256_hex,
    to_checksum_address,
)
from x402lint.kernel.registry import Registry

# EIP-55 reference vectors
CHECKSUMMED = [
    "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
    "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
    "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
    "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
]
ALL_CAPS = "0x52908400098527886E0F7030069857D2E4169EE7"
SOLANA_USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


class TestKeccak:
    def test_empty_string_digest(self):
        """Ethereum Keccak-256, not NIST SHA3-256."""
        assert keccak256_hex("") == "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"


class TestChecksum:
    @pytest.mark.parametrize("address", CHECKSUMMED)
    def test_reference_vectors(self, address):
        assert to_checksum_address(address.lower()) == address
        assert is_valid_checksum(address)

    @pytest.mark.parametrize("address", CHECKSUMMED)
    def test_checksum_is_idempotent(self, address):
        once = to_checksum_address(address)
        assert to_checksum_address(once) == once

    def test_flipped_case_fails(self):
        bad = CHECKSUMMED[0][:2] + CHECKSUMMED[0][2:].swapcase()
        assert not is_valid_checksum(bad)


class TestBase58:
    def test_leading_ones_are_zero_bytes(self):
        assert decode_base58("11") == b"\x00\x00"

    def test_simple_value(self):
        assert decode_base58("2") == b"\x01"
        assert decode_base58("z") == b"\x39"

    def test_solana_key_is_32_bytes(self):
        assert len(decode_base58(SOLANA_USDC)) == 32

    @pytest.mark.parametrize("value", ["0", "O", "I", "l", "abc+"])
    def test_invalid_characters(self, value):
        with pytest.raises(Base58Error):
            decode_base58(value)


class TestEvmAddress:
    def test_checksummed_address_is_clean(self):
        assert validate_evm_address(CHECKSUMMED[0], "payTo") == []

    def test_all_lowercase_warns_once_with_fix(self):
        issues = validate_evm_address(CHECKSUMMED[0].lower(), "payTo")
        assert len(issues) == 1
        assert issues[0].code == IssueCode.NO_EVM_CHECKSUM
        assert issues[0].severity == "warning"
        assert CHECKSUMMED[0] in issues[0].fix

    def test_all_uppercase_is_accepted(self):
        assert validate_evm_address(ALL_CAPS, "payTo") == []

    def test_digits_only_is_accepted(self):
        assert validate_evm_address("0x" + "1" * 40, "payTo") == []

    def test_bad_checksum_warns_with_expected(self):
        bad = "0x5AAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
        issues = validate_evm_address(bad, "payTo")
        assert [i.code for i in issues] == [IssueCode.BAD_EVM_CHECKSUM]
        assert issues[0].fix == f"Expected: {CHECKSUMMED[0]}"

    @pytest.mark.parametrize("address", [
        "0x123",
        "5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
        "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1bEAeZ",
        "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed00",
        "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed\n",
        "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed ",
        " 0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
        12345,
    ])
    def test_malformed_is_an_error(self, address):
        issues = validate_evm_address(address, "accepts[0].payTo")
        assert [i.code for i in issues] == [IssueCode.INVALID_EVM_ADDRESS]
        assert issues[0].severity == "error"
        assert issues[0].field == "accepts[0].payTo"


class TestSolanaAddress:
    def test_valid_key(self):
        assert validate_solana_address(SOLANA_USDC, "payTo") == []

    @pytest.mark.parametrize("address", ["0OIl", "abc", SOLANA_USDC + "1", None])
    def test_invalid_key(self, address):
        issues = validate_solana_address(address, "payTo")
        assert [i.code for i in issues] == [IssueCode.INVALID_SOLANA_ADDRESS]


class TestDispatch:
    def test_namespace_from_caip2(self):
        assert network_namespace("eip155:8453", Registry.default()) == "eip155"

    def test_namespace_from_shorthand(self):
        assert network_namespace("base", Registry.default()) == "eip155"
        assert network_namespace("solana", Registry.default()) == "solana"

    def test_unknown_namespace_is_unchecked(self):
        assert validate_address("anything", "cosmos:cosmoshub-4", "payTo", Registry.default()) == []

    def test_unresolvable_network_is_unchecked(self):
        assert validate_address("anything", "not a network", "payTo", Registry.default()) == []

    def test_evm_dispatch(self):
        issues = validate_address("0x123", "eip155:1", "payTo", Registry.default())
        assert [i.code for i in issues] == [IssueCode.INVALID_EVM_ADDRESS]

    def test_solana_dispatch(self):
        issues = validate_address(CHECKSUMMED[0], "solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp", "payTo", Registry.default())
        assert [i.code for i in issues] == [IssueCode.INVALID_SOLANA_ADDRESS]
