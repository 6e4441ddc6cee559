"""Developer tools — GUID, hash and machine key generators.

Tests cover:
    - Every .NET GUID format specifier, upper and lower case
    - Known digests for base64 and hexadecimal output
    - Machine key sizes and XML shape
    - Unsupported inputs raise ToolInputError naming the field
"""

import uuid

import pytest

from website.core.errors import ToolInputError
from website.core.tools import (
    format_guid, generate_guid, generate_hash, generate_machine_key,
)

GUID = uuid.UUID("6ba7b810-9dad-11d1-80b4-00c04fd430c8")


@pytest.mark.parametrize(
    "fmt,expected",
    [
        ("N", "6ba7b8109dad11d180b400c04fd430c8"),
        ("D", "6ba7b810-9dad-11d1-80b4-00c04fd430c8"),
        ("B", "{6ba7b810-9dad-11d1-80b4-00c04fd430c8}"),
        ("P", "(6ba7b810-9dad-11d1-80b4-00c04fd430c8)"),
        (
            "X",
            "{0x6ba7b810,0x9dad,0x11d1,"
            "{0x80,0xb4,0x00,0xc0,0x4f,0xd4,0x30,0xc8}}",
        ),
    ],
)
def test_format_guid(fmt, expected):
    assert format_guid(GUID, fmt) == expected


def test_format_guid_uppercase_keeps_hex_prefix_lowercase():
    assert format_guid(GUID, "D", uppercase=True) == "6BA7B810-9DAD-11D1-80B4-00C04FD430C8"
    assert format_guid(GUID, "x", uppercase=True).startswith("{0x6BA7B810,0x9DAD")


def test_generate_guid_uses_injected_source():
    assert generate_guid("N", new_uuid=lambda: GUID) == GUID.hex


def test_generate_guid_default_is_random():
    assert generate_guid() != generate_guid()


def test_invalid_guid_format():
    with pytest.raises(ToolInputError) as info:
        format_guid(GUID, "Z")
    assert info.value.field == "format"
    assert info.value.http_status == 400


@pytest.mark.parametrize(
    "algorithm,fmt,expected",
    [
        ("md5", "hexadecimal", "5d41402abc4b2a76b9719d911017c592"),
        ("SHA1", "hexadecimal", "aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d"),
        (
            "sha256", "hexadecimal",
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824",
        ),
        ("sha256", "Base64", "LPJNul+wow4m6DsqxbninhsWHlwfp0JecwQzYpOLmCQ="),
    ],
)
def test_generate_hash(algorithm, fmt, expected):
    assert generate_hash(algorithm, fmt, "hello") == expected


def test_generate_hash_of_empty_plaintext():
    assert generate_hash("md5", "hexadecimal", "") == "d41d8cd98f00b204e9800998ecf8427e"


@pytest.mark.parametrize(
    "algorithm,fmt,field",
    [("crc32", "base64", "algorithm"), ("sha256", "binary", "format")],
)
def test_generate_hash_rejects_unknown_inputs(algorithm, fmt, field):
    with pytest.raises(ToolInputError) as info:
        generate_hash(algorithm, fmt, "hello")
    assert info.value.field == field


def test_generate_machine_key_sizes_and_xml():
    key = generate_machine_key("aes-256", "sha1", random_bytes=lambda n: b"\xab" * n)

    assert key.decryption_key == "AB" * 32
    assert key.validation_key == "AB" * 64
    assert key.machine_key_xml == (
        f'<machineKey validationKey="{"AB" * 64}" '
        f'decryptionKey="{"AB" * 32}" '
        'validation="SHA1" decryption="AES" />'
    )


def test_generate_machine_key_for_des():
    key = generate_machine_key("DES", "MD5")
    assert len(key.decryption_key) == 16
    assert len(key.validation_key) == 32
    assert 'decryption="DES"' in key.machine_key_xml


def test_generate_machine_key_rejects_unknown_algorithms():
    with pytest.raises(ToolInputError) as info:
        generate_machine_key("AES-1024", "SHA1")
    assert info.value.field == "decryptionAlgorithm"

    with pytest.raises(ToolInputError) as info:
        generate_machine_key("AES-128", "CRC")
    assert info.value.field == "validationAlgorithm"
