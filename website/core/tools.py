"""Developer Tools — GUID, hash and machine key generators behind /tools.

Invariants:
    - Unsupported formats or algorithms raise ToolInputError naming the field
    - Algorithm and format names are case-insensitive
    - Machine keys are uppercase hex of the algorithm's key size

Design Decisions:
    - Randomness injectable (new_uuid, random_bytes) so outputs are testable
    - GUID formats follow the .NET Guid.ToString() format specifiers
"""

import base64
import hashlib
import secrets
import uuid
from collections.abc import Callable
from dataclasses import dataclass

from website.core.errors import ToolInputError

GUID_FORMATS = ("N", "D", "B", "P", "X")

HASH_ALGORITHMS = ("md5", "sha1", "sha256", "sha384", "sha512")
HASH_FORMATS = ("base64", "hexadecimal")

# name → (machineKey "decryption" attribute, key size in bytes)
DECRYPTION_ALGORITHMS = {
    "3DES": ("3DES", 24),
    "AES-128": ("AES", 16),
    "AES-192": ("AES", 24),
    "AES-256": ("AES", 32),
    "DES": ("DES", 8),
}

# name → key size in bytes
VALIDATION_ALGORITHMS = {
    "3DES": 24,
    "AES": 32,
    "HMACSHA256": 32,
    "HMACSHA384": 48,
    "HMACSHA512": 64,
    "MD5": 16,
    "SHA1": 64,
}


@dataclass(frozen=True)
class MachineKey:
    decryption_key: str
    validation_key: str
    machine_key_xml: str


def _lookup(options, value: str, field: str):
    """Case-insensitive lookup of value among options (a tuple or dict keys)."""
    for option in options:
        if option.lower() == value.lower():
            return option
    raise ToolInputError(
        f"The specified {field} '{value}' is invalid.", field,
    )


def format_guid(value: uuid.UUID, fmt: str = "D", uppercase: bool = False) -> str:
    """Format a UUID using a .NET-style format specifier."""
    fmt = _lookup(GUID_FORMATS, fmt, "format")
    if fmt == "N":
        text = value.hex
    elif fmt == "D":
        text = str(value)
    elif fmt == "B":
        text = "{" + str(value) + "}"
    elif fmt == "P":
        text = "(" + str(value) + ")"
    else:
        h = value.hex
        tail = ",".join(f"0x{h[i:i + 2]}" for i in range(16, 32, 2))
        text = f"{{0x{h[0:8]},0x{h[8:12]},0x{h[12:16]},{{{tail}}}}}"
    return text.upper().replace("0X", "0x") if uppercase else text


def generate_guid(
    fmt: str = "D",
    uppercase: bool = False,
    new_uuid: Callable[[], uuid.UUID] = uuid.uuid4,
) -> str:
    return format_guid(new_uuid(), fmt, uppercase)


def generate_hash(algorithm: str, output_format: str, plaintext: str) -> str:
    """Hash UTF-8 plaintext, returning base64 or lowercase hex."""
    algorithm = _lookup(HASH_ALGORITHMS, algorithm, "algorithm")
    output_format = _lookup(HASH_FORMATS, output_format, "format")
    digest = hashlib.new(algorithm, (plaintext or "").encode("utf-8")).digest()
    if output_format == "base64":
        return base64.b64encode(digest).decode("ascii")
    return digest.hex()


def generate_machine_key(
    decryption_algorithm: str,
    validation_algorithm: str,
    random_bytes: Callable[[int], bytes] = secrets.token_bytes,
) -> MachineKey:
    """Generate an ASP.NET <machineKey> element with random keys."""
    decryption_name = _lookup(
        DECRYPTION_ALGORITHMS, decryption_algorithm, "decryptionAlgorithm",
    )
    validation_name = _lookup(
        VALIDATION_ALGORITHMS, validation_algorithm, "validationAlgorithm",
    )
    decryption, decryption_size = DECRYPTION_ALGORITHMS[decryption_name]
    validation_size = VALIDATION_ALGORITHMS[validation_name]

    decryption_key = random_bytes(decryption_size).hex().upper()
    validation_key = random_bytes(validation_size).hex().upper()
    xml = (
        f'<machineKey validationKey="{validation_key}" '
        f'decryptionKey="{decryption_key}" '
        f'validation="{validation_name}" decryption="{decryption}" />'
    )
    return MachineKey(decryption_key, validation_key, xml)
