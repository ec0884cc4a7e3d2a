"""Header shared by all item codecs."""

from fscache.domain.exceptions import CorruptEntryError

MAGIC = b"FSC\x00"
FORMAT_VERSION = 1
HEADER_SIZE = len(MAGIC) + 2


def pack_header(codec_id: bytes) -> bytes:
    return MAGIC + codec_id + bytes([FORMAT_VERSION])


def unpack_payload(data: bytes, codec_id: bytes) -> bytes:
    """Checks the header of ``data`` and returns the payload after it.

    Raises:
        CorruptEntryError: On a missing/foreign header or an unknown version.
    """
    if not isinstance(data, (bytes, bytearray)) or len(data) < HEADER_SIZE:
        raise CorruptEntryError("Entry is shorter than the format header")
    if data[:len(MAGIC)] != MAGIC:
        raise CorruptEntryError("Entry does not start with the cache format marker")
    found_id = data[len(MAGIC):len(MAGIC) + 1]
    if found_id != codec_id:
        raise CorruptEntryError(f"Entry was written by codec {found_id!r}, expected {codec_id!r}")
    version = data[len(MAGIC) + 1]
    if version != FORMAT_VERSION:
        raise CorruptEntryError(f"Unsupported entry format version {version}")
    return bytes(data[HEADER_SIZE:])


def check_expires_at(expires_at) -> None:
    if expires_at is not None and (isinstance(expires_at, bool) or not isinstance(expires_at, (int, float))):
        raise CorruptEntryError(f"Invalid expiry timestamp: {expires_at!r}")
