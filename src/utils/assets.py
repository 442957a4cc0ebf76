#!/usr/bin/env python3
"""
EduConfig - Installation Assets
Lublin University of Technology

Loads the root CA certificate and writes assets to short-lived temporary
files for the external tools.

Notes:
- certutil wants the certificate as DER; PEM files are converted on load
- an asset file lives only while its tool runs
"""

import hashlib
import logging
import os
import ssl
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from src.config.settings import CA_CERT_PATH, WINDOWS_SETTINGS

logger = logging.getLogger(__name__)

PEM_MARKER = b"-----BEGIN CERTIFICATE-----"


class AssetError(Exception):
    """Installation asset missing or unreadable"""

    pass


def load_ca_certificate(path: Optional[Path] = None) -> bytes:
    """
    Read the root CA certificate as DER bytes

    Args:
        path: Certificate file, CA_CERT_PATH if None

    Returns:
        bytes: DER-encoded certificate
    """
    cert_path = Path(path) if path is not None else CA_CERT_PATH

    try:
        data = cert_path.read_bytes()
    except OSError as e:
        raise AssetError(f"Cannot read CA certificate {cert_path}: {e}") from e

    if not data:
        raise AssetError(f"CA certificate {cert_path} is empty")

    if data.lstrip().startswith(PEM_MARKER):
        try:
            data = ssl.PEM_cert_to_DER_cert(data.decode("ascii"))
        except (UnicodeDecodeError, ValueError) as e:
            raise AssetError(f"Invalid PEM certificate {cert_path}: {e}") from e

    return data


def certificate_thumbprint(der: bytes) -> str:
    """SHA-1 thumbprint as Windows shows it, upper-case hex without separators"""
    return hashlib.sha1(der).hexdigest().upper()


@contextmanager
def materialize_asset(payload: Union[bytes, str], suffix: str) -> Iterator[Path]:
    """
    Write payload to a fresh temporary file and remove it afterwards

    The file is removed when the block exits, whether it finished normally
    or raised.
    """
    fd, name = tempfile.mkstemp(suffix=suffix, prefix=WINDOWS_SETTINGS["temp_prefix"])
    path = Path(name)

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload.encode("utf-8") if isinstance(payload, str) else payload)
        logger.debug("Wrote asset %s (%d bytes)", path, path.stat().st_size)

        yield path
    finally:
        path.unlink(missing_ok=True)
        logger.debug("Removed asset %s", path)
