"""Generation of self-signed P-256 keys and certificates for the services."""

from __future__ import annotations

import enum
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

__all__ = ["Subject", "generate_key_and_cert", "CERTIFICATE_VALIDITY_DAYS"]

CERTIFICATE_VALIDITY_DAYS = 365


class Subject(enum.Enum):
    """Whom a key and certificate are generated for; values are the CLI names."""

    DIUN = "diun"
    MANUFACTURER = "manufacturer"
    DEVICE_CA = "device-ca"
    OWNER = "owner"

    @property
    def common_name(self) -> str:
        """The certificate's common name."""
        return _COMMON_NAMES[self]

    @property
    def file_name(self) -> str:
        """The stem of the key and certificate file names."""
        return _FILE_NAMES[self]


_COMMON_NAMES = {
    Subject.DIUN: "DIUN",
    Subject.MANUFACTURER: "Manufacturer",
    Subject.DEVICE_CA: "Device",
    Subject.OWNER: "Owner",
}

_FILE_NAMES = {
    Subject.DIUN: "diun",
    Subject.MANUFACTURER: "manufacturer",
    Subject.DEVICE_CA: "device_ca",
    Subject.OWNER: "owner",
}


def generate_key_and_cert(
    subject: Subject | str,
    destination_dir: str | os.PathLike[str] = "keys",
    organization: str = "Example",
    country: str = "US",
) -> tuple[Path, Path]:
    """Write ``<name>_key.der`` and ``<name>_cert.pem`` into ``destination_dir``.

    The key is a P-256 EC key in DER form; the certificate is self-signed,
    SHA-256 signed and valid for a year from now. Returns both paths.
    """
    subject = Subject(subject)
    directory = Path(destination_dir)
    if not directory.is_absolute():
        directory = Path.cwd() / directory
    if not directory.is_dir():
        raise NotADirectoryError(f"{directory} is not a directory")

    key = ec.generate_private_key(ec.SECP256R1())
    name = x509.Name(
        [
            x509.NameAttribute(NameOID.COMMON_NAME, subject.common_name),
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, organization),
            x509.NameAttribute(NameOID.COUNTRY_NAME, country),
        ]
    )
    now = datetime.now(timezone.utc)
    serial = int.from_bytes(os.urandom(8), "big") or 1
    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .serial_number(serial)
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=CERTIFICATE_VALIDITY_DAYS))
        .public_key(key.public_key())
        .sign(key, hashes.SHA256())
    )

    key_path = directory / f"{subject.file_name}_key.der"
    key_path.write_bytes(
        key.private_bytes(
            serialization.Encoding.DER,
            serialization.PrivateFormat.TraditionalOpenSSL,
            serialization.NoEncryption(),
        )
    )
    cert_path = directory / f"{subject.file_name}_cert.pem"
    cert_path.write_bytes(certificate.public_bytes(serialization.Encoding.PEM))
    return key_path, cert_path