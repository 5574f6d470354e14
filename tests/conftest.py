"""Shared test fixtures."""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID

from bus_signer.domain.entities.message import Message

KEY_PASSWORD = b"s3cret"


@dataclass(frozen=True)
class FixedClock:
    moment: dt.datetime

    def now(self) -> dt.datetime:
        return self.moment


@dataclass(frozen=True)
class Credentials:
    cert_path: Path
    key_path: Path
    pkcs1_key_path: Path
    encrypted_key_path: Path
    ec_key_path: Path
    cert_pem: str
    key: rsa.RSAPrivateKey


def make_message(
    *,
    topic: str = "org.example.test",
    payload: dict[str, Any] | None = None,
    sequence: int = 7,
    clock: FixedClock | None = None,
) -> Message:
    return Message.create(topic, {"a": 1} if payload is None else payload, sequence, clock=clock)


def _self_signed(key: rsa.RSAPrivateKey) -> bytes:
    name = x509.Name(
        [
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Example"),
            x509.NameAttribute(NameOID.COMMON_NAME, "bus-signer-test"),
        ]
    )
    not_before = dt.datetime.now(dt.timezone.utc) - dt.timedelta(minutes=5)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_before)
        .not_valid_after(not_before + dt.timedelta(days=30))
        .sign(private_key=key, algorithm=hashes.SHA256())
    )
    return cert.public_bytes(serialization.Encoding.PEM)


@pytest.fixture(scope="session")
def credentials(tmp_path_factory: pytest.TempPathFactory) -> Credentials:
    pki = tmp_path_factory.mktemp("pki")
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    cert_pem = _self_signed(key)

    cert_path = pki / "signer.crt"
    cert_path.write_bytes(cert_pem)

    key_path = pki / "signer.key"
    key_path.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )

    pkcs1_key_path = pki / "signer-rsa.key"
    pkcs1_key_path.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.TraditionalOpenSSL,
            serialization.NoEncryption(),
        )
    )

    encrypted_key_path = pki / "signer-encrypted.key"
    encrypted_key_path.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.BestAvailableEncryption(KEY_PASSWORD),
        )
    )

    ec_key_path = pki / "signer-ec.key"
    ec_key_path.write_bytes(
        ec.generate_private_key(ec.SECP256R1()).private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )

    return Credentials(
        cert_path=cert_path,
        key_path=key_path,
        pkcs1_key_path=pkcs1_key_path,
        encrypted_key_path=encrypted_key_path,
        ec_key_path=ec_key_path,
        cert_pem=cert_pem.decode("ascii"),
        key=key,
    )


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(dt.datetime(2031, 3, 14, 15, 9, 26, 535000, tzinfo=dt.timezone.utc))
