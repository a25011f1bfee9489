"""
RSA asymmetric encryption with ephemeral key pairs.

Each encrypt() generates a key pair for that call only, encrypts under
the public half and hands back the private half as key material.
Nothing is persisted or reused.
"""

import logging

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa, padding as asym_padding
from cryptography.hazmat.primitives import hashes, serialization

from .base       import CryptoBase, EncryptionResult
from .algorithms import AlgorithmCatalog, AsymmetricAlgorithm
from .errors     import (
    DecryptionFailure, KeyFormatError, PlaintextTooLarge,
    RandomGenerationFailure,
)

logger = logging.getLogger("SecureEncryption.RSA")


def _padding_for(algorithm: AsymmetricAlgorithm) -> asym_padding.AsymmetricPadding:
    if algorithm is AsymmetricAlgorithm.RSA_OAEP:
        return asym_padding.OAEP(
            mgf=asym_padding.MGF1(algorithm=hashes.SHA256()),
            algorithm=hashes.SHA256(),
            label=None,
        )
    return asym_padding.PKCS1v15()


class AsymmetricCipherEngine(CryptoBase):
    """RSA PKCS#1 v1.5 / OAEP-SHA256 encryption."""

    def __init__(self, public_exponent: int = 65537):
        self.public_exponent = public_exponent

    # ── key generation ───────────────────────────────────────────
    def generate_private_key(self, key_size: int) -> rsa.RSAPrivateKey:
        AlgorithmCatalog.check_key_size(key_size)
        try:
            return rsa.generate_private_key(
                public_exponent=self.public_exponent,
                key_size=key_size,
            )
        except OSError as exc:
            raise RandomGenerationFailure(
                f"Could not generate a {key_size}-bit RSA key pair"
            ) from exc

    # ── encrypt / decrypt ────────────────────────────────────────
    def encrypt(self, plaintext: bytes, algorithm: AsymmetricAlgorithm,
                key_size: int = 2048) -> EncryptionResult:
        algorithm = AlgorithmCatalog.parse_asymmetric(algorithm)
        limit     = AlgorithmCatalog.max_plaintext_length(algorithm, key_size)
        if len(plaintext) > limit:
            raise PlaintextTooLarge(len(plaintext), limit)

        private_key = self.generate_private_key(key_size)
        ct = private_key.public_key().encrypt(plaintext, _padding_for(algorithm))
        logger.debug(
            "Encrypted %d bytes with %s (%d-bit ephemeral key)",
            len(plaintext), algorithm.value, key_size,
        )
        return EncryptionResult(
            ciphertext=ct,
            key_material=self.export_private_key(private_key),
        )

    def decrypt(self, ciphertext: bytes, key_material: bytes,
                algorithm: AsymmetricAlgorithm) -> bytes:
        """
        Open ciphertext with the exported private key.

        OAEP rejects a wrong key or corrupted ciphertext with
        DecryptionFailure.  PKCS#1 v1.5 may not: OpenSSL 3.2+ applies
        implicit rejection, returning deterministic pseudo-random bytes
        instead of an error so padding failures cannot be observed.  A
        wrong key then yields garbage, never the original plaintext.  At
        the text boundary such garbage is rarely valid UTF-8 and surfaces
        as DecryptionFailure from EncryptionService.decrypt.
        """
        algorithm   = AlgorithmCatalog.parse_asymmetric(algorithm)
        private_key = self.load_private_key(key_material)
        try:
            pt = private_key.decrypt(ciphertext, _padding_for(algorithm))
        except ValueError as exc:
            raise DecryptionFailure(
                f"{algorithm.value} decryption rejected: {exc}"
            ) from exc
        logger.debug(
            "Decrypted %d bytes with %s (%d-bit key)",
            len(ciphertext), algorithm.value, private_key.key_size,
        )
        return pt

    # ── serialisation ────────────────────────────────────────────
    @staticmethod
    def export_private_key(private_key: rsa.RSAPrivateKey) -> bytes:
        """DER-encoded PKCS#1 RSAPrivateKey, unencrypted."""
        return private_key.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )

    @staticmethod
    def load_private_key(key_material: bytes) -> rsa.RSAPrivateKey:
        """Accepts DER PKCS#1 or PKCS#8 RSA private keys."""
        if not key_material:
            raise KeyFormatError("RSA key material is empty")
        try:
            key = serialization.load_der_private_key(key_material, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise KeyFormatError(
                f"Key material is not a usable RSA private key: {exc}"
            ) from exc
        if not isinstance(key, rsa.RSAPrivateKey):
            raise KeyFormatError(
                f"Expected an RSA private key, got {type(key).__name__}"
            )
        return key
