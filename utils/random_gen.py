"""
Cryptographically-secure random value generators.

Engines take a random source as a constructor argument.  Production
code uses SecureRandom; test fixtures can pass DeterministicRandom to
get reproducible keys, nonces and IVs.
"""

import os
import logging

from cryptography.hazmat.primitives import hashes

logger = logging.getLogger("SecureEncryption.Random")


class SecureRandom:
    """Random bytes from the operating system CSPRNG."""

    def generate_bytes(self, length: int) -> bytes:
        if length < 0:
            raise ValueError(f"length must be >= 0, got {length}")
        try:
            return os.urandom(length)
        except (OSError, NotImplementedError) as exc:
            from core.crypto_engine.errors import RandomGenerationFailure
            logger.error("Secure random source failed: %s", exc)
            raise RandomGenerationFailure(
                "Secure random source is unavailable"
            ) from exc

    def generate_key(self, length: int = 32) -> bytes:
        return self.generate_bytes(length)

    def generate_nonce(self, length: int = 12) -> bytes:
        return self.generate_bytes(length)

    def generate_iv(self, length: int = 16) -> bytes:
        return self.generate_bytes(length)


class DeterministicRandom(SecureRandom):
    """
    Reproducible byte stream: SHA-256(seed ‖ counter) blocks.

    NOT secure.  Only meant for test fixtures that need stable output.
    """

    def __init__(self, seed: bytes = b"secureencryption-fixture"):
        self._seed    = seed
        self._counter = 0
        self._buffer  = b""

    def generate_bytes(self, length: int) -> bytes:
        if length < 0:
            raise ValueError(f"length must be >= 0, got {length}")
        while len(self._buffer) < length:
            d = hashes.Hash(hashes.SHA256())
            d.update(self._seed)
            d.update(self._counter.to_bytes(8, "big"))
            self._buffer  += d.finalize()
            self._counter += 1
        out, self._buffer = self._buffer[:length], self._buffer[length:]
        return out
