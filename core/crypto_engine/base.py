from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class EncryptionResult:
    """
    Ciphertext plus the key material needed to open it.

    key_material shape depends on the algorithm: raw key (AEAD),
    key ‖ IV (AES-CBC), DER private key (RSA).
    """
    ciphertext:   bytes
    key_material: bytes

    def __repr__(self) -> str:
        # key material stays out of logs and tracebacks
        return (f"EncryptionResult(ciphertext=<{len(self.ciphertext)} bytes>, "
                f"key_material=<{len(self.key_material)} bytes>)")


class CryptoBase(ABC):

    @abstractmethod
    def encrypt(self, plaintext: bytes, algorithm, *args) -> EncryptionResult:
        pass

    @abstractmethod
    def decrypt(self, ciphertext: bytes, key_material: bytes,
                algorithm) -> bytes:
        pass
