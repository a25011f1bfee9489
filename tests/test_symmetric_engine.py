import os

import pytest
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from core.crypto_engine import (
    AESCBCCipher, AESGCMCipher, AuthenticationFailure, ChaCha20Cipher,
    InputError, KeyFormatError, PaddingError, RandomGenerationFailure,
    SymmetricAlgorithm, SymmetricCipherEngine,
)
from utils import DeterministicRandom

AEAD = [SymmetricAlgorithm.AES_GCM, SymmetricAlgorithm.CHACHA20_POLY1305]

MESSAGES = [
    b"",
    b"x",
    "héllo wörld 🔐".encode("utf-8"),
    b"A" * 4096,
    os.urandom(10_000),
]


class TestRoundTrip:
    @pytest.mark.parametrize("algo", list(SymmetricAlgorithm))
    @pytest.mark.parametrize("msg", MESSAGES, ids=lambda m: f"{len(m)}B")
    def test_decrypt_inverts_encrypt(self, sym_engine: SymmetricCipherEngine,
                                     algo: SymmetricAlgorithm, msg: bytes) -> None:
        res = sym_engine.encrypt(msg, algo)
        assert sym_engine.decrypt(res.ciphertext, res.key_material, algo) == msg

    def test_accepts_stored_tag(self, sym_engine: SymmetricCipherEngine) -> None:
        res = sym_engine.encrypt(b"tag", "ChaChaPoly")
        assert sym_engine.decrypt(res.ciphertext, res.key_material, "ChaChaPoly") == b"tag"


class TestOutputShape:
    @pytest.mark.parametrize("algo", AEAD)
    def test_aead_blob_is_nonce_ct_tag(self, sym_engine: SymmetricCipherEngine,
                                       algo: SymmetricAlgorithm) -> None:
        res = sym_engine.encrypt(b"hello", algo)
        assert len(res.ciphertext) == 12 + 5 + 16
        assert len(res.key_material) == 32

    def test_cbc_ciphertext_is_padded_blocks(self, sym_engine: SymmetricCipherEngine) -> None:
        res = sym_engine.encrypt(b"hello", SymmetricAlgorithm.AES_CBC)
        assert len(res.ciphertext) == 16
        assert len(res.key_material) == 48

    def test_cbc_full_block_gets_extra_padding_block(self, sym_engine: SymmetricCipherEngine) -> None:
        res = sym_engine.encrypt(b"B" * 16, SymmetricAlgorithm.AES_CBC)
        assert len(res.ciphertext) == 32

    def test_result_repr_hides_key(self, sym_engine: SymmetricCipherEngine) -> None:
        res = sym_engine.encrypt(b"hello", SymmetricAlgorithm.AES_GCM)
        assert res.key_material.hex() not in repr(res)


class TestNonDeterminism:
    @pytest.mark.parametrize("algo", list(SymmetricAlgorithm))
    def test_same_input_different_output(self, sym_engine: SymmetricCipherEngine,
                                         algo: SymmetricAlgorithm) -> None:
        a = sym_engine.encrypt(b"same plaintext", algo)
        b = sym_engine.encrypt(b"same plaintext", algo)
        assert a.ciphertext != b.ciphertext
        assert a.key_material != b.key_material

    def test_deterministic_source_reproduces_fixtures(self) -> None:
        a = SymmetricCipherEngine(DeterministicRandom(b"seed")).encrypt(
            b"fixture", SymmetricAlgorithm.AES_GCM)
        b = SymmetricCipherEngine(DeterministicRandom(b"seed")).encrypt(
            b"fixture", SymmetricAlgorithm.AES_GCM)
        assert a == b

    def test_deterministic_source_still_fresh_per_call(self, fixed_random: DeterministicRandom) -> None:
        engine = SymmetricCipherEngine(fixed_random)
        a = engine.encrypt(b"fixture", SymmetricAlgorithm.AES_CBC)
        b = engine.encrypt(b"fixture", SymmetricAlgorithm.AES_CBC)
        assert a.key_material != b.key_material


class TestTamperDetection:
    @pytest.mark.parametrize("algo", AEAD)
    def test_every_byte_flip_fails_authentication(self, sym_engine: SymmetricCipherEngine,
                                                  algo: SymmetricAlgorithm) -> None:
        res = sym_engine.encrypt(b"tamper me", algo)
        for pos in range(len(res.ciphertext)):
            tampered = bytearray(res.ciphertext)
            tampered[pos] ^= 0x01
            with pytest.raises(AuthenticationFailure):
                sym_engine.decrypt(bytes(tampered), res.key_material, algo)

    @pytest.mark.parametrize("algo", AEAD)
    def test_wrong_key_fails_authentication(self, sym_engine: SymmetricCipherEngine,
                                            algo: SymmetricAlgorithm) -> None:
        res = sym_engine.encrypt(b"secret", algo)
        with pytest.raises(AuthenticationFailure):
            sym_engine.decrypt(res.ciphertext, os.urandom(32), algo)

    @pytest.mark.parametrize("algo", AEAD)
    def test_wrong_key_length(self, sym_engine: SymmetricCipherEngine,
                              algo: SymmetricAlgorithm) -> None:
        res = sym_engine.encrypt(b"secret", algo)
        with pytest.raises(KeyFormatError):
            sym_engine.decrypt(res.ciphertext, res.key_material[:16], algo)

    @pytest.mark.parametrize("algo", AEAD)
    def test_truncated_blob(self, sym_engine: SymmetricCipherEngine,
                            algo: SymmetricAlgorithm) -> None:
        res = sym_engine.encrypt(b"secret", algo)
        with pytest.raises(InputError):
            sym_engine.decrypt(res.ciphertext[:27], res.key_material, algo)

    def test_algorithms_are_not_interchangeable(self, sym_engine: SymmetricCipherEngine) -> None:
        res = sym_engine.encrypt(b"secret", SymmetricAlgorithm.AES_GCM)
        with pytest.raises(AuthenticationFailure):
            sym_engine.decrypt(res.ciphertext, res.key_material,
                               SymmetricAlgorithm.CHACHA20_POLY1305)


class TestCBC:
    @pytest.mark.parametrize("length", [0, 16, 32, 47, 49, 64])
    def test_key_material_must_be_48_bytes(self, sym_engine: SymmetricCipherEngine,
                                           length: int) -> None:
        res = sym_engine.encrypt(b"secret", SymmetricAlgorithm.AES_CBC)
        with pytest.raises(KeyFormatError):
            sym_engine.decrypt(res.ciphertext, os.urandom(length), SymmetricAlgorithm.AES_CBC)

    def test_invalid_padding(self, sym_engine: SymmetricCipherEngine) -> None:
        key, iv = os.urandom(32), os.urandom(16)
        enc = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        # last plaintext byte 0x00 is never valid PKCS#7
        ct  = enc.update(b"\x00" * 16) + enc.finalize()
        with pytest.raises(PaddingError):
            sym_engine.decrypt(ct, key + iv, SymmetricAlgorithm.AES_CBC)

    @pytest.mark.parametrize("length", [0, 15, 17])
    def test_ciphertext_not_block_aligned(self, sym_engine: SymmetricCipherEngine,
                                          length: int) -> None:
        with pytest.raises(InputError):
            sym_engine.decrypt(os.urandom(length), os.urandom(48), SymmetricAlgorithm.AES_CBC)

    def test_tampering_is_not_detected(self, sym_engine: SymmetricCipherEngine) -> None:
        # documented weakness of unauthenticated CBC: a flip in block 1
        # garbles block 1 and flips one byte of block 2, padding survives
        msg = b"twenty byte message!"
        res = sym_engine.encrypt(msg, SymmetricAlgorithm.AES_CBC)
        tampered = bytearray(res.ciphertext)
        tampered[0] ^= 0x01
        out = sym_engine.decrypt(bytes(tampered), res.key_material, SymmetricAlgorithm.AES_CBC)
        assert out != msg
        assert len(out) == len(msg)

    def test_from_key_material_splits_key_and_iv(self) -> None:
        material = os.urandom(48)
        cipher = AESCBCCipher.from_key_material(material)
        assert cipher.key_material == material
        assert cipher.info()["aead"] is False


class TestCipherClasses:
    def test_names(self) -> None:
        assert AESGCMCipher(os.urandom(32)).cipher_name == "AES-256-GCM"
        assert ChaCha20Cipher(os.urandom(32)).cipher_name == "CHACHA20-POLY1305"

    def test_info(self) -> None:
        info = ChaCha20Cipher(os.urandom(32)).info()
        assert info["key_bits"] == 256
        assert info["iv_bytes"] == 12
        assert info["aead"] is True
        assert "security_note" in info

    def test_key_length_checked(self) -> None:
        with pytest.raises(KeyFormatError):
            AESGCMCipher(os.urandom(16))

    @pytest.mark.parametrize("cls", [AESGCMCipher, ChaCha20Cipher])
    def test_standalone_cipher_round_trip(self, cls) -> None:
        cipher = cls(os.urandom(32))
        blob   = cipher.encrypt(b"built directly")
        assert len(blob) == 12 + len(b"built directly") + 16
        assert cls(cipher.key_material).decrypt(blob) == b"built directly"

    def test_standalone_cipher_fresh_nonce(self) -> None:
        cipher = AESGCMCipher(os.urandom(32))
        assert cipher.encrypt(b"same")[:12] != cipher.encrypt(b"same")[:12]


class TestRandomFailure:
    def test_random_failure_is_fatal(self, monkeypatch: pytest.MonkeyPatch,
                                     sym_engine: SymmetricCipherEngine) -> None:
        def broken(n):
            raise OSError("no entropy")
        monkeypatch.setattr("utils.random_gen.os.urandom", broken)
        with pytest.raises(RandomGenerationFailure):
            sym_engine.encrypt(b"x", SymmetricAlgorithm.AES_GCM)
