"""
SecureEncryption: Cipher Verification Script

Run this to verify every algorithm works correctly:
    python verify_ciphers.py
"""

import os
import sys
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from core.crypto_engine import (
    AlgorithmCatalog, AsymmetricAlgorithm, AsymmetricCipherEngine,
    CryptoError, RSA_KEY_SIZES, SymmetricAlgorithm, SymmetricCipherEngine,
)


def check_symmetric_round_trip(engine: SymmetricCipherEngine) -> bool:
    test_messages = [
        b"Hello, World!",
        b"",                                     # empty
        b"\x00" * 100,                           # null bytes
        b"A" * 10_000,                           # 10 KB
        os.urandom(1_000_000),                   # 1 MB random
    ]
    all_pass = True
    for algo in AlgorithmCatalog.list_symmetric():
        ok = True
        for msg in test_messages:
            try:
                res = engine.encrypt(msg, algo)
                if engine.decrypt(res.ciphertext, res.key_material, algo) != msg:
                    ok = False
                    break
            except CryptoError as exc:
                print(f"  ❌ {algo.value:<20s} ERROR: {exc}")
                ok = False
                break
        info = AlgorithmCatalog.get_info(algo)
        if ok:
            print(f"  ✅ {algo.value:<20s}  key={info['key_bits']:>3d}bit  "
                  f"aead={info['aead']}")
        else:
            print(f"  ❌ {algo.value:<20s}  FAILED")
            all_pass = False
    return all_pass


def check_tamper_detection(engine: SymmetricCipherEngine) -> bool:
    all_pass = True
    for algo in AlgorithmCatalog.list_symmetric():
        res = engine.encrypt(b"Test tamper detection", algo)

        # Flip a byte in the middle of ciphertext
        tampered = bytearray(res.ciphertext)
        tampered[len(tampered) // 2] ^= 0xFF

        try:
            engine.decrypt(bytes(tampered), res.key_material, algo)
            if AlgorithmCatalog.is_aead(algo):
                print(f"  ⚠️  {algo.value:<20s}  NO tamper detection!")
                all_pass = False
            else:
                print(f"  ℹ️  {algo.value:<20s}  unauthenticated (expected)")
        except CryptoError as exc:
            print(f"  ✅ {algo.value:<20s}  {type(exc).__name__}")
    return all_pass


def check_wrong_key(sym: SymmetricCipherEngine,
                    asym: AsymmetricCipherEngine) -> bool:
    all_pass = True
    for algo in AlgorithmCatalog.list_symmetric():
        res   = sym.encrypt(b"Secret message", algo)
        other = sym.encrypt(b"Secret message", algo)
        try:
            out = sym.decrypt(res.ciphertext, other.key_material, algo)
            if out == b"Secret message":
                print(f"  ⚠️  {algo.value:<20s}  Decrypted with wrong key!")
                all_pass = False
            else:
                print(f"  ℹ️  {algo.value:<20s}  garbage output (no MAC)")
        except CryptoError:
            print(f"  ✅ {algo.value:<20s}  Wrong key rejected")

    for algo in AlgorithmCatalog.list_asymmetric():
        res   = asym.encrypt(b"Secret message", algo, 2048)
        other = asym.encrypt(b"x", algo, 2048)
        try:
            out = asym.decrypt(res.ciphertext, other.key_material, algo)
            if out == b"Secret message":
                print(f"  ⚠️  {algo.value:<20s}  Decrypted with wrong key!")
                all_pass = False
            else:
                print(f"  ℹ️  {algo.value:<20s}  garbage output (implicit rejection)")
        except CryptoError:
            print(f"  ✅ {algo.value:<20s}  Wrong key rejected")
    return all_pass


def check_asymmetric(engine: AsymmetricCipherEngine) -> bool:
    all_pass = True
    for algo in AlgorithmCatalog.list_asymmetric():
        for bits in RSA_KEY_SIZES:
            limit = AlgorithmCatalog.max_plaintext_length(algo, bits)
            msg   = os.urandom(limit)
            t0    = time.perf_counter()
            res   = engine.encrypt(msg, algo, bits)
            ok    = engine.decrypt(res.ciphertext, res.key_material, algo) == msg
            dt    = (time.perf_counter() - t0) * 1000
            mark  = "✅" if ok else "❌"
            print(f"  {mark} {algo.value:<12s} {bits}-bit  "
                  f"max={limit:>3d}B  {dt:>8.1f}ms")
            all_pass &= ok
    return all_pass


def benchmark(engine: SymmetricCipherEngine):
    data_1mb = os.urandom(1024 * 1024)
    results  = []
    for algo in AlgorithmCatalog.list_symmetric():
        t0    = time.perf_counter()
        res   = engine.encrypt(data_1mb, algo)
        t_enc = time.perf_counter() - t0

        t0 = time.perf_counter()
        engine.decrypt(res.ciphertext, res.key_material, algo)
        t_dec = time.perf_counter() - t0

        overhead  = len(res.ciphertext) - len(data_1mb)
        total     = (t_enc + t_dec) * 1000
        enc_speed = 1.0 / t_enc if t_enc > 0 else 9999
        dec_speed = 1.0 / t_dec if t_dec > 0 else 9999
        results.append((algo.value, total))
        print(
            f"  {algo.value:<20s}  "
            f"enc={enc_speed:>7.1f} MB/s  "
            f"dec={dec_speed:>7.1f} MB/s  "
            f"overhead={overhead:>3d}B  "
            f"total={total:>7.1f}ms"
        )

    results.sort(key=lambda x: x[1])
    print()
    print("━━━ Ranking ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━")
    for rank, (name, total) in enumerate(results, 1):
        bar = "█" * max(1, int(40 * results[0][1] / (total + 0.01)))
        print(f"  {rank:>2d}. {name:<20s} {total:>7.1f}ms  {bar}")


def main() -> int:
    print("╔══════════════════════════════════════════════════╗")
    print("║  SecureEncryption: Cipher Verification Suite     ║")
    print("╚══════════════════════════════════════════════════╝")
    print()

    sym  = SymmetricCipherEngine()
    asym = AsymmetricCipherEngine()

    print("━━━ Test 1: Symmetric Round-Trip ━━━━━━━━━━━━━━━━━━")
    all_pass = check_symmetric_round_trip(sym)
    print()

    print("━━━ Test 2: Tamper Detection ━━━━━━━━━━━━━━━━━━━━━━")
    all_pass &= check_tamper_detection(sym)
    print()

    print("━━━ Test 3: Wrong Key Rejection ━━━━━━━━━━━━━━━━━━━")
    all_pass &= check_wrong_key(sym, asym)
    print()

    print("━━━ Test 4: RSA Round-Trip at Capacity ━━━━━━━━━━━━")
    all_pass &= check_asymmetric(asym)
    print()

    print("━━━ Test 5: Performance Benchmark (1 MB) ━━━━━━━━━━")
    benchmark(sym)
    print()

    print("━━━ Summary ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━")
    print(f"  Symmetric algorithms:  {len(AlgorithmCatalog.list_symmetric())}")
    print(f"  Asymmetric algorithms: {len(AlgorithmCatalog.list_asymmetric())}")
    if all_pass:
        print("  Result:                🎉 ALL TESTS PASSED")
    else:
        print("  Result:                ⚠️  SOME TESTS FAILED")
    print()
    return 0 if all_pass else 1


if __name__ == "__main__":
    sys.exit(main())
