"""
SecureEncryption: command-line front end

Commands
────────
encrypt      encrypt text, print ciphertext + key, record history
decrypt      decrypt base64 ciphertext with a base64 key
history      list past encryptions (newest first)
delete       remove history entries by position
algorithms   list supported algorithms

    python main.py encrypt "hello" --type asymmetric --algorithm "RSA OAEP"
"""

import sys
import logging
import argparse

from config.settings import Settings, EncryptionPreferences

from core.crypto_engine import (
    AlgorithmCatalog, CryptoError, EncryptionType,
)
from core.service import EncryptionService

from history       import HistoryLedger, SensitiveFieldGate, Authenticator
from utils         import JsonFileStorage

logger = logging.getLogger("SecureEncryption.Main")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  Console capabilities
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConsoleAuthenticator(Authenticator):
    """Asks the person at the terminal to confirm."""

    def __init__(self, stream_in=None, stream_out=None):
        self.stream_in  = stream_in or sys.stdin
        self.stream_out = stream_out or sys.stderr

    def authenticate(self, reason: str) -> bool:
        self.stream_out.write(f"{reason} [y/N]: ")
        self.stream_out.flush()
        answer = self.stream_in.readline().strip().lower()
        return answer in ("y", "yes")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  Setup
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_console_handler = None


def setup_logging(level: str = Settings.LOG_LEVEL):
    global _console_handler
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    if _console_handler is not None:
        return

    _console_handler = console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(
        Settings.LOG_FORMAT, datefmt="%H:%M:%S",
    ))
    root_logger.addHandler(console_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="secureencryption",
        description=f"{Settings.APP_NAME} v{Settings.APP_VERSION}",
    )
    parser.add_argument("--history-file", default=Settings.HISTORY_FILE)
    parser.add_argument("--log-level", type=str.upper,
                        default=Settings.LOG_LEVEL.upper(),
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    sub = parser.add_subparsers(dest="command", required=True)

    def add_algorithm_options(p):
        p.add_argument("--type", dest="encryption_type",
                       choices=["symmetric", "asymmetric"], default="symmetric")
        p.add_argument("--algorithm", help="algorithm tag, e.g. 'AES-GCM'")
        p.add_argument("--key-size", type=int, default=Settings.RSA_KEY_SIZE,
                       choices=Settings.RSA_KEY_SIZES)

    p = sub.add_parser("encrypt", help="encrypt text")
    p.add_argument("text")
    add_algorithm_options(p)

    p = sub.add_parser("decrypt", help="decrypt base64 ciphertext")
    p.add_argument("ciphertext")
    p.add_argument("key")
    add_algorithm_options(p)

    p = sub.add_parser("history", help="list past encryptions")
    p.add_argument("--reveal", action="store_true",
                   help="show plaintext and keys after confirmation")

    p = sub.add_parser("delete", help="delete history entries by position")
    p.add_argument("positions", nargs="+", type=int)

    sub.add_parser("algorithms", help="list supported algorithms")
    return parser


def preferences_from(args) -> EncryptionPreferences:
    defaults = EncryptionPreferences.default()
    if args.encryption_type == "symmetric":
        return EncryptionPreferences(
            symmetric_algorithm=args.algorithm or defaults.symmetric_algorithm,
            asymmetric_algorithm=defaults.asymmetric_algorithm,
            rsa_key_size=args.key_size,
        )
    return EncryptionPreferences(
        symmetric_algorithm=defaults.symmetric_algorithm,
        asymmetric_algorithm=args.algorithm or defaults.asymmetric_algorithm,
        rsa_key_size=args.key_size,
    )


def _encryption_type(args) -> EncryptionType:
    return (EncryptionType.SYMMETRIC if args.encryption_type == "symmetric"
            else EncryptionType.ASYMMETRIC)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  Commands
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def cmd_encrypt(args, service: EncryptionService, out):
    outcome = service.encrypt_with_preferences(
        args.text, _encryption_type(args), preferences_from(args),
    )
    out.write(f"Encrypted Text (Base64):\n{outcome.ciphertext_text}\n")
    out.write(f"Decryption Key (Base64):\n{outcome.key_material_text}\n")


def cmd_decrypt(args, service: EncryptionService, out):
    selection = preferences_from(args).selection(_encryption_type(args))
    plaintext = service.decrypt(args.ciphertext, args.key, selection)
    out.write(f"{plaintext}\n")


def cmd_history(args, ledger: HistoryLedger, out, authenticator=None):
    entries = ledger.list()
    if not entries:
        out.write("No history yet.\n")
        return
    revealed = None
    if args.reveal:
        gate     = SensitiveFieldGate(authenticator or ConsoleAuthenticator())
        revealed = gate.reveal_all(entries)
        if revealed is None:
            out.write("Authentication failed; sensitive fields stay hidden.\n")

    for pos, entry in enumerate(entries):
        out.write(f"[{pos}] {entry.timestamp:%Y-%m-%d %H:%M:%S}  "
                  f"Type: {entry.encryption_type.value}\n")
        if entry.symmetric_algorithm is not None:
            out.write(f"    Symmetric Algo: {entry.symmetric_algorithm.value}\n")
        if entry.asymmetric_algorithm is not None:
            out.write(f"    Asymmetric Algo: {entry.asymmetric_algorithm.value}\n")
            out.write(f"    RSA Key Size: {entry.rsa_key_size}\n")
        out.write(f"    Encrypted: {entry.encrypted_text}\n")
        fields = revealed[pos] if revealed else SensitiveFieldGate.masked()
        out.write(f"    Plain Text: {fields.plain_text}\n")
        out.write(f"    Decryption Key: {fields.decryption_key}\n")


def cmd_delete(args, ledger: HistoryLedger, out):
    ledger.remove_at(args.positions)
    out.write(f"Deleted {len(set(args.positions))} entr"
              f"{'y' if len(set(args.positions)) == 1 else 'ies'}.\n")


def cmd_algorithms(out):
    for info in AlgorithmCatalog.get_all_info():
        if info["type"] == EncryptionType.SYMMETRIC.value:
            out.write(f"{info['tag']:<12s} {info['name']:<20s} "
                      f"key={info['key_bits']}bit iv={info['iv_bytes']}B "
                      f"aead={info['aead']}\n")
        else:
            limits = ", ".join(f"{bits}: {n}B"
                               for bits, n in info["max_plaintext"].items())
            out.write(f"{info['tag']:<12s} {info['name']:<20s} "
                      f"max plaintext {limits}\n")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  Entry Point
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def main(argv=None, out=None) -> int:
    args = build_parser().parse_args(argv)
    out  = out or sys.stdout
    setup_logging(args.log_level)

    if args.command == "algorithms":
        cmd_algorithms(out)
        return 0

    ledger  = HistoryLedger(JsonFileStorage(args.history_file), autoload=True)
    service = EncryptionService(history=ledger)

    try:
        if args.command == "encrypt":
            cmd_encrypt(args, service, out)
        elif args.command == "decrypt":
            cmd_decrypt(args, service, out)
        elif args.command == "history":
            cmd_history(args, ledger, out)
        elif args.command == "delete":
            cmd_delete(args, ledger, out)
    except (CryptoError, IndexError, OSError) as exc:
        logger.debug("%s failed: %s", args.command, exc)
        sys.stderr.write(f"Error: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
