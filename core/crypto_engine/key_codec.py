"""
Key material <-> text encoding (standard base64).
"""

import base64
import binascii

from .errors import EncodingError


class KeyMaterialCodec:
    """Reversible text encoding of the exact byte sequence, no framing."""

    @staticmethod
    def encode(data: bytes) -> str:
        return base64.b64encode(data).decode("ascii")

    @staticmethod
    def decode(text: str) -> bytes:
        """
        Strict base64 decode.  Surrounding whitespace is ignored, anything
        else outside the alphabet (or bad padding) raises EncodingError.
        Byte-length semantics are left to the engines.
        """
        if isinstance(text, (bytes, bytearray)):
            try:
                text = bytes(text).decode("ascii")
            except UnicodeDecodeError:
                raise EncodingError("Encoded text must be ASCII") from None
        if not isinstance(text, str):
            raise EncodingError(
                f"Expected text, got {type(text).__name__}"
            )
        try:
            return base64.b64decode(text.strip(), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise EncodingError(f"Invalid base64 text: {exc}") from exc


encode = KeyMaterialCodec.encode
decode = KeyMaterialCodec.decode
