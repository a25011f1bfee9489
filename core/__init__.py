from .crypto_engine import (
    SymmetricCipherEngine, AsymmetricCipherEngine, KeyMaterialCodec,
    AlgorithmCatalog,
)

__all__ = ["SymmetricCipherEngine", "AsymmetricCipherEngine",
           "KeyMaterialCodec", "AlgorithmCatalog"]
