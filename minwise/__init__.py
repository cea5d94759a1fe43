import importlib.metadata
from typing import Final

try:
    _version = importlib.metadata.version(__name__)
except importlib.metadata.PackageNotFoundError:
    _version = "0.0.0"  # Fallback for development mode
__version__: Final[str] = _version

from minwise.b_bit import bBitSignature, signature_bbit, similarity_bbit
from minwise.estimators import (
    cardinality,
    intersection_cardinality,
    less_cardinality,
    similarity,
    symmetric_difference_cardinality,
    union_cardinality,
)
from minwise.hashfamily import DEFAULT_FAMILY, HashFamily
from minwise.hashfunc import blake2b_hash64, md5_hash64, sha1_hash64
from minwise.minhash import MinHash
from minwise.signature import (
    INFINITY,
    SizeMismatchError,
    empty_signature,
    is_empty,
    union,
)


__all__ = [
    "DEFAULT_FAMILY",
    "INFINITY",
    "HashFamily",
    "MinHash",
    "SizeMismatchError",
    "bBitSignature",
    "blake2b_hash64",
    "cardinality",
    "empty_signature",
    "intersection_cardinality",
    "is_empty",
    "less_cardinality",
    "md5_hash64",
    "sha1_hash64",
    "signature_bbit",
    "similarity",
    "similarity_bbit",
    "symmetric_difference_cardinality",
    "union",
    "union_cardinality",
]
