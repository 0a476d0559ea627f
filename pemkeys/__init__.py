"""Parse PEM encoded private keys into algorithm-typed records."""

import logging

from .errors import (
    DecryptionFailed,
    KeyLoadError,
    MalformedDer,
    MalformedFormat,
    MalformedInput,
    NoKeyFound,
    PasswordRequired,
    PemKeyError,
    UnsupportedFormat,
)
from .oids import CurveParameters, KeyAlgorithm, resolve_algorithm, resolve_curve
from .parser import parse, parse_all
from .pem import PemBlock, extract
from .records import (
    DsaKeyMaterial,
    EcKeyMaterial,
    GostKeyMaterial,
    PrivateKeyRecord,
    RawKeyMaterial,
    RsaKeyMaterial,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "parse",
    "parse_all",
    "extract",
    "resolve_algorithm",
    "resolve_curve",
    "PemBlock",
    "PrivateKeyRecord",
    "KeyAlgorithm",
    "CurveParameters",
    "RsaKeyMaterial",
    "DsaKeyMaterial",
    "EcKeyMaterial",
    "RawKeyMaterial",
    "GostKeyMaterial",
    "PemKeyError",
    "NoKeyFound",
    "MalformedInput",
    "MalformedDer",
    "MalformedFormat",
    "UnsupportedFormat",
    "PasswordRequired",
    "DecryptionFailed",
    "KeyLoadError",
]
