"""Object identifier tables.

Algorithm and curve lookups return None for anything not listed here.
The twisted brainpool curves (brainpoolP*t1) are intentionally missing.
"""

import enum
from dataclasses import dataclass
from typing import Optional, Tuple

from ecdsa import curves as ecdsa_curves
from pygost.gost3410 import CURVES as GOST_CURVES


class KeyAlgorithm(enum.Enum):
    RSA = "RSA"
    RSASSA_PSS = "RSASSA-PSS"
    DSA = "DSA"
    EC = "EC"
    EDDSA = "EdDSA"
    XDH = "XDH"
    GOST3410 = "ECGOST3410"

    def __str__(self):
        return self.value


RSA_ENCRYPTION = "1.2.840.113549.1.1.1"
RSASSA_PSS = "1.2.840.113549.1.1.10"
DSA = "1.2.840.10040.4.1"
EC_PUBLIC_KEY = "1.2.840.10045.2.1"
X25519 = "1.3.101.110"
X448 = "1.3.101.111"
ED25519 = "1.3.101.112"
ED448 = "1.3.101.113"
GOST3410_2001 = "1.2.643.2.2.19"
GOST3410_2012_256 = "1.2.643.7.1.1.1.1"
GOST3410_2012_512 = "1.2.643.7.1.1.1.2"

ALGORITHMS = {
    RSA_ENCRYPTION: KeyAlgorithm.RSA,
    RSASSA_PSS: KeyAlgorithm.RSASSA_PSS,
    DSA: KeyAlgorithm.DSA,
    EC_PUBLIC_KEY: KeyAlgorithm.EC,
    ED25519: KeyAlgorithm.EDDSA,
    ED448: KeyAlgorithm.EDDSA,
    X25519: KeyAlgorithm.XDH,
    X448: KeyAlgorithm.XDH,
    GOST3410_2001: KeyAlgorithm.GOST3410,
    GOST3410_2012_256: KeyAlgorithm.GOST3410,
    GOST3410_2012_512: KeyAlgorithm.GOST3410,
}

# Password based encryption
PBES2 = "1.2.840.113549.1.5.13"
PBKDF2 = "1.2.840.113549.1.5.12"
HMAC_SHA1 = "1.2.840.113549.2.7"
HMAC_SHA224 = "1.2.840.113549.2.8"
HMAC_SHA256 = "1.2.840.113549.2.9"
HMAC_SHA384 = "1.2.840.113549.2.10"
HMAC_SHA512 = "1.2.840.113549.2.11"
HMAC_SHA512_224 = "1.2.840.113549.2.12"
HMAC_SHA512_256 = "1.2.840.113549.2.13"
AES128_CBC = "2.16.840.1.101.3.4.1.2"
AES192_CBC = "2.16.840.1.101.3.4.1.22"
AES256_CBC = "2.16.840.1.101.3.4.1.42"


@dataclass(frozen=True)
class CurveParameters:
    name: str
    oid: str
    field_size: int
    order: int
    generator: Tuple[int, int]
    cofactor: int

    def __str__(self):
        return "{} ({})".format(self.name, self.oid)

    @property
    def byte_length(self):
        """Length of a private scalar in bytes."""
        return (self.order.bit_length() + 7) // 8


def _weierstrass(name, oid, curve):
    return CurveParameters(
        name=name,
        oid=oid,
        field_size=curve.curve.p().bit_length(),
        order=curve.order,
        generator=(curve.generator.x(), curve.generator.y()),
        cofactor=curve.curve.cofactor(),
    )


_CURVES = {}
for _name, _oid, _curve in (
    ("secp224r1", "1.3.132.0.33", ecdsa_curves.NIST224p),
    ("secp256r1", "1.2.840.10045.3.1.7", ecdsa_curves.NIST256p),
    ("secp256k1", "1.3.132.0.10", ecdsa_curves.SECP256k1),
    ("secp384r1", "1.3.132.0.34", ecdsa_curves.NIST384p),
    ("secp521r1", "1.3.132.0.35", ecdsa_curves.NIST521p),
    ("brainpoolP256r1", "1.3.36.3.3.2.8.1.1.7", ecdsa_curves.BRAINPOOLP256r1),
    ("brainpoolP320r1", "1.3.36.3.3.2.8.1.1.9", ecdsa_curves.BRAINPOOLP320r1),
    ("brainpoolP384r1", "1.3.36.3.3.2.8.1.1.11", ecdsa_curves.BRAINPOOLP384r1),
    ("brainpoolP512r1", "1.3.36.3.3.2.8.1.1.13", ecdsa_curves.BRAINPOOLP512r1),
):
    _CURVES[_oid] = _weierstrass(_name, _oid, _curve)

# GOST R 34.10 parameter sets, by OID, named as in pygost
GOST_PARAM_SETS = {
    "1.2.643.2.2.35.1": "id-GostR3410-2001-CryptoPro-A-ParamSet",
    "1.2.643.2.2.35.2": "id-GostR3410-2001-CryptoPro-B-ParamSet",
    "1.2.643.2.2.35.3": "id-GostR3410-2001-CryptoPro-C-ParamSet",
    "1.2.643.2.2.36.0": "id-GostR3410-2001-CryptoPro-XchA-ParamSet",
    "1.2.643.2.2.36.1": "id-GostR3410-2001-CryptoPro-XchB-ParamSet",
    "1.2.643.7.1.2.1.1.1": "id-tc26-gost-3410-2012-256-paramSetA",
    "1.2.643.7.1.2.1.2.1": "id-tc26-gost-3410-12-512-paramSetA",
    "1.2.643.7.1.2.1.2.2": "id-tc26-gost-3410-12-512-paramSetB",
    "1.2.643.7.1.2.1.2.3": "id-tc26-gost-3410-2012-512-paramSetC",
}

_GOST_CURVES = {}
for _oid, _name in GOST_PARAM_SETS.items():
    _curve = GOST_CURVES.get(_name)
    if _curve is None:
        continue
    _GOST_CURVES[_oid] = CurveParameters(
        name=_name,
        oid=_oid,
        field_size=_curve.p.bit_length(),
        order=_curve.q,
        generator=(_curve.x, _curve.y),
        cofactor=_curve.cofactor,
    )


def resolve_algorithm(oid) -> Optional[KeyAlgorithm]:
    return ALGORITHMS.get(oid)


def resolve_curve(oid) -> Optional[CurveParameters]:
    return _CURVES.get(oid)


def resolve_gost_param_set(oid) -> Optional[CurveParameters]:
    """Curve of a GOST R 34.10 parameter set; these are not EC named curves."""
    return _GOST_CURVES.get(oid)
