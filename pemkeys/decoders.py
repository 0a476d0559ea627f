"""Decoders for the unencrypted private key encodings.

``decode_pkcs1``
    traditional ``RSA PRIVATE KEY`` (RFC 8017 RSAPrivateKey)
``decode_sec1``
    traditional ``EC PRIVATE KEY`` (RFC 5915 ECPrivateKey)
``decode_pkcs8``
    ``PRIVATE KEY`` (RFC 5958 PrivateKeyInfo / OneAsymmetricKey)
"""

import logging

from . import oids
from .der import OBJECT_IDENTIFIER, DerReader, bit_string_value
from .errors import MalformedFormat, UnsupportedFormat
from .gost import decode_gost
from .oids import KeyAlgorithm, resolve_algorithm, resolve_curve
from .records import (
    NULL,
    DsaKeyMaterial,
    EcKeyMaterial,
    PrivateKeyRecord,
    RawKeyMaterial,
    RsaKeyMaterial,
)

log = logging.getLogger(__name__)

RAW_KEY_LENGTHS = {
    oids.ED25519: 32,
    oids.ED448: 57,
    oids.X25519: 32,
    oids.X448: 56,
}


def top_level_sequence(der):
    outer = DerReader(der)
    seq = outer.read_sequence()
    outer.expect_end("private key")
    return seq


def _read_rsa_private_key(der):
    seq = top_level_sequence(der)
    version = seq.read_integer()
    if version != 0:
        raise UnsupportedFormat("RSAPrivateKey version {}".format(version))
    km = RsaKeyMaterial(
        modulus=seq.read_integer(),
        public_exponent=seq.read_integer(),
        private_exponent=seq.read_integer(),
        prime1=seq.read_integer(),
        prime2=seq.read_integer(),
        exponent1=seq.read_integer(),
        exponent2=seq.read_integer(),
        coefficient=seq.read_integer(),
    )
    seq.expect_end("RSAPrivateKey")
    return km


def _named_curve(reader):
    """Read an ECParameters choice; only namedCurve is accepted."""
    if reader.peek_tag() != OBJECT_IDENTIFIER:
        raise UnsupportedFormat("EC keys with explicit curve parameters")
    oid = reader.read_object_identifier()
    reader.expect_end("ECParameters")
    curve = resolve_curve(oid)
    if curve is None:
        raise UnsupportedFormat("curve {}".format(oid))
    return curve


def _check_scalar(value, curve):
    if not 0 < value < curve.order:
        raise MalformedFormat("EC private key is out of range for {}".format(curve.name))
    return value


def _read_ec_private_key(der, curve=None):
    seq = top_level_sequence(der)
    version = seq.read_integer()
    if version != 1:
        raise MalformedFormat("ECPrivateKey version {}".format(version))
    private_key = seq.read_octet_string()
    params = seq.read_context_tag(0, optional=True)
    if params is not None:
        named = _named_curve(params)
        if curve is None:
            curve = named
        elif named != curve:
            raise MalformedFormat(
                "ECPrivateKey curve {} does not match {}".format(named.name, curve.name)
            )
    if curve is None:
        raise MalformedFormat("EC private key does not name its curve")
    public_point = None
    public_key = seq.read_context_tag(1, optional=True)
    if public_key is not None:
        public_point = public_key.read_bit_string()
        public_key.expect_end("ECPrivateKey publicKey")
    seq.expect_end("ECPrivateKey")
    value = _check_scalar(int.from_bytes(private_key, "big"), curve)
    return curve, EcKeyMaterial(value, public_point)


def decode_pkcs1(der):
    km = _read_rsa_private_key(der)
    log.debug("decoded PKCS#1 RSA key (%d bits)", km.modulus.bit_length())
    return PrivateKeyRecord(KeyAlgorithm.RSA, oids.RSA_ENCRYPTION, km)


def decode_sec1(der):
    curve, km = _read_ec_private_key(der)
    log.debug("decoded SEC1 EC key on %s", curve)
    return PrivateKeyRecord(KeyAlgorithm.EC, oids.EC_PUBLIC_KEY, km, curve=curve)


def read_algorithm_identifier(reader):
    """Return ``(oid, parameters)``; parameters is the raw DER element or None."""
    alg = reader.read_sequence()
    oid = alg.read_object_identifier()
    params = None if alg.at_end() else alg.read_element()
    alg.expect_end("AlgorithmIdentifier")
    return oid, params


def _decode_rsa(algorithm, oid, params, private_key):
    if algorithm is KeyAlgorithm.RSA:
        if params not in (None, NULL):
            raise MalformedFormat("rsaEncryption parameters must be NULL")
        params = None
    return PrivateKeyRecord(algorithm, oid, _read_rsa_private_key(private_key), parameters=params)


def _decode_dsa(oid, params, private_key):
    if params is None:
        raise MalformedFormat("DSA key without domain parameters")
    dss = DerReader(params).read_sequence()
    p, q, g = dss.read_integer(), dss.read_integer(), dss.read_integer()
    dss.expect_end("Dss-Parms")
    reader = DerReader(private_key)
    x = reader.read_integer()
    reader.expect_end("DSA private key")
    if not 0 < x < q:
        raise MalformedFormat("DSA private key is out of range")
    return PrivateKeyRecord(KeyAlgorithm.DSA, oid, DsaKeyMaterial(p, q, g, x))


def _decode_ec(oid, params, private_key):
    if params is None:
        raise MalformedFormat("EC key without curve parameters")
    curve = _named_curve(DerReader(params))
    if len(private_key) == curve.byte_length:
        km = EcKeyMaterial(_check_scalar(int.from_bytes(private_key, "big"), curve))
    else:
        _, km = _read_ec_private_key(private_key, curve)
    return PrivateKeyRecord(KeyAlgorithm.EC, oid, km, curve=curve)


def _decode_raw(algorithm, oid, params, private_key, public_key):
    if params is not None:
        raise MalformedFormat("{} keys take no algorithm parameters".format(algorithm))
    reader = DerReader(private_key)
    seed = reader.read_octet_string()
    reader.expect_end("CurvePrivateKey")
    if len(seed) != RAW_KEY_LENGTHS[oid]:
        raise MalformedFormat(
            "{} private key must be {} bytes, got {}".format(oid, RAW_KEY_LENGTHS[oid], len(seed))
        )
    return PrivateKeyRecord(algorithm, oid, RawKeyMaterial(seed, public_key))


def decode_pkcs8(der):
    seq = top_level_sequence(der)
    version = seq.read_integer()
    if version not in (0, 1):
        raise UnsupportedFormat("PKCS#8 version {}".format(version))
    oid, params = read_algorithm_identifier(seq)
    private_key = seq.read_octet_string()
    # attributes are not interpreted
    seq.read_context_tag(0, optional=True)
    public_key = None
    if version == 1:
        pub = seq.read_context_tag(1, constructed=False, optional=True)
        if pub is not None:
            public_key = bit_string_value(pub.read_rest())
    seq.expect_end("PrivateKeyInfo")

    algorithm = resolve_algorithm(oid)
    log.debug("PKCS#8 key algorithm %s -> %s", oid, algorithm)
    if algorithm is None:
        raise UnsupportedFormat("algorithm {}".format(oid))
    if algorithm in (KeyAlgorithm.RSA, KeyAlgorithm.RSASSA_PSS):
        return _decode_rsa(algorithm, oid, params, private_key)
    if algorithm is KeyAlgorithm.DSA:
        return _decode_dsa(oid, params, private_key)
    if algorithm is KeyAlgorithm.EC:
        return _decode_ec(oid, params, private_key)
    if algorithm in (KeyAlgorithm.EDDSA, KeyAlgorithm.XDH):
        return _decode_raw(algorithm, oid, params, private_key, public_key)
    if algorithm is KeyAlgorithm.GOST3410:
        return decode_gost(oid, params, private_key)
    raise UnsupportedFormat("algorithm {}".format(algorithm))
