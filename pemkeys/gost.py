"""GOST R 34.10-2001/2012 keys wrapped in PKCS#8.

CryptoPro tooling stores the private key as raw little-endian bytes
directly in the PrivateKeyInfo octets, RFC 9215 nests it one more level
as an OCTET STRING (or, rarely, an INTEGER).
"""

from pygost.gost3410 import prv_unmarshal

from . import oids
from .der import INTEGER, OCTET_STRING, DerReader
from .errors import MalformedFormat, UnsupportedFormat
from .oids import KeyAlgorithm, resolve_gost_param_set
from .records import GostKeyMaterial, PrivateKeyRecord


def key_length(oid):
    return 64 if oid == oids.GOST3410_2012_512 else 32


def _private_value(oid, data):
    size = key_length(oid)
    if len(data) == size:
        return prv_unmarshal(data)
    reader = DerReader(data)
    tag = reader.peek_tag()
    if tag == OCTET_STRING:
        raw = reader.read_octet_string()
        reader.expect_end("GOST private key")
        if len(raw) != size:
            raise MalformedFormat("GOST private key must be {} bytes, got {}".format(size, len(raw)))
        return prv_unmarshal(raw)
    if tag == INTEGER:
        value = reader.read_integer()
        reader.expect_end("GOST private key")
        return value
    raise MalformedFormat("unexpected GOST private key encoding")


def decode_gost(oid, params, private_key):
    if params is None:
        raise MalformedFormat("GOST key without parameter set")
    seq = DerReader(params).read_sequence()
    param_set = seq.read_object_identifier()
    digest = None
    if not seq.at_end():
        digest = seq.read_object_identifier()
    # an encryptionParamSet may follow and is not used for the key itself
    curve = resolve_gost_param_set(param_set)
    if curve is None:
        raise UnsupportedFormat("GOST parameter set {}".format(param_set))
    value = _private_value(oid, private_key)
    if not 0 < value < curve.order:
        raise MalformedFormat("GOST private key is out of range for {}".format(curve.name))
    return PrivateKeyRecord(
        KeyAlgorithm.GOST3410, oid, GostKeyMaterial(value, digest), curve=curve
    )
