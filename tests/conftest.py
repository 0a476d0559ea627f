import os
from base64 import standard_b64encode
from textwrap import fill

import pytest
from cryptography.hazmat.primitives import padding, serialization
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, rsa, x448, x25519
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from pyderasn import Any, BitString, Integer, ObjectIdentifier, OctetString, Sequence

from pemkeys import oids
from pemkeys.pbes2 import CIPHERS, PRFS
from pemkeys.schemas import AlgorithmIdentifier, ECPrivateKey, PrivateKeyInfo

NULL = b"\x05\x00"

# curve name -> (cryptography curve, OID)
EC_CURVES = {
    "secp224r1": (ec.SECP224R1, "1.3.132.0.33"),
    "secp256r1": (ec.SECP256R1, "1.2.840.10045.3.1.7"),
    "secp256k1": (ec.SECP256K1, "1.3.132.0.10"),
    "secp384r1": (ec.SECP384R1, "1.3.132.0.34"),
    "secp521r1": (ec.SECP521R1, "1.3.132.0.35"),
    "brainpoolP256r1": (ec.BrainpoolP256R1, "1.3.36.3.3.2.8.1.1.7"),
    "brainpoolP384r1": (ec.BrainpoolP384R1, "1.3.36.3.3.2.8.1.1.11"),
    "brainpoolP512r1": (ec.BrainpoolP512R1, "1.3.36.3.3.2.8.1.1.13"),
}

BRAINPOOL_TWISTED = {
    "brainpoolP256t1": "1.3.36.3.3.2.8.1.1.8",
    "brainpoolP320t1": "1.3.36.3.3.2.8.1.1.10",
    "brainpoolP384t1": "1.3.36.3.3.2.8.1.1.12",
    "brainpoolP512t1": "1.3.36.3.3.2.8.1.1.14",
}


class PBKDF2Params(Sequence):
    schema = (
        ("salt", OctetString()),
        ("iterationCount", Integer()),
        ("keyLength", Integer(optional=True)),
        ("prf", AlgorithmIdentifier(optional=True)),
    )


class PBES2Params(Sequence):
    schema = (
        ("keyDerivationFunc", AlgorithmIdentifier()),
        ("encryptionScheme", AlgorithmIdentifier()),
    )


class EncryptedPrivateKeyInfo(Sequence):
    schema = (
        ("encryptionAlgorithm", AlgorithmIdentifier()),
        ("encryptedData", OctetString()),
    )


def pem(label, der, headers=()):
    head = "".join("{}: {}\n".format(k, v) for k, v in headers)
    if head:
        head += "\n"
    return "-----BEGIN {0}-----\n{1}{2}\n-----END {0}-----\n".format(
        label, head, fill(standard_b64encode(der).decode("ascii"), 64)
    )


def algorithm_identifier(oid, params=None):
    alg = AlgorithmIdentifier()
    alg["algorithm"] = ObjectIdentifier(oid)
    if params is not None:
        alg["parameters"] = Any(params)
    return alg


def pkcs8(oid, private_key, params=None, version=0):
    info = PrivateKeyInfo()
    info["version"] = Integer(version)
    info["privateKeyAlgorithm"] = algorithm_identifier(oid, params)
    info["privateKey"] = OctetString(private_key)
    return info.encode()


def sec1(scalar, length, curve_oid=None, public_point=None, version=1):
    key = ECPrivateKey()
    key["version"] = Integer(version)
    key["privateKey"] = OctetString(scalar.to_bytes(length, "big"))
    if curve_oid is not None:
        key["parameters"] = ObjectIdentifier(curve_oid)
    if public_point is not None:
        key["publicKey"] = BitString(public_point)
    return key.encode()


def named_curve(oid):
    return ObjectIdentifier(oid).encode()


def encrypt_pkcs8(der, password, cipher=oids.AES256_CBC, prf=oids.HMAC_SHA256,
                  iterations=2048, key_length=None, scheme=oids.PBES2, kdf=oids.PBKDF2):
    """Build an EncryptedPrivateKeyInfo the way openssl pkcs8 -v2 does."""
    salt = os.urandom(16)
    iv = os.urandom(16)
    size = CIPHERS.get(cipher, 32)
    key = PBKDF2HMAC(
        algorithm=PRFS.get(prf or oids.HMAC_SHA1, PRFS[oids.HMAC_SHA1])(),
        length=size,
        salt=salt,
        iterations=iterations,
    ).derive(password.encode("utf-8"))
    padder = padding.PKCS7(128).padder()
    padded = padder.update(der) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()

    kdf_params = PBKDF2Params()
    kdf_params["salt"] = OctetString(salt)
    kdf_params["iterationCount"] = Integer(iterations)
    if key_length is not None:
        kdf_params["keyLength"] = Integer(key_length)
    if prf is not None:
        kdf_params["prf"] = algorithm_identifier(prf, NULL)
    pbes2 = PBES2Params()
    pbes2["keyDerivationFunc"] = algorithm_identifier(kdf, kdf_params.encode())
    pbes2["encryptionScheme"] = algorithm_identifier(cipher, OctetString(iv).encode())

    info = EncryptedPrivateKeyInfo()
    info["encryptionAlgorithm"] = algorithm_identifier(scheme, pbes2.encode())
    info["encryptedData"] = OctetString(ciphertext)
    return info.encode()


def private_bytes(key, fmt, encoding=serialization.Encoding.PEM, password=None):
    if password is None:
        enc = serialization.NoEncryption()
    else:
        enc = serialization.BestAvailableEncryption(password.encode("utf-8"))
    return key.private_bytes(encoding=encoding, format=fmt, encryption_algorithm=enc)


def traditional_pem(key, password=None):
    return private_bytes(key, serialization.PrivateFormat.TraditionalOpenSSL, password=password).decode("ascii")


def pkcs8_pem(key, password=None):
    return private_bytes(key, serialization.PrivateFormat.PKCS8, password=password).decode("ascii")


def traditional_der(key):
    return private_bytes(key, serialization.PrivateFormat.TraditionalOpenSSL, serialization.Encoding.DER)


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def dsa_key():
    return dsa.generate_private_key(key_size=2048)


@pytest.fixture(scope="session")
def ec_keys():
    return {name: ec.generate_private_key(curve()) for name, (curve, _) in EC_CURVES.items()}


@pytest.fixture(scope="session")
def raw_keys():
    return {
        "ed25519": ed25519.Ed25519PrivateKey.generate(),
        "ed448": ed448.Ed448PrivateKey.generate(),
        "x25519": x25519.X25519PrivateKey.generate(),
        "x448": x448.X448PrivateKey.generate(),
    }


@pytest.fixture(scope="session")
def rsa_pkcs1_pem(rsa_key):
    return traditional_pem(rsa_key)


@pytest.fixture(scope="session")
def rsa_pkcs8_pem(rsa_key):
    return pkcs8_pem(rsa_key)
