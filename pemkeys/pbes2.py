"""Encrypted PKCS#8 (RFC 5958 EncryptedPrivateKeyInfo) with PBES2.

Only PBES2 with PBKDF2 and an AES-CBC encryption scheme is understood.
PBES1 and PKCS#12 password based schemes are rejected as unsupported.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from . import config, oids
from .decoders import decode_pkcs8, read_algorithm_identifier, top_level_sequence
from .der import INTEGER, OCTET_STRING, DerReader
from .errors import DecryptionFailed, MalformedDer, MalformedFormat, UnsupportedFormat
from .records import NULL

log = logging.getLogger(__name__)

PRFS = {
    oids.HMAC_SHA1: hashes.SHA1,
    oids.HMAC_SHA224: hashes.SHA224,
    oids.HMAC_SHA256: hashes.SHA256,
    oids.HMAC_SHA384: hashes.SHA384,
    oids.HMAC_SHA512: hashes.SHA512,
    oids.HMAC_SHA512_224: hashes.SHA512_224,
    oids.HMAC_SHA512_256: hashes.SHA512_256,
}

# cipher OID -> key length in bytes
CIPHERS = {
    oids.AES128_CBC: 16,
    oids.AES192_CBC: 24,
    oids.AES256_CBC: 32,
}


@dataclass(frozen=True)
class Pbkdf2Params:
    salt: bytes
    iteration_count: int
    key_length: Optional[int]
    prf: str


@dataclass(frozen=True)
class CipherParams:
    algorithm: str
    iv: bytes


@dataclass(frozen=True)
class EncryptedKeyInfo:
    kdf: Pbkdf2Params
    cipher: CipherParams
    ciphertext: bytes


def _read_pbkdf2_params(params):
    if params is None:
        raise MalformedFormat("PBKDF2 without parameters")
    seq = DerReader(params).read_sequence()
    if seq.peek_tag() != OCTET_STRING:
        raise UnsupportedFormat("PBKDF2 salt from another source")
    salt = seq.read_octet_string()
    iteration_count = seq.read_integer()
    key_length = None
    prf = oids.HMAC_SHA1
    if seq.peek_tag() == INTEGER:
        key_length = seq.read_integer()
    if not seq.at_end():
        prf, prf_params = read_algorithm_identifier(seq)
        if prf_params not in (None, NULL):
            raise MalformedFormat("PBKDF2 PRF parameters must be NULL")
    seq.expect_end("PBKDF2-params")
    if iteration_count < 1:
        raise MalformedFormat("PBKDF2 iteration count {}".format(iteration_count))
    return Pbkdf2Params(salt, iteration_count, key_length, prf)


def read_encrypted_key_info(der):
    """Parse an EncryptedPrivateKeyInfo into its PBES2 components."""
    seq = top_level_sequence(der)
    scheme, params = read_algorithm_identifier(seq)
    ciphertext = seq.read_octet_string()
    seq.expect_end("EncryptedPrivateKeyInfo")
    if scheme != oids.PBES2:
        raise UnsupportedFormat("encryption scheme {}".format(scheme))
    if params is None:
        raise MalformedFormat("PBES2 without parameters")

    pbes2 = DerReader(params).read_sequence()
    kdf_oid, kdf_params = read_algorithm_identifier(pbes2)
    cipher_oid, cipher_params = read_algorithm_identifier(pbes2)
    pbes2.expect_end("PBES2-params")
    if kdf_oid != oids.PBKDF2:
        raise UnsupportedFormat("key derivation function {}".format(kdf_oid))
    if cipher_oid not in CIPHERS:
        raise UnsupportedFormat("cipher {}".format(cipher_oid))
    if cipher_params is None:
        raise MalformedFormat("cipher without IV")
    iv_reader = DerReader(cipher_params)
    iv = iv_reader.read_octet_string()
    iv_reader.expect_end("cipher IV")
    if len(iv) != 16:
        raise MalformedFormat("AES-CBC IV must be 16 bytes, got {}".format(len(iv)))
    return EncryptedKeyInfo(_read_pbkdf2_params(kdf_params), CipherParams(cipher_oid, iv), ciphertext)


def derive_key(kdf, key_length, password):
    if kdf.prf not in PRFS:
        raise UnsupportedFormat("PBKDF2 PRF {}".format(kdf.prf))
    if kdf.key_length is not None and kdf.key_length != key_length:
        raise UnsupportedFormat(
            "PBKDF2 key length {} for a {} byte cipher key".format(kdf.key_length, key_length)
        )
    if kdf.iteration_count > config.MAX_PBKDF2_ITERATIONS:
        raise UnsupportedFormat(
            "PBKDF2 iteration count {} exceeds {}".format(kdf.iteration_count, config.MAX_PBKDF2_ITERATIONS)
        )
    log.debug("PBKDF2 prf=%s iterations=%d salt=%d bytes", kdf.prf, kdf.iteration_count, len(kdf.salt))
    return PBKDF2HMAC(
        algorithm=PRFS[kdf.prf](),
        length=key_length,
        salt=kdf.salt,
        iterations=kdf.iteration_count,
    ).derive(password)


def decrypt(info, password):
    """Return the plaintext PrivateKeyInfo DER of an EncryptedKeyInfo."""
    if isinstance(password, str):
        password = password.encode("utf-8")
    key = derive_key(info.kdf, CIPHERS[info.cipher.algorithm], password)
    if not info.ciphertext or len(info.ciphertext) % 16:
        raise DecryptionFailed("ciphertext is not a whole number of AES blocks")
    decryptor = Cipher(algorithms.AES(key), modes.CBC(info.cipher.iv)).decryptor()
    padded = decryptor.update(info.ciphertext) + decryptor.finalize()
    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    try:
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as e:
        raise DecryptionFailed("bad padding, the password is probably wrong") from e


def decode_encrypted_pkcs8(der, password):
    plaintext = decrypt(read_encrypted_key_info(der), password)
    try:
        return decode_pkcs8(plaintext)
    except MalformedDer as e:
        raise DecryptionFailed("decrypted data is not a private key, the password is probably wrong") from e
