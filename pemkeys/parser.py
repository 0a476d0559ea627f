"""Entry point: PEM text in, :class:`PrivateKeyRecord` out."""

import logging
from typing import List

from .decoders import decode_pkcs1, decode_pkcs8, decode_sec1
from .errors import KeyLoadError, NoKeyFound, PasswordRequired, PemKeyError, UnsupportedFormat
from .pbes2 import decode_encrypted_pkcs8
from .pem import extract
from .records import PrivateKeyRecord

log = logging.getLogger(__name__)

PKCS8 = "PRIVATE KEY"
ENCRYPTED_PKCS8 = "ENCRYPTED PRIVATE KEY"
PKCS1 = "RSA PRIVATE KEY"
SEC1 = "EC PRIVATE KEY"

DECODERS = {
    PKCS8: decode_pkcs8,
    PKCS1: decode_pkcs1,
    SEC1: decode_sec1,
}


def is_private_key(block):
    return block.label.endswith(PKCS8)


def decode_block(block, password=None):
    """Decode a single private key PEM block."""
    log.debug("decoding %r block", block.label)
    if block.label == ENCRYPTED_PKCS8:
        if password is None:
            raise PasswordRequired("an encrypted private key needs a password")
        return decode_encrypted_pkcs8(block.payload, password)
    decoder = DECODERS.get(block.label)
    if decoder is None:
        raise UnsupportedFormat("{} blocks are not supported".format(block.label))
    if block.encrypted:
        raise UnsupportedFormat("legacy encrypted {} blocks are not supported".format(block.label))
    return decoder(block.payload)


def _private_key_blocks(text):
    blocks = [b for b in extract(text) if is_private_key(b)]
    if not blocks:
        raise NoKeyFound("no private key PEM block found")
    return blocks


def parse(text, password=None, source=None) -> PrivateKeyRecord:
    """Parse the first private key in ``text``.

    ``password`` is only used when the key is an encrypted PKCS#8 block.
    ``source`` describes where the text came from and ends up in the
    error message. Any failure is raised as :class:`KeyLoadError` with
    the underlying error as its cause.
    """
    try:
        return decode_block(_private_key_blocks(text)[0], password)
    except PemKeyError as e:
        log.debug("loading private key failed: %s", e)
        raise KeyLoadError(source) from e


def parse_all(text, password=None, source=None) -> List[PrivateKeyRecord]:
    """Parse every private key block in ``text``, in order."""
    try:
        return [decode_block(b, password) for b in _private_key_blocks(text)]
    except PemKeyError as e:
        raise KeyLoadError(source) from e
