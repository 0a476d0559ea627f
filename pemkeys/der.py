"""Sequential DER reader.

Only the handful of universal types private key structures are built
from are understood. Tag and length handling as well as value decoding
of primitives are done by pyderasn, which enforces strict DER.
"""

from pyderasn import (
    BitString,
    DecodeError,
    Integer,
    LenIndefForm,
    NotEnoughData,
    ObjectIdentifier,
    OctetString,
    Sequence,
    TagMismatch,
    len_decode,
    tag_ctxc,
    tag_ctxp,
    tag_strip,
)

from .errors import MalformedDer

SEQUENCE = Sequence.tag_default
INTEGER = Integer.tag_default
BIT_STRING = BitString.tag_default
OCTET_STRING = OctetString.tag_default
OBJECT_IDENTIFIER = ObjectIdentifier.tag_default


def _strip(data):
    try:
        t, tlen, lv = tag_strip(data)
        l, llen, v = len_decode(lv)
    except LenIndefForm as e:
        raise MalformedDer("indefinite length encoding is not allowed") from e
    except NotEnoughData as e:
        raise MalformedDer("truncated DER element") from e
    except DecodeError as e:
        raise MalformedDer(str(e)) from e
    if l > len(v):
        raise MalformedDer(
            "declared length {} exceeds the {} remaining bytes".format(l, len(v))
        )
    return bytes(t), tlen + llen, l


def bit_string_value(content):
    if not content:
        raise MalformedDer("empty BIT STRING")
    if content[0] != 0:
        raise MalformedDer("BIT STRING with {} unused bits".format(content[0]))
    return bytes(content[1:])


class DerReader:
    """Cursor over a DER buffer.

    Every read consumes one element and checks its tag against the
    expected one. Constructed reads return a new reader over the
    element's content.
    """

    def __init__(self, data):
        self._data = memoryview(bytes(data))

    def __repr__(self):
        return "<DerReader remaining={}>".format(self.remaining())

    def remaining(self):
        return len(self._data)

    def at_end(self):
        return not self._data

    def peek_tag(self):
        """Encoded tag of the next element, or None at the end."""
        if self.at_end():
            return None
        t, _, _ = _strip(self._data)
        return t

    def read_element(self, expected=None):
        """Consume the next element and return its full TLV encoding."""
        if self.at_end():
            raise MalformedDer("unexpected end of data")
        t, hlen, l = _strip(self._data)
        if expected is not None and t != expected:
            raise MalformedDer(
                "expected tag {} but got {}".format(expected.hex(), t.hex())
            )
        tlv = bytes(self._data[:hlen + l])
        self._data = self._data[hlen + l:]
        return tlv

    def _read_content(self, expected):
        tlv = self.read_element(expected)
        _, hlen, _ = _strip(tlv)
        return tlv[hlen:]

    def _decode(self, spec, name):
        if self.at_end():
            raise MalformedDer("unexpected end of data, expected {}".format(name))
        try:
            obj, tail = spec.decode(self._data)
        except TagMismatch as e:
            raise MalformedDer("expected {}".format(name)) from e
        except LenIndefForm as e:
            raise MalformedDer("indefinite length encoding is not allowed") from e
        except DecodeError as e:
            raise MalformedDer("invalid {}: {}".format(name, e)) from e
        self._data = tail
        return obj

    def read_sequence(self):
        return DerReader(self._read_content(SEQUENCE))

    def read_integer(self):
        return int(self._decode(Integer(), "INTEGER"))

    def read_octet_string(self):
        return bytes(self._decode(OctetString(), "OCTET STRING"))

    def read_bit_string(self):
        """Return the bytes of a BIT STRING that has no unused bits."""
        return bit_string_value(self._read_content(BIT_STRING))

    def read_object_identifier(self):
        return str(self._decode(ObjectIdentifier(), "OBJECT IDENTIFIER"))

    def read_context_tag(self, n, constructed=True, optional=False):
        """Read the ``[n]`` tagged element and return a reader over its content.

        With ``optional`` set, None is returned when the next element
        carries another tag.
        """
        expected = tag_ctxc(n) if constructed else tag_ctxp(n)
        if optional and self.peek_tag() != expected:
            return None
        return DerReader(self._read_content(expected))

    def read_rest(self):
        """Consume and return whatever is left, used for IMPLICIT tagged content."""
        rest = bytes(self._data)
        self._data = self._data[len(self._data):]
        return rest

    def expect_end(self, what="structure"):
        if not self.at_end():
            raise MalformedDer(
                "{} trailing bytes after {}".format(self.remaining(), what)
            )
