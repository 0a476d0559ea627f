from pyderasn import Sequence, OctetString, ObjectIdentifier, Any, Integer, BitString, tag_ctxc

class AlgorithmIdentifier(Sequence):
	schema = (
		("algorithm", ObjectIdentifier()),
		("parameters", Any(optional=True))
	)

class PrivateKeyInfo(Sequence):
	schema = (
		("version", Integer()),
		("privateKeyAlgorithm", AlgorithmIdentifier()),
		("privateKey", OctetString())
	)

class RSAPrivateKey(Sequence):
	schema = (
		("version", Integer()),
		("modulus", Integer()),
		("publicExponent", Integer()),
		("privateExponent", Integer()),
		("prime1", Integer()),
		("prime2", Integer()),
		("exponent1", Integer()),
		("exponent2", Integer()),
		("coefficient", Integer())
	)

class ECPrivateKey(Sequence):
	schema = (
		("version", Integer()),
		("privateKey", OctetString()),
		("parameters", ObjectIdentifier(expl=tag_ctxc(0), optional=True)),
		("publicKey", BitString(expl=tag_ctxc(1), optional=True))
	)

class DssParms(Sequence):
	schema = (
		("p", Integer()),
		("q", Integer()),
		("g", Integer())
	)

class GostKeyParameters(Sequence):
	schema = (
		("param", ObjectIdentifier()),
		("dgst", ObjectIdentifier(optional=True))
	)
