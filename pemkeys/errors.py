class PemKeyError(Exception):
    """Base class for every error raised while loading a private key."""


class NoKeyFound(PemKeyError):
    pass


class MalformedInput(PemKeyError):
    """PEM armor is broken or the body is not valid base64."""


class MalformedDer(PemKeyError):
    pass


class MalformedFormat(PemKeyError):
    """Structurally valid DER that misses a field the key format needs."""


class UnsupportedFormat(PemKeyError):
    def __init__(self, detail=None):
        msg = "Unrecognized private key format"
        if detail:
            msg = "{}: {}".format(msg, detail)
        super().__init__(msg)
        self.detail = detail


class PasswordRequired(PemKeyError):
    pass


class DecryptionFailed(PemKeyError):
    pass


class KeyLoadError(PemKeyError):
    """Outer error of a failed parse call.

    The underlying error is chained as ``__cause__`` and also available
    as :attr:`cause`.
    """

    def __init__(self, source=None):
        msg = "Error loading private key file"
        if source:
            msg = "{} {}".format(msg, source)
        super().__init__(msg)
        self.source = source

    @property
    def cause(self):
        return self.__cause__


__all__ = [
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
