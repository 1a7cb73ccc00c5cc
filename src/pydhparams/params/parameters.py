"""Immutable Diffie-Hellman parameter value.

A DiffieHellmanParameters instance is in one of three states:

- empty: no bytes, NO_ERROR. Setting an empty value on a server disables
  DH key exchange.
- valid: canonical PKCS#3 DER bytes of (p, g), NO_ERROR.
- invalid: no bytes, INVALID_INPUT_DATA or UNSAFE_PARAMETERS.

Construction never raises for bad input; check is_valid() / error() after
constructing from untrusted data. Equality, hashing and ordering only look
at the stored DER bytes.
"""
from __future__ import annotations

import base64
import functools
import logging
from typing import BinaryIO, Optional, Union

from asn1crypto import pem
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dh

from .errors import DHParametersError, EncodingFormat
from .groups import OAKLEY_GROUP_2_DER
from ..crypto.backend import BACKEND_CRYPTOGRAPHY, create_decoder, get_default_decoder
from ..crypto.decoder import ParametersDecoder
from ..crypto.default_decoder import DH_PARAMETERS_PEM_LABEL, parse_der
from ..exceptions import DHParametersDecodeError

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview, str]


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected bytes-like input, got {type(data).__name__}")


def _decode(decoder: ParametersDecoder, data: bytes, fmt: EncodingFormat) -> bytes:
    if fmt is EncodingFormat.DER:
        return decoder.decode_der(data)
    if fmt is EncodingFormat.PEM:
        return decoder.decode_pem(data)
    raise ValueError(f"unsupported encoding format: {fmt!r}")


class DiffieHellmanParameters:
    """Diffie-Hellman parameters for servers.

    Example:
        >>> params = DiffieHellmanParameters.from_bytes(pem_data, EncodingFormat.PEM)
        >>> if not params.is_valid():
        ...     print(params.error_string())
    """

    __slots__ = ("_encoded", "_error")

    _encoded: Optional[bytes]
    _error: DHParametersError

    def __init__(self) -> None:
        """Construct the empty value."""
        object.__setattr__(self, "_encoded", None)
        object.__setattr__(self, "_error", DHParametersError.NO_ERROR)

    @classmethod
    def _with_state(cls, encoded: Optional[bytes], error: DHParametersError) -> "DiffieHellmanParameters":
        obj = cls()
        object.__setattr__(obj, "_encoded", encoded)
        object.__setattr__(obj, "_error", error)
        return obj

    @classmethod
    def from_bytes(
        cls,
        data: BytesLike,
        fmt: EncodingFormat = EncodingFormat.PEM,
        decoder: ParametersDecoder | None = None,
    ) -> "DiffieHellmanParameters":
        """Decode and validate data in PEM or DER form.

        Args:
            data: Encoded DH parameters.
            fmt: Encoding of data.
            decoder: Decoder to use; the configured default when omitted.

        Returns:
            A valid value, or an invalid one whose error() says why.
        """
        raw = _as_bytes(data)
        decoder = decoder or get_default_decoder()
        try:
            der = _decode(decoder, raw, fmt)
        except DHParametersDecodeError as e:
            logger.debug("DH parameter decode failed (%s): %s", e.kind.name, e)
            return cls._with_state(None, e.kind)
        return cls._with_state(der, DHParametersError.NO_ERROR)

    @classmethod
    def from_stream(
        cls,
        stream: Optional[BinaryIO],
        fmt: EncodingFormat = EncodingFormat.PEM,
        decoder: ParametersDecoder | None = None,
    ) -> "DiffieHellmanParameters":
        """Read stream to the end and decode its contents.

        A None stream yields the empty value without decoding anything.
        """
        if stream is None:
            return cls()
        return cls.from_bytes(stream.read(), fmt, decoder)

    @classmethod
    def from_file(
        cls,
        path: str,
        fmt: EncodingFormat = EncodingFormat.PEM,
        decoder: ParametersDecoder | None = None,
    ) -> "DiffieHellmanParameters":
        """Read and decode the file at path.

        Raises:
            OSError: If the file cannot be opened.
        """
        with open(path, "rb") as f:
            return cls.from_stream(f, fmt, decoder)

    @classmethod
    def default_parameters(cls) -> "DiffieHellmanParameters":
        """The default parameters: the 1024-bit Second Oakley Group."""
        return default_parameters()

    def is_empty(self) -> bool:
        return self._encoded is None and self._error is DHParametersError.NO_ERROR

    def is_valid(self) -> bool:
        """True unless decoding failed. An empty value is valid."""
        return self._error is DHParametersError.NO_ERROR

    def error(self) -> DHParametersError:
        return self._error

    def error_string(self) -> str:
        return self._error.message

    def to_der(self) -> bytes:
        """Canonical DER encoding, or b"" when no parameters are stored."""
        return self._encoded or b""

    def to_pem(self) -> bytes:
        """Stored parameters as a DH PARAMETERS PEM block.

        Raises:
            ValueError: If no parameters are stored.
        """
        if self._encoded is None:
            raise ValueError(f"no Diffie-Hellman parameters stored ({self.error_string()})")
        return pem.armor(DH_PARAMETERS_PEM_LABEL, self._encoded)

    def to_cryptography(self) -> dh.DHParameters:
        """Stored parameters as a cryptography DHParameters object.

        Raises:
            ValueError: If no parameters are stored.
        """
        if self._encoded is None:
            raise ValueError(f"no Diffie-Hellman parameters stored ({self.error_string()})")
        params = serialization.load_der_parameters(self._encoded)
        if not isinstance(params, dh.DHParameters):
            raise ValueError("stored data does not hold DH parameters")
        return params

    def parameter_numbers(self) -> tuple[int, int]:
        """Return (p, g).

        Raises:
            ValueError: If no parameters are stored.
        """
        if self._encoded is None:
            raise ValueError(f"no Diffie-Hellman parameters stored ({self.error_string()})")
        parsed = parse_der(self._encoded)
        return parsed.p, parsed.g

    @property
    def key_size(self) -> int:
        """Bit length of the modulus, 0 when no parameters are stored."""
        if self._encoded is None:
            return 0
        return self.parameter_numbers()[0].bit_length()

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __copy__(self) -> "DiffieHellmanParameters":
        return self

    def __deepcopy__(self, memo: dict) -> "DiffieHellmanParameters":
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiffieHellmanParameters):
            return NotImplemented
        return self._encoded == other._encoded

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DiffieHellmanParameters):
            return NotImplemented
        return self.to_der() < other.to_der()

    def __hash__(self) -> int:
        return hash(self._encoded)

    def __repr__(self) -> str:
        encoded = base64.b64encode(self._encoded).decode("ascii") if self._encoded else ""
        return f"{type(self).__name__}({encoded})"


@functools.lru_cache(maxsize=None)
def default_parameters() -> DiffieHellmanParameters:
    """Process-wide default parameters, decoded once from the embedded DER."""
    return DiffieHellmanParameters.from_bytes(
        OAKLEY_GROUP_2_DER,
        EncodingFormat.DER,
        decoder=create_decoder(BACKEND_CRYPTOGRAPHY),
    )
