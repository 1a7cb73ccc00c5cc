from __future__ import annotations

from abc import ABC, abstractmethod


class ParametersDecoder(ABC):
    """Turns raw DER or PEM input into validated canonical DER bytes.

    Implementations raise a DHParametersDecodeError subclass on failure; they
    never return partially validated data.
    """

    backend_id: str

    @abstractmethod
    def decode_der(self, data: bytes) -> bytes:
        """
        Validate DER-encoded DHParameter data and return it unchanged.
        """
        pass

    @abstractmethod
    def decode_pem(self, data: bytes) -> bytes:
        """
        Extract and validate a DH PARAMETERS PEM block, returning fresh DER.
        """
        pass
