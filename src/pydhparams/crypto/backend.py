"""Decoder backend registry and process-wide default selection.

The backend is chosen once, at configuration time: either through the
PYDHPARAMS_DECODER_BACKEND environment variable read on first use, or
explicitly with set_default_decoder_backend().
"""
from __future__ import annotations

import logging
import os
from typing import Callable

from .decoder import ParametersDecoder

logger = logging.getLogger(__name__)

BACKEND_CRYPTOGRAPHY = "cryptography"
BACKEND_NONE = "none"
DEFAULT_DECODER_BACKEND = BACKEND_CRYPTOGRAPHY

ENV_DECODER_BACKEND = "PYDHPARAMS_DECODER_BACKEND"

_BACKEND_FACTORIES: dict[str, Callable[[], ParametersDecoder]] = {}
_default_decoder: ParametersDecoder | None = None
_builtins_registered = False


def register_decoder_backend(backend_id: str, factory: Callable[[], ParametersDecoder]) -> None:
    """Register a decoder factory by its stable backend ID."""
    _BACKEND_FACTORIES[backend_id] = factory


def _ensure_builtin_backends() -> None:
    global _builtins_registered
    if _builtins_registered:
        return
    _builtins_registered = True
    # Lazy imports; decoder modules load on first use.
    from .default_decoder import DefaultDecoder
    from .null_decoder import UnavailableDecoder

    _BACKEND_FACTORIES.setdefault(BACKEND_CRYPTOGRAPHY, DefaultDecoder)
    _BACKEND_FACTORIES.setdefault(BACKEND_NONE, UnavailableDecoder)


def available_backends() -> list[str]:
    _ensure_builtin_backends()
    return sorted(_BACKEND_FACTORIES)


def create_decoder(backend_id: str = DEFAULT_DECODER_BACKEND) -> ParametersDecoder:
    """Instantiate a decoder by ID. Unknown values fall back to default."""
    _ensure_builtin_backends()
    factory = _BACKEND_FACTORIES.get(backend_id)
    if factory is None:
        logger.warning("unknown decoder backend %r, using %r", backend_id, DEFAULT_DECODER_BACKEND)
        factory = _BACKEND_FACTORIES[DEFAULT_DECODER_BACKEND]
    return factory()


def set_default_decoder_backend(backend_id: str) -> ParametersDecoder:
    """Select the decoder used when none is passed explicitly."""
    global _default_decoder
    _default_decoder = create_decoder(backend_id)
    return _default_decoder


def get_default_decoder() -> ParametersDecoder:
    """Return the configured decoder, creating it on first use."""
    global _default_decoder
    if _default_decoder is None:
        backend_id = os.environ.get(ENV_DECODER_BACKEND, DEFAULT_DECODER_BACKEND)
        _default_decoder = create_decoder(backend_id)
    return _default_decoder


def reset_default_decoder() -> None:
    """Forget the selected decoder so the next use re-reads the environment."""
    global _default_decoder
    _default_decoder = None
