"""Safety classification of Diffie-Hellman (p, g) pairs.

check_dh_parameters() is the generic structural check with the semantics of
OpenSSL's DH_check(): it reports independent issues as named flags instead of
an OR-ed bitmask. is_safe_dh() layers the acceptance policy on top of it:

1. p shorter than MIN_MODULUS_BITS is rejected without further checks.
2. The structural check runs; if it cannot run, the pair is rejected.
3. For g == 2 the generic test only accepts p % 24 == 11, while the IETF
   MODP/FFDHE primes satisfy p % 24 == 23. The unsuitable-generator flag is
   cleared for residue 23 so that those groups are accepted. No other
   generator gets this treatment.
4. The pair is unsafe if p is not prime, p is not a safe prime, or g is
   still flagged as unsuitable.

Primality is decided by sympy.isprime, which is deterministic (strong BPSW)
for the sizes used here.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sympy import isprime

logger = logging.getLogger(__name__)

MIN_MODULUS_BITS = 1024

DH_GENERATOR_2 = 2
DH_GENERATOR_5 = 5

# p % 24 for g == 2: accepted by the generic test / IETF published groups
_G2_GENERIC_RESIDUE = 11
_G2_IETF_RESIDUE = 23


@dataclass(frozen=True)
class DHCheckResult:
    """Outcome of the structural DH parameter check."""

    p_not_prime: bool = False
    p_not_safe_prime: bool = False
    not_suitable_generator: bool = False
    unable_to_check_generator: bool = False

    @property
    def rejected(self) -> bool:
        return self.p_not_prime or self.p_not_safe_prime or self.not_suitable_generator


def check_dh_parameters(p: int, g: int) -> DHCheckResult:
    """Run the generic structural check on (p, g).

    Raises:
        ValueError: If p and g are not integers or p is too small to be a
            DH modulus at all.
    """
    if not isinstance(p, int) or not isinstance(g, int):
        raise ValueError("p and g must be integers")
    if p < 3:
        raise ValueError(f"modulus out of range: {p}")

    not_suitable_generator = False
    unable_to_check_generator = False
    if g <= 1 or g >= p - 1:
        not_suitable_generator = True
    elif g == DH_GENERATOR_2:
        not_suitable_generator = p % 24 != _G2_GENERIC_RESIDUE
    elif g == DH_GENERATOR_5:
        not_suitable_generator = p % 10 not in (3, 7)
    else:
        unable_to_check_generator = True

    p_not_prime = not isprime(p)
    # The safe-prime test only makes sense once p itself is prime.
    p_not_safe_prime = False if p_not_prime else not isprime((p - 1) // 2)

    return DHCheckResult(
        p_not_prime=p_not_prime,
        p_not_safe_prime=p_not_safe_prime,
        not_suitable_generator=not_suitable_generator,
        unable_to_check_generator=unable_to_check_generator,
    )


def apply_generator_exception(result: DHCheckResult, p: int, g: int) -> DHCheckResult:
    """Clear the unsuitable-generator flag for IETF groups with g == 2."""
    if g != DH_GENERATOR_2 or not result.not_suitable_generator:
        return result
    if p % 24 == _G2_IETF_RESIDUE:
        return DHCheckResult(
            p_not_prime=result.p_not_prime,
            p_not_safe_prime=result.p_not_safe_prime,
            not_suitable_generator=False,
            unable_to_check_generator=result.unable_to_check_generator,
        )
    return result


def is_safe_dh(p: int, g: int) -> bool:
    """Classify (p, g) as safe (True) or unsafe (False) for key exchange."""
    if p.bit_length() < MIN_MODULUS_BITS:
        logger.debug("DH modulus too short: %d bits", p.bit_length())
        return False

    try:
        result = check_dh_parameters(p, g)
    except ValueError as e:
        logger.debug("DH parameter check could not run: %s", e)
        return False

    result = apply_generator_exception(result, p, g)
    if result.rejected:
        logger.debug("DH parameters rejected: %s", result)
        return False
    return True
