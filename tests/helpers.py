from __future__ import annotations

import base64
import textwrap

from sympy import nextprime

from pydhparams.params.groups import MODP1024_P, OAKLEY_GROUP_2_DER  # noqa: F401


def _der_length(n: int) -> bytes:
    if n < 0x80:
        return bytes((n,))
    body = n.to_bytes((n.bit_length() + 7) // 8, "big")
    return bytes((0x80 | len(body),)) + body


def der_integer(value: int) -> bytes:
    body = value.to_bytes(value.bit_length() // 8 + 1, "big")
    return b"\x02" + _der_length(len(body)) + body


def der_sequence(*items: bytes) -> bytes:
    body = b"".join(items)
    return b"\x30" + _der_length(len(body)) + body


def dh_params_der(p: int, g: int, private_value_length: int | None = None) -> bytes:
    """PKCS#3 DHParameter ::= SEQUENCE { prime INTEGER, base INTEGER, privateValueLength INTEGER OPTIONAL }."""
    items = [der_integer(p), der_integer(g)]
    if private_value_length is not None:
        items.append(der_integer(private_value_length))
    return der_sequence(*items)


def pem_armor(der: bytes, label: str = "DH PARAMETERS") -> bytes:
    body = "\n".join(textwrap.wrap(base64.b64encode(der).decode("ascii"), 64))
    return f"-----BEGIN {label}-----\n{body}\n-----END {label}-----\n".encode("ascii")


# Primes just above 2**511 and 2**1022: real primes, still under the size floor
PRIME_512 = nextprime(1 << 511)
PRIME_1023 = nextprime(1 << 1022)
SHORT_DER = dh_params_der(PRIME_512, 2)

# 2**1279 - 1 is a Mersenne prime; (p - 1) / 2 = 2**1278 - 1 is divisible by 3
MERSENNE_1279 = (1 << 1279) - 1


def with_residue(bits: int, residue: int) -> int:
    """Smallest integer above 2**bits congruent to residue mod 24."""
    base = 1 << bits
    return base + (residue - base) % 24
