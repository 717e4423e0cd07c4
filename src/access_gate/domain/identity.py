"""Identity and amount normalization.

Identities are EVM-style addresses (``0x`` + 40 hex digits). They are stored
lower-cased so that role comparisons are case-insensitive. Amounts are
unsigned 256-bit integers, the value type of the host ledger.
"""

from __future__ import annotations

import re
import secrets

from access_gate.domain.exceptions import InvalidAmountError, InvalidIdentityError

IDENTITY_PATTERN = re.compile(r"0x[0-9a-fA-F]{40}")
ZERO_IDENTITY = "0x" + "0" * 40
MAX_UINT256 = 2**256 - 1


def normalize_identity(value: str) -> str:
    """Validate an identity and return its canonical lower-case form.

    Raises:
        InvalidIdentityError: If the value is not ``0x`` followed by 40 hex digits.
    """
    if not isinstance(value, str) or not IDENTITY_PATTERN.fullmatch(value):
        raise InvalidIdentityError(value)
    return value.lower()


def is_zero_identity(value: str) -> bool:
    return value.lower() == ZERO_IDENTITY


def require_nonzero_identity(value: str) -> str:
    """Normalize an identity and reject the zero identity."""
    identity = normalize_identity(value)
    if identity == ZERO_IDENTITY:
        raise InvalidIdentityError(value, reason="the zero identity cannot hold or act")
    return identity


def normalize_amount(value: int) -> int:
    """Validate an amount against the unsigned 256-bit range.

    Raises:
        InvalidAmountError: If the value is not an int in [0, 2**256).
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmountError(value)
    if value < 0 or value > MAX_UINT256:
        raise InvalidAmountError(value)
    return value


def generate_identity() -> str:
    """Return a fresh random identity, used for the gate's own ledger account."""
    return "0x" + secrets.token_hex(20)
