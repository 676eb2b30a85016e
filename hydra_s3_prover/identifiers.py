"""
Identifier derivations shared by the prover and the circuit.

All functions take the hash primitive explicitly. A zero namespace yields
a zero vault identifier and a zero request identifier yields a zero proof
identifier; the circuit enforces the same.
"""

from __future__ import annotations

from typing import Optional

from .accounts import Account, CommittedAccount, VaultAccount
from .config import SECRET_HASH_DOMAIN
from .interfaces import HashFunction


def vault_identifier(hash_fn: HashFunction, secret: int, namespace: int) -> int:
    """Return ``H(secret, namespace)``, or 0 when the namespace is 0."""
    if namespace == 0:
        return 0
    return hash_fn([secret, namespace])


def secret_hash(hash_fn: HashFunction, account: Optional[Account]) -> int:
    """
    Hash the source secret into the nullifier seed.

    Args:
        hash_fn: Hash primitive.
        account: Normalized source account, or None when no source is given.

    Returns:
        ``H(secret, 1)`` for committed accounts (and for a missing source,
        with secret 0), ``H(secret, namespace, 1)`` for vault accounts.
    """
    if isinstance(account, VaultAccount):
        return hash_fn([account.secret, account.namespace, SECRET_HASH_DOMAIN])
    if isinstance(account, CommittedAccount):
        return hash_fn([account.secret, SECRET_HASH_DOMAIN])
    if account is None:
        return hash_fn([0, SECRET_HASH_DOMAIN])
    raise TypeError(f"unsupported account variant: {type(account).__name__}")


def proof_identifier(
    hash_fn: HashFunction, source_secret_hash: int, request_identifier: int
) -> int:
    """Return ``H(secret_hash, request_identifier)``, or 0 without a request."""
    if request_identifier == 0:
        return 0
    return hash_fn([source_secret_hash, request_identifier])


def commitment(hash_fn: HashFunction, vault_secret: int, account_secret: int) -> int:
    """Commitment registered with the commitment mapper for an account."""
    return hash_fn([vault_secret, account_secret])
