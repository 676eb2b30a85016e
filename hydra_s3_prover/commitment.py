"""
Commitment mapper checks for sources and destinations.

A committed account is bound to the vault by an EdDSA-Poseidon receipt
signed by the commitment mapper over ``H(identifier, H(vault_secret,
account_secret))``. A vault account is bound by recomputing its identifier
from the vault secret and its namespace.
"""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from .accounts import Account, CommittedAccount, VaultAccount
from .config import SNARK_FIELD
from .exceptions import InvalidCommitmentReceiptError, InvalidNamespaceOrSecretError
from .identifiers import commitment
from .interfaces import CommitmentVerifier, HashFunction

# (message, receipt, pub_key) -> bool
SignatureVerifier = Callable[[int, Tuple[int, int, int], Tuple[int, int]], bool]


class PoseidonEddsaCommitmentVerifier:
    """
    Commitment receipt verifier built from a hash and an EdDSA check.

    Args:
        hash_fn: Poseidon hash matching the circuit.
        verify_signature: EdDSA-Poseidon verification of a message against
            a receipt ``(R8x, R8y, S)`` and a public key ``(Ax, Ay)``.
    """

    def __init__(
        self, hash_fn: HashFunction, verify_signature: SignatureVerifier
    ) -> None:
        self._hash_fn = hash_fn
        self._verify_signature = verify_signature

    def message(self, identifier: int, vault_secret: int, account_secret: int) -> int:
        """Message signed by the commitment mapper for an account."""
        return self._hash_fn(
            [
                identifier % SNARK_FIELD,
                commitment(self._hash_fn, vault_secret, account_secret),
            ]
        )

    def __call__(
        self,
        identifier: int,
        vault_secret: int,
        account_secret: int,
        receipt: Tuple[int, int, int],
        pub_key: Tuple[int, int],
    ) -> bool:
        msg = self.message(identifier, vault_secret, account_secret)
        return bool(self._verify_signature(msg, tuple(receipt), tuple(pub_key)))


def verify_account(
    side: str,
    account: Optional[Account],
    vault_secret: int,
    *,
    hash_fn: HashFunction,
    commitment_verifier: CommitmentVerifier,
    commitment_mapper_pub_key: Tuple[int, int],
) -> None:
    """
    Enforce the proof obligation of one side, if its verification is enabled.

    Args:
        side: ``"source"`` or ``"destination"``, used in error messages.
        account: Normalized account of that side, or None.
        vault_secret: Normalized vault secret.

    Raises:
        InvalidCommitmentReceiptError: The receipt does not verify.
        InvalidNamespaceOrSecretError: ``H(vault_secret, namespace)`` is not
            the account identifier.
    """
    if account is None or not account.verification_enabled:
        return

    if isinstance(account, CommittedAccount):
        is_valid = commitment_verifier(
            account.identifier,
            vault_secret,
            account.secret,
            account.commitment_receipt,
            commitment_mapper_pub_key,
        )
        if not is_valid:
            raise InvalidCommitmentReceiptError(side)
        return

    if isinstance(account, VaultAccount):
        if hash_fn([vault_secret, account.namespace]) != account.identifier:
            raise InvalidNamespaceOrSecretError(side)
        return

    raise TypeError(f"unsupported account variant: {type(account).__name__}")
