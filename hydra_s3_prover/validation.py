"""
Validation of user parameters before proving.

Every check mirrors a constraint of the Hydra-S3 circuit. Checks run in a
fixed order and the first failure is raised; nothing reaches the proving
engine unless all of them pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .accounts import ClaimComparator, ClaimInput, VaultAccount, classify_user_params
from .commitment import verify_account
from .exceptions import (
    ClaimExceedsSourceValueError,
    ClaimNotEqualError,
    FieldOverflowError,
    NegativeClaimValueError,
    SecretMismatchError,
)
from .field import exceeds_field, normalize
from .inputs import FormattedInputs, format_user_params
from .interfaces import CommitmentVerifier, HashFunction
from .merkle import MerkleWitness, build_merkle_witness


@dataclass(frozen=True)
class ValidatedParams:
    """Formatted parameters and Merkle witness that passed validation."""

    formatted: FormattedInputs
    witness: MerkleWitness


def validate_user_params(
    params,
    *,
    hash_fn: HashFunction,
    commitment_verifier: CommitmentVerifier,
    commitment_mapper_pub_key: Tuple[int, int],
) -> ValidatedParams:
    """
    Run the validation pipeline.

    Order:
        1. vault secret matches a vault-derived source secret
        2. vault secret matches a vault-derived destination secret
        3. trees (presence, registry membership, heights, source
           membership) and claim value bounds
        4. source commitment or namespace
        5. destination commitment or namespace
        6. field overflow of every scalar handed to the proving engine

    Args:
        params: ``UserParams`` or a raw mapping.
        hash_fn: Hash primitive matching the circuit.
        commitment_verifier: Commitment receipt check.
        commitment_mapper_pub_key: Public key of the commitment mapper.

    Returns:
        ValidatedParams holding the formatted inputs and the Merkle witness.

    Raises:
        ValidationError: The first failed check.
        MalformedScalarError: A scalar could not be parsed.
    """
    params = classify_user_params(params)
    formatted = format_user_params(params, hash_fn)

    _check_vault_secret("source", formatted)
    _check_vault_secret("destination", formatted)

    witness = _check_claim(params.claim, formatted)

    for side, account in (
        ("source", formatted.source),
        ("destination", formatted.destination),
    ):
        verify_account(
            side,
            account,
            formatted.vault_secret,
            hash_fn=hash_fn,
            commitment_verifier=commitment_verifier,
            commitment_mapper_pub_key=commitment_mapper_pub_key,
        )

    _check_field_overflow(formatted, witness, commitment_mapper_pub_key)

    return ValidatedParams(formatted=formatted, witness=witness)


def _check_vault_secret(side: str, formatted: FormattedInputs) -> None:
    # Committed accounts carry their own secret; only vault accounts share
    # the vault secret.
    account = getattr(formatted, side)
    if formatted.explicit_vault_secret is None:
        return
    if not isinstance(account, VaultAccount):
        return
    if account.secret != formatted.explicit_vault_secret:
        raise SecretMismatchError(side)


def _check_claim(
    claim: Optional[ClaimInput], formatted: FormattedInputs
) -> MerkleWitness:
    claim_value = formatted.claim_value
    if claim is None or not claim.has_trees:
        if claim_value < 0:
            raise NegativeClaimValueError(claim_value)
        return MerkleWitness.empty()

    witness = build_merkle_witness(claim, formatted.source_identifier)
    source_value = witness.source_value

    if claim_value > source_value:
        raise ClaimExceedsSourceValueError(claim_value, source_value)
    if claim_value < 0:
        raise NegativeClaimValueError(claim_value)
    if (
        formatted.claim_comparator == ClaimComparator.EQUAL
        and claim_value != source_value
    ):
        raise ClaimNotEqualError(claim_value, source_value)

    return witness


def _check_field_overflow(
    formatted: FormattedInputs,
    witness: MerkleWitness,
    commitment_mapper_pub_key: Tuple[int, int],
) -> None:
    scalars = [
        ("proofIdentifier", formatted.proof_identifier),
        ("vaultIdentifier", formatted.vault_identifier),
        ("sourceIdentifier", formatted.source_identifier),
        ("destinationIdentifier", formatted.destination_identifier),
        ("requestIdentifier", formatted.request_identifier),
        ("extraData", formatted.extra_data),
        ("claimValue", formatted.claim_value),
        ("vaultNamespace", formatted.vault_namespace),
        ("vaultSecret", formatted.vault_secret),
        ("sourceSecret", formatted.source_secret),
        ("sourceVaultNamespace", formatted.source_vault_namespace),
        ("destinationSecret", formatted.destination_secret),
        ("destinationVaultNamespace", formatted.destination_vault_namespace),
    ]
    for side, receipt in (
        ("source", formatted.source_commitment_receipt),
        ("destination", formatted.destination_commitment_receipt),
    ):
        scalars.extend(
            (f"{side}CommitmentReceipt[{index}]", value)
            for index, value in enumerate(receipt)
        )
    scalars.extend(
        [
            ("commitmentMapperPubKeyX", normalize(commitment_mapper_pub_key[0])),
            ("commitmentMapperPubKeyY", normalize(commitment_mapper_pub_key[1])),
            ("sourceValue", witness.source_value),
            ("accountsTreeValue", witness.accounts_tree_value),
        ]
    )
    for name, value in scalars:
        if exceeds_field(value):
            raise FieldOverflowError(name, value)
