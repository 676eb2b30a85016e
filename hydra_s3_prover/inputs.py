"""
Circuit input assembly for Hydra-S3.

``format_user_params`` is the single place where optional user parameters
are resolved to their defaults. ``generate_inputs`` maps the formatted
values and the Merkle witness onto the circuit's private and public
signals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .accounts import (
    Account,
    ClaimComparator,
    CommittedAccount,
    UserParams,
    VaultAccount,
    classify_user_params,
    normalize_receipt,
    to_claim_comparator,
)
from .config import PUBLIC_SIGNAL_ORDER
from .exceptions import MalformedScalarError
from .field import normalize
from .identifiers import proof_identifier, secret_hash, vault_identifier
from .interfaces import HashFunction
from .merkle import MerkleWitness

_ZERO_RECEIPT: Tuple[int, int, int] = (0, 0, 0)


# ============================================================================
# FORMATTED USER PARAMS
# ============================================================================


@dataclass(frozen=True)
class FormattedInputs:
    """Normalized scalar view of the user parameters."""

    vault_secret: int
    vault_namespace: int
    vault_identifier: int
    source_vault_namespace: int
    source_identifier: int
    source_secret: int
    source_commitment_receipt: Tuple[int, int, int]
    destination_vault_namespace: int
    destination_identifier: int
    destination_secret: int
    destination_commitment_receipt: Tuple[int, int, int]
    request_identifier: int
    proof_identifier: int
    claim_value: int
    claim_comparator: ClaimComparator
    source_verification_enabled: int
    destination_verification_enabled: int
    extra_data: int
    # Kept for the validation pipeline; not circuit signals.
    source: Optional[Account] = field(default=None, compare=False)
    destination: Optional[Account] = field(default=None, compare=False)
    explicit_vault_secret: Optional[int] = field(default=None, compare=False)


def format_user_params(params, hash_fn: HashFunction) -> FormattedInputs:
    """
    Normalize user parameters and derive the identifiers.

    Args:
        params: ``UserParams`` or a raw mapping with the same keys.
        hash_fn: Hash primitive matching the circuit.

    Returns:
        FormattedInputs with every default applied.

    Raises:
        MalformedScalarError: If a scalar cannot be parsed, or no vault
            secret can be determined.
    """
    params: UserParams = classify_user_params(params)
    source = _normalize_account(params.source, "source")
    destination = _normalize_account(params.destination, "destination")

    explicit_vault_secret = None
    vault_namespace = 0
    if params.vault is not None:
        if params.vault.secret is not None:
            explicit_vault_secret = normalize(params.vault.secret, "vault.secret")
        if params.vault.namespace is not None:
            vault_namespace = normalize(params.vault.namespace, "vault.namespace")

    if explicit_vault_secret is not None:
        vault_secret = explicit_vault_secret
    elif source is not None:
        vault_secret = source.secret
    else:
        raise MalformedScalarError(
            "vault.secret", None, "a vault secret or a source secret is required"
        )

    source_secret = source.secret if source is not None else 0
    source_identifier = source.identifier if source is not None else 0
    source_vault_namespace = (
        source.namespace if isinstance(source, VaultAccount) else 0
    )
    source_receipt = _enabled_receipt(source)

    destination_secret = destination.secret if destination is not None else 0
    destination_identifier = destination.identifier if destination is not None else 0
    destination_vault_namespace = (
        destination.namespace if isinstance(destination, VaultAccount) else 0
    )
    destination_receipt = _enabled_receipt(destination)

    request_identifier = _optional_scalar(
        params.request_identifier, "request_identifier"
    )
    claim = params.claim
    claim_value = 0
    claim_comparator = ClaimComparator.AT_LEAST
    if claim is not None:
        if claim.value is not None:
            claim_value = normalize(claim.value, "claim.value", signed=True)
        if claim.comparator is not None:
            claim_comparator = to_claim_comparator(claim.comparator)

    return FormattedInputs(
        vault_secret=vault_secret,
        vault_namespace=vault_namespace,
        vault_identifier=vault_identifier(hash_fn, vault_secret, vault_namespace),
        source_vault_namespace=source_vault_namespace,
        source_identifier=source_identifier,
        source_secret=source_secret,
        source_commitment_receipt=source_receipt,
        destination_vault_namespace=destination_vault_namespace,
        destination_identifier=destination_identifier,
        destination_secret=destination_secret,
        destination_commitment_receipt=destination_receipt,
        request_identifier=request_identifier,
        proof_identifier=proof_identifier(
            hash_fn, secret_hash(hash_fn, source), request_identifier
        ),
        claim_value=claim_value,
        claim_comparator=claim_comparator,
        source_verification_enabled=_flag(source),
        destination_verification_enabled=_flag(destination),
        extra_data=_optional_scalar(params.extra_data, "extra_data"),
        source=source,
        destination=destination,
        explicit_vault_secret=explicit_vault_secret,
    )


def _normalize_account(account: Optional[Account], label: str) -> Optional[Account]:
    if account is None:
        return None
    identifier = normalize(account.identifier, f"{label}.identifier")
    secret = normalize(account.secret, f"{label}.secret")
    enabled = account.verification_enabled is True
    if isinstance(account, CommittedAccount):
        return CommittedAccount(
            identifier=identifier,
            secret=secret,
            commitment_receipt=normalize_receipt(account.commitment_receipt, label),
            verification_enabled=enabled,
        )
    if isinstance(account, VaultAccount):
        return VaultAccount(
            identifier=identifier,
            secret=secret,
            namespace=normalize(account.namespace, f"{label}.namespace"),
            verification_enabled=enabled,
        )
    raise TypeError(f"{label} must be a CommittedAccount or a VaultAccount")


def _enabled_receipt(account: Optional[Account]) -> Tuple[int, int, int]:
    # The circuit only reads the receipt when verification is enabled.
    if isinstance(account, CommittedAccount) and account.verification_enabled:
        return account.commitment_receipt
    return _ZERO_RECEIPT


def _flag(account: Optional[Account]) -> int:
    return 1 if account is not None and account.verification_enabled else 0


def _optional_scalar(value, label: str) -> int:
    return 0 if value is None else normalize(value, label)


# ============================================================================
# CIRCUIT INPUTS
# ============================================================================


@dataclass(frozen=True)
class PrivateInputs:
    vault_secret: int
    source_identifier: int
    source_secret: int
    source_vault_namespace: int
    source_commitment_receipt: List[int]
    destination_vault_namespace: int
    destination_secret: int
    destination_commitment_receipt: List[int]
    accounts_tree_root: int
    account_merkle_path_elements: List[int]
    account_merkle_path_indices: List[int]
    registry_merkle_path_elements: List[int]
    registry_merkle_path_indices: List[int]
    source_value: int

    def to_circuit_inputs(self) -> Dict[str, Any]:
        return {
            "vaultSecret": self.vault_secret,
            "sourceIdentifier": self.source_identifier,
            "sourceSecret": self.source_secret,
            "sourceVaultNamespace": self.source_vault_namespace,
            "sourceCommitmentReceipt": list(self.source_commitment_receipt),
            "destinationVaultNamespace": self.destination_vault_namespace,
            "destinationSecret": self.destination_secret,
            "destinationCommitmentReceipt": list(
                self.destination_commitment_receipt
            ),
            "accountsTreeRoot": self.accounts_tree_root,
            "accountMerklePathElements": list(self.account_merkle_path_elements),
            "accountMerklePathIndices": list(self.account_merkle_path_indices),
            "registryMerklePathElements": list(self.registry_merkle_path_elements),
            "registryMerklePathIndices": list(self.registry_merkle_path_indices),
            "sourceValue": self.source_value,
        }


@dataclass(frozen=True)
class PublicInputs:
    """
    Public signals of the Hydra-S3 circuit.

    Fields are declared in the order the verifier consumes them; see
    ``to_signals``.
    """

    destination_identifier: int
    extra_data: int
    commitment_mapper_pub_key_x: int
    commitment_mapper_pub_key_y: int
    registry_tree_root: int
    request_identifier: int
    proof_identifier: int
    claim_value: int
    accounts_tree_value: int
    claim_comparator: int
    vault_identifier: int
    vault_namespace: int
    source_verification_enabled: int
    destination_verification_enabled: int

    def as_ordered_dict(self) -> Dict[str, int]:
        values = (
            self.destination_identifier,
            self.extra_data,
            self.commitment_mapper_pub_key_x,
            self.commitment_mapper_pub_key_y,
            self.registry_tree_root,
            self.request_identifier,
            self.proof_identifier,
            self.claim_value,
            self.accounts_tree_value,
            self.claim_comparator,
            self.vault_identifier,
            self.vault_namespace,
            self.source_verification_enabled,
            self.destination_verification_enabled,
        )
        return dict(zip(PUBLIC_SIGNAL_ORDER, values))

    def to_signals(self) -> List[str]:
        """Public signal vector as decimal strings, in verifier order."""
        return [str(int(value)) for value in self.as_ordered_dict().values()]

    def to_circuit_inputs(self) -> Dict[str, Any]:
        return {
            "vaultNamespace": self.vault_namespace,
            "vaultIdentifier": self.vault_identifier,
            "destinationIdentifier": self.destination_identifier,
            "commitmentMapperPubKey": [
                self.commitment_mapper_pub_key_x,
                self.commitment_mapper_pub_key_y,
            ],
            "registryTreeRoot": self.registry_tree_root,
            "requestIdentifier": self.request_identifier,
            "proofIdentifier": self.proof_identifier,
            "claimValue": self.claim_value,
            "accountsTreeValue": self.accounts_tree_value,
            "claimComparator": int(self.claim_comparator),
            "sourceVerificationEnabled": self.source_verification_enabled,
            "destinationVerificationEnabled": self.destination_verification_enabled,
            "extraData": self.extra_data,
        }


def generate_inputs(
    formatted: FormattedInputs,
    witness: MerkleWitness,
    commitment_mapper_pub_key: Tuple[int, int],
) -> Tuple[PrivateInputs, PublicInputs]:
    """
    Build the private and public circuit inputs.

    Args:
        formatted: Output of ``format_user_params``.
        witness: Merkle witness, ``MerkleWitness.empty()`` without a claim.
        commitment_mapper_pub_key: EdDSA public key ``(x, y)`` of the
            commitment mapper.

    Returns:
        (private_inputs, public_inputs)
    """
    pub_key_x, pub_key_y = (
        normalize(coordinate, "commitment_mapper_pub_key")
        for coordinate in commitment_mapper_pub_key
    )

    private_inputs = PrivateInputs(
        vault_secret=formatted.vault_secret,
        source_identifier=formatted.source_identifier,
        source_secret=formatted.source_secret,
        source_vault_namespace=formatted.source_vault_namespace,
        source_commitment_receipt=list(formatted.source_commitment_receipt),
        destination_vault_namespace=formatted.destination_vault_namespace,
        destination_secret=formatted.destination_secret,
        destination_commitment_receipt=list(
            formatted.destination_commitment_receipt
        ),
        accounts_tree_root=witness.accounts_tree_root,
        account_merkle_path_elements=list(witness.account_merkle_path.elements),
        account_merkle_path_indices=list(witness.account_merkle_path.indices),
        registry_merkle_path_elements=list(witness.registry_merkle_path.elements),
        registry_merkle_path_indices=list(witness.registry_merkle_path.indices),
        source_value=witness.source_value,
    )

    public_inputs = PublicInputs(
        destination_identifier=formatted.destination_identifier,
        extra_data=formatted.extra_data,
        commitment_mapper_pub_key_x=pub_key_x,
        commitment_mapper_pub_key_y=pub_key_y,
        registry_tree_root=witness.registry_tree_root,
        request_identifier=formatted.request_identifier,
        proof_identifier=formatted.proof_identifier,
        claim_value=formatted.claim_value,
        accounts_tree_value=witness.accounts_tree_value,
        claim_comparator=int(formatted.claim_comparator),
        vault_identifier=formatted.vault_identifier,
        vault_namespace=formatted.vault_namespace,
        source_verification_enabled=formatted.source_verification_enabled,
        destination_verification_enabled=formatted.destination_verification_enabled,
    )

    return private_inputs, public_inputs
