"""
Public API for hydra_s3_prover.

Input derivation, validation and proof orchestration for the Hydra-S3
zero-knowledge circuit.
"""
from __future__ import annotations

from .accounts import (
    ClaimComparator,
    ClaimInput,
    CommittedAccount,
    UserParams,
    VaultAccount,
    VaultInput,
    classify_account,
    source_account_hex_formatter,
)
from .commitment import PoseidonEddsaCommitmentVerifier
from .config import (
    ACCOUNTS_TREE_HEIGHT,
    PUBLIC_SIGNAL_COUNT,
    REGISTRY_TREE_HEIGHT,
    SNARK_FIELD,
)
from .exceptions import HydraS3Error, ProofGenerationError, ValidationError
from .identifiers import proof_identifier, secret_hash, vault_identifier
from .inputs import PrivateInputs, PublicInputs
from .interfaces import MerklePath
from .merkle import KVMerkleTree, verify_path
from .prover import HydraS3Prover, ProverConfig, build_prover
from .snark import CircuitArtifacts, SnarkjsProver, SnarkProof, resolve_circuit_artifacts

__all__ = [
    "ACCOUNTS_TREE_HEIGHT",
    "REGISTRY_TREE_HEIGHT",
    "SNARK_FIELD",
    "PUBLIC_SIGNAL_COUNT",
    "ClaimComparator",
    "ClaimInput",
    "CommittedAccount",
    "VaultAccount",
    "VaultInput",
    "UserParams",
    "classify_account",
    "source_account_hex_formatter",
    "vault_identifier",
    "secret_hash",
    "proof_identifier",
    "PoseidonEddsaCommitmentVerifier",
    "KVMerkleTree",
    "MerklePath",
    "verify_path",
    "PrivateInputs",
    "PublicInputs",
    "HydraS3Prover",
    "ProverConfig",
    "build_prover",
    "CircuitArtifacts",
    "resolve_circuit_artifacts",
    "SnarkjsProver",
    "SnarkProof",
    "HydraS3Error",
    "ValidationError",
    "ProofGenerationError",
]
