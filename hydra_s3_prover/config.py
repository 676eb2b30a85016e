"""
WARNING: DRAFT - requires cryptographic review before production use.

Circuit configuration for the Hydra-S3 prover.

Every value in this module is fixed by the compiled circuit and its
verifier. Changing one without regenerating the circuit artifacts produces
proofs that no deployed verifier accepts.
"""

# ============================================================================
# FIELD PARAMETERS
# ============================================================================

# BN254 scalar field (the Groth16 proving field used by circom/snarkjs)
SNARK_FIELD = (
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)
SNARK_FIELD_BITS = 254

# ============================================================================
# TREE PARAMETERS
# ============================================================================

ACCOUNTS_TREE_HEIGHT = 20
REGISTRY_TREE_HEIGHT = 20

# Identifiers that fit in 20 bytes are treated as addresses and zero padded
# before the accounts tree lookup.
ADDRESS_BYTE_LENGTH = 20

# ============================================================================
# HASH DOMAIN SEPARATION
# ============================================================================

# Trailing constant appended to the secret before hashing it into the
# nullifier seed.
SECRET_HASH_DOMAIN = 1

# ============================================================================
# PUBLIC SIGNALS
# ============================================================================

PUBLIC_SIGNAL_COUNT = 14

# Order in which the verifier consumes public signals.
PUBLIC_SIGNAL_ORDER = (
    "destinationIdentifier",
    "extraData",
    "commitmentMapperPubKeyX",
    "commitmentMapperPubKeyY",
    "registryTreeRoot",
    "requestIdentifier",
    "proofIdentifier",
    "claimValue",
    "accountsTreeValue",
    "claimComparator",
    "vaultIdentifier",
    "vaultNamespace",
    "sourceVerificationEnabled",
    "destinationVerificationEnabled",
)

# ============================================================================
# CIRCUIT ARTIFACTS
# ============================================================================

CIRCUIT_NAME = "hydra-s3"
CIRCUIT_WASM_FILENAME = f"{CIRCUIT_NAME}.wasm"
CIRCUIT_ZKEY_FILENAME = f"{CIRCUIT_NAME}.zkey"

DEFAULT_PROVER_TIMEOUT = 120

# ============================================================================
# PROOF SERIALIZATION
# ============================================================================

SERIALIZATION_FORMAT = "CBOR"
PROOF_VERSION = 1

# ============================================================================
# VALIDATION
# ============================================================================


def validate_config() -> bool:
    """
    Validate configuration parameters.

    Returns:
        True if configuration is valid

    Raises:
        AssertionError: If configuration is invalid
    """
    assert SNARK_FIELD.bit_length() == SNARK_FIELD_BITS, "Invalid field size"
    assert ACCOUNTS_TREE_HEIGHT > 0, "Accounts tree height must be positive"
    assert REGISTRY_TREE_HEIGHT > 0, "Registry tree height must be positive"
    assert len(PUBLIC_SIGNAL_ORDER) == PUBLIC_SIGNAL_COUNT, (
        "Public signal order does not match signal count"
    )
    assert len(set(PUBLIC_SIGNAL_ORDER)) == PUBLIC_SIGNAL_COUNT, (
        "Public signal names must be unique"
    )
    assert ADDRESS_BYTE_LENGTH * 8 < SNARK_FIELD_BITS, (
        "Address width must fit in the field"
    )
    assert SERIALIZATION_FORMAT == "CBOR", "Invalid serialization format"

    return True


# Auto-validate on import
validate_config()
