"""
Custom exceptions for the Hydra-S3 prover.

Validation errors are raised before the proving engine is invoked. Each one
carries the side, field or values involved so callers can act on it.
"""

from typing import Optional


class HydraS3Error(Exception):
    """Base exception for Hydra-S3 prover errors."""

    pass


class MalformedScalarError(HydraS3Error):
    """A user supplied scalar could not be parsed as an integer."""

    def __init__(self, label: str, value: object, reason: str = "") -> None:
        self.label = label
        self.value = value
        detail = f": {reason}" if reason else ""
        super().__init__(f"{label} is not a valid scalar ({value!r}){detail}")


class ConfigurationError(HydraS3Error):
    """Configuration error."""

    pass


# ============================================================================
# VALIDATION PIPELINE
# ============================================================================


class ValidationError(HydraS3Error):
    """User parameters are inconsistent with the circuit constraints."""

    pass


class SecretMismatchError(ValidationError):
    def __init__(self, side: str) -> None:
        self.side = side
        super().__init__(f"vault.secret must be identical to {side}.secret")


class MissingTreeError(ValidationError):
    """Only one of the accounts tree and the registry tree was supplied."""

    def __init__(self) -> None:
        super().__init__(
            "Registry tree should be defined when the accountsTree is defined"
        )


class InvalidTreeHeightError(ValidationError):
    def __init__(self, which: str, height: int, expected: int) -> None:
        self.which = which
        self.height = height
        self.expected = expected
        super().__init__(
            f"Invalid {which.capitalize()} tree height: "
            f"got {height}, expected {expected}"
        )


class AccountsTreeNotInRegistryTreeError(ValidationError):
    def __init__(self, accounts_tree_root: str) -> None:
        self.accounts_tree_root = accounts_tree_root
        super().__init__(
            f"Accounts tree root {accounts_tree_root} not found in the Registry tree"
        )


class SourceNotInAccountsTreeError(ValidationError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Could not find the source {key} in the Accounts tree")


class ClaimExceedsSourceValueError(ValidationError):
    def __init__(self, claim_value: int, source_value: int) -> None:
        self.claim_value = claim_value
        self.source_value = source_value
        super().__init__(
            f"Claim value {claim_value} can't be superior to Source value "
            f"{source_value}"
        )


class NegativeClaimValueError(ValidationError):
    def __init__(self, claim_value: int) -> None:
        self.claim_value = claim_value
        super().__init__(f"Claim value {claim_value} can't be negative")


class ClaimNotEqualError(ValidationError):
    """Claim value differs from the source value under the EQUAL comparator."""

    def __init__(self, claim_value: int, source_value: int) -> None:
        self.claim_value = claim_value
        self.source_value = source_value
        super().__init__(
            f"Claim value {claim_value} must be equal with Source value "
            f"{source_value} when claimComparator == 1"
        )


class InvalidCommitmentReceiptError(ValidationError):
    def __init__(self, side: str) -> None:
        self.side = side
        super().__init__(f"Invalid {side} commitment receipt")


class InvalidNamespaceOrSecretError(ValidationError):
    def __init__(self, side: str) -> None:
        self.side = side
        super().__init__(f"Invalid {side} namespace or secret")


class FieldOverflowError(ValidationError):
    def __init__(self, field: str, value: int) -> None:
        self.field = field
        self.value = value
        super().__init__(
            f"{field} {value} overflows the snark field, "
            f"please use a {field} inside the snark field"
        )


# ============================================================================
# PROOF GENERATION
# ============================================================================


class ProofGenerationError(HydraS3Error):
    """Error during proof generation."""

    pass


class ProvingEngineError(ProofGenerationError):
    """The external proving engine failed."""

    def __init__(self, message: str, stderr: Optional[str] = None) -> None:
        self.stderr = stderr
        super().__init__(message)


class PublicSignalsMismatchError(ProofGenerationError):
    """The proving engine returned public signals that differ from the inputs."""

    def __init__(self, expected: list, actual: list) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Proving engine returned public signals {actual} "
            f"but {expected} were expected"
        )
