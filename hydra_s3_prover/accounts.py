"""
Identity model for Hydra-S3 proofs.

Sources and destinations are either accounts committed to the commitment
mapper (an address bound to the vault by a signed receipt) or accounts
derived from the vault itself (a vault identifier under a namespace).
The variant is decided once by ``classify_account`` and carried as a type
for the rest of the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping, Optional, Tuple, Union

from .config import ADDRESS_BYTE_LENGTH
from .exceptions import MalformedScalarError
from .field import hex_byte_length, hex_zero_pad, normalize, to_hex_string
from .interfaces import KVTree


class ClaimComparator(IntEnum):
    """
    How the claimed value relates to the value recorded in the accounts tree.

    - AT_LEAST: the tree value may be greater than the claimed value
    - EQUAL: the tree value must equal the claimed value
    """

    AT_LEAST = 0
    EQUAL = 1


def to_claim_comparator(value, label: str = "claim.comparator") -> ClaimComparator:
    """Parse a comparator given as a member, an int or a numeric string."""
    if isinstance(value, ClaimComparator):
        return value
    raw = normalize(value, label)
    try:
        return ClaimComparator(raw)
    except ValueError as exc:
        raise MalformedScalarError(
            label, value, "expected 0 (AT_LEAST) or 1 (EQUAL)"
        ) from exc


@dataclass(frozen=True)
class VaultInput:
    secret: Any
    namespace: Optional[Any] = None


@dataclass(frozen=True)
class CommittedAccount:
    """Externally issued identity attested by the commitment mapper."""

    identifier: int
    secret: int
    commitment_receipt: Tuple[int, int, int]
    verification_enabled: bool = False


@dataclass(frozen=True)
class VaultAccount:
    """Identity derived from the vault secret under a namespace."""

    identifier: int
    secret: int
    namespace: int
    verification_enabled: bool = False


Account = Union[CommittedAccount, VaultAccount]


@dataclass(frozen=True)
class ClaimInput:
    """
    Claim over the accounts tree.

    ``accounts_tree`` and ``registry_tree`` are either both supplied or both
    omitted. Without trees the proof makes no membership assertion.
    """

    value: Optional[Any] = None
    comparator: Optional[ClaimComparator] = None
    accounts_tree: Optional[KVTree] = None
    registry_tree: Optional[KVTree] = None

    @property
    def has_trees(self) -> bool:
        return self.accounts_tree is not None or self.registry_tree is not None


@dataclass(frozen=True)
class UserParams:
    vault: Optional[VaultInput] = None
    source: Optional[Account] = None
    destination: Optional[Account] = None
    claim: Optional[ClaimInput] = None
    request_identifier: Optional[Any] = None
    extra_data: Optional[Any] = None


_RECEIPT_KEYS = ("commitment_receipt", "commitmentReceipt")
_VERIFICATION_KEYS = ("verification_enabled", "verificationEnabled")


def classify_account(account, label: str = "account") -> Optional[Account]:
    """
    Turn a raw account mapping into its explicit variant.

    A mapping holding a commitment receipt is a ``CommittedAccount``;
    anything else must carry a namespace and becomes a ``VaultAccount``.
    Both camelCase and snake_case keys are accepted. Variants and None are
    returned unchanged.

    Raises:
        MalformedScalarError: If a required field is missing or malformed.
        TypeError: If ``account`` is neither a mapping nor a variant.
    """
    if account is None or isinstance(account, (CommittedAccount, VaultAccount)):
        return account

    if not isinstance(account, Mapping):
        raise TypeError(f"{label} must be a mapping or an account variant")

    identifier = normalize(account.get("identifier"), f"{label}.identifier")
    secret = normalize(account.get("secret"), f"{label}.secret")
    verification_enabled = _get_flag(account, _VERIFICATION_KEYS)

    receipt = _get_first(account, _RECEIPT_KEYS)
    if receipt is not None:
        return CommittedAccount(
            identifier=identifier,
            secret=secret,
            commitment_receipt=normalize_receipt(receipt, label),
            verification_enabled=verification_enabled,
        )

    return VaultAccount(
        identifier=identifier,
        secret=secret,
        namespace=normalize(account.get("namespace"), f"{label}.namespace"),
        verification_enabled=verification_enabled,
    )


def classify_user_params(params) -> UserParams:
    """Build ``UserParams`` from a raw mapping (for example parsed JSON)."""
    if isinstance(params, UserParams):
        return params
    if not isinstance(params, Mapping):
        raise TypeError("params must be a mapping or UserParams")

    vault = params.get("vault")
    if isinstance(vault, Mapping):
        vault = VaultInput(secret=vault.get("secret"), namespace=vault.get("namespace"))

    claim = params.get("claim")
    if isinstance(claim, Mapping):
        comparator = claim.get("comparator")
        claim = ClaimInput(
            value=claim.get("value"),
            comparator=None if comparator is None else to_claim_comparator(comparator),
            accounts_tree=_get_first(claim, ("accounts_tree", "accountsTree")),
            registry_tree=_get_first(claim, ("registry_tree", "registryTree")),
        )

    return UserParams(
        vault=vault,
        source=classify_account(params.get("source"), "source"),
        destination=classify_account(params.get("destination"), "destination"),
        claim=claim,
        request_identifier=_get_first(
            params, ("request_identifier", "requestIdentifier")
        ),
        extra_data=_get_first(params, ("extra_data", "extraData")),
    )


def source_account_hex_formatter(identifier: int) -> str:
    """
    Canonical accounts tree key for a source identifier.

    Identifiers longer than 20 bytes are vault identifiers (hash outputs)
    and are used unpadded. Shorter ones are addresses and are zero padded
    to exactly 20 bytes.
    """
    if hex_byte_length(identifier) > ADDRESS_BYTE_LENGTH:
        return to_hex_string(identifier)
    return hex_zero_pad(identifier, ADDRESS_BYTE_LENGTH)


def normalize_receipt(receipt, label: str) -> Tuple[int, int, int]:
    """Normalize a 3-element commitment receipt."""
    if isinstance(receipt, (str, bytes, bytearray)):
        items = []
    else:
        try:
            items = list(receipt)
        except TypeError:
            items = []
    if len(items) != 3:
        raise MalformedScalarError(
            f"{label}.commitment_receipt", receipt, "expected 3 elements"
        )
    return tuple(
        normalize(item, f"{label}.commitment_receipt[{idx}]")
        for idx, item in enumerate(items)
    )


def _get_first(mapping: Mapping, keys: Tuple[str, ...]):
    for key in keys:
        if key in mapping:
            return mapping[key]
    return None


def _get_flag(mapping: Mapping, keys: Tuple[str, ...]) -> bool:
    return _get_first(mapping, keys) is True
