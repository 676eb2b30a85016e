"""
Merkle utilities for the accounts tree and the registry tree.

The accounts tree maps identities to values; the registry tree maps
accounts tree roots to values. A source proves membership in both with one
path per tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from .accounts import ClaimInput, source_account_hex_formatter
from .config import ACCOUNTS_TREE_HEIGHT, REGISTRY_TREE_HEIGHT
from .exceptions import (
    AccountsTreeNotInRegistryTreeError,
    InvalidTreeHeightError,
    MissingTreeError,
    SourceNotInAccountsTreeError,
)
from .field import normalize, to_hex_string
from .interfaces import HashFunction, KVTree, MerklePath


# ============================================================================
# REFERENCE KEY/VALUE TREE
# ============================================================================


class KVMerkleTree:
    """
    Fixed height key/value Merkle tree.

    Leaves are ``H(key, value)`` in insertion order, empty leaves are 0 and
    parents are ``H(left, right)``. Keys are hex strings matched exactly
    (case insensitive), so ``"0x01"`` and a 20-byte padded form of the same
    number are different keys.

    Example:
        >>> tree = KVMerkleTree({"0x01": 4, "0x02": 5}, hash_fn, 20)
        >>> path = tree.get_merkle_path("0x01")
        >>> verify_path(hash_fn, tree.get_leaf("0x01"), path, tree.root)
        True
    """

    def __init__(
        self,
        data: Mapping[str, object],
        hash_fn: HashFunction,
        height: int,
    ) -> None:
        if height < 1:
            raise ValueError("height must be >= 1")
        if len(data) > 2**height:
            raise ValueError(
                f"Cannot fit {len(data)} leaves in a tree of height {height}"
            )

        self._hash_fn = hash_fn
        self._height = height
        self._values: Dict[str, int] = {}
        self._indices: Dict[str, int] = {}

        leaves: Dict[int, int] = {}
        for index, (key, value) in enumerate(data.items()):
            normalized_key = _normalize_key(key)
            if normalized_key in self._values:
                raise ValueError(f"Duplicate key {normalized_key}")
            self._values[normalized_key] = normalize(value, f"value[{key}]")
            self._indices[normalized_key] = index
            leaves[index] = hash_fn(
                [int(normalized_key, 16), self._values[normalized_key]]
            )

        self._zeros = _zero_hashes(hash_fn, height)
        self._levels = _build_levels(hash_fn, leaves, self._zeros, height)

    @property
    def height(self) -> int:
        return self._height

    @property
    def root(self) -> int:
        return self._node(self._height, 0)

    def __contains__(self, key: str) -> bool:
        return _normalize_key(key) in self._values

    def __len__(self) -> int:
        return len(self._values)

    def get_value(self, key: str) -> int:
        return self._values[_normalize_key(key)]

    def get_leaf(self, key: str) -> int:
        index = self._indices[_normalize_key(key)]
        return self._node(0, index)

    def get_merkle_path(self, key: str) -> MerklePath:
        index = self._indices[_normalize_key(key)]
        elements: List[int] = []
        indices: List[int] = []
        for level in range(self._height):
            is_right = index & 1
            elements.append(self._node(level, index ^ 1))
            indices.append(is_right)
            index >>= 1
        return MerklePath(elements=elements, indices=indices)

    def _node(self, level: int, index: int) -> int:
        return self._levels[level].get(index, self._zeros[level])


def _normalize_key(key: str) -> str:
    if not isinstance(key, str) or not key.lower().startswith("0x"):
        raise ValueError(f"tree keys must be 0x prefixed hex strings, got {key!r}")
    return key.lower()


def _zero_hashes(hash_fn: HashFunction, height: int) -> List[int]:
    zeros = [0]
    for _ in range(height):
        zeros.append(hash_fn([zeros[-1], zeros[-1]]))
    return zeros


def _build_levels(
    hash_fn: HashFunction,
    leaves: Dict[int, int],
    zeros: List[int],
    height: int,
) -> List[Dict[int, int]]:
    levels = [leaves]
    current = leaves
    for level in range(height):
        parents: Dict[int, int] = {}
        for parent_index in sorted({index >> 1 for index in current}):
            left = current.get(parent_index * 2, zeros[level])
            right = current.get(parent_index * 2 + 1, zeros[level])
            parents[parent_index] = hash_fn([left, right])
        levels.append(parents)
        current = parents
    return levels


def verify_path(
    hash_fn: HashFunction, leaf: int, path: MerklePath, root: int
) -> bool:
    """
    Recompute the root from a leaf and its authentication path.

    Returns:
        True if the path leads to ``root``, False otherwise
    """
    current = leaf
    for sibling, index in zip(path.elements, path.indices):
        if index:
            current = hash_fn([sibling, current])
        else:
            current = hash_fn([current, sibling])
    return current == root


# ============================================================================
# DUAL TREE WITNESS
# ============================================================================


@dataclass(frozen=True)
class MerkleWitness:
    """Values and paths extracted from the accounts and registry trees."""

    account_merkle_path: MerklePath = field(
        default_factory=lambda: MerklePath.empty(ACCOUNTS_TREE_HEIGHT)
    )
    registry_merkle_path: MerklePath = field(
        default_factory=lambda: MerklePath.empty(REGISTRY_TREE_HEIGHT)
    )
    source_value: int = 0
    accounts_tree_value: int = 0
    accounts_tree_root: int = 0
    registry_tree_root: int = 0

    @classmethod
    def empty(cls) -> "MerkleWitness":
        """Witness of a proof that asserts no membership."""
        return cls()


def build_merkle_witness(
    claim: Optional[ClaimInput], source_identifier: int
) -> MerkleWitness:
    """
    Look the source up in the accounts tree and the accounts tree in the
    registry tree.

    Checks run in a fixed order: both trees present, accounts root in the
    registry, registry height, accounts height, source in accounts tree.
    Any exception a tree raises while looking up a key is reported as the
    key being absent, with the tree's error chained as the cause.

    Raises:
        MissingTreeError: Only one of the two trees was supplied.
        AccountsTreeNotInRegistryTreeError: Accounts root not a registry key.
        InvalidTreeHeightError: A tree does not have the circuit height.
        SourceNotInAccountsTreeError: Source key not in the accounts tree.
    """
    if claim is None or not claim.has_trees:
        return MerkleWitness.empty()

    accounts_tree: Optional[KVTree] = claim.accounts_tree
    registry_tree: Optional[KVTree] = claim.registry_tree
    if accounts_tree is None or registry_tree is None:
        raise MissingTreeError()

    accounts_root_key = to_hex_string(accounts_tree.root)
    try:
        accounts_tree_value = registry_tree.get_value(accounts_root_key)
    except Exception as exc:
        raise AccountsTreeNotInRegistryTreeError(accounts_root_key) from exc

    if registry_tree.height != REGISTRY_TREE_HEIGHT:
        raise InvalidTreeHeightError(
            "registry", registry_tree.height, REGISTRY_TREE_HEIGHT
        )
    if accounts_tree.height != ACCOUNTS_TREE_HEIGHT:
        raise InvalidTreeHeightError(
            "accounts", accounts_tree.height, ACCOUNTS_TREE_HEIGHT
        )

    source_key = source_account_hex_formatter(source_identifier)
    try:
        source_value = accounts_tree.get_value(source_key)
        account_merkle_path = accounts_tree.get_merkle_path(source_key)
    except Exception as exc:
        raise SourceNotInAccountsTreeError(source_key) from exc

    return MerkleWitness(
        account_merkle_path=account_merkle_path,
        registry_merkle_path=registry_tree.get_merkle_path(accounts_root_key),
        source_value=normalize(source_value, "source_value"),
        accounts_tree_value=normalize(accounts_tree_value, "accounts_tree_value"),
        accounts_tree_root=accounts_tree.root,
        registry_tree_root=registry_tree.root,
    )
