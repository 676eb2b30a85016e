"""
Collaborator interfaces consumed by the prover.

The hash primitive, the key/value trees, the commitment mapper signature
check and the Groth16 engine live outside this package. The prover only
depends on the narrow shapes below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Protocol, Sequence, Tuple

# Poseidon-style hash over field elements: H([a, b, ...]) -> field element.
HashFunction = Callable[[Sequence[int]], int]

# (identifier, vault_secret, account_secret, receipt, pub_key) -> bool
CommitmentVerifier = Callable[
    [int, int, int, Tuple[int, int, int], Tuple[int, int]], bool
]


@dataclass(frozen=True)
class MerklePath:
    """
    Authentication path of a tree leaf.

    Attributes:
        elements: Sibling hashes from the leaf level up to the root.
        indices: 0 where the running node is a left child, 1 where it is
            a right child.
    """

    elements: List[int] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)

    @classmethod
    def empty(cls, height: int) -> "MerklePath":
        return cls(elements=[0] * height, indices=[0] * height)

    def __len__(self) -> int:
        return len(self.elements)


class KVTree(Protocol):
    """Key/value Merkle tree addressed by hex string keys."""

    @property
    def height(self) -> int:
        ...

    @property
    def root(self) -> int:
        ...

    def get_value(self, key: str) -> int:
        """Return the value stored at ``key``; raise if absent (any exception)."""
        ...

    def get_merkle_path(self, key: str) -> MerklePath:
        """Return the path of ``key``; raise if absent (any exception)."""
        ...


class ProvingEngine(Protocol):
    """Groth16 witness generation and proving."""

    def full_prove(
        self,
        inputs: Dict[str, Any],
        wasm_path: str,
        zkey_path: str,
    ) -> Tuple[Dict[str, Any], List[str]]:
        """Return ``(proof, public_signals)`` for the circuit inputs."""
        ...
