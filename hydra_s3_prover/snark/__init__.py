"""SNARK artifacts, proving engine adapter and proof wrapper."""

from .assets import CircuitArtifacts, resolve_circuit_artifacts
from .proof import SnarkProof
from .snarkjs import SnarkjsProver

__all__ = [
    "CircuitArtifacts",
    "resolve_circuit_artifacts",
    "SnarkProof",
    "SnarkjsProver",
]
