"""
Groth16 proof wrapper.

Holds the snarkjs proof object and the public signals, and exposes them in
the layout expected by the Solidity verifier.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

try:
    import cbor2
except ImportError:
    raise ImportError(
        "cbor2 is required for proof serialization. "
        "Install with: pip install cbor2"
    )

from ..config import PROOF_VERSION, PUBLIC_SIGNAL_COUNT
from ..exceptions import ProofGenerationError
from ..field import normalize

_WORD_HEX_CHARS = 64


@dataclass
class SnarkProof:
    """
    Groth16 proof and its public signals.

    Attributes:
        input: Public signals as decimal strings, in verifier order.
        proof: snarkjs proof object (``pi_a``, ``pi_b``, ``pi_c``).

    Example:
        >>> snark_proof = SnarkProof(public_signals, proof)
        >>> calldata = snark_proof.to_bytes()
    """

    input: List[str]
    proof: Dict[str, Any] = field(default_factory=dict)

    @property
    def a(self) -> List[int]:
        pi_a = self.proof["pi_a"]
        return [normalize(pi_a[0], "pi_a[0]"), normalize(pi_a[1], "pi_a[1]")]

    @property
    def b(self) -> List[List[int]]:
        # The verifier expects each G2 coordinate pair in reverse order.
        pi_b = self.proof["pi_b"]
        return [
            [normalize(pi_b[0][1], "pi_b[0][1]"), normalize(pi_b[0][0], "pi_b[0][0]")],
            [normalize(pi_b[1][1], "pi_b[1][1]"), normalize(pi_b[1][0], "pi_b[1][0]")],
        ]

    @property
    def c(self) -> List[int]:
        pi_c = self.proof["pi_c"]
        return [normalize(pi_c[0], "pi_c[0]"), normalize(pi_c[1], "pi_c[1]")]

    @property
    def public_signals(self) -> List[int]:
        return [normalize(signal, "public signal") for signal in self.input]

    def to_bytes(self) -> str:
        """
        ABI encoding of ``(a, b, c, input)`` as a 0x prefixed hex string.

        Every element is one 32-byte big-endian word: 2 for ``a``, 4 for
        ``b``, 2 for ``c`` then one per public signal.
        """
        words = list(self.a)
        for pair in self.b:
            words.extend(pair)
        words.extend(self.c)
        words.extend(self.public_signals)
        return "0x" + "".join(
            format(word, "x").rjust(_WORD_HEX_CHARS, "0") for word in words
        )

    def to_dict(self) -> dict:
        return {
            "a": [str(value) for value in self.a],
            "b": [[str(value) for value in pair] for pair in self.b],
            "c": [str(value) for value in self.c],
            "input": list(self.input),
        }

    def to_json(self) -> str:
        return json.dumps({"proof": self.proof, "publicSignals": self.input})

    # ========================================================================
    # SERIALIZATION (CBOR)
    # ========================================================================

    def serialize(self) -> bytes:
        """
        Serialize proof to bytes using CBOR.

        Returns:
            bytes: CBOR-encoded proof with a version field

        Raises:
            ProofGenerationError: If serialization fails
        """
        try:
            return cbor2.dumps(
                {"v": PROOF_VERSION, "p": self.proof, "i": list(self.input)}
            )
        except Exception as e:
            raise ProofGenerationError(f"Failed to serialize proof: {e}")

    @classmethod
    def deserialize(cls, data: bytes) -> "SnarkProof":
        """
        Deserialize proof from CBOR bytes.

        Raises:
            ValueError: If version is unsupported or data is invalid
            ProofGenerationError: If the bytes are not CBOR
        """
        try:
            obj = cbor2.loads(data)
        except Exception as e:
            raise ProofGenerationError(f"Failed to deserialize proof: {e}")

        if not isinstance(obj, dict) or "p" not in obj or "i" not in obj:
            raise ValueError("Invalid proof format: missing required fields")

        version = obj.get("v", PROOF_VERSION)
        if version != PROOF_VERSION:
            raise ValueError(
                f"Unsupported proof version: {version} (expected {PROOF_VERSION})"
            )

        signals = obj["i"]
        if not isinstance(signals, list) or len(signals) != PUBLIC_SIGNAL_COUNT:
            raise ValueError(
                f"Invalid proof format: expected {PUBLIC_SIGNAL_COUNT} public signals"
            )

        return cls(input=[str(signal) for signal in signals], proof=obj["p"])
