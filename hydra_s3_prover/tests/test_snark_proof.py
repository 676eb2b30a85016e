"""Unit tests for the Groth16 proof wrapper."""

import json

import cbor2
import pytest

from hydra_s3_prover.config import PROOF_VERSION, PUBLIC_SIGNAL_COUNT
from hydra_s3_prover.exceptions import ProofGenerationError
from hydra_s3_prover.snark.proof import SnarkProof

PROOF = {
    "pi_a": ["1", "2", "1"],
    "pi_b": [["3", "4"], ["5", "6"], ["1", "0"]],
    "pi_c": ["7", "8", "1"],
    "protocol": "groth16",
    "curve": "bn128",
}
SIGNALS = [str(value) for value in range(100, 100 + PUBLIC_SIGNAL_COUNT)]


def _word(value: int) -> str:
    return format(value, "x").rjust(64, "0")


class TestSnarkProof:
    def test_points(self):
        snark_proof = SnarkProof(input=SIGNALS, proof=PROOF)
        assert snark_proof.a == [1, 2]
        assert snark_proof.b == [[4, 3], [6, 5]]
        assert snark_proof.c == [7, 8]
        assert snark_proof.public_signals == list(range(100, 100 + PUBLIC_SIGNAL_COUNT))

    def test_to_bytes_layout(self):
        encoded = SnarkProof(input=SIGNALS, proof=PROOF).to_bytes()

        assert encoded.startswith("0x")
        body = encoded[2:]
        assert len(body) == 64 * (8 + PUBLIC_SIGNAL_COUNT)
        words = [body[i : i + 64] for i in range(0, len(body), 64)]
        assert words[:8] == [_word(v) for v in (1, 2, 4, 3, 6, 5, 7, 8)]
        # Public signals start after a, b and c.
        assert body[8 * 64 :] == "".join(_word(int(s)) for s in SIGNALS)

    def test_to_dict(self):
        as_dict = SnarkProof(input=SIGNALS, proof=PROOF).to_dict()
        assert as_dict["a"] == ["1", "2"]
        assert as_dict["b"] == [["4", "3"], ["6", "5"]]
        assert as_dict["input"] == SIGNALS

    def test_to_json(self):
        decoded = json.loads(SnarkProof(input=SIGNALS, proof=PROOF).to_json())
        assert decoded == {"proof": PROOF, "publicSignals": SIGNALS}


class TestSerialization:
    def test_cbor_envelope(self):
        data = SnarkProof(input=SIGNALS, proof=PROOF).serialize()
        assert cbor2.loads(data) == {"v": PROOF_VERSION, "p": PROOF, "i": SIGNALS}

    def test_deserialize(self):
        data = SnarkProof(input=SIGNALS, proof=PROOF).serialize()
        restored = SnarkProof.deserialize(data)
        assert restored == SnarkProof(input=SIGNALS, proof=PROOF)

    def test_rejects_unknown_version(self):
        data = cbor2.dumps({"v": PROOF_VERSION + 1, "p": PROOF, "i": SIGNALS})
        with pytest.raises(ValueError, match="Unsupported proof version"):
            SnarkProof.deserialize(data)

    def test_rejects_missing_fields(self):
        with pytest.raises(ValueError, match="missing required fields"):
            SnarkProof.deserialize(cbor2.dumps({"v": PROOF_VERSION}))

    def test_rejects_wrong_signal_count(self):
        data = cbor2.dumps({"v": PROOF_VERSION, "p": PROOF, "i": SIGNALS[:-1]})
        with pytest.raises(ValueError, match="public signals"):
            SnarkProof.deserialize(data)

    def test_rejects_garbage(self):
        with pytest.raises(ProofGenerationError):
            SnarkProof.deserialize(b"\xff\xff\xff")
