"""Tests for the snarkjs adapter with the subprocess replaced."""

import json
import subprocess
from pathlib import Path

import pytest

from hydra_s3_prover.exceptions import ProvingEngineError
from hydra_s3_prover.snark import snarkjs
from hydra_s3_prover.snark.snarkjs import SnarkjsProver, encode_inputs


def test_encode_inputs():
    encoded = encode_inputs(
        {"a": 2**200, "b": [1, [2, 3]], "c": (4, 5), "flag": True}
    )
    assert encoded == {
        "a": str(2**200),
        "b": ["1", ["2", "3"]],
        "c": ["4", "5"],
        "flag": "1",
    }


def test_encode_inputs_rejects_floats():
    with pytest.raises(TypeError):
        encode_inputs({"a": 1.5})


class _FakeRun:
    def __init__(self, returncode=0, stderr="", write_outputs=True):
        self.returncode = returncode
        self.stderr = stderr
        self.write_outputs = write_outputs
        self.commands = []
        self.inputs = None

    def __call__(self, command, **kwargs):
        self.commands.append(command)
        input_path, proof_path, public_path = command[-5], command[-2], command[-1]
        self.inputs = json.loads(Path(input_path).read_text())
        if self.write_outputs:
            Path(proof_path).write_text(json.dumps({"pi_a": ["1", "2", "1"]}))
            Path(public_path).write_text(json.dumps(["7", "8"]))
        return subprocess.CompletedProcess(
            command, self.returncode, stdout="", stderr=self.stderr
        )


def test_full_prove(monkeypatch):
    fake_run = _FakeRun()
    monkeypatch.setattr(snarkjs.subprocess, "run", fake_run)

    proof, public_signals = SnarkjsProver().full_prove(
        {"x": 2**130, "y": [1, 2]}, "c.wasm", "c.zkey"
    )

    assert proof == {"pi_a": ["1", "2", "1"]}
    assert public_signals == ["7", "8"]
    assert fake_run.inputs == {"x": str(2**130), "y": ["1", "2"]}
    command = fake_run.commands[0]
    assert command[:3] == ["snarkjs", "groth16", "fullprove"]
    assert command[4:6] == ["c.wasm", "c.zkey"]


def test_custom_command(monkeypatch):
    fake_run = _FakeRun()
    monkeypatch.setattr(snarkjs.subprocess, "run", fake_run)

    SnarkjsProver(["npx", "snarkjs"]).full_prove({}, "c.wasm", "c.zkey")
    assert fake_run.commands[0][:4] == ["npx", "snarkjs", "groth16", "fullprove"]


def test_nonzero_exit(monkeypatch):
    monkeypatch.setattr(
        snarkjs.subprocess, "run", _FakeRun(returncode=1, stderr="bad witness")
    )
    with pytest.raises(ProvingEngineError, match="bad witness") as excinfo:
        SnarkjsProver().full_prove({}, "c.wasm", "c.zkey")
    assert excinfo.value.stderr == "bad witness"


def test_missing_outputs(monkeypatch):
    monkeypatch.setattr(snarkjs.subprocess, "run", _FakeRun(write_outputs=False))
    with pytest.raises(ProvingEngineError, match="no readable proof"):
        SnarkjsProver().full_prove({}, "c.wasm", "c.zkey")


def test_missing_binary(monkeypatch):
    def _raise(command, **kwargs):
        raise FileNotFoundError(command[0])

    monkeypatch.setattr(snarkjs.subprocess, "run", _raise)
    with pytest.raises(ProvingEngineError, match="missing snarkjs binary"):
        SnarkjsProver("not-snarkjs").full_prove({}, "c.wasm", "c.zkey")


def test_timeout(monkeypatch):
    def _raise(command, **kwargs):
        raise subprocess.TimeoutExpired(command, kwargs["timeout"])

    monkeypatch.setattr(snarkjs.subprocess, "run", _raise)
    with pytest.raises(ProvingEngineError, match="timed out after 3 seconds"):
        SnarkjsProver(timeout=3).full_prove({}, "c.wasm", "c.zkey")
