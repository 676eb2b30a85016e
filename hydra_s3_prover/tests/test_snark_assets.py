"""Tests for circuit artifact resolution."""

from __future__ import annotations

import pytest

from hydra_s3_prover.snark import assets
from hydra_s3_prover.snark.assets import CircuitArtifacts


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


def test_flat_layout(tmp_path) -> None:
    wasm = _touch(tmp_path / "hydra-s3.wasm")
    zkey = _touch(tmp_path / "hydra-s3.zkey")
    assert assets.resolve_circuit_artifacts(tmp_path) == CircuitArtifacts(wasm, zkey)


def test_circuit_directory_layout(tmp_path) -> None:
    wasm = _touch(tmp_path / "hydra-s3" / "hydra-s3.wasm")
    zkey = _touch(tmp_path / "hydra-s3" / "hydra-s3.zkey")
    assert assets.resolve_circuit_artifacts(str(tmp_path)) == CircuitArtifacts(
        wasm, zkey
    )


def test_snarkjs_build_layout(tmp_path) -> None:
    wasm = _touch(tmp_path / "hydra-s3_js" / "hydra-s3.wasm")
    zkey = _touch(tmp_path / "hydra-s3.zkey")
    assert assets.resolve_circuit_artifacts(tmp_path) == CircuitArtifacts(wasm, zkey)


def test_flat_layout_preferred(tmp_path) -> None:
    wasm = _touch(tmp_path / "hydra-s3.wasm")
    zkey = _touch(tmp_path / "hydra-s3.zkey")
    _touch(tmp_path / "hydra-s3" / "hydra-s3.wasm")
    _touch(tmp_path / "hydra-s3" / "hydra-s3.zkey")
    assert assets.resolve_circuit_artifacts(tmp_path).wasm_path == wasm
    assert assets.resolve_circuit_artifacts(tmp_path).zkey_path == zkey


def test_unresolved(tmp_path) -> None:
    _touch(tmp_path / "hydra-s3.wasm")
    with pytest.raises(FileNotFoundError, match="Unable to resolve"):
        assets.resolve_circuit_artifacts(tmp_path)


def test_check(tmp_path) -> None:
    artifacts = CircuitArtifacts(
        _touch(tmp_path / "c.wasm"), tmp_path / "missing.zkey"
    )
    with pytest.raises(FileNotFoundError, match="missing proving key"):
        artifacts.check()

    _touch(tmp_path / "missing.zkey")
    assert artifacts.check() is artifacts
