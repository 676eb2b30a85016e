"""Helpers to resolve the Hydra-S3 circuit artifacts (wasm + zkey)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Tuple

from ..config import CIRCUIT_NAME, CIRCUIT_WASM_FILENAME, CIRCUIT_ZKEY_FILENAME


@dataclass(frozen=True)
class CircuitArtifacts:
    """Witness generator and proving key of the circuit."""

    wasm_path: Path
    zkey_path: Path

    def check(self) -> "CircuitArtifacts":
        """Raise FileNotFoundError if an artifact is missing."""
        if not Path(self.wasm_path).is_file():
            raise FileNotFoundError(f"missing circuit wasm: {self.wasm_path}")
        if not Path(self.zkey_path).is_file():
            raise FileNotFoundError(f"missing proving key: {self.zkey_path}")
        return self


def resolve_circuit_artifacts(base_dir: str | Path) -> CircuitArtifacts:
    """
    Resolve the wasm/zkey pair under ``base_dir``.

    Checks, in order, ``<base_dir>/hydra-s3.{wasm,zkey}``,
    ``<base_dir>/hydra-s3/hydra-s3.{wasm,zkey}`` and the snarkjs build
    layout ``<base_dir>/hydra-s3_js/hydra-s3.wasm`` next to
    ``<base_dir>/hydra-s3.zkey``.
    """
    base_dir = Path(base_dir)
    candidates = [
        (base_dir / CIRCUIT_WASM_FILENAME, base_dir / CIRCUIT_ZKEY_FILENAME),
        (
            base_dir / CIRCUIT_NAME / CIRCUIT_WASM_FILENAME,
            base_dir / CIRCUIT_NAME / CIRCUIT_ZKEY_FILENAME,
        ),
        (
            base_dir / f"{CIRCUIT_NAME}_js" / CIRCUIT_WASM_FILENAME,
            base_dir / CIRCUIT_ZKEY_FILENAME,
        ),
    ]
    wasm_path, zkey_path = _first_existing_pair(
        candidates, f"{CIRCUIT_NAME} circuit artifacts"
    )
    return CircuitArtifacts(wasm_path=wasm_path, zkey_path=zkey_path)


def _first_existing_pair(
    candidates: Iterable[Tuple[Path, Path]],
    label: str,
) -> Tuple[Path, Path]:
    candidates = list(candidates)
    for wasm_path, zkey_path in candidates:
        if wasm_path.exists() and zkey_path.exists():
            return wasm_path, zkey_path
    checked = "; ".join(f"{wasm}, {zkey}" for wasm, zkey in candidates)
    raise FileNotFoundError(f"Unable to resolve {label}. Checked: {checked}")
