"""Groth16 proving through the snarkjs command line."""

from __future__ import annotations

import json
import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Tuple

from ..config import DEFAULT_PROVER_TIMEOUT
from ..exceptions import ProvingEngineError

logger = logging.getLogger(__name__)


class SnarkjsProver:
    """
    Run ``snarkjs groth16 fullprove`` on a set of circuit inputs.

    Args:
        snarkjs_bin: Executable to run (``snarkjs`` on PATH by default, or
            for example ``npx snarkjs`` split into a list).
        timeout: Seconds before the proving process is killed.
    """

    def __init__(
        self,
        snarkjs_bin: str | List[str] = "snarkjs",
        timeout: int = DEFAULT_PROVER_TIMEOUT,
    ) -> None:
        self._command = [snarkjs_bin] if isinstance(snarkjs_bin, str) else list(snarkjs_bin)
        self._timeout = timeout

    def full_prove(
        self,
        inputs: Dict[str, Any],
        wasm_path: str | Path,
        zkey_path: str | Path,
    ) -> Tuple[Dict[str, Any], List[str]]:
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "input.json"
            proof_path = Path(tmp_dir) / "proof.json"
            public_path = Path(tmp_dir) / "public.json"
            input_path.write_text(json.dumps(encode_inputs(inputs)))

            command = self._command + [
                "groth16",
                "fullprove",
                str(input_path),
                str(wasm_path),
                str(zkey_path),
                str(proof_path),
                str(public_path),
            ]
            _run(command, self._timeout)

            try:
                proof = json.loads(proof_path.read_text())
                public_signals = json.loads(public_path.read_text())
            except (OSError, ValueError) as exc:
                raise ProvingEngineError(
                    f"snarkjs produced no readable proof: {exc}"
                ) from exc

        return proof, [str(signal) for signal in public_signals]


def encode_inputs(value):
    """
    Encode circuit inputs for snarkjs.

    Integers become decimal strings since JSON numbers lose precision past
    2**53 once parsed by JavaScript.
    """
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    if isinstance(value, dict):
        return {key: encode_inputs(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode_inputs(item) for item in value]
    raise TypeError(f"unsupported circuit input type: {type(value).__name__}")


def _run(command: List[str], timeout: int) -> None:
    logger.debug("running %s", " ".join(command))
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise ProvingEngineError(f"missing snarkjs binary: {command[0]}") from exc
    except subprocess.TimeoutExpired as exc:
        raise ProvingEngineError(
            f"snarkjs timed out after {timeout} seconds"
        ) from exc

    if result.returncode != 0:
        stderr = result.stderr.strip() or result.stdout.strip() or "unknown prover error"
        logger.warning("snarkjs exited with code %s", result.returncode)
        raise ProvingEngineError(f"prover failed: {stderr}", stderr=stderr)
