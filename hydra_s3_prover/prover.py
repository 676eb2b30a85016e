"""
WARNING: DRAFT - requires cryptographic review before production use.

Hydra-S3 proof orchestration.

The prover validates user parameters, assembles the circuit inputs and
hands them to a Groth16 proving engine. It holds no per-request state:
the commitment mapper public key, the collaborators and the circuit
artifacts are fixed at construction, so one instance can serve concurrent
requests.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import trio

from .exceptions import ConfigurationError, PublicSignalsMismatchError
from .field import normalize
from .inputs import (
    FormattedInputs,
    PrivateInputs,
    PublicInputs,
    format_user_params,
    generate_inputs,
)
from .interfaces import CommitmentVerifier, HashFunction, ProvingEngine
from .snark.assets import CircuitArtifacts
from .snark.proof import SnarkProof
from .validation import ValidatedParams, validate_user_params

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProverConfig:
    """
    Runtime configuration of a prover.

    Attributes:
        artifacts: Circuit wasm and proving key.
        check_artifacts: Verify the artifact files exist at construction.
        check_public_signals: Compare the engine's public signals with the
            assembled public inputs.
    """

    artifacts: CircuitArtifacts
    check_artifacts: bool = True
    check_public_signals: bool = True


class HydraS3Prover:
    """
    Build and prove Hydra-S3 statements.

    Args:
        commitment_mapper_pub_key: EdDSA public key ``(x, y)`` of the
            commitment mapper.
        hash_fn: Poseidon hash matching the circuit.
        commitment_verifier: Commitment receipt check.
        proving_engine: Groth16 engine exposing ``full_prove``.
        config: Circuit artifacts and runtime switches.

    Example:
        >>> prover = HydraS3Prover(
        ...     pub_key,
        ...     hash_fn=poseidon,
        ...     commitment_verifier=verifier,
        ...     proving_engine=SnarkjsProver(),
        ...     config=ProverConfig(resolve_circuit_artifacts("build")),
        ... )
        >>> snark_proof = prover.generate_snark_proof(params)
    """

    def __init__(
        self,
        commitment_mapper_pub_key: Tuple[int, int],
        *,
        hash_fn: HashFunction,
        commitment_verifier: CommitmentVerifier,
        proving_engine: ProvingEngine,
        config: ProverConfig,
    ) -> None:
        if len(commitment_mapper_pub_key) != 2:
            raise ConfigurationError("commitment_mapper_pub_key must be (x, y)")
        self.commitment_mapper_pub_key: Tuple[int, int] = tuple(
            normalize(coordinate, "commitment_mapper_pub_key")
            for coordinate in commitment_mapper_pub_key
        )
        self._hash_fn = hash_fn
        self._commitment_verifier = commitment_verifier
        self._proving_engine = proving_engine
        if config.check_artifacts:
            config.artifacts.check()
        self._config = config

    @property
    def config(self) -> ProverConfig:
        return self._config

    def format(self, params) -> FormattedInputs:
        """Normalize user parameters without validating them."""
        return format_user_params(params, self._hash_fn)

    def user_params_validation(self, params) -> ValidatedParams:
        """Run the validation pipeline; raise the first failure."""
        return validate_user_params(
            params,
            hash_fn=self._hash_fn,
            commitment_verifier=self._commitment_verifier,
            commitment_mapper_pub_key=self.commitment_mapper_pub_key,
        )

    def generate_inputs(self, params) -> Tuple[PrivateInputs, PublicInputs]:
        """Validate user parameters and build the circuit inputs."""
        validated = self.user_params_validation(params)
        return self._assemble(validated)

    def generate_snark_proof(self, params) -> SnarkProof:
        """
        Validate, assemble and prove.

        Raises:
            ValidationError: Parameters violate a circuit constraint; the
                proving engine is not called.
            ProofGenerationError: The proving engine failed or returned
                unexpected public signals.
        """
        validated = self.user_params_validation(params)
        private_inputs, public_inputs = self._assemble(validated)

        inputs = {
            **private_inputs.to_circuit_inputs(),
            **public_inputs.to_circuit_inputs(),
        }
        artifacts = self._config.artifacts
        logger.info(
            "proving hydra-s3 statement (request_identifier=%s)",
            public_inputs.request_identifier,
        )
        proof, public_signals = self._proving_engine.full_prove(
            inputs, str(artifacts.wasm_path), str(artifacts.zkey_path)
        )

        expected = public_inputs.to_signals()
        public_signals = [str(signal) for signal in public_signals]
        if self._config.check_public_signals and public_signals != expected:
            raise PublicSignalsMismatchError(expected, public_signals)

        logger.debug("proof generated with %d public signals", len(public_signals))
        return SnarkProof(input=public_signals, proof=proof)

    async def generate_snark_proof_async(self, params) -> SnarkProof:
        """
        Run ``generate_snark_proof`` in a worker thread.

        On cancellation the caller stops waiting and the worker's result is
        discarded; there is no partial proof state to clean up.
        """
        return await trio.to_thread.run_sync(
            functools.partial(self.generate_snark_proof, params),
            abandon_on_cancel=True,
        )

    def _assemble(
        self, validated: ValidatedParams
    ) -> Tuple[PrivateInputs, PublicInputs]:
        return generate_inputs(
            validated.formatted,
            validated.witness,
            self.commitment_mapper_pub_key,
        )


def build_prover(
    commitment_mapper_pub_key: Tuple[int, int],
    artifacts: CircuitArtifacts,
    *,
    hash_fn: HashFunction,
    commitment_verifier: CommitmentVerifier,
    proving_engine: Optional[ProvingEngine] = None,
) -> HydraS3Prover:
    """Create a prover backed by snarkjs unless another engine is given."""
    if proving_engine is None:
        from .snark.snarkjs import SnarkjsProver

        proving_engine = SnarkjsProver()
    return HydraS3Prover(
        commitment_mapper_pub_key,
        hash_fn=hash_fn,
        commitment_verifier=commitment_verifier,
        proving_engine=proving_engine,
        config=ProverConfig(artifacts=artifacts),
    )
