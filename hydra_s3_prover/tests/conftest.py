from __future__ import annotations

import pytest

from hydra_s3_prover.config import ACCOUNTS_TREE_HEIGHT, REGISTRY_TREE_HEIGHT
from hydra_s3_prover.commitment import PoseidonEddsaCommitmentVerifier
from hydra_s3_prover.field import to_hex_string
from hydra_s3_prover.identifiers import commitment
from hydra_s3_prover.merkle import KVMerkleTree
from hydra_s3_prover.prover import HydraS3Prover, ProverConfig
from hydra_s3_prover.snark.assets import CircuitArtifacts

from .doubles import CountingProvingEngine, FakeCommitmentMapper, field_hash

VAULT_SECRET = 0x1234567890ABCDEF
SOURCE_ADDRESS = 0xA76F290C490C70F2D816D286EFE47FD64A35800B
DESTINATION_ADDRESS = 0x0085B0C7E4A9C4E8F3A1C8A8A9C4E8F3A1C8A8A9
SOURCE_SECRET = 0xA1
DESTINATION_SECRET = 0xD1
SOURCE_VALUE = 4


@pytest.fixture
def hash_fn():
    return field_hash


@pytest.fixture
def mapper():
    return FakeCommitmentMapper()


@pytest.fixture
def commitment_verifier(mapper):
    return PoseidonEddsaCommitmentVerifier(field_hash, mapper.verify_signature)


@pytest.fixture
def accounts_tree():
    return KVMerkleTree(
        {
            "0xa76f290c490c70f2d816d286efe47fd64a35800b": SOURCE_VALUE,
            "0x0000000000000000000000000000000000000001": 9,
        },
        field_hash,
        ACCOUNTS_TREE_HEIGHT,
    )


@pytest.fixture
def registry_tree(accounts_tree):
    return KVMerkleTree(
        {to_hex_string(accounts_tree.root): 1, "0x02": 2},
        field_hash,
        REGISTRY_TREE_HEIGHT,
    )


@pytest.fixture
def source(mapper):
    receipt = mapper.commit(
        SOURCE_ADDRESS, commitment(field_hash, VAULT_SECRET, SOURCE_SECRET)
    )
    return {
        "identifier": hex(SOURCE_ADDRESS),
        "secret": SOURCE_SECRET,
        "commitmentReceipt": receipt,
        "verificationEnabled": True,
    }


@pytest.fixture
def destination(mapper):
    receipt = mapper.commit(
        DESTINATION_ADDRESS,
        commitment(field_hash, VAULT_SECRET, DESTINATION_SECRET),
    )
    return {
        "identifier": hex(DESTINATION_ADDRESS),
        "secret": DESTINATION_SECRET,
        "commitmentReceipt": receipt,
        "verificationEnabled": True,
    }


@pytest.fixture
def user_params(source, destination, accounts_tree, registry_tree):
    return {
        "vault": {"secret": VAULT_SECRET, "namespace": 123},
        "source": source,
        "destination": destination,
        "claim": {
            "value": SOURCE_VALUE,
            "comparator": 0,
            "accountsTree": accounts_tree,
            "registryTree": registry_tree,
        },
        "requestIdentifier": 123,
        "extraData": "0x2a",
    }


@pytest.fixture
def proving_engine():
    return CountingProvingEngine()


@pytest.fixture
def artifacts(tmp_path):
    wasm_path = tmp_path / "hydra-s3.wasm"
    zkey_path = tmp_path / "hydra-s3.zkey"
    wasm_path.write_bytes(b"\x00asm")
    zkey_path.write_bytes(b"zkey")
    return CircuitArtifacts(wasm_path=wasm_path, zkey_path=zkey_path)


@pytest.fixture
def prover(mapper, commitment_verifier, proving_engine, artifacts):
    return HydraS3Prover(
        mapper.pub_key,
        hash_fn=field_hash,
        commitment_verifier=commitment_verifier,
        proving_engine=proving_engine,
        config=ProverConfig(artifacts=artifacts),
    )
