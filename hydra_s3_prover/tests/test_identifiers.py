"""Unit tests for the identifier derivations."""

import pytest

from hydra_s3_prover.accounts import CommittedAccount, VaultAccount
from hydra_s3_prover.identifiers import (
    commitment,
    proof_identifier,
    secret_hash,
    vault_identifier,
)

from .doubles import field_hash


def test_vault_identifier():
    assert vault_identifier(field_hash, 7, 123) == field_hash([7, 123])


def test_vault_identifier_without_namespace_is_zero():
    assert vault_identifier(field_hash, 7, 0) == 0


def test_secret_hash_of_committed_account():
    account = CommittedAccount(identifier=1, secret=9, commitment_receipt=(0, 0, 0))
    assert secret_hash(field_hash, account) == field_hash([9, 1])


def test_secret_hash_of_vault_account():
    account = VaultAccount(identifier=1, secret=9, namespace=5)
    assert secret_hash(field_hash, account) == field_hash([9, 5, 1])


def test_secret_hash_without_source():
    assert secret_hash(field_hash, None) == field_hash([0, 1])


def test_secret_hash_rejects_unknown_variant():
    with pytest.raises(TypeError):
        secret_hash(field_hash, object())


def test_proof_identifier():
    assert proof_identifier(field_hash, 11, 123) == field_hash([11, 123])


def test_proof_identifier_without_request_is_zero():
    assert proof_identifier(field_hash, 11, 0) == 0


def test_proof_identifier_is_stable_across_destinations():
    # Same source and request, so the nullifier must not change.
    account = VaultAccount(identifier=1, secret=9, namespace=5)
    first = proof_identifier(field_hash, secret_hash(field_hash, account), 42)
    second = proof_identifier(field_hash, secret_hash(field_hash, account), 42)
    assert first == second
    assert first != proof_identifier(field_hash, secret_hash(field_hash, account), 43)


def test_commitment():
    assert commitment(field_hash, 1, 2) == field_hash([1, 2])
    assert commitment(field_hash, 1, 2) != commitment(field_hash, 2, 1)
