"""
Unit tests for configuration module.

Tests circuit parameters that must match the deployed verifier.
"""

from hydra_s3_prover import config


class TestFieldParameters:
    def test_snark_field(self):
        """Test the BN254 scalar field modulus."""
        assert config.SNARK_FIELD == (
            21888242871839275222246405745257275088548364400416034343698204186575808495617
        )
        assert config.SNARK_FIELD.bit_length() == config.SNARK_FIELD_BITS


class TestTreeParameters:
    def test_heights(self):
        assert config.ACCOUNTS_TREE_HEIGHT == 20
        assert config.REGISTRY_TREE_HEIGHT == 20

    def test_address_width(self):
        assert config.ADDRESS_BYTE_LENGTH == 20


class TestPublicSignals:
    def test_count(self):
        assert config.PUBLIC_SIGNAL_COUNT == 14
        assert len(config.PUBLIC_SIGNAL_ORDER) == config.PUBLIC_SIGNAL_COUNT

    def test_verifier_order_edges(self):
        """Test the first and last signals the verifier reads."""
        assert config.PUBLIC_SIGNAL_ORDER[0] == "destinationIdentifier"
        assert config.PUBLIC_SIGNAL_ORDER[-1] == "destinationVerificationEnabled"


class TestConfigValidation:
    def test_validate_config(self):
        assert config.validate_config() is True

    def test_serialization_format(self):
        assert config.SERIALIZATION_FORMAT == "CBOR"
        assert config.PROOF_VERSION == 1
