"""
Tests for building configuration from the environment.
"""

from pathlib import Path

import pytest

from ragdocs.core.environment_manager import EnvironmentManager
from ragdocs.models.config_models import ConsumptionPolicy
from ragdocs.models.error_models import ConfigurationError

BASE_ENV = {
    "QDRANT_URL": "https://qdrant.example.com",
    "QDRANT_API_KEY": "qdrant-key",
}


class TestEnvironmentManager:
    """Environment-driven configuration."""

    def test_defaults(self):
        config = EnvironmentManager(BASE_ENV).build_config()

        assert config.vector_store.url == "https://qdrant.example.com"
        assert config.collection.name == "documentation"
        assert config.collection.vector_size == 1536
        assert config.collection.distance_metric == "Cosine"
        assert config.collection.replication_factor == 2
        assert config.queue.path == Path("queue.txt")
        assert config.queue.policy is ConsumptionPolicy.FULL
        assert config.embedding.timeout == 30.0
        assert config.embedding.max_retries == 3
        assert not config.embedding.enabled

    @pytest.mark.parametrize("missing", ["QDRANT_URL", "QDRANT_API_KEY"])
    def test_missing_vector_store_settings_are_fatal(self, missing):
        env = {k: v for k, v in BASE_ENV.items() if k != missing}

        with pytest.raises(ConfigurationError, match=missing):
            EnvironmentManager(env).build_config()

    def test_blank_value_counts_as_missing(self):
        env = dict(BASE_ENV, QDRANT_API_KEY="   ")

        with pytest.raises(ConfigurationError, match="QDRANT_API_KEY"):
            EnvironmentManager(env).build_config()

    def test_missing_openai_key_is_not_fatal(self):
        config = EnvironmentManager(BASE_ENV).build_config()

        assert config.embedding.api_key is None

    def test_overrides(self, tmp_path):
        env = dict(
            BASE_ENV,
            OPENAI_API_KEY="sk-test",
            RAGDOCS_COLLECTION="docs",
            RAGDOCS_QUEUE_PATH=str(tmp_path / "q.txt"),
            RAGDOCS_CONSUMPTION_POLICY="Batch",
            RAGDOCS_BATCH_SIZE="3",
        )

        config = EnvironmentManager(env).build_config()

        assert config.embedding.enabled
        assert config.collection.name == "docs"
        assert config.queue.path == tmp_path / "q.txt"
        assert config.queue.policy is ConsumptionPolicy.BATCH
        assert config.queue.batch_size == 3

    @pytest.mark.parametrize(
        "key,value",
        [
            ("RAGDOCS_CONSUMPTION_POLICY", "sometimes"),
            ("RAGDOCS_BATCH_SIZE", "zero"),
            ("RAGDOCS_BATCH_SIZE", "0"),
        ],
    )
    def test_invalid_queue_overrides(self, key, value):
        with pytest.raises(ConfigurationError):
            EnvironmentManager(dict(BASE_ENV, **{key: value})).build_config()

    def test_queue_config_needs_no_credentials(self, tmp_path):
        env = {"RAGDOCS_QUEUE_PATH": str(tmp_path / "q.txt")}

        queue = EnvironmentManager(env).build_queue_config()

        assert queue.path == tmp_path / "q.txt"
