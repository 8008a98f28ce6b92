"""
Environment variable management for credentials and runtime settings.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from pydantic import ValidationError

from ..models.config_models import (
    CollectionConfig,
    ConsumptionPolicy,
    EmbeddingConfig,
    QueueConfig,
    RagDocsConfig,
    VectorStoreConfig,
)
from ..models.error_models import ConfigurationError

logger = logging.getLogger(__name__)


class EnvironmentManager:
    """Builds the runtime configuration from environment variables."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self.environ = environ if environ is not None else os.environ
        self.required_env_vars = ["QDRANT_URL", "QDRANT_API_KEY"]

    def _get(self, name: str) -> Optional[str]:
        value = self.environ.get(name)
        if value is None or not value.strip():
            return None
        return value.strip()

    def validate_required_environment_vars(self) -> Dict[str, str]:
        """Validate that all required environment variables are set."""

        missing_vars = []
        env_values = {}

        for var_name in self.required_env_vars:
            value = self._get(var_name)
            if not value:
                missing_vars.append(var_name)
            else:
                env_values[var_name] = value

        if missing_vars:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing_vars)}\n"
                f"Please set these variables before running the application.\n\n"
                f"Example:\n"
                f"  export QDRANT_URL='https://your-cluster.qdrant.io'\n"
                f"  export QDRANT_API_KEY='your_api_key'"
            )

        logger.debug(f"Validated {len(env_values)} required environment variables")
        return env_values

    def get_optional_config_overrides(self) -> Dict[str, str]:
        """Get optional configuration overrides from environment variables."""

        optional_vars = {
            "RAGDOCS_COLLECTION": self._get("RAGDOCS_COLLECTION"),
            "RAGDOCS_QUEUE_PATH": self._get("RAGDOCS_QUEUE_PATH"),
            "RAGDOCS_CONSUMPTION_POLICY": self._get("RAGDOCS_CONSUMPTION_POLICY"),
            "RAGDOCS_BATCH_SIZE": self._get("RAGDOCS_BATCH_SIZE"),
        }

        return {k: v for k, v in optional_vars.items() if v is not None}

    def build_queue_config(self) -> QueueConfig:
        """
        Build only the queue settings; needs no credentials.

        Raises:
            ConfigurationError: If a queue override is invalid
        """
        overrides = self.get_optional_config_overrides()
        queue_kwargs: Dict[str, object] = {}

        try:
            if "RAGDOCS_QUEUE_PATH" in overrides:
                queue_kwargs["path"] = Path(overrides["RAGDOCS_QUEUE_PATH"]).expanduser()
            if "RAGDOCS_CONSUMPTION_POLICY" in overrides:
                queue_kwargs["policy"] = ConsumptionPolicy(
                    overrides["RAGDOCS_CONSUMPTION_POLICY"].lower()
                )
            if "RAGDOCS_BATCH_SIZE" in overrides:
                queue_kwargs["batch_size"] = int(overrides["RAGDOCS_BATCH_SIZE"])
            return QueueConfig(**queue_kwargs)
        except ValueError as e:
            raise ConfigurationError(f"Invalid queue configuration: {e}") from e

    def build_config(self) -> RagDocsConfig:
        """
        Build the complete configuration.

        Missing Qdrant settings are fatal. A missing OpenAI key only disables
        embedding; the error surfaces on the first embedding request.

        Raises:
            ConfigurationError: If required settings are missing or invalid
        """
        credentials = self.validate_required_environment_vars()
        overrides = self.get_optional_config_overrides()

        openai_key = self._get("OPENAI_API_KEY")
        if not openai_key:
            logger.warning("OPENAI_API_KEY not set; embedding will be unavailable")

        queue = self.build_queue_config()

        try:
            collection_kwargs: Dict[str, object] = {}
            if "RAGDOCS_COLLECTION" in overrides:
                collection_kwargs["name"] = overrides["RAGDOCS_COLLECTION"]

            config = RagDocsConfig(
                vector_store=VectorStoreConfig(
                    url=credentials["QDRANT_URL"],
                    api_key=credentials["QDRANT_API_KEY"],
                ),
                collection=CollectionConfig(**collection_kwargs),
                embedding=EmbeddingConfig(api_key=openai_key),
                queue=queue,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        logger.debug(
            f"Configuration loaded: collection={config.collection.name}, "
            f"queue={config.queue.path}, policy={config.queue.policy.value}"
        )
        return config
