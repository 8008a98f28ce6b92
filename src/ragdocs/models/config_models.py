"""
Configuration models for queue processing, embeddings and vector storage.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMBEDDING_DIMENSION = 1536


class ConsumptionPolicy(str, Enum):
    """How much of the queue a single drain consumes."""

    FULL = "full"
    BATCH = "batch"
    SINGLE = "single"


class CollectionConfig(BaseModel):
    """Schema of the destination vector collection."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="documentation", description="Collection name")
    vector_size: int = Field(default=EMBEDDING_DIMENSION, description="Vector dimension size")
    distance_metric: str = Field(default="Cosine", description="Distance metric")
    segment_count: int = Field(default=2, ge=1, description="Default segment number")
    memmap_threshold: int = Field(default=20000, ge=0, description="Memmap threshold (KB)")
    replication_factor: int = Field(default=2, ge=1, description="Replication factor")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Collection name must not be empty")
        return v.strip()


class EmbeddingConfig(BaseModel):
    """Configuration for the OpenAI embeddings client."""

    api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    model: str = Field(default="text-embedding-ada-002", description="Embedding model")
    base_url: str = Field(default="https://api.openai.com/v1", description="API base URL")
    timeout: float = Field(default=30.0, gt=0, description="Per-attempt timeout in seconds")
    max_retries: int = Field(default=3, ge=1, description="Maximum attempts per request")
    retry_delay: float = Field(default=1.0, ge=0, description="Pause between attempts")
    dimension: int = Field(default=EMBEDDING_DIMENSION, description="Expected vector size")

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)


class QueueConfig(BaseModel):
    """Location of the queue file and how it is consumed."""

    path: Path = Field(default=Path("queue.txt"), description="Queue file path")
    policy: ConsumptionPolicy = Field(
        default=ConsumptionPolicy.FULL, description="Consumption policy"
    )
    batch_size: int = Field(default=5, ge=1, description="Entries per drain in batch mode")


class VectorStoreConfig(BaseModel):
    """Connection settings for Qdrant."""

    url: str = Field(..., description="Qdrant server URL")
    api_key: str = Field(..., description="Qdrant API key")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    @field_validator("url", "api_key")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Value must not be empty")
        return v.strip()


class RagDocsConfig(BaseModel):
    """Complete runtime configuration."""

    vector_store: VectorStoreConfig
    collection: CollectionConfig = Field(default_factory=CollectionConfig)
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    queue: QueueConfig = Field(default_factory=QueueConfig)
    chunk_size: int = Field(default=1500, ge=100, description="Characters per chunk")
