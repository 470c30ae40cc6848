"""Connection adapters for Swift and S3 object storage."""

from objstore_tools.core import get_logger
from objstore_tools.core.exceptions import ValidationError
from objstore_tools.schemas import S3StorageConfig, StorageConfig, SwiftStorageConfig

from .s3_client import S3Connection
from .swift_client import SwiftConnection

logger = get_logger(__name__)


def open_connection(config: StorageConfig) -> SwiftConnection | S3Connection:
    """Create the connection adapter matching a storage configuration."""
    logger.info("Opening storage connection", storage_type=config.type)

    if isinstance(config, SwiftStorageConfig):
        return SwiftConnection.from_config(config)
    elif isinstance(config, S3StorageConfig):
        return S3Connection(config)
    else:
        raise ValidationError(f"Unsupported storage configuration: {config!r}")


__all__ = ["S3Connection", "SwiftConnection", "open_connection"]
