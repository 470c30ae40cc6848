"""Storage connection configuration schemas for objstore-tools."""

from typing import Literal, Union

from pydantic import BaseModel, Field, model_validator


class SwiftStorageConfig(BaseModel):
    """Configuration for OpenStack Swift object storage.

    Either authenticate against ``auth_url`` with ``username``/``api_key``, or
    supply a pre-authenticated ``storage_url`` and ``auth_token`` pair.
    """

    type: Literal["swift"] = "swift"
    auth_url: str | None = Field(default=None, description="Identity endpoint URL")
    username: str | None = Field(default=None, description="Swift username")
    api_key: str | None = Field(default=None, description="Password or API key")
    auth_version: str = Field(default="3", description="Identity API version")
    project_name: str | None = Field(default=None, description="Project name")
    project_id: str | None = Field(default=None, description="Project ID")
    user_domain_name: str | None = Field(default=None, description="User domain")
    project_domain_name: str | None = Field(
        default=None, description="Project domain"
    )
    region_name: str | None = Field(default=None, description="Region name")
    storage_url: str | None = Field(
        default=None, description="Pre-authenticated storage URL"
    )
    auth_token: str | None = Field(
        default=None, description="Pre-authenticated auth token"
    )

    @model_validator(mode="after")
    def _require_credentials(self) -> "SwiftStorageConfig":
        if self.storage_url and self.auth_token:
            return self
        if not all([self.auth_url, self.username, self.api_key]):
            raise ValueError(
                "Swift storage requires auth_url, username and api_key, "
                "or storage_url and auth_token"
            )
        return self


class S3StorageConfig(BaseModel):
    """Configuration for S3 object storage."""

    type: Literal["s3"] = "s3"
    access_key_id: str | None = Field(default=None, description="AWS access key ID")
    secret_access_key: str | None = Field(
        default=None, description="AWS secret access key"
    )
    session_token: str | None = Field(default=None, description="AWS session token")
    region_name: str | None = Field(default=None, description="AWS region")
    endpoint_url: str | None = Field(default=None, description="Custom S3 endpoint URL")
    aws_profile: str | None = Field(default=None, description="AWS profile name")


# Discriminated union for storage configurations
StorageConfig = Union[SwiftStorageConfig, S3StorageConfig]
