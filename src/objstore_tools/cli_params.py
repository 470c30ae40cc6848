"""Shared CLI parameter definitions.

Reusable ``Annotated`` option types for the CLI, so every command uses the
same option names, environment variables and help text.

Usage:
    Use the aliases directly in command signatures:

    @app.callback()
    def main(storage_url: SwiftStorageUrlOption = None):
        pass

Parameter Categories:
    - Swift parameters: Keystone credentials or a pre-authenticated endpoint,
      read from the standard ``OS_*`` environment variables by default
    - AWS parameters: For S3 connections
    - Command parameters: For specific command behaviors
"""

from enum import Enum
from typing import Annotated, Optional

import typer


class StorageType(str, Enum):
    swift = "swift"
    s3 = "s3"


StorageTypeOption = Annotated[
    StorageType,
    typer.Option(
        "--storage-type",
        "-t",
        help="Storage type: swift or s3",
        case_sensitive=False,
        envvar="OBJSTORE_TOOLS_STORAGE_TYPE",
    ),
]

# Swift options
SwiftAuthUrlOption = Annotated[
    Optional[str],
    typer.Option("--auth-url", envvar="OS_AUTH_URL", help="Swift identity URL"),
]
SwiftUsernameOption = Annotated[
    Optional[str],
    typer.Option("--os-username", envvar="OS_USERNAME", help="Swift username"),
]
SwiftPasswordOption = Annotated[
    Optional[str],
    typer.Option(
        "--os-password", envvar="OS_PASSWORD", help="Swift password or API key"
    ),
]
SwiftAuthVersionOption = Annotated[
    str,
    typer.Option(
        "--auth-version", envvar="OS_IDENTITY_API_VERSION", help="Identity version"
    ),
]
SwiftProjectNameOption = Annotated[
    Optional[str],
    typer.Option("--project-name", envvar="OS_PROJECT_NAME", help="Project name"),
]
SwiftProjectIdOption = Annotated[
    Optional[str],
    typer.Option("--project-id", envvar="OS_PROJECT_ID", help="Project ID"),
]
SwiftUserDomainOption = Annotated[
    Optional[str],
    typer.Option(
        "--user-domain-name", envvar="OS_USER_DOMAIN_NAME", help="User domain"
    ),
]
SwiftProjectDomainOption = Annotated[
    Optional[str],
    typer.Option(
        "--project-domain-name",
        envvar="OS_PROJECT_DOMAIN_NAME",
        help="Project domain",
    ),
]
SwiftRegionOption = Annotated[
    Optional[str],
    typer.Option("--os-region", envvar="OS_REGION_NAME", help="Swift region"),
]
SwiftStorageUrlOption = Annotated[
    Optional[str],
    typer.Option(
        "--storage-url", envvar="OS_STORAGE_URL", help="Pre-authenticated storage URL"
    ),
]
SwiftAuthTokenOption = Annotated[
    Optional[str],
    typer.Option(
        "--auth-token", envvar="OS_AUTH_TOKEN", help="Pre-authenticated auth token"
    ),
]

# S3 options
AwsAccessKeyOption = Annotated[
    Optional[str],
    typer.Option("--access-key-id", help="AWS access key ID (for S3)"),
]
AwsSecretKeyOption = Annotated[
    Optional[str],
    typer.Option("--secret-access-key", help="AWS secret access key (for S3)"),
]
AwsSessionTokenOption = Annotated[
    Optional[str],
    typer.Option("--session-token", help="AWS session token (for S3)"),
]
AwsRegionOption = Annotated[
    str, typer.Option("--region", help="AWS region name (for S3)")
]
AwsEndpointUrlOption = Annotated[
    Optional[str], typer.Option("--endpoint-url", help="Custom S3 endpoint URL")
]
AwsProfileOption = Annotated[
    Optional[str],
    typer.Option("--aws-profile", help="AWS CLI profile name (for S3)"),
]

# Command options
ContainerArgument = Annotated[str, typer.Argument(help="Container (bucket) name")]
ObjectArgument = Annotated[str, typer.Argument(help="Object name")]
ObjectNameOption = Annotated[
    Optional[str],
    typer.Option("--name", "-n", help="Upload under this object name"),
]
MetadataOption = Annotated[
    Optional[list[str]],
    typer.Option("--meta", "-m", help="Custom metadata as key=value (repeatable)"),
]
LargeObjectOption = Annotated[
    bool,
    typer.Option(
        "--large",
        "-l",
        help="Delete a large (SLO/DLO) object together with its segments",
    ),
]
