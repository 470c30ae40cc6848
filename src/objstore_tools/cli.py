"""Command-line interface for objstore-tools.

Connection options are given once, before the command group:

    objstore-tools --storage-type swift --storage-url URL --auth-token TOKEN \
        object put reports ./report.csv

Commands:
    - object info/list/put/copy/get/rename/delete: Object operations
    - run: Run a positional object command (``object <subcommand> ...``)

Swift credentials default to the standard ``OS_*`` environment variables.
"""

from functools import partial
from typing import Annotated, Optional

import typer

from . import __version__
from .cli_params import (
    AwsAccessKeyOption,
    AwsEndpointUrlOption,
    AwsProfileOption,
    AwsRegionOption,
    AwsSecretKeyOption,
    AwsSessionTokenOption,
    ContainerArgument,
    LargeObjectOption,
    MetadataOption,
    ObjectArgument,
    ObjectNameOption,
    StorageType,
    StorageTypeOption,
    SwiftAuthTokenOption,
    SwiftAuthUrlOption,
    SwiftAuthVersionOption,
    SwiftPasswordOption,
    SwiftProjectDomainOption,
    SwiftProjectIdOption,
    SwiftProjectNameOption,
    SwiftRegionOption,
    SwiftStorageUrlOption,
    SwiftUserDomainOption,
    SwiftUsernameOption,
)
from .core.exceptions import InvalidArguments
from .objectstorage import execute_request, open_connection, parse_command_args
from .objectstorage.commands import (
    CopyObjectRequest,
    DeleteObjectRequest,
    GetObjectRequest,
    ListObjectsRequest,
    ObjectInfoRequest,
    PutObjectRequest,
    RenameObjectRequest,
)
from .schemas import S3StorageConfig, SwiftStorageConfig

app = typer.Typer(
    name="objstore-tools",
    help="Object operations for Swift and S3-compatible object storage.",
    no_args_is_help=True,
)
object_app = typer.Typer(
    help="Get info, list, upload, copy, download, rename and delete objects.",
    no_args_is_help=True,
)
app.add_typer(object_app, name="object")


class ConsoleStageReporter:
    """Echoes the current stage to stderr."""

    def set_current_stage(self, stage: str) -> None:
        typer.echo(f"{stage}...", err=True)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"objstore-tools {__version__}")
        raise typer.Exit()


def _create_storage_config(
    storage_type: StorageType,
    auth_url: Optional[str] = None,
    username: Optional[str] = None,
    api_key: Optional[str] = None,
    auth_version: str = "3",
    project_name: Optional[str] = None,
    project_id: Optional[str] = None,
    user_domain_name: Optional[str] = None,
    project_domain_name: Optional[str] = None,
    os_region_name: Optional[str] = None,
    storage_url: Optional[str] = None,
    auth_token: Optional[str] = None,
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    session_token: Optional[str] = None,
    region_name: Optional[str] = None,
    endpoint_url: Optional[str] = None,
    aws_profile: Optional[str] = None,
):
    """Create appropriate storage configuration based on storage type."""
    if storage_type == StorageType.swift:
        return SwiftStorageConfig(
            auth_url=auth_url,
            username=username,
            api_key=api_key,
            auth_version=auth_version,
            project_name=project_name,
            project_id=project_id,
            user_domain_name=user_domain_name,
            project_domain_name=project_domain_name,
            region_name=os_region_name,
            storage_url=storage_url,
            auth_token=auth_token,
        )

    elif storage_type == StorageType.s3:
        return S3StorageConfig(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )

    else:
        raise ValueError(
            f"Invalid storage type: {storage_type}. Must be 'swift' or 's3'"
        )


@app.callback()
def main(
    ctx: typer.Context,
    storage_type: StorageTypeOption = StorageType.swift,
    # Swift options
    auth_url: SwiftAuthUrlOption = None,
    username: SwiftUsernameOption = None,
    api_key: SwiftPasswordOption = None,
    auth_version: SwiftAuthVersionOption = "3",
    project_name: SwiftProjectNameOption = None,
    project_id: SwiftProjectIdOption = None,
    user_domain_name: SwiftUserDomainOption = None,
    project_domain_name: SwiftProjectDomainOption = None,
    os_region_name: SwiftRegionOption = None,
    storage_url: SwiftStorageUrlOption = None,
    auth_token: SwiftAuthTokenOption = None,
    # S3 options
    access_key_id: AwsAccessKeyOption = None,
    secret_access_key: AwsSecretKeyOption = None,
    session_token: AwsSessionTokenOption = None,
    region_name: AwsRegionOption = "us-east-1",
    endpoint_url: AwsEndpointUrlOption = None,
    aws_profile: AwsProfileOption = None,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version.",
        ),
    ] = None,
) -> None:
    """
    objstore-tools: object operations for Swift and S3.

    Connection options apply to every command. The storage configuration is
    validated when a command runs.
    """
    ctx.obj = partial(
        _create_storage_config,
        storage_type=storage_type,
        auth_url=auth_url,
        username=username,
        api_key=api_key,
        auth_version=auth_version,
        project_name=project_name,
        project_id=project_id,
        user_domain_name=user_domain_name,
        project_domain_name=project_domain_name,
        os_region_name=os_region_name,
        storage_url=storage_url,
        auth_token=auth_token,
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
    )


def _parse_metadata(pairs: Optional[list[str]]) -> dict[str, str]:
    metadata = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise InvalidArguments(f"Metadata must be given as key=value: {pair!r}")
        metadata[key] = value
    return metadata


def _execute(ctx: typer.Context, build_request) -> None:
    """Build the request, open a connection and print the command result."""
    try:
        request = build_request()
        connection = open_connection(ctx.obj())
        result = execute_request(connection, request, ConsoleStageReporter())
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(result, nl=False)


@object_app.command("info")
def info_cmd(
    ctx: typer.Context, container: ContainerArgument, object_name: ObjectArgument
) -> None:
    """Show metadata and headers of an object."""
    _execute(
        ctx,
        lambda: ObjectInfoRequest(container=container, object_name=object_name),
    )


@object_app.command("list")
def list_cmd(ctx: typer.Context, container: ContainerArgument) -> None:
    """List the names of all objects in a container."""
    _execute(ctx, lambda: ListObjectsRequest(container=container))


@object_app.command("put")
def put_cmd(
    ctx: typer.Context,
    container: ContainerArgument,
    path: Annotated[str, typer.Argument(help="Local file to upload")],
    name: ObjectNameOption = None,
    meta: MetadataOption = None,
) -> None:
    """
    Upload a file (up to 5 GB) as a single object.

    Examples:
        objstore-tools object put reports ./report.csv
        objstore-tools object put reports ./report.csv -n 2024/report.csv
    """
    _execute(
        ctx,
        lambda: PutObjectRequest(
            container=container,
            source_path=path,
            object_name=name,
            metadata=_parse_metadata(meta),
        ),
    )


@object_app.command("copy")
def copy_cmd(
    ctx: typer.Context,
    container: ContainerArgument,
    object_name: ObjectArgument,
    destination_container: Annotated[
        str, typer.Argument(help="Container to copy the object into")
    ],
) -> None:
    """Copy an object to another container under the same name."""
    _execute(
        ctx,
        lambda: CopyObjectRequest(
            container=container,
            object_name=object_name,
            destination_container=destination_container,
        ),
    )


@object_app.command("get")
def get_cmd(
    ctx: typer.Context,
    container: ContainerArgument,
    object_name: ObjectArgument,
    destination: Annotated[str, typer.Argument(help="Local destination path")],
) -> None:
    """Download an object to a local file."""
    _execute(
        ctx,
        lambda: GetObjectRequest(
            container=container,
            object_name=object_name,
            destination_path=destination,
        ),
    )


@object_app.command("rename")
def rename_cmd(
    ctx: typer.Context,
    container: ContainerArgument,
    object_name: ObjectArgument,
    new_name: Annotated[str, typer.Argument(help="New object name")],
) -> None:
    """
    Rename an object within its container.

    The object is copied to the new name and the original is deleted. If the
    delete fails, both objects remain and the command exits with an error.
    """
    _execute(
        ctx,
        lambda: RenameObjectRequest(
            container=container, object_name=object_name, new_name=new_name
        ),
    )


@object_app.command("delete")
def delete_cmd(
    ctx: typer.Context,
    container: ContainerArgument,
    object_name: ObjectArgument,
    large: LargeObjectOption = False,
) -> None:
    """
    Delete an object.

    Use --large for SLO/DLO manifest objects so their segments are deleted
    too (Swift only).
    """
    _execute(
        ctx,
        lambda: DeleteObjectRequest(
            container=container, object_name=object_name, large=large
        ),
    )


@app.command(
    "run",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def run_cmd(
    ctx: typer.Context,
    args: Annotated[
        list[str], typer.Argument(help="object <subcommand> <container> [...]")
    ],
) -> None:
    """
    Run a positional object command.

    Examples:
        objstore-tools run object put reports ./report.csv -n renamed.csv
        objstore-tools run object delete videos movie.mp4 -l
    """
    _execute(ctx, lambda: parse_command_args(list(args) + list(ctx.args)))


if __name__ == "__main__":
    app()
