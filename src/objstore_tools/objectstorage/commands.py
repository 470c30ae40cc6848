"""Object commands: argument parsing, dispatch and result formatting.

A command arrives either as a positional argument list shaped like::

    object <subcommand> <container> [<object>] [<extra>...]

or as one of the request models below. Positional lists are validated into a
request model first, so a short or malformed list raises ``InvalidArguments``
instead of failing on an index lookup.

Recognised extras:
    put:    ``-n <name>`` uploads under a different object name
    delete: ``-l`` deletes a large (manifest) object and its segments
"""

from typing import Annotated, Callable, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from objstore_tools.core import get_logger
from objstore_tools.core.exceptions import InvalidArguments
from objstore_tools.objectstorage import object_operations as ops
from objstore_tools.objectstorage.connection import (
    ObjectInfo,
    ObjectStorageConnection,
    StageReporter,
)

logger = get_logger(__name__)

COMMAND_NAME = "object"

NonEmptyStr = Annotated[str, Field(min_length=1)]


class _Request(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    container: NonEmptyStr


class ObjectInfoRequest(_Request):
    command: Literal["info"] = "info"
    object_name: NonEmptyStr


class ListObjectsRequest(_Request):
    command: Literal["list"] = "list"


class PutObjectRequest(_Request):
    command: Literal["put"] = "put"
    source_path: NonEmptyStr
    object_name: Optional[NonEmptyStr] = None
    metadata: dict[str, str] = Field(default_factory=dict)


class CopyObjectRequest(_Request):
    command: Literal["copy"] = "copy"
    object_name: NonEmptyStr
    destination_container: NonEmptyStr


class GetObjectRequest(_Request):
    command: Literal["get"] = "get"
    object_name: NonEmptyStr
    destination_path: NonEmptyStr


class RenameObjectRequest(_Request):
    command: Literal["rename"] = "rename"
    object_name: NonEmptyStr
    new_name: NonEmptyStr


class DeleteObjectRequest(_Request):
    command: Literal["delete"] = "delete"
    object_name: NonEmptyStr
    large: bool = False


ObjectRequest = Union[
    ObjectInfoRequest,
    ListObjectsRequest,
    PutObjectRequest,
    CopyObjectRequest,
    GetObjectRequest,
    RenameObjectRequest,
    DeleteObjectRequest,
]

# Positional field names following <container>, per sub-command
_POSITIONAL_FIELDS: dict[str, tuple[type[_Request], tuple[str, ...]]] = {
    "info": (ObjectInfoRequest, ("object_name",)),
    "list": (ListObjectsRequest, ()),
    "put": (PutObjectRequest, ("source_path",)),
    "copy": (CopyObjectRequest, ("object_name", "destination_container")),
    "get": (GetObjectRequest, ("object_name", "destination_path")),
    "rename": (RenameObjectRequest, ("object_name", "new_name")),
    "delete": (DeleteObjectRequest, ("object_name",)),
}

USAGE = {
    "info": "object info <container> <object>",
    "list": "object list <container>",
    "put": "object put <container> <path> [-n <name>]",
    "copy": "object copy <container> <object> <destination-container>",
    "get": "object get <container> <object> <destination-path>",
    "rename": "object rename <container> <object> <new-name>",
    "delete": "object delete <container> <object> [-l]",
}


def _parse_extras(subcommand: str, extras: Sequence[str]) -> dict[str, object]:
    if not extras:
        return {}
    if subcommand == "put" and len(extras) == 2 and extras[0] == "-n":
        return {"object_name": extras[1]}
    if subcommand == "delete" and list(extras) == ["-l"]:
        return {"large": True}
    raise InvalidArguments(
        f"Unexpected arguments {' '.join(extras)!r}. "
        f"Usage: {USAGE[subcommand]}"
    )


def parse_command_args(args: Sequence[str]) -> ObjectRequest:
    """Validate a positional argument list into a request model.

    Raises:
        InvalidArguments: If the list is too short, names an unknown command or
            carries unexpected extras
    """
    if len(args) < 2 or args[0] != COMMAND_NAME:
        raise InvalidArguments(
            f"Expected '{COMMAND_NAME} <subcommand> ...', got: {' '.join(args)!r}"
        )

    subcommand = args[1]
    if subcommand not in _POSITIONAL_FIELDS:
        raise InvalidArguments(
            f"Unknown subcommand {subcommand!r}. "
            f"Must be one of: {', '.join(_POSITIONAL_FIELDS)}"
        )

    model, names = _POSITIONAL_FIELDS[subcommand]
    positional = args[2 : 3 + len(names)]
    if len(positional) < 1 + len(names):
        raise InvalidArguments(
            f"Missing arguments for '{subcommand}'. Usage: {USAGE[subcommand]}"
        )

    fields: dict[str, object] = dict(zip(("container",) + names, positional))
    fields.update(_parse_extras(subcommand, args[3 + len(names) :]))

    try:
        return model(**fields)
    except PydanticValidationError as e:
        raise InvalidArguments(
            f"Invalid arguments for '{subcommand}': {e}. Usage: {USAGE[subcommand]}"
        ) from e


def _ok(body: str) -> str:
    return f"OK\n\n{body}\n"


def format_object_info(info: ObjectInfo) -> str:
    """Render object metadata as the multi-line info block."""
    lines = [
        f"Name: {info.name}",
        f"Content type: {info.content_type}",
        f"Size: {info.size} bytes",
        f"Last modified: {info.last_modified}",
        f"Hash: {info.hash}",
        f"Is pseudo dir: {str(info.pseudo_directory).lower()}",
        f"Subdirectory: {info.subdir}",
        "Headers:",
    ]
    lines.extend(
        f"\tName: {name} Value: {value}" for name, value in info.headers.items()
    )
    return _ok("\n".join(lines))


def _info(
    conn: ObjectStorageConnection,
    request: ObjectInfoRequest,
    reporter: StageReporter,
) -> str:
    info = ops.get_object_info(conn, request.container, request.object_name, reporter)
    return format_object_info(info)


def _list(
    conn: ObjectStorageConnection,
    request: ListObjectsRequest,
    reporter: StageReporter,
) -> str:
    names = ops.list_objects(conn, request.container, reporter)
    return _ok(f"Objects in container {request.container}: [{' '.join(names)}]")


def _put(
    conn: ObjectStorageConnection,
    request: PutObjectRequest,
    reporter: StageReporter,
) -> str:
    object_name = ops.put_object(
        conn,
        request.container,
        request.source_path,
        reporter,
        object_name=request.object_name,
        metadata=request.metadata,
    )
    return _ok(f"Uploaded object {object_name} to container {request.container}")


def _copy(
    conn: ObjectStorageConnection,
    request: CopyObjectRequest,
    reporter: StageReporter,
) -> str:
    ops.copy_object(
        conn,
        request.container,
        request.object_name,
        request.destination_container,
        reporter,
    )
    return _ok(
        f"Copied object {request.object_name} "
        f"to container {request.destination_container}"
    )


def _get(
    conn: ObjectStorageConnection,
    request: GetObjectRequest,
    reporter: StageReporter,
) -> str:
    ops.get_object(
        conn,
        request.container,
        request.object_name,
        request.destination_path,
        reporter,
    )
    return _ok(
        f"Downloaded object {request.object_name} to {request.destination_path}"
    )


def _rename(
    conn: ObjectStorageConnection,
    request: RenameObjectRequest,
    reporter: StageReporter,
) -> str:
    ops.rename_object(
        conn, request.container, request.object_name, request.new_name, reporter
    )
    return _ok(f"Renamed object {request.object_name} to {request.new_name}")


def _delete(
    conn: ObjectStorageConnection,
    request: DeleteObjectRequest,
    reporter: StageReporter,
) -> str:
    ops.delete_object(
        conn, request.container, request.object_name, reporter, large=request.large
    )
    return _ok(
        f"Deleted object {request.object_name} from container {request.container}"
    )


_HANDLERS: dict[type, Callable[..., str]] = {
    ObjectInfoRequest: _info,
    ListObjectsRequest: _list,
    PutObjectRequest: _put,
    CopyObjectRequest: _copy,
    GetObjectRequest: _get,
    RenameObjectRequest: _rename,
    DeleteObjectRequest: _delete,
}


def execute_request(
    connection: ObjectStorageConnection,
    request: ObjectRequest,
    reporter: StageReporter,
) -> str:
    """Run a validated request and return the formatted status string."""
    logger.info("Executing object command", command=request.command)
    return _HANDLERS[type(request)](connection, request, reporter)


def run_command(
    connection: ObjectStorageConnection,
    args: Sequence[str],
    reporter: StageReporter,
) -> str:
    """Parse a positional argument list and run it against ``connection``."""
    return execute_request(connection, parse_command_args(args), reporter)
