"""Tests for the object operations."""

import hashlib

import pytest

from objstore_tools.core import settings
from objstore_tools.core.exceptions import (
    FileTooLarge,
    LocalIOError,
    NotFound,
    TransportError,
)
from objstore_tools.objectstorage import object_operations
from objstore_tools.objectstorage.object_operations import (
    MAX_OBJECT_SIZE,
    copy_object,
    get_object,
    get_object_info,
    hash_source,
    list_objects,
    put_object,
    read_source_file,
    rename_object,
)


class TestHashSource:
    """Test content hashing."""

    def test_hash_is_md5_hex(self):
        """Test the hash is the hex MD5 digest."""
        assert hash_source(b"") == "d41d8cd98f00b204e9800998ecf8427e"
        assert hash_source(b"content1") == hashlib.md5(b"content1").hexdigest()

    def test_hash_is_deterministic(self):
        """Test identical content hashes identically."""
        assert hash_source(b"same bytes") == hash_source(b"same bytes")

    def test_different_content_hashes_differently(self):
        """Test differing content gives differing hashes."""
        assert hash_source(b"content1") != hash_source(b"content2")


class TestReadSourceFile:
    """Test reading files before upload."""

    def test_reads_full_content(self, report_file):
        """Test the whole file is returned."""
        assert read_source_file(str(report_file)) == report_file.read_bytes()

    def test_missing_file(self, tmp_path):
        """Test a missing file raises LocalIOError."""
        with pytest.raises(LocalIOError, match="open source file"):
            read_source_file(str(tmp_path / "missing.csv"))

    def test_size_ceiling(self):
        """Test the ceiling is the 5 GB single-object limit."""
        assert MAX_OBJECT_SIZE == 5_000_000_000

    def test_file_over_ceiling(self, tmp_path, monkeypatch):
        """Test a file over the ceiling raises FileTooLarge."""
        monkeypatch.setattr(object_operations, "MAX_OBJECT_SIZE", 10)
        path = tmp_path / "big.bin"
        path.write_bytes(b"x" * 11)

        with pytest.raises(FileTooLarge) as exc_info:
            read_source_file(str(path))

        assert exc_info.value.size == 11
        assert exc_info.value.limit == 10
        assert "big.bin is too large" in str(exc_info.value)

    def test_file_at_ceiling(self, tmp_path, monkeypatch):
        """Test a file exactly at the ceiling is accepted."""
        monkeypatch.setattr(object_operations, "MAX_OBJECT_SIZE", 10)
        path = tmp_path / "exact.bin"
        path.write_bytes(b"x" * 10)

        assert read_source_file(str(path)) == b"x" * 10


class TestPutObject:
    """Test uploading objects."""

    def test_upload_uses_file_base_name(self, connection, reporter, report_file):
        """Test the object is named after the file."""
        name = put_object(connection, "reports", str(report_file), reporter)

        assert name == "report.csv"
        stored = connection.containers["reports"]["report.csv"]
        assert stored["data"] == report_file.read_bytes()
        assert stored["hash"] == hashlib.md5(report_file.read_bytes()).hexdigest()
        assert stored["content_type"] == "text/csv"
        assert reporter.current_stage == "Uploading object"

    def test_upload_with_override_name(self, connection, reporter, report_file):
        """Test an explicit object name overrides the file name."""
        name = put_object(
            connection,
            "reports",
            str(report_file),
            reporter,
            object_name="2024/q1.csv",
        )

        assert name == "2024/q1.csv"
        assert "2024/q1.csv" in connection.containers["reports"]
        assert "report.csv" not in connection.containers["reports"]

    def test_upload_unknown_extension(self, connection, reporter, tmp_path):
        """Test unknown extensions fall back to a generic content type."""
        path = tmp_path / "blob.unknownext"
        path.write_bytes(b"data")

        put_object(connection, "reports", str(path), reporter)

        stored = connection.containers["reports"]["blob.unknownext"]
        assert stored["content_type"] == "application/octet-stream"

    def test_upload_with_metadata(self, connection, reporter, report_file):
        """Test custom metadata is passed to the connection."""
        put_object(
            connection,
            "reports",
            str(report_file),
            reporter,
            metadata={"owner": "finance"},
        )

        stored = connection.containers["reports"]["report.csv"]
        assert stored["headers"] == {"x-object-meta-owner": "finance"}

    def test_upload_then_info(self, connection, reporter, report_file):
        """Test uploaded size and hash are reported by info."""
        put_object(connection, "reports", str(report_file), reporter)

        info = get_object_info(connection, "reports", "report.csv", reporter)

        assert info.size == 1024
        assert info.hash == hashlib.md5(report_file.read_bytes()).hexdigest()

    def test_too_large_makes_no_remote_call(
        self, connection, reporter, tmp_path, monkeypatch
    ):
        """Test an oversized file fails before any remote call."""
        monkeypatch.setattr(object_operations, "MAX_OBJECT_SIZE", 4)
        path = tmp_path / "big.bin"
        path.write_bytes(b"12345")

        with pytest.raises(FileTooLarge):
            put_object(connection, "reports", str(path), reporter)

        assert connection.calls == []

    def test_missing_file_makes_no_remote_call(self, connection, reporter, tmp_path):
        """Test an unreadable file fails before any remote call."""
        with pytest.raises(LocalIOError):
            put_object(connection, "reports", str(tmp_path / "nope"), reporter)

        assert connection.calls == []

    def test_remote_failure(self, connection, reporter, report_file):
        """Test a remote create failure raises TransportError."""
        connection.fail_on["put_object"] = TransportError(
            "create object report.csv", "503 Service Unavailable"
        )

        with pytest.raises(TransportError, match="create object report.csv"):
            put_object(connection, "reports", str(report_file), reporter)


class TestRoundTrip:
    """Test put followed by get reproduces the content."""

    @pytest.mark.parametrize(
        "content",
        [b"", b"a", bytes(range(256)) * 40, b"\x00" * 70000],
        ids=["empty", "one-byte", "binary", "multi-chunk"],
    )
    def test_put_then_get(self, connection, reporter, tmp_path, content):
        """Test downloaded bytes equal uploaded bytes."""
        source = tmp_path / "source.bin"
        source.write_bytes(content)
        destination = tmp_path / "downloaded.bin"

        put_object(connection, "reports", str(source), reporter)
        get_object(connection, "reports", "source.bin", str(destination), reporter)

        assert destination.read_bytes() == content


class TestGetObjectInfo:
    """Test fetching object metadata."""

    def test_info(self, connection, reporter):
        """Test metadata fields are returned."""
        connection.add_object("reports", "a.txt", b"content1")

        info = get_object_info(connection, "reports", "a.txt", reporter)

        assert info.name == "a.txt"
        assert info.size == 8
        assert info.hash == hashlib.md5(b"content1").hexdigest()
        assert reporter.current_stage == "Fetching object info"

    def test_missing_object(self, connection, reporter):
        """Test a missing object raises NotFound."""
        with pytest.raises(NotFound):
            get_object_info(connection, "reports", "missing.txt", reporter)


class TestListObjects:
    """Test listing object names."""

    def test_empty_container(self, connection, reporter):
        """Test an empty container lists nothing."""
        assert list_objects(connection, "reports", reporter) == []
        assert reporter.current_stage == "Displaying objects"

    def test_lists_across_pages(self, connection, reporter, monkeypatch):
        """Test every name is returned once when listing spans pages."""
        monkeypatch.setattr(settings, "listing_page_size", 3)
        names = [f"data/file{i:02d}.txt" for i in range(10)]
        for name in names:
            connection.add_object("reports", name, b"x")

        listed = list_objects(connection, "reports", reporter)

        assert listed == names
        assert len(set(listed)) == len(listed)
        # 4 pages of data plus the terminating empty page
        assert connection.calls.count("list_object_names") == 5

    def test_exact_page_multiple(self, connection, reporter, monkeypatch):
        """Test a listing that fills its last page exactly."""
        monkeypatch.setattr(settings, "listing_page_size", 2)
        for name in ["a", "b", "c", "d"]:
            connection.add_object("reports", name, b"x")

        assert list_objects(connection, "reports", reporter) == ["a", "b", "c", "d"]

    def test_missing_container(self, connection, reporter):
        """Test listing a missing container fails."""
        with pytest.raises(TransportError):
            list_objects(connection, "missing", reporter)


class TestCopyObject:
    """Test copying objects between containers."""

    def test_copy_keeps_name(self, connection, reporter):
        """Test the copy has the same name in the destination."""
        connection.add_object("reports", "a.txt", b"content1")

        copy_object(connection, "reports", "a.txt", "archive", reporter)

        assert connection.containers["archive"]["a.txt"]["data"] == b"content1"
        assert "a.txt" in connection.containers["reports"]
        assert reporter.current_stage == "Copying object"

    def test_copy_missing_object(self, connection, reporter):
        """Test copying a missing object fails."""
        with pytest.raises(TransportError):
            copy_object(connection, "reports", "missing.txt", "archive", reporter)


class TestRenameObject:
    """Test renaming objects."""

    def test_rename(self, connection, reporter):
        """Test the old name is gone and the new name has the content."""
        connection.add_object("reports", "old.txt", b"content1")

        rename_object(connection, "reports", "old.txt", "new.txt", reporter)

        assert "old.txt" not in connection.containers["reports"]
        assert connection.containers["reports"]["new.txt"]["data"] == b"content1"
        assert connection.calls == ["copy_object", "delete_object"]
        assert reporter.current_stage == "Renaming object"

    def test_rename_copy_failure_keeps_original(self, connection, reporter):
        """Test a failed copy does not delete the original."""
        connection.add_object("reports", "old.txt", b"content1")
        connection.fail_on["copy_object"] = TransportError("copy object", "503")

        with pytest.raises(TransportError):
            rename_object(connection, "reports", "old.txt", "new.txt", reporter)

        assert "delete_object" not in connection.calls
        assert list(connection.containers["reports"]) == ["old.txt"]

    def test_rename_delete_failure_is_not_atomic(self, connection, reporter):
        """Known limitation: a failed delete leaves both objects in place."""
        connection.add_object("reports", "old.txt", b"content1")
        connection.fail_on["delete_object"] = TransportError(
            "delete object old.txt", "409 Conflict"
        )

        with pytest.raises(TransportError) as exc_info:
            rename_object(connection, "reports", "old.txt", "new.txt", reporter)

        assert "after copying it to new.txt" in str(exc_info.value)
        assert exc_info.value.cause == "409 Conflict"
        assert sorted(connection.containers["reports"]) == ["new.txt", "old.txt"]


class TestGetObject:
    """Test downloading objects."""

    def test_download(self, connection, reporter, tmp_path):
        """Test the object content is written to the destination."""
        connection.add_object("reports", "a.txt", b"content1")
        destination = tmp_path / "a.txt"

        get_object(connection, "reports", "a.txt", str(destination), reporter)

        assert destination.read_bytes() == b"content1"
        assert reporter.current_stage == "Downloading object"

    def test_download_truncates_existing_file(self, connection, reporter, tmp_path):
        """Test a longer existing file is replaced, not partially overwritten."""
        connection.add_object("reports", "a.txt", b"short")
        destination = tmp_path / "a.txt"
        destination.write_bytes(b"a much longer previous content")

        get_object(connection, "reports", "a.txt", str(destination), reporter)

        assert destination.read_bytes() == b"short"

    def test_unwritable_destination(self, connection, reporter, tmp_path):
        """Test a destination that cannot be created raises LocalIOError."""
        connection.add_object("reports", "a.txt", b"content1")
        destination = tmp_path / "no-such-dir" / "a.txt"

        with pytest.raises(LocalIOError, match="open/create object file"):
            get_object(connection, "reports", "a.txt", str(destination), reporter)

        assert not destination.exists()

    def test_missing_object_keeps_existing_file(self, connection, reporter, tmp_path):
        """Test a failed fetch does not truncate an existing local file."""
        destination = tmp_path / "existing.txt"
        destination.write_bytes(b"keep me")

        with pytest.raises(NotFound):
            get_object(connection, "reports", "missing", str(destination), reporter)

        assert destination.read_bytes() == b"keep me"

    def test_empty_object_creates_file(self, connection, reporter, tmp_path):
        """Test an empty object still produces an empty local file."""
        connection.add_object("reports", "empty.txt", b"")
        destination = tmp_path / "empty.txt"

        get_object(connection, "reports", "empty.txt", str(destination), reporter)

        assert destination.read_bytes() == b""

    def test_remote_failure_leaves_partial_file(self, connection, reporter, tmp_path):
        """Known limitation: a failed download keeps the partial content."""
        connection.add_object("reports", "a.txt", b"content1")
        connection.partial_download = b"cont"
        destination = tmp_path / "a.txt"

        with pytest.raises(TransportError):
            get_object(connection, "reports", "a.txt", str(destination), reporter)

        assert destination.read_bytes() == b"cont"

    def test_missing_object(self, connection, reporter, tmp_path):
        """Test downloading a missing object raises NotFound."""
        with pytest.raises(NotFound):
            get_object(
                connection, "reports", "missing", str(tmp_path / "out"), reporter
            )
