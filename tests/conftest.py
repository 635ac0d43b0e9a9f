"""Shared fixtures for srpmimport tests."""

from unittest.mock import MagicMock

import pytest

from srpmimport.domain import PackageReference, PackageMetadata, FileMetadata, FileRole
from srpmimport.infra.git_client import GitClient
from srpmimport.infra.worktree import Worktree

REGULAR = 0o100644
TRAILER = ("TRAILER!!!", b"", 0)


def _pad(data: bytearray) -> None:
    data.extend(b"\0" * ((4 - len(data) % 4) % 4))


def build_newc(members, magic=b"070701", trailer=True):
    """Build a newc cpio archive from (name, content[, mode]) tuples."""
    out = bytearray()
    members = list(members) + ([TRAILER] if trailer else [])
    for ino, member in enumerate(members, start=1):
        name, content = member[0], member[1]
        mode = member[2] if len(member) > 2 else REGULAR
        raw_name = name.encode() + b"\0"
        check = sum(content) & 0xFFFFFFFF if magic == b"070702" else 0
        fields = [ino, mode, 0, 0, 1, 0, len(content), 0, 0, 0, 0, len(raw_name), check]
        out += magic + b"".join(f"{value:08X}".encode() for value in fields)
        out += raw_name
        _pad(out)
        out += content
        _pad(out)
    return bytes(out)


def build_odc(members, trailer=True):
    """Build a portable ASCII (odc) cpio archive."""
    out = bytearray()
    members = list(members) + ([TRAILER] if trailer else [])
    for ino, member in enumerate(members, start=1):
        name, content = member[0], member[1]
        mode = member[2] if len(member) > 2 else REGULAR
        raw_name = name.encode() + b"\0"
        out += b"070707"
        for value in (0, ino, mode, 0, 0, 1, 0):
            out += f"{value:06o}".encode()
        out += f"{0:011o}".encode()
        out += f"{len(raw_name):06o}".encode()
        out += f"{len(content):011o}".encode()
        out += raw_name + content
    return bytes(out)


@pytest.fixture
def newc():
    """Builder for newc cpio archives."""
    return build_newc


@pytest.fixture
def odc():
    """Builder for odc cpio archives."""
    return build_odc


@pytest.fixture
def mock_git_client():
    """GitClient double whose commands all succeed."""
    client = MagicMock(spec=GitClient)
    client.is_git_repo.return_value = False
    client.init.return_value = (True, "")
    client.add.return_value = (True, "")
    client.checkout_branch.return_value = (True, "")
    client.commit.return_value = (True, "")
    client.current_branch.return_value = None
    return client


@pytest.fixture
def worktree(tmp_path, mock_git_client):
    """Worktree on a real directory with staging recorded by the mock."""
    root = tmp_path / "tree"
    root.mkdir()
    return Worktree(root, mock_git_client)


@pytest.fixture
def package_file(tmp_path):
    """An (empty) package file on disk."""
    path = tmp_path / "foo-1.0-1.el9.src.rpm"
    path.write_bytes(b"")
    return path


@pytest.fixture
def reference(package_file):
    return PackageReference(path=package_file, version=9)


@pytest.fixture
def foo_metadata():
    """Metadata for the foo.spec / foo-1.0.tar.gz / bar.patch package."""
    return PackageMetadata(
        sources=("foo-1.0.tar.gz",),
        patches=("bar.patch",),
        files=(
            FileMetadata("foo.spec", 0o644, FileRole.SPEC),
            FileMetadata("foo-1.0.tar.gz", 0o640, FileRole.SOURCE),
            FileMetadata("bar.patch", 0o600, FileRole.PATCH),
        ),
    )


@pytest.fixture
def foo_entries():
    return {
        "foo.spec": b"Name: foo\nVersion: 1.0\n",
        "foo-1.0.tar.gz": b"\x1f\x8b fake tarball",
        "bar.patch": b"--- a\n+++ b\n",
    }
