"""
Package decoder service for srpmimport.

Turns a source package into an in-memory mapping of archive entry
name to content. Nothing is written to disk here.
"""

import logging
from typing import Dict, Iterator, Optional

import libarchive

from ..domain.package import PackageReference
from ..domain.result import DecodedEntry
from ..exit_codes import ArchiveDecodeError
from ..infra.rpm_tools import Rpm2CpioClient

logger = logging.getLogger(__name__)

TRAILER_NAME = b"TRAILER!!!\0"


def _trailer_record(magic: bytes) -> bytes:
    if magic == b"070707":
        fields = (0, 0, 0, 0, 0, 1, 0)
        header = magic + b"".join(f"{value:06o}".encode() for value in fields)
        header += f"{0:011o}".encode() + f"{len(TRAILER_NAME):06o}".encode() + f"{0:011o}".encode()
        return header + TRAILER_NAME
    fields = [0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, len(TRAILER_NAME), 0]
    record = magic + b"".join(f"{value:08X}".encode() for value in fields) + TRAILER_NAME
    return record + b"\0" * (-len(record) % 4)


def terminate_stream(stream: bytes) -> bytes:
    """
    Append an end-of-archive record to a cpio stream.

    A stream that stops at a member boundary without its own trailer then
    reads as a complete archive. Anything after the first trailer is
    ignored, so streams that already carry one are unaffected. Streams
    without a cpio magic are returned unchanged.
    """
    magic = stream[:6]
    if magic not in (b"070701", b"070702", b"070707"):
        return stream
    return stream + _trailer_record(magic)


def iter_archive(stream: bytes) -> Iterator[DecodedEntry]:
    """
    Decode an archive stream entry by entry.

    An empty stream is an archive with no members, and a stream may end
    at any member boundary. Directory members are skipped.

    Raises:
        ArchiveDecodeError: the stream is corrupt or in an unknown format
    """
    if not stream:
        return
    try:
        with libarchive.memory_reader(terminate_stream(stream)) as archive:
            for entry in archive:
                if entry.isdir:
                    logger.debug(f"Skipping directory member {entry.pathname}")
                    continue
                yield DecodedEntry(name=entry.pathname, content=b"".join(entry.get_blocks()))
    except libarchive.ArchiveError as e:
        raise ArchiveDecodeError(f"could not decode cpio archive: {e}")


class PackageDecoder:
    """
    Decode a source package via rpm2cpio.

    Example:
        decoder = PackageDecoder()
        entries = decoder.decode(PackageReference(Path("bash.src.rpm"), 9))
        print(sorted(entries))
    """

    def __init__(self, converter: Optional[Rpm2CpioClient] = None):
        self.converter = converter or Rpm2CpioClient()

    def decode(self, reference: PackageReference) -> Dict[str, bytes]:
        """
        Convert and decode a package.

        If the archive repeats a name, the last member wins.

        Raises:
            ToolError: rpm2cpio failed
            ArchiveDecodeError: the cpio stream is corrupt
        """
        stream = self.converter.convert(reference.path)
        entries: Dict[str, bytes] = {}
        for entry in iter_archive(stream):
            if entry.name in entries:
                logger.debug(f"Archive repeats {entry.name}, keeping the later member")
            entries[entry.name] = entry.content

        logger.debug(f"Decoded {len(entries)} entries from {reference.import_name}")
        return entries
