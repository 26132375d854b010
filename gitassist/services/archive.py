"""ZIP archive expansion for commit uploads.

Turns an uploaded .zip into a flat list of named files, keeping the
archive's directory structure in the names.
"""

import base64
import io
import logging
import posixpath
import zipfile
from dataclasses import dataclass

from gitassist.services.github.exceptions import InvalidInputError
from gitassist.services.github.types import FileChange

logger = logging.getLogger(__name__)

# macOS Finder metadata that ends up in archives
SKIPPED_PREFIXES = ("__MACOSX/",)
SKIPPED_NAMES = {".DS_Store"}


@dataclass(frozen=True)
class ArchiveEntry:
    name: str  # Forward-slash path inside the archive
    data: bytes


def extract_archive(data: bytes) -> list[ArchiveEntry]:
    """
    Expand a ZIP archive into its files.

    Directory entries and macOS metadata are skipped. An archive with no
    files gives an empty list.

    Raises:
        InvalidInputError: If ``data`` is not a readable ZIP archive
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as e:
        raise InvalidInputError(f"Not a valid ZIP archive: {e}") from e

    entries: list[ArchiveEntry] = []
    with archive:
        for info in archive.infolist():
            name = info.filename.replace("\\", "/").lstrip("/")
            if info.is_dir() or not name:
                continue
            if name.startswith(SKIPPED_PREFIXES) or posixpath.basename(name) in SKIPPED_NAMES:
                continue
            # Reject entries that would climb out of the destination directory
            if ".." in name.split("/"):
                logger.warning(f"Skipping archive entry outside root: {info.filename}")
                continue
            entries.append(ArchiveEntry(name=name, data=archive.read(info)))

    return entries


def expand_archives(files: list[FileChange]) -> list[FileChange]:
    """
    Replace each ``.zip`` FileChange with the files it contains.

    Extracted files are placed under the archive's own directory, so
    ``site/bundle.zip`` containing ``index.html`` yields ``site/index.html``.
    Non-archive files pass through in order.
    """
    expanded: list[FileChange] = []
    for file in files:
        if not file.path.lower().endswith(".zip"):
            expanded.append(file)
            continue

        entries = extract_archive(base64.b64decode(file.content))
        directory = posixpath.dirname(file.path)
        for entry in entries:
            path = posixpath.join(directory, entry.name) if directory else entry.name
            expanded.append(FileChange.from_bytes(path, entry.data))
        logger.info(f"Expanded {file.path} into {len(entries)} file(s)")

    return expanded
