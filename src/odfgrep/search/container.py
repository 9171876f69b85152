# topmark:header:start
#
#   project      : odfgrep
#   file         : container.py
#   file_relpath : src/odfgrep/search/container.py
#   license      : GPL-2.0-or-later
#   copyright    : (c) 2006 Ray Lischner, (c) 2025 odfgrep contributors
#
# topmark:header:end

"""ODF package access.

An OpenDocument file is a ZIP archive whose members are XML streams. This
module opens the archive and reads whole members into memory; every failure is
reported as a `ContainerError` so the engine can abort the current document
and carry on with the next one.
"""

from __future__ import annotations

import zipfile
import zlib
from contextlib import contextmanager
from typing import TYPE_CHECKING

from odfgrep.config.logging import get_logger
from odfgrep.core.errors import ContainerError, MemberNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

logger = get_logger(__name__)


@contextmanager
def open_container(path: str | Path) -> Iterator[zipfile.ZipFile]:
    """Open a document package for reading.

    The archive is closed when the context exits, whether normally or because
    an exception aborted the document.

    Args:
        path (str | Path): Path to the document.

    Yields:
        zipfile.ZipFile: The open package.

    Raises:
        ContainerError: If the file cannot be opened or is not a ZIP archive.
    """
    try:
        package = zipfile.ZipFile(path)
    except zipfile.BadZipFile as e:
        raise ContainerError(f"not an OpenDocument package ({e})") from e
    except OSError as e:
        raise ContainerError(e.strerror or str(e)) from e

    with package:
        logger.debug("Opened %s (%d members)", path, len(package.infolist()))
        yield package


def read_member(package: zipfile.ZipFile, name: str) -> bytes:
    """Read a whole package member.

    Args:
        package (zipfile.ZipFile): An open package.
        name (str): Member name, e.g. ``content.xml``.

    Returns:
        bytes: The member's content.

    Raises:
        MemberNotFoundError: If the package has no member called ``name``.
        ContainerError: If the member is corrupt, truncated, encrypted or uses an
            unsupported compression method.
    """
    try:
        data = package.read(name)
    except KeyError as e:
        raise MemberNotFoundError(f"no member named '{name}'") from e
    except (
        zipfile.BadZipFile,
        zlib.error,
        EOFError,
        RuntimeError,
        NotImplementedError,
        OSError,
    ) as e:
        # RuntimeError: encrypted member
        # zlib.error, EOFError: corrupt or cut-off deflate stream
        raise ContainerError(f"cannot read '{name}' ({e})") from e
    logger.trace("Read %d bytes from %s:%s", len(data), package.filename, name)
    return data
