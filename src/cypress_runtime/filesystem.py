"""Filesystem primitives used to build the runtime workspace.

Wraps pathlib/shutil/os behind one small class so the runtime can be driven
against a recording fake in tests. All methods raise OSError on failure.

Key class: Filesystem.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class Filesystem:
    """Existence checks, recursive mkdir/remove/copy, symlinks and atomic writes."""

    def exists(self, path: Path) -> bool:
        """True if ``path`` resolves to a file or directory.

        Symlinks are followed, so a dangling link does not exist.
        """
        return Path(path).exists()

    def mkdir(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def remove(self, path: Path) -> None:
        """Remove a file, symlink or directory tree. No-op when absent.

        A symlink pointing at a directory is unlinked; its target is untouched.
        """
        path = Path(path)
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.is_dir():
            shutil.rmtree(path)

    def mirror(self, source: Path, target: Path) -> None:
        """Copy the ``source`` tree into ``target``, overwriting existing files."""
        target = Path(target)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copytree(source, target, dirs_exist_ok=True)
        logger.debug("Mirrored %s -> %s", source, target)

    def symlink(self, target: Path, link: Path) -> None:
        """Create ``link`` pointing at ``target``.

        An existing link to the same target is kept; a link to a different
        target is replaced.
        """
        link = Path(link)
        target = Path(target)
        link.parent.mkdir(parents=True, exist_ok=True)

        if link.is_symlink():
            if Path(os.readlink(link)) == target:
                return
            link.unlink()

        link.symlink_to(target, target_is_directory=target.is_dir())
        logger.debug("Linked %s -> %s", link, target)

    def dump_file(self, path: Path, content: str) -> None:
        """Atomically replace ``path`` with ``content`` (UTF-8)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
