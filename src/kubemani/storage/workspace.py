#!/usr/bin/env python3
"""
KUBEMANI WORKSPACE - Storage Root Provider
------------------------------------------
Owns the temporary directory that backs every materialized rendering
of a build: creation, idempotent sub-directory creation, atomic file
writes and recursive deletion.

Author: KubeMani Diff Team
Date: 2026-10-19
"""

import os
import shutil
import logging
import tempfile
from pathlib import Path
from typing import Optional, Union

from kubemani.core.errors import MaterializationError, StorageError

logger = logging.getLogger("kubemani.workspace")

PathLike = Union[str, Path]


class TempWorkspace:
    """
    Filesystem collaborator for the index. Only the lifecycle manager
    creates or deletes roots; the materializer only creates sub-paths.
    """

    def __init__(self, prefix: str = "kubemani-diff-temp-", base_dir: Optional[PathLike] = None):
        self.prefix = prefix
        self.base_dir = Path(base_dir) if base_dir else None

    def create_root(self) -> Path:
        """Creates a fresh, uniquely named storage root."""
        try:
            if self.base_dir is not None:
                self.base_dir.mkdir(parents=True, exist_ok=True)
            root = Path(tempfile.mkdtemp(prefix=self.prefix, dir=self.base_dir))
        except OSError as e:
            logger.error(f"Error creating temporary directory: {e}")
            raise StorageError(self.base_dir or tempfile.gettempdir(), str(e)) from e

        logger.info(f"temp directory has been created at: {root}")
        return root

    def delete_root(self, root: Optional[PathLike]) -> bool:
        """
        Removes the root and everything under it. Missing roots are a no-op.
        Returns True when something was deleted.
        """
        if not self.is_directory(root):
            return False
        shutil.rmtree(root)
        logger.info(f"directory '{root}' deleted successfully.")
        return True

    def create_sub_path(self, root: Optional[PathLike], relative: PathLike) -> Path:
        """Ensures root/relative exists as a directory and returns it."""
        if not root or not str(relative).strip():
            raise MaterializationError(f"{root}/{relative}", "invalid arguments")

        target = Path(root) / relative
        try:
            target.mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError) as e:
            logger.error(f"error creating subdirectory '{relative}' under '{root}': {e}")
            raise MaterializationError(target, str(e)) from e
        return target

    def write_text(self, target: Path, content: str, encoding: str = "utf-8") -> Path:
        """Writes through a sibling temp file so readers never see half a rendering."""
        temp_file = target.with_name(f".{target.name}.tmp")
        try:
            temp_file.write_text(content, encoding=encoding)
            os.replace(temp_file, target)
        except (OSError, ValueError) as e:
            if temp_file.exists():
                temp_file.unlink()
            logger.error(f"Error creating manifest file {target}: {e}")
            raise MaterializationError(target, str(e)) from e
        return target

    @staticmethod
    def is_directory(path: Optional[PathLike]) -> bool:
        if not path:
            return False
        return Path(path).is_dir()

    @staticmethod
    def is_file(path: Optional[PathLike]) -> bool:
        if not path:
            return False
        return Path(path).is_file()

    @staticmethod
    def base_dirname(path: PathLike) -> str:
        """Name of the directory itself, or of the directory holding a file."""
        p = Path(path)
        return p.name if p.is_dir() else p.parent.name
