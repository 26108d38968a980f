#!/usr/bin/env python3
"""
KUBEMANI ENGINE - Index Lifecycle Manager
-----------------------------------------
The DiffIndexManager owns the one live (forest, storage root) pair.
A build always starts from a reset; a failed build leaves nothing
behind; reset deletes every rendering the previous build wrote.

Author: KubeMani Diff Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from kubemani.core.config import IndexSettings
from kubemani.core.errors import ResourceNotFoundError
from kubemani.core.models import Forest, LeafNode, MembershipStatus, Side
from kubemani.indexing.context import BuildContext
from kubemani.indexing.loader import ManifestLoader
from kubemani.indexing.materializer import ContentMaterializer
from kubemani.indexing.pipeline import IndexingPipeline
from kubemani.storage.workspace import TempWorkspace

IndexListener = Callable[[Forest], None]

DIFF_TITLE_PREFIX = "KubeMani Diff"


@dataclass(frozen=True)
class DiffRequest:
    """
    What a presentation layer should show for a selection: a diff when
    both locators are set, otherwise a plain open of the single one.
    """
    title: str
    left: Optional[Path] = None
    right: Optional[Path] = None

    @property
    def is_diff(self) -> bool:
        return self.left is not None and self.right is not None


class DiffIndexManager:
    """
    Principal orchestrator for manifest diff indexing. Coordinates the
    loader, the indexing pipeline and the workspace, and notifies
    listeners whenever the published index changes.
    """

    def __init__(self, settings: Optional[IndexSettings] = None,
                 workspace: Optional[TempWorkspace] = None,
                 logger: Optional[logging.Logger] = None):
        self.settings = settings or IndexSettings()
        self.logger = logger or logging.getLogger("kubemani.engine")
        self.workspace = workspace or TempWorkspace(
            prefix=self.settings.temp_prefix, base_dir=self.settings.temp_base
        )
        self.loader = ManifestLoader(encoding=self.settings.encoding)
        self.pipeline = IndexingPipeline(
            ContentMaterializer(
                self.workspace,
                suffix=self.settings.artifact_suffix,
                encoding=self.settings.encoding,
            ),
            logger=self.logger,
        )

        self._forest = Forest()
        self._context: Optional[BuildContext] = None
        self._listeners: List[IndexListener] = []

    # --- Scoped lifetime ---

    def __enter__(self) -> "DiffIndexManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.reset()

    # --- State ---

    @property
    def forest(self) -> Forest:
        return self._forest

    @property
    def context(self) -> Optional[BuildContext]:
        return self._context

    @property
    def storage_root(self) -> Optional[Path]:
        return self._context.storage_root if self._context else None

    def on_index_changed(self, listener: IndexListener) -> Callable[[], None]:
        """Registers a listener. Returns a callable that unregisters it."""
        self._listeners.append(listener)

        def dispose():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return dispose

    def _notify(self):
        for listener in list(self._listeners):
            listener(self._forest)

    # --- Lifecycle ---

    def reset(self) -> None:
        """Deletes the storage root and discards the forest. Safe to call repeatedly."""
        had_index = self._context is not None
        if self._context and self._context.storage_root:
            self._discard(self._context.storage_root)
        self._context = None
        self._forest = Forest()
        if had_index:
            self._notify()

    def build(self, left_source: Union[str, Path], right_source: Union[str, Path]) -> Forest:
        """
        Decodes both manifest files and builds a fresh index from them.
        Both files are fully decoded before any storage is allocated, so a
        decode failure (ManifestDecodeError) never leaves a root behind.
        """
        self.reset()

        left = self.loader.read_file(left_source, Side.LEFT)
        right = self.loader.read_file(right_source, Side.RIGHT)

        context = BuildContext(sort_keys=self.settings.sort_keys)
        for side, loaded in ((Side.LEFT, left), (Side.RIGHT, right)):
            context.stats(side).source = loaded.source
            context.stats(side).empty = loaded.empty

        return self._build(left.documents, right.documents, context)

    def build_from_documents(self, left_documents: Iterable[Any],
                             right_documents: Iterable[Any]) -> Forest:
        """Builds a fresh index from two already-decoded document streams."""
        self.reset()
        return self._build(left_documents, right_documents,
                           BuildContext(sort_keys=self.settings.sort_keys))

    def _build(self, left_documents: Iterable[Any], right_documents: Iterable[Any],
               context: BuildContext) -> Forest:
        context.storage_root = self.workspace.create_root()
        forest = Forest()
        try:
            self.pipeline.run(forest, left_documents, Side.LEFT, context)
            self.pipeline.run(forest, right_documents, Side.RIGHT, context)
        except Exception as e:
            # An incomplete forest is never published
            self.logger.error(f"Index build failed, discarding {context.storage_root}: {e}")
            self._discard(context.storage_root)
            raise

        self._context = context
        self._forest = forest
        self.logger.info(
            f"Index built with {sum(1 for _ in forest.leaves())} manifests under {context.storage_root}"
        )
        self._notify()
        return forest

    def _discard(self, root: Path) -> None:
        """Deletes a storage root; a failure is logged instead of raised."""
        try:
            self.workspace.delete_root(root)
        except OSError as cleanup_error:
            self.logger.error(f"Could not delete storage root {root}: {cleanup_error}")

    # --- Consumer actions ---

    def _require(self, locator: Optional[Path]) -> Optional[Path]:
        if locator is not None and not self.workspace.is_file(locator):
            raise ResourceNotFoundError(locator)
        return locator

    def diff_target(self, leaf: LeafNode) -> Optional[DiffRequest]:
        """
        Resolves what to show for one leaf: a diff for Both, an open for
        single-sided leaves. Returns None when a rendering has gone missing.
        """
        left = leaf.left.locator if leaf.left else None
        right = leaf.right.locator if leaf.right else None
        if left is None and right is None:
            return None
        try:
            return DiffRequest(
                title=f"{DIFF_TITLE_PREFIX} - {leaf.path_key}",
                left=self._require(left),
                right=self._require(right),
            )
        except ResourceNotFoundError as e:
            self.logger.warning(f"{e}. Rebuild the index to restore it.")
            return None

    def compare_leaves(self, first: LeafNode, second: LeafNode) -> Optional[DiffRequest]:
        """
        Diffs two leaves that each exist on one side only, e.g. the same
        workload renamed between A and B.
        """
        locators = []
        for leaf in (first, second):
            if leaf.status not in (MembershipStatus.LEFT_ONLY, MembershipStatus.RIGHT_ONLY):
                raise ValueError("Cannot compare selected items")
            document = leaf.left or leaf.right
            locators.append(document.locator)

        try:
            left, right = (self._require(locator) for locator in locators)
        except ResourceNotFoundError as e:
            self.logger.warning(f"{e}. Rebuild the index to restore it.")
            return None

        title = (f"{DIFF_TITLE_PREFIX} - {self.workspace.base_dirname(left)}"
                 f" - {self.workspace.base_dirname(right)}")
        return DiffRequest(title=title, left=left, right=right)

    def summary(self) -> Dict[str, Any]:
        """Index-level metrics for reports."""
        counts = self._forest.status_counts()
        leaves = list(self._forest.leaves())
        return {
            "total_manifests": len(leaves),
            "groups": len(self._forest),
            "both": counts[MembershipStatus.BOTH],
            "left_only": counts[MembershipStatus.LEFT_ONLY],
            "right_only": counts[MembershipStatus.RIGHT_ONLY],
            "identical": sum(1 for leaf in leaves if leaf.is_identical),
            "changed": sum(1 for leaf in leaves
                           if leaf.status is MembershipStatus.BOTH and not leaf.is_identical),
            "sides": {side.value: self._context.stats(side).as_dict() for side in Side} if self._context else {},
            "storage_root": str(self.storage_root) if self.storage_root else None,
        }
