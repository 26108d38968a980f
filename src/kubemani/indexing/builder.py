#!/usr/bin/env python3
"""
KUBEMANI INDEX BUILDER
----------------------
Folds materialized documents into the Group -> Kind -> Leaf forest.
Nodes are created on first use and kept in first-seen order; a
document whose (group, kind, name) is already indexed lands on the
existing leaf, in its side's slot.

Author: KubeMani Diff Team
Date: 2026-10-19
"""

import logging
from typing import Iterable

from kubemani.core.models import (
    Forest,
    GroupNode,
    KindNode,
    LeafNode,
    MaterializedDocument,
)

logger = logging.getLogger("kubemani.builder")


class IndexBuilder:
    """
    Three-level group-by over the forest. Not safe for concurrent use:
    callers feed one side at a time.
    """

    def insert(self, forest: Forest, document: MaterializedDocument) -> LeafNode:
        identity = document.identity

        group = forest.find(identity.group)
        if group is None:
            group = GroupNode(label=identity.group, path_key=identity.group)
            forest.groups.append(group)
            forest.register(group)

        kind_key = f"{identity.group}/{identity.kind}"
        kind = forest.find(kind_key)
        if kind is None:
            kind = KindNode(label=identity.kind, path_key=kind_key)
            group.children.append(kind)
            forest.register(kind)

        leaf = forest.find(identity.path_key)
        if leaf is None:
            leaf = LeafNode(label=identity.name, path_key=identity.path_key)
            kind.children.append(leaf)
            forest.register(leaf)

        replaced = leaf.assign(document)
        if replaced is not None:
            # Last write wins within a side
            logger.debug(f"{identity.path_key} appears more than once in {document.side.value}; keeping the latest")
        return leaf

    def insert_all(self, forest: Forest, documents: Iterable[MaterializedDocument]) -> Forest:
        """Inserts every document and returns the same forest for chaining."""
        for document in documents:
            self.insert(forest, document)
        return forest
