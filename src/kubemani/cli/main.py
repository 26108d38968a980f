#!/usr/bin/env python3
"""
KUBEMANI CLI - Manifest Diff Viewer
-----------------------------------
Terminal front end for the diff index: prints the merged
Group/Kind/Name tree of two manifest files, shows unified diffs of the
manifests they share, and compares two single-sided manifests.

Author: KubeMani Diff Team
Date: 2026-10-19
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from kubemani.cli.formatter import KubeFormatter
from kubemani.core.config import IndexSettings
from kubemani.core.engine import DiffIndexManager, DiffRequest
from kubemani.core.errors import BuildError
from kubemani.core.models import LeafNode, MembershipStatus

VERSION = "0.1.0"

# Global console for consistent styling across the application
console = Console()

STATUS_CHOICES = {
    "left": MembershipStatus.LEFT_ONLY,
    "right": MembershipStatus.RIGHT_ONLY,
    "both": MembershipStatus.BOTH,
}


class KubeManiCLI:
    """
    CLI wrapper that translates user commands into index manager actions.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="kubemani",
            description="KubeMani Diff - Compare Kubernetes manifest files object by object",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = KubeFormatter()
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("-v", "--version", action="version", version=f"kubemani v{VERSION}")

        shared = argparse.ArgumentParser(add_help=False)
        shared.add_argument("file_a", help="Manifest file A (left side)")
        shared.add_argument("file_b", help="Manifest file B (right side)")
        shared.add_argument("--sort-keys", action="store_true", help="Sort mapping keys before comparing")
        shared.add_argument("--verbose", action="store_true", help="Log indexing details")

        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        tree_parser = subparsers.add_parser("tree", parents=[shared], help="🌲 Show the merged manifest tree")
        tree_parser.add_argument("--status", action="append", choices=sorted(STATUS_CHOICES),
                                 help="Only show manifests with this membership (repeatable)")

        diff_parser = subparsers.add_parser("diff", parents=[shared], help="🔍 Show diffs of shared manifests")
        diff_parser.add_argument("--path", help="Only this manifest, as group/kind/name")
        diff_parser.add_argument("--all", action="store_true", help="Also show manifests found on one side only")

        compare_parser = subparsers.add_parser("compare", parents=[shared],
                                               help="⚖️  Compare two manifests found on one side each")
        compare_parser.add_argument("first", help="First manifest as group/kind/name")
        compare_parser.add_argument("second", help="Second manifest as group/kind/name")

    def _configure_logging(self, verbose: bool):
        logging.basicConfig(
            level=logging.INFO if verbose else logging.WARNING,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )

    def _build(self, manager: DiffIndexManager, args: argparse.Namespace) -> bool:
        for label, path in (("A", args.file_a), ("B", args.file_b)):
            if not Path(path).is_file():
                console.print(f"[bold red]Error:[/bold red] File {label} not found: {path}")
                return False
        try:
            manager.build(args.file_a, args.file_b)
        except BuildError as e:
            console.print(Panel(f"[bold red]{escape(str(e))}[/bold red]", title="Index build failed", border_style="red"))
            return False
        return True

    def _find_leaf(self, manager: DiffIndexManager, path_key: str) -> Optional[LeafNode]:
        node = manager.forest.find(path_key)
        if not isinstance(node, LeafNode):
            console.print(f"[bold red]Error:[/bold red] No manifest at '{path_key}'.")
            return None
        return node

    def _show_request(self, request: DiffRequest) -> bool:
        if request.is_diff:
            return self.formatter.display_diff(
                request.left.read_text(encoding="utf-8"),
                request.right.read_text(encoding="utf-8"),
                request.title,
            )
        locator = request.left or request.right
        style = "red" if request.left else "green"
        self.formatter.display_document(locator.read_text(encoding="utf-8"), request.title, border_style=style)
        return True

    def _cmd_tree(self, manager: DiffIndexManager, args: argparse.Namespace) -> int:
        statuses = [STATUS_CHOICES[s] for s in args.status] if args.status else None
        self.formatter.print_forest(manager.forest, statuses)
        self.formatter.print_summary(manager.summary())
        return 0

    def _cmd_diff(self, manager: DiffIndexManager, args: argparse.Namespace) -> int:
        if args.path:
            leaf = self._find_leaf(manager, args.path)
            if leaf is None:
                return 1
            leaves = [leaf]
        else:
            leaves = [
                leaf for leaf in manager.forest.leaves()
                if args.all or (leaf.status is MembershipStatus.BOTH and not leaf.is_identical)
            ]

        if not leaves:
            console.print("[bold green]✅ No differences between the shared manifests.[/bold green]")
            return 0

        for leaf in leaves:
            request = manager.diff_target(leaf)
            if request is None:
                console.print(f"[yellow]Rendering of {leaf.path_key} is no longer available.[/yellow]")
                continue
            self._show_request(request)
        return 0

    def _cmd_compare(self, manager: DiffIndexManager, args: argparse.Namespace) -> int:
        first = self._find_leaf(manager, args.first)
        second = self._find_leaf(manager, args.second)
        if first is None or second is None:
            return 1
        try:
            request = manager.compare_leaves(first, second)
        except ValueError as e:
            console.print(f"[bold red]Error:[/bold red] {e}: both manifests must exist on one side only.")
            return 1
        if request is None:
            return 1
        self._show_request(request)
        return 0

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            self.parser.print_help()
            return 0

        args = self.parser.parse_args(argv)
        if args.command is None:
            self.parser.print_help()
            return 0

        self._configure_logging(args.verbose)
        settings = IndexSettings(sort_keys=args.sort_keys)

        with DiffIndexManager(settings) as manager:
            if not self._build(manager, args):
                return 1
            if args.command == "tree":
                return self._cmd_tree(manager, args)
            if args.command == "diff":
                return self._cmd_diff(manager, args)
            return self._cmd_compare(manager, args)


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(KubeManiCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
