# src/kubemani/cli/formatter.py
import difflib
from typing import Any, Dict, Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.tree import Tree

from kubemani.core.models import Forest, LeafNode, MembershipStatus, Side

# Initialize the Rich console for high-quality terminal output
console = Console()

STATUS_BADGES = {
    MembershipStatus.LEFT_ONLY: "[bold red]A[/bold red]",
    MembershipStatus.RIGHT_ONLY: "[bold green]B[/bold green]",
    MembershipStatus.BOTH: "[bold cyan]AB[/bold cyan]",
    MembershipStatus.NONE: "[dim]-[/dim]",
}


class KubeFormatter:
    """
    KubeFormatter: the visual side of the CLI.
    Renders the index forest, per-leaf diffs and the summary panel.
    """

    def leaf_label(self, leaf: LeafNode) -> str:
        badge = STATUS_BADGES[leaf.status]
        if leaf.status is MembershipStatus.BOTH:
            marker = "[dim](identical)[/dim]" if leaf.is_identical else "[yellow](changed)[/yellow]"
            return f"{badge} {leaf.label} {marker}"
        return f"{badge} {leaf.label}"

    def render_forest(self, forest: Forest, statuses: Optional[Iterable[MembershipStatus]] = None) -> Tree:
        """
        Builds a Group -> Kind -> Leaf tree. Groups and kinds with no
        visible leaf are left out.
        """
        wanted = set(statuses) if statuses else None
        tree = Tree("[bold white]Manifests[/bold white]", guide_style="dim")

        for group in forest:
            group_branch = None
            for kind in group.children:
                leaves = [leaf for leaf in kind.children if wanted is None or leaf.status in wanted]
                if not leaves:
                    continue
                if group_branch is None:
                    group_branch = tree.add(f"[bold magenta]{group.label}[/bold magenta]")
                kind_branch = group_branch.add(f"[cyan]{kind.label}[/cyan]")
                for leaf in leaves:
                    kind_branch.add(self.leaf_label(leaf))
        return tree

    def print_forest(self, forest: Forest, statuses: Optional[Iterable[MembershipStatus]] = None):
        if forest.is_empty:
            console.print("[bold yellow]⚠️  No Kubernetes manifests found in either file.[/bold yellow]")
            return
        console.print(self.render_forest(forest, statuses))

    def display_diff(self, left_text: str, right_text: str, title: str,
                     left_name: str = "A", right_name: str = "B") -> bool:
        """
        Renders a colorized unified diff between two renderings.
        Returns False when there is nothing to show.
        """
        diff_list = list(difflib.unified_diff(
            left_text.splitlines(),
            right_text.splitlines(),
            fromfile=left_name,
            tofile=right_name,
            lineterm=""
        ))

        if not diff_list:
            console.print(f"[dim]ℹ No differences for {title}.[/dim]")
            return False

        syntax = Syntax("\n".join(diff_list), "diff", theme="monokai", line_numbers=True)
        console.print(Panel(syntax, title=title, border_style="cyan"))
        return True

    def display_document(self, text: str, title: str, border_style: str = "dim"):
        """Shows a single rendering (leaves that exist on one side only)."""
        syntax = Syntax(text.rstrip(), "yaml", theme="monokai", line_numbers=True)
        console.print(Panel(syntax, title=title, border_style=border_style))

    def print_summary(self, summary: Dict[str, Any]):
        sides = summary.get("sides", {})
        lines = [
            "[bold white]Summary Report[/bold white]",
            "════════════════════════════════════════",
            f"Manifests:      {summary['total_manifests']}",
            f"In both:        [cyan]{summary['both']}[/cyan] "
            f"([dim]{summary['identical']} identical[/dim], [yellow]{summary['changed']} changed[/yellow])",
            f"Only in A:      [red]{summary['left_only']}[/red]",
            f"Only in B:      [green]{summary['right_only']}[/green]",
        ]
        for side in Side:
            stats = sides.get(side.value)
            if stats:
                lines.append(
                    f"File {side.letter}:         {stats['source']} "
                    f"({stats['indexed']} indexed, {stats['invalid']} invalid, {stats['empty']} empty)"
                )
        console.print(Panel("\n".join(lines), border_style="dim"))
