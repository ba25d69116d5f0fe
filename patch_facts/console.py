"""Rich console utilities for patch-facts.

A shared Rich Console plus the banner and summary tables shown after a run.
Nothing here affects the fact file; output is suppressed with ``--quiet``.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from .eol_data import ELAPSED_SENTINEL_EPOCH, EOL_TABLE_VERSION, has_entry
from .facts import PatchFacts
from .identity import OsIdentity
from .tool_checks import ToolStatus

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "highlight": "magenta",
    }
)

console = Console(theme=custom_theme, color_system="auto")


def print_banner(version: str = "unknown") -> None:
    """Print the patch-facts banner."""
    banner = Text()
    banner.append("patch-facts", style="bold blue")
    version_display = f"v{version}" if version and version[0:1].isdigit() else version
    banner.append(f" {version_display}", style="magenta")
    banner.append(" - OS patch posture for Ansible local facts", style="cyan")
    console.print(banner)


def _flag(value: str, bad: str = "true") -> str:
    """Colour a rendered fact value: ``bad`` in red, ``unknown`` in yellow."""
    if value == bad:
        return f"[error]{value}[/error]"
    if value == "unknown" or value == "-1":
        return f"[warning]{value}[/warning]"
    return f"[success]{value}[/success]"


def _eol_date_display(identity: OsIdentity, eol_instant: Optional[datetime]) -> str:
    if eol_instant is not None:
        if eol_instant.timestamp() == ELAPSED_SENTINEL_EPOCH:
            return "long past (date not recorded)"
        return eol_instant.date().isoformat()
    if has_entry(identity.distribution, identity.version_key):
        return "not published yet"
    return "not listed"


def print_facts_summary(
    identity: OsIdentity,
    eol_instant: Optional[datetime],
    facts: PatchFacts,
    fact_path: Optional[Path] = None,
) -> None:
    """
    Print a table summarizing the collected facts.

    Args:
        identity: Identified operating system
        eol_instant: EOL instant from the resolver, None when unknown
        facts: Assembled fact record
        fact_path: Where the fact file was written, None if it was not stored
    """
    rendered = facts.to_fact_dict()

    table = Table(title=f"Patch posture: {identity}", title_style="bold", show_header=True)
    table.add_column("Fact", style="cyan")
    table.add_column("Value")

    table.add_row("eol_date", f"{_eol_date_display(identity, eol_instant)} (table {EOL_TABLE_VERSION})")
    table.add_row("eol", _flag(rendered["eol"]))
    table.add_row("errata_support", _flag(rendered["errata_support"], bad="false"))
    table.add_row("security_updates", _flag(rendered["security_updates"], bad=""))
    table.add_row("all_updates", _flag(rendered["all_updates"], bad=""))
    table.add_row("os_updates_broken", _flag(rendered["os_updates_broken"]))
    table.add_row("needs_reboot", _flag(rendered["needs_reboot"]))
    table.add_row("uptime_days", rendered["uptime_days"])
    table.add_row("date_collected", rendered["date_collected"])

    console.print(table)
    if fact_path is not None:
        console.print(f"[success]✓ Facts written to {fact_path}[/success]")
    else:
        console.print("[info]Fact file not stored (--no-store)[/info]")


def print_tool_status(statuses: dict[str, ToolStatus]) -> None:
    """Print the availability of the host tools patch-facts uses."""
    table = Table(title="Host tools", show_header=True)
    table.add_column("Tool", style="cyan")
    table.add_column("Status")
    table.add_column("Used for")

    for tool_id, status in statuses.items():
        state = f"[success]{status.path}[/success]" if status.available else "[warning]missing[/warning]"
        used_for = ", ".join(status.info.required_for) if status.info else ""
        table.add_row(tool_id, state, used_for)

    console.print(table)
