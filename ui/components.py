"""Reusable UI components: console, loading(), anime tables

This module consolidates terminal rendering:
- console - themed Rich console shared by all commands
- loading() - Rich spinners for API calls
- anime_table() / platform_summary() - seasonal listing rendering
- format_size() / cache_stats_table() - cache statistics
"""

from contextlib import contextmanager

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner
from rich.table import Table
from rich.theme import Theme

from models.models import AnimeRecord, CacheStats, StreamingPlatform

# Catppuccin Mocha palette
CATPPUCCIN_MOCHA = Theme(
    {
        "menu.title": "bold #cba6f7",
        "menu.text": "#cdd6f4",
        "menu.muted": "#6c7086",
        "info": "#89dceb",
        "success": "#a6e3a1",
        "warning": "#f9e2af",
        "error": "#f38ba8",
        "score.high": "bold #a6e3a1",
        "score.mid": "#f9e2af",
        "score.low": "#fab387",
    }
)

console = Console(theme=CATPPUCCIN_MOCHA)

PLATFORM_STYLES = {
    "Crunchyroll": "#fab387",
    "Funimation": "#cba6f7",
    "Netflix": "#f38ba8",
    "Hulu": "#a6e3a1",
    "VRV": "#f9e2af",
    "Hidive": "#89b4fa",
    "Amazon Prime": "#74c7ec",
    "Disney+": "#89dceb",
    "Tubi": "#f5c2e7",
    "YouTube": "#eba0ac",
}


def platform_summary(platforms: list[StreamingPlatform]) -> str:
    """Comma separated, colored platform names ("-" when none)."""
    if not platforms:
        return "[menu.muted]-[/menu.muted]"
    return ", ".join(f"[{PLATFORM_STYLES.get(p.name, '#cdd6f4')}]{p.name}[/]" for p in platforms)


def format_score(score: float | None) -> str:
    if score is None:
        return "[menu.muted]-[/menu.muted]"
    style = "score.high" if score >= 8 else "score.mid" if score >= 7 else "score.low"
    return f"[{style}]{score:.2f}[/{style}]"


def anime_table(anime_list: list[AnimeRecord], title: str = "") -> Table:
    """Build a table of anime with air date, score, genres and platforms."""
    table = Table(title=title, title_style="menu.title", header_style="menu.title", expand=True)
    table.add_column("Title", style="menu.text", ratio=3)
    table.add_column("Aired", style="info", no_wrap=True)
    table.add_column("Score", justify="right", no_wrap=True)
    table.add_column("Genres", style="menu.muted", ratio=2)
    table.add_column("Streaming", ratio=2)

    for anime in anime_list:
        table.add_row(
            anime.title_english or anime.title,
            anime.aired_from.isoformat() if anime.aired_from else "TBA",
            format_score(anime.score),
            ", ".join(g.name for g in anime.genres[:3]),
            platform_summary(anime.streaming_platforms),
        )
    return table


def format_size(size: int) -> str:
    """Format a byte count: 0 -> "0 B", 1536 -> "1.5 KB"."""
    value = float(max(size, 0))
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{round(value, 2):g} {unit}"
        value /= 1024
    return f"{round(value, 2):g} GB"


def cache_stats_table(stats: CacheStats) -> Table:
    table = Table(title="Cache", title_style="menu.title", show_header=False)
    table.add_column(style="menu.text")
    table.add_column(justify="right", style="info")
    table.add_row("Entries", str(stats.total_entries))
    table.add_row("Expired", str(stats.expired_entries))
    table.add_row("Size", format_size(stats.total_size))
    return table


@contextmanager
def loading(msg: str = "Loading..."):
    """Show a transient spinner while the block runs.

    Example:
        with loading("Fetching Winter 2024..."):
            listing = aggregator.fetch_listing(2024, Season.WINTER)
    """
    with Live(
        Spinner("dots", text=msg),
        console=console,
        refresh_per_second=12.5,
        transient=True,
    ):
        yield
