"""
Tests for ui/components.py
"""

from rich.console import Console

from conftest import crunchyroll
from models.models import AnimeRecord, CacheStats
from ui.components import (
    CATPPUCCIN_MOCHA,
    anime_table,
    cache_stats_table,
    format_score,
    format_size,
    platform_summary,
)


def render(renderable) -> str:
    console = Console(width=160, record=True, theme=CATPPUCCIN_MOCHA)
    console.print(renderable)
    return console.export_text()


class TestFormatting:
    def test_format_size(self):
        assert format_size(0) == "0 B"
        assert format_size(512) == "512 B"
        assert format_size(1536) == "1.5 KB"
        assert format_size(1024 * 1024) == "1 MB"
        assert format_size(3 * 1024**3) == "3 GB"

    def test_format_score(self):
        assert "9.31" in format_score(9.31)
        assert "score.high" in format_score(9.31)
        assert "score.low" in format_score(6.0)
        assert format_score(None) == "[menu.muted]-[/menu.muted]"

    def test_platform_summary(self):
        assert "Crunchyroll" in platform_summary([crunchyroll()])
        assert platform_summary([]) == "[menu.muted]-[/menu.muted]"


class TestTables:
    def test_anime_table_rows(self):
        anime = [
            AnimeRecord(id=1, title="Sousou no Frieren", title_english="Frieren", aired_from="2023-09-29",
                        score=9.31, streaming_platforms=[crunchyroll()]),
            AnimeRecord(id=2, title="Dungeon Meshi"),
        ]
        text = render(anime_table(anime, title="Fall 2023"))
        assert "Frieren" in text
        assert "2023-09-29" in text
        assert "Crunchyroll" in text
        assert "TBA" in text

    def test_cache_stats_table(self):
        text = render(cache_stats_table(CacheStats(total_entries=3, expired_entries=1, total_size=2048)))
        assert "2 KB" in text
        assert "Expired" in text
