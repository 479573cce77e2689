"""Single-title streaming lookup."""

from models.models import AnimeRecord
from services.streaming_service import StreamingResolver
from ui.components import console, loading, platform_summary


def resolve_title(args, resolver: StreamingResolver | None = None) -> int:
    """Resolve streaming platforms for an ad-hoc title.

    Returns:
        0 when at least one platform was found, 1 otherwise
    """
    anime = AnimeRecord(id=0, title=args.title, title_english=args.english)
    resolver = resolver or StreamingResolver()
    try:
        with loading(f"Searching streaming for '{args.title}'..."):
            result = resolver.resolve(anime)
    finally:
        resolver.close()

    console.print(f"[menu.muted]Searched: {', '.join(result.searched_terms)}[/menu.muted]")
    if not result.success:
        console.print("[warning]No streaming platforms found[/warning]")
        return 1

    console.print(f"[info]Source:[/info] {result.source}")
    console.print(platform_summary(result.platforms))
    for platform in result.platforms:
        console.print(f"  [menu.text]{platform.name}[/menu.text] [menu.muted]{platform.url}[/menu.muted]")
    return 0
