"""Map streaming deep links to canonical platform names."""

from urllib.parse import urlparse

UNKNOWN_PLATFORM = "Unknown Platform"

PLATFORM_DOMAINS: dict[str, str] = {
    "crunchyroll.com": "Crunchyroll",
    "funimation.com": "Funimation",
    "netflix.com": "Netflix",
    "hulu.com": "Hulu",
    "vrv.co": "VRV",
    "hidive.com": "Hidive",
    "amazon.com": "Amazon Prime",
    "primevideo.com": "Amazon Prime",
    "disney.com": "Disney+",
    "disneyplus.com": "Disney+",
    "tubi.tv": "Tubi",
    "youtube.com": "YouTube",
    "bilibili.tv": "Bilibili",
    "max.com": "Max",
}


def _hostname(url: str) -> str | None:
    try:
        return urlparse(url.strip()).hostname
    except (AttributeError, ValueError):
        return None


def lookup_platform(url: str) -> str | None:
    """Platform name from the domain table, or None when the host is unmapped."""
    host = _hostname(url)
    if not host:
        return None
    for domain, name in PLATFORM_DOMAINS.items():
        if host == domain or host.endswith("." + domain):
            return name
    return None


def platform_name_from_url(url: str) -> str:
    """Canonical platform name for a deep link.

    Args:
        url: Link returned by a streaming source

    Returns:
        Mapped name (e.g. "Crunchyroll"), the capitalized first host label for
        unmapped domains, or UNKNOWN_PLATFORM when the URL has no host

    Examples:
        "https://www.crunchyroll.com/series/GY5P48XEY" -> "Crunchyroll"
        "https://www.retrocrush.tv/watch/1" -> "Retrocrush"
        "not a url" -> "Unknown Platform"
    """
    name = lookup_platform(url)
    if name:
        return name

    host = _hostname(url)
    if not host:
        return UNKNOWN_PLATFORM
    host = host.removeprefix("www.")
    label = host.split(".")[0]
    if not label:
        return UNKNOWN_PLATFORM
    return label[:1].upper() + label[1:]
