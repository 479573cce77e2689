"""Quarter-season helpers."""

from datetime import date

from models.models import Season, SeasonInfo

SEASON_ORDER = [Season.WINTER, Season.SPRING, Season.SUMMER, Season.FALL]

SEASON_EMOJI = {
    Season.SPRING: "🌸",
    Season.SUMMER: "☀️",
    Season.FALL: "🍂",
    Season.WINTER: "❄️",
}


def season_for_month(month: int) -> Season:
    """Mar-May spring, Jun-Aug summer, Sep-Nov fall, Dec-Feb winter."""
    if 3 <= month <= 5:
        return Season.SPRING
    if 6 <= month <= 8:
        return Season.SUMMER
    if 9 <= month <= 11:
        return Season.FALL
    return Season.WINTER


def season_display_name(season: Season, year: int) -> str:
    return f"{season.value.capitalize()} {year}"


def get_current_season_info(today: date | None = None) -> SeasonInfo:
    """Season airing on ``today`` (defaults to the current date)."""
    today = today or date.today()
    season = season_for_month(today.month)
    return SeasonInfo(season=season, year=today.year, display_name=season_display_name(season, today.year))


def next_season(info: SeasonInfo) -> SeasonInfo:
    """The season after ``info`` (fall rolls over to next year's winter)."""
    index = SEASON_ORDER.index(info.season)
    if index == len(SEASON_ORDER) - 1:
        season, year = SEASON_ORDER[0], info.year + 1
    else:
        season, year = SEASON_ORDER[index + 1], info.year
    return SeasonInfo(season=season, year=year, display_name=season_display_name(season, year))
