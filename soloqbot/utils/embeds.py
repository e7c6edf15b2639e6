"""
Leaderboard rendering for the Discord scoreboard message.

Turns an ordered list of ranked entries into a fixed-width text block and the
embed that carries it. Both functions are pure so they can be reused by the
refresh cycle and by tests.
"""

from datetime import datetime, timezone
from typing import List, Optional, Sequence

import discord

from soloqbot.constants import LeaderboardConstants
from soloqbot.data_models.ranked import RankedEntry

NAME_WIDTH = 16


def win_rate(wins: int, losses: int) -> int:
    """Win rate as a truncated percentage. 0 when no games were played."""
    games = wins + losses
    if games <= 0:
        return 0
    return int(wins / games * 100)


def entry_marker(entry: RankedEntry) -> str:
    """Veteran marker wins over the hot streak marker."""
    if entry.is_veteran:
        return f" {LeaderboardConstants.VETERAN_MARKER}"
    if entry.has_hot_streak:
        return f" {LeaderboardConstants.HOT_STREAK_MARKER}"
    return ""


def format_header() -> str:
    return (
        f"`{'#':<2}` `{'Summoner':^16}` `{'Rank':^14}` `{'LP':^6}` "
        f"`{'Win':^4}` `{'Loss':^4}` `{'WL%':^3}`"
    )


def format_row(rank: int, entry: RankedEntry) -> str:
    """Format one leaderboard row. The entry must be ranked."""
    tier = entry.tier.name if entry.tier is not None else ""
    division = entry.division.name if entry.division is not None else ""
    return (
        f"`{rank:<2}` `{entry.identity_name[:NAME_WIDTH]:<16}` `{tier:<10} {division:>3}` "
        f"`{entry.points:>4}LP` `{entry.wins:>3}W` `{entry.losses:>3}L` "
        f"`{win_rate(entry.wins, entry.losses)}%`{entry_marker(entry)}"
    )


def render_leaderboard(entries: Sequence[RankedEntry],
                       limit: int = LeaderboardConstants.DEFAULT_SIZE,
                       max_length: int = LeaderboardConstants.MAX_DESCRIPTION_LENGTH) -> str:
    """
    Render the leaderboard text block.

    Args:
        entries: Ranked entries, already sorted best first
        limit: Maximum number of rows to show
        max_length: Size limit of the host message body

    Returns:
        Header plus one row per entry. Whole rows are dropped from the bottom
        until the block fits ``max_length``.
    """
    header = format_header()
    rows: List[str] = [format_row(idx, entry) for idx, entry in enumerate(entries[:max(limit, 0)], start=1)]

    text = "\n".join([header] + rows)
    while rows and len(text) > max_length:
        rows.pop()
        text = "\n".join([header] + rows)
    return text


def build_leaderboard_embed(entries: Sequence[RankedEntry],
                            title: str,
                            limit: int = LeaderboardConstants.DEFAULT_SIZE,
                            refreshed_at: Optional[datetime] = None) -> discord.Embed:
    """Build the scoreboard embed. The footer carries the refresh time."""
    description = render_leaderboard(entries, limit)
    embed = discord.Embed(
        title=title,
        description=description,
        color=LeaderboardConstants.EMBED_COLOR,
        timestamp=refreshed_at or datetime.now(timezone.utc)
    )
    rows_shown = description.count("\n")
    embed.set_footer(text=f"{rows_shown} of {len(entries)} ranked summoners | Last refreshed")
    return embed
