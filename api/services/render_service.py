"""
Service for turning leaderboard snapshots into display rows and the HTML page.
"""
from typing import List, Optional
from html import escape
from urllib.parse import quote

from config import settings
from schemas import DisplayRow, FilterBand, LeaderboardSnapshot
from services.rating_service import RatingService


class RenderService:
    """Presentation helpers. Nothing here fetches or re-sorts."""

    BAND_LABELS = {
        FilterBand.ALL: "All Ratings",
        FilterBand.EXPERT: "Expert+ (1600+)",
        FilterBand.SPECIALIST: "Specialist (1400-1599)",
        FilterBand.PUPIL: "Pupil (1200-1399)",
        FilterBand.NEWBIE: "Newbie (<1200)",
    }

    @staticmethod
    def render_rows(snapshot: LeaderboardSnapshot, band: FilterBand = FilterBand.ALL) -> List[DisplayRow]:
        """
        Build the visible rows for a snapshot.

        Positions come from the full ranking, so filtering hides rows
        without renumbering the ones left.

        Args:
            snapshot: Snapshot to display
            band: Rating band to keep

        Returns:
            Rows in snapshot order
        """
        rows = []
        for position, record in enumerate(snapshot.ordered_records, start=1):
            if not RatingService.in_band(record.current_rating, band):
                continue

            tier = RatingService.classify_rating(record.current_rating)
            rows.append(DisplayRow(
                position=position,
                podium=min(position, 3),
                identifier=record.identifier,
                profile_url=f"{settings.CODEFORCES_PROFILE_URL.rstrip('/')}/{quote(record.identifier)}",
                current_rating=record.current_rating,
                max_rating=record.max_rating,
                tier_title=tier.title,
                tier_class=tier.css_class,
                event_count=record.event_count,
                change_text=RatingService.format_change(record.rating_delta),
                change_class=RatingService.change_class(record.rating_delta),
            ))
        return rows

    @staticmethod
    def render_page(
        snapshot: LeaderboardSnapshot,
        band: FilterBand = FilterBand.ALL,
        is_refreshing: bool = False,
        error: Optional[str] = None,
        warning: Optional[str] = None,
        refresh_seconds: int = None,
    ) -> str:
        """Render the full leaderboard page."""
        if refresh_seconds is None:
            refresh_seconds = settings.UPDATE_INTERVAL_SECONDS

        rows = RenderService.render_rows(snapshot, band)
        if snapshot.count == 0:
            body = """
            <div class="empty-state">
                <h3>No Data Available</h3>
                <p>Unable to load leaderboard data. Please check your configuration.</p>
            </div>
            """
        else:
            body = "".join(RenderService._render_entry(row) for row in rows)

        options = "".join(
            f'<option value="{value.value}"{" selected" if value == band else ""}>{label}</option>'
            for value, label in RenderService.BAND_LABELS.items()
        )

        messages = ""
        if is_refreshing:
            messages += '<div id="loading" class="loading">Loading...</div>'
        for message in (warning, error):
            if message:
                messages += f'<div class="error-message"><span class="error-text">{escape(message)}</span></div>'

        button_label = "Loading..." if is_refreshing else "Refresh Data"
        refresh_action = "/refresh" if band == FilterBand.ALL else f"/refresh?band={band.value}"
        disabled = " disabled" if is_refreshing else ""

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta http-equiv="refresh" content="{refresh_seconds}">
    <title>Codeforces Leaderboard</title>
    <style>{RenderService.STYLES}</style>
</head>
<body>
    <header>
        <h1>Codeforces Leaderboard</h1>
        <div class="controls">
            <form method="post" action="{refresh_action}">
                <button id="refreshBtn" type="submit"{disabled}>{button_label}</button>
            </form>
            <form method="get" action="/">
                <select id="ratingFilter" name="band" onchange="this.form.submit()">{options}</select>
            </form>
        </div>
    </header>
    {messages}
    <section class="stats">
        <div class="stat"><span id="totalUsers">{snapshot.count}</span> Users</div>
        <div class="stat"><span id="avgRating">{snapshot.average_rating}</span> Average Rating</div>
        <div class="stat"><span id="maxRating">{snapshot.max_rating}</span> Highest Rating</div>
    </section>
    <section id="leaderboard">{body}</section>
</body>
</html>
"""

    @staticmethod
    def _render_entry(row: DisplayRow) -> str:
        return f"""
            <div class="leaderboard-entry rank-{row.podium}">
                <div class="rank rank-{row.podium}">{row.position}</div>
                <div class="user-info">
                    <a href="{escape(row.profile_url)}" target="_blank" class="username">{escape(row.identifier)}</a>
                    <div class="user-details">{row.tier_title} &bull; Max: {row.max_rating}</div>
                </div>
                <div class="rating {row.tier_class}">{row.current_rating}</div>
                <div class="contests">{row.event_count} contests</div>
                <div class="change {row.change_class}">{row.change_text}</div>
            </div>
            """

    STYLES = """
        body { font-family: sans-serif; margin: 2rem auto; max-width: 960px; }
        .controls { display: flex; gap: 1rem; }
        .stats { display: flex; gap: 2rem; margin: 1rem 0; }
        .leaderboard-entry { display: grid; grid-template-columns: 3rem 1fr 6rem 8rem 4rem; align-items: center; padding: .5rem 0; border-bottom: 1px solid #eee; }
        .error-message { background: #fdecea; color: #b71c1c; padding: .5rem 1rem; margin: .5rem 0; }
        .loading { background: #e3f2fd; padding: .5rem 1rem; }
        .positive { color: #2e7d32; } .negative { color: #c62828; } .neutral { color: #757575; }
        .legendary-grandmaster, .international-grandmaster, .grandmaster { color: #ff0000; }
        .international-master, .master { color: #ff8c00; }
        .candidate-master { color: #aa00aa; } .expert { color: #0000ff; }
        .specialist { color: #03a89e; } .pupil { color: #008000; } .newbie { color: #808080; }
    """
