"""
Tests for RenderService rows and page output.
"""
from schemas import FilterBand, ProfileRecord
from services.leaderboard_service import LeaderboardAggregator
from services.render_service import RenderService


def make_snapshot():
    return LeaderboardAggregator.build_snapshot([
        ProfileRecord(identifier="legend", current_rating=3100, max_rating=3300, rating_delta=25, event_count=90),
        ProfileRecord(identifier="expert", current_rating=1650, max_rating=1700, rating_delta=-40, event_count=30),
        ProfileRecord(identifier="mid", current_rating=1450, max_rating=1500, event_count=12),
        ProfileRecord(identifier="pupil", current_rating=1250, max_rating=1300, rating_delta=8, event_count=5),
        ProfileRecord(identifier="fresh", current_rating=0),
    ])


class TestRenderRows:

    def test_all_rows_in_snapshot_order(self):
        rows = RenderService.render_rows(make_snapshot())
        assert [row.identifier for row in rows] == ["legend", "expert", "mid", "pupil", "fresh"]
        assert [row.position for row in rows] == [1, 2, 3, 4, 5]
        assert [row.podium for row in rows] == [1, 2, 3, 3, 3]

    def test_row_fields(self):
        legend = RenderService.render_rows(make_snapshot())[0]
        assert legend.tier_title == "Legendary Grandmaster"
        assert legend.tier_class == "legendary-grandmaster"
        assert legend.change_text == "+25"
        assert legend.change_class == "positive"
        assert legend.max_rating == 3300
        assert legend.event_count == 90
        assert legend.profile_url.endswith("/profile/legend")

    def test_filter_keeps_positions(self):
        rows = RenderService.render_rows(make_snapshot(), FilterBand.SPECIALIST)
        assert [(row.identifier, row.position) for row in rows] == [("mid", 3)]

    def test_expert_band_includes_everyone_above(self):
        rows = RenderService.render_rows(make_snapshot(), FilterBand.EXPERT)
        assert [row.identifier for row in rows] == ["legend", "expert"]

    def test_newbie_band_includes_unrated(self):
        rows = RenderService.render_rows(make_snapshot(), FilterBand.NEWBIE)
        assert [row.identifier for row in rows] == ["fresh"]

    def test_filter_does_not_touch_snapshot(self):
        snapshot = make_snapshot()
        RenderService.render_rows(snapshot, FilterBand.PUPIL)
        assert snapshot.count == 5
        assert len(snapshot.ordered_records) == 5


class TestRenderPage:

    def test_page_contains_stats_and_rows(self):
        html = RenderService.render_page(make_snapshot(), refresh_seconds=60)
        assert '<meta http-equiv="refresh" content="60">' in html
        assert '<span id="totalUsers">5</span>' in html
        assert '<span id="maxRating">3100</span>' in html
        assert "legend" in html
        assert "Refresh Data" in html

    def test_selected_band(self):
        html = RenderService.render_page(make_snapshot(), band=FilterBand.PUPIL)
        assert '<option value="pupil" selected>' in html
        assert "legend</a>" not in html
        assert 'action="/refresh?band=pupil"' in html

    def test_refresh_action_without_band(self):
        html = RenderService.render_page(make_snapshot())
        assert 'action="/refresh"' in html

    def test_empty_state(self):
        html = RenderService.render_page(LeaderboardAggregator.build_snapshot([]))
        assert "No Data Available" in html

    def test_loading_and_messages(self):
        html = RenderService.render_page(
            make_snapshot(),
            is_refreshing=True,
            error="Failed to update leaderboard: <boom>",
            warning="Failed to load data from Google Sheets: down",
        )
        assert 'id="loading"' in html
        assert "Loading..." in html
        assert "&lt;boom&gt;" in html
        assert "Google Sheets: down" in html
