import pytest
from decimal import Decimal

from costboard.modules.dashboard.service import DashboardService
from costboard.modules.reporting.domain.executive import build_executive_kpis
from costboard.modules.reporting.domain.summary import SummaryBuilder
from costboard.schemas.costs import Platform
from costboard.schemas.dashboard import DashboardSnapshot
from costboard.schemas.resources import ResourceQuery
from costboard.shared.core.exceptions import InsufficientDataError, InvalidParameterError
from conftest import make_recommendation, make_trend


@pytest.fixture
def snapshot(scenario_records, inventory, sample_recommendations):
    return DashboardSnapshot(
        cost_records=scenario_records,
        resources=inventory,
        recommendations=sample_recommendations,
        trend=make_trend([100] * 7 + [110] * 7, [50] * 14),
    )


class TestExecutiveKPIs:

    def test_kpis(self, scenario_records, sample_recommendations):
        summary = SummaryBuilder.build_summary(scenario_records, 0)
        kpis = build_executive_kpis(summary, sample_recommendations)

        assert kpis.total_savings_opportunity == Decimal("5100")
        assert kpis.high_priority_count == 2
        # 5100 / 450 -> savings exceed spend, score floors at zero
        assert kpis.savings_percentage == Decimal("1133.3")
        assert kpis.optimization_score == Decimal("0")
        assert kpis.aws_share == Decimal("66.7")
        assert kpis.azure_share == Decimal("33.3")

    def test_score_when_savings_are_small(self, make_record):
        summary = SummaryBuilder.build_summary([make_record("a", "aws", "EC2", 10000)], 0)
        kpis = build_executive_kpis(summary, [make_recommendation("r", "scheduling", 1500, 2)])

        assert kpis.savings_percentage == Decimal("15.0")
        assert kpis.optimization_score == Decimal("85.0")
        assert kpis.high_priority_count == 0

    def test_no_recommendations(self, scenario_records):
        summary = SummaryBuilder.build_summary(scenario_records, 0)
        kpis = build_executive_kpis(summary, [])
        assert kpis.total_savings_opportunity == Decimal("0")
        assert kpis.optimization_score == Decimal("100.0")


class TestExecutiveView:

    def test_view(self, snapshot):
        view = DashboardService().executive_view(snapshot)

        # (7 x 160) vs (7 x 150)
        assert view.summary.monthly_trend == Decimal("6.7")
        assert view.summary.total_cost == Decimal("450")
        assert view.trend.average == Decimal("155")
        assert view.trend.projected_monthly == Decimal("4650")
        assert [r.id for r in view.recommendations] == ["opt-3", "opt-1", "opt-2", "opt-4"]
        assert view.kpis.high_priority_count == 2

    def test_without_trend(self, snapshot):
        view = DashboardService().executive_view(snapshot.model_copy(update={"trend": ()}))
        assert view.trend is None
        assert view.summary.monthly_trend == Decimal("0")

    def test_requires_cost_records(self, snapshot):
        with pytest.raises(InsufficientDataError):
            DashboardService().executive_view(snapshot.model_copy(update={"cost_records": ()}))


class TestAdminView:

    def test_view(self, snapshot):
        view = DashboardService().admin_view(snapshot, {"status": "stopped", "sort_field": "name", "sort_dir": "asc"})

        assert [(g.platform, g.resource_type) for g in view.cost_groups] == [
            (Platform.AWS, "EC2"), (Platform.AWS, "S3"), (Platform.AZURE, "VM")
        ]
        assert [r.id for r in view.recommendations] == ["opt-1", "opt-3", "opt-2", "opt-4"]
        assert view.total_potential_savings == Decimal("5100")
        assert view.resources.total_matched == 5
        assert view.resources.items[0].name == "ec2-prod-00"

    def test_platform_narrows_groups_not_summary(self, snapshot):
        view = DashboardService().admin_view(snapshot, platform="azure")
        assert [g.platform for g in view.cost_groups] == [Platform.AZURE]
        assert view.summary.total_cost == Decimal("450")

    def test_recommendation_filter_keeps_headline_total(self, snapshot):
        view = DashboardService().admin_view(snapshot, recommendation_type="rightsizing")
        assert [r.id for r in view.recommendations] == ["opt-1"]
        assert view.total_potential_savings == Decimal("5100")

    def test_bad_query_rejected(self, snapshot):
        with pytest.raises(InvalidParameterError):
            DashboardService().admin_view(snapshot, {"platform": "oracle"})

    def test_platform_narrows_resources(self, snapshot):
        view = DashboardService().admin_view(snapshot, platform="aws")
        assert view.resources.total_matched == 13
        assert {r.platform for r in view.resources.items} == {Platform.AWS}

    def test_platform_joins_query_options(self, snapshot):
        view = DashboardService().admin_view(snapshot, {"status": "stopped"}, platform="azure")
        # stopped resources are i % 5 == 0; the azure ones are 5 and 15
        assert [r.id for r in view.resources.items] == ["res-15", "res-5"]

    def test_matching_query_platform_accepted(self, snapshot):
        view = DashboardService().admin_view(snapshot, ResourceQuery(platform="aws"), platform="aws")
        assert view.resources.total_matched == 13

    def test_conflicting_query_platform_rejected(self, snapshot):
        with pytest.raises(InvalidParameterError) as exc:
            DashboardService().admin_view(snapshot, {"platform": "azure"}, platform="aws")
        assert exc.value.details["parameter"] == "platform"

    def test_all_platforms_keeps_query(self, snapshot):
        view = DashboardService().admin_view(snapshot, {"platform": "azure"}, platform="all")
        assert view.resources.total_matched == 12
        assert [g.platform for g in view.cost_groups] == [Platform.AWS, Platform.AWS, Platform.AZURE]


class TestMonthlyTrend:

    def test_short_trend_is_decimal_zero(self, snapshot):
        trend = DashboardService().monthly_trend(snapshot.model_copy(update={"trend": snapshot.trend[:1]}))
        assert isinstance(trend, Decimal)
        assert trend == Decimal("0")

    def test_comparable_trend(self, snapshot):
        assert DashboardService().monthly_trend(snapshot) == Decimal("6.7")


class TestExecutiveChartFilter:

    def test_series_cover_all_platforms_by_default(self, snapshot):
        view = DashboardService().executive_view(snapshot)
        assert [p.name for p in view.cost_series] == [r.resource_name for r in snapshot.cost_records]
        assert [(p.platform, p.cost) for p in view.platform_series] == [
            (Platform.AWS, Decimal("300")),
            (Platform.AZURE, Decimal("150")),
        ]

    def test_platform_narrows_series_not_summary(self, snapshot):
        view = DashboardService().executive_view(snapshot, platform="aws")

        assert {p.platform for p in view.cost_series} == {Platform.AWS}
        assert len(view.cost_series) == 2
        assert [(p.platform, p.cost) for p in view.platform_series] == [
            (Platform.AWS, Decimal("300")),
            (Platform.AZURE, Decimal("0")),
        ]
        assert view.summary.total_cost == Decimal("450")
        assert view.kpis.azure_share == Decimal("33.3")

    def test_unknown_platform_rejected(self, snapshot):
        with pytest.raises(InvalidParameterError):
            DashboardService().executive_view(snapshot, platform="gcp")
