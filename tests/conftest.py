import os
# Pin analytics settings for all tests BEFORE any costboard imports
os.environ["ENVIRONMENT"] = "development"
os.environ["TESTING"] = "True"
os.environ["TOP_COST_DRIVERS"] = "5"
os.environ["PROJECTION_DAYS"] = "30"
os.environ["DEFAULT_PAGE_SIZE"] = "10"
os.environ["PERCENTAGE_PRECISION"] = "1"
os.environ["TREND_WINDOW_DAYS"] = "7"

import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from costboard.schemas.costs import CostRecord
from costboard.schemas.recommendations import OptimizationRecommendation
from costboard.schemas.resources import CloudResource
from costboard.schemas.trends import TrendPoint

PERIOD = {
    "start": datetime(2026, 1, 1, tzinfo=timezone.utc),
    "end": datetime(2026, 1, 31, tzinfo=timezone.utc),
}


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Every test sees settings built from the current environment."""
    from costboard.shared.core.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_cost_record(record_id, platform, resource_type, cost, name=None, **extra):
    return CostRecord(
        id=record_id,
        platform=platform,
        resource_type=resource_type,
        resource_name=name or f"{resource_type.lower()}-prod-{record_id}",
        cost=cost,
        period=PERIOD,
        **extra
    )


def make_resource(resource_id, name, resource_type="EC2", platform="aws", status="running",
                  utilization=50, cost=100):
    return CloudResource(
        id=resource_id,
        name=name,
        type=resource_type,
        platform=platform,
        region="us-east-1" if platform == "aws" else "East US",
        status=status,
        utilization=utilization,
        cost=cost,
        last_updated=datetime(2026, 1, 31, tzinfo=timezone.utc)
    )


def make_recommendation(rec_id, rec_type, savings, priority, effort="medium"):
    return OptimizationRecommendation(
        id=rec_id,
        type=rec_type,
        title=f"Recommendation {rec_id}",
        description="",
        potential_savings=savings,
        effort=effort,
        resources=[],
        priority=priority
    )


def make_trend(totals_aws, totals_azure=None, start=date(2026, 1, 1)):
    totals_azure = totals_azure or [0] * len(totals_aws)
    return [
        TrendPoint(date=start + timedelta(days=i), aws=aws, azure=azure)
        for i, (aws, azure) in enumerate(zip(totals_aws, totals_azure))
    ]


@pytest.fixture
def scenario_records():
    """Three records: two AWS, one Azure (450 total)."""
    return [
        make_cost_record("aws-1", "aws", "EC2", 100),
        make_cost_record("aws-2", "aws", "S3", 200),
        make_cost_record("azure-1", "azure", "VM", 150),
    ]


@pytest.fixture
def sample_recommendations():
    """Savings [1200, 800, 2500, 600] with priorities [1, 2, 1, 3]."""
    return [
        make_recommendation("opt-1", "rightsizing", 1200, 1),
        make_recommendation("opt-2", "scheduling", 800, 2, effort="low"),
        make_recommendation("opt-3", "reserved-instances", 2500, 1, effort="low"),
        make_recommendation("opt-4", "storage-optimization", 600, 3),
    ]


@pytest.fixture
def inventory():
    """25 resources with distinct costs so orderings are unambiguous."""
    resources = []
    for i in range(25):
        platform = "aws" if i % 2 == 0 else "azure"
        resources.append(make_resource(
            f"res-{i}",
            name=f"{'ec2' if platform == 'aws' else 'vm'}-prod-{i:02d}",
            resource_type="EC2" if platform == "aws" else "Virtual Machines",
            platform=platform,
            status="stopped" if i % 5 == 0 else "running",
            utilization=(i * 7) % 101,
            cost=Decimal(100 + i * 10)
        ))
    return resources


@pytest.fixture
def make_record():
    return make_cost_record
