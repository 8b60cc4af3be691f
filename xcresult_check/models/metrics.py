"""Models for derived run metrics."""

from pydantic import ConfigDict, NonNegativeInt
from pydantic.alias_generators import to_camel

from xcresult_check.models.base import Model


class Metrics(Model):
    """Test and build counters shown in the summary tables."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    tests_total: NonNegativeInt
    tests_passed: NonNegativeInt
    tests_failed: NonNegativeInt
    warnings: NonNegativeInt
    errors: NonNegativeInt
