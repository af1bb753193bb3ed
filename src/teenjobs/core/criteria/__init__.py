"""Filter criteria for the job filter engine."""

from .date_range import DateRangeCriterion
from .duration import DurationCriterion
from .geo_radius import GeoRadiusConfig, GeoRadiusCriterion
from .location import LocationTextCriterion, location_tokens
from .pay_range import PayRangeCriterion
from .tags import TagCriterion

__all__ = [
    "DateRangeCriterion",
    "DurationCriterion",
    "GeoRadiusConfig",
    "GeoRadiusCriterion",
    "LocationTextCriterion",
    "PayRangeCriterion",
    "TagCriterion",
    "location_tokens",
]
