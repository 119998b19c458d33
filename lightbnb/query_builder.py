"""
Property search assembly.

Filters are turned into an ordered tuple of WHERE predicates and an ordered
tuple of HAVING predicates. Each predicate is a SQLAlchemy expression that
carries its own bound parameter, so no filter value is ever rendered into the
SQL text.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy import func
from sqlalchemy.sql.elements import ColumnElement

import lightbnb.models_sqlalchemy as models
from lightbnb.models_pydantic import PropertyFilters

CENTS_PER_DOLLAR = 100

average_rating = func.avg(models.PropertyReview.rating)


def to_cents(amount: float) -> int:
    return int(round(amount * CENTS_PER_DOLLAR))


@dataclass(frozen=True)
class PropertySearch:
    where: Tuple[ColumnElement, ...] = ()
    having: Tuple[ColumnElement, ...] = ()

    def params(self):
        """Bound values in the order they appear in the statement."""
        values = []
        for clause in self.where + self.having:
            values.extend(clause.compile().params.values())
        return values


def build_property_search(filters: Optional[PropertyFilters]) -> PropertySearch:
    if filters is None:
        return PropertySearch()

    where = []
    if filters.city:
        where.append(models.Property.city.like(f"%{filters.city}%"))

    if filters.owner_id:
        where.append(models.Property.owner_id == filters.owner_id)

    # price range only applies when both bounds are given
    if filters.minimum_price_per_night and filters.maximum_price_per_night:
        where.append(
            models.Property.cost_per_night.between(
                to_cents(filters.minimum_price_per_night),
                to_cents(filters.maximum_price_per_night),
            )
        )

    having = []
    if filters.minimum_rating:
        having.append(average_rating >= filters.minimum_rating)

    return PropertySearch(where=tuple(where), having=tuple(having))
