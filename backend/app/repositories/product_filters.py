"""
Typed filter predicates for catalog queries.

A ProductQueryBuilder collects predicate objects and compiles them once into
a single boolean clause. Every builder starts with the "active only"
predicate, so no combination of filters can surface an inactive product.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from app.models.product import Product


class Predicate(ABC):
    @abstractmethod
    def compile(self) -> ColumnElement:
        """Return the SQL boolean clause for this filter."""


@dataclass(frozen=True)
class Equals(Predicate):
    column: Any
    value: Any

    def compile(self):
        return self.column == self.value


@dataclass(frozen=True)
class Between(Predicate):
    """Inclusive range; either bound may be open."""

    column: Any
    low: Any = None
    high: Any = None

    def compile(self):
        clauses = []
        if self.low is not None:
            clauses.append(self.column >= self.low)
        if self.high is not None:
            clauses.append(self.column <= self.high)
        return and_(true(), *clauses)


@dataclass(frozen=True)
class TextSearch(Predicate):
    """Case-insensitive substring match against any of the columns."""

    columns: Tuple[Any, ...]
    term: str

    def compile(self):
        # the term is literal text; LIKE wildcards in it match only themselves
        term = self.term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        like = f"%{term}%"
        return or_(*[c.ilike(like, escape="\\") for c in self.columns])


class ProductQueryBuilder:
    def __init__(self):
        self._predicates: List[Predicate] = [Equals(Product.is_active, True)]

    def where(self, predicate: Predicate) -> "ProductQueryBuilder":
        self._predicates.append(predicate)
        return self

    def equals(self, column, value) -> "ProductQueryBuilder":
        # None means "not filtered"; False is a real filter value
        if value is not None:
            self.where(Equals(column, value))
        return self

    def between(self, column, low=None, high=None) -> "ProductQueryBuilder":
        if low is not None or high is not None:
            self.where(Between(column, low, high))
        return self

    def search(self, term: Optional[str], *columns) -> "ProductQueryBuilder":
        if term:
            self.where(TextSearch(tuple(columns), term))
        return self

    @property
    def predicates(self) -> List[Predicate]:
        return list(self._predicates)

    def compile(self) -> ColumnElement:
        return and_(*[p.compile() for p in self._predicates])


# sortBy value -> ORDER BY; anything unknown falls back to "newest".
# id is the tiebreak so pages stay stable between requests.
SORT_ORDERS = {
    "price-asc": (Product.price.asc(), Product.id.asc()),
    "price-desc": (Product.price.desc(), Product.id.asc()),
    "rating": (Product.rating.desc(), Product.id.asc()),
    "popular": (Product.review_count.desc(), Product.id.asc()),
    "newest": (Product.created_at.desc(), Product.id.asc()),
}
DEFAULT_SORT = "newest"


def sort_order(sort_by: Optional[str]):
    return SORT_ORDERS.get(sort_by or DEFAULT_SORT, SORT_ORDERS[DEFAULT_SORT])
