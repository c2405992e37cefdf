"""Filter composition utilities."""

from .filters import FilterBuilder, FilterExpression, Predicate, build_filter

__all__ = ["FilterBuilder", "FilterExpression", "Predicate", "build_filter"]
