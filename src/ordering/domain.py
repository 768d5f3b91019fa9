"""Ordering bounded context: order placement, tracking and administration.

Orders are a standard CQRS aggregate (not event sourced): the current state is
stored and mutated in place, and domain events record what happened.
"""

from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()


ordering = Domain(name="ordering")
