"""Catalogue bounded context: products offered by the store."""

from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()


catalogue = Domain(name="catalogue")
