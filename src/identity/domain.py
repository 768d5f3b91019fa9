"""Identity bounded context: customer accounts, administrators and credentials."""

from protean.domain import Domain

from shared.logging import configure_logging

configure_logging()


identity = Domain(name="identity")
