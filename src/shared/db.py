"""Schema management for domains persisted through SQLAlchemy providers.

The in-memory provider needs no schema, so domains configured with it are
skipped.
"""

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

logger = structlog.get_logger(__name__)

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield provider


def setup_db(domain: Domain) -> int:
    """Create tables for every aggregate and entity; returns the providers touched."""
    touched = 0
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            # Touching ``_dao`` registers each model with the provider's metadata.
            for record in (*domain.registry.aggregates.values(), *domain.registry.entities.values()):
                if record.cls.meta_.provider == provider.name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)
            logger.info("Schema created", domain=domain.name, provider=provider.name)
            touched += 1
    return touched


def drop_db(domain: Domain) -> int:
    touched = 0
    with domain.domain_context():
        for provider in _sql_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            logger.info("Schema dropped", domain=domain.name, provider=provider.name)
            touched += 1
    return touched
