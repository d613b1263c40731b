from datetime import time

import psycopg2
from psycopg2.extensions import ISOLATION_LEVEL_AUTOCOMMIT
from sqlalchemy.orm import Session

from app.core.config import settings, SlotTemplateConfig
from app.models.slot import SlotTemplate
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def create_database():
    """Create database if it doesn't exist."""
    if not settings.DATABASE_URL.startswith("postgresql"):
        logger.info("Non-PostgreSQL database configured, skipping database creation.")
        return

    try:
        # Connect to default 'postgres' database to check/create target DB
        con = psycopg2.connect(
            user=settings.POSTGRES_USER,
            password=settings.POSTGRES_PASSWORD,
            host=settings.POSTGRES_SERVER,
            port=settings.POSTGRES_PORT,
            dbname="postgres"
        )
        con.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
        cur = con.cursor()

        # Check if DB exists
        cur.execute("SELECT 1 FROM pg_catalog.pg_database WHERE datname = %s", (settings.POSTGRES_DB,))
        exists = cur.fetchone()

        if not exists:
            logger.info(f"Database {settings.POSTGRES_DB} does not exist. Creating...")
            cur.execute(f'CREATE DATABASE "{settings.POSTGRES_DB}"')
            logger.info(f"Database {settings.POSTGRES_DB} created successfully.")
        else:
            logger.info(f"Database {settings.POSTGRES_DB} already exists.")

        cur.close()
        con.close()
    except psycopg2.Error as e:
        logger.error(f"Error creating database: {e}")
        # Proceeding anyway, maybe it exists or connection params are for the target DB directly


def _parse_time(value: str) -> time:
    return time.fromisoformat(value)


def seed_slot_templates(db: Session, templates: list[SlotTemplateConfig] | None = None) -> int:
    """
    Sync configured slot templates into ``slot_templates``.

    Templates are matched by position. Existing rows get their code,
    time-of-day and active flag refreshed from configuration; stored
    positions missing from configuration are deactivated, never deleted.
    Returns the number of templates inserted.
    """
    templates = settings.SLOT_TEMPLATES if templates is None else templates
    existing = {t.position: t for t in db.query(SlotTemplate).all()}

    created = 0
    for cfg in templates:
        row = existing.get(cfg.position)
        if row is None:
            db.add(SlotTemplate(
                code=cfg.code,
                start_time=_parse_time(cfg.start_time),
                end_time=_parse_time(cfg.end_time),
                position=cfg.position,
                is_active=cfg.is_active,
            ))
            created += 1
        else:
            row.code = cfg.code
            row.start_time = _parse_time(cfg.start_time)
            row.end_time = _parse_time(cfg.end_time)
            row.is_active = cfg.is_active

    # positions dropped from configuration stop being materialized
    configured = {cfg.position for cfg in templates}
    for position, row in existing.items():
        if position not in configured and row.is_active:
            row.is_active = False
            logger.info("Deactivated slot template at position %d.", position)

    db.commit()
    if created:
        logger.info("Seeded %d slot template(s).", created)
    return created


if __name__ == "__main__":
    create_database()
