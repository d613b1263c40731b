from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from app.core.config import settings


def _connect_args() -> dict:
    # statement_timeout is the per-call deadline for every query on the connection
    if settings.DATABASE_URL.startswith("postgresql") and settings.DB_STATEMENT_TIMEOUT_MS:
        return {"options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"}
    return {}


# Create engine
# For PostgreSQL, we might need to adjust pool_size and max_overflow in production
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.SQL_ECHO,
    connect_args=_connect_args(),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
