
import sys
import os
import traceback

# Add project root to path
sys.path.append(os.getcwd())

print("Starting verification...")

try:
    from app.core import config
    print(f"Config imported. Timezone: {config.settings.CINEMA_TIMEZONE}")

    from sqlalchemy.orm import configure_mappers

    # Import Base last (and all models)
    from app.db.base import Base
    print("Base imported. Models loaded.")

    print("Checking ORM mappings...")
    configure_mappers()
    print("SUCCESS: ORM mappings are valid.")

    # Compile the DDL against the postgres dialect without connecting
    from sqlalchemy.dialects import postgresql
    from sqlalchemy.schema import CreateTable

    dialect = postgresql.dialect()
    for table in Base.metadata.sorted_tables:
        CreateTable(table).compile(dialect=dialect)
        print(f"DDL ok: {table.name}")

    expected = {"apartments", "users", "slot_templates", "daily_slots", "cinema_reservations", "reservation_slots"}
    missing = expected - set(Base.metadata.tables)
    if missing:
        raise RuntimeError(f"missing tables: {sorted(missing)}")

except Exception:
    print("FAILURE: Model verification failed.")
    traceback.print_exc()
    sys.exit(1)
