"""Create the database and tables from ``database/schema.sql``.

Pass ``--seed`` to also load the demo groups and the admin/staff accounts.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.tour_office.tour_office.database.bootstrap import (
    apply_schema,
    apply_seed_sql,
    ensure_demo_users,
    list_tables,
)


def main(argv: list[str]) -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    if "--seed" in argv:
        apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
        ensure_demo_users(db_config)

    tables = list_tables(db_config)
    print(
        f"OK: {db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/"
        f"{db_config.get('database')} tables={', '.join(sorted(tables))}"
    )


if __name__ == "__main__":
    main(sys.argv[1:])
