from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for extra in (REPO_ROOT, REPO_ROOT / "src" / "staff_attendance"):
    if str(extra) not in sys.path:
        sys.path.insert(0, str(extra))

from staff_attendance.database.bootstrap import apply_schema, list_tables
from staff_attendance.database.connection import DatabaseConnection, DBConfig
from staff_attendance.main import load_settings


def main() -> None:
    settings = load_settings()
    conn = DatabaseConnection(DBConfig.from_mapping(settings.DB_CONFIG))

    apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(conn)
    cfg = conn.config
    print(f"OK: Applied schema.sql -> {cfg.user}@{cfg.host}:{cfg.port}/{cfg.database} (tables={len(tables)})")


if __name__ == "__main__":
    main()
