from __future__ import annotations

import importlib

from _paths import REPO_ROOT, ensure_import_paths

ensure_import_paths()

from config import get_settings_module  # noqa: E402

from registration_portal.database.bootstrap import apply_schema, list_tables  # noqa: E402


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    schema_path = REPO_ROOT / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
