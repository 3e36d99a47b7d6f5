"""Dump the tour office database with ``mysqldump``.

The dump lands in ``backups/<database>_<timestamp>.sql`` at the repo root.
Without the MySQL client tools, back up with MySQL Workbench instead.
"""

from __future__ import annotations

import importlib
import os
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db = settings.DB_CONFIG

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / f"{db['database']}_{datetime.now():%Y%m%d_%H%M%S}.sql"

    cmd = [
        "mysqldump",
        f"--host={db['host']}",
        f"--port={db.get('port', 3306)}",
        f"--user={db['user']}",
        "--single-transaction",
        "--default-character-set=utf8mb4",
        db["database"],
    ]
    # Password via env so it does not show up in the process list.
    env = {**os.environ, "MYSQL_PWD": str(db.get("password", ""))}

    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, check=True, env=env)
    except FileNotFoundError:
        out_file.unlink(missing_ok=True)
        raise SystemExit("`mysqldump` bulunamadı. MySQL istemci araçlarını kurun veya Workbench ile yedek alın.")
    except subprocess.CalledProcessError as e:
        out_file.unlink(missing_ok=True)
        raise SystemExit(f"Yedekleme başarısız: {e.stderr.decode('utf-8', 'replace').strip()}")

    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
