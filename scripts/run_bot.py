from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for extra in (REPO_ROOT, REPO_ROOT / "src" / "staff_attendance"):
    if str(extra) not in sys.path:
        sys.path.insert(0, str(extra))

from staff_attendance.bot.main import run_bot

if __name__ == "__main__":
    run_bot()
