from __future__ import annotations

from fintrack.job import main


if __name__ == "__main__":
    raise SystemExit(main())
