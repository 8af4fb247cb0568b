from __future__ import annotations

from linechart.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
