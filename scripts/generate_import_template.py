from __future__ import annotations

import argparse
from pathlib import Path

from attendance_console.common.datetime_utils import today_local
from attendance_console.spreadsheets.attendance_sheet import build_import_template


def main() -> None:
    parser = argparse.ArgumentParser(description="Write the attendance import template workbook.")
    parser.add_argument("output", nargs="?", default="attendance_import_template.xlsx")
    parser.add_argument("--no-instructions", action="store_true", help="omit the Instructions sheet")
    args = parser.parse_args()

    out = Path(args.output)
    out.write_bytes(build_import_template(today=today_local(), include_instructions=not args.no_instructions))
    print(f"OK: wrote {out}")


if __name__ == "__main__":
    main()
