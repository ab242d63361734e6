"""CLI entry: python -m audit"""

import argparse
import logging
import sys
from pathlib import Path

from audit.runner import run_all_checks
from audit.report import write_json_report, format_text_report


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m audit",
        description="Audit calculator invariants over a grid of scenarios.")
    parser.add_argument("--json", type=Path, default=None,
                        help="write a JSON report to this path")
    parser.add_argument("--failures-only", action="store_true",
                        help="only write failing checks to the JSON report")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="debug logging (per-pass reconcile traces)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("Running audit...")
    audit_data = run_all_checks()

    print(format_text_report(audit_data))

    if args.json is not None:
        json_path = write_json_report(audit_data, args.json,
                                      failures_only=args.failures_only)
        print(f"\nJSON report written to: {json_path}")

    return 0 if audit_data["summary"]["arithmetic_fail"] == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
