import argparse
import sys
from typing import List, Optional

from itcexam.config import set_log_level
from itcexam.errors import ParseError
from itcexam.evaluation import summary
from itcexam.io_utils import load_problem
from itcexam.tables import save_instance_csv


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="ITC2007 exam instance loader")
    p.add_argument('instance', type=str, help='ITC2007 exam-track instance file (.exam)')
    p.add_argument('--export', type=str, default=None,
                   help='Directory to write exams/periods/rooms/... CSV tables into')
    p.add_argument('--log-level', type=str, default=None, help='DEBUG | INFO | WARNING | ERROR')
    args = p.parse_args(argv)

    if args.log_level:
        try:
            set_log_level(args.log_level)
        except ValueError as e:
            p.error(str(e))

    try:
        instance = load_problem(args.instance)
    except ParseError as e:
        print(f"{args.instance}: {e}", file=sys.stderr)
        return 2

    print(summary(instance))

    if args.export:
        paths = save_instance_csv(args.export, instance)
        print(f"Saved: {', '.join(paths)}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
