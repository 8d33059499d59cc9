import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

import config
from database import Database
from execution import Execution
from output import OutputWriter
from schemas import ReplayInput

logger = logging.getLogger(__name__)


def load_input(path: Path) -> ReplayInput:
    with path.open("r", encoding="utf-8") as f:
        return ReplayInput.model_validate(json.load(f))


def replay(data: ReplayInput) -> OutputWriter:
    execution = Execution(Database.from_input(data))
    return execution.run(data.actions)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="movieverse", description=f"{config.APP_NAME}: replay a recorded action log")
    p.add_argument("input", type=Path, help="JSON file with users, movies and actions")
    p.add_argument("output", type=Path, nargs="?", help="Where to write the results (default: stdout)")
    p.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level (default: %(default)s)")
    p.add_argument("--version", action="version", version=f"%(prog)s {config.APP_VERSION}")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config.configure_logging(args.log_level)

    try:
        data = load_input(args.input)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Cannot read %s: %s", args.input, e)
        return 1
    except ValidationError as e:
        logger.error("Invalid replay input in %s:\n%s", args.input, e)
        return 1

    logger.info("Replaying %d action(s) over %d movie(s) and %d user(s)",
                len(data.actions), len(data.movies), len(data.users))
    writer = replay(data)
    if args.output is None:
        writer.dump(sys.stdout)
    else:
        writer.dump(args.output)
    logger.info("Wrote %d record(s)", len(writer))
    return 0


if __name__ == "__main__":
    sys.exit(main())
