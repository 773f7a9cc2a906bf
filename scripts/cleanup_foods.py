import argparse
import logging
import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.app.deps import build_repository, load_settings
from src.app.domain.errors import FoodSafetyError
from src.services.maintenance import BAD_ENTRY_MARKER, cleanup_bad_entries


def main() -> int:
    parser = argparse.ArgumentParser(description="Delete unknown records left behind by failed AI calls.")
    parser.add_argument("--marker", default=BAD_ENTRY_MARKER, help="Substring of the reason that marks a bad entry")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    try:
        repo = build_repository(load_settings())
        deleted = cleanup_bad_entries(repo, marker=args.marker)
        remaining = repo.list_all()
    except FoodSafetyError as error:
        print(f"Cleanup failed: {error}", file=sys.stderr)
        return 1

    print(f"Deleted {deleted} bad entries")
    print(f"Remaining records: {len(remaining)}")
    for record in remaining:
        print(f"  - {record.pet} + {record.food} = {record.status.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
