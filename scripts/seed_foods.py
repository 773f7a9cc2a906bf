import argparse
import logging
import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from src.app.deps import build_repository, load_settings
from src.app.domain.errors import FoodSafetyError
from src.services.maintenance import DEFAULT_SEED_FILE, load_seed_file, seed_records


def main() -> int:
    parser = argparse.ArgumentParser(description="Load the initial food safety data into the store.")
    parser.add_argument("--file", type=pathlib.Path, default=ROOT / DEFAULT_SEED_FILE, help="JSON list of {pet, food, status, reason}")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    try:
        repo = build_repository(load_settings())
        items = load_seed_file(args.file)
        print(f"Seeding {len(items)} items from {args.file}...")
        seeded = seed_records(repo, items)
        total = len(repo.list_all())
    except (FoodSafetyError, ValueError, OSError) as error:
        print(f"Seeding failed: {error}", file=sys.stderr)
        return 1

    print(f"Seeded {seeded} items")
    print(f"Verification: {total} records in store")
    return 0


if __name__ == "__main__":
    sys.exit(main())
