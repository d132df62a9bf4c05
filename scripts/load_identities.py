"""Load reviewer identity mappings from a YAML file into the database."""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env.local
env_path = Path(__file__).parent.parent / ".env.local"
load_dotenv(env_path)

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from review_relay.database.db import SessionLocal, init_db  # noqa: E402
from review_relay.database.identities import (  # noqa: E402
    load_identity_map,
    sync_identities,
)


def load_identities(mapping_file: Path) -> bool:
    """Sync the identity table with ``mapping_file``."""
    if not mapping_file.exists():
        print(f" Error: {mapping_file} not found")
        return False

    try:
        mapping = load_identity_map(mapping_file)
    except ValueError as e:
        print(f" Error: {e}")
        return False

    print(f"🔧 Loaded {len(mapping)} mappings from {mapping_file}")
    unmapped = sorted(name for name, member_id in mapping.items() if not member_id)
    if unmapped:
        print(f"   Without chat id (never mentioned): {', '.join(unmapped)}")

    init_db()
    db = SessionLocal()
    try:
        created, updated = sync_identities(db, mapping)
    finally:
        db.close()

    print(f" Created: {created}")
    print(f" Updated: {updated}")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Load GitHub username -> Slack member id mappings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/load_identities.py identities.yaml
        """,
    )
    parser.add_argument("mapping_file", type=Path, help="YAML file of username: member id")

    args = parser.parse_args()
    success = load_identities(args.mapping_file)
    sys.exit(0 if success else 1)
