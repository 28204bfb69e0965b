"""
Seed script to populate the local match storage with demo matches.
Run with: python scripts/seed_matches.py [count]
"""

import asyncio
import random
import sys
from pathlib import Path

# Add parent directory to path so we can import app
sys.path.insert(0, str(Path(__file__).parent.parent))

from faker import Faker

from app.core.resilience import with_retry, with_timeout
from app.database import async_session_maker, engine, init_db
from app.services.match_store import MatchStore
from app.services.storage_service import SqlKeyValueStore

fake = Faker()

# Configuration
NUM_MATCHES = 25
MESSAGE_RATIO = 0.5  # Share of matches that get a last message
UNMATCH_RATIO = 0.1


def fake_profile(profile_id: int) -> dict:
    return {
        "id": profile_id,
        "name": fake.first_name(),
        "age": random.randint(18, 45),
        "image": fake.image_url(),
        "images": [fake.image_url() for _ in range(random.randint(0, 3))],
        "bio": fake.sentence(nb_words=8),
        "location": f"{random.randint(1, 20)} miles away",
        "interests": fake.words(nb=3, unique=True),
    }


async def main(count: int) -> None:
    await with_retry(init_db, max_retries=3, delay=0.5)
    store = MatchStore(SqlKeyValueStore(async_session_maker))
    await store.load()
    if store.error:
        print(f"Warning: {store.error}")

    existing_ids = {match.profile.id for match in store.matches}
    next_id = max(existing_ids, default=100) + 1

    print(f"Creating {count} demo matches...")
    created = []
    for i in range(count):
        match = store.add_match(fake_profile(next_id + i))
        if match is None:
            print(f"  Skipped profile {next_id + i}: {store.error}")
            continue
        created.append(match)

        if random.random() < MESSAGE_RATIO:
            store.add_message(match.id, fake.sentence(), from_user=random.choice([True, False]))

    unmatched = random.sample(created, k=int(len(created) * UNMATCH_RATIO))
    for match in unmatched:
        store.unmatch(match.id)

    await with_timeout(store.flush, timeout=10.0)
    info = await store.get_storage_info()

    print("\n" + "=" * 50)
    print("Summary:")
    print("=" * 50)
    print(f"  Matches created: {len(created)}")
    print(f"    - Unmatched: {len(unmatched)}")
    print(f"  Active matches: {info.match_count}")
    print(f"  Storage used: {info.storage_used}")
    print("=" * 50)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main(int(sys.argv[1]) if len(sys.argv) > 1 else NUM_MATCHES))
