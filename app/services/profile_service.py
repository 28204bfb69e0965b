"""Static candidate catalogue served to the swipe stack."""

import asyncio

from app.config import settings
from app.schemas.profile import Profile

PROFILES: list[Profile] = [
    Profile(
        id=1,
        name="Sarah",
        age=21,
        image="/girl-1.jpg",
        bio="Love hiking and coffee ☕",
        location="2 miles away",
        interests=["hiking", "coffee", "photography"],
    ),
    Profile(
        id=2,
        name="Jessica",
        age=23,
        image="/girl-2.png",
        images=["/girl-24.png", "/girl-22.png", "/girl-23.png", "/girl-25.png"],
        bio="Artist and dog lover 🎨🐕",
        location="5 miles away",
        interests=["art", "dogs", "music"],
    ),
    Profile(
        id=3,
        name="Emma",
        age=25,
        image="/girl-3.jpg",
        bio="Yoga instructor and foodie 🧘‍♀️",
        location="3 miles away",
        interests=["yoga", "cooking", "travel"],
    ),
    Profile(
        id=4,
        name="Olivia",
        age=24,
        image="/girl-4.jpg",
        bio="Marketing professional who loves weekend adventures",
        location="1 mile away",
        interests=["marketing", "adventure", "wine"],
    ),
    Profile(
        id=5,
        name="Sophia",
        age=26,
        image="/girl-5.jpg",
        bio="Bookworm and coffee enthusiast",
        location="4 miles away",
        interests=["reading", "coffee", "writing"],
    ),
]


async def list_profiles(
    profiles: list[Profile] | None = None,
    delay_ms: int | None = None,
) -> list[Profile]:
    """Return the catalogue after the simulated listing delay."""
    if delay_ms is None:
        delay_ms = settings.PROFILES_DELAY_MS
    await asyncio.sleep(delay_ms / 1000)
    return list(PROFILES if profiles is None else profiles)
