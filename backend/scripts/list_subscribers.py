import asyncio
import sys
import os

# Add the parent directory to sys.path to allow importing from 'newsdesk'
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from newsdesk.database import AsyncSessionLocal
from newsdesk.services.subscriber_directory import count_by_category, list_subscribers


async def main():
    async with AsyncSessionLocal() as session:
        subscribers = await list_subscribers(session)

    if not subscribers:
        print("No subscribers found.")
        return

    print(f"{'Email':<40} | {'Name':<24} | {'Tier':<5} | {'Active':<6}")
    print("-" * 86)
    for s in subscribers:
        print(f"{s.email:<40} | {s.name or 'N/A':<24} | {s.subscription_tier.value:<5} | {'yes' if s.is_active else 'no':<6}")

    counts = count_by_category(subscribers)
    print()
    print(f"{counts.all} total, {counts.active} active, {counts.pro} pro")


if __name__ == "__main__":
    asyncio.run(main())
