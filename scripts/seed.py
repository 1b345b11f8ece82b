"""Seed the blog collection with sample records."""
import asyncio
import argparse
import random
import time

from blog_api.config import settings
from blog_api.database import create_client, get_blog_collection
from blog_api.services.blog_service import BlogService

TOPICS = ["python", "fastapi", "mongodb", "docker", "kubernetes",
          "testing", "performance", "security", "microservices", "rest-api"]


async def seed(count: int = 100, drop: bool = False):
    print(f"Seeding {count} blogs into {settings.MONGO_DB_NAME}.{settings.MONGO_COLLECTION}")
    start = time.perf_counter()

    client = create_client(settings)
    try:
        collection = get_blog_collection(client, settings)
        if drop:
            await collection.drop()
            print("  Dropped existing collection")

        service = BlogService(collection)
        for i in range(count):
            topic = random.choice(TOPICS)
            await service.create_blog(
                author_id=f"author_{random.randint(0, 9):02d}",
                title=f"Blog {i}: Notes on {topic}",
                content=f"This is the full content of blog {i} about {topic}. " * 10,
            )
            if (i + 1) % 100 == 0:
                print(f"  {i + 1} blogs created")
    finally:
        await client.close()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")


def main():
    parser = argparse.ArgumentParser(description="Seed the blog collection")
    parser.add_argument("--count", type=int, default=100, help="Number of blogs to insert")
    parser.add_argument("--drop", action="store_true", help="Drop the collection first")
    args = parser.parse_args()
    asyncio.run(seed(count=args.count, drop=args.drop))


if __name__ == "__main__":
    main()
