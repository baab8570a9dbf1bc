"""Minimal async example for Life360Client usage.

Reads LIFE360_USERNAME / LIFE360_PASSWORD (or LIFE360_TOKEN) from the environment.
"""
import asyncio
import logging

from life360_api import Life360Client, load_credentials


async def main():
    logging.basicConfig(level=logging.INFO)
    creds = load_credentials()
    async with await Life360Client.from_credentials(creds) as client:
        circles = await client.get_circles()
        circle_id = circles["circles"][0]["id"]
        members = await client.get_members(circle_id)

        for member in members["members"]:
            print(f"Member: {member['firstName']} {member['lastName']}, ID: {member['id']}")
            await client.request_location_update(circle_id, member["id"])
            await asyncio.sleep(2)

        result = await client.poll_locations(circle_id)
        print("Location update:", result.payload if result.changed else "no change")

if __name__ == "__main__":
    asyncio.run(main())
