"""
Test: authenticate (Life360Client.create)
Usage:
  python tests/functional/test_auth.py
"""

import asyncio
import sys
from pathlib import Path

# Add repo root to path for package imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from tests.utils.read_credentials import read_credentials


async def main():
    creds = read_credentials()
    if creds is None:
        print(
            "Copy your details into tests/utils/credentials.txt "
            "(LIFE360_USERNAME, LIFE360_PASSWORD or LIFE360_TOKEN)"
        )
        return
    from life360_api import Life360Client
    from life360_api.helpers import mask_token

    client = await Life360Client.from_credentials(creds)
    try:
        print("Authenticated. token:", mask_token(client.token or ""))
    finally:
        await client.close()


if __name__ == "__main__":
    asyncio.run(main())
