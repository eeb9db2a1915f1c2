"""
AsyncDaprHttp usage (pip install dapr-http-client[async]).
"""

import asyncio

from dapr_http import AsyncDaprHttp


async def main():
    async with AsyncDaprHttp(3500) as dapr:
        handle = dapr.invoke_api("GET", "v1.0/state/statestore/order")
        print(f"Created: {handle!r}")

        response = await handle
        print(f"Status: {response.status_code}, body: {response.body!r}")

        # Second await reuses the same outcome
        assert (await handle) is response


if __name__ == "__main__":
    asyncio.run(main())
