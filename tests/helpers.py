"""
Test helpers shared across modules.
"""

import asyncio


async def settle(rounds: int = 5):
    """Let scheduled fetch tasks run until they block or finish"""
    for _ in range(rounds):
        await asyncio.sleep(0)
