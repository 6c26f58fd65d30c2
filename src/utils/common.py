import random
import asyncio


async def async_exponential_backoff(base_delay: float, attempt: int) -> None:
    """
    Exponential backoff plus random jitter delay for retry attempts.
    Do not use for low latency requirements.
    """
    sleep_time = base_delay * (2 ** (attempt - 1)) + random.uniform(0, base_delay)
    await asyncio.sleep(sleep_time)
