import functools
import logging
import asyncio

logger = logging.getLogger(__name__)

def retry_on_exception(retries=1, delay=0.0, exceptions=(Exception,)):
    """Повтор корутины при исключениях из exceptions; retries=1 - одна попытка"""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            for attempt in range(1, retries + 1):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    if attempt >= retries:
                        raise
                    logger.warning(f"Попытка {attempt} из {retries}: {e}")
                    if delay:
                        await asyncio.sleep(delay)
        return wrapper
    return decorator
