import functools
from typing import Callable, Optional, Type

from pydantic import BaseModel

from common.core.otel_axiom_exporter import get_logger
from .factory import get_cache_provider

logger = get_logger(__name__)


def cache(
    model_type: Type, ttl: int = 3600, key_generator: Optional[Callable[..., str]] = None
):
    """
    Best-effort cache decorator for async methods.

    Cache failures are logged and the wrapped function runs as if the cache
    did not exist. None results are not cached so a missing row is re-read.

    Args:
        model_type: Pydantic model used to rebuild cached values
        ttl: Time to live in seconds
        key_generator: Builds the key from the call arguments (self excluded)
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            cache_key = None
            try:
                # Instance methods: skip self when building the key
                key_args = args[1:] if args and hasattr(args[0], func.__name__) else args
                if key_generator:
                    cache_key = key_generator(*key_args, **kwargs)
                else:
                    parts = [str(a) for a in key_args] + [
                        f"{k}={v}" for k, v in sorted(kwargs.items())
                    ]
                    cache_key = ":".join([func.__qualname__, *parts])
                cached_value = await get_cache_provider().get(cache_key)
                if cached_value is not None:
                    logger.debug(f"Cache hit for key: {cache_key}")
                    if issubclass(model_type, BaseModel):
                        return model_type.model_validate(cached_value)
                    return cached_value
            except Exception as e:
                logger.warning(f"Cache lookup failed for {func.__name__}: {e}")

            result = await func(*args, **kwargs)

            if cache_key and result is not None:
                try:
                    value = (
                        result.model_dump(mode="json")
                        if isinstance(result, BaseModel)
                        else result
                    )
                    await get_cache_provider().set(cache_key, value, ttl)
                except Exception as e:
                    logger.warning(f"Cache set failed for key {cache_key}: {e}")

            return result

        return wrapper

    return decorator
