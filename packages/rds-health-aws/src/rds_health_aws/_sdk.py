"""Running blocking boto3 calls from async code."""

import asyncio
import functools
from typing import Any, Callable

from botocore.exceptions import BotoCoreError, ClientError

from rds_health_protocols import TransportError


def error_code(e: ClientError) -> str:
    return e.response.get("Error", {}).get("Code", "")


async def call(source: str, fn: Callable[..., Any], **kwargs: Any) -> Any:
    """
    Run an SDK call in a worker thread.

    Raises:
        TransportError: On any botocore failure, with the original
            exception chained
    """
    try:
        return await asyncio.to_thread(functools.partial(fn, **kwargs))
    except (ClientError, BotoCoreError) as e:
        raise TransportError(source, str(e)) from e


async def paginate(source: str, client: Any, operation: str, key: str, **kwargs: Any) -> list[Any]:
    """Collect `key` items of every page of a paginated operation."""

    def collect() -> list[Any]:
        items: list[Any] = []
        for page in client.get_paginator(operation).paginate(**kwargs):
            items.extend(page.get(key, []))
        return items

    return await call(source, collect)
