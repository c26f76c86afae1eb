# vehicle_data/http_client.py
import json
from typing import Any, Dict, Optional, Tuple

import aiohttp

from vehicle_data.errors import UpstreamError

BASE_HEADERS = {"Accept": "application/json"}


def _first_json_block(text: str) -> Any:
    """
    Some catalogs answer with JSONP (`?({...});`).
    Extract the first {...} block.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        raise ValueError("No JSON object found in response")
    return json.loads(text[start:end + 1])


def parse_body(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return _first_json_block(text)


async def fetch_json(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout_sec: float = 15.0,
) -> Tuple[int, str, Optional[Any]]:
    """
    GET `url` and return (status, raw text, parsed payload).
    Payload is None for status >= 400. Transport errors propagate.
    """
    timeout = aiohttp.ClientTimeout(total=timeout_sec)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        async with session.get(url, headers={**BASE_HEADERS, **(headers or {})}, params=params) as resp:
            text = await resp.text()
            if resp.status >= 400:
                return resp.status, text, None
            try:
                return resp.status, text, parse_body(text)
            except ValueError as e:
                raise UpstreamError(f"JSON parse error @ {url}: {e} :: {text[:200]}", status=resp.status, url=url)
