"""HTTP client for the remote asset metadata store.

The store exposes two endpoints relative to ``api_base_url``:

- ``GET {api_base_url}/{key}`` returns the JSON record stored under ``key``
- ``POST {api_base_url}`` with ``{"path": key, "asset": "<record as JSON>"}``
  writes a record

Requests are not retried; any non-success response fails the call.
"""
import asyncio
import json
import logging
from typing import Any

import aiohttp

from vidmeta.assets.errors import AssetNotFoundError, StoreWriteError


def build_record_url(api_base_url: str, key: str) -> str:
    return f"{api_base_url.rstrip('/')}/{key}"


async def load_asset_record(
    session: aiohttp.ClientSession,
    api_base_url: str,
    key: str,
) -> dict[str, Any]:
    url = build_record_url(api_base_url, key)
    logging.debug("LOAD %s", url)
    async with session.get(url) as resp:
        if not resp.ok:
            logging.debug("asset store returned %d for %s", resp.status, key)
            raise AssetNotFoundError(key)
        return await resp.json(content_type=None)


async def save_asset_record(
    session: aiohttp.ClientSession,
    api_base_url: str,
    key: str,
    record: dict[str, Any],
) -> None:
    body = {"path": key, "asset": json.dumps(record)}
    logging.debug("SAVE %s", key)
    async with session.post(api_base_url, json=body) as resp:
        if not resp.ok:
            logging.warning("asset store rejected %s with status %d", key, resp.status)
            raise StoreWriteError(key, resp.status)


class AssetStoreClient:
    """Binds a base URL and an aiohttp session for ``load``/``save`` calls.

    When no session is given one is created on first use and closed by
    ``close()``; a session passed in stays owned by the caller. An owned
    session belongs to the event loop it was opened on, a call from another
    loop (for example a second ``asyncio.run``) opens a fresh one.
    """

    def __init__(self, api_base_url: str, session: aiohttp.ClientSession | None = None):
        self.api_base_url = api_base_url
        self._session = session
        self._owns_session = session is None
        self._session_loop: asyncio.AbstractEventLoop | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        loop = asyncio.get_running_loop()
        if self._owns_session and self._session is not None and self._session_loop is not loop:
            self._detach_session()
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
            self._session_loop = loop
        return self._session

    def _detach_session(self) -> None:
        # The loop the session was opened on may already be closed.
        logging.debug("dropping asset store session bound to another event loop")
        if not self._session.closed:
            self._session.detach()
        self._session = None
        self._session_loop = None

    async def load(self, key: str) -> dict[str, Any]:
        return await load_asset_record(self._get_session(), self.api_base_url, key)

    async def save(self, key: str, record: dict[str, Any]) -> None:
        await save_asset_record(self._get_session(), self.api_base_url, key, record)

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            if self._session_loop is asyncio.get_running_loop():
                await self._session.close()
            else:
                self._detach_session()
        self._session = None
        self._session_loop = None

    async def __aenter__(self) -> "AssetStoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
