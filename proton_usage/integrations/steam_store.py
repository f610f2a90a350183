"""Steam Store API client for looking up app names by id.

Queries the public ``appdetails`` endpoint, which has no batch mode for
the basic filter, so ids are fetched one request each with a bounded
number of requests in flight.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

import requests

from proton_usage.core.models import AppId

logger = logging.getLogger("protonusage.steam_store")

__all__ = ["MAX_CONCURRENT_REQUESTS", "SteamStoreClient"]

MAX_CONCURRENT_REQUESTS = 10


class SteamStoreClient:
    """Client for the Steam Store ``appdetails`` API.

    The session is shared by all worker threads and never modified after
    construction.
    """

    BASE_URL = "https://store.steampowered.com/api/appdetails"

    def __init__(self, timeout: float = 10.0, max_workers: int = MAX_CONCURRENT_REQUESTS) -> None:
        """Initializes the client with a configured session.

        Args:
            timeout: Per-request timeout in seconds.
            max_workers: Maximum number of requests in flight.
        """
        self.timeout = timeout
        self.max_workers = max(1, min(max_workers, MAX_CONCURRENT_REQUESTS))
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": "proton-usage/1.0"})

    def get_app_name(self, app_id: AppId) -> str | None:
        """Fetches the store name of a single app.

        Args:
            app_id: Steam app ID.

        Returns:
            The app name, or None if the store has no entry or the request failed.
        """
        try:
            response = self._session.get(
                self.BASE_URL,
                params={"filters": "basic", "appids": app_id},
                timeout=self.timeout,
            )

            if response.status_code != 200:
                logger.info("Steam Store: unexpected status %d for app %d", response.status_code, app_id)
                return None

            details = response.json().get(str(app_id), {})
            if not details.get("success"):
                logger.debug("Steam Store: no data for app %d", app_id)
                return None

            return details["data"]["name"]

        except requests.RequestException as exc:
            logger.info("Steam Store: network error for app %d: %s", app_id, exc)
            return None
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.info("Steam Store: parse error for app %d: %s", app_id, exc)
            return None

    def fetch_app_names(self, app_ids: Iterable[AppId]) -> dict[AppId, str]:
        """Fetches names for multiple apps concurrently.

        Failed lookups are left out of the result.

        Args:
            app_ids: Steam app IDs to query.

        Returns:
            Dict mapping app_id to name (only successful lookups).
        """
        ids = list(dict.fromkeys(app_ids))
        if not ids:
            return {}

        logger.debug("Fetching %d app name(s) from the Steam Store", len(ids))
        names: dict[AppId, str] = {}

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_id = {executor.submit(self.get_app_name, app_id): app_id for app_id in ids}

            for future in as_completed(future_to_id):
                name = future.result()
                if name:
                    names[future_to_id[future]] = name

        return names
