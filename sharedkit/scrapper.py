"""Fetching pages over HTTP, with per-host rate limiting and a file cache."""

from __future__ import annotations

import logging
import time
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from datetime import timedelta
from urllib.parse import urlsplit

from sharedkit.filecache import FileCache

logger = logging.getLogger(__name__)


class Scrapper(ABC):
    """Something that fetches the content at a URL."""

    @abstractmethod
    def clean_up(self) -> None:
        """Release any resources held."""

    @abstractmethod
    def scrap_url(self, url: str) -> bytes:
        """Fetch the content at ``url``."""


class HTTPRequestScrapper(Scrapper):
    """Fetches pages with plain HTTP GET requests."""

    def clean_up(self) -> None:
        pass

    def scrap_url(self, url: str) -> bytes:
        """GET ``url``; raises RuntimeError on a status of 300 or above."""
        start = time.monotonic()
        try:
            response = urllib.request.urlopen(url)
        except urllib.error.HTTPError as exc:
            logger.warning("failed response: %s", exc)
            exc.close()
            raise RuntimeError(
                f"Scraping URL: {url} returned code: {exc.code}"
            ) from exc

        with response:
            if response.status >= 300:
                logger.warning("failed response: %s", response.status)
                raise RuntimeError(
                    f"Scraping URL: {url} returned code: {response.status}"
                )
            logger.info(
                "Scraping URL: %s Took: %.3fs", url, time.monotonic() - start
            )
            try:
                return response.read()
            except OSError as exc:
                raise OSError(f"failed to read response body: {exc}") from exc


class RateLimitedScrapper(Scrapper):
    """Waits so that requests to the same host are at least a set time apart."""

    def __init__(self, min_time_between_requests: timedelta, scrapper: Scrapper) -> None:
        self.min_time_between_requests = min_time_between_requests
        self.scrapper = scrapper
        self._host_last_scrapped: dict[str, float] = {}

    def clean_up(self) -> None:
        self.scrapper.clean_up()

    def scrap_url(self, url: str) -> bytes:
        host = urlsplit(url).hostname or ""
        min_gap = self.min_time_between_requests.total_seconds()

        last = self._host_last_scrapped.get(host)
        if last is not None:
            since_last = time.monotonic() - last
            if since_last < min_gap:
                wait = min_gap - since_last
                logger.info("Delaying request by %.3fs", wait)
                time.sleep(wait)
        self._host_last_scrapped[host] = time.monotonic()

        return self.scrapper.scrap_url(url)


class CachedScrapper:
    """Serves pages from a file cache, fetching and storing those not yet cached."""

    def __init__(self, site_cache: FileCache, file_ext: str) -> None:
        self.site_cache = site_cache
        self.file_ext = file_ext
        self._scrapper: Scrapper | None = None

    def set_scrapper(self, scrapper: Scrapper) -> None:
        self._scrapper = scrapper

    def clean_up(self) -> None:
        if self._scrapper is not None:
            self._scrapper.clean_up()
            self._scrapper = None

    def scrap_url_with_cache(self, url: str, expire_duration: timedelta | None) -> bytes:
        """Return the cached page if still valid, else fetch and cache it."""
        cached = self.site_cache.try_load_file_with_expire(url, expire_duration)
        if cached is not None:
            return cached

        data = self.scrap_url(url)
        self.site_cache.save_file_with_ext(url, data, self.file_ext)
        return data

    def scrap_url(self, url: str) -> bytes:
        return bytes(self.get_or_create_scrapper().scrap_url(url))

    def get_or_create_scrapper(self) -> Scrapper:
        """The scrapper in use, creating an HTTP one if none was set."""
        if self._scrapper is None:
            self._scrapper = HTTPRequestScrapper()
        return self._scrapper