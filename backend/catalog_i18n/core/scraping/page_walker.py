"""Paginated listing scraper for the upstream catalog site.

Every catalog section (tags, origins, tag groups) is rendered the same way:
a list of ``.group-list-li`` entries, each linking to ``/<section>/<id>``
with the display name in ``.group-list-li-a-chara2``, and a ``.pagination``
block whose ``.next`` item is missing or disabled on the last page.
"""

import asyncio
import logging
from typing import Optional

import httpx
from bs4 import BeautifulSoup
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from catalog_i18n.config import Settings
from catalog_i18n.models.schemas import ScrapedItem
from catalog_i18n.core.exceptions import UpstreamFetchError

logger = logging.getLogger(__name__)


DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "ja,en-US;q=0.7,en;q=0.3",
}


def parse_listing_page(html: str) -> tuple[list[ScrapedItem], bool]:
    """Extract items and the has-next-page flag from one listing page.

    Args:
        html: Page markup

    Returns:
        (items in page order, whether a next page exists)
    """
    soup = BeautifulSoup(html, "lxml")
    items = []

    for element in soup.select(".group-list-li"):
        link = element.find("a")
        if link is None:
            continue
        href = (link.get("href") or "").strip()
        name_element = link.select_one(".group-list-li-a-chara2")
        name = name_element.get_text(strip=True) if name_element else ""
        if not href or not name:
            continue

        item_id = href.split("?")[0].rstrip("/").split("/")[-1]
        if item_id:
            items.append(ScrapedItem(id=item_id, name=name))

    next_link = soup.select_one(".pagination .next")
    has_next = next_link is not None and "disabled" not in (next_link.get("class") or [])
    return items, has_next


class PageWalker:
    """Walk every page of one listing and collect its items.

    Usage:
        walker = PageWalker("https://oreno3d.com/tags", settings)
        items = await walker.fetch()
    """

    def __init__(
        self,
        base_url: str,
        settings: Settings,
        client: Optional[httpx.AsyncClient] = None,
        max_pages: Optional[int] = None,
    ):
        """Initialize the walker.

        Args:
            base_url: URL of the first listing page
            settings: Scraper settings (delay, retries, timeout, user agent)
            client: Optional preconfigured client (tests inject a mock transport)
            max_pages: Optional hard stop on the number of pages visited
        """
        self.base_url = base_url
        self.request_delay = settings.scrape_request_delay
        self.max_retries = max(1, settings.scrape_max_retries)
        self.timeout = settings.scrape_timeout
        self.user_agent = settings.scrape_user_agent
        self.max_pages = max_pages
        self._client = client

    def page_url(self, page: int) -> str:
        return self.base_url if page == 1 else f"{self.base_url}?page={page}"

    async def fetch(self) -> list[ScrapedItem]:
        """Collect items from every page, de-duplicated by id (first wins).

        Raises:
            UpstreamFetchError: If a page cannot be fetched after retries
        """
        logger.info(f"[PageWalker] Starting to scrape {self.base_url}")

        if self._client is not None:
            return await self._walk(self._client)

        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent, **DEFAULT_HEADERS},
            follow_redirects=True,
        ) as client:
            return await self._walk(client)

    async def _walk(self, client: httpx.AsyncClient) -> list[ScrapedItem]:
        results: list[ScrapedItem] = []
        seen: set[str] = set()
        page = 1

        while True:
            url = self.page_url(page)
            logger.debug(f"[PageWalker] Processing page {page}: {url}")

            html = await self._get_page(client, url)
            items, has_next = parse_listing_page(html)

            if not items:
                logger.info(f"[PageWalker] No items found on page {page}, stopping scrape")
                break

            for item in items:
                if item.id not in seen:
                    seen.add(item.id)
                    results.append(item)

            if not has_next or (self.max_pages and page >= self.max_pages):
                break

            page += 1
            if self.request_delay > 0:
                await asyncio.sleep(self.request_delay)

        logger.info(
            f"[PageWalker] Scraping completed for {self.base_url}, obtained {len(results)} items"
        )
        return results

    async def _get_page(self, client: httpx.AsyncClient, url: str) -> str:
        """GET one page, retrying transport errors with exponential backoff."""
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries),
                wait=wait_exponential(
                    multiplier=self.request_delay,
                    min=self.request_delay,
                    max=self.request_delay * 8,
                ),
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    response = await client.get(url)
                    response.raise_for_status()
                    return response.text
        except httpx.HTTPStatusError as e:
            raise UpstreamFetchError(
                f"{url} returned HTTP {e.response.status_code}", url=url
            ) from None
        except httpx.TransportError as e:
            raise UpstreamFetchError(
                f"Failed to fetch {url} after {self.max_retries} attempts: {e}", url=url
            ) from None
