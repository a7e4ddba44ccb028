"""Mirror a Flickr photostream into a local directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlsplit

import httpx

from wallflower.config import MirrorSettings
from wallflower.exceptions import (
    FlickrTransportError,
    PhotoEncodingError,
    PhotoStoreError,
    WallflowerError,
)
from wallflower.mirror.pool import TaskOutcome, WorkerPool

if TYPE_CHECKING:
    from wallflower.client import FlickrClient
    from wallflower.models.photos import Photo

logger = logging.getLogger(__name__)


class MirrorStatus(StrEnum):
    """What happened to one photo during a mirror run."""

    DOWNLOADED = "downloaded"
    EXISTS = "exists"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class MirrorResult:
    """Outcome for a single photo."""

    photo: Photo
    status: MirrorStatus
    path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not MirrorStatus.FAILED


@dataclass
class MirrorReport:
    """Every per-photo result of a mirror run, in completion order."""

    results: list[MirrorResult] = field(default_factory=list)
    pages: int = 0

    def _count(self, status: MirrorStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    @property
    def downloaded(self) -> int:
        return self._count(MirrorStatus.DOWNLOADED)

    @property
    def existing(self) -> int:
        return self._count(MirrorStatus.EXISTS)

    @property
    def failed(self) -> int:
        return self._count(MirrorStatus.FAILED)

    @property
    def failures(self) -> list[MirrorResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failures


def photo_filename(url: str) -> str:
    """Final segment of the percent-decoded URL path.

    Raises:
        PhotoEncodingError: If the decoded path is not UTF-8
        PhotoStoreError: If the path has no file name
    """
    try:
        path = unquote(urlsplit(url).path, errors="strict")
    except UnicodeDecodeError as e:
        raise PhotoEncodingError(f"URL path is not UTF-8: {url}") from e

    name = PurePosixPath(path).name
    if not name or name in (".", ".."):
        raise PhotoStoreError(f"URL does not have file name: {url}")
    return name


class PhotoMirror:
    """Keeps a local copy of every listed photo.

    Listing pages are fetched in order. Each page's photos are handed to a
    bounded worker pool and all of their results are collected before the
    next page is requested. A photo whose file name already exists in
    ``photo_dir`` is never downloaded again.
    """

    def __init__(
        self,
        client: FlickrClient,
        settings: MirrorSettings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.client = client
        self.settings = settings or MirrorSettings()
        self._http_client = http_client

    @property
    def photo_dir(self) -> Path:
        return self.settings.photo_dir

    async def run(self, user_id: str) -> MirrorReport:
        """Mirror up to ``settings.max_pages`` listing pages for ``user_id``.

        Listing errors propagate. Per-photo errors are recorded in the report.
        """
        self.photo_dir.mkdir(parents=True, exist_ok=True)
        report = MirrorReport()

        async with WorkerPool(self.settings.workers, self.fetch_photo) as pool:
            for page_number in range(1, self.settings.max_pages + 1):
                page = await self.client.photos.photos_page(
                    user_id,
                    self.settings.listing_params(page_number),
                    size=self.settings.size,
                )
                logger.info(
                    "Page %d/%d: %d photos",
                    page.page,
                    page.pages,
                    len(page.photos),
                )

                for photo in page.photos:
                    pool.submit(photo)
                report.results.extend(self._to_result(o) for o in await pool.drain())
                report.pages += 1

                if not page.has_more:
                    break

        return report

    async def fetch_photo(self, photo: Photo) -> MirrorResult:
        """Ensure one photo exists locally, downloading it if needed."""
        url = str(photo.url)
        path = self.photo_dir / photo_filename(url)

        if path.is_file():
            logger.info("%s -> exists", url)
            return MirrorResult(photo, MirrorStatus.EXISTS, path)

        logger.info("%s -> downloading", url)
        if not await self.download(url, path):
            logger.info("%s -> exists", url)
            return MirrorResult(photo, MirrorStatus.EXISTS, path)
        return MirrorResult(photo, MirrorStatus.DOWNLOADED, path)

    async def download(self, url: str, path: Path) -> bool:
        """Stream ``url`` into a newly created ``path``.

        Returns False without writing if ``path`` appeared in the meantime,
        e.g. another photo on the same page has the same file name. A
        partially written file is removed if the transfer fails.
        """
        http_client = self._http_client or self.client.http_client
        if http_client is None:
            async with httpx.AsyncClient(timeout=30.0, follow_redirects=True) as client:
                return await self._stream_to_file(client, url, path)
        return await self._stream_to_file(http_client, url, path)

    async def _stream_to_file(self, http_client: httpx.AsyncClient, url: str, path: Path) -> bool:
        try:
            async with http_client.stream("GET", url) as response:
                if response.status_code >= 400:
                    raise FlickrTransportError(
                        f"Download failed: {response.status_code}",
                        status_code=response.status_code,
                        url=url,
                    )
                try:
                    f = path.open("xb")
                except FileExistsError:
                    return False
                except OSError as e:
                    raise PhotoStoreError(f"Cannot create {path}: {e}", path=str(path)) from e
                try:
                    with f:
                        async for chunk in response.aiter_bytes():
                            f.write(chunk)
                except BaseException:
                    path.unlink(missing_ok=True)
                    raise
        except httpx.HTTPError as e:
            raise FlickrTransportError(f"Download failed: {e}", url=url) from e
        except OSError as e:
            raise PhotoStoreError(f"Cannot write {path}: {e}", path=str(path)) from e
        return True

    @staticmethod
    def _to_result(outcome: TaskOutcome) -> MirrorResult:
        if outcome.ok:
            return outcome.value

        error = outcome.error
        message = error.message if isinstance(error, WallflowerError) else str(error)
        logger.warning("%s -> failed: %s", outcome.item.url, message)
        return MirrorResult(outcome.item, MirrorStatus.FAILED, error=message)
