"""
Content Service

Reads resume content from a GitHub repository through the Contents API.
Falls back to built-in sample data when GitHub is unreachable or answers
403/404, so the terminal never shows an empty section just because of
missing access.
"""

import asyncio
import logging
from typing import List, Optional

import httpx

from .fallback import fallback_directories, fallback_file, fallback_items
from .frontmatter import parse_frontmatter
from .models import ContentItem, DirectoryEntry, FileContent
from .sorting import sort_items
from . import config

logger = logging.getLogger(__name__)

FALLBACK_STATUSES = (403, 404)


class ContentServiceError(RuntimeError):
    """GitHub answered with a status that has no fallback."""


class _ContentUnavailable(Exception):
    """Content source unreachable or access denied."""


class ContentService:
    """
    Client for the markdown content stored under {root}/ in a GitHub repo.

    Every request carries the User-Agent client marker and, when a token is
    configured, an Authorization header.
    """

    def __init__(
        self,
        owner: Optional[str] = None,
        repo: Optional[str] = None,
        root: Optional[str] = None,
        token: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the content service.

        Args:
            owner: Repository owner (default: GITHUB_OWNER)
            repo: Repository name (default: GITHUB_REPO)
            root: Content folder inside the repository (default: CONTENT_ROOT)
            token: GitHub token (default: GITHUB_TOKEN, may be empty)
            api_base: GitHub API base URL
            timeout: Request timeout in seconds
            client: Preconfigured httpx client, mainly for tests
        """
        self.owner = owner or config.GITHUB_OWNER
        self.repo = repo or config.GITHUB_REPO
        self.root = (root or config.CONTENT_ROOT).strip("/")
        self.token = config.GITHUB_TOKEN if token is None else token
        self.api_base = (api_base or config.GITHUB_API_BASE).rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=timeout or config.HTTP_TIMEOUT)

        if self.token:
            logger.info(f"Content service reading {self.owner}/{self.repo} with token")
        else:
            logger.warning(f"Content service reading {self.owner}/{self.repo} without token")

    def _headers(self) -> dict:
        headers = {
            "User-Agent": config.CLIENT_USER_AGENT,
            "Accept": "application/vnd.github.v3+json",
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def _contents_url(self, *parts: str) -> str:
        path = "/".join([self.root, *parts])
        return f"{self.api_base}/repos/{self.owner}/{self.repo}/contents/{path}"

    async def _get(self, url: str) -> httpx.Response:
        try:
            response = await self.client.get(url, headers=self._headers())
        except httpx.TransportError as e:
            raise _ContentUnavailable(f"{url}: {e}") from e

        if response.status_code in FALLBACK_STATUSES:
            raise _ContentUnavailable(f"{url}: HTTP {response.status_code}")
        if response.is_error:
            raise ContentServiceError(
                f"GitHub API error: {response.status_code} {response.reason_phrase} ({url})"
            )
        return response

    async def _get_json(self, url: str, expected: type):
        response = await self._get(url)
        try:
            data = response.json()
        except ValueError as e:
            raise ContentServiceError(f"Malformed GitHub response ({url}): {e}") from e
        if not isinstance(data, expected):
            raise ContentServiceError(
                f"Unexpected GitHub response ({url}): {type(data).__name__}"
            )
        return data

    async def _get_text(self, url: str) -> str:
        response = await self._get(url)
        return response.text

    async def list_directories(self) -> List[DirectoryEntry]:
        """List the content directories (the fixed set when GitHub is unavailable)."""
        try:
            data = await self._get_json(self._contents_url(), list)
        except _ContentUnavailable as e:
            logger.warning(f"Using fallback directories: {e}")
            return fallback_directories(self.root)

        try:
            return [
                DirectoryEntry(name=entry["name"], path=entry["path"])
                for entry in data
                if entry.get("type") == "dir"
            ]
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise ContentServiceError(f"Malformed directory entry: {e!r}") from e

    async def _load_item(self, entry: dict) -> ContentItem:
        name, url = entry["name"], entry.get("download_url")
        if not isinstance(url, str) or not url:
            raise ContentServiceError(f"No download_url for {name}")
        text = await self._get_text(url)
        parsed = parse_frontmatter(text, name)
        return ContentItem(
            name=name,
            title=parsed.title,
            order=parsed.order,
            metadata=parsed.metadata,
            download_url=url,
        )

    async def _load_items(self, entries: List[dict]) -> List[ContentItem]:
        tasks = [asyncio.ensure_future(self._load_item(entry)) for entry in entries]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            # Don't leave sibling downloads running after the first failure
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def list_files(self, directory: str) -> List[ContentItem]:
        """
        List the markdown files of a directory, sorted for display.

        Raises:
            ContentServiceError: GitHub failed with a status other than 403/404,
                or answered with something that is not a directory listing
        """
        try:
            data = await self._get_json(self._contents_url(directory), list)
            try:
                entries = [
                    entry for entry in data
                    if entry.get("type") == "file" and str(entry.get("name", "")).endswith(".md")
                ]
            except AttributeError as e:
                raise ContentServiceError(f"Malformed listing for {directory}: {e}") from e
            items = await self._load_items(entries)
        except _ContentUnavailable as e:
            logger.warning(f"Using fallback listing for {directory}: {e}")
            items = fallback_items(directory)

        logger.info(f"Listed {len(items)} files in {directory}")
        return sort_items(items, directory)

    async def get_file(self, directory: str, filename: str) -> FileContent:
        """
        Fetch one file with its frontmatter parsed.

        Raises:
            ContentServiceError: GitHub failed with a status other than 403/404,
                or the file metadata is malformed
        """
        try:
            data = await self._get_json(self._contents_url(directory, filename), dict)
            url = data.get("download_url")
            if not isinstance(url, str) or not url:
                raise ContentServiceError(f"No download_url for {directory}/{filename}")
            text = await self._get_text(url)
        except _ContentUnavailable as e:
            logger.warning(f"Using fallback placeholder for {directory}/{filename}: {e}")
            return fallback_file(directory, filename)

        parsed = parse_frontmatter(text, filename)
        return FileContent(
            title=parsed.title,
            content=parsed.body,
            metadata=parsed.metadata,
            filename=filename,
        )

    async def close(self):
        """Close the HTTP client."""
        if self.client:
            await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
