"""
Video Search Tool - Finds educational medical videos.
Currently backed by the YouTube Data API v3 search endpoint.
"""

import httpx
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from ..models import VideoResource

logger = logging.getLogger(__name__)


class VideoSearchTool:
    """
    Keyword video search returning a fixed-size list of VideoResource records.
    """

    def __init__(
        self,
        api_key: str,
        provider: str = "youtube",
        max_results: int = 3,
        timeout: float = 30.0,
    ):
        """
        Initialize video search tool.

        Args:
            api_key: API key for the search provider
            provider: Search provider ("youtube")
            max_results: Number of videos returned per search
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.provider = provider
        self.max_results = max_results
        self.timeout = timeout

    async def search(self, query: str) -> List[VideoResource]:
        """
        Search for videos matching a keyword query.

        Args:
            query: Search keywords

        Returns:
            Up to max_results videos
        """
        if self.provider == "youtube":
            return await self._search_youtube(query)
        else:
            raise ValueError(f"Unsupported video search provider: {self.provider}")

    async def _search_youtube(self, query: str) -> List[VideoResource]:
        url = "https://www.googleapis.com/youtube/v3/search"
        params = {
            "part": "snippet",
            "type": "video",
            "q": query,
            "maxResults": self.max_results,
            "safeSearch": "strict",
            "key": self.api_key,
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(url, params=params)
            resp.raise_for_status()
            data = resp.json()

        videos = [self._to_resource(item) for item in data.get("items", [])]
        logger.info(f"Video search returned {len(videos)} results", extra={"extra_fields": {"query": query}})
        return videos[:self.max_results]

    @staticmethod
    def _to_resource(item: Dict[str, Any]) -> VideoResource:
        snippet = item.get("snippet", {})
        thumbnails = snippet.get("thumbnails", {})
        thumbnail = (thumbnails.get("medium") or thumbnails.get("default") or {}).get("url", "")
        video_id = item.get("id", {})
        if isinstance(video_id, dict):
            video_id = video_id.get("videoId", "")
        return VideoResource(
            id=video_id,
            title=snippet.get("title", ""),
            description=snippet.get("description", ""),
            thumbnail=thumbnail,
            published_at=snippet.get("publishedAt") or datetime.now(timezone.utc),
            channel_title=snippet.get("channelTitle", ""),
        )
