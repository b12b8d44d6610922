"""
Unit tests for the video search tool.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from medclause.tools.video_search import VideoSearchTool


class TestVideoSearchTool:
    """Tests for VideoSearchTool."""

    def test_init(self):
        tool = VideoSearchTool(api_key="test-key")
        assert tool.provider == "youtube"
        assert tool.max_results == 3

    @pytest.mark.asyncio
    async def test_search_youtube(self):
        tool = VideoSearchTool(api_key="test-key", max_results=2)

        mock_response = MagicMock()
        mock_response.json.return_value = {
            "items": [
                {
                    "id": {"kind": "youtube#video", "videoId": "abc123"},
                    "snippet": {
                        "title": "Understanding Asthma",
                        "description": "How asthma affects the airways.",
                        "publishedAt": "2024-03-01T12:00:00Z",
                        "channelTitle": "MedEd",
                        "thumbnails": {"medium": {"url": "https://i.ytimg.com/vi/abc123/mqdefault.jpg"}},
                    },
                },
                {
                    "id": {"videoId": "def456"},
                    "snippet": {
                        "title": "Inhaler Technique",
                        "publishedAt": "2024-02-01T12:00:00Z",
                        "thumbnails": {"default": {"url": "https://i.ytimg.com/vi/def456/default.jpg"}},
                    },
                },
            ]
        }
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            mock_instance = AsyncMock()
            mock_instance.get.return_value = mock_response
            mock_instance.__aenter__ = AsyncMock(return_value=mock_instance)
            mock_instance.__aexit__ = AsyncMock(return_value=False)
            mock_client.return_value = mock_instance

            videos = await tool.search("asthma")

            assert [video.id for video in videos] == ["abc123", "def456"]
            assert videos[0].channel_title == "MedEd"
            assert videos[0].url == "https://www.youtube.com/watch?v=abc123"
            assert videos[1].thumbnail.endswith("default.jpg")

            params = mock_instance.get.call_args.kwargs["params"]
            assert params["q"] == "asthma"
            assert params["maxResults"] == 2
            assert params["key"] == "test-key"

    @pytest.mark.asyncio
    async def test_search_unsupported_provider(self):
        tool = VideoSearchTool(api_key="key", provider="vimeo")
        with pytest.raises(ValueError, match="Unsupported"):
            await tool.search("asthma")
