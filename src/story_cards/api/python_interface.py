"""Python-first client for the story section API."""

from __future__ import annotations

from typing import Any, Literal

import httpx

from story_cards.api.contracts import (
    MoveStoryRequest,
    RawStoriesRequest,
    RawStoriesResponse,
    SectionListResponse,
    SectionRenderResponse,
    SectionStoriesResponse,
    StoryAddedResponse,
    StoryLayoutPatchRequest,
    StoryTextPatchRequest,
)
from story_cards.core.story_collection import StoryCollection, dump_collection


class StoryCardsApiClient:
    """Tiny typed API client for Python users."""

    def __init__(self, api_base_url: str = "http://127.0.0.1:8000", timeout: float = 30.0) -> None:
        """Initialize client with an API base URL."""
        self._api_base_url = api_base_url.rstrip("/")
        self._timeout = timeout

    @property
    def api_base_url(self) -> str:
        """Return normalized API base URL."""
        return self._api_base_url

    def _section_url(self, section_id: str, *parts: str) -> str:
        return "/".join([f"{self._api_base_url}/api/v1/sections/{section_id}", *parts])

    def normalize_stories(self, stories: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Upgrade persisted cards of any vintage without storing them."""
        response = httpx.post(
            f"{self._api_base_url}/api/v1/stories/normalize",
            json=RawStoriesRequest(stories=stories).model_dump(mode="json"),
            timeout=self._timeout,
        )
        response.raise_for_status()
        return RawStoriesResponse.model_validate(response.json()).stories

    def list_sections(self, limit: int = 100) -> list[str]:
        response = httpx.get(
            f"{self._api_base_url}/api/v1/sections",
            params={"limit": limit},
            timeout=self._timeout,
        )
        response.raise_for_status()
        return SectionListResponse.model_validate(response.json()).section_ids

    def get_section(self, section_id: str) -> SectionStoriesResponse:
        """Load a section's stories; the server seeds defaults on first access."""
        response = httpx.get(self._section_url(section_id, "stories"), timeout=self._timeout)
        response.raise_for_status()
        return SectionStoriesResponse.model_validate(response.json())

    def save_section(
        self, section_id: str, stories: StoryCollection | list[dict[str, Any]]
    ) -> SectionStoriesResponse:
        """Replace a section's stories wholesale."""
        raw = stories if isinstance(stories, list) else dump_collection(stories)
        response = httpx.put(
            self._section_url(section_id, "stories"),
            json=RawStoriesRequest(stories=raw).model_dump(mode="json"),
            timeout=self._timeout,
        )
        response.raise_for_status()
        return SectionStoriesResponse.model_validate(response.json())

    def add_story(self, section_id: str) -> StoryAddedResponse:
        response = httpx.post(self._section_url(section_id, "stories"), timeout=self._timeout)
        response.raise_for_status()
        return StoryAddedResponse.model_validate(response.json())

    def remove_story(self, section_id: str, story_id: str) -> SectionStoriesResponse:
        response = httpx.delete(
            self._section_url(section_id, "stories", story_id), timeout=self._timeout
        )
        response.raise_for_status()
        return SectionStoriesResponse.model_validate(response.json())

    def move_story(
        self, section_id: str, story_id: str, direction: Literal[-1, 1]
    ) -> SectionStoriesResponse:
        response = httpx.post(
            self._section_url(section_id, "stories", story_id, "move"),
            json=MoveStoryRequest(direction=direction).model_dump(mode="json"),
            timeout=self._timeout,
        )
        response.raise_for_status()
        return SectionStoriesResponse.model_validate(response.json())

    def edit_story_text(
        self, section_id: str, story_id: str, edits: StoryTextPatchRequest
    ) -> SectionStoriesResponse:
        """Apply text edits; rich-text fields refresh their plain fallbacks server-side."""
        response = httpx.patch(
            self._section_url(section_id, "stories", story_id),
            json=edits.model_dump(mode="json", exclude_none=True),
            timeout=self._timeout,
        )
        response.raise_for_status()
        return SectionStoriesResponse.model_validate(response.json())

    def edit_story_layout(
        self, section_id: str, story_id: str, edits: StoryLayoutPatchRequest
    ) -> SectionStoriesResponse:
        """Apply layout and appearance edits; the server clamps numbers to editor ranges."""
        response = httpx.patch(
            self._section_url(section_id, "stories", story_id, "layout"),
            json=edits.model_dump(mode="json", exclude_none=True),
            timeout=self._timeout,
        )
        response.raise_for_status()
        return SectionStoriesResponse.model_validate(response.json())

    def render_section(self, section_id: str) -> SectionRenderResponse:
        """Fetch resolved render parameters for every story in a section."""
        response = httpx.get(self._section_url(section_id, "render"), timeout=self._timeout)
        response.raise_for_status()
        return SectionRenderResponse.model_validate(response.json())
