"""Public API surface for HTTP serving and Python-first interfaces."""

from story_cards.api.app import create_app
from story_cards.api.contracts import (
    MoveStoryRequest,
    RawStoriesRequest,
    SectionRenderResponse,
    SectionStoriesResponse,
    StoryLayoutPatchRequest,
    StoryTextPatchRequest,
)
from story_cards.api.python_interface import StoryCardsApiClient

__all__ = [
    "MoveStoryRequest",
    "RawStoriesRequest",
    "SectionRenderResponse",
    "SectionStoriesResponse",
    "StoryCardsApiClient",
    "StoryLayoutPatchRequest",
    "StoryTextPatchRequest",
    "create_app",
]
