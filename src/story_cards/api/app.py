"""FastAPI local-preview application for story section editing and rendering."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Literal

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from story_cards.adapters.sqlite_story_section_store import SQLiteStorySectionStore, StoredSection
from story_cards.api.contracts import (
    MoveStoryRequest,
    RawStoriesRequest,
    RawStoriesResponse,
    SectionListResponse,
    SectionRenderResponse,
    SectionStoriesResponse,
    StoriesRenderResponse,
    StoryAddedResponse,
    StoryLayoutPatchRequest,
    StoryTextPatchRequest,
    normalize_section_id,
)
from story_cards.core.render_resolver import resolve_collection_render
from story_cards.core.story_collection import (
    StoryCollection,
    add_story,
    create_default_collection,
    dump_collection,
    find_story,
    index_of_story,
    load_collection,
    move_story,
    remove_story,
    update_story_by_id,
)
from story_cards.core.story_editing import (
    apply_body_rich_text,
    apply_bullets_rich_text,
    apply_plain_bullets,
    apply_plain_content,
    apply_plain_title,
    apply_title_rich_text,
    with_accent_color,
    with_font,
    with_hover_effect,
    with_image,
    with_image_position,
    with_image_size,
    with_show_bullets,
    with_text_color,
    with_text_frame,
)
from story_cards.core.story_schema import StoryCard, normalize_story_card

DEFAULT_DB_PATH = Path("work/local/story_cards.db")

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Simple health payload used by probes."""

    status: Literal["ok"] = "ok"
    service: str = "story_cards"


class ApiRootResponse(BaseModel):
    """Describes currently available API capabilities and runtime mode."""

    name: str = "story_cards"
    stage: Literal["local-preview"] = "local-preview"
    persistence: Literal["sqlite"] = "sqlite"
    endpoints: list[str] = Field(
        default_factory=lambda: [
            "/healthz",
            "/api/v1",
            "/api/v1/stories/normalize",
            "/api/v1/stories/render",
            "/api/v1/sections",
            "/api/v1/sections/{section_id}/stories",
            "/api/v1/sections/{section_id}/stories/{story_id}",
            "/api/v1/sections/{section_id}/stories/{story_id}/move",
            "/api/v1/sections/{section_id}/stories/{story_id}/layout",
            "/api/v1/sections/{section_id}/render",
        ]
    )


def _resolve_db_path(db_path: Path | None) -> Path:
    """Resolve DB path from explicit arg, env var, then default path."""
    if db_path is not None:
        return db_path
    env_value = os.environ.get("STORY_CARDS_DB_PATH", "").strip()
    if env_value:
        return Path(env_value)
    return DEFAULT_DB_PATH


def _cors_origins() -> list[str]:
    raw = os.environ.get("STORY_CARDS_CORS_ORIGINS", "").strip()
    if raw:
        return [origin.strip() for origin in raw.split(",") if origin.strip()]
    return [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ]


def _unprocessable(exc: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail=exc.errors(include_url=False, include_context=False, include_input=False),
    )


def _load_or_422(
    raw_stories: list[dict[str, object]], *, seed_when_empty: bool = True
) -> StoryCollection:
    try:
        return load_collection(raw_stories, seed_when_empty=seed_when_empty)
    except ValidationError as exc:
        raise _unprocessable(exc) from exc


def _section_id_or_422(section_id: str) -> str:
    try:
        return normalize_section_id(section_id)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _section_response(section: StoredSection) -> SectionStoriesResponse:
    return SectionStoriesResponse(
        section_id=section.section_id,
        stories=section.raw_stories(),
        updated_at_utc=section.updated_at_utc,
    )


def _text_patch_updater(payload: StoryTextPatchRequest) -> Callable[[StoryCard], StoryCard]:
    """Plain edits apply first so a rich edit in the same request wins its field."""

    def apply(card: StoryCard) -> StoryCard:
        if payload.title is not None:
            card = apply_plain_title(card, payload.title)
        if payload.content is not None:
            card = apply_plain_content(card, payload.content)
        if payload.bullets_text is not None:
            card = apply_plain_bullets(card, payload.bullets_text)
        if payload.title_rich_text is not None:
            card = apply_title_rich_text(card, payload.title_rich_text)
        if payload.body_rich_text is not None:
            card = apply_body_rich_text(card, payload.body_rich_text)
        if payload.bullets_rich_text is not None:
            card = apply_bullets_rich_text(card, payload.bullets_rich_text)
        if payload.show_bullets is not None:
            card = with_show_bullets(card, payload.show_bullets)
        if payload.accent_color is not None:
            card = with_accent_color(card, payload.accent_color)
        return card

    return apply


def _layout_patch_updater(payload: StoryLayoutPatchRequest) -> Callable[[StoryCard], StoryCard]:
    def apply(card: StoryCard) -> StoryCard:
        image = payload.image
        if image is not None:
            card = with_image(
                card,
                url=image.url,
                alt_text=image.alt_text,
                single_corner=image.single_corner,
                corner_reversed=image.corner_reversed,
            )
            card = with_image_position(card, x=image.x, y=image.y)
            card = with_image_size(card, width=image.width, height=image.height)
        frame = payload.text_frame
        if frame is not None:
            card = with_text_frame(
                card, x=frame.x, y=frame.y, width=frame.width, min_height=frame.min_height
            )
        for slot, font in payload.fonts.items():
            card = with_font(card, slot, family=font.family, size=font.size)
        for target, hover in payload.hover_effects.items():
            card = with_hover_effect(
                card,
                target,
                enabled=hover.enabled,
                duration=hover.duration,
                shadow_color=hover.shadow_color,
                shadow_opacity_percent=hover.shadow_opacity_percent,
                shadow_blur=hover.shadow_blur,
            )
        for key, color in payload.text_colors.items():
            card = with_text_color(card, key, color)
        return card

    return apply


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create the API application."""
    effective_db_path = _resolve_db_path(db_path)
    store = SQLiteStorySectionStore(db_path=effective_db_path)

    app = FastAPI(
        title="story_cards API",
        version="0.1.0",
        description=(
            "Local preview API for two-column story sections: normalize persisted "
            "story cards, edit section collections and resolve render parameters."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        openapi_tags=[
            {"name": "system", "description": "Service health and runtime metadata."},
            {"name": "api", "description": "API discovery and root-level capability listing."},
            {"name": "stories", "description": "Stateless normalization and rendering."},
            {"name": "sections", "description": "Section collections: edit, reorder, render."},
        ],
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    logger.info("api.start db_path=%s", effective_db_path)

    def section_collection(section_id: str) -> tuple[StoryCollection, StoredSection]:
        """Load a section, seeding the default cards on first access."""
        normalized_id = _section_id_or_422(section_id)
        section = store.get_section(section_id=normalized_id)
        if section is None:
            collection = create_default_collection()
            section = store.save_section(
                section_id=normalized_id, stories=dump_collection(collection)
            )
            logger.info("section.seeded section_id=%s", normalized_id)
            return collection, section
        # A stored empty list is a section whose cards were all removed.
        return _load_or_422(section.raw_stories(), seed_when_empty=False), section

    def save(section_id: str, collection: StoryCollection, *, action: str) -> StoredSection:
        section = store.save_section(section_id=section_id, stories=dump_collection(collection))
        logger.info(
            "section.saved section_id=%s action=%s story_count=%s",
            section_id,
            action,
            len(collection),
        )
        return section

    @app.get("/healthz", response_model=HealthResponse, tags=["system"])
    def healthz() -> HealthResponse:
        return HealthResponse()

    @app.get("/api/v1", response_model=ApiRootResponse, tags=["api"])
    def api_v1_root() -> ApiRootResponse:
        return ApiRootResponse()

    @app.get("/api/v1/sections", response_model=SectionListResponse, tags=["sections"])
    def list_sections(limit: int = Query(default=100, ge=1, le=500)) -> SectionListResponse:
        return SectionListResponse(section_ids=store.list_section_ids(limit=limit))

    @app.post("/api/v1/stories/normalize", response_model=RawStoriesResponse, tags=["stories"])
    def normalize_stories(payload: RawStoriesRequest) -> RawStoriesResponse:
        return RawStoriesResponse(stories=[normalize_story_card(raw) for raw in payload.stories])

    @app.post("/api/v1/stories/render", response_model=StoriesRenderResponse, tags=["stories"])
    def render_stories(payload: RawStoriesRequest) -> StoriesRenderResponse:
        collection = _load_or_422(payload.stories)
        return StoriesRenderResponse(stories=resolve_collection_render(collection))

    @app.get(
        "/api/v1/sections/{section_id}/stories",
        response_model=SectionStoriesResponse,
        tags=["sections"],
    )
    def get_section_stories(section_id: str) -> SectionStoriesResponse:
        _, section = section_collection(section_id)
        return _section_response(section)

    @app.put(
        "/api/v1/sections/{section_id}/stories",
        response_model=SectionStoriesResponse,
        tags=["sections"],
    )
    def replace_section_stories(
        section_id: str, payload: RawStoriesRequest
    ) -> SectionStoriesResponse:
        normalized_id = _section_id_or_422(section_id)
        collection = _load_or_422(payload.stories, seed_when_empty=False)
        return _section_response(save(normalized_id, collection, action="replace"))

    @app.post(
        "/api/v1/sections/{section_id}/stories",
        response_model=StoryAddedResponse,
        tags=["sections"],
        status_code=201,
    )
    def add_section_story(section_id: str) -> StoryAddedResponse:
        collection, section = section_collection(section_id)
        updated, card = add_story(collection)
        saved = save(section.section_id, updated, action="add")
        return StoryAddedResponse(
            section_id=saved.section_id,
            stories=saved.raw_stories(),
            updated_at_utc=saved.updated_at_utc,
            story_id=card.id,
        )

    @app.delete(
        "/api/v1/sections/{section_id}/stories/{story_id}",
        response_model=SectionStoriesResponse,
        tags=["sections"],
    )
    def delete_section_story(section_id: str, story_id: str) -> SectionStoriesResponse:
        collection, section = section_collection(section_id)
        updated = remove_story(collection, story_id)
        if len(updated) == len(collection):
            return _section_response(section)
        return _section_response(save(section.section_id, updated, action="remove"))

    @app.post(
        "/api/v1/sections/{section_id}/stories/{story_id}/move",
        response_model=SectionStoriesResponse,
        tags=["sections"],
    )
    def move_section_story(
        section_id: str, story_id: str, payload: MoveStoryRequest
    ) -> SectionStoriesResponse:
        collection, section = section_collection(section_id)
        index = index_of_story(collection, story_id)
        if index is None:
            return _section_response(section)
        updated = move_story(collection, index, payload.direction)
        if updated is collection:
            return _section_response(section)
        return _section_response(save(section.section_id, updated, action="move"))

    @app.patch(
        "/api/v1/sections/{section_id}/stories/{story_id}",
        response_model=SectionStoriesResponse,
        tags=["sections"],
    )
    def patch_section_story(
        section_id: str, story_id: str, payload: StoryTextPatchRequest
    ) -> SectionStoriesResponse:
        collection, section = section_collection(section_id)
        if find_story(collection, story_id) is None:
            raise HTTPException(status_code=404, detail="Story not found")
        updated = update_story_by_id(collection, story_id, _text_patch_updater(payload))
        return _section_response(save(section.section_id, updated, action="edit"))

    @app.patch(
        "/api/v1/sections/{section_id}/stories/{story_id}/layout",
        response_model=SectionStoriesResponse,
        tags=["sections"],
    )
    def patch_section_story_layout(
        section_id: str, story_id: str, payload: StoryLayoutPatchRequest
    ) -> SectionStoriesResponse:
        collection, section = section_collection(section_id)
        if find_story(collection, story_id) is None:
            raise HTTPException(status_code=404, detail="Story not found")
        updated = update_story_by_id(collection, story_id, _layout_patch_updater(payload))
        return _section_response(save(section.section_id, updated, action="layout"))

    @app.get(
        "/api/v1/sections/{section_id}/render",
        response_model=SectionRenderResponse,
        tags=["sections"],
    )
    def render_section(section_id: str) -> SectionRenderResponse:
        collection, section = section_collection(section_id)
        return SectionRenderResponse(
            section_id=section.section_id,
            stories=resolve_collection_render(collection),
        )

    return app
