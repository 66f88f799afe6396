from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from app.brainstorm.schemas import (
    DimensionsOut,
    DimensionsRequest,
    FrameSummaryOut,
    FrameSummaryRequest,
    GroupingOut,
    GroupingRequest,
)
from app.brainstorm.service import BrainstormService, resolve_plan_text
from app.canvas.tree import ShapeTree
from app.core.llm.deps import get_openai_client
from app.core.llm.openai_client import (
    OpenAIError,
    OpenAIUnavailableError,
    UnconfiguredOpenAIClient,
)
from app.core.metrics import brainstorm_completions_total
from app.domain.exceptions import ShapeNotFoundError

router = APIRouter(prefix="/brainstorm", tags=["brainstorm"])
logger = logging.getLogger("app.brainstorm")

T = TypeVar("T")


async def _run_completion(
    *,
    request: Request,
    operation: str,
    openai_client,
    call: Callable[[BrainstormService], Awaitable[T]],
) -> T:
    """
    Shared error mapping and outcome logging for the brainstorm routes.

    IMPORTANT: canvas text, prompts and LLM output are never logged.
    """

    request_id = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")
    log_extra = {"request_id": request_id, "operation": operation}

    # Without a key the input checks still run; the failure surfaces at the completion call.
    svc = BrainstormService(llm_client=openai_client or UnconfiguredOpenAIClient())
    try:
        result = await call(svc)
    except ShapeNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Shape not found: {exc.shape_id}"
        ) from None
    except OpenAIUnavailableError:
        logger.info(
            "Brainstorm completion failed (LLM not configured)",
            extra={**log_extra, "success": False},
        )
        brainstorm_completions_total.labels(operation=operation, outcome="unavailable").inc()
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="LLM service unavailable"
        ) from None
    except OpenAIError:
        logger.info("Brainstorm completion failed", extra={**log_extra, "success": False})
        brainstorm_completions_total.labels(operation=operation, outcome="failed").inc()
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="LLM service failed",
        ) from None

    logger.info("Brainstorm completion generated", extra={**log_extra, "success": True})
    brainstorm_completions_total.labels(operation=operation, outcome="success").inc()
    return result


@router.post(
    "/dimensions",
    response_model=DimensionsOut,
    summary="Split a plan into dimensions",
    description=(
        "Ask the LLM for 5 dimensions of a plan, each with 3 ranked subtopics.\n\n"
        "The plan is `text` when given, otherwise the text of `source_id` in `document`."
    ),
)
async def post_dimensions(
    payload: DimensionsRequest,
    request: Request,
    openai_client=Depends(get_openai_client),
) -> DimensionsOut:
    tree = ShapeTree(payload.document) if payload.document is not None else None

    async def call(svc: BrainstormService) -> DimensionsOut:
        text = resolve_plan_text(text=payload.text, tree=tree, source_id=payload.source_id)
        return await svc.generate_dimensions(text=text)

    return await _run_completion(
        request=request, operation="dimensions", openai_client=openai_client, call=call
    )


@router.post(
    "/groups",
    response_model=GroupingOut,
    summary="Group frame notes by dimensions",
    description=(
        "Classify every note inside a frame (nested frames included) into classes derived "
        "from the given dimensions, with a confidence per note."
    ),
)
async def post_groups(
    payload: GroupingRequest,
    request: Request,
    openai_client=Depends(get_openai_client),
) -> GroupingOut:
    tree = ShapeTree(payload.document)

    async def call(svc: BrainstormService) -> GroupingOut:
        return await svc.generate_groups(
            tree=tree, frame_id=payload.frame_id, dimensions=payload.dimensions
        )

    return await _run_completion(
        request=request, operation="groups", openai_client=openai_client, call=call
    )


@router.post(
    "/summary",
    response_model=FrameSummaryOut,
    summary="Summarize a frame against a title",
    description=(
        "Summarize how the groups and individual ideas of a frame relate to a title, and "
        "match summary phrases back to shape ids.\n\n"
        "The parsed LLM reply is returned as-is: keys it omits are absent, extra keys are kept."
    ),
)
async def post_summary(
    payload: FrameSummaryRequest,
    request: Request,
    openai_client=Depends(get_openai_client),
) -> JSONResponse:
    tree = ShapeTree(payload.document)

    async def call(svc: BrainstormService) -> dict[str, Any]:
        return await svc.summarize_frame(tree=tree, frame_id=payload.frame_id, title=payload.title)

    summary = await _run_completion(
        request=request, operation="summary", openai_client=openai_client, call=call
    )
    # FrameSummaryOut documents the shape; the reply itself bypasses model serialization.
    return JSONResponse(content=summary)
