"""Feedback endpoints for submitting and querying project feedback."""

import time

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from govhub.api.auth import verify_api_key
from govhub.api.dependencies import (
    get_feedback_pipeline,
    get_feedback_store,
    get_project_directory,
)
from govhub.api.models import (
    ErrorResponse,
    FeedbackItem,
    FeedbackListResponse,
    FeedbackSubmitRequest,
    FeedbackSummaryItem,
    FeedbackWithProjectItem,
    ProjectFeedbackResponse,
    SubmitFeedbackResponse,
    UserStatsResponse,
)
from govhub.feedback.config import FeedbackConfig
from govhub.feedback.errors import ProjectNotFoundError
from govhub.feedback.pipeline import FailureKind, FeedbackPipeline, SubmitFailure
from govhub.feedback.schemas import FeedbackDraft
from govhub.feedback.stats import summarize_feedback, with_project_titles
from govhub.feedback.store import FeedbackStore
from govhub.projects.directory import ProjectDirectory

logger = structlog.get_logger(__name__)
router = APIRouter()
_config = FeedbackConfig()

_FAILURE_STATUS = {
    FailureKind.PROJECT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.CLASSIFICATION_FAILED: status.HTTP_502_BAD_GATEWAY,
    FailureKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.post(
    "/projects/{project_id}/feedback",
    response_model=SubmitFeedbackResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid API key"},
        404: {"model": SubmitFeedbackResponse, "description": "Project not found"},
        422: {"model": ErrorResponse, "description": "Invalid request body"},
        502: {
            "model": SubmitFeedbackResponse,
            "description": "Sentiment classification failed; feedback was saved",
        },
    },
    summary="Submit project feedback",
    description=(
        "Save a citizen's comment and optional rating on a project, annotate "
        "it with a sentiment summary, and invalidate cached project views."
    ),
)
async def submit_feedback(
    project_id: str,
    request: FeedbackSubmitRequest,
    api_key: str = Depends(verify_api_key),
    pipeline: FeedbackPipeline = Depends(get_feedback_pipeline),
) -> SubmitFeedbackResponse | JSONResponse:
    start_time = time.perf_counter()

    author_name = request.author_name.strip()
    comment = request.comment.strip()
    if len(comment) > _config.max_comment_length:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Comment exceeds {_config.max_comment_length} characters",
        )
    if len(author_name) > _config.max_author_name_length:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Author name exceeds {_config.max_author_name_length} characters",
        )

    try:
        draft = FeedbackDraft(
            author_name=author_name,
            comment=comment,
            rating=request.rating,
            user_id=request.user_id,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )

    result = await pipeline.submit(project_id, draft)
    latency_ms = round((time.perf_counter() - start_time) * 1000, 2)

    body = result.to_dict()
    body["latency_ms"] = latency_ms

    if isinstance(result, SubmitFailure):
        return JSONResponse(status_code=_FAILURE_STATUS[result.kind], content=body)

    logger.info(
        "Feedback submitted",
        project_id=project_id,
        feedback_id=result.feedback.id,
        sentiment_summary=result.sentiment_summary,
        latency_ms=latency_ms,
    )
    return SubmitFeedbackResponse.model_validate(body)


@router.get(
    "/projects/{project_id}/feedback",
    response_model=ProjectFeedbackResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid API key"},
        404: {"model": ErrorResponse, "description": "Project not found"},
        500: {"model": ErrorResponse, "description": "Server error"},
    },
    summary="List project feedback",
    description="Feedback on a project, newest first, with rating and sentiment summary.",
)
async def list_project_feedback(
    project_id: str,
    api_key: str = Depends(verify_api_key),
    store: FeedbackStore = Depends(get_feedback_store),
) -> ProjectFeedbackResponse:
    start_time = time.perf_counter()

    try:
        records = await store.list_for_project(project_id)
    except ProjectNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id!r} not found",
        )
    except Exception as e:
        logger.error("list_project_feedback_failed", error=str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list feedback",
        )

    return ProjectFeedbackResponse(
        project_id=project_id,
        feedback=[FeedbackItem.model_validate(r.to_dict()) for r in records],
        summary=FeedbackSummaryItem.model_validate(summarize_feedback(records).to_dict()),
        latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
    )


@router.get(
    "/feedback",
    response_model=FeedbackListResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid API key"},
        500: {"model": ErrorResponse, "description": "Server error"},
    },
    summary="List all feedback",
    description="All feedback across projects with project titles, newest first.",
)
async def list_all_feedback(
    api_key: str = Depends(verify_api_key),
    store: FeedbackStore = Depends(get_feedback_store),
    directory: ProjectDirectory = Depends(get_project_directory),
) -> FeedbackListResponse:
    start_time = time.perf_counter()

    try:
        items = await with_project_titles(await store.list_all(), directory)
    except Exception as e:
        logger.error("list_all_feedback_failed", error=str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list feedback",
        )

    return FeedbackListResponse(
        feedback=[FeedbackWithProjectItem.model_validate(i) for i in items],
        total=len(items),
        latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
    )


@router.get(
    "/users/{user_id}/feedback",
    response_model=FeedbackListResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid API key"}},
    summary="List a user's feedback",
)
async def list_user_feedback(
    user_id: str,
    api_key: str = Depends(verify_api_key),
    store: FeedbackStore = Depends(get_feedback_store),
    directory: ProjectDirectory = Depends(get_project_directory),
) -> FeedbackListResponse:
    start_time = time.perf_counter()

    items = await with_project_titles(await store.list_for_user(user_id), directory)

    return FeedbackListResponse(
        feedback=[FeedbackWithProjectItem.model_validate(i) for i in items],
        total=len(items),
        latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
    )


@router.get(
    "/users/{user_id}/stats",
    response_model=UserStatsResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid API key"}},
    summary="User dashboard statistics",
    description="Number of feedback submissions and average rating given by a user.",
)
async def get_user_stats(
    user_id: str,
    api_key: str = Depends(verify_api_key),
    store: FeedbackStore = Depends(get_feedback_store),
) -> UserStatsResponse:
    summary = summarize_feedback(await store.list_for_user(user_id))
    return UserStatsResponse(
        user_id=user_id,
        feedback_submitted=summary.count,
        average_rating=summary.avg_rating,
    )
