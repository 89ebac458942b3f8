"""Shared fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from govhub.api.app import create_app
from govhub.api.auth import verify_api_key
from govhub.api.dependencies import (
    get_feedback_pipeline,
    get_feedback_store,
    get_project_directory,
    get_sentiment_classifier,
)
from govhub.feedback.pipeline import FeedbackPipeline


@pytest.fixture
def classifier(positive_classifier):
    """Classifier used by the app; override in a test module to change it."""
    return positive_classifier


@pytest.fixture
def client(store, directory, classifier, view_cache):
    """TestClient wired to in-memory services over the seeded projects."""
    app = create_app()
    pipeline = FeedbackPipeline(store, classifier, view_cache)

    app.dependency_overrides[verify_api_key] = lambda: "test-key"
    app.dependency_overrides[get_project_directory] = lambda: directory
    app.dependency_overrides[get_feedback_store] = lambda: store
    app.dependency_overrides[get_sentiment_classifier] = lambda: classifier
    app.dependency_overrides[get_feedback_pipeline] = lambda: pipeline

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
