from unittest.mock import Mock

import pytest

from asset_pipeline.services import App


@pytest.fixture
def collaborators():
    """Parent mock recording every datastore/registry call in order."""
    mock = Mock()
    mock.datastore.retrieve = Mock(return_value=b"B0")
    mock.processors.process = Mock(return_value=b"B1")
    mock.encoders.encode = Mock(return_value=b"B2")
    mock.analysers.analyse = Mock(return_value={"width": 100})
    return mock


@pytest.fixture
def app(collaborators):
    """App whose collaborators are all mocks."""
    return App(
        collaborators.datastore,
        processors=collaborators.processors,
        encoders=collaborators.encoders,
        analysers=collaborators.analysers,
        name="test",
    )


@pytest.fixture
def other_app(collaborators):
    """Second app sharing the same collaborators but a distinct identity."""
    return App(
        collaborators.datastore,
        processors=collaborators.processors,
        encoders=collaborators.encoders,
        analysers=collaborators.analysers,
        name="other",
    )
