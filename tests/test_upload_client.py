"""
Tests for the upload client against the fake platform.
"""

import pytest
import requests

from upload_pipeline.core.encoding import AssetEncoder, InMemorySource
from upload_pipeline.core.errors import NetworkError, QuotaExceededError, ServerError
from upload_pipeline.core.progress import ProgressStream, UploadPhase
from upload_pipeline.core.youtube import UploadClient

from tests.fakes import FakePlatform, api_error


@pytest.fixture
def client(endpoints, platform):
    return UploadClient(endpoints, platform.session_for)


def send(client, token, metadata, progress=None, data=b"VIDEO"):
    with AssetEncoder().build(InMemorySource(data), metadata) as body:
        return client.send(token, body, progress)


def test_upload_returns_resource_and_reports_phases(client, platform, team_token, metadata):
    progress = ProgressStream()

    resource = send(client, team_token, metadata, progress)

    assert resource.resource_id in platform.videos
    assert resource.url == f"https://www.youtube.com/watch?v={resource.resource_id}"
    assert resource.title == metadata.title
    assert platform.videos[resource.resource_id]["owner"] == "team-a"
    assert platform.videos[resource.resource_id]["size"] == 5

    phases = [event.phase for event in progress]
    assert phases == [
        UploadPhase.TRANSFER_STARTED,
        UploadPhase.TRANSFER_ACKNOWLEDGED,
        UploadPhase.RESPONSE_PARSED,
    ]
    assert progress.latest.resource_id == resource.resource_id


def test_snapshot_reflects_what_the_platform_applied(endpoints, team_token, metadata):
    platform = FakePlatform(endpoints, force_privacy="public")
    client = UploadClient(endpoints, platform.session_for)

    resource = send(client, team_token, metadata)

    assert resource.privacy_status == "public"


def test_quota_rejection_is_not_retried(client, platform, team_token, metadata):
    platform.upload_failure = api_error(
        400, "The user has exceeded the number of videos they may upload.", "uploadLimitExceeded")

    with pytest.raises(QuotaExceededError):
        send(client, team_token, metadata)

    assert platform.count("POST") == 1
    assert platform.videos == {}


def test_server_failure_is_retriable_server_error(client, platform, team_token, metadata):
    platform.upload_failure = api_error(503, "Backend Error", "backendError")

    with pytest.raises(ServerError) as exc_info:
        send(client, team_token, metadata)

    assert exc_info.value.retriable is True
    assert platform.count("POST") == 1


def test_transport_failure_is_network_error(client, platform, team_token, metadata):
    platform.transport_error = requests.ConnectionError("connection reset by peer")

    with pytest.raises(NetworkError):
        send(client, team_token, metadata)


def test_missing_id_in_response_is_server_error(client, platform, team_token, metadata):
    platform.omit_id_on_upload = True
    progress = ProgressStream()

    with pytest.raises(ServerError):
        send(client, team_token, metadata, progress)

    assert UploadPhase.RESPONSE_PARSED not in [event.phase for event in progress]
