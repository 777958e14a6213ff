"""
Tests for privacy reconciliation after upload.
"""

from upload_pipeline.core.config import MetadataDefaults
from upload_pipeline.core.errors import AuthError, ValidationError
from upload_pipeline.core.youtube import ConsistencyVerifier, MediaMetadata, PrivacyStatus, ResourceMutator

from tests.fakes import api_error


def upload_as(platform, owner, privacy, **status):
    return platform.add_video(
        owner,
        {"title": "Partido vs. Atletico", "tags": ["partido"], "categoryId": "17"},
        {"privacyStatus": privacy, "embeddable": True, "license": "youtube", **status},
    )


def test_matching_privacy_needs_no_write(platform, api_for, team_token):
    video_id = upload_as(platform, "team-a", "private")

    result = ConsistencyVerifier(api_for(team_token)).reconcile(
        video_id, MediaMetadata("Partido", PrivacyStatus.PRIVATE))

    assert result.succeeded and not result.corrected
    assert result.observed_privacy == "private"
    assert platform.count("PUT") == 0
    assert platform.count("GET", part="status") == 1


def test_mismatch_is_corrected_and_visible_on_read(platform, api_for, team_token):
    video_id = upload_as(platform, "team-a", "public", publicStatsViewable=False)
    api = api_for(team_token)

    result = ConsistencyVerifier(api).reconcile(video_id, MediaMetadata("Partido", "unlisted"))

    assert result.succeeded and result.corrected
    assert result.observed_privacy == "public"
    assert result.intended_privacy == "unlisted"
    assert platform.count("PUT", part="status") == 1

    status = platform.videos[video_id]["status"]
    assert status["privacyStatus"] == "unlisted"
    assert status["embeddable"] is True
    assert status["publicStatsViewable"] is False

    resource = ResourceMutator(api, MetadataDefaults()).read(video_id)
    assert resource.privacy_status == "unlisted"
    assert resource.tags == ["partido"]


def test_failed_correction_is_reported_not_raised(platform, api_for, team_token):
    video_id = upload_as(platform, "team-a", "public")
    platform.status_update_failure = api_error(400, "invalid status", "invalidVideoMetadata")

    result = ConsistencyVerifier(api_for(team_token)).reconcile(
        video_id, MediaMetadata("Partido", PrivacyStatus.PRIVATE))

    assert not result
    assert result.succeeded is False
    assert isinstance(result.error, ValidationError)
    assert platform.videos[video_id]["status"]["privacyStatus"] == "public"


def test_other_channel_token_cannot_correct(platform, api_for, team_token):
    video_id = upload_as(platform, "team-b", "public")

    result = ConsistencyVerifier(api_for(team_token)).reconcile(
        video_id, MediaMetadata("Partido", PrivacyStatus.PRIVATE))

    assert not result.succeeded
    assert isinstance(result.error, AuthError)


def test_missing_video_is_reported(platform, api_for, team_token):
    result = ConsistencyVerifier(api_for(team_token)).reconcile(
        "missing", MediaMetadata("Partido", PrivacyStatus.PRIVATE))

    assert not result.succeeded
    assert result.observed_privacy is None
    assert isinstance(result.error, ValidationError)
    assert platform.count("PUT") == 0
