"""
End-to-end tests for the UploadManager against the fake proxy and platform.
"""

from unittest.mock import MagicMock

import pytest

from shared.storage import StorageManager
from upload_pipeline.core.auth import AccessToken, TokenProvider
from upload_pipeline.core.config import AppConfig, MetadataDefaults
from upload_pipeline.core.errors import AuthError, QuotaExceededError, ServerError, ValidationError
from upload_pipeline.core.progress import ProgressStream, UploadPhase
from upload_pipeline.core.upload_manager import UploadManager
from upload_pipeline.core.youtube import MediaMetadata, MetadataPatch, PrivacyStatus

from tests.fakes import FakePlatform, api_error


class TestUpload:
    def test_round_trip_read_back(self, manager, metadata):
        outcome = manager.upload("team-a", b"VIDEO-BYTES", metadata)

        resource = manager.read("team-a", outcome.resource.resource_id)
        assert resource.title == metadata.title
        assert resource.privacy_status == "private"
        assert resource.tags == ["rondos", "sub12"]
        assert outcome.reconciliation.succeeded
        assert not outcome.reconciliation.corrected

    def test_platform_privacy_override_is_corrected(self, config, token_provider, cache_dir, metadata):
        platform = FakePlatform(config.endpoints, force_privacy="public")
        manager = UploadManager(config, token_provider, session_factory=platform.session_for, temp_dir=cache_dir)

        outcome = manager.upload("team-a", b"VIDEO", metadata)

        assert outcome.resource.privacy_status == "public"
        assert outcome.reconciliation.corrected
        assert manager.read("team-a", outcome.resource.resource_id).privacy_status == "private"

    def test_failed_correction_still_returns_the_video(self, config, token_provider, cache_dir, metadata):
        platform = FakePlatform(config.endpoints, force_privacy="public")
        platform.status_update_failure = api_error(500, "Backend Error", "backendError")
        manager = UploadManager(config, token_provider, session_factory=platform.session_for, temp_dir=cache_dir)

        outcome = manager.upload("team-a", b"VIDEO", metadata)

        assert outcome.resource.resource_id in platform.videos
        assert not outcome.reconciliation
        assert outcome.reconciliation.error.retriable is True

    def test_each_operation_fetches_a_fresh_token(self, config, platform, cache_dir, metadata):
        tokens = MagicMock(spec=TokenProvider)
        tokens.fetch.side_effect = lambda channel: AccessToken(f"token-{channel}", channel)
        manager = UploadManager(config, tokens, session_factory=platform.session_for, temp_dir=cache_dir)

        outcome = manager.upload("team-a", b"VIDEO", metadata)
        assert tokens.fetch.call_count == 1

        video_id = outcome.resource.resource_id
        manager.read("team-a", video_id)
        manager.update("team-a", video_id, MetadataPatch(description="nuevo"))
        manager.delete("team-a", video_id)
        assert tokens.fetch.call_count == 4

    def test_progress_is_monotonic_and_completes(self, manager, metadata):
        progress = ProgressStream()
        seen = []
        progress.subscribe(seen.append)

        outcome = manager.upload("team-a", b"VIDEO", metadata, progress=progress)

        percents = [event.percent for event in seen]
        assert percents == sorted(percents)
        assert all(0 <= p <= 100 for p in percents)
        assert seen[0].phase is UploadPhase.TOKEN_ACQUIRED
        assert seen[-1].phase is UploadPhase.COMPLETED
        assert seen[-1].percent == 100
        assert seen[-1].resource_id == outcome.resource.resource_id

    def test_validation_happens_before_token_fetch(self, manager, token_provider, platform):
        with pytest.raises(ValidationError):
            manager.upload("team-a", b"VIDEO", MediaMetadata(title="", privacy=PrivacyStatus.PUBLIC))
        with pytest.raises(ValidationError):
            manager.upload("team-a", None, MediaMetadata(title="ok", privacy=PrivacyStatus.PUBLIC))

        assert token_provider.calls == []
        assert platform.calls == []

    def test_missing_metadata_is_validation_error(self, manager, token_provider, platform):
        with pytest.raises(ValidationError):
            manager.upload("team-a", b"VIDEO", None)

        assert token_provider.calls == []
        assert platform.calls == []

    def test_defaults_fill_unset_fields(self, manager, platform):
        outcome = manager.upload("team-a", b"VIDEO", MediaMetadata("Partido", PrivacyStatus.UNLISTED))

        snippet = platform.videos[outcome.resource.resource_id]["snippet"]
        assert snippet["tags"] == ["futbol", "entrenamiento"]
        assert snippet["categoryId"] == "17"
        assert snippet["defaultLanguage"] == "es"

    def test_made_for_kids_default_is_applied(self, endpoints, token_provider, platform, cache_dir, tmp_path):
        config = AppConfig(
            proxy_base_url="https://proxy.test",
            endpoints=endpoints,
            defaults=MetadataDefaults(made_for_kids=True),
            storage_root=str(tmp_path / "storage"),
        )
        manager = UploadManager(config, token_provider, session_factory=platform.session_for, temp_dir=cache_dir)

        outcome = manager.upload("team-a", b"VIDEO", MediaMetadata("Escuela infantil", PrivacyStatus.PRIVATE))
        explicit = manager.upload(
            "team-a", b"VIDEO", MediaMetadata("Primer equipo", PrivacyStatus.PRIVATE, made_for_kids=False))

        assert platform.videos[outcome.resource.resource_id]["status"]["selfDeclaredMadeForKids"] is True
        assert platform.videos[explicit.resource.resource_id]["status"]["selfDeclaredMadeForKids"] is False

    def test_quota_error_surfaces_once(self, manager, platform, metadata):
        platform.upload_failure = api_error(400, "exceeded", "uploadLimitExceeded")

        with pytest.raises(QuotaExceededError):
            manager.upload("team-a", b"VIDEO", metadata)
        assert platform.count("POST") == 1


class TestFileBackedUpload:
    def test_cache_is_empty_after_success(self, manager, platform, metadata, video_file, cache_dir):
        outcome = manager.upload("team-a", str(video_file), metadata)

        assert platform.videos[outcome.resource.resource_id]["size"] == video_file.stat().st_size
        assert list(cache_dir.iterdir()) == []

    def test_cache_is_empty_after_failure(self, manager, platform, metadata, video_file, cache_dir):
        platform.upload_failure = api_error(503, "Backend Error")

        with pytest.raises(ServerError):
            manager.upload("team-a", video_file.as_uri(), metadata)
        assert list(cache_dir.iterdir()) == []


class TestChannelScope:
    def test_other_channel_cannot_update_or_delete(self, manager, metadata):
        outcome = manager.upload("team-a", b"VIDEO", metadata)
        video_id = outcome.resource.resource_id

        with pytest.raises(AuthError):
            manager.update("team-b", video_id, MetadataPatch(title="x"))
        with pytest.raises(AuthError):
            manager.delete("team-b", video_id)

        assert manager.delete("team-a", video_id) is True
        assert manager.delete("team-a", video_id) is False


class TestLedger:
    def test_operations_are_recorded(self, config, token_provider, platform, metadata):
        storage = StorageManager(config.storage_root)
        manager = UploadManager(config, token_provider, storage=storage, session_factory=platform.session_for)

        outcome = manager.upload("team-a", b"VIDEO", metadata)
        video_id = outcome.resource.resource_id
        manager.update("team-a", video_id, MetadataPatch(privacy=PrivacyStatus.PUBLIC))
        manager.delete("team-a", video_id)
        manager.delete("team-a", video_id)

        ledger = storage.load_ledger()
        assert list(ledger["action"]) == ["upload", "update", "delete", "delete"]
        assert list(ledger["status"])[-2:] == ["deleted", "already_deleted"]
        assert ledger.iloc[0]["video_id"] == video_id
        assert ledger.iloc[1]["privacy"] == "public"
        assert list(storage.cache_path.iterdir()) == []
