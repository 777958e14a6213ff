# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Shared fixtures: configuration pointing at fake endpoints, the fake
# platform, a counting token provider and a wired UploadManager.
# =============================================================================

import pytest

from upload_pipeline.core.auth import AccessToken
from upload_pipeline.core.config import AppConfig, PlatformEndpoints
from upload_pipeline.core.upload_manager import UploadManager
from upload_pipeline.core.youtube import MediaMetadata, PrivacyStatus, YouTubeApi

from tests.fakes import FakePlatform, FakeTokenProvider


@pytest.fixture
def endpoints():
    return PlatformEndpoints(
        upload_url="https://upload.platform.test/videos",
        resources_url="https://api.platform.test/videos",
    )


@pytest.fixture
def config(endpoints, tmp_path):
    return AppConfig(
        proxy_base_url="https://proxy.test",
        endpoints=endpoints,
        storage_root=str(tmp_path / "storage"),
    )


@pytest.fixture
def platform(endpoints):
    return FakePlatform(endpoints)


@pytest.fixture
def token_provider():
    return FakeTokenProvider()


@pytest.fixture
def cache_dir(tmp_path):
    path = tmp_path / "cache"
    path.mkdir()
    return path


@pytest.fixture
def manager(config, token_provider, platform, cache_dir):
    return UploadManager(
        config,
        token_provider,
        session_factory=platform.session_for,
        temp_dir=cache_dir,
    )


@pytest.fixture
def team_token():
    return AccessToken(value="token-team-a", channel="team-a")


@pytest.fixture
def api_for(config, platform):
    def factory(token):
        return YouTubeApi(token, config.endpoints, platform.session_for)
    return factory


@pytest.fixture
def metadata():
    return MediaMetadata(
        title="Entrenamiento sub-12 - rondos",
        privacy=PrivacyStatus.PRIVATE,
        description="Sesion del martes",
        tags=["rondos", "sub12"],
        category_id="17",
    )


@pytest.fixture
def video_file(tmp_path):
    path = tmp_path / "videos" / "match.mp4"
    path.parent.mkdir()
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42" + b"frame" * 2000)
    return path
