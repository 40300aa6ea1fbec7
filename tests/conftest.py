"""Test configuration and fixtures"""

import pytest
from unittest.mock import Mock

import requests

from flom.core.config import EffectiveConfig
from flom.core.platforms import PlatformId


SPOTIFY_URL = "https://open.spotify.com/track/4Km5HrUvYTaSUfiSGPJeQR"
APPLE_MUSIC_URL = "https://geo.music.apple.com/us/album/_/1440833087?i=1440833098&mt=1&app=music"
YOUTUBE_MUSIC_URL = "https://music.youtube.com/watch?v=kOZCXEb2EEM"
SONGLINK_URL = "https://song.link/s/4Km5HrUvYTaSUfiSGPJeQR"


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep tests away from the real home directory, .env files and FLOM_* variables"""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    for name in ("FLOM_ODESLI_KEY", "FLOM_DEFAULT_TARGET", "FLOM_OUTPUT_SIMPLE", "FLOM_USER_COUNTRY"):
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return home


@pytest.fixture
def sample_odesli_payload():
    """Trimmed Odesli response for a Spotify track"""
    return {
        'entityUniqueId': 'SPOTIFY_SONG::4Km5HrUvYTaSUfiSGPJeQR',
        'userCountry': 'US',
        'pageUrl': SONGLINK_URL,
        'entitiesByUniqueId': {
            'SPOTIFY_SONG::4Km5HrUvYTaSUfiSGPJeQR': {
                'id': '4Km5HrUvYTaSUfiSGPJeQR',
                'type': 'song',
                'title': 'Bad and Boujee (feat. Lil Uzi Vert)',
                'artistName': 'Migos',
                'apiProvider': 'spotify',
            },
            'ITUNES_SONG::1440833098': {
                'id': '1440833098',
                'type': 'song',
                'title': 'Bad and Boujee (feat. Lil Uzi Vert)',
                'artistName': 'Migos',
                'apiProvider': 'itunes',
            },
            'YOUTUBE_VIDEO::kOZCXEb2EEM': {
                'id': 'kOZCXEb2EEM',
                'type': 'song',
                'title': 'Migos - Bad and Boujee',
                'artistName': 'Migos',
                'apiProvider': 'youtube',
            },
        },
        'linksByPlatform': {
            'youtubeMusic': {
                'entityUniqueId': 'YOUTUBE_VIDEO::kOZCXEb2EEM',
                'url': YOUTUBE_MUSIC_URL,
            },
            'appleMusic': {
                'entityUniqueId': 'ITUNES_SONG::1440833098',
                'url': APPLE_MUSIC_URL,
            },
            'spotify': {
                'entityUniqueId': 'SPOTIFY_SONG::4Km5HrUvYTaSUfiSGPJeQR',
                'url': SPOTIFY_URL,
            },
            'napster': {
                'entityUniqueId': 'NAPSTER_SONG::tra.1',
                'url': 'https://play.napster.com/track/tra.1',
            },
        },
    }


@pytest.fixture
def make_response():
    """Factory for mocked requests.Response objects"""
    def _make(status_code=200, payload=None, text=None, json_error=False):
        response = Mock(spec=requests.Response)
        response.status_code = status_code
        response.ok = 200 <= status_code < 400
        response.text = text if text is not None else ("" if payload is None else str(payload))
        if json_error:
            response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
        else:
            response.json.return_value = payload
        return response
    return _make


@pytest.fixture
def mock_session(make_response, sample_odesli_payload):
    """requests.Session mock answering every GET with the sample payload"""
    session = Mock(spec=requests.Session)
    session.get.return_value = make_response(payload=sample_odesli_payload)
    return session


@pytest.fixture
def config():
    """EffectiveConfig with an API key and no default target"""
    return EffectiveConfig(odesli_key="test-odesli-key")


@pytest.fixture
def apple_config():
    """EffectiveConfig defaulting to Apple Music"""
    return EffectiveConfig(odesli_key="test-odesli-key", default_target=PlatformId.APPLE_MUSIC)


class ScriptedPrompter:
    """Prompter returning canned answers and recording what it was shown"""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls = []

    def choose(self, title, options):
        self.calls.append((title, list(options)))
        return self.answers.pop(0) if self.answers else None


@pytest.fixture
def scripted_prompter():
    return ScriptedPrompter
