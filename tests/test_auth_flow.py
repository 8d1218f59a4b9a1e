import urllib.parse

import pytest

from moodcode.core.auth_flow import build_authorization_url, exchange_token
from moodcode.core.errors import InternalError, StateError, UpstreamError, ValidationError
from moodcode.core.pkce import derive_challenge

REDIRECT = "http://localhost:3000/callback"


def _query(url):
    return urllib.parse.parse_qs(urllib.parse.urlparse(url).query)


class TestBuildAuthorizationUrl:
    def test_url_parameters(self, store):
        url, state = build_authorization_url(store, "client-1", REDIRECT)

        assert url.startswith("https://soundcloud.com/connect?")
        params = _query(url)
        assert params["client_id"] == ["client-1"]
        assert params["redirect_uri"] == [REDIRECT]
        assert params["response_type"] == ["code"]
        assert params["scope"] == ["non-expiring"]
        assert params["code_challenge_method"] == ["S256"]
        assert params["state"] == [state]
        assert "redirect_uri=http%3A%2F%2Flocalhost%3A3000%2Fcallback" in url

    def test_registers_challenge(self, store):
        url, state = build_authorization_url(store, "client-1", REDIRECT)

        record = store.consume(state)
        assert record is not None
        assert record.challenge == derive_challenge(record.verifier)
        assert _query(url)["code_challenge"] == [record.challenge]

    def test_sweeps_expired_records(self, store, clock):
        store.put("stale", "v", "c")
        clock.advance(16 * 60)

        build_authorization_url(store, "client-1", REDIRECT)

        assert len(store) == 1

    def test_requires_configuration(self, store):
        with pytest.raises(InternalError):
            build_authorization_url(store, "", REDIRECT)
        with pytest.raises(InternalError):
            build_authorization_url(store, "client-1", "")
        assert len(store) == 0


class TestExchangeToken:
    @pytest.fixture
    def state(self, store):
        _, state = build_authorization_url(store, "client-1", REDIRECT)
        return state

    @pytest.mark.parametrize("code,state_", [(None, "s"), ("c", None), ("", ""), (None, None)])
    def test_missing_input(self, store, sc_client, code, state_):
        with pytest.raises(ValidationError) as exc_info:
            exchange_token(store, sc_client, code, state_)
        assert exc_info.value.status_code == 400
        sc_client.exchange_code.assert_not_called()

    def test_unknown_state(self, store, sc_client):
        with pytest.raises(StateError) as exc_info:
            exchange_token(store, sc_client, "code", "nope")
        assert exc_info.value.message == "State parameter already used or expired"
        sc_client.exchange_code.assert_not_called()

    def test_success(self, store, sc_client, state):
        sc_client.exchange_code.return_value = {
            "access_token": "at",
            "refresh_token": "rt",
            "expires_in": 3600,
        }
        sc_client.get_me.return_value = {"id": 7, "username": "dev"}

        result = exchange_token(store, sc_client, "code", state)

        assert result == {
            "access_token": "at",
            "refresh_token": "rt",
            "expires_in": 3600,
            "user": {"id": 7, "username": "dev"},
        }
        code, verifier = sc_client.exchange_code.call_args.args
        assert code == "code"
        assert len(verifier) == 43
        sc_client.get_me.assert_called_once_with("at")

    def test_state_is_one_shot(self, store, sc_client, state):
        sc_client.exchange_code.return_value = {"access_token": "at"}
        sc_client.get_me.return_value = {}
        exchange_token(store, sc_client, "code", state)

        with pytest.raises(StateError):
            exchange_token(store, sc_client, "code", state)

    def test_invalid_grant(self, store, sc_client, state):
        sc_client.exchange_code.side_effect = UpstreamError(
            "SoundCloud returned HTTP 400",
            upstream_status=400,
            payload={"error": "invalid_grant", "error_description": "code expired"},
        )

        with pytest.raises(UpstreamError) as exc_info:
            exchange_token(store, sc_client, "code", state)

        err = exc_info.value
        assert err.message == "Authorization code expired. Please try again."
        assert "invalid_grant" in err.details
        assert err.status_code == 400
        # state was spent before the exchange
        assert store.consume(state) is None

    def test_invalid_client(self, store, sc_client, state):
        sc_client.exchange_code.side_effect = UpstreamError(
            "SoundCloud returned HTTP 401",
            upstream_status=401,
            payload={"error": "invalid_client"},
        )

        with pytest.raises(UpstreamError) as exc_info:
            exchange_token(store, sc_client, "code", state)

        assert exc_info.value.message == "Invalid client credentials."
        assert exc_info.value.status_code == 401

    def test_network_failure(self, store, sc_client, state):
        sc_client.exchange_code.side_effect = UpstreamError(
            "SoundCloud request failed", details="Read timed out"
        )

        with pytest.raises(UpstreamError) as exc_info:
            exchange_token(store, sc_client, "code", state)

        err = exc_info.value
        assert err.message == "Failed to exchange code for token"
        assert err.details == "Read timed out"
        assert err.status_code == 500

    def test_profile_failure(self, store, sc_client, state):
        sc_client.exchange_code.return_value = {"access_token": "at"}
        sc_client.get_me.side_effect = UpstreamError(
            "SoundCloud returned HTTP 503", upstream_status=503, payload="unavailable"
        )

        with pytest.raises(UpstreamError) as exc_info:
            exchange_token(store, sc_client, "code", state)

        assert exc_info.value.message == "Failed to exchange code for token"
        assert exc_info.value.status_code == 503
