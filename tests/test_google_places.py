import pytest

from lead_dashboard.vendors import google_places


class DummyResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload or {}
        self.text = "error body"

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return self._payload


class DummySession:
    def __init__(self):
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append((url, json, headers, timeout))
        return self.response


@pytest.fixture(autouse=True)
def patch_session(monkeypatch):
    session = DummySession()
    monkeypatch.setattr(google_places, "_SESSION", session)
    return session


def test_search_text_success(patch_session):
    patch_session.response = DummyResponse(payload={"places": [{"id": "p1"}]})

    places = google_places.search_text("movers in Austin", "key", max_result_count=5)

    assert places == [{"id": "p1"}]
    url, body, headers, timeout = patch_session.calls[0]
    assert url.endswith("places:searchText")
    assert body == {"textQuery": "movers in Austin", "maxResultCount": 5, "rankPreference": "RELEVANCE"}
    assert headers["X-Goog-Api-Key"] == "key"
    assert "places.businessStatus" in headers["X-Goog-FieldMask"]
    assert timeout == 10


def test_search_text_without_places(patch_session):
    patch_session.response = DummyResponse(payload={})
    assert google_places.search_text("movers in Austin", "key") == []


def test_search_text_http_error(patch_session):
    patch_session.response = DummyResponse(status_code=403, payload={"error": {"message": "denied"}})
    with pytest.raises(google_places.GooglePlacesError):
        google_places.search_text("movers in Austin", "key")


def test_autocomplete_success(patch_session):
    suggestions = [{"placePrediction": {"placeId": "x", "text": {"text": "Austin, TX, USA"}}}]
    patch_session.response = DummyResponse(payload={"suggestions": suggestions})

    assert google_places.autocomplete("Aus", "key") == suggestions
    url, body, headers, _ = patch_session.calls[0]
    assert url.endswith("places:autocomplete")
    assert body["includedPrimaryTypes"] == google_places.AUTOCOMPLETE_TYPES
    assert "X-Goog-FieldMask" not in headers


def test_autocomplete_http_error(patch_session):
    patch_session.response = DummyResponse(status_code=500)
    with pytest.raises(google_places.GooglePlacesError):
        google_places.autocomplete("Aus", "key")
