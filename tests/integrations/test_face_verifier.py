import pytest
import requests

from src.faceclock.faceclock.core.exceptions import VerificationServiceError
from src.faceclock.faceclock.integrations.face_verification import HttpFaceVerifier


class StubResponse:
    def __init__(self, payload=None, status=200, bad_json=False):
        self._payload = payload
        self.status_code = status
        self._bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self._bad_json:
            raise ValueError("not json")
        return self._payload


class StubSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.posts = []

    def post(self, url, json=None, timeout=None):
        self.posts.append((url, json, timeout))
        if self.error:
            raise self.error
        return self.response


def verifier(session, url="http://faces.local/verify"):
    return HttpFaceVerifier(url, timeout=3, session=session)


def test_posts_both_urls_and_reads_match():
    session = StubSession(StubResponse({"match": True}))

    assert verifier(session).verify("http://m/cap.jpg", "http://m/ref.jpg") is True
    assert session.posts == [
        (
            "http://faces.local/verify",
            {"capturedImageUrl": "http://m/cap.jpg", "referenceImageUrl": "http://m/ref.jpg"},
            3.0,
        )
    ]


def test_mismatch():
    assert verifier(StubSession(StubResponse({"match": False}))).verify("a", "b") is False


@pytest.mark.parametrize(
    "session",
    [
        StubSession(error=requests.ConnectionError("refused")),
        StubSession(error=requests.Timeout("slow")),
        StubSession(StubResponse({"error": "boom"}, status=500)),
        StubSession(StubResponse(bad_json=True)),
        StubSession(StubResponse({"match": "yes"})),
        StubSession(StubResponse(["match"])),
    ],
)
def test_service_failures_are_retryable(session):
    with pytest.raises(VerificationServiceError) as exc:
        verifier(session).verify("a", "b")
    assert exc.value.retryable is True


def test_unconfigured_url():
    session = StubSession(StubResponse({"match": True}))
    with pytest.raises(VerificationServiceError):
        verifier(session, url="").verify("a", "b")
    assert session.posts == []
