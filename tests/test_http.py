import httpx
import pytest

from uae_law.utils.http import (
    ClientError,
    HttpClient,
    NetworkError,
    RateLimiter,
    ServerError,
    create_http_client,
    get_rate_limiter,
)

URL = "https://moj.gov.ae/en/legislation/federal-decree-law-45-2021"


def scripted_transport(outcomes, seen=None):
    """MockTransport answering with the given status codes / exceptions in turn."""
    outcomes = list(outcomes)

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        outcome = outcomes.pop(0)
        if isinstance(outcome, type) and issubclass(outcome, Exception):
            raise outcome("scripted failure", request=request)
        return httpx.Response(outcome, text=f"status {outcome}")

    return httpx.MockTransport(handler)


def make_client(fake_clock, outcomes, seen=None, **kwargs):
    kwargs.setdefault("max_retries", 3)
    kwargs.setdefault("backoff_base", 2.0)
    kwargs.setdefault("rate_limiter", RateLimiter(0, clock=fake_clock, sleep=fake_clock.sleep))
    return HttpClient(
        client=httpx.Client(transport=scripted_transport(outcomes, seen)),
        sleep=fake_clock.sleep,
        **kwargs,
    )


class TestRetries:
    def test_success_first_try(self, fake_clock):
        client = make_client(fake_clock, [200])
        response = client.get(URL)
        assert response.status_code == 200
        assert response.text == "status 200"
        assert fake_clock.sleeps == []

    def test_retries_429_and_5xx_with_backoff(self, fake_clock):
        seen = []
        client = make_client(fake_clock, [503, 429, 200], seen)
        assert client.get(URL).status_code == 200
        assert len(seen) == 3
        assert fake_clock.sleeps == [2.0, 4.0]

    def test_gives_up_after_max_retries(self, fake_clock):
        seen = []
        client = make_client(fake_clock, [500, 502, 503, 504], seen)
        with pytest.raises(ServerError) as exc_info:
            client.get(URL)
        assert "504" in str(exc_info.value)
        assert len(seen) == 4
        assert fake_clock.sleeps == [2.0, 4.0, 8.0]

    @pytest.mark.parametrize("status", [400, 403, 404])
    def test_client_errors_are_not_retried(self, fake_clock, status):
        seen = []
        client = make_client(fake_clock, [status], seen)
        with pytest.raises(ClientError) as exc_info:
            client.get(URL)
        assert str(status) in str(exc_info.value)
        assert len(seen) == 1
        assert fake_clock.sleeps == []

    def test_network_errors_are_retried(self, fake_clock):
        client = make_client(fake_clock, [httpx.ConnectError, httpx.ReadTimeout, 200])
        assert client.get(URL).status_code == 200
        assert fake_clock.sleeps == [2.0, 4.0]

    def test_persistent_timeout(self, fake_clock):
        client = make_client(fake_clock, [httpx.ReadTimeout] * 2, max_retries=1, timeout=5.0)
        with pytest.raises(NetworkError, match="timed out after 5.0s"):
            client.get(URL)
        assert fake_clock.sleeps == [2.0]

    def test_backoff_schedule(self, fake_clock):
        client = make_client(fake_clock, [])
        assert [client.backoff_delay(a) for a in range(3)] == [2.0, 4.0, 8.0]


class TestRateLimiter:
    def test_spacing_between_requests(self, fake_clock):
        limiter = RateLimiter(0.5, clock=fake_clock, sleep=fake_clock.sleep)
        assert limiter.wait() == 0.0
        assert limiter.wait() == pytest.approx(0.5)
        fake_clock.now += 2.0
        assert limiter.wait() == 0.0
        assert fake_clock.sleeps == [pytest.approx(0.5)]

    def test_every_attempt_waits_on_the_limiter(self, fake_clock):
        limiter = RateLimiter(1.0, clock=fake_clock, sleep=fake_clock.sleep)
        client = make_client(fake_clock, [200, 200], rate_limiter=limiter)
        client.get(URL)
        client.get(URL)
        assert fake_clock.sleeps == [pytest.approx(1.0)]

    def test_limiter_shared_between_clients(self, fake_clock):
        limiter = RateLimiter(1.0, clock=fake_clock, sleep=fake_clock.sleep)
        make_client(fake_clock, [200], rate_limiter=limiter).get(URL)
        make_client(fake_clock, [200], rate_limiter=limiter).get(URL)
        assert fake_clock.sleeps == [pytest.approx(1.0)]

    def test_process_wide_singleton(self):
        assert get_rate_limiter() is get_rate_limiter()


def test_publisher_headers_are_sent(fake_clock):
    seen = []
    client = create_http_client(
        client=httpx.Client(transport=scripted_transport([200], seen)),
        rate_limiter=RateLimiter(0, clock=fake_clock, sleep=fake_clock.sleep),
    )
    client.get(URL, headers={"X-Trace": "1"})
    headers = seen[0].headers
    assert headers["User-Agent"] == "UAELawIndex/1.0"
    assert "ar" in headers["Accept-Language"]
    assert headers["X-Trace"] == "1"


def test_injected_client_is_not_closed(fake_clock):
    inner = httpx.Client(transport=scripted_transport([200]))
    with HttpClient(client=inner, rate_limiter=RateLimiter(0, clock=fake_clock, sleep=fake_clock.sleep)):
        pass
    assert not inner.is_closed
    inner.close()
