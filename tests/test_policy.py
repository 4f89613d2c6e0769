import pytest

from launch_router.navigation import BrowserContent, FailureMessage, PrimaryInterface
from launch_router.outcomes import Completed, ErrorDetail, Failed, Pending, RateLimited
from launch_router.policy import destination_to_validate, state_for_outcome, state_for_validation
from launch_router.settings import ResolverConfig


def make_failure(code: int = -1, message: str = "boom") -> Failed:
    """Helper: a Failed outcome with an arbitrary cause."""
    return Failed(ErrorDetail("TransportError", code, message))


def test_destination_needs_validation():
    assert destination_to_validate(Completed("https://example.com")) == "https://example.com"


@pytest.mark.parametrize(
    "outcome",
    [Completed(None), Completed(""), RateLimited(), make_failure(), Pending()],
)
def test_nothing_to_validate(outcome):
    assert destination_to_validate(outcome) is None


def test_no_destination_goes_to_primary():
    assert state_for_outcome(Completed(None)) == PrimaryInterface()
    assert state_for_outcome(Completed("")) == PrimaryInterface()


def test_destination_waits_for_validation():
    assert state_for_outcome(Completed("https://example.com")) is None


def test_pending_has_no_transition():
    assert state_for_outcome(Pending()) is None


def test_rate_limit_uses_configured_message():
    cfg = ResolverConfig(rate_limited_message="Busy, try later")
    state = state_for_outcome(RateLimited(), config=cfg)
    assert state == FailureMessage("Busy, try later")
    assert state.retryable


def test_failure_shows_cause_message():
    assert state_for_outcome(make_failure(503, "HTTP error: 503")) == FailureMessage("HTTP error: 503")


def test_unknown_outcome_is_a_programming_error():
    with pytest.raises(TypeError):
        state_for_outcome(object())


@pytest.mark.parametrize("status", [200, 204, 299])
def test_reachable_destination_is_shown(status):
    assert state_for_validation("https://example.com", status) == BrowserContent("https://example.com")


@pytest.mark.parametrize("status", [None, 199, 301, 404, 429, 500])
def test_unreachable_destination_falls_back_to_primary(status):
    assert state_for_validation("https://example.com", status) == PrimaryInterface()
