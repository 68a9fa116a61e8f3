import pytest

from chat_core.domain.gate import try_admit
from chat_core.domain.models import RequestState


@pytest.mark.parametrize("raw", ["", " ", "   ", "\t", "\n", " \t\n "])
def test_whitespace_only_rejected(raw):
    res = try_admit(raw, RequestState.IDLE)
    assert not res.admitted
    assert res.text is None
    assert res.reason == "EMPTY_INPUT"


def test_pending_state_rejects_valid_text():
    res = try_admit("hello", RequestState.PENDING)
    assert not res.admitted
    assert res.reason == "REQUEST_PENDING"


def test_admits_trimmed_text():
    res = try_admit("  Hello  ", RequestState.IDLE)
    assert res.admitted
    assert res.text == "Hello"
    assert res.reason is None


def test_inner_whitespace_kept():
    res = try_admit("\n a  b \n", RequestState.IDLE)
    assert res.text == "a  b"


def test_none_input_treated_as_empty():
    res = try_admit(None, RequestState.IDLE)
    assert not res.admitted
