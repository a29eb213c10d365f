from datetime import datetime

import pytest

from src.faceclock.faceclock.attendance.pairing import NextCheckoutPairing, PositionalPairing, pairing_for
from src.faceclock.faceclock.core.exceptions import ValidationError


def t(hour, minute=0):
    return datetime(2025, 6, 24, hour, minute)


def test_positional_pairs_by_index_after_sorting(make_event):
    ins = [make_event(t(13)), make_event(t(9))]
    outs = [make_event(t(17)), make_event(t(12))]

    sessions = PositionalPairing().pair(ins, outs)

    assert [(s.check_in.time, s.check_out.time) for s in sessions] == [(t(9), t(12)), (t(13), t(17))]


def test_positional_leaves_trailing_check_in_open(make_event):
    sessions = PositionalPairing().pair([make_event(t(9)), make_event(t(13))], [make_event(t(12))])
    assert sessions[0].check_out.time == t(12)
    assert sessions[1].is_open


def test_next_checkout_takes_first_later_check_out(make_event):
    # Clock skew: the stored check-out precedes the first check-in.
    ins = [make_event(t(9)), make_event(t(13))]
    outs = [make_event(t(8, 55)), make_event(t(17))]

    positional = PositionalPairing().pair(ins, outs)
    nearest = NextCheckoutPairing().pair(ins, outs)

    assert positional[0].check_out.time == t(8, 55)
    assert nearest[0].check_out.time == t(17)
    assert nearest[1].check_out.time == t(17)


def test_next_checkout_open_when_nothing_later(make_event):
    sessions = NextCheckoutPairing().pair([make_event(t(18))], [make_event(t(17))])
    assert sessions[0].is_open


def test_pairing_for_known_names():
    assert isinstance(pairing_for("positional"), PositionalPairing)
    assert isinstance(pairing_for(" Next_Checkout "), NextCheckoutPairing)


def test_pairing_for_unknown_name():
    with pytest.raises(ValidationError):
        pairing_for("closest")
