import numpy as np
import pytest

from conftest import ok
from ingredient_alert.presenter.announcer import WARNING_PREAMBLE, AlertAnnouncer, build_summary
from ingredient_alert.presenter.overlay import Overlay, load_font, wrap_text
from ingredient_alert.presenter.presenter import ScanPresenter, render_frame
from ingredient_alert.session.scan_session import complete_recognition, new_session, tick, trigger_scan


@pytest.fixture
def frame():
    return np.full((480, 640, 3), 120, dtype=np.uint8)


def _alerting(capture, recognizer, text, now=0.0):
    session = trigger_scan(new_session(), capture, recognizer)
    return complete_recognition(session, ok(text), now=now, verbose=False)


def test_render_returns_new_frame_and_leaves_input_alone(frame, capture, recognizer):
    before = frame.copy()
    session = _alerting(capture, recognizer, "sugar, msg")

    out = render_frame(frame, session, now=1000.0)

    assert out.shape == frame.shape
    assert out.dtype == np.uint8
    assert np.array_equal(frame, before)


def test_render_does_not_touch_session(frame, capture, recognizer):
    session = _alerting(capture, recognizer, "trans fat")
    snapshot = (session.phase, session.status, session.matches, session.alert_started_at, session.scan_id)

    render_frame(frame, session, now=200.0)

    assert (session.phase, session.status, session.matches, session.alert_started_at, session.scan_id) == snapshot


def test_idle_prompt_only_when_ready(frame):
    session = new_session()
    ready = render_frame(frame, session, now=0.0, ready=True)
    not_ready = render_frame(frame, session, now=0.0, ready=False)

    # 하단 배너 영역만 달라짐
    assert not np.array_equal(ready[430:460], frame[430:460])
    assert np.array_equal(not_ready, frame)


def test_processing_indicator_drawn_in_center(frame, capture, recognizer):
    session = trigger_scan(new_session(), capture, recognizer)
    out = render_frame(frame, session, now=500.0)

    assert not np.array_equal(out[220:260, 240:400], frame[220:260, 240:400])
    assert np.array_equal(out[:100, :100], frame[:100, :100])


def test_flagged_badge_is_red_and_safe_badge_is_green(frame, capture, recognizer):
    flagged = render_frame(frame, _alerting(capture, recognizer, "sugar"), now=1000.0)
    safe = render_frame(frame, _alerting(capture, recognizer, "water"), now=1000.0)

    # 배지 좌상단 모서리 안쪽 픽셀 (BGR)
    b, g, r = flagged[14, 594]
    assert r > 200 and g < 50
    b, g, r = safe[14, 594]
    assert g > 150 and r < 50


def test_flagged_card_slides_in(frame, capture, recognizer):
    session = _alerting(capture, recognizer, "sugar", now=0.0)

    start = render_frame(frame, session, now=0.0)
    settled = render_frame(frame, session, now=1000.0)

    card_area = (slice(80, 140), slice(330, 600))
    # 시작 시점에는 카드가 화면 밖 + 투명
    assert np.array_equal(start[card_area], frame[card_area])
    assert not np.array_equal(settled[card_area], frame[card_area])


def test_safe_has_no_card(frame, capture, recognizer):
    session = _alerting(capture, recognizer, "water")
    out = render_frame(frame, session, now=1000.0)

    assert np.array_equal(out[120:200, 330:600], frame[120:200, 330:600])


def test_build_summary():
    class M:
        def __init__(self, phrase, explanation):
            self.phrase = phrase
            self.explanation = explanation

    summary = build_summary([M("sugar", "Bad"), M("msg", "Also bad")])
    assert summary == WARNING_PREAMBLE + "sugar. Bad. msg. Also bad. "


def test_speech_fires_once_per_flagged_alert(frame, capture, recognizer, speaker):
    presenter = ScanPresenter(speaker)
    session = _alerting(capture, recognizer, "msg")

    for now in (0.0, 16.0, 32.0, 1000.0):
        presenter.present(frame, session, now)

    assert len(speaker.utterances) == 1
    assert speaker.utterances[0].startswith(WARNING_PREAMBLE)
    assert "msg. Another name for monosodium glutamate." in speaker.utterances[0]


def test_speech_fires_again_for_next_scan(frame, capture, recognizer, speaker):
    presenter = ScanPresenter(speaker)
    session = _alerting(capture, recognizer, "sugar")
    presenter.present(frame, session, 0.0)

    session = tick(session, 5000.0, verbose=False)
    presenter.present(frame, session, 5000.0)
    session = complete_recognition(
        trigger_scan(session, capture, recognizer), ok("sugar"), now=6000.0, verbose=False
    )
    presenter.present(frame, session, 6000.0)
    presenter.present(frame, session, 6016.0)

    assert len(speaker.utterances) == 2


def test_safe_result_is_not_spoken(capture, recognizer, speaker):
    announcer = AlertAnnouncer(speaker)
    assert not announcer.maybe_announce(_alerting(capture, recognizer, "water"))
    assert speaker.utterances == []


def test_wrap_text_respects_width(frame):
    overlay = Overlay(frame)
    font = load_font("/nonexistent/font.ttf", 14)
    lines = wrap_text(overlay.draw, "Can trigger headaches, sweating, and inflammation in sensitive people.", font, 120)

    assert len(lines) > 1
    assert " ".join(lines) == "Can trigger headaches, sweating, and inflammation in sensitive people."
    assert wrap_text(overlay.draw, "", font, 120) == []


def test_wrap_text_splits_word_wider_than_line(frame):
    overlay = Overlay(frame)
    font = load_font("/nonexistent/font.ttf", 14)
    word = "x" * 200
    lines = wrap_text(overlay.draw, f"E621 {word}", font, 120)

    assert len(lines) > 2
    assert lines[0] == "E621"
    assert "".join(lines[1:]) == word
    assert all(overlay.draw.textlength(line, font=font) <= 120 for line in lines)
