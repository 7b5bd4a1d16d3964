# ==========================================================
# presenter/presenter.py
# ----------------------------------------------------------
# 현재 스캔 세션 상태를 카메라 프레임 위에 그려주는 모듈.
#
#   render_frame(frame, session, now, ready, cfg) -> 새 BGR 이미지
#     - (프레임, 세션, 현재 시각)만 보고 그리는 순수 함수
#     - 세션은 읽기만 하고 절대 바꾸지 않음
#
#   ScanPresenter.present(...)
#     - render_frame + FLAGGED 알림 진입 시 음성 안내 1회
#
# 화면 구성 (640x480 기준):
#   IDLE                  → 하단 안내 배너 "Need to check the ingredients?"
#   CAPTURING/RECOGNIZING → 가운데 "Processing..." (1초 주기 깜빡임)
#   RESOLVED/ALERTING     → 우상단 배지 (FLAGGED: 빨강 "!", SAFE: 초록 "OK")
#                           FLAGGED → 오른쪽에서 슬라이드 + 페이드 인 되는 알림 카드
#                           SAFE    → 배지 옆 "All ingredients look safe" 라벨
# ==========================================================

from typing import Any, Optional

from ingredient_alert.session.scan_session import Phase, ScanSession, alert_elapsed
from ingredient_alert.session.timing import card_x_offset, fade_in_alpha, processing_alpha
from .announcer import AlertAnnouncer
from .overlay import Overlay, load_font, wrap_text

PROMPT_TEXT = "Need to check the ingredients?"
PROCESSING_TEXT = "Processing..."
SAFE_TEXT = "All ingredients look safe"
CARD_HEADER = "Inflammatory ingredients detected:"

FLAGGED_COLOR = (255, 0, 0)
SAFE_COLOR = (0, 200, 0)
WHITE = (255, 255, 255)

# 알림 카드 레이아웃
CARD_WIDTH = 300
CARD_TOP = 70
CARD_PADDING = 10
CARD_RADIUS = 16
CARD_HEADER_GAP = 24
PHRASE_LINE_HEIGHT = 18
EXPLANATION_LINE_HEIGHT = 16
ITEM_GAP = 12
EXPLANATION_INDENT = 12


def _font(cfg: dict, size: int):
    return load_font(cfg.get("font_path", ""), size)


def draw_prompt(overlay: Overlay, cfg: dict) -> None:
    w, h = overlay.width, overlay.height
    overlay.rounded_rect(20, h - 50, w - 40, 30, 12, (0, 0, 0, 180))
    overlay.text((w / 2, h - 35), PROMPT_TEXT, _font(cfg, 16), (*WHITE, 255), center=True)


def draw_processing(overlay: Overlay, now: float, cfg: dict) -> None:
    w, h = overlay.width, overlay.height
    overlay.rounded_rect(w / 2 - 80, h / 2 - 20, 160, 40, 10, (0, 0, 0, 180))
    overlay.text((w / 2, h / 2), PROCESSING_TEXT, _font(cfg, 16), (*WHITE, processing_alpha(now)), center=True)


def draw_badge(overlay: Overlay, session: ScanSession, cfg: dict) -> None:
    x, y = overlay.width - 60, 20
    icon, color = ("!", FLAGGED_COLOR) if session.is_flagged else ("OK", SAFE_COLOR)

    overlay.rounded_rect(x - 10, y - 10, 50, 40, 10, (*color, 255))
    overlay.text((x + 15, y + 10), icon, _font(cfg, 24), (*WHITE, 255), center=True)

    if not session.is_flagged and session.phase is Phase.ALERTING:
        overlay.rounded_rect(x - 180, y, 160, 30, 8, (*SAFE_COLOR, 200))
        overlay.text((x - 170, y + 8), SAFE_TEXT, _font(cfg, 12), (*WHITE, 255))


def draw_alert_card(overlay: Overlay, session: ScanSession, now: float, cfg: dict) -> None:
    if not session.is_flagged:
        return

    elapsed = alert_elapsed(session, now)
    alpha = fade_in_alpha(elapsed)
    x = overlay.width - CARD_WIDTH - 20 + card_x_offset(elapsed)
    y = CARD_TOP

    font = _font(cfg, cfg.get("font_size", 14))
    text_width = CARD_WIDTH - 2 * CARD_PADDING

    # 설명 줄바꿈 결과로 카드 높이를 먼저 계산
    wrapped = [
        (m.phrase.upper(), wrap_text(overlay.draw, m.explanation, font, text_width - EXPLANATION_INDENT))
        for m in session.matches
    ]
    content_height = CARD_PADDING + CARD_HEADER_GAP + sum(
        PHRASE_LINE_HEIGHT + len(lines) * EXPLANATION_LINE_HEIGHT + ITEM_GAP for _, lines in wrapped
    )
    card_height = max(80 + len(session.matches) * 40, content_height + CARD_PADDING)

    overlay.rounded_rect(x + 2, y + 2, CARD_WIDTH, card_height, CARD_RADIUS, (0, 0, 0, alpha * 0.3))
    overlay.rounded_rect(x, y, CARD_WIDTH, card_height, CARD_RADIUS, (30, 30, 30, alpha))

    tx = x + CARD_PADDING
    ty = y + CARD_PADDING
    overlay.text((tx, ty), CARD_HEADER, font, (*WHITE, alpha))
    ty += CARD_HEADER_GAP

    for phrase, lines in wrapped:
        overlay.text((tx, ty), f"• {phrase}", font, (*WHITE, alpha))
        ty += PHRASE_LINE_HEIGHT
        for line in lines:
            overlay.text((tx + EXPLANATION_INDENT, ty), line, font, (*WHITE, alpha))
            ty += EXPLANATION_LINE_HEIGHT
        ty += ITEM_GAP


def render_frame(
    frame_bgr,
    session: ScanSession,
    now: float,
    ready: bool = True,
    cfg: Optional[dict[str, Any]] = None,
):
    """세션 상태에 맞는 UI 를 그린 새 프레임을 반환합니다. (입력 프레임은 그대로)"""
    cfg = cfg or {}
    overlay = Overlay(frame_bgr)

    if session.phase is Phase.IDLE and ready:
        draw_prompt(overlay, cfg)
    elif session.phase in (Phase.CAPTURING, Phase.RECOGNIZING):
        draw_processing(overlay, now, cfg)
    elif session.phase in (Phase.RESOLVED, Phase.ALERTING):
        draw_badge(overlay, session, cfg)
        if session.phase is Phase.ALERTING:
            draw_alert_card(overlay, session, now, cfg)

    return overlay.compose()


class ScanPresenter:
    def __init__(self, speaker, cfg: Optional[dict[str, Any]] = None):
        self.cfg = cfg or {}
        self.announcer = AlertAnnouncer(speaker)

    def present(self, frame_bgr, session: ScanSession, now: float, ready: bool = True):
        rendered = render_frame(frame_bgr, session, now, ready, self.cfg)
        self.announcer.maybe_announce(session)
        return rendered
