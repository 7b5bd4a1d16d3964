# ==========================================================
# session/scan_session.py
# ----------------------------------------------------------
# 캡처 → OCR → 매칭 → 시간제한 알림 으로 이어지는
# "스캔 세션 상태 머신" 입니다.
#
# 상태 흐름:
#
#   IDLE ──(스캔 요청)──▶ CAPTURING ──(스냅샷)──▶ RECOGNIZING
#     ▲                                              │
#     │◀──────────── OCR 실패 (조용히 복귀) ─────────┤
#     │                                              ▼ OCR 성공
#     │                                          RESOLVED ──(즉시)──▶ ALERTING
#     │                                                                  │
#     └──── (cooldown 경과) ◀── COOLDOWN ◀── (알림 시간 경과) ◀──────────┘
#                                (cooldown_ms = 0 이면 바로 IDLE)
#
# 규칙:
#   - ScanSession 은 불변(frozen) 값입니다. 모든 전이 함수는 새 세션을 돌려줍니다.
#   - IDLE 이 아닐 때 들어온 스캔 요청은 무시 (대기열 X, 중단 X)
#   - captured_frame 은 CAPTURING ~ ALERTING 동안만 보관
#   - matches 가 비어있지 않음 ⇔ status == FLAGGED
# ==========================================================

import dataclasses
from concurrent.futures import Future
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from ingredient_alert.errors import OcrError
from ingredient_alert.ingredients.dictionary import IngredientRule
from ingredient_alert.ingredients.matcher import IngredientMatch, ScanStatus, match, status
from ingredient_alert.ocr.ocr_worker import OcrOutcome
from .timing import AlertDurations, alert_duration_for


class Phase(Enum):
    IDLE = "IDLE"
    CAPTURING = "CAPTURING"
    RECOGNIZING = "RECOGNIZING"
    RESOLVED = "RESOLVED"
    ALERTING = "ALERTING"
    COOLDOWN = "COOLDOWN"


@dataclass(frozen=True)
class ScanSession:
    phase: Phase = Phase.IDLE
    status: Optional[ScanStatus] = None
    # numpy 배열은 == 비교가 안 되므로 비교 대상에서 제외
    captured_frame: Any = field(default=None, compare=False, repr=False)
    recognized_text: Optional[str] = None
    matches: tuple[IngredientMatch, ...] = ()
    pending: Optional[Future] = field(default=None, compare=False, repr=False)
    alert_started_at: Optional[float] = None
    alert_duration: Optional[int] = None
    cooldown_started_at: Optional[float] = None
    scan_id: int = 0

    @property
    def is_flagged(self) -> bool:
        return self.status is ScanStatus.FLAGGED


def new_session() -> ScanSession:
    return ScanSession()


def can_start_scan(session: ScanSession) -> bool:
    return session.phase is Phase.IDLE


def _to_idle(session: ScanSession) -> ScanSession:
    # IDLE 진입: 프레임 해제, 텍스트/매칭 초기화 (scan_id 만 유지)
    return ScanSession(phase=Phase.IDLE, scan_id=session.scan_id)


# ----------------------------------------------------------
# 1️⃣ 스캔 시작: IDLE → CAPTURING → RECOGNIZING
# ----------------------------------------------------------
def begin_capture(session: ScanSession, frame) -> ScanSession:
    if not can_start_scan(session):
        return session
    return dataclasses.replace(
        _to_idle(session),
        phase=Phase.CAPTURING,
        captured_frame=frame,
        scan_id=session.scan_id + 1,
    )


def begin_recognition(session: ScanSession, pending: Future) -> ScanSession:
    if session.phase is not Phase.CAPTURING:
        return session
    return dataclasses.replace(session, phase=Phase.RECOGNIZING, pending=pending)


def trigger_scan(
    session: ScanSession,
    capture_source,
    recognize: Callable[[Any], Future],
) -> ScanSession:
    """
    사용자 스캔 요청 처리.

    Parameters
    ----------
    capture_source :
        snapshot() 으로 현재 프레임 사본을 주는 객체
    recognize :
        이미지를 받아 Future[OcrOutcome] 를 돌려주는 함수 (보통 OcrWorker.submit)

    IDLE 이 아니면 세션을 그대로 돌려줍니다. (스냅샷도, OCR 호출도 하지 않음)
    """
    if not can_start_scan(session):
        return session

    session = begin_capture(session, capture_source.snapshot())
    return begin_recognition(session, recognize(session.captured_frame))


# ----------------------------------------------------------
# 2️⃣ OCR 완료: RECOGNIZING → RESOLVED → ALERTING  /  → IDLE
# ----------------------------------------------------------
def resolve_scan(
    session: ScanSession,
    text: str,
    durations: AlertDurations = AlertDurations(),
    rules: Optional[Iterable[IngredientRule]] = None,
) -> ScanSession:
    if session.phase is not Phase.RECOGNIZING:
        return session

    lowered = text.lower()
    matches = match(lowered, rules)
    scan_status = status(matches)
    return dataclasses.replace(
        session,
        phase=Phase.RESOLVED,
        pending=None,
        recognized_text=lowered,
        matches=matches,
        status=scan_status,
        alert_duration=alert_duration_for(scan_status, durations),
    )


def start_alert(session: ScanSession, now: float) -> ScanSession:
    if session.phase is not Phase.RESOLVED:
        return session
    return dataclasses.replace(session, phase=Phase.ALERTING, alert_started_at=now)


def abort_scan(session: ScanSession, error: Optional[OcrError] = None, verbose: bool = True) -> ScanSession:
    """OCR 실패 → 화면에는 아무것도 띄우지 않고 IDLE 로 복귀 (재시도 없음)"""
    if verbose:
        print(f"⚠️ 스캔 #{session.scan_id} 중단: {error}")
    return _to_idle(session)


def complete_recognition(
    session: ScanSession,
    outcome: OcrOutcome,
    now: float,
    durations: AlertDurations = AlertDurations(),
    rules: Optional[Iterable[IngredientRule]] = None,
    verbose: bool = True,
) -> ScanSession:
    if session.phase is not Phase.RECOGNIZING:
        return session
    if not outcome.ok:
        return abort_scan(session, outcome.error, verbose)

    session = resolve_scan(session, outcome.text, durations, rules)
    if verbose:
        print(f"📝 OCR 결과: {session.recognized_text!r}")
        for m in session.matches:
            print(f"   - {m.phrase}: {m.explanation}")
        print(f"📌 판정: {session.status.value}")
    return start_alert(session, now)


# ----------------------------------------------------------
# 3️⃣ 매 프레임 호출되는 tick
# ----------------------------------------------------------
def alert_elapsed(session: ScanSession, now: float) -> float:
    if session.alert_started_at is None:
        return 0.0
    return now - session.alert_started_at


def alert_expired(session: ScanSession, now: float) -> bool:
    return session.phase is Phase.ALERTING and alert_elapsed(session, now) >= session.alert_duration


def tick(
    session: ScanSession,
    now: float,
    durations: AlertDurations = AlertDurations(),
    rules: Optional[Iterable[IngredientRule]] = None,
    verbose: bool = True,
) -> ScanSession:
    """
    메인 루프에서 매 프레임 호출합니다.

    - RECOGNIZING: OCR Future 가 끝났으면 결과를 반영
    - ALERTING   : 경과 시간 >= alert_duration 이면 종료
    - COOLDOWN   : 경과 시간 >= cooldown_ms 이면 IDLE

    타이머가 아니라 경과 시간 비교이므로, tick 간격이 길어지면
    전이가 그만큼 늦어질 뿐 에러가 되지는 않습니다.
    """
    if session.phase is Phase.RECOGNIZING:
        if session.pending is not None and session.pending.done():
            exc = session.pending.exception()
            if exc is not None:
                # Future 자체가 예외로 끝난 경우도 OCR 실패와 똑같이 조용히 IDLE 로
                error = exc if isinstance(exc, OcrError) else OcrError(f"OCR 작업 예외: {exc!r}")
                return abort_scan(session, error, verbose)
            return complete_recognition(session, session.pending.result(), now, durations, rules, verbose)
        return session

    if session.phase is Phase.ALERTING:
        if not alert_expired(session, now):
            return session
        if durations.cooldown_ms > 0:
            return ScanSession(phase=Phase.COOLDOWN, cooldown_started_at=now, scan_id=session.scan_id)
        return _to_idle(session)

    if session.phase is Phase.COOLDOWN:
        if now - session.cooldown_started_at >= durations.cooldown_ms:
            return _to_idle(session)

    return session
