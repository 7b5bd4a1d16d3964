# ==========================================================
# session/timing.py
# ----------------------------------------------------------
# 알림 지속시간 / 애니메이션 타이밍 계산 모음.
#
#   - 모든 시간 단위는 밀리초(ms)
#   - 전부 순수 함수 → 세션 상태 전이에 영향을 주지 않음
#   - 애니메이션 값은 구간 밖에서 항상 경계값으로 clamp
# ==========================================================

import time
from dataclasses import dataclass
from typing import Any, Optional

from ingredient_alert.ingredients.matcher import ScanStatus

# 알림 유지 시간 (FLAGGED 가 SAFE 보다 항상 길어야 함)
FLAGGED_ALERT_MS = 5000
SAFE_ALERT_MS = 2500

# 알림 카드 슬라이드 인 / 페이드 인
SLIDE_IN_MS = 400
SLIDE_DISTANCE = 320
FADE_IN_MS = 300
MAX_ALPHA = 255

# "Processing..." 깜빡임 (1초 주기)
PROCESSING_PERIOD_MS = 1000
PROCESSING_ALPHA_MIN = 150
PROCESSING_ALPHA_MAX = 255


@dataclass(frozen=True)
class AlertDurations:
    flagged_ms: int = FLAGGED_ALERT_MS
    safe_ms: int = SAFE_ALERT_MS
    cooldown_ms: int = 0

    @classmethod
    def from_config(cls, cfg: Optional[dict[str, Any]]) -> "AlertDurations":
        cfg = cfg or {}
        return cls(
            flagged_ms=int(cfg.get("alert_duration_flagged_ms", FLAGGED_ALERT_MS)),
            safe_ms=int(cfg.get("alert_duration_safe_ms", SAFE_ALERT_MS)),
            cooldown_ms=int(cfg.get("cooldown_ms", 0)),
        )


def now_ms() -> float:
    """단조 증가 시계 (ms)"""
    return time.monotonic() * 1000.0


def map_range(value, in_min, in_max, out_min, out_max):
    """value 를 [in_min, in_max] → [out_min, out_max] 로 선형 변환 (clamp 없음)"""
    return out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min)


def clamp(value, low, high):
    return max(low, min(high, value))


def alert_duration_for(status: ScanStatus, durations: AlertDurations = AlertDurations()) -> int:
    if status is ScanStatus.FLAGGED:
        return durations.flagged_ms
    return durations.safe_ms


def slide_in_distance(elapsed_ms: float) -> float:
    """카드가 지금까지 들어온 거리 (0 → 320px, 400ms 동안, 비감소)"""
    return clamp(map_range(elapsed_ms, 0, SLIDE_IN_MS, 0, SLIDE_DISTANCE), 0, SLIDE_DISTANCE)


def card_x_offset(elapsed_ms: float) -> float:
    """최종 위치 기준 남은 x 오프셋 (320 → 0)"""
    return SLIDE_DISTANCE - slide_in_distance(elapsed_ms)


def fade_in_alpha(elapsed_ms: float) -> float:
    """카드 불투명도 (0 → 255, 300ms 동안, 비감소)"""
    return clamp(map_range(elapsed_ms, 0, FADE_IN_MS, 0, MAX_ALPHA), 0, MAX_ALPHA)


def processing_alpha(current_ms: float) -> float:
    """Processing 문구 불투명도. 1초 주기로 150 → 255 를 반복"""
    phase_ms = current_ms % PROCESSING_PERIOD_MS
    return map_range(phase_ms, 0, PROCESSING_PERIOD_MS, PROCESSING_ALPHA_MIN, PROCESSING_ALPHA_MAX)
