# ==========================================================
# presenter/announcer.py
# ----------------------------------------------------------
# FLAGGED 알림에 대한 음성 안내 트리거.
#
#   - 알림(scan_id) 하나당 정확히 한 번만 speak() 호출
#   - 매 프레임 호출되어도 같은 scan_id 는 다시 말하지 않음
#   - "이미 말했음" 기억은 세션이 아니라 이 객체가 가짐
# ==========================================================

from ingredient_alert.session.scan_session import Phase, ScanSession

WARNING_PREAMBLE = "Warning: Inflammatory ingredients detected. "


def build_summary(matches) -> str:
    summary = WARNING_PREAMBLE
    for m in matches:
        summary += f"{m.phrase}. {m.explanation}. "
    return summary


class AlertAnnouncer:
    def __init__(self, speaker):
        self.speaker = speaker
        self._last_announced_scan_id = None

    def maybe_announce(self, session: ScanSession) -> bool:
        """말했으면 True"""
        if session.phase is not Phase.ALERTING or not session.is_flagged:
            return False
        if session.scan_id == self._last_announced_scan_id:
            return False

        self._last_announced_scan_id = session.scan_id
        self.speaker.speak(build_summary(session.matches))
        return True
