# ==========================================================
# speech/speaker.py
# ----------------------------------------------------------
# pyttsx3 기반 음성 안내 (fire-and-forget).
#
#   - speak(text) 는 큐에 넣고 즉시 반환 → 카메라 루프가 멈추지 않음
#   - 실제 합성은 데몬 스레드 하나에서 순서대로 처리
#   - pyttsx3 엔진은 워커 스레드 안에서 초기화 (fork / 스레드 이슈 회피)
#   - 음성 실패는 로그만 남기고 무시합니다.
# ==========================================================

import threading
from queue import Queue

import pyttsx3

_STOP = object()


class Speaker:
    def __init__(self, rate: int = 160):
        self.rate = rate
        self._queue: Queue = Queue()
        self._thread = threading.Thread(target=self._worker, name="speech", daemon=True)
        self._thread.start()

    def speak(self, utterance: str) -> None:
        self._queue.put(utterance)

    def close(self) -> None:
        self._queue.put(_STOP)

    def _worker(self) -> None:
        engine = None
        while True:
            text = self._queue.get()
            if text is _STOP:
                break
            try:
                if engine is None:
                    engine = pyttsx3.init()
                    engine.setProperty("rate", self.rate)
                engine.say(text)
                engine.runAndWait()
            except Exception as e:
                print(f"⚠️ TTS 오류: {e}")


class NullSpeaker:
    """enable_speech: false 일 때 쓰는 무음 스피커"""

    def speak(self, utterance: str) -> None:
        pass

    def close(self) -> None:
        pass


def build_speaker(cfg: dict):
    if not cfg.get("enable_speech", True):
        print("🔇 [비활성화] enable_speech: false → 음성 안내 없음")
        return NullSpeaker()
    return Speaker(rate=cfg.get("speech_rate", 160))
