# ==========================================================
# capture_source.py
# ----------------------------------------------------------
# 카메라 스트림에서 "현재 프레임"과 "스냅샷"을 제공하는 래퍼.
#
#   read()          → 매 루프마다 한 번 호출해서 최신 프레임 갱신
#   current_frame() → 최신 프레임 (화면 표시용, 복사 X)
#   snapshot()      → 최신 프레임의 사본 (스캔 세션이 소유)
# ==========================================================

from ingredient_alert.errors import CameraError
from .camera_initializer import init_camera


class CaptureSource:
    def __init__(self, cap):
        self.cap = cap
        self._frame = None

    @classmethod
    def open(cls, cfg: dict) -> "CaptureSource":
        cap = init_camera(cfg)
        if cap is None:
            raise CameraError("카메라를 열 수 없습니다.")
        return cls(cap)

    def read(self) -> bool:
        ret, frame = self.cap.read()
        if ret:
            self._frame = frame
        return ret

    def current_frame(self):
        return self._frame

    def snapshot(self):
        return self._frame.copy()

    def release(self) -> None:
        self.cap.release()
