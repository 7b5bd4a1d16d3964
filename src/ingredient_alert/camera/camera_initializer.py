# ==========================================================
# camera_initializer.py
# ----------------------------------------------------------
# 설정값(camera_index)에 따라 cv2.VideoCapture 를 열어주는 모듈.
#
#   camera_index: auto → 0 ~ camera_probe_max-1 번을 차례로 열어보고
#                        실제로 프레임이 읽히는 첫 장치를 사용
#   camera_index: 2    → 2번 장치만 시도
# ==========================================================

import cv2


def _open(index: int, width: int, height: int):
    cap = cv2.VideoCapture(index)
    if not cap.isOpened():
        cap.release()
        return None

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)

    # 열리기만 하고 프레임이 안 나오는 가상 장치 걸러내기
    ret, _ = cap.read()
    if not ret:
        cap.release()
        return None
    return cap


def init_camera(cfg: dict):
    """카메라를 열어서 VideoCapture 를 반환. 실패하면 None"""
    camera_index = cfg.get("camera_index", "auto")
    width = cfg.get("frame_width", 640)
    height = cfg.get("frame_height", 480)

    if camera_index == "auto":
        for idx in range(cfg.get("camera_probe_max", 5)):
            cap = _open(idx, width, height)
            if cap is not None:
                print(f"🎥 카메라 자동 감지: {idx}번 장치 사용")
                return cap
        return None

    cap = _open(int(camera_index), width, height)
    if cap is not None:
        print(f"🎥 카메라 {camera_index}번 장치 사용")
    return cap
