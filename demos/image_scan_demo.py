# ==========================================================
# 성분표 사진 한 장으로 스캔을 해보는 데모 스크립트입니다.
# 카메라 없이 테스트하거나, 샘플 사진으로 매칭 결과를 빠르게 보고 싶을 때 사용합니다.
#
#   python demos/image_scan_demo.py -i label.jpg          → 콘솔에 결과 출력
#   python demos/image_scan_demo.py -i label.jpg --show   → 알림 화면까지 띄워서 확인
# ==========================================================

import os
import sys
import argparse
from concurrent.futures import Future

import cv2

# src 경로 추가
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
SRC_PATH = os.path.join(PROJECT_ROOT, "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from ingredient_alert.config.loader import load_scan_config
from ingredient_alert.ocr.ocr_engine import build_ocr_engine
from ingredient_alert.ocr.ocr_worker import recognize_to_outcome
from ingredient_alert.presenter.presenter import render_frame
from ingredient_alert.session.scan_session import (
    Phase,
    begin_capture,
    begin_recognition,
    complete_recognition,
    new_session,
)
from ingredient_alert.session.timing import AlertDurations


def main():
    parser = argparse.ArgumentParser(description="Scan a single ingredient-label image.")
    parser.add_argument("--image", "-i", required=True, help="path to image file")
    parser.add_argument("--config", "-c", default=None, help="path to scan_config.yaml")
    parser.add_argument("--show", action="store_true", help="show the rendered alert screen")
    args = parser.parse_args()

    cfg = load_scan_config(args.config)

    # 이미지 읽기
    img = cv2.imread(args.image)
    if img is None:
        print(f"❌ 이미지 파일을 읽을 수 없습니다: {args.image}")
        return

    # 엔진 생성 + OCR (카메라 루프와 같은 전이 함수를 그대로 사용)
    engine = build_ocr_engine(cfg)
    pending = Future()
    session = begin_recognition(begin_capture(new_session(), img), pending)
    pending.set_result(recognize_to_outcome(engine, img))

    session = complete_recognition(
        session,
        pending.result(),
        now=0.0,
        durations=AlertDurations.from_config(cfg),
        verbose=cfg.get("enable_console_log", True),
    )

    if session.phase is not Phase.ALERTING:
        print("⚠️ OCR 결과 없음. 사진을 다시 확인하세요.")
        return

    print(f"✅ 판정: {session.status.value}")
    for m in session.matches:
        print(f"- {m.phrase.upper()}: {m.explanation}")

    if args.show:
        # 애니메이션이 끝난 시점(알림 시작 + 1초) 기준으로 그림
        display = render_frame(img, session, now=1000.0, cfg=cfg)
        cv2.imshow("Ingredient Alert - Image", display)
        cv2.waitKey(0)
        cv2.destroyAllWindows()


if __name__ == "__main__":
    main()
