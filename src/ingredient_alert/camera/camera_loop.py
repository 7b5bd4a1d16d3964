# ==========================================================
# 📸 camera_loop 모듈
# ----------------------------------------------------------
# 기능 요약:
#   - 실시간으로 웹캠 화면을 띄우고, [SPACE] 또는 마우스 클릭 시
#     현재 프레임의 성분표를 OCR 로 읽어서 염증 유발 성분을 검사합니다.
#   - 결과는 화면 알림(배지 + 카드)과 음성 안내로 표시되고
#     정해진 시간이 지나면 자동으로 사라집니다.
#   - [q]를 누르면 종료합니다.
#
# 주요 특징:
#   ✅ OCR 은 백그라운드 워커에서 실행 → 인식 중에도 화면이 멈추지 않음
#   ✅ 세션 상태는 메인 스레드에서만 변경 (tick 한 곳)
#   ✅ 스캔 진행 중 들어온 요청은 무시 (동시에 최대 1개)
#   ✅ YAML 의 enable_* 옵션으로 음성/로그 ON/OFF
#
# 사용법:
#   1. scan_config.yaml 설정값을 조정합니다.
#   2. 터미널에서 실행:
#        python demos/camera_scan_demo.py
#   3. 실행 중:
#        [SPACE] / 클릭 → 스캔
#        [q]            → 종료
# ==========================================================

import cv2

from ingredient_alert.config.loader import load_scan_config
from ingredient_alert.errors import CameraError
from ingredient_alert.ocr.ocr_engine import build_ocr_engine
from ingredient_alert.ocr.ocr_worker import OcrWorker
from ingredient_alert.presenter.presenter import ScanPresenter
from ingredient_alert.session.scan_session import Phase, new_session, tick, trigger_scan
from ingredient_alert.session.timing import AlertDurations, now_ms
from ingredient_alert.speech.speaker import build_speaker
from .capture_source import CaptureSource

KEY_SPACE = 32


def start_ingredient_scanner(config_path=None) -> None:
    """실시간 성분표 스캐너 실행"""

    # ------------------------------------------------------
    # 1️⃣ 설정 로드
    # ------------------------------------------------------
    cfg = load_scan_config(config_path)
    durations = AlertDurations.from_config(cfg)
    verbose = cfg.get("enable_console_log", True)
    window_name = cfg.get("window_name", "Ingredient Alert - Camera")

    # ------------------------------------------------------
    # 2️⃣ 카메라 열기
    # ------------------------------------------------------
    try:
        capture = CaptureSource.open(cfg)
    except CameraError as e:
        print(f"❌ {e}")
        return

    # ------------------------------------------------------
    # 3️⃣ OCR 워커 / 음성 / 화면 준비 (OCR 모델은 백그라운드 로딩)
    # ------------------------------------------------------
    print("⏳ OCR 엔진 로딩 중...")
    worker = OcrWorker(lambda: build_ocr_engine(cfg))
    speaker = build_speaker(cfg)
    presenter = ScanPresenter(speaker, cfg)

    session = new_session()
    scan_requested = False
    was_ready = False

    def on_mouse(event, x, y, flags, param):
        nonlocal scan_requested
        if event == cv2.EVENT_LBUTTONDOWN:
            scan_requested = True

    cv2.namedWindow(window_name)
    cv2.setMouseCallback(window_name, on_mouse)

    # ------------------------------------------------------
    # 4️⃣ 메인 루프: 매 프레임 = tick 한 번
    # ------------------------------------------------------
    try:
        while True:
            if not capture.read():
                print("⚠️ 프레임을 읽을 수 없습니다. 카메라 연결을 확인하세요.")
                break

            load_error = worker.load_error()
            if load_error is not None:
                print(f"❌ OCR 엔진 로딩 실패: {load_error}")
                break

            ready = worker.ready
            if ready and not was_ready:
                print("✅ Ingredient scanner ready")
                print("   [SPACE]/클릭 → 스캔 / [q] → 종료")
                was_ready = True

            # 4-1) 스캔 요청 처리 (IDLE 이 아니면 trigger_scan 이 무시함)
            if scan_requested and ready:
                if session.phase is Phase.IDLE and verbose:
                    print(f"\n📸 스캔 #{session.scan_id + 1} 시작 → OCR 실행 중...")
                session = trigger_scan(session, capture, worker.submit)
            scan_requested = False

            # 4-2) 상태 전이 (OCR 완료 / 알림 만료)
            now = now_ms()
            session = tick(session, now, durations, verbose=verbose)

            # 4-3) 화면 그리기 + 음성 안내
            display = presenter.present(capture.current_frame(), session, now, ready)
            cv2.imshow(window_name, display)

            key = cv2.waitKey(1) & 0xFF
            if key == ord("q"):
                break
            if key == KEY_SPACE:
                scan_requested = True

    # ------------------------------------------------------
    # 5️⃣ 종료 처리
    # ------------------------------------------------------
    finally:
        capture.release()
        cv2.destroyAllWindows()
        worker.shutdown()
        speaker.close()
        print("🟢 스캐너 세션을 정상 종료했습니다.")
