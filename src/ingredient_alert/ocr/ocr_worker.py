# ==========================================================
# ocr_worker.py
# ----------------------------------------------------------
# OCR 을 메인 루프(카메라 화면)와 분리해서 백그라운드로 돌리는 워커.
#
#   submit(frame) -> Future[OcrOutcome]
#
# 특징:
#   - 워커 스레드는 1개 → 동시에 진행 중인 OCR 은 항상 최대 1개
#   - Future 결과는 예외가 아니라 OcrOutcome(text | error) 값으로 끝남
#     → 세션 쪽은 future.result() 한 번으로 성공/실패를 모두 처리
#   - 세션 상태 변경은 메인 스레드(tick)에서만 일어납니다.
# ==========================================================

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

from ingredient_alert.errors import OcrError


@dataclass(frozen=True)
class OcrOutcome:
    text: Optional[str] = None
    error: Optional[OcrError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def recognize_to_outcome(ocr_engine, image_bgr) -> OcrOutcome:
    """
    엔진 호출 결과를 OcrOutcome 으로 감쌉니다.
    엔진 쪽 예상 못한 예외(깨진 결과 포맷 등)도 OcrError 로 감싸서 실패 값으로 돌려줍니다.
    """
    try:
        return OcrOutcome(text=ocr_engine.recognize(image_bgr))
    except OcrError as e:
        return OcrOutcome(error=e)
    except Exception as e:
        error = OcrError(f"OCR 처리 중 예외: {e!r}")
        error.__cause__ = e
        return OcrOutcome(error=error)


class OcrWorker:
    """
    engine_factory 는 워커 스레드에서 한 번 실행됩니다. (모델 로딩 중에도 카메라 화면 유지)
    로딩이 끝나기 전에는 ready == False 이고, 화면에 안내 배너를 띄우지 않습니다.
    """

    def __init__(self, engine_factory: Callable[[], object]):
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ocr")
        self._engine_future = self._executor.submit(engine_factory)

    @property
    def ready(self) -> bool:
        return self._engine_future.done() and self._engine_future.exception() is None

    def load_error(self) -> Optional[BaseException]:
        """엔진 로딩이 실패했으면 그 예외, 아니면 None (로딩 중이어도 None)"""
        if not self._engine_future.done():
            return None
        return self._engine_future.exception()

    def _run(self, image_bgr) -> OcrOutcome:
        return recognize_to_outcome(self._engine_future.result(), image_bgr)

    def submit(self, image_bgr) -> "Future[OcrOutcome]":
        return self._executor.submit(self._run, image_bgr)

    def shutdown(self) -> None:
        # 진행 중인 OCR 은 취소하지 않고 끝날 때까지 기다림
        self._executor.shutdown(wait=True)
