# ==========================================================
# ocr_engine.py
# ----------------------------------------------------------
# 스캔 세션이 바라보는 OCR 엔진 인터페이스.
#
#   recognize(image) -> str   (원문 대소문자 그대로, 실패 시 OcrError)
#
# 실제 구현은 PaddleOCR 이고, 테스트에서는 recognize() 만 가진
# 가짜 객체로 바꿔 끼울 수 있습니다.
# ==========================================================

from typing import Any

from .ocr_runner import run_ocr_on_image
from .ocr_utils import lines_to_text


class PaddleOcrEngine:
    """PaddleOCR 인스턴스를 감싸서 이미지 → 텍스트 한 덩어리로 변환"""

    def __init__(
        self,
        paddle_ocr,
        conf_threshold: float = 0.5,
        cls_enable: bool = True,
        y_thresh: int = 20,
        x_gap_thresh: int = 30,
    ):
        self.paddle_ocr = paddle_ocr
        self.conf_threshold = conf_threshold
        self.cls_enable = cls_enable
        self.y_thresh = y_thresh
        self.x_gap_thresh = x_gap_thresh

    def recognize(self, image_bgr) -> str:
        lines = run_ocr_on_image(
            image_bgr,
            self.paddle_ocr,
            conf_threshold=self.conf_threshold,
            cls_enable=self.cls_enable,
            y_thresh=self.y_thresh,
            x_gap_thresh=self.x_gap_thresh,
        )
        return lines_to_text(lines)


def build_ocr_engine(cfg: dict[str, Any]) -> PaddleOcrEngine:
    """
    설정값으로 PaddleOCR 을 초기화합니다.
    모델 로딩이 무거우므로 paddleocr 는 여기서 처음 import 합니다.
    """
    from paddleocr import PaddleOCR

    ocr_langs = cfg.get("ocr_langs", ["en"])
    cls_enable = cfg.get("ocr_cls_enable", True)
    paddle_ocr = PaddleOCR(lang=ocr_langs[0], use_angle_cls=cls_enable)

    return PaddleOcrEngine(
        paddle_ocr,
        conf_threshold=cfg.get("conf_threshold", 0.5),
        cls_enable=cls_enable,
        y_thresh=cfg.get("line_y_thresh", 20),
        x_gap_thresh=cfg.get("word_x_gap_thresh", 30),
    )
