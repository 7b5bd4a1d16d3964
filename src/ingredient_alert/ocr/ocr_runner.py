# ==========================================================
# ocr_runner.py
# ----------------------------------------------------------
# "이미지 한 장을 받아서 → OCR 엔진으로 돌리고 → 후처리해서
# 줄 단위 결과(list[dict])를 돌려주는" 단일 진입점 모듈입니다.
#
# 실패 규칙:
#   - 엔진 예외, 결과 없음, 필터 후 남은 단어 없음
#     → 모두 OcrError 로 올립니다.
#   - 호출하는 쪽(ocr_worker)은 OcrError 하나만 잡으면 됩니다.
# ==========================================================

from ingredient_alert.errors import OcrError
from .ocr_utils import merge_words_into_lines


def _usable_words(raw_words, conf_threshold: float) -> list:
    """
    성분 매칭에 쓸 단어만 남깁니다.

    - 텍스트가 문자열이 아니거나 공백뿐인 단어 → 제외
    - confidence 가 숫자가 아니거나 threshold 미만 → 제외
    """
    words = []
    for box, (text, conf) in raw_words:
        if not isinstance(text, str) or not text.strip():
            continue
        try:
            score = float(conf)
        except (ValueError, TypeError):
            continue
        if score >= conf_threshold:
            words.append((box, (text, score)))
    return words


def run_ocr_on_image(
    image_bgr,
    ocr_engine,
    conf_threshold: float = 0.5,
    cls_enable: bool = True,
    y_thresh: int = 20,
    x_gap_thresh: int = 30,
) -> list[dict]:
    """
    성분표 사진 한 장을 읽어서 위→아래 줄 단위 텍스트 목록으로 돌려줍니다.
    여러 단어짜리 성분명("trans fat" 등)이 한 줄 안에서 이어지도록 단어 box 를 병합합니다.

    Parameters
    ----------
    image_bgr : ndarray
        스캔 세션이 소유한 스냅샷 (BGR)
    ocr_engine :
        ocr(image, cls=...) 를 가진 PaddleOCR 객체
    conf_threshold : float
        이 값 미만으로 인식된 단어는 매칭 대상에서 빠집니다.
    cls_enable : bool
        기울어진 라벨 보정(방향 분류기) 사용 여부
    y_thresh : int
        단어 중심 y 차이가 이 값(px) 이하이면 같은 줄로 묶습니다.
    x_gap_thresh : int
        같은 줄에서 단어 사이 간격이 이 값(px) 미만이면 한 구절로 붙입니다.

    Returns
    -------
    list[dict]
        merge_words_into_lines 결과 ({"line_index", "text", "avg_conf"})

    Raises
    ------
    OcrError
        엔진 호출 실패, 글자 영역 없음, 또는 필터 후 남은 단어가 없을 때
    """
    # ① OCR 실행
    try:
        ocr_result = ocr_engine.ocr(image_bgr, cls=cls_enable)
    except Exception as e:
        raise OcrError(f"OCR 엔진 실행 실패: {e}") from e

    if not ocr_result or not ocr_result[0]:
        raise OcrError("글자 영역이 검출되지 않았습니다")

    # ② 쓸 만한 단어만 남기기
    words = _usable_words(ocr_result[0], conf_threshold)
    if not words:
        raise OcrError(f"threshold({conf_threshold}) 이상으로 인식된 단어 없음")

    # ③ 줄 단위 병합
    return merge_words_into_lines(words, y_thresh, x_gap_thresh)
