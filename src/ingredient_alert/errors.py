# ==========================================================
# errors.py
# ----------------------------------------------------------
# ingredient_alert 전역에서 사용하는 예외 클래스 모음.
#
#   IngredientAlertError  ← 모든 예외의 베이스
#     ├─ OcrError         ← OCR 실패 / 인식된 텍스트 없음 (런타임에서 유일하게 모델링된 실패)
#     ├─ CameraError      ← 카메라를 열 수 없음 (부팅 단계에서만 발생)
#     └─ ConfigError      ← 설정 파일을 읽을 수 없음
# ==========================================================


class IngredientAlertError(Exception):
    """ingredient_alert 패키지의 베이스 예외"""


class OcrError(IngredientAlertError):
    """OCR 엔진이 실패했거나 쓸 만한 텍스트를 돌려주지 않았을 때"""


class CameraError(IngredientAlertError):
    """카메라 장치를 열 수 없을 때"""


class ConfigError(IngredientAlertError):
    """설정 파일이 없거나 YAML 매핑 형태가 아닐 때"""
