# ==========================================================
# config/loader.py
# ----------------------------------------------------------
# scan_config.yaml 을 읽어서 dict 로 돌려주는 설정 로더.
#
#   - 우선순위: 함수 인자(path) > INGREDIENT_ALERT_CONFIG 환경변수 > 패키지 기본 YAML
#   - YAML 에 빠진 키는 DEFAULT_CONFIG 값으로 채웁니다.
#   - 모든 모듈은 cfg.get("키", 기본값) 형태로 값을 꺼내 씁니다.
# ==========================================================

import os
from typing import Any, Optional

import yaml

from ingredient_alert.errors import ConfigError

CONFIG_ENV_VAR = "INGREDIENT_ALERT_CONFIG"
DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "scan_config.yaml")

DEFAULT_CONFIG: dict[str, Any] = {
    "camera_index": "auto",
    "camera_probe_max": 5,
    "frame_width": 640,
    "frame_height": 480,
    "window_name": "Ingredient Alert - Camera",
    "ocr_langs": ["en"],
    "ocr_cls_enable": True,
    "conf_threshold": 0.5,
    "line_y_thresh": 20,
    "word_x_gap_thresh": 30,
    "alert_duration_flagged_ms": 5000,
    "alert_duration_safe_ms": 2500,
    "cooldown_ms": 0,
    "enable_speech": True,
    "speech_rate": 160,
    "enable_console_log": True,
    "font_path": "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "font_size": 14,
}


def resolve_config_path(path: Optional[str] = None) -> str:
    """인자 → 환경변수 → 기본 경로 순으로 설정 파일 경로를 결정합니다."""
    if path:
        return path
    return os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH


def load_scan_config(path: Optional[str] = None) -> dict[str, Any]:
    """
    YAML 설정을 읽어 DEFAULT_CONFIG 위에 덮어쓴 dict 를 반환합니다.

    Raises
    ------
    ConfigError
        파일을 열 수 없거나, YAML 최상위가 매핑(dict)이 아닐 때
    """
    config_path = resolve_config_path(path)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"설정 파일을 열 수 없습니다: {config_path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML 파싱 실패: {config_path} ({e})") from e

    # 빈 파일이면 기본값만 사용
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"설정 파일 최상위는 매핑이어야 합니다: {config_path}")

    cfg = dict(DEFAULT_CONFIG)
    cfg.update(loaded)
    return cfg
