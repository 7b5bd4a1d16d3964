# ==========================================================
# presenter/overlay.py
# ----------------------------------------------------------
# OpenCV 프레임(BGR) 위에 반투명 UI 를 그리기 위한 Pillow 헬퍼.
#
# OpenCV(cv2.putText)는 투명도 / 둥근 사각형 / 트루타입 폰트를 지원하지 않으므로
#   BGR → RGBA(PIL) 변환 → 별도 레이어에 그림 → alpha_composite → BGR
# 순서로 처리합니다.
# ==========================================================

import cv2
import numpy as np
from PIL import Image, ImageDraw, ImageFont

_FONT_CACHE: dict = {}


def load_font(font_path: str, font_size: int):
    """트루타입 폰트 로드. 없으면 Pillow 기본 폰트로 대체 (경고는 한 번만)"""
    key = (font_path, font_size)
    if key not in _FONT_CACHE:
        try:
            _FONT_CACHE[key] = ImageFont.truetype(font_path, font_size)
        except (OSError, ValueError):
            print(f"⚠️ 폰트를 찾지 못했습니다({font_path}). 기본 폰트를 사용합니다.")
            _FONT_CACHE[key] = ImageFont.load_default()
    return _FONT_CACHE[key]


class Overlay:
    """
    프레임 한 장에 대한 그리기 세션.

    사용법:
        overlay = Overlay(frame_bgr)
        overlay.rounded_rect(...)
        overlay.text(...)
        out_bgr = overlay.compose()
    """

    def __init__(self, frame_bgr):
        rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        self.base = Image.fromarray(rgb).convert("RGBA")
        self.layer = Image.new("RGBA", self.base.size, (0, 0, 0, 0))
        self.draw = ImageDraw.Draw(self.layer)

    @property
    def width(self) -> int:
        return self.base.width

    @property
    def height(self) -> int:
        return self.base.height

    def rounded_rect(self, x, y, w, h, radius, fill) -> None:
        self.draw.rounded_rectangle(
            (int(x), int(y), int(x + w), int(y + h)), radius=radius, fill=tuple(int(c) for c in fill)
        )

    def text(self, xy, text, font, fill, center=False) -> None:
        x, y = xy
        if center:
            # 기본(bitmap) 폰트는 anchor 를 지원하지 않으므로 bbox 로 직접 가운데 정렬
            left, top, right, bottom = self.draw.textbbox((0, 0), text, font=font)
            x -= (left + right) / 2
            y -= (top + bottom) / 2
        self.draw.text((int(x), int(y)), text, font=font, fill=tuple(int(c) for c in fill))

    def wrapped_text(self, x, y, text, font, fill, max_width, line_height) -> float:
        """max_width 안에서 단어 단위로 줄바꿈해서 그리고, 다음 y 좌표를 반환"""
        for line in wrap_text(self.draw, text, font, max_width):
            self.text((x, y), line, font, fill)
            y += line_height
        return y

    def compose(self):
        out = Image.alpha_composite(self.base, self.layer).convert("RGB")
        return cv2.cvtColor(np.array(out), cv2.COLOR_RGB2BGR)


def _split_long_word(draw, word: str, font, max_width: float) -> list[str]:
    # 한 단어가 한 줄보다 길면 글자 단위로 자름 (최소 1글자)
    pieces = []
    current = ""
    for ch in word:
        if current and draw.textlength(current + ch, font=font) > max_width:
            pieces.append(current)
            current = ch
        else:
            current += ch
    pieces.append(current)
    return pieces


def wrap_text(draw, text: str, font, max_width: float) -> list[str]:
    """단어 단위 줄바꿈. 어떤 줄도 max_width 를 넘지 않음 (1글자짜리 줄 제외)"""
    words = []
    for word in text.split():
        if draw.textlength(word, font=font) > max_width:
            words.extend(_split_long_word(draw, word, font, max_width))
        else:
            words.append(word)
    if not words:
        return []

    lines = []
    current = words[0]
    for word in words[1:]:
        candidate = f"{current} {word}"
        if draw.textlength(candidate, font=font) <= max_width:
            current = candidate
        else:
            lines.append(current)
            current = word
    lines.append(current)
    return lines
