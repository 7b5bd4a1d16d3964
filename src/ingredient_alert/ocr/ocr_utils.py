# ==========================================================
# src/ingredient_alert/ocr/ocr_utils.py
# ----------------------------------------------------------
# PaddleOCR 원시 결과(단어 단위 box + text + conf)를
# "사람이 읽는 순서의 줄 단위 텍스트"로 묶어주는 유틸리티.
#
# 왜 줄 단위로 묶나?
# ----------------------------------------------------------
# 성분명 중에는 "trans fat", "high fructose corn syrup" 처럼
# 여러 단어로 된 것이 많습니다. OCR 이 단어마다 box 를 따로 주면
# 순서가 뒤섞여서 부분 문자열 매칭이 실패하므로,
# y 좌표로 줄을 나누고 x 좌표로 정렬해서 한 줄 문자열로 이어붙입니다.
#
# 결과 예시:
# merged = [
#   {"line_index": 1, "text": "INGREDIENTS: SUGAR, SALT", "avg_conf": 0.93},
#   {"line_index": 2, "text": "TRANS FAT 0g", "avg_conf": 0.88},
# ]
# ==========================================================

import numpy as np


def merge_words_into_lines(ocr_result, y_thresh=20, x_gap_thresh=30):
    """
    OCR 결과(box, (text, conf)) 리스트를 받아 같은 줄의 단어를 묶습니다.

    Parameters
    ----------
    ocr_result : list
        paddleocr.ocr(...) 결과 중 한 프레임 분량 [(box, (text, conf)), ...]
    y_thresh : int
        두 단어의 중심 y 차이가 이 값 이하이면 같은 줄
    x_gap_thresh : int
        단어 간 x 간격이 이 값 미만이면 같은 문장으로 이어붙임

    Returns
    -------
    list[dict]
        {"line_index", "text", "avg_conf"} 형태의 줄 단위 결과 (위→아래 순)
    """
    # ------------------------------------------------------
    # 1️⃣ (텍스트 + 위치 + 신뢰도) 구조로 정리
    # ------------------------------------------------------
    words = []
    for box, (text, conf) in ocr_result:
        x_coords = [p[0] for p in box]
        y_coords = [p[1] for p in box]
        words.append({
            "text": text.strip(),
            "conf": float(conf),
            "cx": float(np.mean(x_coords)),
            "cy": float(np.mean(y_coords)),
            "x_min": min(x_coords),
            "x_max": max(x_coords),
        })

    if not words:
        return []

    # ------------------------------------------------------
    # 2️⃣ y 기준 정렬 후 같은 줄끼리 그룹화
    # ------------------------------------------------------
    words.sort(key=lambda w: (w["cy"], w["cx"]))

    grouped_lines = []
    current_line = [words[0]]
    for word in words[1:]:
        if abs(word["cy"] - current_line[-1]["cy"]) <= y_thresh:
            current_line.append(word)
        else:
            grouped_lines.append(current_line)
            current_line = [word]
    grouped_lines.append(current_line)

    # ------------------------------------------------------
    # 3️⃣ 줄마다 x 순으로 단어 병합
    # ------------------------------------------------------
    merged_results = []
    for line_idx, line in enumerate(grouped_lines, start=1):
        line.sort(key=lambda w: w["x_min"])
        phrases = []
        current_phrase = line[0]["text"]

        for j in range(1, len(line)):
            gap = line[j]["x_min"] - line[j - 1]["x_max"]
            if gap < x_gap_thresh:
                current_phrase += " " + line[j]["text"]
            else:
                phrases.append(current_phrase)
                current_phrase = line[j]["text"]
        phrases.append(current_phrase)

        merged_results.append({
            "line_index": line_idx,
            "text": " ".join(phrases),
            "avg_conf": float(np.mean([w["conf"] for w in line])),
        })

    return merged_results


def lines_to_text(merged_results) -> str:
    """줄 단위 결과를 줄바꿈으로 이어붙인 하나의 텍스트로 변환"""
    return "\n".join(r["text"] for r in merged_results if r.get("text"))
