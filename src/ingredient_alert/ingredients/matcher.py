# ==========================================================
# ingredients/matcher.py
# ----------------------------------------------------------
# OCR 텍스트 안에서 사전의 성분명을 찾는 순수 함수 모음.
#
# 주의:
#   - 입력 text 는 호출하는 쪽에서 반드시 소문자로 바꿔서 넘겨야 합니다.
#     (사전 키가 소문자이고, 비교는 대소문자 구분 부분 문자열 검사)
#   - 단어 경계 검사는 하지 않습니다. "msg" 는 더 긴 단어 안에 있어도 매칭됨
#     → 오탐(false positive) 가능성이 있지만 현재 동작 그대로 유지.
# ==========================================================

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from .dictionary import IngredientRule, all_rules


class ScanStatus(Enum):
    SAFE = "SAFE"
    FLAGGED = "FLAGGED"


@dataclass(frozen=True)
class IngredientMatch:
    phrase: str
    explanation: str


def match(
    text: str,
    rules: Optional[Iterable[IngredientRule]] = None,
) -> tuple[IngredientMatch, ...]:
    """
    사전 순서대로 phrase 가 text 의 부분 문자열인지 검사하고
    찾은 항목을 (phrase, explanation) 형태로 반환합니다.

    Parameters
    ----------
    text : str
        소문자로 변환된 OCR 텍스트
    rules : Iterable[IngredientRule], optional
        검사할 사전. 생략하면 기본 염증 성분 사전을 사용합니다.
    """
    if rules is None:
        rules = all_rules()

    return tuple(
        IngredientMatch(rule.phrase, rule.explanation)
        for rule in rules
        if rule.phrase in text
    )


def status(result: tuple[IngredientMatch, ...]) -> ScanStatus:
    """매칭 결과가 하나라도 있으면 FLAGGED, 없으면 SAFE"""
    return ScanStatus.FLAGGED if result else ScanStatus.SAFE
