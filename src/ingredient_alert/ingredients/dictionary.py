# ==========================================================
# ingredients/dictionary.py
# ----------------------------------------------------------
# "염증 유발 성분" 고정 사전.
#
#   - 키(phrase)는 모두 소문자로 저장합니다. (matcher 는 대소문자를 구분함)
#   - 프로세스 시작 시 한 번 만들어지고 런타임에 절대 수정하지 않습니다.
#   - 선언 순서 = 매칭 결과 순서
# ==========================================================

from dataclasses import dataclass


@dataclass(frozen=True)
class IngredientRule:
    phrase: str
    explanation: str


INFLAMMATORY_INGREDIENTS: tuple[IngredientRule, ...] = (
    IngredientRule(
        "high fructose corn syrup",
        "Linked to obesity, insulin resistance, and inflammation.",
    ),
    IngredientRule(
        "trans fat",
        "Raises bad cholesterol and increases heart disease risk.",
    ),
    IngredientRule(
        "sugar",
        "Excess sugar promotes inflammation and metabolic issues.",
    ),
    IngredientRule(
        "partially hydrogenated oil",
        "Main source of artificial trans fat, harmful for heart health.",
    ),
    IngredientRule(
        "monosodium glutamate",
        "Can trigger headaches, sweating, and inflammation in sensitive people.",
    ),
    IngredientRule(
        "msg",
        "Another name for monosodium glutamate.",
    ),
    IngredientRule(
        "artificial flavors",
        "May contain chemical additives linked to inflammation.",
    ),
)


def all_rules() -> tuple[IngredientRule, ...]:
    """사전 전체를 선언 순서대로 반환 (읽기 전용 tuple)"""
    return INFLAMMATORY_INGREDIENTS
