"""Default nutrition and substitution data (per 100 g / 100 ml)."""

from fitswap.domain.nutrition import NutritionFacts
from fitswap.domain.recipe import Goal
from fitswap.domain.tables import NutritionTable, SwapCandidate, SwapTable

DEFAULT_NUTRITION_FACTS = NutritionFacts(calories=100, protein=5, carbs=15, fats=3)

NUTRITION_ROWS: dict[str, NutritionFacts] = {
    # Proteins
    "frango": NutritionFacts(165, 31, 0, 3.6, sodium=74),
    "peito de peru": NutritionFacts(104, 17, 4.2, 1.7, sodium=1015),
    "carne moída": NutritionFacts(254, 17, 0, 20, sodium=66, saturated_fat=7.6),
    "patinho moído": NutritionFacts(133, 21, 0, 5, sodium=60, saturated_fat=2),
    "salmão": NutritionFacts(208, 20, 0, 12, sodium=44, saturated_fat=2.5),
    "ovo": NutritionFacts(155, 13, 1.1, 11, sodium=124, saturated_fat=3.3),
    "bacon": NutritionFacts(541, 37, 1.4, 42, sodium=1717, saturated_fat=14),
    # Grains and starches
    "arroz": NutritionFacts(130, 2.7, 28, 0.3, fiber=0.4, sodium=1),
    "arroz integral": NutritionFacts(112, 2.3, 24, 0.8, fiber=1.8, sodium=5),
    "quinoa": NutritionFacts(120, 4.4, 22, 1.9, fiber=2.8, sodium=7),
    "batata": NutritionFacts(77, 2, 17, 0.1, fiber=2.2, sodium=6),
    "batata doce": NutritionFacts(86, 1.6, 20, 0.1, fiber=3, sodium=54),
    "aveia": NutritionFacts(389, 17, 66, 7, fiber=11, sodium=2),
    "farinha branca": NutritionFacts(364, 10, 76, 1, fiber=2.7, sodium=2),
    "farinha de aveia": NutritionFacts(404, 15, 66, 9, fiber=10, sodium=4),
    "farinha de amêndoa": NutritionFacts(571, 21, 21, 50, fiber=11, sodium=1),
    "farinha integral": NutritionFacts(340, 13, 72, 2.5, fiber=11, sodium=2),
    "pão": NutritionFacts(265, 9, 49, 3.2, fiber=2.7, sodium=491),
    "macarrão": NutritionFacts(131, 5, 25, 1.1, fiber=1.8, sodium=1),
    "macarrão integral": NutritionFacts(124, 5.3, 27, 0.5, fiber=4.5, sodium=3),
    "macarrão de grão-de-bico": NutritionFacts(160, 11, 26, 2.5, fiber=6, sodium=20),
    # Vegetables and fruit
    "abobrinha": NutritionFacts(17, 1.2, 3.4, 0.2, fiber=1, sodium=8),
    "couve-flor": NutritionFacts(25, 1.9, 5, 0.3, fiber=2, sodium=30),
    "tomate": NutritionFacts(18, 0.9, 3.9, 0.2, fiber=1.2, sodium=5),
    "cebola": NutritionFacts(40, 1.1, 9.3, 0.1, fiber=1.7, sodium=4),
    "alho": NutritionFacts(149, 6.4, 33, 0.5, fiber=2.1, sodium=17),
    "abacate": NutritionFacts(160, 2, 8.5, 14.7, fiber=6.7, sodium=7),
    "banana": NutritionFacts(89, 1.1, 23, 0.3, fiber=2.6, sodium=1, sugar=12),
    # Fats
    "azeite": NutritionFacts(884, 0, 0, 100, sodium=2, saturated_fat=14),
    "spray de azeite": NutritionFacts(792, 0, 0, 88, saturated_fat=12),
    "óleo": NutritionFacts(884, 0, 0, 100, saturated_fat=15),
    "manteiga": NutritionFacts(717, 0.9, 0.1, 81, sodium=11, saturated_fat=51),
    "maionese": NutritionFacts(680, 1, 0.6, 75, sodium=635, saturated_fat=12),
    # Dairy
    "creme de leite": NutritionFacts(292, 2.8, 3, 30, sodium=40, saturated_fat=19),
    "iogurte grego": NutritionFacts(59, 10, 3.6, 0.4, sodium=36),
    "leite": NutritionFacts(42, 3.4, 5, 1, sodium=44, sugar=5),
    "leite de coco": NutritionFacts(230, 2.3, 6, 24, sodium=15, saturated_fat=21),
    "queijo": NutritionFacts(113, 7, 1, 9, sodium=621, saturated_fat=5.6),
    "queijo cottage": NutritionFacts(98, 11, 3.4, 4.3, sodium=364, saturated_fat=1.7),
    "queijo parmesão": NutritionFacts(431, 38, 4.1, 29, sodium=1529, saturated_fat=19),
    # Sweeteners
    "açúcar": NutritionFacts(387, 0, 100, 0, sugar=100),
    "mel": NutritionFacts(304, 0.3, 82, 0, sodium=4, sugar=82),
    "stevia": NutritionFacts(0, 0, 0, 0),
}

NUTRITION_ALIASES: dict[str, str] = {
    "peito de frango": "frango",
    "ovos": "ovo",
    "claras": "ovo",
    "azeite de oliva": "azeite",
    "massa": "macarrão",
    "arroz branco": "arroz",
    "farinha de trigo": "farinha branca",
    "queijo amarelo": "queijo",
    "queijo mussarela": "queijo",
    "couve-flor ralada": "couve-flor",
    "abobrinha em espiral": "abobrinha",
    "abacate amassado": "abacate",
    "banana amassada": "banana",
    "leite integral": "leite",
}

_LACTOSE = frozenset({"lactose", "vegan"})
_GLUTEN = frozenset({"gluten"})
_NUTS = frozenset({"tree_nut"})
_ANIMAL = frozenset({"vegan"})

SWAP_ROWS: dict[str, tuple[SwapCandidate, ...]] = {
    "creme de leite": (
        SwapCandidate(
            "iogurte grego + azeite",
            "Menos gordura saturada, mais proteína",
            Goal.LOSE_WEIGHT,
            _LACTOSE,
        ),
        SwapCandidate(
            "leite de coco", "Opção vegana, sabor similar", Goal.GENERAL_HEALTH
        ),
    ),
    # Plain milk has no swap; the empty row keeps it off "creme de leite".
    "leite": (),
    "manteiga": (
        SwapCandidate("azeite de oliva", "Gorduras mais saudáveis", Goal.GENERAL_HEALTH),
        SwapCandidate(
            "abacate amassado", "Gorduras boas, mais nutrientes", Goal.LOSE_WEIGHT
        ),
    ),
    "açúcar": (
        SwapCandidate("mel", "Mais natural, menor índice glicêmico", Goal.GENERAL_HEALTH, _ANIMAL),
        SwapCandidate("stevia", "Zero calorias", Goal.LOSE_WEIGHT),
        SwapCandidate(
            "banana amassada", "Adoça naturalmente, adiciona nutrientes", Goal.GAIN_MASS
        ),
    ),
    "farinha branca": (
        SwapCandidate(
            "farinha de aveia", "Mais proteína e fibra", Goal.LOSE_WEIGHT, _GLUTEN
        ),
        SwapCandidate(
            "farinha de amêndoa",
            "Mais proteína, menos carboidratos",
            Goal.GAIN_MASS,
            _NUTS,
        ),
        SwapCandidate(
            "farinha integral", "Mais fibra e nutrientes", Goal.GENERAL_HEALTH, _GLUTEN
        ),
    ),
    "arroz branco": (
        SwapCandidate("quinoa", "Mais proteína e nutrientes", Goal.GAIN_MASS),
        SwapCandidate("arroz integral", "Mais fibra", Goal.LOSE_WEIGHT),
        SwapCandidate("couve-flor ralada", "Menos calorias, mais volume", Goal.LOSE_WEIGHT),
    ),
    "macarrão": (
        SwapCandidate("macarrão integral", "Mais fibra", Goal.LOSE_WEIGHT, _GLUTEN),
        SwapCandidate("macarrão de grão-de-bico", "Mais proteína", Goal.GAIN_MASS),
        SwapCandidate("abobrinha em espiral", "Menos calorias", Goal.LOSE_WEIGHT),
    ),
    "óleo": (
        SwapCandidate("azeite de oliva", "Gorduras mais saudáveis", Goal.GENERAL_HEALTH),
        SwapCandidate("spray de azeite", "Menos gordura total", Goal.LOSE_WEIGHT),
    ),
    "queijo amarelo": (
        SwapCandidate(
            "queijo cottage", "Mais proteína, menos gordura", Goal.LOSE_WEIGHT, _LACTOSE
        ),
        SwapCandidate(
            "queijo parmesão",
            "Mais sabor, menos quantidade necessária",
            Goal.GENERAL_HEALTH,
            _LACTOSE,
        ),
    ),
    "carne moída": (
        SwapCandidate("patinho moído", "Corte mais magro, menos gordura", Goal.LOSE_WEIGHT),
        SwapCandidate("peito de peru", "Mais proteína por caloria", Goal.GAIN_MASS),
    ),
    "maionese": (
        SwapCandidate(
            "iogurte grego", "Menos calorias, mais proteína", None, _LACTOSE
        ),
        SwapCandidate("abacate amassado", "Gorduras boas, sem conservantes"),
    ),
    "bacon": (
        SwapCandidate("peito de peru", "Menos gordura saturada e sódio"),
    ),
}

SWAP_ALIASES: dict[str, str] = {
    "farinha de trigo": "farinha branca",
    "creme de leite fresco": "creme de leite",
    "oleo de soja": "óleo",
    "arroz": "arroz branco",
    "queijo mussarela": "queijo amarelo",
    "acucar refinado": "açúcar",
}


def default_nutrition_table() -> NutritionTable:
    """Return the bundled nutrition table."""
    return NutritionTable(
        rows=NUTRITION_ROWS,
        default=DEFAULT_NUTRITION_FACTS,
        aliases=NUTRITION_ALIASES,
    )


def default_swap_table() -> SwapTable:
    """Return the bundled substitution table."""
    return SwapTable(rows=SWAP_ROWS, aliases=SWAP_ALIASES)
