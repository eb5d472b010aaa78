"""Legacy global category codes.

Transactions created before user-defined categories existed carry one of these
codes in their free-form ``category`` field. The table is compiled in and never
changes at runtime.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from models.category import EXPENSE, INCOME

LEGACY_COLOR = "#6366F1"


@dataclass(frozen=True)
class GlobalCategoryCode:
    name: str  # e.g. "FOOD"
    label: str  # display label, e.g. "Alimentação"
    type: str
    color: str
    icon: str = "DollarSign"


GLOBAL_CATEGORY_CODES = (
    GlobalCategoryCode("SALARY", "Salário", INCOME, "#10B981", "Briefcase"),
    GlobalCategoryCode("FREELANCE", "Freelance", INCOME, "#3B82F6", "DollarSign"),
    GlobalCategoryCode("INVESTMENT", "Investimentos", INCOME, "#8B5CF6", "TrendingUp"),
    GlobalCategoryCode("OTHER_INCOME", "Outros", INCOME, "#6366F1", "Coins"),
    GlobalCategoryCode("FOOD", "Alimentação", EXPENSE, "#F59E0B", "Coffee"),
    GlobalCategoryCode("TRANSPORT", "Transporte", EXPENSE, "#3B82F6", "Car"),
    GlobalCategoryCode("HOUSING", "Moradia", EXPENSE, "#10B981", "Home"),
    GlobalCategoryCode("UTILITIES", "Contas", EXPENSE, "#EF4444", "Zap"),
    GlobalCategoryCode("HEALTHCARE", "Saúde", EXPENSE, "#EC4899", "Heart"),
    GlobalCategoryCode("ENTERTAINMENT", "Lazer", EXPENSE, "#8B5CF6", "Gamepad2"),
    GlobalCategoryCode("EDUCATION", "Educação", EXPENSE, "#06B6D4", "GraduationCap"),
    GlobalCategoryCode("SHOPPING", "Compras", EXPENSE, "#F97316", "ShoppingBag"),
    GlobalCategoryCode("OTHER_EXPENSE", "Outros", EXPENSE, "#6366F1", "Receipt"),
    # Older codes only kept for label lookup
    GlobalCategoryCode(
        "TRANSFER", "Transferência", EXPENSE, LEGACY_COLOR, "ArrowRightLeft"
    ),
    GlobalCategoryCode("DEBT_PAYMENT", "Pagamento de Dívida", EXPENSE, LEGACY_COLOR),
    GlobalCategoryCode("BONUS", "Bônus / PLR", INCOME, LEGACY_COLOR),
    GlobalCategoryCode("SELF_EMPLOYED", "Autônomo / PJ", INCOME, LEGACY_COLOR),
    GlobalCategoryCode("DIVIDENDS", "Dividendos", INCOME, LEGACY_COLOR),
    GlobalCategoryCode("INTEREST", "Juros", INCOME, LEGACY_COLOR),
    GlobalCategoryCode("INVESTMENT_INCOME", "Rendimentos", INCOME, LEGACY_COLOR),
    GlobalCategoryCode("PENSION_INCOME", "Previdência", INCOME, LEGACY_COLOR),
    GlobalCategoryCode("RENT", "Aluguel", EXPENSE, LEGACY_COLOR),
    GlobalCategoryCode("INSURANCE", "Seguros", EXPENSE, LEGACY_COLOR),
    GlobalCategoryCode("CLOTHING", "Vestuário", EXPENSE, LEGACY_COLOR),
    GlobalCategoryCode("SUBSCRIPTIONS", "Assinaturas", EXPENSE, LEGACY_COLOR),
    GlobalCategoryCode("TAXES", "Impostos", EXPENSE, LEGACY_COLOR),
    GlobalCategoryCode("FEES", "Taxas e Tarifas", EXPENSE, LEGACY_COLOR),
    GlobalCategoryCode("PETS", "Pets", EXPENSE, LEGACY_COLOR),
    GlobalCategoryCode("DONATIONS", "Doações", EXPENSE, LEGACY_COLOR),
    GlobalCategoryCode("TRAVEL", "Viagens", EXPENSE, LEGACY_COLOR),
)


def index_codes(codes) -> Mapping[str, GlobalCategoryCode]:
    """Build a read-only name -> code lookup, keeping table order."""
    return MappingProxyType({code.name: code for code in codes})


GLOBAL_CATEGORY_INDEX = index_codes(GLOBAL_CATEGORY_CODES)
