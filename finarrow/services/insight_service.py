"""AI commentary on a KPI snapshot."""

from finarrow.clients.llm_client import LLMClient
from finarrow.logging_config import get_logger
from finarrow.prompts.manager import PromptManager
from finarrow.schemas.kpi import KPIMetrics
from finarrow.utils.financial_math import signed_percent

logger = get_logger(__name__)


def prompt_values(kpis: KPIMetrics) -> dict[str, str]:
    """Format every KPI the way the insight prompt shows it."""
    return {
        "mrr": f"${kpis.mrr:,.0f}",
        "mrr_change": signed_percent(kpis.mrr_change),
        "cac": f"${kpis.cac:,.2f}",
        "cac_change": signed_percent(kpis.cac_change),
        "churn_rate": f"{kpis.churn_rate:.1f}%",
        "churn_change": signed_percent(kpis.churn_change),
        "burn_rate": f"${kpis.burn_rate:,.0f}",
        "burn_rate_change": signed_percent(kpis.burn_rate_change),
        "runway_months": f"{kpis.runway_months:.1f}",
        "ltv_cac_ratio": f"{kpis.ltv_cac_ratio:.2f}",
        "ltv_cac_change": signed_percent(kpis.ltv_cac_change),
        "arpu": f"${kpis.arpu:,.2f}",
        "arpu_change": signed_percent(kpis.arpu_change),
    }


class InsightService:
    def __init__(
        self,
        llm_client: LLMClient,
        prompts: PromptManager,
        prompt_version: str = "latest",
    ):
        self.llm = llm_client
        self.prompts = prompts
        self.prompt_version = prompt_version

    def build_prompt(self, kpis: KPIMetrics) -> tuple[str, str]:
        """``(system_prompt, user_prompt)`` for *kpis*."""
        system = self.prompts.get("insights_system", self.prompt_version)
        user = self.prompts.render("insights_user", self.prompt_version, **prompt_values(kpis))
        return system, user

    def generate(self, kpis: KPIMetrics) -> str:
        """Free-text commentary. Raises the client's InsightsError subclasses."""
        system, user = self.build_prompt(kpis)
        logger.info("insights_requested", model=self.llm.model)
        text = self.llm.complete(system, user)
        logger.info("insights_generated", chars=len(text))
        return text
