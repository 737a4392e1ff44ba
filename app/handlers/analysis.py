"""
Gemini analysis handler - narrative efficiency analysis and installation report.

Calls to the model are best-effort: any failure (missing key, network error,
unparseable output) is logged and answered with canned content instead.
"""

import json
import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from google import genai
from google.genai import types

from app.core.config import get_settings
from app.models.analysis import ProjectAnalysis
from app.models.project import RoofType
from app.handlers.checklist import string_configuration, total_panel_power_kw

logger = logging.getLogger(__name__)

ANALYSIS_SYSTEM_PROMPT = """You are an expert in photovoltaic solar installations.
Analyse the project and give a professional technical assessment.
Answer in JSON with the format:
{
  "efficiency_score": number (0-100),
  "recommendations": ["recommendation1", "recommendation2"],
  "cost_optimization": "cost optimization tip",
  "installation_tips": ["tip1", "tip2", "tip3"]
}"""

ANALYSIS_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "efficiency_score": {"type": "number"},
        "recommendations": {"type": "array", "items": {"type": "string"}},
        "cost_optimization": {"type": "string"},
        "installation_tips": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["efficiency_score", "recommendations", "cost_optimization", "installation_tips"],
}

# Used when the model answers but leaves a field out
DEFAULT_EFFICIENCY_SCORE = 75
DEFAULT_COST_OPTIMIZATION = "No specific cost optimization identified."

FALLBACK_ANALYSIS = ProjectAnalysis(
    efficiency_score=85,
    recommendations=[
        "Check the inverter sizing",
        "Consider the ideal solar orientation",
        "Assess the roof structure",
    ],
    cost_optimization="Analysis unavailable at the moment",
    installation_tips=[
        "Check the weather conditions",
        "Keep tools organised",
        "Test every connection",
    ],
)


def build_analysis_prompt(panel_count: int, inverter_power_kw: float, roof_type: RoofType) -> str:
    """Project description sent to the model."""
    roof = roof_type.value if isinstance(roof_type, RoofType) else str(roof_type)
    return (
        "Solar project:\n"
        f"- Panels: {panel_count} units (550W each)\n"
        f"- Inverter: {inverter_power_kw:g}kW\n"
        f"- Installation type: {roof}\n"
        f"- Configuration: {string_configuration(panel_count).label}\n"
        f"- Estimated total power: {total_panel_power_kw(panel_count):.2f}kW\n"
    )


def parse_analysis(data: Dict[str, Any]) -> ProjectAnalysis:
    """Build an analysis from model JSON, defaulting missing or mistyped fields."""
    score = data.get("efficiency_score")
    if not isinstance(score, (int, float)) or isinstance(score, bool):
        score = DEFAULT_EFFICIENCY_SCORE
    recommendations = data.get("recommendations")
    cost = data.get("cost_optimization")
    tips = data.get("installation_tips")

    return ProjectAnalysis(
        efficiency_score=min(max(float(score), 0.0), 100.0),
        recommendations=[str(r) for r in recommendations] if isinstance(recommendations, list) else [],
        cost_optimization=cost if isinstance(cost, str) else DEFAULT_COST_OPTIMIZATION,
        installation_tips=[str(t) for t in tips] if isinstance(tips, list) else [],
    )


def render_fallback_report(
    project_name: str,
    analysis: ProjectAnalysis,
    panel_count: int,
    inverter_power_kw: float
) -> str:
    """Plain report assembled from the analysis when the model is unavailable."""
    recommendations = "\n".join(f"• {rec}" for rec in analysis.recommendations)
    tips = "\n".join(f"• {tip}" for tip in analysis.installation_tips)
    return (
        f"Technical Report - {project_name}\n"
        "\n"
        "PROJECT SUMMARY\n"
        f"- Solar panels: {panel_count} units (550W each)\n"
        f"- Inverter: {inverter_power_kw:g}kW\n"
        f"- Efficiency score: {analysis.efficiency_score:g}/100\n"
        "\n"
        "TECHNICAL RECOMMENDATIONS\n"
        f"{recommendations}\n"
        "\n"
        "INSTALLATION TIPS\n"
        f"{tips}\n"
        "\n"
        "COST OPTIMIZATION\n"
        f"{analysis.cost_optimization}"
    )


class GeminiAnalyzer:
    """Uses Google Gemini for project analysis and report writing."""

    def __init__(self, api_key: Optional[str], model: str = "gemini-2.0-flash", client=None):
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self):
        if self._client is None:
            if not self.api_key:
                raise ValueError("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def analyze_project(
        self,
        panel_count: int,
        inverter_power_kw: float,
        roof_type: RoofType
    ) -> ProjectAnalysis:
        """
        Ask the model for an efficiency analysis of a project.

        Returns:
            Parsed analysis, or the canned fallback on any failure
        """
        try:
            client = self._get_client()
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=build_analysis_prompt(panel_count, inverter_power_kw, roof_type),
                config=types.GenerateContentConfig(
                    system_instruction=ANALYSIS_SYSTEM_PROMPT,
                    response_mime_type="application/json",
                    response_schema=ANALYSIS_RESPONSE_SCHEMA,
                ),
            )
            raw_json = response.text
            if not raw_json:
                raise ValueError("Empty response from model")

            data = json.loads(raw_json)
            if not isinstance(data, dict):
                raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
            return parse_analysis(data)

        except Exception as e:
            logger.warning(f"Project analysis failed, using fallback (model={self.model}): {e}")
            return FALLBACK_ANALYSIS.model_copy(deep=True)

    async def generate_installation_report(
        self,
        project_name: str,
        analysis: ProjectAnalysis,
        panel_count: int,
        inverter_power_kw: float
    ) -> str:
        """Ask the model for a free-text installation report."""
        prompt = (
            "Write a professional technical report for a solar installation:\n"
            "\n"
            f"Project: {project_name}\n"
            f"Panels: {panel_count} units\n"
            f"Inverter: {inverter_power_kw:g}kW\n"
            f"Efficiency score: {analysis.efficiency_score:g}/100\n"
            "\n"
            f"Recommendations: {', '.join(analysis.recommendations)}\n"
            f"Installation tips: {', '.join(analysis.installation_tips)}\n"
            "\n"
            "Write a professional, technical report with organised sections."
        )
        try:
            client = self._get_client()
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
            )
            if response.text:
                return response.text
            raise ValueError("Empty response from model")

        except Exception as e:
            logger.warning(f"Report generation failed, using fallback (model={self.model}): {e}")
            return render_fallback_report(project_name, analysis, panel_count, inverter_power_kw)


@lru_cache()
def get_analyzer() -> GeminiAnalyzer:
    """Dependency returning the analyzer configured from settings."""
    settings = get_settings()
    return GeminiAnalyzer(api_key=settings.gemini_api_key, model=settings.gemini_model)
