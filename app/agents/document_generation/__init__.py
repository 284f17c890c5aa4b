"""Document generation agents.

This module contains the three pipeline stages:
- Template Extraction Agent: loads and parses prompt templates
- Compliance Agent: rewrites sections into formal third-person prose
- Data Completion Agent: fills placeholders from issuer and listing records
"""

from app.agents.document_generation.compliance_agent import ComplianceAgent
from app.agents.document_generation.completion_agent import DataCompletionAgent
from app.agents.document_generation.template_agent import TemplateExtractionAgent

__all__ = ["ComplianceAgent", "DataCompletionAgent", "TemplateExtractionAgent"]
