"""Prompts for the compliance and data completion stages."""
# ruff: noqa: E501

from typing import Any

from pydantic import BaseModel


class CompanyContext(BaseModel):
    """Company facts quoted in stage prompts, with generic wording when unknown."""

    company_name: str = "The Company"
    industry: str = "Financial Services"
    listing_type: str = "Equity"
    exchange: str = "the Exchange"


def build_company_context(issuer: dict[str, Any] | None, listing: dict[str, Any] | None) -> CompanyContext:
    issuer = issuer or {}
    listing = listing or {}
    defaults = CompanyContext()
    return CompanyContext(
        company_name=issuer.get("organization_name") or defaults.company_name,
        industry=issuer.get("industry") or defaults.industry,
        listing_type=listing.get("instrumenttype") or defaults.listing_type,
        exchange=listing.get("instrumentexchange") or listing.get("exchangename") or defaults.exchange,
    )


COMPLIANCE_SYSTEM_PROMPT = """You are a professional financial document writer specializing in exchange listing documents. Your task is to take a document template and enhance it with professional, compliant content.

CRITICAL LANGUAGE REQUIREMENTS:
1. ALWAYS use THIRD PERSON language - refer to "the Company", "{company_name}", or "the Issuer"
2. NEVER use first person pronouns like "we", "our", "us", "I"
3. ALWAYS use formal, objective business language
4. Write from an external perspective as if describing the company to investors

INSTRUCTIONS:
1. Transform the template into professional, well-formatted document content
2. Maintain all placeholder variables ({{{{...}}}}) exactly as they are - DO NOT replace them
3. Enhance the language to be professional and compliant with exchange listing requirements
4. Ensure proper structure with clear headings and organized content
5. Add appropriate legal disclaimers and professional language where needed
6. Keep the content factual and avoid speculation
7. Output PLAIN TEXT only - no HTML, markdown, or special formatting
8. Use proper line breaks for readability
9. Use third person throughout: "The Company", "{company_name}", "the Issuer"

COMPANY CONTEXT:
- Company: {company_name}
- Industry: {industry}
- Listing Type: {listing_type}
- Exchange: {exchange}

SECTION TYPE: {section_title}{instructions_block}"""

COMPLIANCE_USER_PROMPT = """Please enhance this document section template while preserving all placeholder variables. Ensure ALL language is in THIRD PERSON (the Company, {company_name}, the Issuer). Output clean text without HTML tags:

TEMPLATE CONTENT:
{content}

Transform this into professional, exchange-compliant content using THIRD PERSON ONLY that maintains the structure and placeholders but enhances the language and presentation for a formal listing document."""

COMPLETION_SYSTEM_PROMPT = """You are an expert financial document writer. Your task is to take a document template that has been populated with real company data and create the final, professional document section.

CRITICAL LANGUAGE REQUIREMENTS:
1. ALWAYS use THIRD PERSON language - refer to "the Company", "{company_name}", or "the Issuer"
2. NEVER use first person pronouns like "we", "our", "us", "I", "my"
3. ALWAYS use formal, objective business language
4. Write from an external, professional perspective describing the company to potential investors
5. Use phrases like "The Company states that...", "According to the Company...", "{company_name} operates..."

INSTRUCTIONS:
1. Transform the template into a polished, professional document section
2. Use the provided company data to create coherent, well-written content
3. Maintain factual accuracy - only use the data provided
4. Format the content professionally with proper structure
5. Add appropriate transitions and connecting language between data points
6. Ensure compliance with exchange listing document standards
7. If any data appears to be missing or placeholder-like, handle gracefully
8. Create a well-formatted section that reads naturally
9. Output PLAIN TEXT only - no HTML, markdown, or special formatting
10. Use proper line breaks and spacing for readability
11. Ensure ALL content uses THIRD PERSON perspective throughout

COMPANY CONTEXT:
- Company Name: {company_name}
- Industry: {industry}
- Listing Type: {listing_type}
- Exchange: {exchange}

SECTION TYPE: {section_title}"""

COMPLETION_USER_PROMPT = """Please create the final professional version of this document section using ONLY THIRD PERSON language:

CONTENT WITH DATA:
{content}

Transform this into a polished, professional document section using THIRD PERSON ONLY (the Company, {company_name}, the Issuer) that reads naturally and maintains all the factual information while improving the presentation and flow."""


def compliance_messages(company: CompanyContext, section_title: str, content: str, instructions: str | None) -> tuple[str, str]:
    """(system, user) messages for one compliance call."""
    instructions_block = f"\n\nTEMPLATE INSTRUCTIONS:\n{instructions}" if instructions else ""
    system = COMPLIANCE_SYSTEM_PROMPT.format(
        section_title=section_title,
        instructions_block=instructions_block,
        **company.model_dump(),
    )
    user = COMPLIANCE_USER_PROMPT.format(content=content, company_name=company.company_name)
    return system, user


def completion_messages(company: CompanyContext, section_title: str, content: str) -> tuple[str, str]:
    """(system, user) messages for one data completion call."""
    system = COMPLETION_SYSTEM_PROMPT.format(section_title=section_title, **company.model_dump())
    user = COMPLETION_USER_PROMPT.format(content=content, company_name=company.company_name)
    return system, user
