"""Canned section bodies for templates whose stored text is too short to use.

Keyed by the template-name suffix after "secNprompt_". Bodies carry
{{public.issuers.X}} / {{public.listing.X}} placeholders that the data
completion stage resolves against live records.
"""
# ruff: noqa: E501

SECTION_PLACEHOLDERS: dict[str, str] = {
    "warning": """IMPORTANT NOTICE TO INVESTORS

This investment document contains forward-looking statements and important risk disclosures. Potential investors should carefully review all information before making investment decisions.

RISK WARNINGS:
- Past performance does not guarantee future results
- Investment values may fluctuate and can go down as well as up
- Investors may not get back the original amount invested
- This investment may not be suitable for all investors

Prospective investors should seek independent financial and legal advice before investing.""",
    "listingparticulars": """LISTING PARTICULARS

Company: {{public.issuers.organization_name}}
Instrument: {{public.listing.instrumentname}}
Type: {{public.listing.instrumenttype}}
Exchange: {{public.listing.instrumentexchange}}
ISIN: {{public.listing.isin}}
Currency: {{public.listing.instrumentcurrency}}

Number of Securities: {{public.listing.instrumentsecuritiesissued}}
Nominal Value: {{public.listing.nominalvalue}}
Listing Date: {{public.listing.instrumentlistingdate}}

The securities will rank pari passu with existing securities of the same class.""",
    "generalinfo": """GENERAL INFORMATION

{{public.issuers.organization_name}} is a {{public.issuers.legal_structure}} incorporated in {{public.issuers.country}} on {{public.issuers.incorporation_date}} with company registration number {{public.issuers.company_registration_number}}.

The Company's registered address is:
{{public.issuers.registered_address}}

Business Overview:
{{public.issuers.business_overview}}

Website: {{public.issuers.business_website}}
Contact: {{public.issuers.business_email}}

The Company operates in the {{public.issuers.industry}} sector.""",
    "corporateadvisors": """CORPORATE ADVISORS

Legal Advisors:
{{public.issuers.legal_advisors_name}}
{{public.issuers.legal_advisors_address}}

Auditors:
{{public.issuers.auditors_name}}
{{public.issuers.auditors_address}}

Sponsor:
{{public.listing.instrumentsponsorname}}

These professional advisors have been appointed by the Company to assist with the listing process and ongoing compliance requirements.""",
    "boardofdirectors": """BOARD OF DIRECTORS

The Company is governed by a board of {{public.issuers.how_many_directors_total}} directors.

Chief Executive Officer:
{{public.issuers.chief_executiveofficer}}
Title: {{public.issuers.ceo_title}}
Nationality: {{public.issuers.ceo_nationality}}

Financial Director:
{{public.issuers.financial_director}}
Title: {{public.issuers.fd_title}}

The board brings experience and expertise to guide the Company's strategic direction and operations.""",
    "purposeoflisting": """PURPOSE OF LISTING

{{public.issuers.purpose_of_listing}}

The listing on {{public.listing.instrumentexchange}} will provide the Company with:
- Access to capital markets for growth financing
- Enhanced corporate profile and credibility
- Improved liquidity for shareholders
- A platform for future strategic initiatives

Use of Proceeds:
{{public.issuers.use_of_proceeds}}""",
    "plansafterlisting": """PLANS FOLLOWING LISTING

Following completion of the listing, {{public.issuers.organization_name}} intends to pursue the following strategic initiatives:

{{public.issuers.plans_after_listing}}

SHORT-TERM OBJECTIVES (0-12 months):
- Integrate listing proceeds into business operations
- Implement enhanced corporate governance structures
- Execute immediate growth initiatives

MEDIUM-TERM STRATEGY (1-3 years):
- Expand market presence in core segments
- Pursue strategic acquisitions where appropriate
- Invest in technology and infrastructure

LONG-TERM VISION (3-5 years):
- Establish a leading position in key segments
- Build a scalable business platform
- Create long-term value for shareholders""",
    "salientpoints": """SALIENT POINTS

Key highlights of {{public.issuers.organization_name}} include:

- Company Name: {{public.issuers.organization_name}}
- Incorporation: {{public.issuers.country}}, {{public.issuers.incorporation_date}}
- Legal Structure: {{public.issuers.legal_structure}}
- Industry: {{public.issuers.industry}}
- Listing Exchange: {{public.listing.instrumentexchange}}
- Instrument Type: {{public.listing.instrumenttype}}

Financial Highlights:
- Authorized Share Capital: {{public.issuers.authorised_share_capital}}
- Shares in Issue: {{public.issuers.shares_in_issue}}
- Nominal Share Price: {{public.issuers.nominal_share_price}}""",
    "forwardlooking_statements": """FORWARD-LOOKING STATEMENTS

This document contains forward-looking statements regarding {{public.issuers.organization_name}} and its business prospects. These statements are based on current expectations and assumptions and involve known and unknown risks and uncertainties.

Forward-looking statements include, but are not limited to:
- Business strategies and plans
- Growth prospects and market opportunities
- Financial projections and expectations
- Operational performance targets

Actual results may differ materially from those expressed or implied in forward-looking statements.

Investors should not place undue reliance on forward-looking statements, which speak only as of the date of this document. The Company undertakes no obligation to update forward-looking statements except as required by applicable regulations.""",
    "risks1": """SECURITY RISKS

{{public.issuers.organization_name}} may face various security-related risks that could impact its operations and financial performance. Investors should carefully consider these risks before making investment decisions.

The Company has implemented risk management frameworks and controls to mitigate these exposures where possible.""",
    "title": """{{public.listing.instrumentname}} - LISTING PARTICULARS""",
    "generalrequirements": """GENERAL REQUIREMENTS

This document has been prepared in accordance with the listing requirements of {{public.listing.instrumentexchange}} and applicable securities regulations.

The information contained herein has been compiled by {{public.issuers.organization_name}} and its advisors and is current as of the date of this document.

All information has been verified to the best of the Company's knowledge and belief.""",
    "tableofcontents": """TABLE OF CONTENTS

1. WARNING NOTICE
2. LISTING PARTICULARS
3. GENERAL INFORMATION
4. CORPORATE ADVISORS
5. FORWARD-LOOKING STATEMENTS
6. BOARD OF DIRECTORS
7. SALIENT POINTS
8. PURPOSE OF LISTING
9. PLANS AFTER LISTING
10. RISK FACTORS
11. SECURITIES INFORMATION
12. COSTS AND FEES""",
    "costs": """COSTS AND FEES

The following costs and fees are associated with the listing of {{public.listing.instrumentname}} on {{public.listing.instrumentexchange}}:

Sponsor Fees: {{public.listing.instrumentsponsorfees}}
Legal and Accounting Fees: {{public.listing.instrumentaccountinglegalfees}}
Exchange Fees: {{public.listing.instrumentexchangefees}}
Marketing Costs: {{public.listing.intrumentmarketingcosts}}
Annual Listing Fee: {{public.listing.instrumentannuallistingfee}}

These costs represent the primary expenses associated with achieving and maintaining the listing.""",
    "documentname": """{{public.issuers.organization_name}}

LISTING DOCUMENT

{{public.listing.instrumentname}} on {{public.listing.instrumentexchange}}""",
    "importantdatestimes": """IMPORTANT DATES AND TIMES

Expected listing date: {{public.listing.instrumentlistingdate}}
Exchange: {{public.listing.instrumentexchange}}

All dates and times are subject to change. Any changes will be announced by the Company through the exchange.""",
    "responsibleperson": """RESPONSIBLE PERSON

The directors of {{public.issuers.organization_name}}, whose names appear in this document, accept responsibility for the information contained herein. To the best of their knowledge and belief, the information is in accordance with the facts and contains no omission likely to affect its import.

Chief Executive Officer: {{public.issuers.chief_executiveofficer}}""",
    "securitiesparticulars": """PARTICULARS OF THE SECURITIES

Instrument: {{public.listing.instrumentname}}
Category: {{public.listing.instrumentcategory}}
ISIN: {{public.listing.isin}}
Currency: {{public.listing.instrumentcurrency}}
Securities Issued: {{public.listing.instrumentsecuritiesissued}}
Nominal Value: {{public.listing.nominalvalue}}""",
    "recentdevelopments": """RECENT DEVELOPMENTS

{{public.issuers.recent_performance}}

{{public.issuers.company_prospects}}""",
    "financialstatements": """FINANCIAL STATEMENTS

The financial statements of {{public.issuers.organization_name}} have been audited by {{public.issuers.auditors_name}}.

{{public.issuers.accounts}}""",
    "exchange": """EXCHANGE

The securities of {{public.issuers.organization_name}} will be listed on {{public.listing.instrumentexchange}}. The sponsor to the listing is {{public.listing.instrumentsponsorname}}.""",
}


def generic_placeholder(template_name: str, title: str) -> str:
    """Fallback body naming the template it stands in for."""
    return f"""{title}

This section contains important information about {{{{public.issuers.organization_name}}}} related to {title.lower()}.

[Content will be populated with company-specific information]

For more information, please refer to the complete listing documentation.

Generated from template: {template_name}"""


def placeholder_body(template_name: str, suffix: str, title: str) -> str:
    """Canned body for a section-type suffix, else the generic fallback."""
    return SECTION_PLACEHOLDERS.get(suffix.lower()) or generic_placeholder(template_name, title)
