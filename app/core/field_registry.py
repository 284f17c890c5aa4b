"""Field/mode registry for listing document fields.

Static tables mapping each document field key to its generation mode, its
human label, and the business-record attributes it cannot be written without.
"""

from app.core.schemas_section_context import AssistantMode, FieldDescriptor, RequiredAttribute

DEFAULT_FIELD_KEY = "sec3_generalinfoissuer"
GENERAL_INQUIRY_KEY = "general_inquiry"
BOARD_FIELD_KEY = "sec1_boardofdirectors"
DEFAULT_MODE = AssistantMode.AGENT_MODE

_DC = AssistantMode.DOCUMENT_COMPLETION
_IR = AssistantMode.INDUSTRY_RESEARCH
_RG = AssistantMode.REGULATORY_GUIDANCE

FIELD_MODE_MAP: dict[str, AssistantMode] = {
    # Section 1 - structured content
    "sec1_issuer_name": _DC,
    "sec1_boardofdirectors": _DC,
    "sec1_corporateadvisors": _DC,
    "sec1_generalinfo": _DC,
    "sec1_listingparticulars": _DC,
    "sec1_purposeoflisting": _DC,
    "sec1_plansafterlisting": _DC,
    "sec1_salientpoints": _DC,
    # Section 2 - document structure
    "sec2_tableofcontents": _DC,
    "sec2_importantdatestimes": _DC,
    "sec2_generalrequirements": _RG,
    "sec2_responsibleperson": _DC,
    "sec2_securitiesparticulars": _DC,
    # Section 3 - issuer information
    "sec3_generalinfoissuer": _DC,
    "sec3_issuerprinpactivities": _IR,
    "sec3_issuerfinanposition": _DC,
    "sec3_issuersadministration_and_man": _DC,
    "sec3_recentdevelopments": _IR,
    "sec3_financialstatements": _DC,
    # Section 4 - risk factors
    "sec4_riskfactors1": _RG,
    "sec4_riskfactors2": _RG,
    "sec4_riskfactors3": _RG,
    "sec4_riskfactors4": _RG,
    **{f"sec4_risks{n}": _RG for n in range(5, 17)},
    # Section 5 - securities
    **{f"sec5_informaboutsecurts{n}": _DC for n in range(1, 7)},
    "sec5_costs": _DC,
    # Section 6 - fees and compliance
    "sec6_exchange": _DC,
    "sec6_sponsoradvisorfees": _DC,
    "sec6_accountingandlegalfees": _DC,
    "sec6_merjlistingapplication1styearfees": _DC,
    "sec6_marketingcosts": _DC,
    "sec6_annualfees": _DC,
    "sec6_commissionforsubscription": _DC,
    "sec6_payingagent": _DC,
    "sec6_listingdocuments": _DC,
    "sec6_complianceapproved": _RG,
    # No specific field selected
    GENERAL_INQUIRY_KEY: AssistantMode.AGENT_MODE,
}

FIELD_LABELS: dict[str, str] = {
    "sec1_issuer_name": "Issuer Name",
    "sec1_boardofdirectors": "Board of Directors",
    "sec1_corporateadvisors": "Corporate Advisors",
    "sec1_generalinfo": "General Information",
    "sec1_listingparticulars": "Listing Particulars",
    "sec1_purposeoflisting": "Purpose of Listing",
    "sec1_plansafterlisting": "Plans After Listing",
    "sec1_salientpoints": "Salient Points",
    "sec1_warning": "Warning Statement",
    "sec1_forwardlooking_statements": "Forward Looking Statements",
    "sec1_documentname": "Document Name",
    "sec2_tableofcontents": "Table of Contents",
    "sec2_importantdatestimes": "Important Dates and Times",
    "sec2_generalrequirements": "General Requirements",
    "sec2_responsibleperson": "Responsible Person",
    "sec2_securitiesparticulars": "Securities Particulars",
    "sec2_securitiestowhichthisrelates": "Securities to Which This Relates",
    "sec3_generalinfoissuer": "General Information about Issuer",
    "sec3_issuerprinpactivities": "Issuer Principal Activities",
    "sec3_issuerfinanposition": "Issuer Financial Position",
    "sec3_issuersadministration_and_man": "Issuer Administration and Management",
    "sec3_recentdevelopments": "Recent Developments",
    "sec3_financialstatements": "Financial Statements",
    "sec4_riskfactors1": "Risk Factor 1",
    "sec4_riskfactors2": "Risk Factor 2",
    "sec4_riskfactors3": "Risk Factor 3",
    "sec4_riskfactors4": "Risk Factor 4",
    **{f"sec4_risks{n}": f"Risk Factor {n}" for n in range(5, 17)},
    **{f"sec5_informaboutsecurts{n}": f"Securities Information {n}" for n in range(1, 7)},
    "sec5_costs": "Costs",
    "sec6_exchange": "Exchange",
    "sec6_sponsoradvisorfees": "Sponsor/Advisor Fees",
    "sec6_accountingandlegalfees": "Accounting and Legal Fees",
    "sec6_merjlistingapplication1styearfees": "MERJ Listing Application 1st Year Fees",
    "sec6_marketingcosts": "Marketing Costs",
    "sec6_annualfees": "Annual Fees",
    "sec6_commissionforsubscription": "Commission for Subscription",
    "sec6_payingagent": "Paying Agent",
    "sec6_listingdocuments": "Listing Documents",
    "sec6_complianceapproved": "Compliance Approved",
    GENERAL_INQUIRY_KEY: "General Document Inquiry",
}

# Business-record attributes each field needs (column on the issuer record, label)
_BOARD = [
    RequiredAttribute(column="chief_executiveofficer", label="CEO information"),
    RequiredAttribute(column="financial_director", label="Financial Director information"),
    RequiredAttribute(column="how_many_directors_total", label="Total number of directors"),
]
_GENERAL = [
    RequiredAttribute(column="issuer_name", label="Company name"),
    RequiredAttribute(column="business_overview", label="Business overview"),
    RequiredAttribute(column="registered_address", label="Registered address"),
    RequiredAttribute(column="incorporation_date", label="Incorporation date"),
]
_SECURITIES = [
    RequiredAttribute(column="listing.instrumentname", label="Instrument name"),
    RequiredAttribute(column="listing.instrumentcategory", label="Instrument category"),
    RequiredAttribute(column="shares_in_issue", label="Shares in issue"),
    RequiredAttribute(column="nominal_share_price", label="Nominal share price"),
]

REQUIRED_BUSINESS_ATTRIBUTES: dict[str, list[RequiredAttribute]] = {
    "sec1_boardofdirectors": _BOARD,
    "sec1_generalinfo": _GENERAL,
    "sec3_generalinfoissuer": _GENERAL,
    "sec1_purposeoflisting": [
        RequiredAttribute(column="purpose_of_listing", label="Purpose of listing"),
        RequiredAttribute(column="use_of_proceeds", label="Use of proceeds"),
    ],
    "sec1_plansafterlisting": [
        RequiredAttribute(column="plans_after_listing", label="Plans after listing"),
    ],
    "sec3_issuerprinpactivities": [
        RequiredAttribute(column="business_overview", label="Business overview"),
        RequiredAttribute(column="company_prospects", label="Company prospects"),
    ],
    "sec3_issuerfinanposition": [
        RequiredAttribute(column="recent_performance", label="Recent financial performance"),
        RequiredAttribute(column="accounts", label="Financial accounts"),
    ],
    "sec5_informaboutsecurts1": _SECURITIES,
    "sec5_informaboutsecurts2": _SECURITIES,
    "sec6_sponsoradvisorfees": [
        RequiredAttribute(column="sponsor_advisors", label="Sponsor/advisor information"),
        RequiredAttribute(column="legal_advisors_name", label="Legal advisors"),
    ],
}

# Fields that typically cannot be written without supporting documents
UPLOAD_NEEDED_FIELDS: frozenset[str] = frozenset(
    {
        "sec1_boardofdirectors",
        "sec3_issuerprinpactivities",
        "sec3_financialstatements",
        "sec3_issuerfinanposition",
        "sec4_riskfactors1",
        "sec4_riskfactors2",
        "sec4_riskfactors3",
        "sec4_riskfactors4",
    }
)

# Ordered keyword rules for inferring a field from a free-text prompt; first match wins
KEYWORD_RULES: list[tuple[tuple[str, ...], str]] = [
    (("risk", "factor"), "sec4_riskfactors1"),
    (("director", "board"), "sec1_boardofdirectors"),
    (("financial", "finance"), "sec3_issuerfinanposition"),
    (("securities", "instrument"), "sec5_informaboutsecurts1"),
    (("fee", "cost"), "sec6_sponsoradvisorfees"),
]


def infer_field_from_prompt(prompt: str) -> str:
    """Infer a field key from prompt keywords, falling back to the general issuer field."""
    prompt_lower = (prompt or "").lower()
    for keywords, field_key in KEYWORD_RULES:
        if any(keyword in prompt_lower for keyword in keywords):
            return field_key
    return DEFAULT_FIELD_KEY


def get_field_mode(field_key: str) -> AssistantMode:
    """Mode for a field; unknown fields use agent mode."""
    return FIELD_MODE_MAP.get(field_key, DEFAULT_MODE)


def get_field_label(field_key: str) -> str:
    """Human label for a field; unknown fields use the key itself."""
    return FIELD_LABELS.get(field_key, field_key)


def get_required_attributes(field_key: str) -> list[RequiredAttribute]:
    return REQUIRED_BUSINESS_ATTRIBUTES.get(field_key, [])


def get_field_descriptor(field_key: str) -> FieldDescriptor:
    """Registry view of one field."""
    return FieldDescriptor(
        field_key=field_key,
        section_label=get_field_label(field_key),
        mode=get_field_mode(field_key),
        required_business_attributes=get_required_attributes(field_key),
    )


def section_prefix(field_key: str) -> str:
    """Leading section token of a field key ("sec1_boardofdirectors" -> "sec1")."""
    return field_key.split("_")[0]
