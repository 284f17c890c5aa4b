"""Placeholder mappings from template markers to issuer/listing columns.

Templates reference record values as {{public.issuers.X}} or
{{public.listing.X}}. Only placeholders in FIELD_MAPPINGS are resolved;
anything else is left in the text untouched.
"""

import re
from typing import Any, Literal

from dateutil import parser as date_parser
from pydantic import BaseModel

Transformation = Literal["currency", "date_format", "percentage"]


class FieldMapping(BaseModel):
    placeholder: str
    source: Literal["issuers", "listing"]
    column: str
    data_type: Literal["text", "date", "number", "jsonb"] = "text"
    transformation: Transformation | None = None
    fallback: str | None = None


def _issuer(column: str, data_type: str = "text", **kwargs: Any) -> FieldMapping:
    return FieldMapping(
        placeholder=f"{{{{public.issuers.{column}}}}}", source="issuers", column=column, data_type=data_type, **kwargs
    )


def _listing(column: str, data_type: str = "text", placeholder_column: str | None = None, **kwargs: Any) -> FieldMapping:
    return FieldMapping(
        placeholder=f"{{{{public.listing.{placeholder_column or column}}}}}",
        source="listing",
        column=column,
        data_type=data_type,
        **kwargs,
    )


FIELD_MAPPINGS: list[FieldMapping] = [
    # Issuer information
    _issuer("issuer_name", fallback="[Issuer Name]"),
    _issuer("organization_name", fallback="[Organization Name]"),
    _issuer("incorporation_date", "date", transformation="date_format"),
    _issuer("company_registration_number", "number"),
    _issuer("registered_address"),
    _issuer("country"),
    _issuer("legal_structure"),
    _issuer("business_website"),
    _issuer("business_email"),
    _issuer("phone_number"),
    # Leadership
    _issuer("chief_executiveofficer"),
    _issuer("ceo_title"),
    _issuer("ceo_nationality"),
    _issuer("financial_director"),
    _issuer("fd_title"),
    _issuer("how_many_directors_total", "number"),
    # Business
    _issuer("business_overview"),
    _issuer("company_prospects"),
    _issuer("purpose_of_listing"),
    _issuer("plans_after_listing"),
    _issuer("use_of_proceeds"),
    _issuer("industry"),
    _issuer("recent_performance"),
    _issuer("accounts"),
    # Share capital
    _issuer("authorised_share_capital"),
    _issuer("shares_in_issue", "number"),
    _issuer("nominal_share_price"),
    _issuer("dividend_policy"),
    # Advisors
    _issuer("legal_advisors_name"),
    _issuer("legal_advisors_address"),
    _issuer("auditors_name"),
    _issuer("auditors_address"),
    # Listing
    _listing("instrumentname"),
    _listing("instrumentticker"),
    _listing("instrumentissuername"),
    _listing("instrumenttype"),
    _listing("instrumentcategory"),
    _listing("instrumentexchange"),
    # Misspelled marker found in stored templates
    _listing("instrumentexchange", placeholder_column="intrumentexchange"),
    _listing("exchangename"),
    _listing("instrumentsponsor"),
    _listing("instrumentsponsorname"),
    _listing("instrumentlistingdate", "date", transformation="date_format"),
    _listing("instrumentapprovaldate", "date", transformation="date_format"),
    _listing("instrumentlistingparticulardate", "date", transformation="date_format"),
    _listing("instrumentlistingprice", "number", transformation="currency"),
    _listing("instrumentcurrency"),
    _listing("isin"),
    _listing("nominalvalue"),
    # Securities
    _listing("instrumentsecuritiesissued", "number"),
    _listing("instrumentnosecuritiestobelisted", "number"),
    _listing("instrumentofferproceeds"),
    _listing("instrumentuseofproceeds"),
    _listing("instrumentpurposeoflisting"),
    _listing("instrumentdividendrights"),
    _listing("instrumentpreemptionrights"),
    # Costs and fees
    _listing("instrumentsponsorfees"),
    _listing("instrumentaccountinglegalfees"),
    _listing("instrumentexchangefees"),
    _listing("intrumentmarketingcosts"),
    _listing("instrumentannuallistingfee"),
    _listing("instrumentcommission", "number", transformation="percentage"),
]

MAPPINGS_BY_PLACEHOLDER: dict[str, FieldMapping] = {m.placeholder: m for m in FIELD_MAPPINGS}

_PLACEHOLDER_RE = re.compile(r"\{\{public\.(?:issuers|listing)\.\w+\}\}")


def transform_value(value: Any, transformation: Transformation | None = None) -> str:
    """
    Render a record value for a document.

    Args:
        value: Raw column value
        transformation: currency ("$1,234.50"), date_format ("January 5, 2024")
            or percentage ("2.50%")

    Returns:
        Rendered text, or "" for a missing value
    """
    if value is None or value == "":
        return ""

    if transformation == "currency":
        try:
            return f"${float(value):,.2f}"
        except (TypeError, ValueError):
            return str(value)

    if transformation == "date_format":
        try:
            parsed = date_parser.parse(str(value))
        except (ValueError, OverflowError):
            return str(value)
        return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"

    if transformation == "percentage":
        try:
            return f"{float(value):.2f}%"
        except (TypeError, ValueError):
            return str(value)

    return str(value)


def resolve_mapping(mapping: FieldMapping, listing: dict[str, Any] | None, issuer: dict[str, Any] | None) -> str:
    """Final text for one placeholder: transformed value, else fallback, else "[column]"."""
    record = listing if mapping.source == "listing" else issuer
    value = transform_value((record or {}).get(mapping.column), mapping.transformation)
    return value or mapping.fallback or f"[{mapping.column}]"


def resolve_placeholders(content: str, listing: dict[str, Any] | None, issuer: dict[str, Any] | None) -> str:
    """Substitute every mapped placeholder in content; unmapped markers are kept."""

    def _replace(match: re.Match) -> str:
        mapping = MAPPINGS_BY_PLACEHOLDER.get(match.group(0))
        if mapping is None:
            return match.group(0)
        return resolve_mapping(mapping, listing, issuer)

    return _PLACEHOLDER_RE.sub(_replace, content)
