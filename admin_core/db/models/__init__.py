"""
SQLAlchemy models for the relational backend.

Exposes `Base`, `now_utc`, and every ORM class.
"""

from .base import Base, now_utc  # re-export

from .languages import Language
from .currencies import Currency
from .countries import Country
from .dropdowns import ManageDropdown
from .email_templates import EmailTemplate
from .meta_settings import MetaSetting
from .sliders import Slider
from .campaign import CampaignFaq, LeadInvestor

__all__ = [
    # base
    "Base",
    "now_utc",
    # reference data
    "Language",
    "Currency",
    "Country",
    # language-scoped
    "ManageDropdown",
    "EmailTemplate",
    "MetaSetting",
    "Slider",
    # campaign sub-resources
    "CampaignFaq",
    "LeadInvestor",
]
