"""
Pydantic schemas for every entity, re-exported for `from admin_core.db import schemas`.
"""

from .common import LanguageSummary, LanguageRef
from .languages import LanguageBase, LanguageCreate, LanguageUpdate, Language
from .currencies import CurrencyBase, CurrencyCreate, CurrencyUpdate, Currency
from .countries import CountryBase, CountryCreate, CountryUpdate, Country
from .dropdowns import ManageDropdownCreate, ManageDropdownUpdate, ManageDropdown, normalize_dropdown_type
from .email_templates import EmailTemplateContent, EmailTemplateCreate, EmailTemplateUpdate, EmailTemplate
from .meta_settings import MetaSettingContent, MetaSettingCreate, MetaSettingUpdate, MetaSetting
from .sliders import SliderContent, SliderCreate, SliderUpdate, Slider
from .campaign import (
    CampaignFaqBase,
    CampaignFaqCreate,
    CampaignFaqUpdate,
    CampaignFaq,
    LeadInvestorBase,
    LeadInvestorCreate,
    LeadInvestorUpdate,
    LeadInvestor,
)

__all__ = [
    "LanguageSummary",
    "LanguageRef",
    # languages
    "LanguageBase",
    "LanguageCreate",
    "LanguageUpdate",
    "Language",
    # currencies / countries
    "CurrencyBase",
    "CurrencyCreate",
    "CurrencyUpdate",
    "Currency",
    "CountryBase",
    "CountryCreate",
    "CountryUpdate",
    "Country",
    # language-scoped
    "ManageDropdownCreate",
    "ManageDropdownUpdate",
    "ManageDropdown",
    "normalize_dropdown_type",
    "EmailTemplateContent",
    "EmailTemplateCreate",
    "EmailTemplateUpdate",
    "EmailTemplate",
    "MetaSettingContent",
    "MetaSettingCreate",
    "MetaSettingUpdate",
    "MetaSetting",
    "SliderContent",
    "SliderCreate",
    "SliderUpdate",
    "Slider",
    # campaign sub-resources
    "CampaignFaqBase",
    "CampaignFaqCreate",
    "CampaignFaqUpdate",
    "CampaignFaq",
    "LeadInvestorBase",
    "LeadInvestorCreate",
    "LeadInvestorUpdate",
    "LeadInvestor",
]
