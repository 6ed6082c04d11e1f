"""Domain services built on the repository contract."""

from .campaign import CampaignFaqService, CampaignResourceService, LeadInvestorService
from .countries import CountryService
from .currencies import CurrencyService
from .dropdowns import ManageDropdownService, validate_dropdown_type
from .email_templates import EmailTemplateService
from .fanout import FanOutCoordinator
from .language_resolution import LanguageResolver
from .languages import LanguageService
from .meta_settings import MetaSettingService
from .sliders import SliderService

__all__ = [
    "CampaignFaqService",
    "CampaignResourceService",
    "LeadInvestorService",
    "CountryService",
    "CurrencyService",
    "ManageDropdownService",
    "validate_dropdown_type",
    "EmailTemplateService",
    "FanOutCoordinator",
    "LanguageResolver",
    "LanguageService",
    "MetaSettingService",
    "SliderService",
]
