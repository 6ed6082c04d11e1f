"""
Application wiring.

``build_container`` is called once per process: it configures logging,
binds every entity to the configured backend and hands the resulting
repositories to the domain services.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from pymongo.database import Database
from sqlalchemy.engine import Engine

from admin_core.db.registry import RepositoryBindings, build_bindings
from admin_core.services import (
    CampaignFaqService,
    CountryService,
    CurrencyService,
    EmailTemplateService,
    FanOutCoordinator,
    LanguageResolver,
    LanguageService,
    LeadInvestorService,
    ManageDropdownService,
    MetaSettingService,
    SliderService,
)
from admin_core.utils.cache import CachePort, InMemoryTagCache, RedisTagCache
from admin_core.utils.logging_config import configure_logging
from admin_core.utils.settings import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    settings: Settings
    bindings: RepositoryBindings
    cache: CachePort
    resolver: LanguageResolver
    fanout: FanOutCoordinator
    languages: LanguageService
    currencies: CurrencyService
    countries: CountryService
    manage_dropdowns: ManageDropdownService
    email_templates: EmailTemplateService
    meta_settings: MetaSettingService
    sliders: SliderService
    campaign_faqs: CampaignFaqService
    lead_investors: LeadInvestorService


def build_cache(settings: Settings) -> CachePort:
    if settings.cache_backend == "redis":
        if not settings.redis_url:
            raise ValueError("REDIS_URL is not configured")
        logger.info("Using Redis response cache")
        return RedisTagCache.from_url(settings.redis_url, default_ttl=settings.cache_ttl_seconds)
    return InMemoryTagCache(default_ttl=settings.cache_ttl_seconds)


def build_container(
    settings: Optional[Settings] = None,
    *,
    engine: Optional[Engine] = None,
    mongo_database: Optional[Database] = None,
    cache: Optional[CachePort] = None,
) -> Container:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    bindings = build_bindings(settings, engine=engine, mongo_database=mongo_database)
    if cache is None:
        cache = build_cache(settings)

    resolver = LanguageResolver(bindings.languages)
    fanout = FanOutCoordinator(resolver)
    logger.info(f"Admin core ready on {settings.database_type.value} backend")
    return Container(
        settings=settings,
        bindings=bindings,
        cache=cache,
        resolver=resolver,
        fanout=fanout,
        languages=LanguageService(bindings.languages, cache),
        currencies=CurrencyService(bindings.currencies, cache),
        countries=CountryService(bindings.countries, cache),
        manage_dropdowns=ManageDropdownService(bindings.manage_dropdowns, resolver, fanout, cache),
        email_templates=EmailTemplateService(bindings.email_templates, resolver, fanout, cache),
        meta_settings=MetaSettingService(bindings.meta_settings, resolver, fanout, cache),
        sliders=SliderService(bindings.sliders, resolver, fanout, cache),
        campaign_faqs=CampaignFaqService(bindings.campaign_faqs, cache),
        lead_investors=LeadInvestorService(bindings.lead_investors, cache),
    )
