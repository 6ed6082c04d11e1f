import pytest

from admin_core.db import schemas
from admin_core.errors import NotFoundError


def _investor(name="Ada Capital"):
    return schemas.LeadInvestorCreate(
        investor_photo="https://cdn.example.com/ada.png",
        name=name,
        investor_type="Angel",
        bio="Early-stage investor",
    )


def test_records_are_scoped_to_their_campaign(container):
    container.lead_investors.create("equity-1", _investor())
    container.lead_investors.create("equity-2", _investor("Other"))

    assert [i.name for i in container.lead_investors.list_for_campaign("equity-1")] == ["Ada Capital"]


def test_campaign_list_cache_is_dropped_on_write(container):
    container.lead_investors.create("equity-1", _investor())
    assert len(container.lead_investors.list_for_campaign("equity-1")) == 1

    container.bindings.lead_investors.insert({**_investor("Hidden").model_dump(), "equity_id": "equity-1"})
    assert len(container.lead_investors.list_for_campaign("equity-1")) == 1

    container.lead_investors.create("equity-1", _investor("Third"))
    assert len(container.lead_investors.list_for_campaign("equity-1")) == 3


def test_get_requires_matching_campaign(container):
    investor = container.lead_investors.create("equity-1", _investor())
    assert container.lead_investors.get("equity-1", investor.public_id).name == "Ada Capital"
    with pytest.raises(NotFoundError):
        container.lead_investors.get("equity-2", investor.public_id)


def test_faq_update_and_delete(container):
    faq = container.campaign_faqs.create(
        "equity-1", schemas.CampaignFaqCreate(custom_question="Minimum ticket?", custom_answer="100 EUR")
    )
    assert container.campaign_faqs.list_for_campaign("equity-1")[0].custom_answer == "100 EUR"

    updated = container.campaign_faqs.update(
        "equity-1", faq.public_id, schemas.CampaignFaqUpdate(custom_answer="250 EUR")
    )
    assert updated.custom_answer == "250 EUR"
    assert updated.custom_question == "Minimum ticket?"
    assert container.campaign_faqs.list_for_campaign("equity-1")[0].custom_answer == "250 EUR"

    assert container.campaign_faqs.delete("equity-1", faq.public_id) is True
    assert container.campaign_faqs.list_for_campaign("equity-1") == []
