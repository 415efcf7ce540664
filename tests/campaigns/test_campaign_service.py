from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.activation_system.activation_system.campaigns.service import CampaignService
from src.activation_system.activation_system.core.exceptions import ValidationError
from src.activation_system.activation_system.database.memory_store import InMemoryDocumentStore


def test_create_campaign_is_listed_with_lookup():
    svc = CampaignService(InMemoryDocumentStore())

    new_id = svc.create_campaign(name="  Night Market ", location=" ", now=datetime(2024, 2, 1, 10, 0))

    [campaign] = svc.list_campaigns()
    assert campaign.campaign_id == new_id
    assert campaign.name == "Night Market"
    assert campaign.location is None
    assert campaign.status == "active"
    assert campaign.created_at == datetime(2024, 2, 1, 10, 0)
    assert svc.name_lookup() == {new_id: "Night Market"}


def test_create_campaign_requires_name():
    svc = CampaignService(InMemoryDocumentStore())

    with pytest.raises(ValidationError):
        svc.create_campaign(name="   ")


def test_count_created_since(seeded_store):
    svc = CampaignService(seeded_store)

    assert svc.count_created_since(datetime(2024, 1, 1)) == 1
    assert svc.count_created_since(datetime(2023, 10, 1)) == 2
    assert svc.count_created_since(datetime(2024, 1, 1, tzinfo=timezone.utc)) == 1


def test_campaign_without_created_at_is_not_recent():
    store = InMemoryDocumentStore({"campaigns": [{"id": "c9", "name": "Undated"}]})

    assert CampaignService(store).count_created_since(datetime(2000, 1, 1)) == 0
