from datetime import date
from decimal import Decimal

import pytest

from models import (
    DEFAULT_BUSINESS_PLAN,
    LocationAnalysis,
    LocationCriteria,
    Partnership,
    PartnershipStatus,
    PedagogicalSector,
    TrainingModule,
)
from services.database import KeyValueStore
from services.repositories import STORAGE_KEYS, RecordNotFoundError, open_workspace


@pytest.fixture()
def store(tmp_path) -> KeyValueStore:
    return KeyValueStore.from_url(f"sqlite:///{tmp_path / 'studio.db'}", namespace="alice")


@pytest.fixture()
def workspace(store):
    return open_workspace("alice", store=store)


def _partnership(name: str) -> Partnership:
    return Partnership(company_name=name, contact_person="Contact")


def test_missing_values_fall_back_to_defaults(workspace) -> None:
    assert workspace.business_plan.load() == DEFAULT_BUSINESS_PLAN
    assert workspace.partnerships.list() == []
    assert workspace.questionnaire.load().is_started is False


def test_invalid_stored_value_falls_back_to_default(workspace, store) -> None:
    store.set(STORAGE_KEYS["business_plan"], {"financial_projections": "oops"})
    assert workspace.business_plan.load() == DEFAULT_BUSINESS_PLAN

    store.set(STORAGE_KEYS["partnerships"], {"not": "a list"})
    assert workspace.partnerships.list() == []


def test_single_record_round_trip(workspace) -> None:
    plan = DEFAULT_BUSINESS_PLAN.model_copy(update={"project_name": "EDP Lyon"})
    workspace.business_plan.save(plan)

    loaded = workspace.business_plan.load()
    assert loaded.project_name == "EDP Lyon"
    assert loaded.initial_investment == Decimal("100000")


def test_collection_crud(workspace) -> None:
    partnerships = workspace.partnerships
    first = partnerships.create(_partnership("Acme"))
    second = partnerships.create(_partnership("Béton SA"))
    assert len(partnerships.list()) == 2

    updated = partnerships.update(second.model_copy(update={"status": PartnershipStatus.ACTIF}))
    records = partnerships.list()
    assert len(records) == 2
    assert partnerships.get(second.id).status == PartnershipStatus.ACTIF
    assert partnerships.get(first.id) == first
    assert updated.id == second.id

    partnerships.delete(first.id)
    assert [record.id for record in partnerships.list()] == [second.id]


def test_unknown_ids_raise(workspace) -> None:
    with pytest.raises(RecordNotFoundError):
        workspace.partnerships.get("missing")
    with pytest.raises(RecordNotFoundError):
        workspace.partnerships.update(_partnership("Ghost"))
    with pytest.raises(RecordNotFoundError):
        workspace.partnerships.delete("missing")


def test_created_records_get_unique_ids(workspace) -> None:
    record = _partnership("Acme")
    first = workspace.partnerships.create(record)
    second = workspace.partnerships.create(record)
    assert first.id != second.id


def test_location_score_is_recomputed(workspace, store) -> None:
    analysis = LocationAnalysis(
        city_name="Lyon",
        region="Auvergne-Rhône-Alpes",
        criteria=LocationCriteria(population=90, industrial_presence=90),
        overall_score=0,
    )
    created = workspace.locations.create(analysis)
    assert created.overall_score > 50
    assert created.recommendation

    raw = store.get(STORAGE_KEYS["locations"])
    raw[0]["overall_score"] = 1
    store.set(STORAGE_KEYS["locations"], raw)
    assert workspace.locations.list()[0].overall_score == created.overall_score


def test_locations_are_ranked_by_score(workspace) -> None:
    workspace.locations.create(LocationAnalysis(city_name="Moyenne", region="R"))
    workspace.locations.create(
        LocationAnalysis(city_name="Forte", region="R", criteria=LocationCriteria(local_support=100))
    )
    assert [analysis.city_name for analysis in workspace.locations.ranked()] == ["Forte", "Moyenne"]


def test_embedded_collections_persist_in_their_parent(workspace) -> None:
    module = workspace.training_modules.create(
        TrainingModule(title="Maçonnerie", sector="Bâtiment", start_date=date(2025, 1, 6))
    )
    sector = workspace.pedagogical_sectors.create(PedagogicalSector(name="Bâtiment", students=10))

    assert workspace.training_plan.load().modules == [module]
    assert workspace.pedagogical_costs.load().sectors == [sector]

    workspace.training_modules.update(module.model_copy(update={"students": 8}))
    assert workspace.training_modules.get(module.id).students == 8

    workspace.pedagogical_sectors.delete(sector.id)
    assert workspace.pedagogical_costs.load().sectors == []
    with pytest.raises(RecordNotFoundError):
        workspace.training_modules.delete("missing")


def test_subscribers_are_notified_with_the_key(workspace) -> None:
    seen = []
    unsubscribe = workspace.partnerships.subscribe(seen.append)

    workspace.partnerships.create(_partnership("Acme"))
    assert seen == [STORAGE_KEYS["partnerships"]]

    unsubscribe()
    workspace.partnerships.create(_partnership("Béton SA"))
    assert len(seen) == 1


def test_workspace_subscription_covers_embedded_collections(workspace) -> None:
    seen = []
    unsubscribe = workspace.subscribe(seen.append)
    workspace.training_modules.create(
        TrainingModule(title="Sécurité", sector="Industrie", start_date=date(2025, 2, 3))
    )
    unsubscribe()
    workspace.business_plan.save(DEFAULT_BUSINESS_PLAN)

    assert seen == [STORAGE_KEYS["training_plan"]]


def test_backup_and_reset(workspace) -> None:
    workspace.partnerships.create(_partnership("Acme"))
    workspace.business_plan.save(DEFAULT_BUSINESS_PLAN)

    backup = workspace.backup()
    assert backup["namespace"] == "alice"
    assert set(backup["values"]) == {STORAGE_KEYS["partnerships"], STORAGE_KEYS["business_plan"]}
    assert backup["values"][STORAGE_KEYS["partnerships"]]["value"][0]["company_name"] == "Acme"

    workspace.reset_all()
    assert workspace.store.keys() == []
    assert workspace.partnerships.list() == []


def test_namespaces_are_isolated(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'shared.db'}"
    alice = open_workspace("alice", store=KeyValueStore.from_url(url, namespace="alice"))
    bob = open_workspace("bob", store=KeyValueStore.from_url(url, namespace="bob"))

    alice.partnerships.create(_partnership("Acme"))
    assert bob.partnerships.list() == []

    bob.reset_all()
    assert len(alice.partnerships.list()) == 1


def test_invalid_embedded_item_keeps_the_parent_and_valid_items(workspace, store) -> None:
    store.set(
        STORAGE_KEYS["pedagogical_costs"],
        {
            "overhead_rate": 40,
            "sectors": [
                {"id": "ok", "name": "Bâtiment", "students": 5},
                {"id": "bad", "name": "Industrie", "students": 0},
            ],
        },
    )

    costs = workspace.pedagogical_costs.load()
    assert costs.overhead_rate == Decimal("40")
    assert [sector.id for sector in costs.sectors] == ["ok"]
    assert workspace.pedagogical_costs.skipped_records == 1
    assert [sector.id for sector in workspace.pedagogical_sectors.list()] == ["ok"]


def test_invalid_training_module_is_skipped(workspace, store) -> None:
    store.set(
        STORAGE_KEYS["training_plan"],
        {"modules": [{"title": "Soudure", "sector": "Industrie", "start_date": "2025-03-03"}, {"title": ""}]},
    )

    assert [module.title for module in workspace.training_modules.list()] == ["Soudure"]
    assert workspace.training_plan.skipped_records == 1


def test_collection_counts_skipped_records(workspace, store) -> None:
    store.set(
        STORAGE_KEYS["partnerships"],
        [{"company_name": "Acme", "contact_person": "A"}, {"company_name": ""}, "garbage"],
    )

    assert [record.company_name for record in workspace.partnerships.list()] == ["Acme"]
    assert workspace.partnerships.skipped_records == 2

    store.set(STORAGE_KEYS["partnerships"], [{"company_name": "Acme", "contact_person": "A"}])
    workspace.partnerships.list()
    assert workspace.partnerships.skipped_records == 0


def test_duplicate_stored_ids_are_repaired_the_same_way_on_every_load(workspace, store) -> None:
    store.set(
        STORAGE_KEYS["partnerships"],
        [
            {"id": "same", "company_name": "Acme", "contact_person": "A"},
            {"id": "same", "company_name": "Béton SA", "contact_person": "B"},
        ],
    )

    first_ids = [record.id for record in workspace.partnerships.list()]
    assert first_ids == [record.id for record in workspace.partnerships.list()]
    assert first_ids[0] == "same"
    assert first_ids[1] != "same"

    second = workspace.partnerships.get(first_ids[1])
    assert second.company_name == "Béton SA"
    workspace.partnerships.update(second.model_copy(update={"status": PartnershipStatus.ACTIF}))
    assert [record["id"] for record in store.get(STORAGE_KEYS["partnerships"])] == first_ids

    workspace.partnerships.delete(first_ids[1])
    assert [record.company_name for record in workspace.partnerships.list()] == ["Acme"]


def test_duplicate_embedded_ids_are_repaired(workspace, store) -> None:
    store.set(
        STORAGE_KEYS["pedagogical_costs"],
        {
            "sectors": [
                {"id": "dup", "name": "Bâtiment", "students": 5},
                {"id": "dup", "name": "Industrie", "students": 6},
            ]
        },
    )

    ids = [sector.id for sector in workspace.pedagogical_sectors.list()]
    assert len(set(ids)) == 2
    workspace.pedagogical_sectors.delete(ids[1])
    assert [sector.name for sector in workspace.pedagogical_sectors.list()] == ["Bâtiment"]
