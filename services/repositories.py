"""Typed repositories over the key-value store, one per stored record type.

Pages never touch the store directly: they load and save validated models
through these repositories and can subscribe to be told when a key changes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Set, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from calc import DashboardSources, score_location
from models import (
    DEFAULT_BUSINESS_PLAN,
    DEFAULT_PEDAGOGICAL_COSTS,
    DEFAULT_RENTABILITY_INPUTS,
    BusinessPlan,
    LocationAnalysis,
    Partnership,
    PedagogicalCostData,
    PedagogicalSector,
    QuestionnaireState,
    RecordModel,
    RentabilityInputs,
    SubsidyApplication,
    TrainingModule,
    TrainingPlan,
    new_record_id,
)

from .database import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEYS: Dict[str, str] = {
    "business_plan": "business_plan_data",
    "rentability": "rentability_data",
    "locations": "location_analyses",
    "partnerships": "partnerships_data",
    "subsidies": "subsidy_applications",
    "training_plan": "training_plan_data",
    "pedagogical_costs": "pedagogical_costs_data",
    "questionnaire": "questionnaire_state",
}

ModelT = TypeVar("ModelT", bound=BaseModel)
RecordT = TypeVar("RecordT", bound=RecordModel)
Listener = Callable[[str], None]


class RecordNotFoundError(LookupError):
    """Raised when a collection has no record with the requested id."""

    def __init__(self, key: str, record_id: str) -> None:
        super().__init__(f"{key}: aucun enregistrement avec l'identifiant {record_id!r}")
        self.key = key
        self.record_id = record_id


class _Observable:
    key: str

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; it is called with the storage key after every change."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.key)


# --- list helpers shared by stored and embedded collections -------------------------


def _index_of(records: List[RecordT], record_id: str) -> int:
    for index, record in enumerate(records):
        if record.id == record_id:
            return index
    return -1


def _with_unique_id(records: List[RecordT], record: RecordT) -> RecordT:
    """Give a newly created *record* a fresh id when its own is already taken."""

    taken = {existing.id for existing in records}
    if record.id and record.id not in taken:
        return record
    new_id = new_record_id()
    while new_id in taken:
        new_id = new_record_id()
    return record.model_copy(update={"id": new_id})


def _repaired_id(taken: Set[str], record: RecordT, position: int) -> RecordT:
    """Replace a missing or duplicate stored id by one derived from the list position.

    The replacement only depends on the stored list, so every load of the same
    data yields the same ids and the repaired ids are persisted on the next write.
    """

    if record.id and record.id not in taken:
        return record
    base = record.id or "record"
    candidate = f"{base}-{position}"
    suffix = 1
    while candidate in taken:
        suffix += 1
        candidate = f"{base}-{position}-{suffix}"
    return record.model_copy(update={"id": candidate})


def _validate_items(key: str, model: Type[RecordT], raw: Any) -> Tuple[List[RecordT], int]:
    """Validate stored items one by one; return the valid records and the number skipped."""

    if not isinstance(raw, list):
        logger.warning("Ignoring non-list value stored under %s", key)
        return [], 0
    records: List[RecordT] = []
    taken: Set[str] = set()
    skipped = 0
    for position, item in enumerate(raw):
        try:
            record = model.model_validate(item)
        except ValidationError as exc:
            logger.warning("Skipping invalid record in %s: %s", key, exc)
            skipped += 1
            continue
        record = _repaired_id(taken, record, position)
        taken.add(record.id)
        records.append(record)
    return records, skipped


class Repository(_Observable, Generic[ModelT]):
    """A single stored record falling back to a default when absent or invalid.

    ``item_fields`` names the list fields holding records of their own; their
    items are validated one by one so a bad item never discards the others.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        model: Type[ModelT],
        default_factory: Callable[[], ModelT],
        item_fields: Optional[Mapping[str, Type[RecordModel]]] = None,
    ) -> None:
        super().__init__()
        self.store = store
        self.key = key
        self.model = model
        self.default_factory = default_factory
        self.item_fields = dict(item_fields or {})
        self.skipped_records = 0

    def load(self) -> ModelT:
        self.skipped_records = 0
        raw = self.store.get(self.key)
        if raw is None:
            return self.default_factory()
        if isinstance(raw, dict):
            raw = dict(raw)
            for field_name, item_model in self.item_fields.items():
                if field_name not in raw:
                    continue
                items, skipped = _validate_items(f"{self.key}.{field_name}", item_model, raw[field_name])
                raw[field_name] = [item.model_dump(mode="json") for item in items]
                self.skipped_records += skipped
        try:
            return self.model.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Ignoring invalid stored value for %s: %s", self.key, exc)
            return self.default_factory()

    def save(self, record: ModelT) -> ModelT:
        self.store.set(self.key, record.model_dump(mode="json"))
        self._notify()
        return record

    def reset(self) -> None:
        self.store.delete(self.key)
        self._notify()


class CollectionRepository(_Observable, Generic[RecordT]):
    """A stored list of records addressed by their unique ``id``."""

    def __init__(self, store: KeyValueStore, key: str, model: Type[RecordT]) -> None:
        super().__init__()
        self.store = store
        self.key = key
        self.model = model
        self.skipped_records = 0

    def _prepare(self, record: RecordT) -> RecordT:
        return record

    def list(self) -> List[RecordT]:
        """Valid stored records; :attr:`skipped_records` counts the invalid ones left out."""

        records, self.skipped_records = _validate_items(self.key, self.model, self.store.get(self.key, []))
        return [self._prepare(record) for record in records]

    def _write(self, records: List[RecordT]) -> None:
        self.store.set(self.key, [record.model_dump(mode="json") for record in records])
        self._notify()

    def get(self, record_id: str) -> RecordT:
        records = self.list()
        index = _index_of(records, record_id)
        if index < 0:
            raise RecordNotFoundError(self.key, record_id)
        return records[index]

    def create(self, record: RecordT) -> RecordT:
        records = self.list()
        record = self._prepare(_with_unique_id(records, record))
        records.append(record)
        self._write(records)
        logger.info("Created %s record %s", self.key, record.id)
        return record

    def update(self, record: RecordT) -> RecordT:
        records = self.list()
        index = _index_of(records, record.id)
        if index < 0:
            raise RecordNotFoundError(self.key, record.id)
        record = self._prepare(record)
        records[index] = record
        self._write(records)
        logger.info("Updated %s record %s", self.key, record.id)
        return record

    def delete(self, record_id: str) -> None:
        records = self.list()
        index = _index_of(records, record_id)
        if index < 0:
            raise RecordNotFoundError(self.key, record_id)
        del records[index]
        self._write(records)
        logger.info("Deleted %s record %s", self.key, record_id)

    def reset(self) -> None:
        self.store.delete(self.key)
        self._notify()


class LocationRepository(CollectionRepository[LocationAnalysis]):
    """Location analyses whose score is derived again on every load and save."""

    def _prepare(self, record: LocationAnalysis) -> LocationAnalysis:
        return score_location(record)

    def ranked(self) -> List[LocationAnalysis]:
        return sorted(self.list(), key=lambda analysis: analysis.overall_score, reverse=True)


class EmbeddedCollection(Generic[RecordT]):
    """CRUD access to a list field of a record stored by a :class:`Repository`."""

    def __init__(self, parent: Repository[Any], field_name: str) -> None:
        self.parent = parent
        self.field_name = field_name

    @property
    def key(self) -> str:
        return f"{self.parent.key}.{self.field_name}"

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.parent.subscribe(listener)

    def list(self) -> List[RecordT]:
        return list(getattr(self.parent.load(), self.field_name))

    def _write(self, records: List[RecordT]) -> None:
        container = self.parent.load()
        self.parent.save(container.model_copy(update={self.field_name: records}))

    def get(self, record_id: str) -> RecordT:
        records = self.list()
        index = _index_of(records, record_id)
        if index < 0:
            raise RecordNotFoundError(self.key, record_id)
        return records[index]

    def create(self, record: RecordT) -> RecordT:
        records = self.list()
        record = _with_unique_id(records, record)
        records.append(record)
        self._write(records)
        logger.info("Created %s record %s", self.key, record.id)
        return record

    def update(self, record: RecordT) -> RecordT:
        records = self.list()
        index = _index_of(records, record.id)
        if index < 0:
            raise RecordNotFoundError(self.key, record.id)
        records[index] = record
        self._write(records)
        logger.info("Updated %s record %s", self.key, record.id)
        return record

    def delete(self, record_id: str) -> None:
        records = self.list()
        index = _index_of(records, record_id)
        if index < 0:
            raise RecordNotFoundError(self.key, record_id)
        del records[index]
        self._write(records)
        logger.info("Deleted %s record %s", self.key, record_id)


@dataclass
class Workspace:
    """Every repository of one user, sharing a namespaced store."""

    store: KeyValueStore
    business_plan: Repository[BusinessPlan]
    rentability: Repository[RentabilityInputs]
    locations: LocationRepository
    partnerships: CollectionRepository[Partnership]
    subsidies: CollectionRepository[SubsidyApplication]
    training_plan: Repository[TrainingPlan]
    training_modules: EmbeddedCollection[TrainingModule]
    pedagogical_costs: Repository[PedagogicalCostData]
    pedagogical_sectors: EmbeddedCollection[PedagogicalSector]
    questionnaire: Repository[QuestionnaireState]

    @classmethod
    def open(cls, store: KeyValueStore) -> "Workspace":
        training_plan = Repository(
            store,
            STORAGE_KEYS["training_plan"],
            TrainingPlan,
            TrainingPlan,
            item_fields={"modules": TrainingModule},
        )
        pedagogical_costs = Repository(
            store,
            STORAGE_KEYS["pedagogical_costs"],
            PedagogicalCostData,
            lambda: DEFAULT_PEDAGOGICAL_COSTS.model_copy(deep=True),
            item_fields={"sectors": PedagogicalSector},
        )
        return cls(
            store=store,
            business_plan=Repository(
                store,
                STORAGE_KEYS["business_plan"],
                BusinessPlan,
                lambda: DEFAULT_BUSINESS_PLAN.model_copy(deep=True),
            ),
            rentability=Repository(
                store,
                STORAGE_KEYS["rentability"],
                RentabilityInputs,
                lambda: DEFAULT_RENTABILITY_INPUTS.model_copy(deep=True),
            ),
            locations=LocationRepository(store, STORAGE_KEYS["locations"], LocationAnalysis),
            partnerships=CollectionRepository(store, STORAGE_KEYS["partnerships"], Partnership),
            subsidies=CollectionRepository(store, STORAGE_KEYS["subsidies"], SubsidyApplication),
            training_plan=training_plan,
            training_modules=EmbeddedCollection(training_plan, "modules"),
            pedagogical_costs=pedagogical_costs,
            pedagogical_sectors=EmbeddedCollection(pedagogical_costs, "sectors"),
            questionnaire=Repository(
                store, STORAGE_KEYS["questionnaire"], QuestionnaireState, QuestionnaireState
            ),
        )

    def _repositories(self) -> List[Any]:
        return [
            self.business_plan,
            self.rentability,
            self.locations,
            self.partnerships,
            self.subsidies,
            self.training_plan,
            self.pedagogical_costs,
            self.questionnaire,
        ]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Subscribe *listener* to every repository of the workspace."""

        unsubscribers = [repository.subscribe(listener) for repository in self._repositories()]

        def unsubscribe() -> None:
            for unsubscribe_one in unsubscribers:
                unsubscribe_one()

        return unsubscribe

    def dashboard_sources(self) -> DashboardSources:
        return DashboardSources(
            business_plan=self.business_plan.load(),
            rentability=self.rentability.load(),
            training_plan=self.training_plan.load(),
            pedagogical_costs=self.pedagogical_costs.load(),
            partnerships=self.partnerships.list(),
            subsidies=self.subsidies.list(),
            questionnaire=self.questionnaire.load(),
        )

    def backup(self) -> Dict[str, Any]:
        return self.store.backup_blob()

    def reset_all(self) -> None:
        for repository in self._repositories():
            repository.reset()
        logger.info("Reset all stored data for namespace %s", self.store.namespace)


def open_workspace(namespace: str, *, store: Optional[KeyValueStore] = None) -> Workspace:
    """Return the workspace of *namespace*, on the default engine unless *store* is given."""

    return Workspace.open(store or KeyValueStore(namespace=namespace))


__all__ = [
    "CollectionRepository",
    "EmbeddedCollection",
    "LocationRepository",
    "RecordNotFoundError",
    "Repository",
    "STORAGE_KEYS",
    "Workspace",
    "open_workspace",
]
