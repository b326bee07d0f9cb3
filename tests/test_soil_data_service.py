from uuid import uuid4

import duckdb
import pytest

from backend.errors import NotFoundError, RangeViolation, UnexpectedFailure
from backend.models.query import resolve_query
from backend.models.soil_data import SoilDataCreate, SoilDataUpdate
from backend.services.soil_data import SoilDataService


def payload(plot_id, **overrides):
    values = {"plotId": plot_id, "moisture": 45.67, "pH": 7.2, "temperature": 23.5}
    values.update(overrides)
    return SoilDataCreate.model_validate(values)


def count(service):
    return service.list(resolve_query()).total


def test_create_and_get_round_trip(service, plot):
    created = service.create(payload(plot.id))

    fetched = service.get(created.id)
    assert fetched.plot_id == plot.id
    assert (fetched.moisture, fetched.ph, fetched.temperature) == (45.67, 7.2, 23.5)
    assert fetched.plot.name == plot.name
    assert fetched.timestamp is not None


def test_create_with_unknown_plot_persists_nothing(service):
    missing = uuid4()
    with pytest.raises(NotFoundError) as excinfo:
        service.create(payload(missing))
    assert str(missing) in str(excinfo.value)
    assert count(service) == 0


def test_create_out_of_range_persists_nothing(service, plot):
    with pytest.raises(RangeViolation):
        service.create(payload(plot.id, temperature=120))
    assert count(service) == 0


def test_rejected_update_leaves_record_untouched(service, plot):
    created = service.create(payload(plot.id))

    with pytest.raises(RangeViolation):
        service.update(created.id, SoilDataUpdate(moisture=150))

    assert service.get(created.id).moisture == 45.67


def test_update_applies_only_supplied_fields(service, plot):
    created = service.create(payload(plot.id))

    updated = service.update(created.id, SoilDataUpdate.model_validate({"pH": 6.8}))
    assert updated.ph == 6.8
    assert updated.moisture == 45.67
    assert updated.temperature == 23.5
    assert updated.timestamp == created.timestamp


def test_update_does_not_revalidate_stored_values(service, repository, plot, make_row):
    row = make_row(plot.id, moisture=120.0)
    repository.insert(row)

    updated = service.update(row["id"], SoilDataUpdate(temperature=11.0))
    assert updated.temperature == 11.0
    assert updated.moisture == 120.0


def test_update_checks_plot_only_when_it_changes(service, connection, plot):
    created = service.create(payload(plot.id))
    connection.execute("DELETE FROM plots")

    # Same plot id: no existence check even though the plot is gone.
    updated = service.update(created.id, SoilDataUpdate(plot_id=plot.id, moisture=10.0))
    assert updated.moisture == 10.0

    with pytest.raises(NotFoundError):
        service.update(created.id, SoilDataUpdate(plot_id=uuid4()))


def test_update_missing_record(service):
    with pytest.raises(NotFoundError):
        service.update(uuid4(), SoilDataUpdate(moisture=10.0))


def test_delete_missing_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.delete(uuid4())


def test_delete_existing(service, plot):
    created = service.create(payload(plot.id))
    service.delete(created.id)
    with pytest.raises(NotFoundError):
        service.get(created.id)


def test_bulk_create_rejects_whole_batch_on_range_violation(service, plot):
    batch = [payload(plot.id), payload(plot.id, pH=6.1), payload(plot.id, pH=15), payload(plot.id)]
    with pytest.raises(RangeViolation):
        service.bulk_create(batch)
    assert count(service) == 0


def test_bulk_create_rejects_whole_batch_on_missing_plot(service, plot):
    batch = [payload(plot.id), payload(uuid4())]
    with pytest.raises(NotFoundError):
        service.bulk_create(batch)
    assert count(service) == 0


def test_bulk_create_persists_every_record(service, plot):
    created = service.bulk_create([payload(plot.id, moisture=float(value)) for value in range(5)])
    assert len(created) == 5
    assert count(service) == 5


def test_list_pages_and_envelope(service, plot):
    service.bulk_create([payload(plot.id) for _ in range(7)])

    page = service.list(resolve_query(page=2, limit=5))
    assert page.total == 7
    assert page.page == 2
    assert page.limit == 5
    assert len(page.data) == 2


class BrokenRepository:
    def list(self, query_filter, pagination):
        raise duckdb.IOException("disk is on fire")

    def get_by_id(self, record_id):
        raise duckdb.IOException("disk is on fire")


def test_datastore_faults_become_unexpected_failures(plots):
    service = SoilDataService(BrokenRepository(), plots)
    record_id = uuid4()

    with pytest.raises(UnexpectedFailure) as excinfo:
        service.get(record_id)
    assert excinfo.value.operation == "fetching"
    assert excinfo.value.record_id == record_id
    assert "disk" not in str(excinfo.value)

    with pytest.raises(UnexpectedFailure):
        service.list(resolve_query())
