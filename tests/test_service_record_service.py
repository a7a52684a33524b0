"""Tests for the service record workflow: validation order, pricing and merges."""

from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio

from waste_collection_api.app.core.errors import (
    CapacityExceededError,
    NotFoundError,
    ValidationError,
)
from waste_collection_api.app.schemas.service_record import (
    ServiceRecordCreate,
    ServiceRecordUpdate,
)
from waste_collection_api.app.services.service_record_service import ServiceRecordService


def make_record(client_row, vehicle_row, worker_row, volume):
    return ServiceRecordCreate(
        client_id=client_row["id"],
        vehicle_id=vehicle_row["id"],
        worker_id=worker_row["id"],
        date=date(2025, 3, 14),
        volume_m3=Decimal(volume),
    )


@pytest.fixture
def service(store):
    return ServiceRecordService(store)


class TestCreateServiceRecord:

    @pytest.mark.asyncio
    async def test_cost_is_volume_times_rate(self, service, client_row, vehicle_row, worker_row):
        record = await service.create_service_record(make_record(client_row, vehicle_row, worker_row, "15"))

        assert record.cost == Decimal("82.50")
        assert str(record.cost) == "82.50"
        assert record.client.id == client_row["id"]
        assert record.vehicle.plate == "4821-KLM"
        assert record.worker.name == "Lucía Torres"

    @pytest.mark.asyncio
    async def test_volume_over_capacity_is_rejected(self, service, store, client_row, vehicle_row, worker_row):
        await service.create_service_record(make_record(client_row, vehicle_row, worker_row, "15"))

        with pytest.raises(CapacityExceededError) as excinfo:
            await service.create_service_record(make_record(client_row, vehicle_row, worker_row, "25"))

        assert excinfo.value.volume == Decimal("25")
        assert excinfo.value.capacity == Decimal("20")
        assert "25" in str(excinfo.value) and "20" in str(excinfo.value)
        assert len(store.find_all("service_records")) == 1

    @pytest.mark.asyncio
    async def test_volume_equal_to_capacity_is_accepted(self, service, client_row, vehicle_row, worker_row):
        record = await service.create_service_record(make_record(client_row, vehicle_row, worker_row, "20"))
        assert record.cost == Decimal("110.00")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("volume", ["0", "-1", "-0.01"])
    async def test_non_positive_volume_is_rejected(self, service, store, client_row, vehicle_row, worker_row, volume):
        with pytest.raises(ValidationError):
            await service.create_service_record(make_record(client_row, vehicle_row, worker_row, volume))
        assert store.find_all("service_records") == []

    @pytest.mark.asyncio
    async def test_volume_is_checked_before_references(self, service):
        data = ServiceRecordCreate(client_id=99, vehicle_id=99, worker_id=99, date=date(2025, 1, 1), volume_m3=Decimal("0"))
        with pytest.raises(ValidationError) as excinfo:
            await service.create_service_record(data)
        assert not isinstance(excinfo.value, CapacityExceededError)

    @pytest.mark.asyncio
    async def test_capacity_is_checked_before_client(self, service, vehicle_row, worker_row):
        data = ServiceRecordCreate(
            client_id=999, vehicle_id=vehicle_row["id"], worker_id=worker_row["id"],
            date=date(2025, 1, 1), volume_m3=Decimal("30"),
        )
        with pytest.raises(CapacityExceededError):
            await service.create_service_record(data)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["vehicle", "client", "worker"])
    async def test_missing_reference_names_the_entity(self, service, store, client_row, vehicle_row, worker_row, missing):
        ids = {"client": client_row["id"], "vehicle": vehicle_row["id"], "worker": worker_row["id"]}
        ids[missing] = 12345
        data = ServiceRecordCreate(
            client_id=ids["client"], vehicle_id=ids["vehicle"], worker_id=ids["worker"],
            date=date(2025, 1, 1), volume_m3=Decimal("5"),
        )

        with pytest.raises(NotFoundError) as excinfo:
            await service.create_service_record(data)

        assert excinfo.value.entity == missing
        assert excinfo.value.identifier == 12345
        assert missing.capitalize() in str(excinfo.value)
        assert store.find_all("service_records") == []


    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["vehicle", "client", "worker"])
    async def test_reference_beyond_64_bits_is_missing(self, service, store, client_row, vehicle_row, worker_row, missing):
        ids = {"client": client_row["id"], "vehicle": vehicle_row["id"], "worker": worker_row["id"]}
        ids[missing] = 2**63
        data = ServiceRecordCreate(
            client_id=ids["client"], vehicle_id=ids["vehicle"], worker_id=ids["worker"],
            date=date(2025, 1, 1), volume_m3=Decimal("5"),
        )

        with pytest.raises(NotFoundError) as excinfo:
            await service.create_service_record(data)

        assert excinfo.value.entity == missing
        assert excinfo.value.identifier == 2**63
        assert store.find_all("service_records") == []


class TestCostRounding:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "rate, volume, expected",
        [
            ("3.756", "10", "37.56"),
            ("2.005", "5", "10.03"),
            ("1.004", "1", "1.00"),
            ("0.125", "1", "0.13"),
        ],
    )
    async def test_cost_rounds_half_up_to_cents(self, service, store, vehicle_row, worker_row, rate, volume, expected):
        client = store.create(
            "clients",
            {"name": "Clinica Sur", "type": "HEALTH", "address": "Calle 3", "rate_per_m3": Decimal(rate)},
        )
        record = await service.create_service_record(make_record(client, vehicle_row, worker_row, volume))

        assert str(record.cost) == expected
        assert store.find_by_id("service_records", record.id)["cost"] == expected

    @pytest.mark.asyncio
    async def test_long_rate_is_rounded_once(self, service, store, vehicle_row, worker_row):
        client = store.create(
            "clients",
            {"name": "Hostal Luna", "type": "HOTEL", "address": "Calle 9", "rate_per_m3": Decimal("10.0249999999999999999999999999")},
        )
        record = await service.create_service_record(make_record(client, vehicle_row, worker_row, "1"))

        assert str(record.cost) == "10.02"
        assert store.find_by_id("service_records", record.id)["cost"] == "10.02"


class TestUpdateServiceRecord:

    @pytest_asyncio.fixture
    async def record(self, service, client_row, vehicle_row, worker_row):
        return await service.create_service_record(make_record(client_row, vehicle_row, worker_row, "15"))

    @pytest.mark.asyncio
    async def test_missing_record(self, service):
        with pytest.raises(NotFoundError) as excinfo:
            await service.update_service_record(777, ServiceRecordUpdate(volume_m3=Decimal("1")))
        assert excinfo.value.entity == "service record"

    @pytest.mark.asyncio
    async def test_volume_change_recomputes_cost(self, service, record):
        updated = await service.update_service_record(record.id, ServiceRecordUpdate(volume_m3=Decimal("10")))
        assert updated.cost == Decimal("55.00")
        assert updated.date == record.date

    @pytest.mark.asyncio
    async def test_volume_is_rechecked_against_existing_vehicle(self, service, store, record):
        with pytest.raises(CapacityExceededError):
            await service.update_service_record(record.id, ServiceRecordUpdate(volume_m3=Decimal("21")))
        assert store.find_by_id("service_records", record.id)["volume_m3"] == "15"

    @pytest.mark.asyncio
    async def test_vehicle_change_rechecks_existing_volume(self, service, store, record):
        small = store.create(
            "vehicles",
            {"plate": "1111-AAA", "max_capacity_m3": Decimal("10"), "fuel_consumption": Decimal("0.2")},
        )
        with pytest.raises(CapacityExceededError) as excinfo:
            await service.update_service_record(record.id, ServiceRecordUpdate(vehicle_id=small["id"]))
        assert excinfo.value.capacity == Decimal("10")

    @pytest.mark.asyncio
    async def test_update_without_overrides_revalidates_stored_values(self, service, store, record, vehicle_row):
        # Shrink the vehicle underneath the stored record.
        store.update("vehicles", vehicle_row["id"], {"max_capacity_m3": Decimal("12")})

        with pytest.raises(CapacityExceededError):
            await service.update_service_record(record.id, ServiceRecordUpdate(date=date(2025, 4, 1)))

    @pytest.mark.asyncio
    async def test_client_change_reprices_record(self, service, store, record):
        cheaper = store.create(
            "clients",
            {"name": "Casa Ruiz", "type": "HOUSE", "address": "Calle Mayor 1", "rate_per_m3": Decimal("2.005")},
        )
        updated = await service.update_service_record(record.id, ServiceRecordUpdate(client_id=cheaper["id"]))

        assert updated.client_id == cheaper["id"]
        assert str(updated.cost) == "30.08"

    @pytest.mark.asyncio
    async def test_stored_volume_keeps_its_precision(self, service, store, client_row, vehicle_row, worker_row):
        record = await service.create_service_record(make_record(client_row, vehicle_row, worker_row, "3.333333"))
        updated = await service.update_service_record(record.id, ServiceRecordUpdate(date=date(2025, 5, 2)))

        assert updated.volume_m3 == Decimal("3.333333")
        assert str(updated.cost) == "18.33"

    @pytest.mark.asyncio
    async def test_non_positive_volume_on_update(self, service, record):
        with pytest.raises(ValidationError):
            await service.update_service_record(record.id, ServiceRecordUpdate(volume_m3=Decimal("0")))


class TestReadAndDelete:

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, service):
        assert await service.get_service_record(5) is None

    @pytest.mark.asyncio
    async def test_identifier_beyond_64_bits(self, service):
        assert await service.get_service_record(2**63) is None
        with pytest.raises(NotFoundError):
            await service.update_service_record(2**63, ServiceRecordUpdate(volume_m3=Decimal("1")))
        with pytest.raises(NotFoundError):
            await service.delete_service_record(2**63)

    @pytest.mark.asyncio
    async def test_list_attaches_references(self, service, client_row, vehicle_row, worker_row):
        await service.create_service_record(make_record(client_row, vehicle_row, worker_row, "1"))
        await service.create_service_record(make_record(client_row, vehicle_row, worker_row, "2"))

        records = await service.list_service_records()

        assert [r.volume_m3 for r in records] == [Decimal("1"), Decimal("2")]
        assert all(r.client.name == "Hotel Miramar" for r in records)
        assert all(r.vehicle.id == vehicle_row["id"] for r in records)

    @pytest.mark.asyncio
    async def test_delete_missing_always_raises(self, service, client_row, vehicle_row, worker_row):
        record = await service.create_service_record(make_record(client_row, vehicle_row, worker_row, "1"))
        deleted = await service.delete_service_record(record.id)
        assert deleted.id == record.id

        for _ in range(2):
            with pytest.raises(NotFoundError):
                await service.delete_service_record(record.id)
