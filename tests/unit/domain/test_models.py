"""
Unit tests for the Client and Activity domain models.
"""

import pytest
from pydantic import ValidationError

from core.domain.models import (
    Activity,
    ActivityStatus,
    ActivityType,
    Attachment,
    Client,
    EventState,
    new_entity_id,
)


class TestClient:
    """Test cases for Client."""

    def test_defaults(self):
        """A client only needs a name."""
        client = Client(name="Ana")

        assert client.branch == ""
        assert client.phone == ""
        assert client.is_confirmed is False
        assert client.id

    def test_fresh_ids_are_unique(self):
        assert Client(name="A").id != Client(name="B").id
        assert new_entity_id() != new_entity_id()

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Client(name="   ")

    def test_accepts_stored_camel_case(self):
        client = Client.model_validate({"id": "x", "name": "Ana", "branch": "", "phone": "", "isConfirmed": True})

        assert client.is_confirmed is True

    def test_dumps_stored_camel_case(self):
        data = Client(id="x", name="Ana").model_dump(by_alias=True)

        assert data == {"id": "x", "name": "Ana", "branch": "", "phone": "", "isConfirmed": False}

    def test_is_immutable(self):
        client = Client(name="Ana")
        with pytest.raises(ValidationError):
            client.name = "Otra"


class TestActivity:
    """Test cases for Activity."""

    def test_defaults(self):
        activity = Activity(name="Sonido")

        assert activity.activity_type is ActivityType.LOGISTICA
        assert activity.status is ActivityStatus.PENDIENTE
        assert activity.cost == 0
        assert activity.date == ""
        assert activity.attachment is None

    def test_cost_entered_as_text(self):
        assert Activity(name="A", cost="150.5").cost == 150.5
        assert Activity(name="A", cost="").cost == 0
        assert Activity(name="A", cost="1,200").cost == 1200

    def test_negative_cost_rejected(self):
        with pytest.raises(ValidationError):
            Activity(name="A", cost=-1)

    def test_non_numeric_cost_rejected(self):
        with pytest.raises(ValidationError):
            Activity(name="A", cost="mucho")

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Activity.model_validate({"id": "a", "name": "A", "type": "Deportes"})

    def test_stored_format_round_trip(self):
        stored = {
            "id": "a1",
            "name": "Banquete",
            "date": "2024-05-10",
            "cost": 100,
            "inCharge": "Marta",
            "type": "Logística",
            "status": "En Proceso",
            "attachment": {"name": "menu.pdf", "type": "application/pdf", "data": "data:application/pdf;base64,AA=="},
        }
        activity = Activity.model_validate(stored)

        assert activity.in_charge == "Marta"
        assert activity.status is ActivityStatus.EN_PROCESO
        assert activity.attachment == Attachment(name="menu.pdf", type="application/pdf", data="data:application/pdf;base64,AA==")
        dumped = activity.model_dump(mode="json", by_alias=True)
        assert dumped["type"] == "Logística"
        assert dumped["attachment"]["type"] == "application/pdf"


def test_event_state_defaults_to_empty():
    state = EventState()

    assert state.clients == ()
    assert state.activities == ()
