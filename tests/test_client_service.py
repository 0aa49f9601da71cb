"""
Client service tests.
"""

from uuid import uuid4

import pytest

from app.core.exceptions import ConflictError
from app.schemas.client import ClientCreate, ClientUpdate
from app.services.client_service import ClientService


async def test_create_and_get_client(test_db_session, regular_user):
    service = ClientService(test_db_session)

    created = await service.create_client(
        ClientCreate(name="Globex", email="ap@globex.example", gstin="27AAPFU0939F1ZV"),
        created_by=regular_user.id,
    )
    fetched = await service.get_client(created.id)

    assert fetched.name == "Globex"
    assert fetched.created_by == regular_user.id


async def test_list_clients_newest_first(test_db_session, regular_user):
    service = ClientService(test_db_session)
    for name in ("First", "Second"):
        await service.create_client(ClientCreate(name=name, email=f"{name.lower()}@example.com"), created_by=regular_user.id)

    clients, total = await service.list_clients()

    assert total == 2
    assert {client.name for client in clients} == {"First", "Second"}


async def test_update_contact_fields_only(test_db_session, acme_client, regular_user):
    updated = await ClientService(test_db_session).update_client(
        acme_client.id, ClientUpdate(phone="+1 555 0100", contact_person="John Doe")
    )

    assert updated.phone == "+1 555 0100"
    assert updated.contact_person == "John Doe"
    assert updated.name == "Acme Corp"
    assert updated.created_by == regular_user.id


async def test_update_unknown_client(test_db_session):
    assert await ClientService(test_db_session).update_client(uuid4(), ClientUpdate(name="x")) is None


async def test_delete_client_without_quotes(test_db_session, acme_client):
    service = ClientService(test_db_session)

    assert await service.delete_client(acme_client.id) is True
    assert await service.get_client(acme_client.id) is None


async def test_delete_client_with_quotes_conflicts(test_db_session, acme_client, make_quote):
    await make_quote()

    with pytest.raises(ConflictError):
        await ClientService(test_db_session).delete_client(acme_client.id)


async def test_delete_unknown_client(test_db_session):
    assert await ClientService(test_db_session).delete_client(uuid4()) is False
