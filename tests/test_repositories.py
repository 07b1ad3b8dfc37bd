import pytest
from uuid import uuid4

from order_media_client.exceptions import DuplicateOrderError
from order_media_client.models import OrderCreate
from order_media_client.repositories import FileRepository, OrderRepository, SellerRepository

pytestmark = pytest.mark.asyncio


async def test_create_and_exists(session_factory):
    orders = OrderRepository(session_factory)

    order = await orders.create(OrderCreate(order_id="  577633731543205864 ", song_request="Bernadya - Bulan"))

    assert order.order_id == "577633731543205864"
    assert order.status == "pending"
    assert order.created_at is not None
    assert await orders.exists("577633731543205864")
    assert not await orders.exists("577")


async def test_unique_constraint_rejects_second_insert(session_factory):
    orders = OrderRepository(session_factory)
    await orders.create(OrderCreate(order_id="A-1"))

    with pytest.raises(DuplicateOrderError):
        await orders.create(OrderCreate(order_id="A-1"))

    assert len(await orders.list_with_files()) == 1


async def test_list_newest_first_and_case_insensitive_search(session_factory):
    orders = OrderRepository(session_factory)
    for oid in ["577633731543205864", "ABC577XYZ", "123456"]:
        await orders.create(OrderCreate(order_id=oid))

    all_orders = await orders.list_with_files()
    assert [o.order_id for o in all_orders] == ["123456", "ABC577XYZ", "577633731543205864"]

    matched = await orders.list_with_files("577")
    assert {o.order_id for o in matched} == {"577633731543205864", "ABC577XYZ"}

    assert [o.order_id for o in await orders.list_with_files("abc")] == ["ABC577XYZ"]


async def test_search_treats_wildcards_literally(session_factory):
    orders = OrderRepository(session_factory)
    await orders.create(OrderCreate(order_id="100%-off"))
    await orders.create(OrderCreate(order_id="plain"))

    assert [o.order_id for o in await orders.list_with_files("%")] == ["100%-off"]
    assert await orders.list_with_files("_") == []


async def test_files_are_listed_with_their_order(session_factory):
    orders = OrderRepository(session_factory)
    files = FileRepository(session_factory)
    order = await orders.create(OrderCreate(order_id="X1"))

    await files.add(order.id, f"customer-files/{order.id}/a.jpg", "image/jpeg")
    await files.add(order.id, f"customer-files/{order.id}/b.mp4", "video/mp4")

    loaded = await orders.get(order.id)
    assert [f.name for f in loaded.files] == ["a.jpg", "b.mp4"]
    assert all(f.order_id == order.id for f in loaded.files)

    listed = await orders.list_with_files()
    assert len(listed[0].files) == 2


async def test_delete_order_and_files(session_factory):
    orders = OrderRepository(session_factory)
    files = FileRepository(session_factory)
    order = await orders.create(OrderCreate(order_id="X2"))
    await files.add(order.id, "customer-files/x/1.png", "image/png")

    assert await files.delete_for_order(order.id) == 1
    assert await orders.delete(order.id) is True

    assert await orders.get(order.id) is None
    assert await orders.delete(order.id) is False
    assert await files.list_for_order(order.id) == []


async def test_delete_missing_order_reports_false(session_factory):
    orders = OrderRepository(session_factory)
    await orders.create(OrderCreate(order_id="keep-me"))

    assert await orders.delete(uuid4()) is False
    assert len(await orders.list_with_files()) == 1


async def test_seller_repository(session_factory):
    from order_media_client.repositories import UserRepository

    users = UserRepository(session_factory)
    sellers = SellerRepository(session_factory)
    user = await users.create_user("Seller@Example.com", "s3cret")

    seller = await sellers.create(user.id, user.email)

    assert seller.email == "seller@example.com"
    assert (await sellers.get(user.id)).id == user.id
