"""Unit tests for OrderService"""
import pytest
from unittest.mock import AsyncMock

from app.core.errors import ErrorResponse
from app.models.order import PaymentResult
from app.models.user import User
from app.repositories.order import OrderRepository
from app.repositories.user import UserRepository
from app.schemas.order import OrderCreate, OrderOwner, OrderUpdate
from app.services.order import OrderService

STRANGER_ID = "507f1f77bcf86cd799439099"


class TestOrderService:

    @pytest.fixture
    def order_repo(self, sample_order):
        repo = AsyncMock(spec=OrderRepository)
        repo.get_by_id.return_value = sample_order
        repo.save.side_effect = lambda order: order
        repo.insert.side_effect = lambda order: order
        return repo

    @pytest.fixture
    def user_repo(self, regular_user):
        repo = AsyncMock(spec=UserRepository)
        repo.get_by_id.return_value = regular_user
        repo.find_by_ids.return_value = {regular_user.id: regular_user}
        return repo

    @pytest.fixture
    def service(self, order_repo, user_repo):
        return OrderService(order_repo, user_repo)

    @pytest.fixture
    def stranger(self):
        return User(id=STRANGER_ID, name="Mallory", email="mallory@mail.com")


class TestCreateOrder(TestOrderService):

    @pytest.mark.asyncio
    async def test_empty_items_rejected(self, service, order_repo, regular_user):
        with pytest.raises(ErrorResponse) as exc_info:
            await service.create_order(OrderCreate(), regular_user)

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "No order items"
        order_repo.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_owner_is_caller(self, service, regular_user, sample_order):
        data = OrderCreate(
            order_items=sample_order.order_items,
            shipping_address=sample_order.shipping_address,
            payment_method="PayPal",
            total_price=197.98,
        )

        order = await service.create_order(data, regular_user)

        assert order.user == regular_user.id
        assert order.total_price == 197.98
        assert not order.is_paid


class TestAccess(TestOrderService):

    @pytest.mark.asyncio
    async def test_missing_order(self, service, order_repo, regular_user):
        order_repo.get_by_id.return_value = None

        with pytest.raises(ErrorResponse) as exc_info:
            await service.get_order("507f1f77bcf86cd799439031", regular_user)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Order not found"

    @pytest.mark.asyncio
    async def test_other_users_order_forbidden(self, service, stranger, sample_order):
        with pytest.raises(ErrorResponse) as exc_info:
            await service.get_order(sample_order.id, stranger)

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_sees_any_order(self, service, admin_user, sample_order):
        order = await service.get_order(sample_order.id, admin_user)

        assert order.id == sample_order.id

    @pytest.mark.asyncio
    async def test_owner_is_populated(self, service, regular_user, sample_order):
        order = await service.get_order(sample_order.id, regular_user)

        assert isinstance(order.user, OrderOwner)
        assert order.user.name == "Alice"
        assert order.user.email == "alice@mail.com"

    @pytest.mark.asyncio
    async def test_deleted_owner_left_as_id(self, service, order_repo, user_repo, sample_order):
        order_repo.list_all.return_value = [sample_order]
        user_repo.find_by_ids.return_value = {}

        orders = await service.list_all_orders()

        assert orders[0].user == sample_order.user


class TestTransitions(TestOrderService):

    @pytest.mark.asyncio
    async def test_pay(self, service, regular_user, sample_order):
        order = await service.mark_paid(sample_order.id, PaymentResult(id="PAY-1", status="COMPLETED"), regular_user)

        assert order.is_paid
        assert order.payment_result.status == "COMPLETED"

    @pytest.mark.asyncio
    async def test_cancel_paid_order_rejected(self, service, order_repo, regular_user, sample_order):
        sample_order.mark_paid(PaymentResult(id="PAY-1"))

        with pytest.raises(ErrorResponse) as exc_info:
            await service.cancel_order(sample_order.id, regular_user)

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Cannot cancel a paid order"
        assert not sample_order.is_cancelled
        order_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_unpaid_then_cancel(self, service, regular_user, sample_order):
        sample_order.mark_paid(PaymentResult(id="PAY-1"))

        await service.mark_unpaid(sample_order.id, regular_user)
        order = await service.cancel_order(sample_order.id, regular_user)

        assert order.status == "Unpaid"
        assert order.is_cancelled

    @pytest.mark.asyncio
    async def test_delivered(self, service, sample_order):
        order = await service.mark_delivered(sample_order.id)

        assert order.is_delivered
        assert order.delivered_at is not None


class TestSubResources(TestOrderService):

    @pytest.mark.asyncio
    async def test_tracking_unset_is_not_found(self, service, regular_user, sample_order):
        with pytest.raises(ErrorResponse) as exc_info:
            await service.get_tracking_info(sample_order.id, regular_user)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Tracking information not available for this order"

    @pytest.mark.asyncio
    async def test_tracking_round_trip(self, service, regular_user, sample_order):
        await service.set_tracking_info(sample_order.id, {"carrier": "DHL", "number": "123"})

        assert await service.get_tracking_info(sample_order.id, regular_user) == {"carrier": "DHL", "number": "123"}

    @pytest.mark.asyncio
    async def test_status(self, service, sample_order):
        order = await service.set_status(sample_order.id, "Shipped")

        assert order.status == "Shipped"

    @pytest.mark.asyncio
    async def test_confirmation(self, service, regular_user, sample_order):
        confirmation = await service.get_confirmation(sample_order.id, regular_user)

        assert confirmation.order_id == sample_order.id
        assert confirmation.total_price == 197.98
        assert confirmation.shipping_address.city == "Oslo"

    @pytest.mark.asyncio
    async def test_partial_update_keeps_empty_fields(self, service, sample_order):
        order = await service.update_order(sample_order.id, OrderUpdate(status="Packed", payment_method=""))

        assert order.status == "Packed"
        assert order.payment_method == "PayPal"


class TestUserOrders(TestOrderService):

    @pytest.mark.asyncio
    async def test_list_for_unknown_user(self, service, user_repo):
        user_repo.get_by_id.return_value = None

        with pytest.raises(ErrorResponse) as exc_info:
            await service.list_for_user(STRANGER_ID)

        assert exc_info.value.message == "User not found"

    @pytest.mark.asyncio
    async def test_delete_order_of_another_user_forbidden(self, service, order_repo, sample_order):
        with pytest.raises(ErrorResponse) as exc_info:
            await service.delete_for_user(STRANGER_ID, sample_order.id)

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "Unauthorized access to order"
        order_repo.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_own_order(self, service, order_repo, regular_user, sample_order):
        await service.delete_for_user(regular_user.id, sample_order.id)

        order_repo.delete.assert_called_once_with(sample_order.id)
