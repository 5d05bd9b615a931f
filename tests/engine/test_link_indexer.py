"""
Test LinkAssociationIndexer
===========================

Link writes, link-walk queries and the fail-fast error policy.
"""

import pytest
from unittest.mock import AsyncMock, call
from uuid import UUID

from structlog.testing import capture_logs

from kvlink.engine import AssociationIndexer, LinkAssociationIndexer
from kvlink.exceptions import StoreCommunicationError
from kvlink.mapping import Association, ConversionService, PersistentEntity


@pytest.fixture
def indexer(mock_store, orders_association):
    return LinkAssociationIndexer(mock_store, ConversionService(), orders_association)


class TestConstruction:
    """Constructor preconditions and cached metadata."""

    def test_is_association_indexer(self, indexer):
        assert isinstance(indexer, AssociationIndexer)

    def test_caches_owner_and_child(self, indexer, customer_entity, order_entity):
        assert indexer.owner == customer_entity
        assert indexer.child == order_entity

    def test_default_conversion_service(self, mock_store, orders_association):
        indexer = LinkAssociationIndexer(mock_store, None, orders_association)
        assert isinstance(indexer.conversion_service, ConversionService)

    def test_requires_association(self, mock_store):
        with pytest.raises(ValueError):
            LinkAssociationIndexer(mock_store, None, None)

    def test_requires_owner(self, mock_store, order_entity):
        association = Association("orders", owner=None, associated_entity=order_entity)
        with pytest.raises(ValueError, match="orders"):
            LinkAssociationIndexer(mock_store, None, association)

    def test_requires_child(self, mock_store, customer_entity):
        association = Association("orders", owner=customer_entity, associated_entity=None)
        with pytest.raises(ValueError):
            LinkAssociationIndexer(mock_store, None, association)


class TestIndex:
    """index() issues one link write per foreign key."""

    @pytest.mark.asyncio
    async def test_orders_scenario(self, indexer, mock_store):
        await indexer.index("cust-42", ["ord-1", "ord-2"])

        assert mock_store.link.await_args_list == [
            call("order", "ord-1", "customer", "cust-42", "orders"),
            call("order", "ord-2", "customer", "cust-42", "orders"),
        ]

    @pytest.mark.asyncio
    async def test_one_write_per_key(self, indexer, mock_store):
        keys = [f"ord-{i}" for i in range(7)]
        await indexer.index("cust-1", keys)

        assert mock_store.link.await_count == 7
        for args in mock_store.link.await_args_list:
            child_bucket, _, owner_bucket, owner_key, tag = args.args
            assert (child_bucket, owner_bucket, owner_key, tag) == (
                "order", "customer", "cust-1", "orders"
            )

    @pytest.mark.asyncio
    async def test_empty_sequence_writes_nothing(self, indexer, mock_store):
        await indexer.index("cust-42", [])
        mock_store.link.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_single_key_matches_one_element_list(self, mock_store, orders_association):
        single = LinkAssociationIndexer(mock_store, None, orders_association)
        await single.index("cust-42", "ord-1")
        single_call = mock_store.link.await_args

        mock_store.link.reset_mock()
        await single.index("cust-42", ["ord-1"])

        assert mock_store.link.await_count == 1
        assert mock_store.link.await_args == single_call

    @pytest.mark.asyncio
    async def test_tuple_of_keys(self, indexer, mock_store):
        await indexer.index("cust-42", ("ord-1", "ord-2"))
        assert mock_store.link.await_count == 2

    @pytest.mark.asyncio
    async def test_set_of_keys(self, indexer, mock_store):
        await indexer.index("cust-42", {"ord-1", "ord-2"})

        assert mock_store.link.await_count == 2
        linked = {args.args[1] for args in mock_store.link.await_args_list}
        assert linked == {"ord-1", "ord-2"}

    @pytest.mark.asyncio
    async def test_generator_of_keys(self, indexer, mock_store):
        await indexer.index("cust-42", (f"ord-{i}" for i in range(3)))

        assert [args.args[1] for args in mock_store.link.await_args_list] == [
            "ord-0", "ord-1", "ord-2"
        ]

    @pytest.mark.asyncio
    async def test_dict_keys_view(self, indexer, mock_store):
        orders = {"ord-1": 10, "ord-2": 20}
        await indexer.index("cust-42", orders.keys())
        assert mock_store.link.await_count == 2

    @pytest.mark.asyncio
    async def test_bytes_is_single_key(self, indexer, mock_store):
        await indexer.index("cust-42", b"ord-1")
        mock_store.link.assert_awaited_once_with(
            "order", "ord-1", "customer", "cust-42", "orders"
        )

    @pytest.mark.asyncio
    async def test_non_string_keys_are_converted(self, indexer, mock_store):
        order_id = UUID("12345678-1234-5678-1234-567812345678")
        await indexer.index(42, order_id)

        mock_store.link.assert_awaited_once_with(
            "order", str(order_id), "customer", "42", "orders"
        )

    @pytest.mark.asyncio
    async def test_uses_entity_bucket(self, mock_store):
        association = Association(
            "lines",
            owner=PersistentEntity("Invoice", bucket="invoices"),
            associated_entity=PersistentEntity("InvoiceLine", bucket="invoice_lines"),
        )
        indexer = LinkAssociationIndexer(mock_store, None, association)

        await indexer.index("inv-1", ["line-1"])

        mock_store.link.assert_awaited_once_with(
            "invoice_lines", "line-1", "invoices", "inv-1", "lines"
        )


class TestFailFast:
    """First store failure propagates unchanged and stops the loop."""

    @pytest.mark.asyncio
    async def test_failure_on_second_of_three(self, indexer, mock_store):
        error = StoreCommunicationError("store down", operation="link", bucket="order", key="ord-2")
        mock_store.link = AsyncMock(side_effect=[None, error, None])

        with pytest.raises(StoreCommunicationError) as exc_info:
            await indexer.index("cust-42", ["ord-1", "ord-2", "ord-3"])

        assert exc_info.value is error
        assert mock_store.link.await_count == 2
        assert mock_store.link.await_args_list[-1] == call(
            "order", "ord-2", "customer", "cust-42", "orders"
        )

    @pytest.mark.asyncio
    async def test_query_failure_propagates(self, indexer, mock_store):
        error = StoreCommunicationError("timeout", operation="links_to")
        mock_store.links_to = AsyncMock(side_effect=error)

        with pytest.raises(StoreCommunicationError) as exc_info:
            await indexer.query("cust-42")

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_unconvertible_key(self, indexer, mock_store):
        with pytest.raises(TypeError):
            await indexer.index("cust-42", [object()])
        mock_store.link.assert_not_awaited()


class TestQuery:
    """query() walks links back from the owner."""

    @pytest.mark.asyncio
    async def test_query_walks_owner_links(self, indexer, mock_store):
        mock_store.links_to = AsyncMock(return_value=["ord-1", "ord-2"])

        result = await indexer.query("cust-42")

        assert result == ["ord-1", "ord-2"]
        mock_store.links_to.assert_awaited_once_with(
            "customer", "cust-42", "orders", child_bucket="order"
        )

    @pytest.mark.asyncio
    async def test_query_removes_duplicates(self, indexer, mock_store):
        mock_store.links_to = AsyncMock(return_value=["ord-1", "ord-1", "ord-2"])
        assert await indexer.query("cust-42") == ["ord-1", "ord-2"]

    @pytest.mark.asyncio
    async def test_query_is_left_inverse_of_index(self, memory_store, orders_association):
        indexer = LinkAssociationIndexer(memory_store, None, orders_association)

        await indexer.index("cust-42", ["ord-1", "ord-2"])

        assert set(await indexer.query("cust-42")) == {"ord-1", "ord-2"}
        assert await indexer.query("cust-7") == []

    @pytest.mark.asyncio
    async def test_query_scoped_to_association(self, memory_store, customer_entity, order_entity):
        orders = LinkAssociationIndexer(
            memory_store, None, Association("orders", customer_entity, order_entity)
        )
        returns = LinkAssociationIndexer(
            memory_store, None, Association("returns", customer_entity, order_entity)
        )

        await orders.index("cust-42", ["ord-1"])
        await returns.index("cust-42", ["ord-9"])

        assert await orders.query("cust-42") == ["ord-1"]
        assert await returns.query("cust-42") == ["ord-9"]


class TestUnindex:

    @pytest.mark.asyncio
    async def test_unindex_removes_links(self, memory_store, orders_association):
        indexer = LinkAssociationIndexer(memory_store, None, orders_association)
        await indexer.index("cust-42", ["ord-1", "ord-2"])

        await indexer.unindex("cust-42", "ord-1")

        assert await indexer.query("cust-42") == ["ord-2"]

    @pytest.mark.asyncio
    async def test_unindex_missing_link_is_quiet(self, indexer, mock_store):
        mock_store.unlink = AsyncMock(return_value=False)

        await indexer.unindex("cust-42", ["ord-404"])

        mock_store.unlink.assert_awaited_once_with(
            "order", "ord-404", "customer", "cust-42", "orders"
        )

    @pytest.mark.asyncio
    async def test_unindex_logs_converted_key(self, indexer, mock_store):
        mock_store.unlink = AsyncMock(return_value=False)

        with capture_logs() as logs:
            await indexer.unindex("cust-42", b"ord-404")

        mock_store.unlink.assert_awaited_once_with(
            "order", "ord-404", "customer", "cust-42", "orders"
        )
        missing = [entry for entry in logs if entry["event"] == "No link to remove"]
        assert missing[0]["child"] == "order/ord-404"


class TestIndexedEntity:

    @pytest.mark.asyncio
    async def test_indexed_entity_is_child(self, indexer, mock_store, order_entity):
        assert indexer.get_indexed_entity() == order_entity

        await indexer.index("cust-42", ["ord-1"])
        await indexer.query("cust-42")

        assert indexer.get_indexed_entity() is indexer.association.associated_entity
        assert indexer.get_indexed_entity() == order_entity
