import unittest
from unittest.mock import MagicMock, patch

from beanie import init_beanie
from mongomock_motor import AsyncMongoMockClient

from garment_erp.core.db.mongodb import DOCUMENT_MODELS


class MongoTestCase(unittest.IsolatedAsyncioTestCase):
    """In-memory MongoDB with Beanie initialised; Redis replaced by a mock."""

    async def asyncSetUp(self):
        self.client = AsyncMongoMockClient()
        self.db = self.client["garment_erp_test"]
        await init_beanie(database=self.db, document_models=DOCUMENT_MODELS)

        self.redis = MagicMock()
        self.redis.get.return_value = None
        self.redis_patch = patch(
            "garment_erp.shared.cache_manager.get_redis_client", return_value=self.redis
        )
        self.redis_patch.start()

    async def asyncTearDown(self):
        self.redis_patch.stop()
        for name in await self.db.list_collection_names():
            await self.db[name].drop()

    async def add_style(self, style_no="ST-100", price=2.5, percentage=20, total_qty=1000):
        from garment_erp.core.models.production_list import ProductionItem
        item = ProductionItem(
            style_no=style_no,
            buyer="H&M",
            item="Polo Shirt",
            total_qty=total_qty,
            price=price,
            percentage=percentage,
        )
        await item.insert()
        return item
