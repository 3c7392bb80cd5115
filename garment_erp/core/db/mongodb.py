import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from beanie import init_beanie

from garment_erp.core.setting import config
from garment_erp.core.models.user import User
from garment_erp.core.models.production_list import ProductionItem
from garment_erp.core.models.line import Line, LineAssignment
from garment_erp.core.models.target import Target
from garment_erp.core.models.daily_production_report import DailyProductionReport
from garment_erp.core.models.cashbook import CashbookEntry
from garment_erp.core.models.salary import DailySalary
from garment_erp.core.models.expense import MonthlyExpense
from garment_erp.core.models.shipment import Shipment

logger = logging.getLogger(__name__)

DOCUMENT_MODELS = [
    User,
    ProductionItem,
    Line, LineAssignment,
    Target,
    DailyProductionReport,
    CashbookEntry,
    DailySalary,
    MonthlyExpense,
    Shipment,
]

motor_client = None

async def connect_to_mongo():
    global motor_client

    motor_client = AsyncIOMotorClient(str(config.MONGODB_URL))

    # Initialize Beanie with the database and the list of document models
    await init_beanie(
        database=motor_client[config.DATABASE_NAME],
        document_models=DOCUMENT_MODELS,
    )
    logger.info(f"Successfully connected to MongoDB at {config.DATABASE_NAME}")

async def close_mongo_connection():
    global motor_client
    if motor_client:
        motor_client.close()
        motor_client = None
    logger.info("Closed MongoDB connection")

def get_database() -> AsyncIOMotorDatabase:
    """
    Get the database instance for raw collection access.
    The derived-state services (reconciliation, profit & loss) take this
    handle explicitly instead of going through Beanie documents.
    """
    if motor_client is None:
        raise RuntimeError("Database client not initialized. Call connect_to_mongo() first.")
    return motor_client[config.DATABASE_NAME]
