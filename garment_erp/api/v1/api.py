from fastapi import APIRouter

from garment_erp.api.routes import (auth, users, production_list, lines, targets,
                                    daily_production, cashbook, salary, expenses,
                                    shipments, profit_loss)

api_router = APIRouter()


api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(production_list.router)
api_router.include_router(lines.router)
api_router.include_router(lines.assignment_router)
api_router.include_router(targets.router)
api_router.include_router(daily_production.router)
api_router.include_router(cashbook.router)
api_router.include_router(salary.router)
api_router.include_router(expenses.router)
api_router.include_router(shipments.router)
api_router.include_router(profit_loss.router)
