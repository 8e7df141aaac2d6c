"""Centralized router: all module routers are included here."""

from fastapi import APIRouter

from src.modules.auth.router import router as auth_router
from src.modules.invoice.router import router as invoice_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(invoice_router)
