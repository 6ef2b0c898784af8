# SwiftInvoice backend entrypoint.

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api import account
from backend.app.api import clients
from backend.app.api import cron
from backend.app.api import expenses
from backend.app.api import invoice_templates
from backend.app.api import invoices
from backend.app.api import login
from backend.app.api import preferences
from backend.app.api import register
from backend.app.api import reminder_policies
from backend.app.core.logging import configure_logging
from backend.app.core.settings import get_settings
from backend.app.db.base import Base
from backend.app.db.session import engine

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title=settings.app_name, version=settings.api_version)

origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(register.router)
app.include_router(login.router)
app.include_router(account.router)
app.include_router(preferences.router)
app.include_router(clients.router)
app.include_router(invoices.router)
app.include_router(invoice_templates.router)
app.include_router(reminder_policies.router)
app.include_router(expenses.router)
app.include_router(cron.router)


@app.get("/")
def read_root():
    return {"app": "SwiftInvoice backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def create_tables():
    Base.metadata.create_all(bind=engine)
