"""FastAPI application entrypoint."""

from fastapi import FastAPI

from compare_api import __version__
from compare_api.routes import company, health, historical, root, search, top_companies

app = FastAPI(
    title="Compare API",
    description="Company comparison dashboard backed by Financial Modeling Prep",
    version=__version__,
)

app.include_router(root.router)
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(search.router, prefix="/search", tags=["search"])
app.include_router(company.router, prefix="/company", tags=["company"])
app.include_router(historical.router, tags=["historical"])
app.include_router(top_companies.router, prefix="/top-companies", tags=["top-companies"])
