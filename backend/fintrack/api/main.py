from fastapi import FastAPI

from fintrack.api.routes.health import router as health_router
from fintrack.api.routes.prices import router as prices_router
from fintrack.api.routes.indices import router as indices_router


app = FastAPI(title="fintrack prices API", version="0.1.0")

app.include_router(health_router)
app.include_router(prices_router)
app.include_router(indices_router)
