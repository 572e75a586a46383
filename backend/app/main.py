"""
# `app/main.py` — Application entry point

## Overview
Creates the FastAPI application, configures logging and CORS, and mounts the routers.

---

## Routers
- `/stores` — store CRUD (owner scoped)
- `/stores/{store_id}/categories` — catalog categories
- `/stores/{store_id}/products` — catalog products (modifiers, discounts)
- `/sales` — sale creation, listing and metrics

Every route authenticates the caller with a Firebase ID token (`app.core.security`).

---

## Startup
- Logging level comes from `settings.log_level`.
- Firebase is initialized lazily on the first Firestore access (`app.config.get_db`).
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.routers import categories, products, sales, stores

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialize FastAPI app
app = FastAPI(
    title="Storefront POS API",
    description="Backend API for a point-of-sale app: stores, catalog, sales and reporting.",
    version="1.0.0",
    redirect_slashes=False,
)

# Configure CORS (allow front-end domain or all origins as specified)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(stores.router)
app.include_router(categories.router)
app.include_router(products.router)
app.include_router(sales.router)


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}


# Run the app directly with uvicorn (for development)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
