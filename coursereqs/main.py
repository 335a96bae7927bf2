from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coursereqs.api.v1.endpoints.requisites import router as requisites_router
from coursereqs.core.config import settings
from coursereqs.core.logging import configure_logging

app = FastAPI(
    title="Course Requisites API",
    version="0.1.0",
)

configure_logging()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok", "service": "requisite-parser"}

@app.get("/", include_in_schema=False)
def root():
    return {"status": "ok", "message": "Backend is running"}

app.include_router(requisites_router)
