"""
Doku@WEB Gateway - FastAPI Backend
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dokuweb_gateway import __version__
from dokuweb_gateway.config import get_settings
from dokuweb_gateway.routes import dokuweb, health
from dokuweb_gateway.middleware.logging_middleware import LoggingMiddleware

settings = get_settings()

app = FastAPI(
    title="Doku@WEB Gateway",
    description="JSON API over the Doku@WEB ticket REST and SOAP services",
    version=__version__
)

# Middleware runs bottom-up: CORS wraps logging
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(dokuweb.router)
app.include_router(health.router)


@app.get("/")
async def root():
    return {"message": "Doku@WEB Gateway API", "version": __version__}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.fastapi_host, port=settings.fastapi_port)
