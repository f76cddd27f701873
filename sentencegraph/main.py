import uvicorn
from fastapi import FastAPI, Request

from sentencegraph.routes import graphs_router, settings_router, snapshots_router
from sentencegraph.telemetry import read_telemetry_summary

app = FastAPI(
    title="Sentence Graph API",
    description="Keyword-biased Markov sentence generator",
    version="1.0.0",
)

app.include_router(graphs_router)
app.include_router(settings_router)
app.include_router(snapshots_router)


@app.middleware("http")
async def utf8_charset_middleware(request: Request, call_next):
    response = await call_next(request)
    ct = response.headers.get("content-type", "")
    if "application/json" in ct and "charset" not in ct:
        response.headers["content-type"] = ct + "; charset=utf-8"
    return response


@app.get("/")
async def root():
    return {
        "message": "Sentence Graph API",
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.get("/api/telemetry/summary")
async def get_telemetry_summary(hours: int = 24, limit: int = 6):
    """Return telemetry counters and recent events for the generator."""
    return read_telemetry_summary(hours=hours, limit=limit)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
