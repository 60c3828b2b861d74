"""Main module for the FastAPI application."""
import time
from contextlib import asynccontextmanager
from typing import Dict, List

import psutil
from fastapi import Depends, FastAPI, HTTPException, status
from redis.exceptions import RedisError

from .config import settings
from .errors import ScorerError
from .host import HostBridge, StaticHostBridge
from .logger import logger
from .models import (
    BehaviorRequest,
    BehaviorResponse,
    DocumentScore,
    EngagementRequest,
    PickRequest,
    ScoreRequest,
    ScoreResponse,
    TipResult,
)
from .search.tip_service import TipService, build_query_scorer
from .telemetry import telemetry_recorder


# --- Initialisation des variables globales ---

# Le corpus est complet avant la première requête ; ensuite on ne fait que lire.
query_scorer = build_query_scorer()

host_bridge: HostBridge = StaticHostBridge()

tip_service: TipService = TipService(
    scorer=query_scorer,
    host=host_bridge,
    telemetry=telemetry_recorder,
)
# Alias `service` pour les tests qui patchent `main.service`
service = tip_service


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Handle FastAPI startup and shutdown events."""
    logger.info("Starting up interventions API ({count} documents)...", count=len(query_scorer))

    try:
        await telemetry_recorder.ping()
        logger.info("Redis telemetry connected successfully.")
    except RedisError as e:
        logger.error("Failed to connect to Redis: {error}", error=e)

    # Sans effet si l'hôte a désactivé les mises à jour
    await host_bridge.check_for_update()

    yield

    logger.info("Shutting down interventions API...")
    await telemetry_recorder.close()
    logger.info("Redis connection closed.")


app = FastAPI(
    title="Interventions - URL bar tip service",
    lifespan=lifespan
)


def get_service() -> TipService:
    """Dépendance FastAPI pour obtenir le service d'astuces."""
    return service


@app.post("/score", response_model=ScoreResponse)
def score(req: ScoreRequest, svc: TipService = Depends(get_service)):
    """Classement de tous les documents pour la requête (score None = pas de correspondance)."""
    start_time = time.time()
    try:
        doc_scores = svc.score(req.query)
    except ScorerError as e:
        logger.warning("Invalid score request: {error}", error=e)
        raise HTTPException(status_code=400, detail={"error": str(e)}) from e
    except Exception as e:
        logger.exception("Error processing score request")
        raise HTTPException(status_code=500, detail={"error": str(e)}) from e

    results = [
        DocumentScore(
            document_id=scored.document.id,
            score=int(scored.score) if scored.matched else None,
            matched=scored.matched,
        )
        for scored in doc_scores
    ]
    return ScoreResponse(
        results=results,
        total=len(results),
        matched_count=sum(1 for r in results if r.matched),
        query_time_ms=round((time.time() - start_time) * 1000, 2),
        memory_used_mb=psutil.Process().memory_info().rss / 1024 / 1024,
    )


@app.post("/behavior", response_model=BehaviorResponse)
async def behavior(req: BehaviorRequest, svc: TipService = Depends(get_service)):
    """Appelé à chaque frappe : le fournisseur est-il actif ?"""
    try:
        result = await svc.on_behavior_requested(req.search_string)
    except Exception as e:
        logger.exception("Error processing behavior request")
        raise HTTPException(status_code=500, detail={"error": str(e)}) from e
    return BehaviorResponse(behavior=result, tip=svc.current_tip)


@app.post("/results", response_model=List[TipResult])
def results(svc: TipService = Depends(get_service)):
    return svc.on_results_requested()


@app.post("/picked")
async def picked(req: PickRequest, svc: TipService = Depends(get_service)) -> Dict[str, str]:
    """Le bouton d'une astuce a été cliqué."""
    await svc.on_result_picked(req.type)
    return {"status": "ok"}


@app.post("/engagement")
async def engagement(req: EngagementRequest, svc: TipService = Depends(get_service)) -> Dict[str, str]:
    await svc.on_engagement(req.state)
    return {"status": "ok"}


@app.get("/telemetry/{part}", tags=["Monitoring"])
async def telemetry_snapshot(part: str) -> Dict[str, int]:
    """Valeurs courantes d'un compteur (tipShownCount, tipPickedCount)."""
    if part not in (settings.TELEMETRY_SHOWN_PART, settings.TELEMETRY_PICKED_PART):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"error": f"unknown scalar {part}"})
    try:
        return await telemetry_recorder.snapshot(part)
    except RedisError as e:
        logger.error("Telemetry snapshot failed: {error}", error=e)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail={"error": str(e)}) from e


@app.get("/")
def root():
    """Root endpoint to check API status."""
    return {"status": "ok", "message": "Interventions API is running 🚀", "provider": settings.URLBAR_PROVIDER_NAME}


@app.get("/health", status_code=status.HTTP_200_OK, tags=["Monitoring"])
async def health_check():
    """
    Health check endpoint.

    Returns 200 OK if Redis is reachable, otherwise 503 Service Unavailable.
    """
    services_status = {"redis": "ok"}
    try:
        await telemetry_recorder.ping()
    except RedisError:
        services_status["redis"] = "error"
        logger.error("Health check failed: Redis connection error.")

    if "error" in services_status.values():
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=services_status)

    return services_status
