import logging

from fastapi import FastAPI

from goalcalc.core.models import CommentaryResponse, SimulationRequest, SimulationResponse
from goalcalc.core.pipeline import run_calculation, run_commentary

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(title="Million Goal Calculator API")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/simulate", response_model=SimulationResponse)
def simulate_goal(payload: SimulationRequest):
    return run_calculation(payload)


@app.post("/commentary", response_model=CommentaryResponse)
def commentary(payload: SimulationRequest):
    return run_commentary(payload)
