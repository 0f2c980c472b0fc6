"""Mock financial data provider serving company statements"""

from dataclasses import asdict
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pathlib import Path
from pydantic.alias_generators import to_camel
import json
import os

from finrisk_gateway.infrastructure.providers.demo import demo_company, generate_demo_series

app = FastAPI(title="Mock Financial Data Provider", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/provider_stub") if os.path.exists("/provider_stub") else Path(__file__).resolve().parents[1] / "provider_stub"


def camel_case(record: dict) -> dict:
    return {to_camel(key): value for key, value in record.items()}


@app.get("/health")
def health(): return {"status": "ok"}


@app.get("/companies/{tax_id}/financials")
def get_financials(tax_id: str):
    # Stub files win; otherwise any numeric tax id gets a generated series seeded from it
    file = DATA_DIR / f"financials_{tax_id}.json"
    if file.exists():
        return JSONResponse(content=json.loads(file.read_text(encoding="utf-8")))

    if not tax_id.isdigit():
        raise HTTPException(status_code=404, detail="company not found")

    company = demo_company(tax_id)
    series = generate_demo_series(seed=int(tax_id))
    return {
        "company": camel_case(asdict(company)),
        "financials": [camel_case(asdict(snapshot)) for snapshot in series],
    }
