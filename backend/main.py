from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from config import SOURCE_WEIGHTS, logger
from exceptions import EngineException, InvariantViolation
from middleware.context import RequestContextMiddleware, get_request_id
from models import (
    AggregateRequest,
    BatchAggregateRequest,
    BatchAggregateResponse,
    Report,
)
from services import ReportAssembler, VerificationService

app = FastAPI(title="Evidence Aggregation API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestContextMiddleware)

verification_service = VerificationService()
report_assembler = ReportAssembler()


@app.on_event("startup")
async def startup_event():
    weights = ", ".join(f"{s.value}={w}" for s, w in SOURCE_WEIGHTS.as_dict().items())
    logger.info("Startup: source trust weights %s", weights)


@app.exception_handler(EngineException)
async def engine_exception_handler(request: Request, exc: EngineException):
    status_code = 500 if isinstance(exc, InvariantViolation) else 400
    if status_code == 500:
        logger.error(f"{exc.message} [request_id={get_request_id()}]")
    else:
        logger.warning(f"{exc.message} [request_id={get_request_id()}]")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.get("/")
async def health_check():
    return {"status": "ok", "message": "Evidence-Aggregation-API is running."}


@app.post("/aggregate", response_model=Report)
def aggregate(req: AggregateRequest):
    return verification_service.verify_claim(req.claim, req.evidence)


@app.post("/aggregate/batch", response_model=BatchAggregateResponse)
async def aggregate_batch(req: BatchAggregateRequest):
    reports = await verification_service.verify_batch(
        [(item.claim, item.evidence) for item in req.items]
    )
    return BatchAggregateResponse(
        reports=reports,
        summary=report_assembler.summarize_batch(reports),
    )


@app.post("/export")
def export_report(report: Report, format: Optional[str] = Query("json")):
    exported = report_assembler.export(report, format)
    if format == "text":
        return PlainTextResponse(exported)
    if format == "json":
        return PlainTextResponse(exported, media_type="application/json")
    return exported
