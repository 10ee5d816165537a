import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from . import config
from .core import ScanOrchestrator, YearPartitioner
from .exceptions import AggregatorError, ScanPathError
from .reporting import ReportBuilder


class ReportRequest(BaseModel):
    path: str
    years: Optional[List[str]] = None


class ReportResponse(BaseModel):
    report: str
    files_visited: int
    images_decoded: int
    duration_sec: float


def create_app(orchestrator: Optional[ScanOrchestrator] = None) -> FastAPI:
    app = FastAPI(title="EXIF Stats", version="0.1.0")
    builder = ReportBuilder()

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post("/report", response_model=ReportResponse)
    def report(req: ReportRequest):
        # Each request gets its own aggregator and counters
        scanner = orchestrator or ScanOrchestrator()
        logging.info(f"Report requested for {req.path} (years={req.years})")
        try:
            if req.years:
                results = YearPartitioner(req.years, orchestrator=scanner).scan_all(req.path)
                return ReportResponse(
                    report=builder.render_years(results),
                    files_visited=sum(r.files_visited for r in results.values()),
                    images_decoded=sum(r.images_decoded for r in results.values()),
                    duration_sec=sum(r.duration_sec for r in results.values()),
                )
            result = scanner.scan(req.path)
            return ReportResponse(**builder.summary(result))
        except ScanPathError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except AggregatorError as e:
            logging.exception("Scan aborted.")
            raise HTTPException(status_code=500, detail=str(e))

    return app


app = create_app()


def serve():
    import uvicorn

    uvicorn.run("exif_stats.api:app", host=config.API_HOST, port=config.API_PORT)


if __name__ == "__main__":
    # Local dev server: uvicorn exif_stats.api:app --reload
    serve()
