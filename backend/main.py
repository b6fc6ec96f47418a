from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from datetime import date
from typing import Any, Dict, List, Optional
import logging

from backend import config
from backend.app.schedule.errors import ScheduleError
from backend.app.schedule.models import ComputedSchedule
from backend.app.schedule.templates import PROJECT_TYPES, get_template
from backend.tools.schedule.engine import compute_schedule, format_dependency_graph
from backend.tools.schedule.report import format_schedule_summary, render_schedule_report


logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("api")

app = FastAPI(title="Project Schedule Engine")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ScheduleRequest(BaseModel):
    project_type: str = "new-build"
    # Validated by the engine so that <= 0 maps to a domain error
    area: float
    project_start_date: Optional[date] = None
    ordering: Optional[str] = None


class ScheduleReportRequest(ScheduleRequest):
    location: str = "UK"
    finish_tier: str = "standard"
    include_kitchen: bool = False
    include_bathroom: bool = False
    include_mep: bool = True


class ScheduleReportResponse(BaseModel):
    title: str
    content: str
    summary: Dict[str, Any]
    schedule: ComputedSchedule


class ProjectTypesResponse(BaseModel):
    project_types: List[str] = Field(default_factory=list)
    default: str


def _run_schedule(req: ScheduleRequest):
    template = get_template(req.project_type, default=config.DEFAULT_PROJECT_TYPE)
    try:
        schedule = compute_schedule(
            template,
            req.area,
            project_start_date=req.project_start_date,
            ordering=req.ordering,
        )
    except ScheduleError as e:
        logger.warning("schedule request rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    return template, schedule


@app.get("/")
async def root():
    return {"message": "Project schedule engine"}


@app.get("/debug/ping")
async def debug_ping():
    return {"pong": True}


@app.get("/schedule/project-types", response_model=ProjectTypesResponse)
async def schedule_project_types():
    return ProjectTypesResponse(project_types=list(PROJECT_TYPES), default=config.DEFAULT_PROJECT_TYPE)


@app.post("/schedule", response_model=ComputedSchedule)
def schedule(req: ScheduleRequest):
    """
    Compute activity dates, project end date and critical path for the
    template selected by project_type (unknown types use the default template).
    """
    try:
        _, result = _run_schedule(req)
        return result
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("/schedule failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/schedule/report", response_model=ScheduleReportResponse)
def schedule_report(req: ScheduleReportRequest):
    """Compute the schedule and render it as a markdown Schedule of Works."""
    try:
        template, result = _run_schedule(req)
        content = render_schedule_report(
            result,
            template,
            location=req.location,
            finish_tier=req.finish_tier,
            include_kitchen=req.include_kitchen,
            include_bathroom=req.include_bathroom,
            include_mep=req.include_mep,
        )
        title = f"Project Schedule - {result.project_type}"
        return ScheduleReportResponse(
            title=title, content=content, summary=format_schedule_summary(result), schedule=result
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("/schedule/report failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/schedule/{project_type}/graph")
async def schedule_dependency_graph(project_type: str, fallback: bool = Query(True, description="Use the default template for unknown types")):
    """Return the template's dependency graph as printable text."""
    if not fallback and project_type not in PROJECT_TYPES:
        raise HTTPException(status_code=404, detail=f"Unknown project type '{project_type}'")
    template = get_template(project_type, default=config.DEFAULT_PROJECT_TYPE)
    return {"project_type": template.project_type, "graph": format_dependency_graph(template)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.UVICORN_HOST, port=config.UVICORN_PORT)
