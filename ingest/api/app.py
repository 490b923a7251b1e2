from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
from pathlib import Path
import logging
import os

import requests

from ingest.pr_export.config import ConfigError, build_config
from ingest.pr_export.extract import RecordError
from ingest.pr_export.github import RemoteApiError
from ingest.pr_export.service import collect
from ingest.pr_export.sinks import export

log = logging.getLogger(__name__)

app = FastAPI(title="Merged PR Export API")

# Where to save by default
DATA_RAW = Path(os.getenv("DATA_RAW_DIR", "data/raw")).resolve()


class ExportRequest(BaseModel):
    owner: str = Field(..., examples=["apache"])
    repo: str = Field(..., examples=["airflow"])
    token: str | None = None
    page_size: int = Field(30, gt=0)
    max_prs: int = Field(100, gt=0)
    filename: str | None = None  # optional override for output file name


class ExportResponse(BaseModel):
    saved_path: str
    rows: int
    owner: str
    repo: str


def output_path(req: ExportRequest) -> Path:
    # only a base name is honoured, whether it came from filename or owner/repo
    for candidate in (req.filename, f"{req.owner}_{req.repo}_merged.csv", "merged_prs.csv"):
        name = Path(candidate or "").name.strip(".")
        if name:
            break
    out = DATA_RAW / name
    if out.suffix != ".csv":
        out = out.with_suffix(".csv")
    return out


@app.post("/export_prs", response_model=ExportResponse)
def export_prs(req: ExportRequest):
    out = output_path(req)
    try:
        config = build_config(
            owner=req.owner, repo=req.repo, token=req.token, output=str(out),
            page_size=req.page_size, max_prs=req.max_prs,
        )
    except ConfigError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        rows = export(collect(config), config.output)
    except RemoteApiError as e:
        log.error("GitHub answered %s for %s", e.status, e.url)
        raise HTTPException(status_code=502, detail={"status": e.status, "body": e.body})
    except requests.RequestException as e:
        raise HTTPException(status_code=502, detail=str(e))
    except RecordError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except OSError as e:
        raise HTTPException(status_code=500, detail=f"cannot write {config.output}: {e}")

    return ExportResponse(saved_path=config.output, rows=rows, owner=config.owner, repo=config.repo)
