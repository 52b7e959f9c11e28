from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from laundry_enrich.job_runner import BatchController
from laundry_enrich.jobs import JobNotFoundError
from laundry_enrich.logging_utils import setup_logger
from laundry_enrich.pipeline import (
    InputFileNotFoundError,
    OutputOverwritesInputError,
    check_paths,
    enrich_laundry_file,
)

logger = setup_logger(__name__)

router = APIRouter()


class EnrichRequest(BaseModel):
    filePath: Optional[str] = None
    outputPath: Optional[str] = None


@lru_cache(maxsize=1)
def get_controller() -> BatchController:
    return BatchController()


def _require_file_path(payload: EnrichRequest) -> str:
    file_path = (payload.filePath or "").strip()
    if not file_path:
        raise HTTPException(status_code=400, detail={"success": False, "message": "Missing required field: filePath"})
    return file_path


@router.post("/enrich")
def enrich_file(payload: EnrichRequest) -> Dict[str, Any]:
    file_path = _require_file_path(payload)
    try:
        output_path = check_paths(file_path, payload.outputPath)
    except InputFileNotFoundError as e:
        raise HTTPException(status_code=404, detail={"success": False, "message": str(e)})
    except OutputOverwritesInputError as e:
        raise HTTPException(status_code=400, detail={"success": False, "message": str(e)})

    result = enrich_laundry_file(file_path, output_path)
    if result["success"]:
        return result
    raise HTTPException(status_code=500, detail=result)


@router.post("/enrich/batch")
def start_batch(payload: EnrichRequest, controller: BatchController = Depends(get_controller)) -> Dict[str, Any]:
    file_path = _require_file_path(payload)
    try:
        job_id = controller.submit(file_path, payload.outputPath)
    except InputFileNotFoundError as e:
        raise HTTPException(status_code=404, detail={"success": False, "message": str(e)})
    except OutputOverwritesInputError as e:
        raise HTTPException(status_code=400, detail={"success": False, "message": str(e)})
    return {"success": True, "message": "Batch enrichment started", "jobId": job_id}


@router.get("/enrich/batch/{job_id}")
def batch_status(job_id: str, controller: BatchController = Depends(get_controller)) -> Dict[str, Any]:
    try:
        job = controller.get_status(job_id)
    except JobNotFoundError as e:
        raise HTTPException(status_code=404, detail={"success": False, "message": str(e)})
    return {"success": True, **job.to_dict()}
