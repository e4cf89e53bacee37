import json
import logging
from typing import Any

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from profile_processor import settings
from profile_processor.batch import InvalidPayloadError, process_batch
from profile_processor.normalizers import get_default_normalizer
from profile_processor.schemas import ProcessResponse, SampleRunResponse

log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="/api", tags=["process"])


def _error_detail(e: Exception) -> str:
    # Don't leak internals outside development
    return str(e) if not settings.IS_PRODUCTION else "Something went wrong"


@router.post("/process-profiles", response_model=ProcessResponse)
def process_profiles(payload: Any = Body(None)):
    """
    Normalize one profile or a batch of profiles.

    Accepts:
        A single profile object, an array of profiles, or an array of
        {"json": profile} wrappers. Items without a `urn` are filtered out.

    Returns:
        {
          "items": [ ...normalized profiles, input order... ],
          "metadata": {"processed", "filtered", "total", "failed", "processingTimeMs"},
          "errors": [ {"index", "urn", "error"} for profiles that failed to decode ]
        }
    """
    normalizer = get_default_normalizer()
    try:
        result = process_batch(payload, normalizer=normalizer)
    except InvalidPayloadError as e:
        return JSONResponse(status_code=400, content={"error": str(e), "received": e.received})
    except Exception as e:
        log.exception("processing failed")
        return JSONResponse(
            status_code=500,
            content={"error": "Processing failed", "message": _error_detail(e)},
        )

    return {"items": result.items, "metadata": result.metadata, "errors": result.errors}


@router.post("/test", response_model=SampleRunResponse)
def run_sample():
    """
    Run the bundled sample profiles through the same pipeline.
    Handy for smoke-testing a fresh deployment.
    """
    try:
        with open(settings.TEST_DATA_PATH, encoding="utf-8") as f:
            sample = json.load(f)
        result = process_batch(sample, normalizer=get_default_normalizer())
    except Exception as e:
        log.exception("sample run failed: path=%s", settings.TEST_DATA_PATH)
        return JSONResponse(status_code=500, content={"error": "Test failed", "message": str(e)})

    return {
        "message": "Test completed successfully",
        "items": result.items,
        "processed": len(result.items),
    }
