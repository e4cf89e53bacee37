import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
from profile_processor.normalizers import Normalizer, ProfileDecodeError, get_default_normalizer

log = logging.getLogger(__name__)


class InvalidPayloadError(ValueError):
    """Top-level payload is neither a profile object nor an array of them."""
    def __init__(self, received: Any):
        super().__init__("Invalid input format. Expected object or array.")
        self.received = type(received).__name__


@dataclass
class BatchResult:
    items: List[Dict] = field(default_factory=list)
    errors: List[Dict] = field(default_factory=list)
    total: int = 0
    filtered: int = 0
    processing_time_ms: int = 0

    @property
    def metadata(self) -> Dict[str, int]:
        return {
            "processed": len(self.items),
            "filtered": self.filtered,
            "total": self.total,
            "failed": len(self.errors),
            "processingTimeMs": self.processing_time_ms,
        }


def as_items(payload: Any) -> List[Any]:
    """Accept a single profile object or an array; anything else is rejected."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        log.debug("converted single object to array")
        return [payload]
    raise InvalidPayloadError(payload)


def extract_profiles(items: List[Any]) -> List[Dict]:
    """
    Pull profiles out of the batch and drop anything without a `urn`.

    Workflow tools send items wrapped as {"json": profile}; the first item
    decides which shape the whole batch is read as.
    """
    if items and isinstance(items[0], dict) and items[0].get("json"):
        profiles = [it["json"] for it in items
                    if isinstance(it, dict) and isinstance(it.get("json"), dict) and "urn" in it["json"]]
        log.info("wrapped format: %d/%d item(s) kept", len(profiles), len(items))
    else:
        profiles = [it for it in items if isinstance(it, dict) and "urn" in it]
        log.info("direct format: %d/%d item(s) kept", len(profiles), len(items))
    return profiles


def process_batch(
    payload: Any, normalizer: Optional[Normalizer] = None, now: Optional[datetime] = None
) -> BatchResult:
    """
    Normalize every valid profile in `payload`, in input order.

    One `now` is shared by the whole batch. A profile whose identifier can't
    be decoded, or that fails to normalize, is reported in `errors` and
    skipped; the rest still go through.
    """
    started = time.perf_counter()
    normalizer = normalizer or get_default_normalizer()
    now = now or datetime.now()

    items = as_items(payload)
    profiles = extract_profiles(items)
    result = BatchResult(total=len(items), filtered=len(profiles))

    for i, profile in enumerate(profiles):
        log.debug("processing profile %d: %s %s", i + 1, profile.get("firstName"), profile.get("lastName"))
        try:
            result.items.append(normalizer.normalize_record(profile, now=now))
        except ProfileDecodeError as e:
            log.warning("profile rejected: index=%d urn=%s: %s", i, profile.get("urn"), e)
            result.errors.append({"index": i, "urn": profile.get("urn"), "error": str(e)})
        except (TypeError, ValueError, AttributeError) as e:
            log.exception("profile failed: index=%d urn=%s", i, profile.get("urn"))
            result.errors.append({"index": i, "urn": profile.get("urn"), "error": str(e)})

    result.processing_time_ms = int((time.perf_counter() - started) * 1000)
    log.info("processing complete: %s", result.metadata)
    return result
