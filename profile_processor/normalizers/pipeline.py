from datetime import datetime
from typing import List, Optional
from .base import Normalizer
from .types import Profile, Record
from .profile import ProfileNormalizer

class NormalizerPipeline(Normalizer):
    """
    A chain of normalizers.
    Each stage takes the output of the previous stage and all stages share
    the same `now`, so durations agree across the whole chain.
    """
    def __init__(self, stages: List[Normalizer]):
        self.stages = stages

    def normalize_record(self, rec: Profile, now: Optional[datetime] = None) -> Record:
        now = now or datetime.now()
        out = rec  # stages never mutate their input
        for stage in self.stages:
            out = stage.normalize_record(out, now=now)
        return out

def get_default_normalizer() -> Normalizer:
    """
    Factory for the default pipeline.
    Currently just the rule-based profile normalizer; extra stages
    (enrichment, tagging) slot in after it.
    """
    return NormalizerPipeline([ProfileNormalizer()])
