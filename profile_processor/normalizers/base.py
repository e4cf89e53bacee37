# profile_processor/normalizers/base.py
from datetime import datetime
from typing import Optional, Protocol
from .types import Profile, Record

class Normalizer(Protocol):
    def normalize_record(self, rec: Profile, now: Optional[datetime] = None) -> Record:
        """Return a NEW normalized record. Do not mutate `rec`."""
        ...
