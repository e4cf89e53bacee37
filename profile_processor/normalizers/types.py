# profile_processor/normalizers/types.py
from typing import Any, Dict

# Raw profile as received (LinkedIn-style JSON) and the flat record we emit.
Profile = Dict[str, Any]
Record = Dict[str, Any]

UNKNOWN_YEARS_OF_EXPERIENCE = 99
