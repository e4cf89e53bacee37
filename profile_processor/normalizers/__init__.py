from .pipeline import get_default_normalizer, NormalizerPipeline
from .profile import ProfileNormalizer, normalize_profile
from .identifiers import ProfileDecodeError, decode_uri
from .dates import reconstruct_date
from .types import Profile, Record, UNKNOWN_YEARS_OF_EXPERIENCE
from .base import Normalizer

__all__ = [
    "get_default_normalizer",
    "NormalizerPipeline",
    "ProfileNormalizer",
    "normalize_profile",
    "ProfileDecodeError",
    "decode_uri",
    "reconstruct_date",
    "Profile",
    "Record",
    "UNKNOWN_YEARS_OF_EXPERIENCE",
    "Normalizer",
]
