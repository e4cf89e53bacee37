# profile_processor/normalizers/profile.py
from datetime import datetime
import re
from typing import Any, Dict, List, Optional
from .base import Normalizer
from .dates import month_year, months_between, reconstruct_date, round_half_up, years_since
from .identifiers import profile_url, public_identifier
from .types import Profile, Record, UNKNOWN_YEARS_OF_EXPERIENCE

# Positions shorter than this don't anchor the start of a career.
MIN_RELEVANT_MONTHS = 7

# Matched as substrings of the lower-cased employment type and title.
EXCLUDED_MARKERS = ("intern", "stagiaire", "volunteer", "bénévole")

FRENCH, ENGLISH = "Français", "English"
ENGLISH_LOCALES = ("US", "EN")

# Unicode whitespace plus the BOM (U+FEFF), which \s leaves out.
_WS = re.compile(r"[\s\ufeff]+")


class ProfileNormalizer(Normalizer):
    """
    Rule-based normalizer for LinkedIn-style profiles:
    flattens one raw profile into an analytics-friendly record
    (keywords, grouped experiences, seniority, cleaned education...).
    """
    def normalize_record(self, rec: Profile, now: Optional[datetime] = None) -> Record:
        return normalize_profile(rec, now=now)


def normalize_profile(profile: Profile, now: Optional[datetime] = None) -> Record:
    """
    Build the normalized record for one profile.

    `now` is read once and reused for every duration so a single call is
    internally consistent. Missing or wrongly typed optional fields are
    defaulted; only a malformed percent-encoded username raises
    (ProfileDecodeError).
    """
    now = now or datetime.now()
    positions = _list(profile.get("positions", profile.get("position")))
    skills = _list(profile.get("skills"))
    languages = _list(profile.get("languages"))

    keywords: Dict[str, None] = {}  # insertion-ordered set
    _add_words(keywords, profile.get("summary"))
    _add_words(keywords, profile.get("headline"))
    for entry in skills + languages:
        if isinstance(entry, dict):
            _add_words(keywords, entry.get("name"))

    experiences = group_experiences(positions, now, keywords)
    relevant = [p for p in positions if isinstance(p, dict) and not is_excluded_position(p)]
    educations = clean_educations(profile.get("educations"))

    out: Record = {"linkedin_public_identifier": profile.get("linkedin_public_identifier")}
    out["experiences"] = experiences
    out["years_of_experience"] = years_of_experience(relevant, now)
    out["keywords"] = " ".join(keywords)
    out.update(current_position_fields(positions))
    out["job_titles"] = ", ".join(t for t in (_str(p.get("title")) for p in relevant) if t)
    out["industries_tag"] = ", ".join(i for i in (_str(p.get("companyIndustry")) for p in relevant) if i)
    out["educations"] = educations

    out["firstname"] = _str(profile.get("firstName"))
    out["lastname"] = _str(profile.get("lastName"))
    out["profile_pic"] = _str(profile.get("profilePicture"))
    out["spotlight"] = "Open to work" if profile.get("isOpenToWork") else ""
    out["is_open_to_work"] = _default(profile.get("isOpenToWork"), False)
    out["is_hiring"] = _default(profile.get("isHiring"), False)
    out["about"] = _str(profile.get("summary"))
    out["languages"] = infer_languages(languages, profile.get("supportedLocales"))
    out["skills"] = (
        {"skills": [s.get("name") if isinstance(s, dict) else None for s in skills], "details": skills}
        if isinstance(profile.get("skills"), list) else {}
    )
    out["headline"] = _str(profile.get("headline"))
    out["current_employment_duration"] = experiences[0]["jobs"][0]["duration"] if experiences else 0

    out["degrees"] = ", ".join(e.get("degree", "") for e in educations)
    out["schools"] = ", ".join(e["school"] for e in educations)
    out["companies"] = ",".join(g["company"] for g in experiences)

    username = profile.get("username")
    username = str(username) if username not in (None, "") else None
    out["public_linkedin_identifier"] = public_identifier(username)
    out["linkedin_url"] = profile_url(username)
    out["urn"] = profile.get("urn")

    geo = profile.get("geo")
    out["location"] = _str(geo.get("full")) if isinstance(geo, dict) else ""

    out["profil_details"] = profile
    return out


# --- Experiences ---

def group_experiences(positions: List[Any], now: datetime, keywords: Optional[Dict[str, None]] = None) -> List[Record]:
    """
    Fold positions into employer groups.
    A job joins the open group only when its companyId matches the job right
    before it; the same employer after a different one starts a new group.
    """
    groups: List[Record] = []
    last_company_id = None
    current = None

    for pos in positions:
        if not isinstance(pos, dict):
            pos = {}
        company_id = pos.get("companyId") or ""
        job = job_entry(pos, now)

        if keywords is not None:
            _add_words(keywords, pos.get("title"))
            _add_words(keywords, pos.get("description"))

        if current is not None and company_id == last_company_id:
            current["jobs"].append(job)
        else:
            current = {
                "company": _str(pos.get("companyName")) or "Unknown Company",
                "companyId": company_id,
                "companyLink": _str(pos.get("companyURL")),
                "companyLogo": _str(pos.get("companyLogo")),
                "companyRange": _str(pos.get("companyStaffCountRange")),
                "companyIndustry": _str(pos.get("companyIndustry")),
                "companyDescription": _str(pos.get("companyDescription")),
                "companySpecialties": _str(pos.get("companySpecialties")),
                "jobs": [job],
            }
            groups.append(current)
        last_company_id = company_id

    return groups


def job_entry(pos: Dict[str, Any], now: datetime) -> Record:
    """One job line: title, rounded duration in months and a display date range."""
    start = reconstruct_date(pos.get("start"), now.tzinfo)
    end = reconstruct_date(pos.get("end"), now.tzinfo) or now

    months = 0.0
    date_range = ""
    if start:
        months = months_between(start, end)
        date_range = f"{month_year(start)} - {month_year(end) if end < now else 'Present'}"

    return {
        "jobTitle": _str(pos.get("title")),
        "duration": round_half_up(months),
        "dateRange": date_range,
        "description": _str(pos.get("description")),
        "employmentType": _str(pos.get("employmentType")),
    }


# --- Seniority ---

def is_excluded_position(pos: Any) -> bool:
    """Internships and volunteering don't count toward years of experience."""
    if not isinstance(pos, dict):
        return False
    fields = (_lower(pos.get("employmentType")), _lower(pos.get("title")))
    return any(k in f for f in fields for k in EXCLUDED_MARKERS)


def years_of_experience(positions: List[Any], now: datetime) -> int:
    """
    Years since the earliest start among positions lasting at least
    MIN_RELEVANT_MONTHS. Returns 99 when nothing qualifies.
    """
    earliest = None
    for pos in positions:
        if not isinstance(pos, dict):
            continue
        start = reconstruct_date(pos.get("start"), now.tzinfo)
        if not start:
            continue
        end = reconstruct_date(pos.get("end"), now.tzinfo) or now
        if months_between(start, end) >= MIN_RELEVANT_MONTHS and (earliest is None or start < earliest):
            earliest = start

    if earliest is None:
        return UNKNOWN_YEARS_OF_EXPERIENCE
    return max(0, round_half_up(years_since(earliest, now)))


def current_position_fields(positions: List[Any]) -> Record:
    """Snapshot of the first open-ended position (no end, or an end without a year)."""
    current = next(
        (p for p in positions if isinstance(p, dict)
         and not (isinstance(p.get("end"), dict) and p["end"].get("year"))),
        {},
    )
    return {
        "current_industry": _str(current.get("companyIndustry")),
        "current_job_title": _str(current.get("title")),
        "current_company": _str(current.get("companyName")),
        "current_employment_type": _str(current.get("employmentType")),
        "current_company_employee_range": _str(current.get("companyStaffCountRange")),
    }


# --- Education ---

def clean_educations(educations: Any) -> List[Record]:
    """Keep entries that have a degree or a school; format their year range."""
    cleaned = []
    for edu in _list(educations):
        if not isinstance(edu, dict):
            continue
        entry: Record = {}

        date = education_dates(_year(edu.get("start")), _year(edu.get("end")))
        if date:
            entry["date"] = date

        degree = ", ".join(x for x in (_str(edu.get("degree")), _str(edu.get("fieldOfStudy"))) if x)
        if degree:
            entry["degree"] = degree

        entry["school"] = _str(edu.get("schoolName"))

        if entry.get("degree") or entry["school"]:
            cleaned.append(entry)
    return cleaned


def education_dates(start_year, end_year) -> str:
    if start_year and end_year:
        return f"{start_year} - {end_year}"
    if start_year:
        return f"Depuis {start_year}"
    if end_year:
        return f"Jusqu'à {end_year}"
    return ""


# --- Languages ---

def infer_languages(languages: List[Any], supported_locales: Any) -> str:
    """
    Comma-joined language names, topped up with the language implied by the
    profile's first supported locale (FR -> Français, US/EN -> English).
    """
    locales = _list(supported_locales)
    country = locales[0].get("country") if locales and isinstance(locales[0], dict) else None

    if not languages:
        if country == "FR":
            return FRENCH
        if country in ENGLISH_LOCALES:
            return ENGLISH
        return ""

    names = [_str(lang.get("name")) if isinstance(lang, dict) else "" for lang in languages]
    if country == "FR" and not any(n in (FRENCH, "French") for n in names):
        names.append(FRENCH)
    if country in ENGLISH_LOCALES and ENGLISH not in names:
        names.append(ENGLISH)
    return ", ".join(names)


# --- Small helpers ---

def _add_words(keywords: Dict[str, None], text: Any):
    """Add whitespace-separated tokens of `text` to the ordered keyword set."""
    if not isinstance(text, str) or not text:
        return
    for word in _WS.split(text):
        if word:
            keywords.setdefault(word, None)

def _list(v: Any) -> List[Any]:
    return v if isinstance(v, list) else []

def _str(v: Any) -> str:
    return v if isinstance(v, str) else ""

def _lower(s: Any) -> str:
    return s.lower() if isinstance(s, str) else ""

def _year(d: Any):
    return d.get("year") if isinstance(d, dict) else None

def _default(v: Any, fallback: Any):
    return fallback if v is None else v
