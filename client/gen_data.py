# client/gen_data.py
import random

FIRST = ["Alex","Jamie","Taylor","Jordan","Sam","Avery","Camille","Riley","Morgan","Quinn","Léa","Cameron"]
LAST  = ["Chen","Garcia","Patel","Santos","Lee","Kim","Durand","Brown","Martin","Martinez","Dubois","Nguyen"]
CITIES= ["New York, United States","San Francisco Bay Area","London, England","Paris, Île-de-France, France",
         "Lyon, Auvergne-Rhône-Alpes, France","Berlin, Germany","Toronto, Canada"]
COMPANIES = [("Acme Corp","Software Development","51 - 200"), ("Globex","Banking","1001 - 5000"),
             ("Initech","IT Services","201 - 500"), ("Datalyon","Software Development","11 - 50"),
             ("Umbrella","Biotechnology","5001 - 10000")]
TITLES = ["Software Engineer","Data Engineer","Product Manager","Data Analyst","Engineering Manager","Designer"]
JUNIOR = [("Stagiaire Développeur","Internship"), ("Summer Intern","Internship"), ("Mentor","Volunteer")]
SKILLS = ["Python","SQL","Spark","Kubernetes","Product Discovery","Figma","Go","Machine Learning","Airflow"]
LANGS  = ["English","Français","Spanish","German","Italian"]
LOCALES= ["FR","US","EN","DE"]
SCHOOLS= ["INSA Lyon","State University","HEC Paris","TU Berlin","University of Toronto"]
DEGREES= [("Master","Computer Science"), ("Bachelor","Economics"), ("MBA",""), ("","Data Science")]

def _name(): return random.choice(FIRST), random.choice(LAST)
def _username(first, last): return f"{first.lower()}-{last.lower()}-{random.randint(10,999)}"

def _position(year, months, company_id, company, current=False, junior=None):
    name, industry, size = company
    title, etype = junior or (random.choice(TITLES), "Full-time")
    start = {"year": year, "month": random.randint(1, 12)} if random.random() < 0.8 else {"year": year}
    pos = {
        "companyId": company_id,
        "companyName": name,
        "companyIndustry": industry,
        "companyStaffCountRange": size,
        "title": title,
        "employmentType": etype,
        "description": f"{title} at {name}.",
        "start": start,
    }
    if not current:
        end_year = year + months // 12
        pos["end"] = {"year": end_year, "month": random.randint(1, 12)}
    return pos

def gen_profile_record(with_urn: bool = True):
    first, last = _name()
    positions = []
    year = random.randint(2008, 2022)
    # oldest first while building, then reversed so the newest is on top
    if random.random() < 0.4:
        positions.append(_position(year - 1, 6, 900, random.choice(COMPANIES), junior=random.choice(JUNIOR)))
    for _ in range(random.randint(0, 4)):
        company_idx = random.randrange(len(COMPANIES))
        months = random.randint(8, 48)
        positions.append(_position(year, months, company_idx + 1, COMPANIES[company_idx]))
        year += max(1, months // 12)
    if positions and random.random() < 0.8:
        positions[-1].pop("end", None)
    positions.reverse()

    edu_start = random.randint(2000, 2018)
    degree, field = random.choice(DEGREES)
    rec = {
        "username": _username(first, last),
        "firstName": first,
        "lastName": last,
        "headline": f"{random.choice(TITLES)} | {' '.join(random.sample(SKILLS, k=2))}",
        "summary": random.choice(["", "Building data products.", "Shipping things people use."]),
        "isOpenToWork": random.choice([True, False, None]),
        "isHiring": random.choice([True, False]),
        "geo": {"full": random.choice(CITIES)},
        "supportedLocales": [{"country": random.choice(LOCALES)}],
        "languages": [{"name": n} for n in random.sample(LANGS, k=random.randint(0, 2))],
        "skills": [{"name": n} for n in random.sample(SKILLS, k=random.randint(0, 4))],
        "positions": positions,
        "educations": [{
            "degree": degree, "fieldOfStudy": field, "schoolName": random.choice(SCHOOLS),
            "start": {"year": edu_start}, "end": {"year": edu_start + random.randint(2, 5)},
        }],
    }
    if with_urn:
        rec["urn"] = f"ACoAA{random.randint(10**6, 10**7 - 1)}"
    return rec
