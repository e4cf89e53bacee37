import os, requests
from dotenv import load_dotenv
load_dotenv()
API = os.getenv("API_BASE_URL", "http://localhost:3000")
S = requests.Session(); S.headers.update({"Content-Type":"application/json"})

def health():    r=S.get(f"{API}/health",timeout=10); r.raise_for_status(); return r.json()
def debug():     r=S.get(f"{API}/debug",timeout=10); r.raise_for_status(); return r.json()
def process(b):  r=S.post(f"{API}/api/process-profiles",json=b,timeout=120); r.raise_for_status(); return r.json()
def sample_run():r=S.post(f"{API}/api/test",timeout=60); r.raise_for_status(); return r.json()
