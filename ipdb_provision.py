import os
import sys
import requests
import ipdb

# --- CONFIGURATION ---
DB_FILE = "qqwry.ipdb"
DB_URL = "https://cdn.jsdelivr.net/npm/qqwry.raw.ipdb/qqwry.ipdb"
HEADERS = {'User-Agent': 'ss-ipinfo/1.0'}
CHUNK_SIZE = 64 * 1024

def log(msg, end="\n"):
    print(msg, end=end, file=sys.stderr, flush=True)

# ==============================================================================
# 1. DOWNLOAD
# ==============================================================================
def download_qqwry(db_file=DB_FILE, url=DB_URL):
    """
    Makes sure the IP database exists on disk, fetching it once if missing.
    Returns True when the file is usable, False otherwise.
    """
    if os.path.exists(db_file):
        return True

    log(f"[*] {db_file} not found, downloading...")
    log(f"    - Source: {url}")

    try:
        resp = requests.get(url, headers=HEADERS, stream=True)
    except requests.RequestException as e:
        log(f"[!] Failed to download {db_file}: {e}")
        log(f"    Please download it manually from: {url}")
        return False

    with resp:
        if resp.status_code != 200:
            log(f"[!] Failed to download {db_file}: HTTP {resp.status_code}")
            log(f"    Please download it manually from: {url}")
            return False

        log("    - Downloading...", end=" ")
        written = 0
        try:
            with open(db_file, 'wb') as f:
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        written += len(chunk)
        except (OSError, requests.RequestException) as e:
            log("FAIL")
            log(f"[!] Failed to write {db_file}: {e}")
            # A truncated file would be trusted on the next run
            if os.path.exists(db_file):
                os.remove(db_file)
            return False

    log(f"OK ({written//1024} KB)")
    log("[+] Download completed successfully!")
    return True

# ==============================================================================
# 2. LOAD
# ==============================================================================
def load_database(db_file=DB_FILE):
    try:
        return ipdb.City(db_file)
    except Exception as e:
        log(f"[!] Failed to load {db_file}: {e}")
        return None
