import re

# --- CONFIGURATION ---
COLUMN_LABEL = "IPInfo"
LANGUAGE = "CN"
LOCAL_ADDRESSES = {"", "0.0.0.0", "127.0.0.1"}

# Order matters: these are the fields joined into the location string.
# Builds of the database differ in which of them they carry.
LOCATION_FIELDS = ("country_name", "region_name", "city_name", "district_name", "isp_domain")

# Matches: 1.2.3.4:443 | [2001:db8::1]:443 | *:* | 0.0.0.0:*
PEER_PATTERN = re.compile(r'(\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}:\d+|\[[^\]]+\]:\d+|\*:\*|0\.0\.0\.0:\*)')
IPV4_PORT = re.compile(r'^(\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}):\d+$')
IPV6_PORT = re.compile(r'^\[([^\]]+)\]:\d+$')

# ==============================================================================
# 1. ADDRESS RESOLVER
# ==============================================================================
def parse_peer_address(peer):
    """Strips the port from ip:port / [ip]:port. Wildcards give ''."""
    if not peer or peer == "*":
        return ""

    m = IPV4_PORT.match(peer)
    if m:
        return m.group(1)

    if "[" in peer and "]:" in peer:
        m = IPV6_PORT.match(peer)
        if m:
            return m.group(1)

    return ""

def get_ip_info(db, ip, language=LANGUAGE):
    if ip in LOCAL_ADDRESSES:
        return "Local/Unknown"

    try:
        location = db.find_map(ip, language)
    except Exception as e:
        return f"Query failed: {e}"

    parts = [str(location.get(k) or "").strip() for k in LOCATION_FIELDS]
    result = " ".join(p for p in parts if p)
    return result or "Unknown"

def lookup_peer(db, peer, language=LANGUAGE):
    return get_ip_info(db, parse_peer_address(peer), language)

# ==============================================================================
# 2. OUTPUT ANNOTATOR
# ==============================================================================
def find_header_index(lines):
    for i, line in enumerate(lines):
        if "State" in line or "Recv-Q" in line:
            return i
    return -1

def find_peer_address(line):
    """
    Picks the peer endpoint out of an ss row.

    Heuristic: ss prints local before peer, so with two or more address
    matches the second one is the peer. With a single match, the first
    field from the 4th column onward that carries an address is used.
    Returns None when no peer can be identified.
    """
    matches = PEER_PATTERN.findall(line)
    if len(matches) >= 2:
        return matches[1]

    if len(matches) == 1:
        fields = line.split()
        for field in fields[3:]:
            if PEER_PATTERN.search(field):
                return field

    return None

def resolve_row(line, db, language=LANGUAGE):
    peer = find_peer_address(line)
    if peer is None:
        return "N/A"

    ip = parse_peer_address(peer)
    if not ip:
        return "N/A"

    return get_ip_info(db, ip, language)

def process_ss_output(output, db, label=COLUMN_LABEL, language=LANGUAGE):
    lines = output.rstrip("\r\n").split("\n")

    header_index = find_header_index(lines)
    if header_index == -1:
        return output

    processed = lines[:header_index]
    processed.append(lines[header_index].rstrip() + " " + label)

    for line in lines[header_index + 1:]:
        if not line.strip():
            processed.append(line)
            continue

        try:
            ip_info = resolve_row(line, db, language)
        except Exception:
            ip_info = "N/A"

        processed.append(line.rstrip() + " " + ip_info)

    return "\n".join(processed)
