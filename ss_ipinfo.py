import os
import sys
import yaml

import ipdb_provision
import ss_annotate
import ss_runner

# --- CONFIGURATION ---
CONFIG_FILE = "ss_ipinfo.yaml"
CONFIG_ENV = "SS_IPINFO_CONFIG"

DEFAULTS = {
    'db_file': ipdb_provision.DB_FILE,
    'db_url': ipdb_provision.DB_URL,
    'ss_binary': ss_runner.SS_BINARY,
    'column_label': ss_annotate.COLUMN_LABEL,
    'language': ss_annotate.LANGUAGE,
}

def load_config(path=None):
    if path is None:
        path = os.environ.get(CONFIG_ENV, CONFIG_FILE)

    config = dict(DEFAULTS)
    if not path or not os.path.exists(path):
        return config

    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        print(f"[!] Warning: could not read {path}, using defaults ({e})", file=sys.stderr)
        return config

    if not isinstance(data, dict):
        print(f"[!] Warning: {path} is not a mapping, using defaults", file=sys.stderr)
        return config

    for key in DEFAULTS:
        if data.get(key) is not None:
            config[key] = str(data[key])
    return config

def print_usage():
    print("Usage: ss-ipinfo <ss command arguments>")
    print("Example: ss-ipinfo -ntp")

def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print_usage()
        return

    config = load_config()

    if not ipdb_provision.download_qqwry(config['db_file'], config['db_url']):
        print(f"[!] Cannot proceed without {config['db_file']} file", file=sys.stderr)
        sys.exit(1)

    db = ipdb_provision.load_database(config['db_file'])
    if db is None:
        sys.exit(1)

    ss_output = ss_runner.run_ss_command(args, config['ss_binary'])
    if ss_output is None:
        sys.exit(1)

    processed = ss_annotate.process_ss_output(
        ss_output, db, label=config['column_label'], language=config['language'])
    sys.stdout.write(processed if processed.endswith("\n") else processed + "\n")

if __name__ == "__main__":
    main()
