import os
import sys
import subprocess

# --- CONFIGURATION ---
SS_BINARY = "ss"
DEFAULT_WIDTH = 80

def get_terminal_width(default=DEFAULT_WIDTH):
    try:
        return os.get_terminal_size(sys.stdin.fileno()).columns
    except (OSError, ValueError, AttributeError) as e:
        # stdin is a pipe/file, or was closed/replaced
        print(f"Warning: Could not get terminal width: {e}", file=sys.stderr)
        return default

def run_ss_command(args, ss_binary=SS_BINARY):
    """
    Runs ss with the given arguments and returns its stdout as text,
    or None if the command failed or could not be started.
    """
    env = dict(os.environ)
    # ss sizes its columns from COLUMNS when stdout is not a tty
    env["COLUMNS"] = str(get_terminal_width())
    env["TERM"] = "xterm"

    try:
        result = subprocess.run(
            [ss_binary] + list(args),
            env=env,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
        )
    except subprocess.CalledProcessError as e:
        print(f"[!] Failed to run ss command: {e}", file=sys.stderr)
        print(f"    Error output: {(e.stderr or '').strip()}", file=sys.stderr)
        return None
    except FileNotFoundError:
        print("[!] Error: ss command not found, please ensure it's installed", file=sys.stderr)
        return None
    except OSError as e:
        print(f"[!] Failed to start {ss_binary}: {e}", file=sys.stderr)
        return None

    return result.stdout
