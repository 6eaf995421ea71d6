"""
Run the AgriInfo API and the Chainlit front-end together.
"""

import os
import signal
import subprocess
import sys
from typing import Dict, List


def build_commands(api_port: int, ui_port: int) -> List[list]:
    python = sys.executable
    return [
        [python, "-m", "uvicorn", "agriinfo.api.server:app", "--reload", "--port", str(api_port)],
        [python, "-m", "chainlit", "run", "chainlit_app.py", "--watch", "--port", str(ui_port)],
    ]


def build_env(api_port: int) -> Dict[str, str]:
    env = dict(os.environ)
    env.setdefault("BACKEND_URL", f"http://localhost:{api_port}")
    return env


def stop_all(processes: List[subprocess.Popen]) -> None:
    for proc in processes:
        if proc.poll() is None:
            proc.terminate()
    for proc in processes:
        if proc.poll() is None:
            proc.wait()


def main():
    api_port = int(os.getenv("FASTAPI_PORT", "8000"))
    ui_port = int(os.getenv("CHAINLIT_PORT", "8001"))
    processes: List[subprocess.Popen] = []

    def handle_signal(signum, frame):
        stop_all(processes)
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_signal)
    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, handle_signal)

    env = build_env(api_port)
    for cmd in build_commands(api_port, ui_port):
        print(f"Starting: {' '.join(cmd)}")
        processes.append(subprocess.Popen(cmd, env=env))

    try:
        for proc in processes:
            proc.wait()
    except KeyboardInterrupt:
        pass
    finally:
        stop_all(processes)


if __name__ == "__main__":
    main()
