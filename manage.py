#!/usr/bin/env python3
"""
Apogee Portal — Service Management Tool

Single entry point for running, migrating and probing the three services
(quoting, benefit_designer, customer).
Usage: python manage.py <command> [options]
"""

import json
import logging
import os
import subprocess
import sys
import time
import urllib.request
from datetime import datetime
from typing import Dict, List, Optional


# ═══════════════════════════════════════════════════════════
#  Logging Setup
# ═══════════════════════════════════════════════════════════

class ColorFormatter(logging.Formatter):
    """Console formatter with ANSI colors and level symbols."""

    COLORS = {
        "INFO": "\033[96m",        # Cyan
        "SUCCESS": "\033[92m",     # Green
        "WARNING": "\033[93m",     # Yellow
        "ERROR": "\033[91m",       # Red
        "CRITICAL": "\033[91m\033[1m",  # Bold Red
        "DEBUG": "\033[94m",       # Blue
        "HEADER": "\033[95m",      # Magenta
        "BOLD": "\033[1m",
        "RESET": "\033[0m",
    }

    SYMBOLS = {
        "INFO": "→",
        "SUCCESS": "✓",
        "WARNING": "⚠",
        "ERROR": "✗",
        "CRITICAL": "☠",
        "DEBUG": "•",
        "STEP": "▶",
    }

    MARKERS = ("SUCCESS", "WARNING", "ERROR", "STEP")

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.platform != "win32"

    def _colorize(self, text: str, color_name: str) -> str:
        if not self.use_colors:
            return text
        color = self.COLORS.get(color_name, "")
        return f"{color}{text}{self.COLORS['RESET']}" if color else text

    def format(self, record: logging.LogRecord) -> str:
        msg = str(record.msg)

        symbol, color = self.SYMBOLS.get(record.levelname, ""), record.levelname
        for marker in self.MARKERS:
            if f"[{marker}]" in msg:
                symbol = self.SYMBOLS[marker]
                color = "INFO" if marker == "STEP" else marker
                msg = msg.replace(f"[{marker}] ", "")
                break

        if symbol and not msg.startswith(("===", " ")):
            msg = f"{symbol} {msg}"

        if msg.startswith("==="):
            record.msg = self._colorize(msg, "HEADER")
        else:
            record.msg = self._colorize(msg, color)
        return super().format(record)


# --- Bootstrap logger --------------------------------------------------------
_log_dir = "logs"
os.makedirs(_log_dir, exist_ok=True)
_log_file = os.path.join(_log_dir, f"manage-{datetime.now():%Y%m%d}.log")

_file_handler = logging.FileHandler(_log_file, encoding="utf-8")
_file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))

_console_handler = logging.StreamHandler()
_console_handler.setFormatter(ColorFormatter())

logging.basicConfig(level=logging.INFO, handlers=[_file_handler, _console_handler])
logger = logging.getLogger("manage")


# ═══════════════════════════════════════════════════════════
#  Service Manager
# ═══════════════════════════════════════════════════════════

BACKEND_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "backend")

SERVICE_PORTS: Dict[str, int] = {
    "quoting": 8001,
    "customer": 8002,
    "benefit_designer": 8003,
}


class ServiceManager:
    """Runs the portal services locally and manages their databases."""

    def __init__(self, host: str = "localhost"):
        self.host = host

    # ─── Helpers ──────────────────────────────────────────
    def _check_service(self, service: str) -> str:
        if service not in SERVICE_PORTS:
            raise ValueError(
                f"Unknown service '{service}' (expected one of: {', '.join(SERVICE_PORTS)})"
            )
        return service

    def _env(self, service: str) -> Dict[str, str]:
        env = dict(os.environ)
        env["SERVICE_NAME"] = service
        env.setdefault("POSTGRES_DB", f"apogee_{service}")
        return env

    def _run(self, cmd: List[str], env: Optional[Dict[str, str]] = None, check: bool = True) -> subprocess.CompletedProcess:
        logger.info(f"[STEP] Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, check=check, text=True, capture_output=True, cwd=BACKEND_DIR, env=env)
            if result.stdout:
                for line in result.stdout.strip().splitlines():
                    if line.strip():
                        logger.info(f"  {line.strip()}")
            if result.stderr:
                for line in result.stderr.strip().splitlines():
                    if line.strip():
                        logger.warning(f"  {line.strip()}")
            return result
        except subprocess.CalledProcessError as exc:
            logger.error(f"Command failed (exit {exc.returncode})")
            if exc.stderr:
                logger.error(f"  {exc.stderr.strip()}")
            raise

    def _url(self, service: str) -> str:
        return f"http://{self.host}:{SERVICE_PORTS[service]}"

    # ─── Core Commands ────────────────────────────────────
    def serve(self, service: str, reload: bool = False) -> None:
        """Run one service in the foreground with uvicorn (Ctrl-C to stop)."""
        service = self._check_service(service)
        port = SERVICE_PORTS[service]
        logger.info(f"\n=== Serving {service} on port {port} ===")

        cmd = [sys.executable, "-m", "uvicorn", "apogee.main:app", "--host", "0.0.0.0", "--port", str(port)]
        if reload:
            cmd.append("--reload")
        try:
            subprocess.run(cmd, cwd=BACKEND_DIR, env=self._env(service))
        except KeyboardInterrupt:
            logger.info(f"\n[SUCCESS] Stopped {service}")

    def migrate(self, service: str) -> None:
        """Apply Alembic migrations to the database the service owns."""
        service = self._check_service(service)
        logger.info(f"\n=== Migrating {service} database ===")
        self._run([sys.executable, "-m", "alembic", "upgrade", f"{service}@head"], env=self._env(service))
        logger.info("[SUCCESS] Database migrations applied!")

    def seed(self) -> None:
        """Insert the standard benefit categories (Benefit Designer database)."""
        logger.info("\n=== Seeding Benefit Categories ===")
        self._run(
            [sys.executable, "-m", "scripts.seed_categories"],
            env=self._env("benefit_designer"),
        )
        logger.info("[SUCCESS] Seed data inserted!")

    def token(self, user_id: str, email: str, roles: List[str], minutes: Optional[int] = None) -> str:
        """Issue a development portal token."""
        from apogee.core.security import create_access_token

        logger.info("\n=== Development Token ===")
        token = create_access_token({"userId": user_id, "email": email, "roles": roles}, minutes)
        logger.info(f"[SUCCESS] roles={','.join(roles)} email={email}")
        print(token)
        return token

    # ─── Health ───────────────────────────────────────────
    def health(self, timeout: int = 5) -> None:
        """Probe /health on every service."""
        logger.info("\n=== Service Health ===")
        for service in SERVICE_PORTS:
            url = f"{self._url(service)}/health"
            started = time.time()
            try:
                resp = urllib.request.urlopen(url, timeout=timeout)
                data = json.loads(resp.read().decode())
                elapsed = (time.time() - started) * 1000
                logger.info(
                    f"[SUCCESS] {service}: status={data.get('status')} env={data.get('env')} ({elapsed:.0f} ms)"
                )
            except Exception as exc:
                logger.error(f"[ERROR] {service} health check failed: {exc}")

    # ─── URLs ─────────────────────────────────────────────
    def urls(self) -> None:
        """Print access URLs for every service."""
        logger.info("\n=== Access URLs ===")
        for service in SERVICE_PORTS:
            logger.info(f"  {service:<18} {self._url(service)}  (docs: {self._url(service)}/docs)")


# ═══════════════════════════════════════════════════════════
#  CLI
# ═══════════════════════════════════════════════════════════

USAGE = f"""
{ColorFormatter.COLORS['HEADER']}Apogee Portal — Service Management{ColorFormatter.COLORS['RESET']}
{'═' * 50}

{ColorFormatter.COLORS['BOLD']}Usage:{ColorFormatter.COLORS['RESET']} python manage.py <command> [options]

{ColorFormatter.COLORS['BOLD']}Commands:{ColorFormatter.COLORS['RESET']}
    {ColorFormatter.COLORS['INFO']}serve SERVICE{ColorFormatter.COLORS['RESET']}     Run a service with uvicorn (--reload for dev)
    {ColorFormatter.COLORS['INFO']}migrate SERVICE{ColorFormatter.COLORS['RESET']}   Run Alembic migrations for a service
    {ColorFormatter.COLORS['INFO']}seed{ColorFormatter.COLORS['RESET']}              Insert the standard benefit categories
    {ColorFormatter.COLORS['INFO']}token{ColorFormatter.COLORS['RESET']}             Issue a development portal token
    {ColorFormatter.COLORS['INFO']}health{ColorFormatter.COLORS['RESET']}            Probe /health on every service
    {ColorFormatter.COLORS['INFO']}urls{ColorFormatter.COLORS['RESET']}              Show access URLs

{ColorFormatter.COLORS['BOLD']}Services:{ColorFormatter.COLORS['RESET']} {', '.join(SERVICE_PORTS)}

{ColorFormatter.COLORS['BOLD']}Options:{ColorFormatter.COLORS['RESET']}
    --reload          Auto-reload on code changes ('serve')
    --roles=A,B       Token roles (default: Admin)
    --email=ADDR      Token email (default: dev@apogee.local)
    --user=ID         Token userId (default: dev)
    --minutes=N       Token lifetime in minutes

{ColorFormatter.COLORS['BOLD']}Examples:{ColorFormatter.COLORS['RESET']}
    python manage.py serve quoting --reload
    python manage.py migrate customer
    python manage.py token --roles=Quoting
"""


def _option(opts: List[str], name: str, default: Optional[str] = None) -> Optional[str]:
    prefix = f"--{name}="
    for o in opts:
        if o.startswith(prefix):
            return o.split("=", 1)[1]
    return default


def main() -> None:
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(USAGE)
        sys.exit(0)

    command = sys.argv[1]
    args = [a for a in sys.argv[2:] if not a.startswith("--")]
    opts = [a for a in sys.argv[2:] if a.startswith("--")]

    mgr = ServiceManager()

    try:
        if command in ("serve", "migrate"):
            if not args:
                logger.error(f"'{command}' needs a service name")
                print(USAGE)
                sys.exit(1)
            if command == "serve":
                mgr.serve(args[0], reload="--reload" in opts)
            else:
                mgr.migrate(args[0])
        elif command == "seed":
            mgr.seed()
        elif command == "token":
            minutes = _option(opts, "minutes")
            mgr.token(
                user_id=_option(opts, "user", "dev"),
                email=_option(opts, "email", "dev@apogee.local"),
                roles=_option(opts, "roles", "Admin").split(","),
                minutes=int(minutes) if minutes else None,
            )
        elif command == "health":
            mgr.health()
        elif command == "urls":
            mgr.urls()
        else:
            logger.error(f"Unknown command: {command}")
            print(USAGE)
            sys.exit(1)
    except Exception as exc:
        logger.error(f"Operation failed: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
