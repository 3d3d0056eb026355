import logging
from dataclasses import dataclass

import httpx

from config import LaspadUiConfig

logger = logging.getLogger(__name__)

CRITICAL_CHECKS = {"server_url", "server_reachable"}


@dataclass
class HealthCheckResult:
    name: str
    passed: bool
    detail: str


def run_startup_checks(
    config: LaspadUiConfig,
    transport: httpx.BaseTransport | None = None,
) -> list[HealthCheckResult]:
    results = [
        _check_server_url(config),
        _check_endpoints(config),
        _check_server_reachable(config, transport),
    ]

    passed = sum(1 for r in results if r.passed)

    logger.info("Health check: %d/%d passed", passed, len(results))
    for result in results:
        level = logging.INFO if result.passed else logging.WARNING
        symbol = "OK" if result.passed else "FAIL"
        logger.log(level, "  [%s] %s: %s", symbol, result.name, result.detail)

    return results


def has_critical_failures(results: list[HealthCheckResult]) -> bool:
    return any(not r.passed and r.name in CRITICAL_CHECKS for r in results)


def _check_server_url(config: LaspadUiConfig) -> HealthCheckResult:
    name = "server_url"
    try:
        url = httpx.URL(config.server_url)
    except httpx.InvalidURL as exc:
        return HealthCheckResult(name=name, passed=False, detail=str(exc))
    if url.scheme not in ("http", "https") or not url.host:
        return HealthCheckResult(
            name=name, passed=False, detail=f"'{config.server_url}' is not an http(s) URL"
        )
    return HealthCheckResult(name=name, passed=True, detail=config.server_url)


def _check_endpoints(config: LaspadUiConfig) -> HealthCheckResult:
    name = "endpoints"
    bad = [
        endpoint
        for endpoint in (config.poll_endpoint, config.branches_endpoint)
        if not endpoint.startswith("/")
    ]
    if bad:
        return HealthCheckResult(name=name, passed=False, detail=f"Not absolute paths: {', '.join(bad)}")
    return HealthCheckResult(
        name=name, passed=True, detail=f"poll={config.poll_endpoint} branches={config.branches_endpoint}"
    )


def _check_server_reachable(
    config: LaspadUiConfig,
    transport: httpx.BaseTransport | None,
) -> HealthCheckResult:
    name = "server_reachable"
    try:
        with httpx.Client(timeout=config.health_timeout_seconds, transport=transport) as client:
            response = client.get(config.server_url.rstrip("/") + "/")
        return HealthCheckResult(
            name=name, passed=True, detail=f"HTTP {response.status_code} from {config.server_url}"
        )
    except httpx.HTTPError as exc:
        return HealthCheckResult(name=name, passed=False, detail=str(exc) or type(exc).__name__)
    except Exception as exc:
        return HealthCheckResult(name=name, passed=False, detail=str(exc))
