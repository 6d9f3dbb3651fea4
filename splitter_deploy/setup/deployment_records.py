"""
Deployment Records

Every successful Splitter deployment is written to
``deployments/splitter_<network>_<timestamp>.json`` so a later run can verify
it without redeploying.

Record layout:
    {"network", "variant", "address", "constructor_args", "tx_hash",
     "block_number", "gas_used", "deployer", "timestamp"}
"""
from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from pathlib import Path

from splitter_deploy.models import DeploymentResult

logger = logging.getLogger(__name__)

DEPLOYMENTS_DIR = Path("deployments")
RECORD_GLOB = "splitter_*.json"


def _load_json(path: Path) -> dict | None:
    try:
        with open(path) as f:
            return json.load(f)
    except (OSError, ValueError):
        logger.warning("Skipping unreadable deployment record %s", path)
        return None


def _is_hex_address(s: object) -> bool:
    return isinstance(s, str) and bool(re.fullmatch(r"0x[a-fA-F0-9]{40}", s))


def _timestamp(result: DeploymentResult) -> float:
    try:
        return datetime.fromisoformat(result.timestamp.replace("Z", "+00:00")).timestamp()
    except ValueError:
        return 0.0


def save_record(result: DeploymentResult, deployments_dir: Path = DEPLOYMENTS_DIR) -> Path:
    """Write ``result`` to a new record file and return its path."""
    deployments_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    path = deployments_dir / f"splitter_{result.network}_{stamp}.json"
    with open(path, "w") as f:
        json.dump(result.to_dict(), f, indent=2)
    logger.info("Saved deployment info to %s", path)
    return path


def scan_records(deployments_dir: Path = DEPLOYMENTS_DIR, network: str | None = None) -> list[DeploymentResult]:
    """Load every valid record, oldest first."""
    results: list[DeploymentResult] = []
    for p in sorted(deployments_dir.glob(RECORD_GLOB)):
        data = _load_json(p)
        if not isinstance(data, dict):
            continue
        try:
            result = DeploymentResult.from_dict(data)
        except (KeyError, TypeError):
            continue
        if not _is_hex_address(result.address) or not isinstance(result.timestamp, str):
            logger.warning("Skipping malformed deployment record %s", p)
            continue
        if network is not None and result.network != network:
            continue
        results.append(result)
    results.sort(key=_timestamp)
    return results


def latest_record(network: str, deployments_dir: Path = DEPLOYMENTS_DIR) -> DeploymentResult | None:
    records = scan_records(deployments_dir, network)
    return records[-1] if records else None
