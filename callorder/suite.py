"""YAML suite files listing contracts to verify.

A suite names contracts by import target and optionally carries harness
configuration::

    config:
      scenario_timeout: 5
    contracts:
      - target: my_project.contracts:retry_contract
      - target: my_project.contracts:make_cache_contract
        name: cache

Loading parses the YAML, applies shape checks that give clearer messages than
the schema, and validates against the packaged JSON schema.
"""

from __future__ import annotations

import asyncio
import importlib
import json
from dataclasses import dataclass, field, replace
from importlib import resources
from time import perf_counter
from typing import Any, Dict, List, Optional

import jsonschema
import yaml

from callorder.config import HarnessConfig
from callorder.contract import Contract
from callorder.errors import SuiteError
from callorder.logging import get_logger
from callorder.results import Result

logger = get_logger(__name__)

_RECOGNIZED_KEYS = {"config", "contracts"}


def _load_schema() -> Dict[str, Any]:
    with (
        resources.files("callorder.schemas")
        .joinpath("suite.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def load_suite_yaml(yaml_str: str) -> Dict[str, Any]:
    """Load and validate a suite YAML string.

    Returns:
        The validated suite mapping.

    Raises:
        SuiteError: If the document is not a mapping, has unknown top-level
            keys, or does not satisfy the schema.
    """
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise SuiteError(f"Invalid YAML: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SuiteError("The provided YAML must map to a dictionary at top-level.")

    extra = set(data.keys()) - _RECOGNIZED_KEYS
    if extra:
        raise SuiteError(
            f"Unrecognized top-level key(s) in suite: {', '.join(sorted(map(str, extra)))}. "
            f"Allowed keys are {sorted(_RECOGNIZED_KEYS)}"
        )
    if "contracts" not in data:
        raise SuiteError("Suite must define a 'contracts' list")
    if not isinstance(data["contracts"], list):
        raise SuiteError("'contracts' must be a list")
    for entry in data["contracts"]:
        if not isinstance(entry, dict) or "target" not in entry:
            raise SuiteError(
                "Each contract entry must be a mapping with a 'target' of the form 'module:attr'"
            )

    try:
        jsonschema.validate(data, _load_schema())
    except jsonschema.ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise SuiteError(f"Suite validation failed at {location}: {exc.message}") from exc

    return data


def resolve_target(target: str) -> Contract:
    """Import and return the contract named by ``module:attr``.

    ``attr`` may be dotted. The resolved object must be a `Contract` or a
    zero-argument callable returning one.

    Raises:
        SuiteError: If the target cannot be imported or is not a contract.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise SuiteError(f"Contract target '{target}' must have the form 'module:attr'")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise SuiteError(f"Cannot import module '{module_name}': {exc}") from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise SuiteError(
                f"Module '{module_name}' has no attribute '{attr_path}'"
            ) from exc

    if not isinstance(obj, Contract) and callable(obj):
        obj = obj()
    if not isinstance(obj, Contract):
        raise SuiteError(
            f"Target '{target}' resolved to {type(obj).__name__}, expected Contract"
        )
    return obj


@dataclass
class ContractOutcome:
    """Verdict for one contract of a suite."""

    name: str
    target: str
    result: Result
    elapsed: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "target": self.target,
            "elapsed": round(self.elapsed, 6),
            "result": self.result.to_dict(),
        }


@dataclass
class SuiteResult:
    """Verdicts for every contract of a suite, in suite order."""

    outcomes: List[ContractOutcome] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(o.result.passed for o in self.outcomes)

    @property
    def failed(self) -> List[ContractOutcome]:
        return [o for o in self.outcomes if not o.result.passed]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "contracts": [o.to_dict() for o in self.outcomes],
        }


@dataclass
class Suite:
    """Contracts resolved from a suite file plus the harness configuration."""

    contracts: List[Contract]
    targets: List[str]
    config: HarnessConfig = field(default_factory=HarnessConfig)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "Suite":
        data = load_suite_yaml(yaml_str)
        config = HarnessConfig.from_dict(data.get("config"))

        contracts: List[Contract] = []
        targets: List[str] = []
        for entry in data["contracts"]:
            contract = resolve_target(entry["target"])
            if entry.get("name"):
                contract = replace(contract, name=entry["name"])
            contracts.append(contract)
            targets.append(entry["target"])
        logger.debug("Loaded suite with %d contract(s)", len(contracts))
        return cls(contracts=contracts, targets=targets, config=config)

    async def verify(self, config: Optional[HarnessConfig] = None) -> SuiteResult:
        """Verify every contract, one after another."""
        cfg = config or self.config
        result = SuiteResult()
        for contract, target in zip(self.contracts, self.targets):
            logger.info("Verifying contract '%s' (%s)", contract.name, target)
            start = perf_counter()
            verdict = await contract.verify(cfg)
            result.outcomes.append(
                ContractOutcome(
                    name=contract.name,
                    target=target,
                    result=verdict,
                    elapsed=perf_counter() - start,
                )
            )
        return result

    def run(self, config: Optional[HarnessConfig] = None) -> SuiteResult:
        return asyncio.run(self.verify(config))
