"""Loads step definitions from a YAML test plan."""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from jinja2 import Environment, StrictUndefined, TemplateError
from pydantic import ValidationError

from lorikeet_dash.domain.entities.step import RunType, Step
from lorikeet_dash.domain.errors import StepLoadError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def get_steps(test_plan: PathLike, config: Optional[PathLike] = None) -> List[Step]:
    """
    Read the test plan, templating it with the variables from ``config`` if given.

    Raises:
        StepLoadError: if either file cannot be read or the plan is invalid
    """
    text = _read(test_plan, "test plan")

    if config is not None:
        variables = _load_config(config)
        try:
            text = Environment(undefined=StrictUndefined).from_string(text).render(**variables)
        except TemplateError as e:
            raise StepLoadError(f"Could not template test plan {test_plan}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise StepLoadError(f"Could not parse test plan {test_plan}: {e}") from e

    if data is None:
        return []
    if not isinstance(data, dict):
        raise StepLoadError("Test plan must be a mapping of step names to steps")

    steps = [parse_step(name, body) for name, body in data.items()]
    logger.info(f"✅ Loaded {len(steps)} steps from {test_plan}")
    return steps


def parse_step(name: Any, body: Any) -> Step:
    """Build a step from its test plan entry; exactly one run type key is required."""
    if not isinstance(body, dict):
        raise StepLoadError(f"Step '{name}' must be a mapping")

    run_types = [run for run in RunType if run.value in body]
    if len(run_types) != 1:
        allowed = ", ".join(run.value for run in RunType)
        raise StepLoadError(f"Step '{name}' must define exactly one of: {allowed}")

    run = run_types[0]
    raw = body[run.value]
    fields: Dict[str, Any] = {
        "name": str(name),
        "description": body.get("description"),
        "run": run,
    }
    if run == RunType.HTTP:
        fields["http"] = raw if isinstance(raw, dict) else {"url": raw}
    elif run == RunType.SYSTEM:
        fields["system"] = raw
    elif run == RunType.BASH:
        fields["bash"] = str(raw)
    else:
        fields["value"] = str(raw)

    try:
        return Step(**fields)
    except ValidationError as e:
        raise StepLoadError(f"Invalid step '{name}': {e}") from e


def _read(path: PathLike, what: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise StepLoadError(f"Could not read {what} {path}: {e}") from e


def _load_config(config: PathLike) -> Dict[str, Any]:
    try:
        variables = yaml.safe_load(_read(config, "config")) or {}
    except yaml.YAMLError as e:
        raise StepLoadError(f"Could not parse config {config}: {e}") from e
    if not isinstance(variables, dict):
        raise StepLoadError(f"Config {config} must be a mapping of variables")
    return variables
