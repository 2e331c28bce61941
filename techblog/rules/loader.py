import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from techblog.rules.models import Rules

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path("rules.yaml")


def _yaml_body(content: str) -> str:
    """
    Return the YAML inside the first ```yaml fence, or the whole text
    when the file has no fence.
    """
    body: list[str] = []
    in_block = False

    for line in content.splitlines():
        stripped = line.strip()
        if not in_block and stripped.startswith("```yaml"):
            in_block = True
            continue
        if in_block and stripped.startswith("```"):
            return "\n".join(body)
        if in_block:
            body.append(line)

    # Unterminated fence still yields what it holds
    return "\n".join(body) if in_block else content


def parse_rules(content: str) -> Rules:
    """
    Parse and validate rules text.
    Raises ValueError on bad YAML or a schema mismatch.
    """
    try:
        data = yaml.safe_load(_yaml_body(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Rules file must contain a mapping at the top level")

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e


def load_rules(path: Path | str = DEFAULT_RULES_PATH) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or schema is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    rules = parse_rules(path.read_text())
    logger.debug("Rules loaded from %s", path)
    return rules
