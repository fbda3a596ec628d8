"""Utility functions for file I/O and raw value coercion."""

import json
import logging
import math
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('clubftp.utils')


def to_number(value: Any) -> int | float:
    """
    Coerce a raw stat value from storage into a number.

    Missing, null, NaN and unparsable values become 0. Graph-database
    64-bit integers arrive either as objects exposing ``toNumber``/``to_number``
    or as ``{'low': ..., 'high': ...}`` pairs and are reassembled.

    Args:
        value: Raw value from a query row

    Returns:
        int when the value is integral, float otherwise

    Example:
        to_number(None)                  # 0
        to_number('3')                   # 3
        to_number({'low': 5, 'high': 0}) # 5
    """
    if value is None:
        return 0

    if isinstance(value, bool):
        return int(value)

    if isinstance(value, dict):
        if 'low' in value and 'high' in value:
            low = value.get('low') or 0
            high = value.get('high') or 0
            return int(low) + int(high) * 4294967296
        return 0

    for attr in ('toNumber', 'to_number'):
        converter = getattr(value, attr, None)
        if callable(converter):
            return to_number(converter())

    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return 0

    if isinstance(number, float):
        if math.isnan(number) or math.isinf(number):
            return 0
        if number.is_integer():
            return int(number)
    return number


def load_json(
    path: Path | str,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Load JSON file with optional schema validation.

    Args:
        path: Path to JSON file (str or Path object)
        schema: Optional Pydantic model to validate against

    Returns:
        Parsed JSON (validated if schema provided)

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        ValueError: If schema validation fails

    Example:
        from clubftp.schemas import EngineConfig
        config = load_json('data/scoring_config.json', schema=EngineConfig)
    """
    path = Path(path)

    logger.debug(f'Loading JSON from: {path}')

    if not path.exists():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
        logger.debug(f'Successfully loaded JSON from: {path}')
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
        raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e

    if schema:
        try:
            validated = schema(**data) if isinstance(data, dict) else schema(data)  # type: ignore[call-arg]
            logger.debug(f'Schema validation passed for: {path}')
            return validated
        except ValidationError as e:
            logger.error(f'Schema validation failed for {path}: {e}')
            raise ValueError(f'Schema validation failed for {path}:\n{e}') from e

    return data


def save_json(
    path: Path | str,
    data: Any,
    indent: int = 2,
    create_dirs: bool = True,
) -> None:
    """
    Save data as JSON file.

    Args:
        path: Path to write to (str or Path object)
        data: Data to serialize (JSON-serializable, Pydantic model, or an
            object with a ``to_dict()`` method such as TOTWResult)
        indent: Indentation level (default: 2 spaces)
        create_dirs: Create parent directories if they don't exist (default: True)

    Raises:
        TypeError: If data is not JSON-serializable
        OSError: If file cannot be written
    """
    path = Path(path)

    logger.debug(f'Saving JSON to: {path}')

    if create_dirs:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f'Failed to create directory {path.parent}: {e}')
            raise

    if isinstance(data, BaseModel):
        json_data = data.model_dump()
    elif hasattr(data, 'to_dict'):
        json_data = data.to_dict()
    else:
        json_data = data

    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(json_data, f, indent=indent, ensure_ascii=False)
        logger.debug(f'Successfully saved JSON to: {path}')
    except TypeError as e:
        logger.error(f'Data is not JSON-serializable: {e}')
        raise TypeError(f'Data is not JSON-serializable: {e}') from e
    except OSError as e:
        logger.error(f'Failed to write file {path}: {e}')
        raise
