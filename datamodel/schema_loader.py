"""
Schema loader for the data model.
Handles loading and structural validation of YAML/JSON schema files.
"""

import json
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging

from .exceptions import SchemaLoadError
from .schema_nodes import ObjectSchema, resolve_schema

logger = logging.getLogger(__name__)

SCHEMAS_DIR = Path("schemas")

# Supported node types
SUPPORTED_TYPES = {'object', 'array', 'string', 'number', 'integer', 'float', 'boolean'}


def _schemas_dir(schemas_dir: Optional[Union[str, Path]]) -> Path:
    return Path(schemas_dir) if schemas_dir is not None else SCHEMAS_DIR


def _read_schema_file(full_path: Path) -> Any:
    with open(full_path, 'r', encoding='utf-8') as f:
        if full_path.suffix.lower() in ['.yaml', '.yml']:
            return yaml.safe_load(f)
        return json.load(f)


def load_schema(schema_path: Union[str, Path], schemas_dir: Optional[Union[str, Path]] = None,
                strict: bool = False) -> Optional[Dict[str, Any]]:
    """
    Load a raw schema from a YAML or JSON file.
    
    Args:
        schema_path: Path to schema file (relative to the schemas directory)
        schemas_dir: Directory holding schema files (defaults to ./schemas)
        strict: Raise SchemaLoadError instead of returning None
        
    Returns:
        Schema dictionary or None if loading fails
        
    Raises:
        SchemaLoadError: If strict and the schema cannot be loaded
    """
    full_path = _schemas_dir(schemas_dir) / schema_path
    
    def fail(reason: str) -> None:
        if strict:
            raise SchemaLoadError(full_path, reason)
        logger.error(f"Cannot load schema {full_path}: {reason}")
    
    if not full_path.exists():
        fail("file not found")
        return None
    
    if full_path.suffix.lower() not in ['.yaml', '.yml', '.json']:
        fail(f"unsupported schema file format '{full_path.suffix}'")
        return None
    
    try:
        schema = _read_schema_file(full_path)
    except yaml.YAMLError as e:
        fail(f"YAML parsing error: {e}")
        return None
    except json.JSONDecodeError as e:
        fail(f"JSON parsing error: {e}")
        return None
    except (OSError, UnicodeDecodeError) as e:
        fail(f"read error: {e}")
        return None
    
    if not validate_schema(schema):
        fail("invalid schema structure")
        return None
    
    logger.info(f"Successfully loaded schema: {schema_path}")
    return schema


def validate_schema(schema: Any, path: str = '') -> bool:
    """
    Validate the structure of a raw schema, recursively.
    
    Args:
        schema: Raw schema dictionary
        path: Location of the node, for log messages
        
    Returns:
        True if the schema is structurally valid, False otherwise
    """
    location = path or '<root>'
    
    if not isinstance(schema, dict):
        logger.error(f"Schema node at '{location}' must be a dictionary")
        return False
    
    node_type = schema.get('type')
    if node_type is not None and node_type not in SUPPORTED_TYPES:
        logger.error(f"Schema node at '{location}' has unsupported type '{node_type}'. "
                    f"Supported types: {sorted(SUPPORTED_TYPES)}")
        return False
    
    for key in ('properties', 'fields'):
        if key not in schema:
            continue
        children = schema[key]
        if not isinstance(children, dict):
            logger.error(f"Schema node at '{location}' {key} must be a dictionary")
            return False
        for name, child in children.items():
            if not validate_schema(child, f"{path}.{name}" if path else str(name)):
                return False
    
    if 'items' in schema:
        if not validate_schema(schema['items'], f"{location}[]"):
            return False
    
    return True


def load_schema_node(schema_path: Union[str, Path], schemas_dir: Optional[Union[str, Path]] = None,
                     strict: bool = False):
    """
    Load a schema file and resolve it into schema nodes.
    
    Args:
        schema_path: Path to schema file (relative to the schemas directory)
        schemas_dir: Directory holding schema files
        strict: Raise SchemaLoadError instead of returning an empty node
        
    Returns:
        Resolved schema node; an empty object node if loading fails
    """
    raw = load_schema(schema_path, schemas_dir, strict=strict)
    if raw is None:
        return ObjectSchema()
    return resolve_schema(raw)


def list_available_schemas(schemas_dir: Optional[Union[str, Path]] = None) -> List[str]:
    """
    List all schema files in the schemas directory.
    
    Args:
        schemas_dir: Directory holding schema files
        
    Returns:
        Sorted list of schema filenames
    """
    directory = _schemas_dir(schemas_dir)
    if not directory.is_dir():
        return []
    
    schema_files = []
    for pattern in ['*.yaml', '*.yml', '*.json']:
        schema_files.extend([f.name for f in directory.glob(pattern)])
    
    return sorted(schema_files)


def get_configured_schema(config: Dict[str, Any]):
    """
    Get the schema specified in the configuration.
    
    Args:
        config: Configuration dictionary
        
    Returns:
        Resolved schema node (never None - an empty object if nothing loads)
    """
    schema_config = config.get('schema', {})
    schemas_dir = schema_config.get('directory', str(SCHEMAS_DIR))
    primary_schema = schema_config.get('primary_schema', 'default_schema.yaml')
    fallback_schema = schema_config.get('fallback_schema', 'default_schema.yaml')
    
    schema = load_schema(primary_schema, schemas_dir)
    if schema:
        logger.info(f"Using primary schema: {primary_schema}")
        return resolve_schema(schema)
    
    logger.warning(f"Primary schema {primary_schema} not found, trying fallback: {fallback_schema}")
    schema = load_schema(fallback_schema, schemas_dir)
    if schema:
        logger.info(f"Using fallback schema: {fallback_schema}")
        return resolve_schema(schema)
    
    logger.error("No valid schemas found, using an empty schema")
    return ObjectSchema()
